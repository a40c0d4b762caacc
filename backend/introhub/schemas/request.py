"""Introduction Request Schemas — create/update payloads and the joined response.

Invariants:
    - RequestCreate: approver_id and target_contact_id are UUIDs, message non-blank
    - RequestUpdate.status is one of pending/approved/declined (enum-validated)
    - RequestResponse embeds requester, approver and target contact snapshots

Design Decisions:
    - RequestStatus enum from core/domain_types used directly as the field type
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from introhub.core.domain_types import RequestStatus
from introhub.core.repository_protocols import (
    ContactLike,
    IntroductionRequestLike,
    UserLike,
)
from introhub.schemas.contact import ContactResponse
from introhub.schemas.user import UserResponse


class RequestCreate(BaseModel):
    """Ask approver_id for an introduction to target_contact_id."""
    approver_id: UUID
    target_contact_id: UUID
    message: str = Field(min_length=1, max_length=5000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("message cannot be empty or whitespace")
        return v


class RequestUpdate(BaseModel):
    """Approver decision."""
    status: RequestStatus
    response_message: str = Field("", max_length=5000)


class RequestResponse(BaseModel):
    id: UUID
    requester: UserResponse
    approver: UserResponse
    target_contact: ContactResponse
    message: str
    status: RequestStatus
    response_message: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(
        cls, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> "RequestResponse":
        """Join a request with its resolved participants; the approver owns the contact."""
        return cls(
            id=request.id,
            requester=UserResponse.model_validate(requester),
            approver=UserResponse.model_validate(approver),
            target_contact=ContactResponse.build(contact, approver),
            message=request.message,
            status=RequestStatus(request.status),
            response_message=request.response_message,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )
