"""Contact Schemas — create/update/batch payloads and contact responses.

Invariants:
    - ContactCreate: email, first_name, last_name, company, position required and non-blank
    - ContactUpdate: every field optional; email, when given, must be valid
    - Emails lower-cased at the boundary so per-owner uniqueness is case-insensitive
    - ContactResponse always embeds the owning user

Design Decisions:
    - ContactBatchImport validates every item up front: a malformed item rejects
      the whole request (400), while rule failures are reported per item
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from introhub.core.repository_protocols import ContactLike, UserLike
from introhub.schemas.auth import normalize_email
from introhub.schemas.user import UserResponse


class ContactCreate(BaseModel):
    """New contact."""
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    company: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    notes: str = Field("", max_length=5000)
    phone: str = Field("", max_length=50)
    linkedin_url: str = Field("", max_length=500)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("first_name", "last_name", "company", "position")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class ContactUpdate(BaseModel):
    """Partial contact update."""
    email: EmailStr | None = None
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)
    company: str = Field("", max_length=255)
    position: str = Field("", max_length=255)
    notes: str = Field("", max_length=5000)
    phone: str = Field("", max_length=50)
    linkedin_url: str = Field("", max_length=500)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v else v


class ContactBatchImport(BaseModel):
    contacts: list[ContactCreate] = Field(min_length=1)


class ContactResponse(BaseModel):
    """Contact with its owner."""
    id: UUID
    user_id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    company: str
    position: str
    notes: str
    phone: str
    linkedin_url: str
    user: UserResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, contact: ContactLike, owner: UserLike) -> "ContactResponse":
        return cls(
            id=contact.id,
            user_id=contact.user_id,
            email=contact.email,
            first_name=contact.first_name,
            last_name=contact.last_name,
            full_name=f"{contact.first_name} {contact.last_name}",
            company=contact.company,
            position=contact.position,
            notes=contact.notes,
            phone=contact.phone,
            linkedin_url=contact.linkedin_url,
            user=UserResponse.model_validate(owner),
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )


class BatchImportErrorResponse(BaseModel):
    data: ContactCreate
    errors: list[str]


class BatchImportResponse(BaseModel):
    success_count: int
    error_count: int
    errors: list[BatchImportErrorResponse] = []
