"""Boundary Protocols — contracts between core rules and the persistence/notification shell.

Invariants:
    - Core NEVER imports from infrastructure, services or api
    - Services depend on these Protocols, implementations injected by the shell
    - Entity protocols describe only the attributes rules and mappers read

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy them unchanged
    - Async repository methods: implementations do IO; the pure rule functions that
      consume the entities are never async
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from introhub.core.domain_types import ContactId, RequestId, RequestStatus, UserId


class UserLike(Protocol):
    id: UUID
    email: str
    password_hash: str
    first_name: str
    last_name: str
    company: str
    position: str
    bio: str
    profile_picture: str
    created_at: datetime
    updated_at: datetime


class ContactLike(Protocol):
    id: UUID
    user_id: UUID
    email: str
    first_name: str
    last_name: str
    company: str
    position: str
    notes: str
    phone: str
    linkedin_url: str
    created_at: datetime
    updated_at: datetime


class IntroductionRequestLike(Protocol):
    id: UUID
    requester_id: UUID
    approver_id: UUID
    target_contact_id: UUID
    message: str
    status: str
    response_message: str
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def create(self, fields: dict) -> UserLike: ...
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def update(self, user: UserLike, changes: dict) -> UserLike: ...


class ContactRepository(Protocol):
    """Contract for contact persistence — every read is owner-scoped except get_by_id."""
    async def create(self, owner_id: UserId, fields: dict) -> ContactLike: ...
    async def get_by_id(self, contact_id: ContactId) -> ContactLike | None: ...
    async def get_owned(
        self, contact_id: ContactId, owner_id: UserId,
    ) -> ContactLike | None: ...
    async def list_owned(self, owner_id: UserId) -> list[ContactLike]: ...
    async def search_owned(
        self, owner_id: UserId, query: str,
    ) -> list[ContactLike]: ...
    async def search_others(
        self, owner_id: UserId, query: str,
    ) -> list[ContactLike]: ...
    async def is_email_used(self, owner_id: UserId, email: str) -> bool: ...
    async def update(self, contact: ContactLike, changes: dict) -> ContactLike: ...
    async def delete_owned(self, contact_id: ContactId, owner_id: UserId) -> bool: ...


class IntroductionRequestRepository(Protocol):
    """Contract for introduction request persistence."""
    async def create(
        self, requester_id: UserId, approver_id: UserId,
        target_contact_id: ContactId, message: str,
    ) -> IntroductionRequestLike: ...
    async def get_by_id(
        self, request_id: RequestId,
    ) -> IntroductionRequestLike | None: ...
    async def exists(
        self, requester_id: UserId, target_contact_id: ContactId,
    ) -> bool: ...
    async def list_by_requester(
        self, requester_id: UserId,
    ) -> list[IntroductionRequestLike]: ...
    async def list_by_approver(
        self, approver_id: UserId,
    ) -> list[IntroductionRequestLike]: ...
    async def update_status(
        self, request: IntroductionRequestLike, status: RequestStatus,
        response_message: str,
    ) -> IntroductionRequestLike: ...
    async def delete(self, request: IntroductionRequestLike) -> None: ...


class Notifier(Protocol):
    """Contract for introduction notifications — fire-and-forget from the caller's view."""
    async def notify_new_request(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> None: ...
    async def notify_request_approved(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> None: ...
    async def notify_request_declined(
        self, request: IntroductionRequestLike, requester: UserLike,
        approver: UserLike, contact: ContactLike,
    ) -> None: ...
