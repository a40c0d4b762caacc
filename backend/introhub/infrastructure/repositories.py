"""SQLAlchemy Repositories — the credential store behind the service layer.

Invariants:
    - One repository per aggregate, each bound to a single AsyncSession
    - Writes commit immediately (single-row point operations, no multi-statement transactions)
    - Unique-constraint violations surface as ConflictError, never as raw IntegrityError;
      the session is rolled back first so it stays usable (batch import relies on this)
    - Contact reads other than get_by_id are owner-scoped in the WHERE clause

Design Decisions:
    - ORM objects returned directly: they satisfy the *Like protocols in core
    - Substring search uses lower(column) LIKE lower(%query%): portable across
      PostgreSQL and SQLite
"""

import logging

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from introhub.core.domain_types import (
    DUPLICATE_CONTACT_EMAIL_MESSAGE,
    DUPLICATE_REQUEST_MESSAGE,
    ContactId,
    RequestId,
    RequestStatus,
    UserId,
)
from introhub.core.errors import ConflictError
from introhub.models.contact import Contact
from introhub.models.introduction_request import IntroductionRequest
from introhub.models.user import User

logger = logging.getLogger(__name__)


def _like_pattern(query: str) -> str:
    escaped = (
        query.lower()
        .replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


async def _commit_or_conflict(db: AsyncSession, message: str) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Unique constraint rejected write: {e.orig}")
        raise ConflictError(message) from e


def _apply_changes(entity, changes: dict) -> None:
    for name, value in changes.items():
        setattr(entity, name, value)
    entity.touch()


class SqlUserRepository:
    """User persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, fields: dict) -> User:
        user = User(**fields)
        self.db.add(user)
        await _commit_or_conflict(self.db, "email already registered")
        return user

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower()),
        )
        return result.scalar_one_or_none()

    async def update(self, user: User, changes: dict) -> User:
        _apply_changes(user, changes)
        await self.db.commit()
        return user


class SqlContactRepository:
    """Contact persistence, scoped by owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner_id: UserId, fields: dict) -> Contact:
        contact = Contact(user_id=owner_id, **fields)
        self.db.add(contact)
        await _commit_or_conflict(self.db, DUPLICATE_CONTACT_EMAIL_MESSAGE)
        return contact

    async def get_by_id(self, contact_id: ContactId) -> Contact | None:
        return await self.db.get(Contact, contact_id)

    async def get_owned(
        self, contact_id: ContactId, owner_id: UserId,
    ) -> Contact | None:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.id == contact_id)
            .where(Contact.user_id == owner_id),
        )
        return result.scalar_one_or_none()

    async def list_owned(self, owner_id: UserId) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.user_id == owner_id)
            .order_by(Contact.first_name, Contact.last_name),
        )
        return list(result.scalars().all())

    async def search_owned(self, owner_id: UserId, query: str) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.user_id == owner_id)
            .where(_matches_name_or_company(query))
            .order_by(Contact.first_name, Contact.last_name),
        )
        return list(result.scalars().all())

    async def search_others(self, owner_id: UserId, query: str) -> list[Contact]:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.user_id != owner_id)
            .where(func.trim(Contact.company) != "")
            .where(_matches_name_or_company(query))
            .order_by(Contact.first_name, Contact.last_name),
        )
        return list(result.scalars().all())

    async def is_email_used(self, owner_id: UserId, email: str) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(Contact)
            .where(Contact.user_id == owner_id)
            .where(func.lower(Contact.email) == email.strip().lower()),
        )
        return result.scalar_one() > 0

    async def update(self, contact: Contact, changes: dict) -> Contact:
        _apply_changes(contact, changes)
        await _commit_or_conflict(self.db, DUPLICATE_CONTACT_EMAIL_MESSAGE)
        return contact

    async def delete_owned(self, contact_id: ContactId, owner_id: UserId) -> bool:
        result = await self.db.execute(
            delete(Contact)
            .where(Contact.id == contact_id)
            .where(Contact.user_id == owner_id),
        )
        await self.db.commit()
        return result.rowcount > 0


def _matches_name_or_company(query: str):
    pattern = _like_pattern(query)
    return or_(
        func.lower(Contact.first_name).like(pattern, escape="\\"),
        func.lower(Contact.last_name).like(pattern, escape="\\"),
        func.lower(Contact.company).like(pattern, escape="\\"),
    )


class SqlIntroductionRequestRepository:
    """Introduction request persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, requester_id: UserId, approver_id: UserId,
        target_contact_id: ContactId, message: str,
    ) -> IntroductionRequest:
        request = IntroductionRequest(
            requester_id=requester_id,
            approver_id=approver_id,
            target_contact_id=target_contact_id,
            message=message,
            status=RequestStatus.PENDING.value,
            response_message="",
        )
        self.db.add(request)
        await _commit_or_conflict(self.db, DUPLICATE_REQUEST_MESSAGE)
        return request

    async def get_by_id(self, request_id: RequestId) -> IntroductionRequest | None:
        return await self.db.get(IntroductionRequest, request_id)

    async def exists(
        self, requester_id: UserId, target_contact_id: ContactId,
    ) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(IntroductionRequest)
            .where(IntroductionRequest.requester_id == requester_id)
            .where(IntroductionRequest.target_contact_id == target_contact_id),
        )
        return result.scalar_one() > 0

    async def list_by_requester(
        self, requester_id: UserId,
    ) -> list[IntroductionRequest]:
        result = await self.db.execute(
            select(IntroductionRequest)
            .where(IntroductionRequest.requester_id == requester_id)
            .order_by(IntroductionRequest.created_at.desc()),
        )
        return list(result.scalars().all())

    async def list_by_approver(
        self, approver_id: UserId,
    ) -> list[IntroductionRequest]:
        result = await self.db.execute(
            select(IntroductionRequest)
            .where(IntroductionRequest.approver_id == approver_id)
            .order_by(IntroductionRequest.created_at.desc()),
        )
        return list(result.scalars().all())

    async def update_status(
        self, request: IntroductionRequest, status: RequestStatus,
        response_message: str,
    ) -> IntroductionRequest:
        _apply_changes(
            request,
            {"status": status.value, "response_message": response_message},
        )
        await self.db.commit()
        return request

    async def delete(self, request: IntroductionRequest) -> None:
        await self.db.delete(request)
        await self.db.commit()
