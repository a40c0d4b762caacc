"""Contact Service — owner-scoped contact CRUD, batch import and search.

Invariants:
    - Every read/write except search_all is scoped to the owner; a contact owned by
      someone else is indistinguishable from a missing one (NotFound)
    - (owner, email) uniqueness checked before every insert and every email change,
      and backed by a DB constraint for concurrent writers
    - batch_import never raises for a single bad item: it records it and continues
    - search_all excludes the caller's own contacts and contacts with a blank company

Design Decisions:
    - Update semantics delegated to core.enforce_contacts.merge_partial_update
      (blank first/last name = keep; company/position/notes/phone/linkedin_url replaced)
"""

import logging

from introhub.core.domain_types import ContactId, UserId
from introhub.core.enforce_contacts import (
    CONTACT_REPLACED_FIELDS,
    BatchImportResult,
    check_email_available,
    email_change_requested,
    merge_partial_update,
)
from introhub.core.errors import IntroHubError, ResourceNotFoundError
from introhub.core.repository_protocols import (
    ContactLike,
    ContactRepository,
    UserLike,
    UserRepository,
)
from introhub.schemas.contact import ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)

CONTACT_RESOURCE = "contact"


class ContactService:
    """Contact rules over the contact store."""

    def __init__(self, contacts: ContactRepository, users: UserRepository):
        self.contacts = contacts
        self.users = users

    async def create(self, owner_id: UserId, body: ContactCreate) -> ContactLike:
        error = check_email_available(
            await self.contacts.is_email_used(owner_id, body.email),
        )
        if error:
            raise error
        contact = await self.contacts.create(owner_id, body.model_dump())
        logger.info(
            "Contact created",
            extra={"user_id": owner_id, "contact_id": contact.id},
        )
        return contact

    async def get(self, owner_id: UserId, contact_id: ContactId) -> ContactLike:
        contact = await self.contacts.get_owned(contact_id, owner_id)
        if not contact:
            raise ResourceNotFoundError(CONTACT_RESOURCE)
        return contact

    async def list_contacts(self, owner_id: UserId, query: str | None = None) -> list[ContactLike]:
        """All of the owner's contacts, or those matching query when given."""
        if query and query.strip():
            return await self.contacts.search_owned(owner_id, query)
        return await self.contacts.list_owned(owner_id)

    async def search_all(
        self, owner_id: UserId, query: str | None = None,
    ) -> list[tuple[ContactLike, UserLike]]:
        """Other users' contacts matching query, each paired with its owner."""
        contacts = await self.contacts.search_others(owner_id, query or "")
        owners: dict = {}
        results = []
        for contact in contacts:
            if contact.user_id not in owners:
                owners[contact.user_id] = await self.users.get_by_id(contact.user_id)
            owner = owners[contact.user_id]
            if owner is None:
                continue
            results.append((contact, owner))
        return results

    async def update(
        self, owner_id: UserId, contact_id: ContactId, body: ContactUpdate,
    ) -> ContactLike:
        contact = await self.get(owner_id, contact_id)
        changes = merge_partial_update(
            contact, body.model_dump(), CONTACT_REPLACED_FIELDS,
        )
        if email_change_requested(contact.email, body.email):
            error = check_email_available(
                await self.contacts.is_email_used(owner_id, body.email),
            )
            if error:
                raise error
            changes["email"] = body.email
        if not changes:
            return contact
        return await self.contacts.update(contact, changes)

    async def delete(self, owner_id: UserId, contact_id: ContactId) -> None:
        if not await self.contacts.delete_owned(contact_id, owner_id):
            raise ResourceNotFoundError(CONTACT_RESOURCE)
        logger.info(
            "Contact deleted",
            extra={"user_id": owner_id, "contact_id": contact_id},
        )

    async def batch_import(
        self, owner_id: UserId, items: list[ContactCreate],
    ) -> BatchImportResult:
        result = BatchImportResult()
        for item in items:
            try:
                await self.create(owner_id, item)
            except IntroHubError as e:
                result.record_failure(item.model_dump(), e.message)
                continue
            result.record_success()
        logger.info(
            f"Batch import finished: {result.success_count} created, "
            f"{result.error_count} rejected",
            extra={"user_id": owner_id},
        )
        return result
