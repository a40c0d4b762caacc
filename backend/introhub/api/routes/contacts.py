"""Contact Routes — owner-scoped contact CRUD, search and batch import.

Invariants:
    - Every route is authenticated; the caller is always the owner
    - Responses embed the owner (the caller) as `user`
    - POST /bulk_upload is an alias of POST /batch-import

Design Decisions:
    - Static paths (/batch-import, /bulk_upload) declared before /{contact_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from introhub.api.dependencies import get_contact_service, get_current_user
from introhub.core.domain_types import ContactId, UserId
from introhub.core.repository_protocols import UserLike
from introhub.schemas.contact import (
    BatchImportResponse,
    ContactBatchImport,
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)
from introhub.services.contact_service import ContactService

router = APIRouter(prefix="/api/v1/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactResponse])
async def list_contacts(
    query: str | None = Query(None, max_length=255),
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    """List own contacts, or search them when query is given."""
    found = await contacts.list_contacts(UserId(user.id), query)
    return [ContactResponse.build(c, user) for c in found]


@router.post(
    "", response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    body: ContactCreate,
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    contact = await contacts.create(UserId(user.id), body)
    return ContactResponse.build(contact, user)


@router.post("/batch-import", response_model=BatchImportResponse)
async def batch_import_contacts(
    body: ContactBatchImport,
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    """Create many contacts; per-item failures are reported, not raised."""
    result = await contacts.batch_import(UserId(user.id), body.contacts)
    return BatchImportResponse(
        success_count=result.success_count,
        error_count=result.error_count,
        errors=[{"data": e.data, "errors": e.errors} for e in result.errors],
    )


router.add_api_route(
    "/bulk_upload", batch_import_contacts, methods=["POST"],
    response_model=BatchImportResponse, include_in_schema=False,
)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: UUID,
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    contact = await contacts.get(UserId(user.id), ContactId(contact_id))
    return ContactResponse.build(contact, user)


@router.patch("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: UUID,
    body: ContactUpdate,
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    contact = await contacts.update(UserId(user.id), ContactId(contact_id), body)
    return ContactResponse.build(contact, user)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: UUID,
    user: UserLike = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service),
):
    await contacts.delete(UserId(user.id), ContactId(contact_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
