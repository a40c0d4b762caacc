"""User Directory Routes — search other users' contacts to find an approver."""

from fastapi import APIRouter, Depends, Query

from introhub.api.dependencies import get_contact_service, get_current_user_id
from introhub.core.domain_types import UserId
from introhub.schemas.contact import ContactResponse
from introhub.services.contact_service import ContactService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/all", response_model=list[ContactResponse])
async def search_all_contacts(
    query: str | None = Query(None, max_length=255),
    user_id: UserId = Depends(get_current_user_id),
    contacts: ContactService = Depends(get_contact_service),
):
    """Contacts of other users with a company set; each embeds its owner."""
    found = await contacts.search_all(user_id, query)
    return [ContactResponse.build(contact, owner) for contact, owner in found]
