"""Introduction Request Routes — create, list, read, decide and withdraw.

Invariants:
    - Every route is authenticated
    - GET /requests?type=sent lists the caller's sent requests; any other value
      (or none) lists received ones
    - Responses embed requester, approver and target contact
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from introhub.api.dependencies import get_current_user_id, get_request_service
from introhub.core.domain_types import RequestId, RequestListType, UserId
from introhub.schemas.request import RequestCreate, RequestResponse, RequestUpdate
from introhub.services.request_service import RequestService

router = APIRouter(prefix="/api/v1/requests", tags=["requests"])


@router.get("", response_model=list[RequestResponse])
async def list_requests(
    list_type: str | None = Query(None, alias="type"),
    user_id: UserId = Depends(get_current_user_id),
    requests: RequestService = Depends(get_request_service),
):
    views = await requests.list_by_type(user_id, RequestListType.parse(list_type))
    return [RequestResponse.build(*view) for view in views]


@router.post(
    "", response_model=RequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    body: RequestCreate,
    user_id: UserId = Depends(get_current_user_id),
    requests: RequestService = Depends(get_request_service),
):
    return RequestResponse.build(*await requests.create(user_id, body))


@router.get("/{request_id}", response_model=RequestResponse)
async def get_request(
    request_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    requests: RequestService = Depends(get_request_service),
):
    return RequestResponse.build(*await requests.get(RequestId(request_id), user_id))


@router.put("/{request_id}", response_model=RequestResponse)
async def update_request(
    request_id: UUID,
    body: RequestUpdate,
    user_id: UserId = Depends(get_current_user_id),
    requests: RequestService = Depends(get_request_service),
):
    """Approver sets the status (and optional response message)."""
    view = await requests.update(RequestId(request_id), user_id, body)
    return RequestResponse.build(*view)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    requests: RequestService = Depends(get_request_service),
):
    """Requester withdraws a pending request."""
    await requests.delete(RequestId(request_id), user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
