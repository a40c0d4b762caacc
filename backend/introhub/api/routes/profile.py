"""Profile Routes — the caller's own user record."""

from fastapi import APIRouter, Depends

from introhub.api.dependencies import get_current_user_id, get_user_service
from introhub.core.domain_types import UserId
from introhub.schemas.user import ProfileUpdate, UserResponse
from introhub.services.user_service import UserService

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
async def get_profile(
    user_id: UserId = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    return UserResponse.model_validate(await users.get_profile(user_id))


@router.put("", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdate,
    user_id: UserId = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    return UserResponse.model_validate(await users.update_profile(user_id, body))
