"""User Service — the caller's own profile."""

from introhub.core.domain_types import UserId
from introhub.core.enforce_contacts import PROFILE_REPLACED_FIELDS, merge_partial_update
from introhub.core.errors import ResourceNotFoundError
from introhub.core.repository_protocols import UserLike, UserRepository
from introhub.schemas.user import ProfileUpdate


class UserService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def get_profile(self, user_id: UserId) -> UserLike:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundError("user")
        return user

    async def update_profile(self, user_id: UserId, body: ProfileUpdate) -> UserLike:
        """Blank names keep their value; the other profile fields are replaced."""
        user = await self.get_profile(user_id)
        changes = merge_partial_update(
            user, body.model_dump(), PROFILE_REPLACED_FIELDS,
        )
        if not changes:
            return user
        return await self.users.update(user, changes)
