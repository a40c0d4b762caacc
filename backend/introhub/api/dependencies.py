"""API Dependencies — bearer authentication and per-request service wiring.

Invariants:
    - Every protected route resolves the caller through get_current_user_id
    - Missing header, non-Bearer scheme and invalid token all raise UnauthorizedError (401)
    - Services built per request on the request's AsyncSession (FastAPI caches
      get_db within a request, so all services share one session)
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from introhub.config import Settings, get_settings
from introhub.core.domain_types import UserId
from introhub.core.errors import UnauthorizedError
from introhub.core.repository_protocols import Notifier, UserLike
from introhub.core.tokens import decode_access_token
from introhub.infrastructure.database import get_db
from introhub.infrastructure.notifications import get_notifier
from introhub.infrastructure.repositories import (
    SqlContactRepository,
    SqlIntroductionRequestRepository,
    SqlUserRepository,
)
from introhub.services.auth_service import AuthService
from introhub.services.contact_service import ContactService
from introhub.services.request_service import RequestService
from introhub.services.user_service import UserService

BEARER_PREFIX = "Bearer "


async def get_current_user_id(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> UserId:
    if not authorization:
        raise UnauthorizedError("Authorization header is required")
    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("Authorization header must start with Bearer")
    token = authorization[len(BEARER_PREFIX):].strip()
    return decode_access_token(token, settings.jwt_secret)


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        SqlUserRepository(db), settings.jwt_secret, settings.jwt_expiry_hours,
    )


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlUserRepository(db))


def get_contact_service(db: AsyncSession = Depends(get_db)) -> ContactService:
    return ContactService(SqlContactRepository(db), SqlUserRepository(db))


def get_request_service(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> RequestService:
    return RequestService(
        SqlIntroductionRequestRepository(db),
        SqlContactRepository(db),
        SqlUserRepository(db),
        notifier,
    )


async def get_current_user(
    user_id: UserId = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
) -> UserLike:
    """The authenticated caller's user row (owner embedded in contact responses)."""
    return await users.get_profile(user_id)
