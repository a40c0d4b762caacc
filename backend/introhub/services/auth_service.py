"""Auth Service — registration, login and token issuance.

Invariants:
    - Emails compared case-insensitively (normalised before lookup and storage)
    - Unknown email and wrong password produce the SAME UnauthorizedError message
    - Registration and login issue tokens of identical shape (user_id, iat, exp)
"""

import logging

from introhub.core.domain_types import INVALID_CREDENTIALS_MESSAGE, UserId
from introhub.core.errors import ConflictError, UnauthorizedError
from introhub.core.passwords import hash_password, verify_password
from introhub.core.repository_protocols import UserLike, UserRepository
from introhub.core.tokens import create_access_token
from introhub.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuance."""

    def __init__(self, users: UserRepository, jwt_secret: str, jwt_expiry_hours: int):
        self.users = users
        self.jwt_secret = jwt_secret
        self.jwt_expiry_hours = jwt_expiry_hours

    async def register(self, body: RegisterRequest) -> tuple[str, UserLike]:
        email = body.email.strip().lower()
        if await self.users.get_by_email(email):
            raise ConflictError("email already registered")
        user = await self.users.create({
            "email": email,
            "password_hash": hash_password(body.password),
            "first_name": body.first_name,
            "last_name": body.last_name,
            "company": body.company,
            "position": body.position,
        })
        logger.info("User registered", extra={"user_id": user.id})
        return self._issue(user), user

    async def login(self, body: LoginRequest) -> tuple[str, UserLike]:
        user = await self.users.get_by_email(body.email)
        if not user or not verify_password(body.password, user.password_hash):
            logger.info("Login rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)
        return self._issue(user), user

    def _issue(self, user: UserLike) -> str:
        return create_access_token(
            UserId(user.id), self.jwt_secret, self.jwt_expiry_hours,
        )
