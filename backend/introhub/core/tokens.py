"""Session Tokens — stateless HS256 JWTs bound to a user id.

Invariants:
    - Claims: user_id (str UUID), iat, exp — all required on decode
    - decode_access_token raises UnauthorizedError for every failure mode
      (bad signature, malformed token, missing claim, expired)
    - No revocation list: a token is valid until exp

Design Decisions:
    - secret and lifetime passed explicitly: pure functions, no settings lookup
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from introhub.core.domain_types import UserId
from introhub.core.errors import UnauthorizedError

JWT_ALGORITHM = "HS256"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def create_access_token(
    user_id: UserId, secret: str, expiry_hours: int,
    now: datetime | None = None,
) -> str:
    """Issue a signed token for user_id expiring after expiry_hours."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "user_id": str(user_id),
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(hours=expiry_hours)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> UserId:
    """Verify token and return the user id it is bound to."""
    try:
        payload = jwt.decode(
            token, secret, algorithms=[JWT_ALGORITHM],
            options={"require": ["user_id", "iat", "exp"]},
        )
        return UserId(UUID(str(payload["user_id"])))
    except (jwt.InvalidTokenError, ValueError) as e:
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from e
