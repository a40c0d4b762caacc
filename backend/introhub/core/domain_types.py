"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ContactId, RequestId wrap UUIDs — never use bare UUID in rule signatures
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ContactId = NewType("ContactId", UUID)
RequestId = NewType("RequestId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Introduction request states — maps to DB `status` column.

    pending is the only non-terminal state.
    """
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class RequestListType(str, Enum):
    """Which side of a request the caller is listing."""
    SENT = "sent"
    RECEIVED = "received"

    @classmethod
    def parse(cls, raw: str | None) -> "RequestListType":
        """Only an explicit "sent" selects sent; anything else is received."""
        return cls.SENT if raw == cls.SENT.value else cls.RECEIVED


class NotificationKind(str, Enum):
    """Email notifications emitted on request state changes."""
    NEW_REQUEST = "new_request"
    REQUEST_APPROVED = "request_approved"
    REQUEST_DECLINED = "request_declined"


# ─── Messages ────────────────────────────────────────────────────

INVALID_CREDENTIALS_MESSAGE = "invalid email or password"
DUPLICATE_CONTACT_EMAIL_MESSAGE = "email already exists for one of your contacts"
DUPLICATE_REQUEST_MESSAGE = "a request for this contact already exists"
