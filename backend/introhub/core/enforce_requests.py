"""Introduction Request Enforcement — who may create, view, decide and withdraw a request.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an IntroHubError on violation, None on success; the caller raises
    - pending is the only state a requester may withdraw from
    - Visibility failures are reported as not-found, never as forbidden

Design Decisions:
    - check_can_decide does NOT require status == pending: an approver may
      re-decide an already resolved request (open question, preserved as-is)
    - Duplicate detection ignores status: a declined request still blocks a new one
"""

from uuid import UUID

from introhub.core.domain_types import (
    DUPLICATE_REQUEST_MESSAGE,
    NotificationKind,
    RequestStatus,
)
from introhub.core.errors import (
    ConflictError,
    ForbiddenError,
    IntroHubError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from introhub.core.repository_protocols import (
    ContactLike,
    IntroductionRequestLike,
)

REQUEST_RESOURCE = "request"


# --- Creation -----------------------------------------------------------------

def check_contact_belongs_to_approver(
    contact: ContactLike, approver_id: UUID,
) -> IntroHubError | None:
    """The target contact must be owned by the named approver."""
    if contact.user_id != approver_id:
        return InvalidArgumentError(
            "target contact does not belong to specified approver",
        )
    return None


def check_not_duplicate(already_exists: bool) -> IntroHubError | None:
    """One request per (requester, target contact), whatever its status."""
    if already_exists:
        return ConflictError(DUPLICATE_REQUEST_MESSAGE)
    return None


# --- Access -------------------------------------------------------------------

def is_participant(request: IntroductionRequestLike, user_id: UUID) -> bool:
    return user_id in (request.requester_id, request.approver_id)


def check_can_view(
    request: IntroductionRequestLike, caller_id: UUID,
) -> IntroHubError | None:
    """Only requester and approver see a request; others get not-found."""
    if not is_participant(request, caller_id):
        return ResourceNotFoundError(REQUEST_RESOURCE)
    return None


def check_can_decide(
    request: IntroductionRequestLike, caller_id: UUID,
) -> IntroHubError | None:
    """Only the approver sets status."""
    if request.approver_id != caller_id:
        return ForbiddenError("only the approver can update this request")
    return None


def check_can_withdraw(
    request: IntroductionRequestLike, caller_id: UUID,
) -> IntroHubError | None:
    """Only the requester deletes, and only while pending."""
    if request.requester_id != caller_id:
        return ForbiddenError("only the requester can delete this request")
    if request.status != RequestStatus.PENDING.value:
        return ForbiddenError("only pending requests can be deleted")
    return None


# --- Side effects -------------------------------------------------------------

def notification_for_status(status: RequestStatus) -> NotificationKind | None:
    """Which email a decision triggers; setting pending again sends nothing."""
    if status == RequestStatus.APPROVED:
        return NotificationKind.REQUEST_APPROVED
    if status == RequestStatus.DECLINED:
        return NotificationKind.REQUEST_DECLINED
    return None
