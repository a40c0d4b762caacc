"""Introduction Request Enforcement — tests for pure request rule checks.

Tests cover:
    - creation: contact ownership and duplicate checks
    - visibility masked as not-found for non-participants
    - only the approver decides; re-deciding a resolved request is allowed
    - only the requester withdraws, and only while pending
    - which notification a status change triggers
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from introhub.core.domain_types import NotificationKind, RequestStatus
from introhub.core.enforce_requests import (
    check_can_decide,
    check_can_view,
    check_can_withdraw,
    check_contact_belongs_to_approver,
    check_not_duplicate,
    is_participant,
    notification_for_status,
)
from introhub.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    ResourceNotFoundError,
)


@dataclass
class _Request:
    requester_id: UUID = field(default_factory=uuid4)
    approver_id: UUID = field(default_factory=uuid4)
    status: str = RequestStatus.PENDING.value


@dataclass
class _Contact:
    user_id: UUID = field(default_factory=uuid4)


# ─── creation ────────────────────────────────────────────────────

def test_contact_owned_by_approver_passes():
    contact = _Contact()
    assert check_contact_belongs_to_approver(contact, contact.user_id) is None


def test_contact_owned_by_someone_else_is_invalid_argument():
    error = check_contact_belongs_to_approver(_Contact(), uuid4())
    assert isinstance(error, InvalidArgumentError)
    assert error.http_status == 400
    assert error.message == "target contact does not belong to specified approver"


def test_duplicate_request_is_conflict():
    error = check_not_duplicate(True)
    assert isinstance(error, ConflictError)
    assert error.http_status == 409
    assert check_not_duplicate(False) is None


# ─── visibility ──────────────────────────────────────────────────

def test_participants_can_view():
    request = _Request()
    assert is_participant(request, request.requester_id)
    assert is_participant(request, request.approver_id)
    assert check_can_view(request, request.requester_id) is None
    assert check_can_view(request, request.approver_id) is None


def test_outsider_gets_not_found_not_forbidden():
    error = check_can_view(_Request(), uuid4())
    assert isinstance(error, ResourceNotFoundError)
    assert error.http_status == 404


# ─── decisions ───────────────────────────────────────────────────

def test_only_approver_decides():
    request = _Request()
    assert check_can_decide(request, request.approver_id) is None
    error = check_can_decide(request, request.requester_id)
    assert isinstance(error, ForbiddenError)


@pytest.mark.parametrize("status", [s.value for s in RequestStatus])
def test_approver_may_redecide_in_any_state(status):
    request = _Request(status=status)
    assert check_can_decide(request, request.approver_id) is None


# ─── withdrawal ──────────────────────────────────────────────────

def test_requester_withdraws_pending_request():
    request = _Request()
    assert check_can_withdraw(request, request.requester_id) is None


def test_approver_cannot_withdraw():
    request = _Request()
    error = check_can_withdraw(request, request.approver_id)
    assert isinstance(error, ForbiddenError)
    assert error.message == "only the requester can delete this request"


@pytest.mark.parametrize("status", ["approved", "declined"])
def test_resolved_request_cannot_be_withdrawn(status):
    request = _Request(status=status)
    error = check_can_withdraw(request, request.requester_id)
    assert isinstance(error, ForbiddenError)
    assert error.message == "only pending requests can be deleted"


# ─── notifications ───────────────────────────────────────────────

def test_notification_for_status():
    assert notification_for_status(RequestStatus.APPROVED) == NotificationKind.REQUEST_APPROVED
    assert notification_for_status(RequestStatus.DECLINED) == NotificationKind.REQUEST_DECLINED
    assert notification_for_status(RequestStatus.PENDING) is None
