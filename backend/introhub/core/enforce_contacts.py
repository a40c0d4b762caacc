"""Contact & Profile Update Rules — uniqueness checks, partial-update merging, batch accounting.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - An owner never holds two contacts with the same (lower-cased) email
    - Partial updates: name fields keep their value when blank; every other
      updatable field is replaced by the supplied value, empty included
    - A batch failure on one item never affects another item's outcome

Design Decisions:
    - merge_partial_update returns a changes dict instead of mutating: the shell
      applies it inside the repository (ADR: functional core, imperative shell)
    - BatchImportResult is a plain dataclass accumulator so the service loop stays flat
"""

from dataclasses import dataclass, field
from typing import Any

from introhub.core.domain_types import DUPLICATE_CONTACT_EMAIL_MESSAGE
from introhub.core.errors import ConflictError, IntroHubError

KEEP_IF_BLANK_FIELDS: tuple[str, ...] = ("first_name", "last_name")
CONTACT_REPLACED_FIELDS: tuple[str, ...] = (
    "company", "position", "notes", "phone", "linkedin_url",
)
PROFILE_REPLACED_FIELDS: tuple[str, ...] = (
    "company", "position", "bio", "profile_picture",
)


def check_email_available(email_in_use: bool) -> IntroHubError | None:
    if email_in_use:
        return ConflictError(DUPLICATE_CONTACT_EMAIL_MESSAGE)
    return None


def email_change_requested(current_email: str, new_email: str | None) -> bool:
    """A non-blank email that differs from the stored one needs a uniqueness re-check."""
    return bool(new_email) and new_email != current_email


def merge_partial_update(
    current: Any,
    supplied: dict[str, Any],
    replaced_fields: tuple[str, ...],
    keep_if_blank: tuple[str, ...] = KEEP_IF_BLANK_FIELDS,
) -> dict[str, Any]:
    """Compute the attribute changes a partial update implies."""
    changes: dict[str, Any] = {}
    for name in keep_if_blank:
        value = supplied.get(name)
        if value:
            changes[name] = value
    for name in replaced_fields:
        changes[name] = supplied.get(name) or ""
    return {k: v for k, v in changes.items() if getattr(current, k) != v}


@dataclass
class BatchImportError:
    """One rejected batch item, echoed back with its reasons."""
    data: dict[str, Any]
    errors: list[str]


@dataclass
class BatchImportResult:
    """Per-item outcome accounting for a batch import."""
    success_count: int = 0
    error_count: int = 0
    errors: list[BatchImportError] = field(default_factory=list)

    def record_success(self) -> None:
        self.success_count += 1

    def record_failure(self, data: dict[str, Any], reason: str) -> None:
        self.error_count += 1
        self.errors.append(BatchImportError(data=data, errors=[reason]))
