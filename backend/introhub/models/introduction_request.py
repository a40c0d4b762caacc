"""IntroductionRequest ORM — a requester asks an approver to introduce them to a contact.

Invariants:
    - requester_id, approver_id -> users; target_contact_id -> contacts
    - (requester_id, target_contact_id) unique regardless of status
      (uq_requests_requester_contact)
    - status in {pending, approved, declined}; created pending

Design Decisions:
    - approver_id stored (not derived from the contact): the contact could later
      change hands, the request keeps who was asked
    - Unique constraint closes the check-then-insert race on creation
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from introhub.core.domain_types import RequestStatus
from introhub.db.base import Base, TimestampMixin


class IntroductionRequest(TimestampMixin, Base):
    """Introduction request between two users about one contact."""
    __tablename__ = "introduction_requests"
    __table_args__ = (
        UniqueConstraint(
            "requester_id", "target_contact_id",
            name="uq_requests_requester_contact",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    requester_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    approver_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    target_contact_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RequestStatus.PENDING.value,
    )
    response_message: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
