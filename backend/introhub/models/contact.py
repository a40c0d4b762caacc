"""Contact ORM — a person in one user's address book.

Invariants:
    - Always owned by exactly one User (user_id FK)
    - (user_id, email) unique — enforced by uq_contacts_user_email
    - email stored lower-cased so the constraint is case-insensitive

Design Decisions:
    - Unique constraint backs the service-level check: concurrent inserts of the
      same email cannot both succeed
    - No ORM relationships: async sessions never trigger lazy loads; services
      resolve owners explicitly
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from introhub.db.base import Base, TimestampMixin


class Contact(TimestampMixin, Base):
    """Owned contact entry."""
    __tablename__ = "contacts"
    __table_args__ = (
        UniqueConstraint("user_id", "email", name="uq_contacts_user_email"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    position: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    linkedin_url: Mapped[str] = mapped_column(
        String(500), nullable=False, default="",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
