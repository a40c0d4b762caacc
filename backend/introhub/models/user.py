"""User ORM — account identity and public profile.

Invariants:
    - id is UUID primary key (client-side default)
    - email is unique and stored lower-cased
    - password_hash never leaves the service layer (no schema exposes it)

Design Decisions:
    - Profile text columns are non-nullable with "" default: partial updates can
      blank them without introducing NULL handling in responses
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from introhub.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Registered account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    position: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    profile_picture: Mapped[str] = mapped_column(
        String(1000), nullable=False, default="",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
