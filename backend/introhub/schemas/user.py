"""User Schemas — public profile representation and profile updates.

Invariants:
    - UserResponse never carries password_hash
    - ProfileUpdate fields all default to "": blank names mean "keep", other blanks clear

Design Decisions:
    - from_attributes: responses built straight from ORM rows
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Public user profile."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    company: str
    position: str
    bio: str = ""
    profile_picture: str = ""
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Profile update — see enforce_contacts.merge_partial_update for semantics."""
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)
    company: str = Field("", max_length=255)
    position: str = Field("", max_length=255)
    bio: str = Field("", max_length=5000)
    profile_picture: str = Field("", max_length=1000)
