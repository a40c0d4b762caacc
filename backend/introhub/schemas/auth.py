"""Auth Schemas — registration and login payloads.

Invariants:
    - Emails are stripped and lower-cased at the boundary (case-insensitive identity)
    - RegisterRequest.password >= 6 chars and must equal password_confirm
    - first_name/last_name required, stripped, non-empty

Design Decisions:
    - EmailStr (email-validator) over a hand-written regex
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from introhub.schemas.user import UserResponse


def normalize_email(v: str) -> str:
    return v.strip().lower()


class RegisterRequest(BaseModel):
    """Sign-up payload."""
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    password_confirm: str
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    company: str = Field("", max_length=255)
    position: str = Field("", max_length=255)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirm:
            raise ValueError("password_confirm must match password")
        return self


class LoginRequest(BaseModel):
    """Credentials payload."""
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return normalize_email(v)


class AuthResponse(BaseModel):
    """Token plus the authenticated user's profile."""
    token: str
    user: UserResponse
