"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from skillswap.schemas import CamelModel
from skillswap.users.schemas import UserResponse


class RegisterRequest(CamelModel):
    """Email registration request."""

    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    location: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class LoginRequest(CamelModel):
    """Login with email + password."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class AuthResponse(CamelModel):
    """Bearer token plus the authenticated user's profile."""

    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
