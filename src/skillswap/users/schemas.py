"""Request/response schemas for user and profile endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from skillswap.db.models import User
from skillswap.schemas import CamelModel

# ---------------------------------------------------------------------------
# Embedded shapes
# ---------------------------------------------------------------------------


class SkillOfferedSchema(CamelModel):
    skill: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    experience: Literal["Beginner", "Intermediate", "Advanced"] = "Beginner"

    @field_validator("skill")
    @classmethod
    def strip_skill(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Skill name cannot be blank"
            raise ValueError(msg)
        return v


class SkillWantedSchema(CamelModel):
    skill: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    urgency: Literal["Low", "Medium", "High"] = "Medium"

    @field_validator("skill")
    @classmethod
    def strip_skill(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Skill name cannot be blank"
            raise ValueError(msg)
        return v


class AvailabilitySchema(CamelModel):
    weekdays: bool = False
    weekends: bool = False
    evenings: bool = False
    time_zone: str = Field("UTC", max_length=64)


class RatingSummary(CamelModel):
    average: float
    count: int


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserSummary(CamelModel):
    """Minimal user shape used when another record embeds a user."""

    id: int
    name: str
    profile_photo: str = ""


class PublicUserResponse(CamelModel):
    """Profile as seen by other users. Never includes email or password."""

    id: int
    name: str
    location: str | None = None
    profile_photo: str = ""
    skills_offered: list[SkillOfferedSchema] = []
    skills_wanted: list[SkillWantedSchema] = []
    availability: AvailabilitySchema
    is_public: bool
    role: str
    rating: RatingSummary
    is_active: bool
    joined_at: datetime
    created_at: datetime


class UserResponse(PublicUserResponse):
    """Full profile for the owner and for admins."""

    email: str
    ban_expires_at: datetime | None = None
    updated_at: datetime


class ProfileUpdateRequest(CamelModel):
    """Allow-listed profile fields. Anything else in the body is dropped."""

    name: str | None = Field(None, min_length=1, max_length=50)
    location: str | None = Field(None, max_length=100)
    profile_photo: str | None = None
    skills_offered: list[SkillOfferedSchema] | None = None
    skills_wanted: list[SkillWantedSchema] | None = None
    availability: AvailabilitySchema | None = None
    is_public: bool | None = None


class UserStatusResponse(CamelModel):
    message: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _profile_fields(user: User) -> dict[str, object]:
    return {
        "id": user.id,
        "name": user.name,
        "location": user.location,
        "profile_photo": user.profile_photo or "",
        "skills_offered": [
            SkillOfferedSchema(skill=s.skill, description=s.description, experience=s.experience)
            for s in user.skills_offered
        ],
        "skills_wanted": [
            SkillWantedSchema(skill=s.skill, description=s.description, urgency=s.urgency)
            for s in user.skills_wanted
        ],
        "availability": AvailabilitySchema(
            weekdays=user.available_weekdays,
            weekends=user.available_weekends,
            evenings=user.available_evenings,
            time_zone=user.time_zone,
        ),
        "is_public": user.is_public,
        "role": user.role,
        "rating": RatingSummary(average=user.rating_average, count=user.rating_count),
        "is_active": user.is_active,
        "joined_at": user.joined_at,
        "created_at": user.created_at,
    }


def public_user_response(user: User) -> PublicUserResponse:
    """Build a PublicUserResponse from a User model."""
    return PublicUserResponse(**_profile_fields(user))


def user_response(user: User) -> UserResponse:
    """Build a UserResponse (includes email) from a User model."""
    return UserResponse(
        **_profile_fields(user),
        email=user.email,
        ban_expires_at=user.ban_expires_at,
        updated_at=user.updated_at,
    )


def user_summary(user: User) -> UserSummary:
    return UserSummary(id=user.id, name=user.name, profile_photo=user.profile_photo or "")
