"""Request/response schemas for rating endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from skillswap.db.models import Rating
from skillswap.schemas import CamelModel
from skillswap.users.schemas import UserSummary, user_summary


class SkillScores(CamelModel):
    communication: int | None = Field(None, ge=1, le=5)
    reliability: int | None = Field(None, ge=1, le=5)
    expertise: int | None = Field(None, ge=1, le=5)


class RatingCreateRequest(CamelModel):
    swap_request_id: int = Field(..., ge=1)
    rated_user_id: int = Field(..., ge=1)
    rating: int = Field(..., ge=1, le=5)
    feedback: str | None = Field(None, max_length=500)
    skills: SkillScores | None = None


class SwapSkills(CamelModel):
    id: int
    requested_skill: str
    offered_skill: str


class RatingResponse(CamelModel):
    id: int
    swap_request: SwapSkills
    rater: UserSummary
    rated: UserSummary
    rating: int
    feedback: str | None = None
    skills: SkillScores
    created_at: datetime


class RatingCreatedResponse(CamelModel):
    message: str
    rating: RatingResponse


def rating_response(rating: Rating) -> RatingResponse:
    swap = rating.swap_request
    return RatingResponse(
        id=rating.id,
        swap_request=SwapSkills(
            id=swap.id,
            requested_skill=swap.requested_skill,
            offered_skill=swap.offered_skill,
        ),
        rater=user_summary(rating.rater),
        rated=user_summary(rating.rated),
        rating=rating.rating,
        feedback=rating.feedback,
        skills=SkillScores(
            communication=rating.communication,
            reliability=rating.reliability,
            expertise=rating.expertise,
        ),
        created_at=rating.created_at,
    )
