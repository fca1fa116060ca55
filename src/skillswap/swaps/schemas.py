"""Request/response schemas for swap request endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from skillswap.db.models import SwapRequest
from skillswap.schemas import CamelModel
from skillswap.users.schemas import UserSummary, user_summary

SwapStatus = Literal["pending", "accepted", "rejected", "completed", "cancelled"]


class SwapCreateRequest(CamelModel):
    recipient_id: int = Field(..., ge=1)
    requested_skill: str = Field(..., min_length=1, max_length=100)
    offered_skill: str = Field(..., min_length=1, max_length=100)
    message: str | None = Field(None, max_length=500)
    proposed_duration: str | None = Field(None, max_length=100)
    proposed_schedule: str | None = Field(None, max_length=200)

    @field_validator("requested_skill", "offered_skill")
    @classmethod
    def strip_skill(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Skill cannot be blank"
            raise ValueError(msg)
        return v


class StatusUpdateRequest(CamelModel):
    status: Literal["accepted", "rejected", "completed", "cancelled"]


class SwapResponse(CamelModel):
    id: int
    requester: UserSummary
    recipient: UserSummary
    requested_skill: str
    offered_skill: str
    message: str | None = None
    status: SwapStatus
    proposed_duration: str | None = None
    proposed_schedule: str | None = None
    accepted_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SwapMutationResponse(CamelModel):
    message: str
    swap_request: SwapResponse


class SwapStatsResponse(CamelModel):
    total_swaps: int
    completed_swaps: int
    pending_requests: int
    average_rating: float
    rating_count: int


def swap_response(swap: SwapRequest) -> SwapResponse:
    """Build a SwapResponse with both parties populated."""
    return SwapResponse(
        id=swap.id,
        requester=user_summary(swap.requester),
        recipient=user_summary(swap.recipient),
        requested_skill=swap.requested_skill,
        offered_skill=swap.offered_skill,
        message=swap.message,
        status=swap.status,  # type: ignore[arg-type]
        proposed_duration=swap.proposed_duration,
        proposed_schedule=swap.proposed_schedule,
        accepted_at=swap.accepted_at,
        completed_at=swap.completed_at,
        cancelled_at=swap.cancelled_at,
        created_at=swap.created_at,
        updated_at=swap.updated_at,
    )
