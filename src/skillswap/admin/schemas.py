"""Request/response schemas for /api/admin endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from skillswap.db.models import ModerationLog, PlatformMessage, Report, User
from skillswap.messages.schemas import AdminMessageResponse, MessagePriority, MessageType
from skillswap.schemas import CamelModel
from skillswap.swaps.schemas import SwapResponse
from skillswap.users.schemas import UserResponse, UserSummary, user_summary

ReportType = Literal["user_activity", "swap_stats", "feedback_logs", "skill_analytics"]
ModerationAction = Literal["skill_rejected", "user_banned", "user_unbanned", "profile_flagged", "content_removed"]
Severity = Literal["low", "medium", "high", "critical"]

# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


class PlatformStats(CamelModel):
    total_users: int
    active_users: int
    total_swaps: int
    pending_swaps: int
    completed_swaps: int
    total_ratings: int
    average_rating: float


class RecentUser(CamelModel):
    id: int
    name: str
    email: str
    is_active: bool
    created_at: datetime


class RecentActivity(CamelModel):
    users: list[RecentUser]
    swaps: list[SwapResponse]


class AdminStatsResponse(CamelModel):
    stats: PlatformStats
    recent_activity: RecentActivity


def recent_user(user: User) -> RecentUser:
    return RecentUser(
        id=user.id,
        name=user.name,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
    )


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


class SkillModerationRequest(CamelModel):
    action: Literal["reject_skill"]
    skill_type: Literal["offered", "wanted"]
    skill_index: int = Field(..., ge=0)
    reason: str = Field(..., min_length=1, max_length=500)


class BanRequest(CamelModel):
    reason: str | None = Field(None, max_length=500)
    duration: int | None = Field(None, ge=1, le=3650, description="Ban length in days")


class ModeratedUserResponse(CamelModel):
    message: str
    user: UserResponse


class TargetUser(CamelModel):
    id: int
    name: str
    email: str


class ModerationLogResponse(CamelModel):
    id: int
    moderator: UserSummary
    target_user: TargetUser
    action: ModerationAction
    reason: str
    details: dict[str, Any]
    severity: Severity
    created_at: datetime


def moderation_log_response(entry: ModerationLog) -> ModerationLogResponse:
    target = entry.target_user
    return ModerationLogResponse(
        id=entry.id,
        moderator=user_summary(entry.moderator),
        target_user=TargetUser(id=target.id, name=target.name, email=target.email),
        action=entry.action,  # type: ignore[arg-type]
        reason=entry.reason,
        details=entry.details or {},
        severity=entry.severity,  # type: ignore[arg-type]
        created_at=entry.created_at,
    )


# ---------------------------------------------------------------------------
# Platform messages
# ---------------------------------------------------------------------------


class MessageCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=1000)
    type: MessageType = "announcement"
    priority: MessagePriority = "medium"
    expires_at: datetime | None = None


class MessageUpdateRequest(CamelModel):
    is_active: bool


class MessageMutationResponse(CamelModel):
    message: str
    data: AdminMessageResponse


def admin_message_response(message: PlatformMessage, read_count: int = 0) -> AdminMessageResponse:
    return AdminMessageResponse(
        id=message.id,
        title=message.title,
        content=message.content,
        type=message.type,  # type: ignore[arg-type]
        priority=message.priority,  # type: ignore[arg-type]
        is_active=message.is_active,
        expires_at=message.expires_at,
        created_by=user_summary(message.created_by),
        created_at=message.created_at,
        updated_at=message.updated_at,
        read_count=read_count,
    )


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class ReportGenerateRequest(CamelModel):
    report_type: ReportType
    start_date: datetime
    end_date: datetime


class ReportSummary(CamelModel):
    """Report metadata without the payload."""

    id: int
    report_type: ReportType
    generated_by: UserSummary
    start_date: datetime
    end_date: datetime
    file_name: str
    file_size: int
    download_count: int
    created_at: datetime


class ReportResponse(ReportSummary):
    data: dict[str, Any]


class ReportGeneratedResponse(CamelModel):
    message: str
    report: ReportResponse


def report_summary(report: Report) -> ReportSummary:
    return ReportSummary(
        id=report.id,
        report_type=report.report_type,  # type: ignore[arg-type]
        generated_by=user_summary(report.generated_by),
        start_date=report.start_date,
        end_date=report.end_date,
        file_name=report.file_name,
        file_size=report.file_size,
        download_count=report.download_count,
        created_at=report.created_at,
    )


def report_response(report: Report) -> ReportResponse:
    return ReportResponse(**report_summary(report).model_dump(), data=report.data)
