"""ORM models for the SkillSwap schema.

The schema itself is owned by Alembic (see alembic/versions); these models
must stay in sync with the latest revision.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skillswap.db.base import Base, JSONType, TimestampMixin, utcnow

# ---------------------------------------------------------------------------
# Enumerations (stored as short strings)
# ---------------------------------------------------------------------------

ROLES = ("user", "admin")
EXPERIENCE_LEVELS = ("Beginner", "Intermediate", "Advanced")
URGENCY_LEVELS = ("Low", "Medium", "High")
SWAP_STATUSES = ("pending", "accepted", "rejected", "completed", "cancelled")
MESSAGE_TYPES = ("announcement", "maintenance", "feature", "warning")
MESSAGE_PRIORITIES = ("low", "medium", "high", "urgent")
REPORT_TYPES = ("user_activity", "swap_stats", "feedback_logs", "skill_analytics")
MODERATION_ACTIONS = ("skill_rejected", "user_banned", "user_unbanned", "profile_flagged", "content_removed")
SEVERITIES = ("low", "medium", "high", "critical")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(TimestampMixin, Base):
    """Registered member. Never hard-deleted; deactivated via is_active."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_photo: Mapped[str] = mapped_column(Text, default="", nullable=False)

    available_weekdays: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    available_weekends: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    available_evenings: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    time_zone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)

    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role: Mapped[str] = mapped_column(String(16), default="user", nullable=False)
    rating_average: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    rating_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    ban_expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    skills_offered: Mapped[list[SkillOffered]] = relationship(
        "SkillOffered",
        order_by="SkillOffered.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    skills_wanted: Mapped[list[SkillWanted]] = relationship(
        "SkillWanted",
        order_by="SkillWanted.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class SkillOffered(Base):
    """A skill the user can teach. Position keeps the list order contiguous."""

    __tablename__ = "user_skills_offered"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    skill: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    experience: Mapped[str] = mapped_column(String(16), default="Beginner", nullable=False)


class SkillWanted(Base):
    """A skill the user wants to learn."""

    __tablename__ = "user_skills_wanted"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    skill: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    urgency: Mapped[str] = mapped_column(String(16), default="Medium", nullable=False)


# ---------------------------------------------------------------------------
# Swap requests
# ---------------------------------------------------------------------------


class SwapRequest(TimestampMixin, Base):
    """A proposal to trade one skill for another between two users."""

    __tablename__ = "swap_requests"
    __table_args__ = (
        Index("ix_swap_requests_requester_recipient", "requester_id", "recipient_id"),
        Index("ix_swap_requests_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    requester_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    requested_skill: Mapped[str] = mapped_column(String(100), nullable=False)
    offered_skill: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="pending", nullable=False)
    proposed_duration: Mapped[str | None] = mapped_column(String(100), nullable=True)
    proposed_schedule: Mapped[str | None] = mapped_column(String(200), nullable=True)
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    requester: Mapped[User] = relationship("User", foreign_keys=[requester_id], lazy="selectin")
    recipient: Mapped[User] = relationship("User", foreign_keys=[recipient_id], lazy="selectin")

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.requester_id, self.recipient_id)


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


class Rating(TimestampMixin, Base):
    """One participant's rating of the other after a completed swap."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("rater_id", "rated_id", "swap_request_id", name="uq_ratings_rater_rated_swap"),
        Index("ix_ratings_rated", "rated_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    swap_request_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("swap_requests.id", ondelete="CASCADE"), nullable=False
    )
    rater_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rated_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    feedback: Mapped[str | None] = mapped_column(String(500), nullable=True)
    communication: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reliability: Mapped[int | None] = mapped_column(Integer, nullable=True)
    expertise: Mapped[int | None] = mapped_column(Integer, nullable=True)

    swap_request: Mapped[SwapRequest] = relationship("SwapRequest", lazy="selectin")
    rater: Mapped[User] = relationship("User", foreign_keys=[rater_id], lazy="selectin")
    rated: Mapped[User] = relationship("User", foreign_keys=[rated_id], lazy="selectin")


# ---------------------------------------------------------------------------
# Platform messages
# ---------------------------------------------------------------------------


class PlatformMessage(TimestampMixin, Base):
    """Admin-authored announcement shown to every user until deactivated or expired."""

    __tablename__ = "platform_messages"
    __table_args__ = (
        Index("ix_platform_messages_active_expires", "is_active", "expires_at"),
        Index("ix_platform_messages_created", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(String(1000), nullable=False)
    type: Mapped[str] = mapped_column(String(16), default="announcement", nullable=False)
    priority: Mapped[str] = mapped_column(String(16), default="medium", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    created_by: Mapped[User] = relationship("User", lazy="selectin")


class MessageRead(Base):
    """Read receipt: UNIQUE(message_id, user_id) keeps one receipt per user."""

    __tablename__ = "platform_message_reads"
    __table_args__ = (UniqueConstraint("message_id", "user_id", name="uq_message_reads_message_user"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("platform_messages.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    read_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


# ---------------------------------------------------------------------------
# Admin: reports and moderation
# ---------------------------------------------------------------------------


class Report(TimestampMixin, Base):
    """Immutable snapshot of an aggregate report. Only download_count changes."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_type_created", "report_type", "created_at"),
        Index("ix_reports_generated_by", "generated_by_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_type: Mapped[str] = mapped_column(String(32), nullable=False)
    generated_by_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    file_name: Mapped[str] = mapped_column(String(128), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    download_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    generated_by: Mapped[User] = relationship("User", lazy="selectin")


class ModerationLog(TimestampMixin, Base):
    """Append-only audit trail of administrator actions."""

    __tablename__ = "moderation_logs"
    __table_args__ = (
        Index("ix_moderation_logs_moderator_created", "moderator_id", "created_at"),
        Index("ix_moderation_logs_target_created", "target_user_id", "created_at"),
        Index("ix_moderation_logs_action_created", "action", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    moderator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    target_user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    severity: Mapped[str] = mapped_column(String(16), default="medium", nullable=False)

    moderator: Mapped[User] = relationship("User", foreign_keys=[moderator_id], lazy="selectin")
    target_user: Mapped[User] = relationship("User", foreign_keys=[target_user_id], lazy="selectin")
