"""Initial schema: users, skills, swaps, ratings, messages, reports, moderation.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("profile_photo", sa.Text(), nullable=False),
        sa.Column("available_weekdays", sa.Boolean(), nullable=False),
        sa.Column("available_weekends", sa.Boolean(), nullable=False),
        sa.Column("available_evenings", sa.Boolean(), nullable=False),
        sa.Column("time_zone", sa.String(64), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("rating_average", sa.Float(), nullable=False),
        sa.Column("rating_count", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("ban_expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )

    for table, extra in (
        ("user_skills_offered", sa.Column("experience", sa.String(16), nullable=False)),
        ("user_skills_wanted", sa.Column("urgency", sa.String(16), nullable=False)),
    ):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("position", sa.Integer(), nullable=False),
            sa.Column("skill", sa.String(100), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            extra,
        )
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])

    # --- Swap requests ---
    op.create_table(
        "swap_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("requester_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("requested_skill", sa.String(100), nullable=False),
        sa.Column("offered_skill", sa.String(100), nullable=False),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("proposed_duration", sa.String(100), nullable=True),
        sa.Column("proposed_schedule", sa.String(200), nullable=True),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_swap_requests_requester_recipient", "swap_requests", ["requester_id", "recipient_id"])
    op.create_index("ix_swap_requests_status", "swap_requests", ["status"])

    # --- Ratings ---
    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "swap_request_id",
            sa.Integer(),
            sa.ForeignKey("swap_requests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rater_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rated_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("feedback", sa.String(500), nullable=True),
        sa.Column("communication", sa.Integer(), nullable=True),
        sa.Column("reliability", sa.Integer(), nullable=True),
        sa.Column("expertise", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("rater_id", "rated_id", "swap_request_id", name="uq_ratings_rater_rated_swap"),
    )
    op.create_index("ix_ratings_rated", "ratings", ["rated_id"])

    # --- Platform messages ---
    op.create_table(
        "platform_messages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.String(1000), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_platform_messages_active_expires", "platform_messages", ["is_active", "expires_at"])
    op.create_index("ix_platform_messages_created", "platform_messages", ["created_at"])

    op.create_table(
        "platform_message_reads",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "message_id",
            sa.Integer(),
            sa.ForeignKey("platform_messages.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("message_id", "user_id", name="uq_message_reads_message_user"),
    )

    # --- Reports ---
    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("report_type", sa.String(32), nullable=False),
        sa.Column("generated_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data", JSON_TYPE, nullable=False),
        sa.Column("file_name", sa.String(128), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("download_count", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_reports_type_created", "reports", ["report_type", "created_at"])
    op.create_index("ix_reports_generated_by", "reports", ["generated_by_id"])

    # --- Moderation log ---
    op.create_table(
        "moderation_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("moderator_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("target_user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        sa.Column("details", JSON_TYPE, nullable=False),
        sa.Column("severity", sa.String(16), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_moderation_logs_moderator_created", "moderation_logs", ["moderator_id", "created_at"])
    op.create_index("ix_moderation_logs_target_created", "moderation_logs", ["target_user_id", "created_at"])
    op.create_index("ix_moderation_logs_action_created", "moderation_logs", ["action", "created_at"])


def downgrade() -> None:
    for table in (
        "moderation_logs",
        "reports",
        "platform_message_reads",
        "platform_messages",
        "ratings",
        "swap_requests",
        "user_skills_wanted",
        "user_skills_offered",
        "users",
    ):
        op.drop_table(table)
