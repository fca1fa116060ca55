"""Admin moderation: skill rejection, bans and the moderation audit log.

Every moderation action appends exactly one ModerationLog row in the same
transaction as the change it records.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Literal

import structlog
from sqlalchemy import select

from skillswap.db.models import ModerationLog, User
from skillswap.pagination import paginate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

DEFAULT_BAN_REASON = "No reason provided"


async def _require_user(db: AsyncSession, user_id: int) -> User:
    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if user is None:
        msg = "User not found"
        raise LookupError(msg)
    return user


def _log_action(
    db: AsyncSession,
    moderator: User,
    target: User,
    action: str,
    reason: str,
    details: dict[str, Any],
    severity: str,
) -> ModerationLog:
    entry = ModerationLog(
        moderator=moderator,
        target_user=target,
        action=action,
        reason=reason,
        details=details,
        severity=severity,
    )
    db.add(entry)
    return entry


async def reject_skill(
    db: AsyncSession,
    moderator: User,
    user_id: int,
    skill_type: Literal["offered", "wanted"],
    skill_index: int,
    reason: str,
) -> User:
    """
    Remove the skill at `skill_index` from a user's offered or wanted list.

    The index is positional, so it refers to whatever sits at that slot when
    the request is processed.

    Raises:
        LookupError: Unknown user, or no skill at that index.
    """
    user = await _require_user(db, user_id)
    skills = user.skills_offered if skill_type == "offered" else user.skills_wanted
    if not 0 <= skill_index < len(skills):
        msg = "Skill not found"
        raise LookupError(msg)

    removed = skills.pop(skill_index)
    rejected: dict[str, Any] = {"skill": removed.skill, "description": removed.description}
    if skill_type == "offered":
        rejected["experience"] = removed.experience
    else:
        rejected["urgency"] = removed.urgency

    _log_action(
        db,
        moderator,
        user,
        action="skill_rejected",
        reason=reason,
        details={"skillType": skill_type, "rejectedSkill": rejected},
        severity="medium",
    )
    await db.flush()
    logger.info(
        "skill_rejected",
        moderator_id=moderator.id,
        user_id=user.id,
        skill_type=skill_type,
        skill=removed.skill,
    )
    return user


async def toggle_ban(
    db: AsyncSession,
    moderator: User,
    user_id: int,
    reason: str | None = None,
    duration_days: int | None = None,
    now: datetime | None = None,
) -> User:
    """
    Ban an active user or unban a banned one.

    A ban with `duration_days` expires at now + duration; expiry is applied
    lazily the next time the user logs in or presents a token. Unbanning, or
    banning without a duration, clears any expiry.

    Raises:
        LookupError: Unknown user.
        ValueError: Moderator targeting their own account.
    """
    if user_id == moderator.id:
        msg = "You cannot ban yourself"
        raise ValueError(msg)

    user = await _require_user(db, user_id)
    now = now or datetime.now(timezone.utc)

    was_banned = not user.is_active
    user.is_active = not user.is_active
    if not user.is_active and duration_days:
        user.ban_expires_at = now + timedelta(days=duration_days)
    else:
        user.ban_expires_at = None

    action = "user_unbanned" if was_banned else "user_banned"
    _log_action(
        db,
        moderator,
        user,
        action=action,
        reason=reason or DEFAULT_BAN_REASON,
        details={"duration": duration_days},
        severity="high",
    )
    await db.flush()
    logger.info(action, moderator_id=moderator.id, user_id=user.id, duration_days=duration_days)
    return user


async def list_moderation_logs(
    db: AsyncSession,
    action: str | None = None,
    severity: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[ModerationLog], int]:
    """Moderation history, newest first."""
    query = select(ModerationLog).order_by(ModerationLog.created_at.desc(), ModerationLog.id.desc())
    if action:
        query = query.where(ModerationLog.action == action)
    if severity:
        query = query.where(ModerationLog.severity == severity)
    return await paginate(db, query, page, limit)
