"""Admin dashboard counters and platform message management."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import func, select

from skillswap.db.models import MessageRead, PlatformMessage, Rating, SwapRequest, User
from skillswap.pagination import paginate
from skillswap.ratings.service import round_half_up

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

RECENT_ACTIVITY_SIZE = 5


async def _count(db: AsyncSession, model: type[Any], *criteria: Any) -> int:
    query = select(func.count()).select_from(model)
    for criterion in criteria:
        query = query.where(criterion)
    return (await db.execute(query)).scalar_one()


async def get_platform_stats(db: AsyncSession) -> dict[str, Any]:
    """Platform-wide counters plus the five newest users and swaps."""
    avg = (await db.execute(select(func.avg(Rating.rating)))).scalar_one()

    recent_users = (
        await db.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc()).limit(RECENT_ACTIVITY_SIZE)
        )
    ).scalars().all()
    recent_swaps = (
        await db.execute(
            select(SwapRequest)
            .order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
            .limit(RECENT_ACTIVITY_SIZE)
        )
    ).scalars().all()

    return {
        "stats": {
            "total_users": await _count(db, User),
            "active_users": await _count(db, User, User.is_active.is_(True)),
            "total_swaps": await _count(db, SwapRequest),
            "pending_swaps": await _count(db, SwapRequest, SwapRequest.status == "pending"),
            "completed_swaps": await _count(db, SwapRequest, SwapRequest.status == "completed"),
            "total_ratings": await _count(db, Rating),
            "average_rating": round_half_up(avg) if avg is not None else 0.0,
        },
        "recent_users": list(recent_users),
        "recent_swaps": list(recent_swaps),
    }


# ---------------------------------------------------------------------------
# Platform messages
# ---------------------------------------------------------------------------


async def create_platform_message(
    db: AsyncSession,
    author: User,
    title: str,
    content: str,
    type: str = "announcement",  # noqa: A002
    priority: str = "medium",
    expires_at: datetime | None = None,
) -> PlatformMessage:
    message = PlatformMessage(
        title=title,
        content=content,
        type=type,
        priority=priority,
        expires_at=expires_at,
        is_active=True,
        created_by=author,
    )
    db.add(message)
    await db.flush()
    logger.info("platform_message_created", message_id=message.id, author_id=author.id, priority=priority)
    return message


async def list_platform_messages(
    db: AsyncSession,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[PlatformMessage], int]:
    """Every message, active or not, newest first."""
    query = select(PlatformMessage).order_by(PlatformMessage.created_at.desc(), PlatformMessage.id.desc())
    return await paginate(db, query, page, limit)


async def read_counts(db: AsyncSession, message_ids: list[int]) -> dict[int, int]:
    """Number of read receipts per message id."""
    if not message_ids:
        return {}
    result = await db.execute(
        select(MessageRead.message_id, func.count(MessageRead.id))
        .where(MessageRead.message_id.in_(message_ids))
        .group_by(MessageRead.message_id)
    )
    return {message_id: count for message_id, count in result.all()}


async def set_message_active(db: AsyncSession, message_id: int, is_active: bool) -> PlatformMessage:
    """
    Activate or deactivate a message.

    Raises:
        LookupError: Unknown message.
    """
    message = await db.get(PlatformMessage, message_id)
    if message is None:
        msg = "Message not found"
        raise LookupError(msg)

    message.is_active = is_active
    await db.flush()
    logger.info("platform_message_updated", message_id=message_id, is_active=is_active)
    return message
