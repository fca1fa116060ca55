"""Platform announcements as seen by ordinary users."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import case, exists, or_, select
from sqlalchemy.exc import IntegrityError

from skillswap.db.models import MessageRead, PlatformMessage

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

UNREAD_LIMIT = 10

# Sort key: lower sorts first.
PRIORITY_RANK = case(
    {"urgent": 0, "high": 1, "medium": 2, "low": 3},
    value=PlatformMessage.priority,
    else_=4,
)


async def list_unread_messages(db: AsyncSession, user_id: int, now: datetime | None = None) -> list[PlatformMessage]:
    """
    Active, unexpired messages the user has not read yet.

    Ordered by priority (urgent first) then newest, capped at UNREAD_LIMIT.
    Read messages are excluded before the cap is applied.
    """
    now = now or datetime.now(timezone.utc)
    already_read = exists().where(MessageRead.message_id == PlatformMessage.id).where(MessageRead.user_id == user_id)

    result = await db.execute(
        select(PlatformMessage)
        .where(PlatformMessage.is_active.is_(True))
        .where(or_(PlatformMessage.expires_at.is_(None), PlatformMessage.expires_at > now))
        .where(~already_read)
        .order_by(PRIORITY_RANK, PlatformMessage.created_at.desc(), PlatformMessage.id.desc())
        .limit(UNREAD_LIMIT)
    )
    return list(result.scalars().all())


async def mark_message_read(db: AsyncSession, user_id: int, message_id: int) -> bool:
    """
    Record a read receipt. Returns False if the user had already read it.

    Raises:
        LookupError: Unknown message.
    """
    message = await db.get(PlatformMessage, message_id)
    if message is None:
        msg = "Message not found"
        raise LookupError(msg)

    existing = await db.execute(
        select(MessageRead.id).where(MessageRead.message_id == message_id).where(MessageRead.user_id == user_id)
    )
    if existing.scalar_one_or_none() is not None:
        return False

    db.add(MessageRead(message_id=message_id, user_id=user_id))
    try:
        await db.flush()
    except IntegrityError:
        # A concurrent request stored the receipt first
        await db.rollback()
        return False
    logger.info("message_read", message_id=message_id, user_id=user_id)
    return True
