"""Rating creation and per-user rating aggregation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from skillswap.db.models import Rating, SwapRequest, User
from skillswap.pagination import paginate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

ALREADY_RATED = "You have already rated this user for this swap"


def round_half_up(value: Decimal | float, places: int = 1) -> float:
    """Round with ties going up (2.25 -> 2.3), unlike the builtin round()."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def average_of(total: int | None, count: int) -> float:
    """Mean rounded half-up to one decimal; zero when there are no ratings."""
    if not count:
        return 0.0
    return round_half_up(Decimal(total or 0) / Decimal(count))


async def recompute_user_rating(db: AsyncSession, user_id: int) -> User:
    """
    Recalculate a user's rating average and count from every rating they received.

    Reads all of the user's ratings on every call; no incremental update.
    """
    row = (
        await db.execute(
            select(func.sum(Rating.rating), func.count(Rating.id)).where(Rating.rated_id == user_id)
        )
    ).one()
    total, count = row

    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one()
    user.rating_average = average_of(total, count)
    user.rating_count = count
    await db.flush()
    return user


async def create_rating(
    db: AsyncSession,
    rater: User,
    swap_request_id: int,
    rated_user_id: int,
    rating: int,
    feedback: str | None = None,
    communication: int | None = None,
    reliability: int | None = None,
    expertise: int | None = None,
) -> Rating:
    """
    Rate the other participant of a completed swap.

    Raises:
        ValueError: Swap missing or not completed, rated user is not the other
            participant, or this rating already exists.
        PermissionError: Rater did not take part in the swap.
    """
    swap = (await db.execute(select(SwapRequest).where(SwapRequest.id == swap_request_id))).scalar_one_or_none()
    if swap is None or swap.status != "completed":
        msg = "Can only rate completed swaps"
        raise ValueError(msg)

    if not swap.is_participant(rater.id):
        msg = "You can only rate swaps you participated in"
        raise PermissionError(msg)

    other = swap.recipient if swap.requester_id == rater.id else swap.requester
    if rated_user_id != other.id:
        msg = "You can only rate the other participant of this swap"
        raise ValueError(msg)

    existing = await db.execute(
        select(Rating.id)
        .where(Rating.rater_id == rater.id)
        .where(Rating.rated_id == rated_user_id)
        .where(Rating.swap_request_id == swap_request_id)
    )
    if existing.scalar_one_or_none() is not None:
        raise ValueError(ALREADY_RATED)

    record = Rating(
        swap_request=swap,
        rater=rater,
        rated=other,
        rating=rating,
        feedback=feedback,
        communication=communication,
        reliability=reliability,
        expertise=expertise,
    )
    db.add(record)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent identical rating.
        await db.rollback()
        raise ValueError(ALREADY_RATED) from e

    rated = await recompute_user_rating(db, rated_user_id)
    logger.info(
        "rating_created",
        rating_id=record.id,
        swap_id=swap_request_id,
        rater_id=rater.id,
        rated_id=rated_user_id,
        stars=rating,
        new_average=rated.rating_average,
    )
    return record


async def list_ratings_for_user(
    db: AsyncSession,
    user_id: int,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Rating], int]:
    """Ratings a user has received, newest first."""
    query = (
        select(Rating)
        .where(Rating.rated_id == user_id)
        .order_by(Rating.created_at.desc(), Rating.id.desc())
    )
    return await paginate(db, query, page, limit)
