"""Swap request business logic.

Status updates are plain read-modify-write on a single row. Two participants
transitioning the same request at the same moment are not serialized; the
last commit wins.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Literal

import structlog
from sqlalchemy import func, or_, select

from skillswap.db.models import SwapRequest, User
from skillswap.pagination import paginate
from skillswap.swaps.lifecycle import TIMESTAMP_FIELDS, check_actor, validate_transition

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

SwapRole = Literal["all", "sent", "received"]


async def get_swap_request(db: AsyncSession, swap_id: int) -> SwapRequest | None:
    """Fetch a swap request by ID."""
    result = await db.execute(select(SwapRequest).where(SwapRequest.id == swap_id))
    return result.scalar_one_or_none()


async def _require_swap(db: AsyncSession, swap_id: int) -> SwapRequest:
    swap = await get_swap_request(db, swap_id)
    if swap is None:
        msg = "Swap request not found"
        raise LookupError(msg)
    return swap


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


async def create_swap_request(
    db: AsyncSession,
    requester: User,
    recipient_id: int,
    requested_skill: str,
    offered_skill: str,
    message: str | None = None,
    proposed_duration: str | None = None,
    proposed_schedule: str | None = None,
) -> SwapRequest:
    """
    Create a pending swap request from `requester` to `recipient_id`.

    Raises:
        ValueError: Self-request, or a pending request to the same recipient already exists.
        LookupError: Recipient missing or deactivated.
    """
    if recipient_id == requester.id:
        msg = "Cannot request swap with yourself"
        raise ValueError(msg)

    result = await db.execute(select(User).where(User.id == recipient_id))
    recipient = result.scalar_one_or_none()
    if recipient is None or not recipient.is_active:
        msg = "Recipient not found or inactive"
        raise LookupError(msg)

    existing = await db.execute(
        select(SwapRequest.id)
        .where(SwapRequest.requester_id == requester.id)
        .where(SwapRequest.recipient_id == recipient_id)
        .where(SwapRequest.status == "pending")
        .limit(1)
    )
    if existing.scalar_one_or_none() is not None:
        msg = "You already have a pending request with this user"
        raise ValueError(msg)

    swap = SwapRequest(
        requester=requester,
        recipient=recipient,
        requested_skill=requested_skill,
        offered_skill=offered_skill,
        message=message,
        proposed_duration=proposed_duration,
        proposed_schedule=proposed_schedule,
        status="pending",
    )
    db.add(swap)
    await db.flush()
    logger.info(
        "swap_request_created",
        swap_id=swap.id,
        requester_id=requester.id,
        recipient_id=recipient_id,
    )
    return swap


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


async def list_user_swaps(
    db: AsyncSession,
    user_id: int,
    role: SwapRole = "all",
    status: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[SwapRequest], int]:
    """A user's sent and/or received swap requests, newest first."""
    query = select(SwapRequest).order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
    if role == "sent":
        query = query.where(SwapRequest.requester_id == user_id)
    elif role == "received":
        query = query.where(SwapRequest.recipient_id == user_id)
    else:
        query = query.where(or_(SwapRequest.requester_id == user_id, SwapRequest.recipient_id == user_id))

    if status:
        query = query.where(SwapRequest.status == status)

    return await paginate(db, query, page, limit)


async def list_all_swaps(
    db: AsyncSession,
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[SwapRequest], int]:
    """Every swap request (admin monitoring), newest first."""
    query = select(SwapRequest).order_by(SwapRequest.created_at.desc(), SwapRequest.id.desc())
    if status:
        query = query.where(SwapRequest.status == status)
    return await paginate(db, query, page, limit)


async def get_swap_for_viewer(db: AsyncSession, viewer: User, swap_id: int) -> SwapRequest:
    """
    Fetch a swap request visible to `viewer` (a participant or an admin).

    Raises:
        LookupError: Unknown swap.
        PermissionError: Viewer is not involved.
    """
    swap = await _require_swap(db, swap_id)
    if not swap.is_participant(viewer.id) and not viewer.is_admin:
        msg = "Not authorized to view this request"
        raise PermissionError(msg)
    return swap


async def get_user_swap_stats(db: AsyncSession, user: User) -> dict[str, float | int]:
    """Dashboard counters for one user."""
    involved = or_(SwapRequest.requester_id == user.id, SwapRequest.recipient_id == user.id)

    total = (await db.execute(select(func.count()).select_from(SwapRequest).where(involved))).scalar_one()
    completed = (
        await db.execute(
            select(func.count()).select_from(SwapRequest).where(involved).where(SwapRequest.status == "completed")
        )
    ).scalar_one()
    pending_received = (
        await db.execute(
            select(func.count())
            .select_from(SwapRequest)
            .where(SwapRequest.recipient_id == user.id)
            .where(SwapRequest.status == "pending")
        )
    ).scalar_one()

    return {
        "total_swaps": total,
        "completed_swaps": completed,
        "pending_requests": pending_received,
        "average_rating": user.rating_average,
        "rating_count": user.rating_count,
    }


# ---------------------------------------------------------------------------
# Transition / delete
# ---------------------------------------------------------------------------


async def transition_swap(
    db: AsyncSession,
    actor: User,
    swap_id: int,
    target_status: str,
) -> SwapRequest:
    """
    Move a swap request to `target_status`.

    Raises:
        LookupError: Unknown swap.
        PermissionError: Actor is not a participant, or is the wrong participant for this status.
        ValueError: Transition not allowed from the current status.
    """
    swap = await _require_swap(db, swap_id)
    check_actor(
        target_status,
        is_requester=swap.requester_id == actor.id,
        is_recipient=swap.recipient_id == actor.id,
    )
    validate_transition(swap.status, target_status)

    previous = swap.status
    swap.status = target_status
    stamp_field = TIMESTAMP_FIELDS.get(target_status)
    if stamp_field is not None:
        setattr(swap, stamp_field, datetime.now(timezone.utc))

    await db.flush()
    logger.info(
        "swap_request_transitioned",
        swap_id=swap.id,
        actor_id=actor.id,
        from_status=previous,
        to_status=target_status,
    )
    return swap


async def delete_swap_request(db: AsyncSession, actor: User, swap_id: int) -> None:
    """
    Delete a pending swap request. Only its requester may do so.

    Raises:
        LookupError: Unknown swap.
        PermissionError: Actor is not the requester.
        ValueError: Request is no longer pending.
    """
    swap = await _require_swap(db, swap_id)
    if swap.requester_id != actor.id:
        msg = "Only requester can delete the request"
        raise PermissionError(msg)
    if swap.status != "pending":
        msg = "Can only delete pending requests"
        raise ValueError(msg)

    await db.delete(swap)
    await db.flush()
    logger.info("swap_request_deleted", swap_id=swap_id, actor_id=actor.id)
