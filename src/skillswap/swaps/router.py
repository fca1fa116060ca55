"""Swap request router: all /api/swaps/* endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.dependencies import get_current_user
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.pagination import PageParams, build_page
from skillswap.schemas import MessageResponse, Page
from skillswap.swaps.schemas import (
    StatusUpdateRequest,
    SwapCreateRequest,
    SwapMutationResponse,
    SwapResponse,
    SwapStatsResponse,
    SwapStatus,
    swap_response,
)
from skillswap.swaps.service import (
    create_swap_request,
    delete_swap_request,
    get_swap_for_viewer,
    get_user_swap_stats,
    list_user_swaps,
    transition_swap,
)

router = APIRouter(prefix="/api/swaps", tags=["Swaps"])


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, LookupError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=SwapMutationResponse, status_code=201)
async def create_swap(
    body: SwapCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> SwapMutationResponse:
    """Propose a skill swap to another member."""
    try:
        swap = await create_swap_request(
            db,
            user,
            recipient_id=body.recipient_id,
            requested_skill=body.requested_skill,
            offered_skill=body.offered_skill,
            message=body.message,
            proposed_duration=body.proposed_duration,
            proposed_schedule=body.proposed_schedule,
        )
    except (LookupError, ValueError) as e:
        raise _to_http(e) from e
    await db.commit()
    return SwapMutationResponse(message="Swap request sent successfully", swap_request=swap_response(swap))


@router.get("/my-requests", response_model=Page[SwapResponse])
async def my_requests(
    type: Literal["all", "sent", "received"] = Query("all"),  # noqa: A002
    status: SwapStatus | None = Query(None),
    params: PageParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> Page[SwapResponse]:
    """List the caller's sent and/or received requests."""
    swaps, total = await list_user_swaps(db, user.id, type, status, params.page, params.limit)
    return build_page(swaps, total, params.page, params.limit, swap_response)


@router.get("/stats", response_model=SwapStatsResponse)
async def my_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> SwapStatsResponse:
    """Dashboard counters for the caller."""
    stats = await get_user_swap_stats(db, user)
    return SwapStatsResponse(**stats)


@router.get("/{swap_id}", response_model=SwapResponse)
async def get_swap(
    swap_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> SwapResponse:
    """Get a single request. Participants and admins only."""
    try:
        swap = await get_swap_for_viewer(db, user, swap_id)
    except (LookupError, PermissionError) as e:
        raise _to_http(e) from e
    return swap_response(swap)


@router.patch("/{swap_id}/status", response_model=SwapMutationResponse)
async def update_status(
    swap_id: int,
    body: StatusUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> SwapMutationResponse:
    """Accept, reject, cancel or complete a request."""
    try:
        swap = await transition_swap(db, user, swap_id, body.status)
    except (LookupError, PermissionError, ValueError) as e:
        raise _to_http(e) from e
    await db.commit()
    return SwapMutationResponse(message=f"Swap request {body.status} successfully", swap_request=swap_response(swap))


@router.delete("/{swap_id}", response_model=MessageResponse)
async def delete_swap(
    swap_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Withdraw a pending request."""
    try:
        await delete_swap_request(db, user, swap_id)
    except (LookupError, PermissionError, ValueError) as e:
        raise _to_http(e) from e
    await db.commit()
    return MessageResponse(message="Swap request deleted successfully")
