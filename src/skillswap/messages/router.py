"""Platform message router: /api/messages endpoints for signed-in users."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.dependencies import get_current_user
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.messages.schemas import MessageListResponse, platform_message_response
from skillswap.messages.service import list_unread_messages, mark_message_read
from skillswap.schemas import MessageResponse

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.get("", response_model=MessageListResponse)
async def unread_messages(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> MessageListResponse:
    """Announcements the caller has not read yet, most urgent first."""
    messages = await list_unread_messages(db, user.id)
    return MessageListResponse(messages=[platform_message_response(m) for m in messages])


@router.post("/{message_id}/read", response_model=MessageResponse)
async def read_message(
    message_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Mark an announcement as read. Repeating the call is a no-op."""
    try:
        await mark_message_read(db, user.id, message_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    await db.commit()
    return MessageResponse(message="Message marked as read")
