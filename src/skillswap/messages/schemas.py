"""Response schemas for platform messages."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from skillswap.db.models import PlatformMessage
from skillswap.schemas import CamelModel
from skillswap.users.schemas import UserSummary, user_summary

MessageType = Literal["announcement", "maintenance", "feature", "warning"]
MessagePriority = Literal["low", "medium", "high", "urgent"]


class PlatformMessageResponse(CamelModel):
    id: int
    title: str
    content: str
    type: MessageType
    priority: MessagePriority
    is_active: bool
    expires_at: datetime | None = None
    created_by: UserSummary
    created_at: datetime


class AdminMessageResponse(PlatformMessageResponse):
    """Admin view, with the number of users who have read the message."""

    read_count: int = 0
    updated_at: datetime


class MessageListResponse(CamelModel):
    messages: list[PlatformMessageResponse] = Field(default_factory=list)


def platform_message_response(message: PlatformMessage) -> PlatformMessageResponse:
    return PlatformMessageResponse(
        id=message.id,
        title=message.title,
        content=message.content,
        type=message.type,  # type: ignore[arg-type]
        priority=message.priority,  # type: ignore[arg-type]
        is_active=message.is_active,
        expires_at=message.expires_at,
        created_by=user_summary(message.created_by),
        created_at=message.created_at,
    )
