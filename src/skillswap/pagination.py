"""Offset pagination (page/limit) for list endpoints.

Collections here are small (users, swaps, ratings), so plain OFFSET is fine;
every listing is ordered newest first.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from fastapi import Query
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.config import get_settings
from skillswap.schemas import Page

T = TypeVar("T")


class PageParams:
    """FastAPI dependency for ?page=&limit= query parameters."""

    default_limit: int | None = None

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int | None = Query(None, ge=1),
    ) -> None:
        settings = get_settings()
        self.page = page
        self.limit = min(limit or self.default_limit or settings.default_page_size, settings.max_page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class MonitorPageParams(PageParams):
    """Page params for admin monitoring lists, which show 20 rows by default."""

    default_limit = 20


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for `total` rows; zero rows means zero pages."""
    return math.ceil(total / limit) if limit > 0 else 0


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Fetch one page of ORM rows for an ordered select.

    Returns:
        Tuple of (rows, total row count ignoring the page window).
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    result = await db.execute(query.offset((page - 1) * limit).limit(limit))
    return list(result.scalars().all()), total


def build_page(
    rows: Sequence[T],
    total: int,
    page: int,
    limit: int,
    convert: Callable[[T], Any],
) -> Page[Any]:
    """Wrap a page of rows in the response envelope."""
    return Page(
        items=[convert(row) for row in rows],
        total_pages=total_pages(total, limit),
        current_page=page,
        total=total,
    )
