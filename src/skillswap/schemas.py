"""Base schema and shared response envelopes.

The wire format is camelCase; Python code uses snake_case field names.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serializes to camelCase, accepts both camelCase and snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Page(CamelModel, Generic[T]):
    """Offset pagination envelope: {items, totalPages, currentPage, total}."""

    items: list[T]
    total_pages: int
    current_page: int
    total: int


class MessageResponse(CamelModel):
    message: str
