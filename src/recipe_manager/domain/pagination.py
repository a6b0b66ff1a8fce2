"""Pagination models shared by listing operations."""

import math
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from recipe_manager.domain.errors import ValidationFailedError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Requested page of a listing."""

    page: int = 1
    limit: int = 20
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        """Return the number of items to skip."""
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        """Return whether results are sorted in descending order."""
        return self.sort_order == "desc"


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata returned with a page of items."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def from_total(cls, request: PageRequest, total: int) -> "Pagination":
        """Build metadata for a request given the total number of matches."""
        return cls(
            current_page=request.page,
            total_pages=math.ceil(total / request.limit),
            total_items=total,
            items_per_page=request.limit,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of items with its metadata."""

    items: list[T]
    pagination: Pagination


def validate_page_request(request: PageRequest, max_limit: int) -> PageRequest:
    """Reject out-of-range paging input and clamp the limit to max_limit."""
    errors: list[str] = []
    if request.page < 1:
        errors.append("page must be >= 1")
    if request.limit <= 0:
        errors.append("limit must be > 0")
    if request.sort_order not in {"asc", "desc"}:
        errors.append("sort_order must be 'asc' or 'desc'")
    if errors:
        raise ValidationFailedError("Invalid pagination", details=errors)
    if request.limit > max_limit:
        return replace(request, limit=max_limit)
    return request
