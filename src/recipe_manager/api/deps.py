"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from recipe_manager.domain.pagination import PageRequest

if TYPE_CHECKING:
    from recipe_manager.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_user(x_user_id: str | None = Header(default=None)) -> str:
    """Return the caller id from the X-User-Id header."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id.strip()


def page_request(
    request: Request,
    page: int = 1,
    limit: int | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> PageRequest:
    """Build a page request, falling back to the configured default limit."""
    container = get_container(request)
    return PageRequest(
        page=page,
        limit=container.settings.default_page_limit if limit is None else limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
