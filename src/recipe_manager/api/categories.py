"""Recipe category tree endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from recipe_manager.api.deps import get_container, page_request, require_user
from recipe_manager.api.schemas import (  # noqa: TC001
    CategoryCreate,
    CategoryReorder,
    CategoryUpdate,
)
from recipe_manager.domain.categories import (  # noqa: TC001
    BreadcrumbEntry,
    CategoryFilters,
    CategoryNode,
    CategoryStats,
    RecipeCategory,
)
from recipe_manager.domain.pagination import PageRequest

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def search_categories(  # noqa: PLR0913
    request: Request,
    search: str | None = None,
    parent_id: UUID | None = None,
    roots_only: bool = False,
    level: int | None = None,
    include_inactive: bool = False,
    page: PageRequest = Depends(page_request),
) -> dict[str, object]:
    """Search categories with pagination."""
    filters = CategoryFilters(
        search=search,
        parent_id=parent_id,
        filter_by_parent=roots_only or parent_id is not None,
        level=level,
        is_active=None if include_inactive else True,
    )
    result = get_container(request).category_service.search_categories(filters, page)
    return {"items": result.items, "pagination": result.pagination}


@router.get("/tree")
async def category_tree(request: Request) -> dict[str, list[CategoryNode]]:
    """Return the nested tree of active categories."""
    return {"tree": get_container(request).category_service.get_tree()}


@router.get("/roots")
async def root_categories(request: Request) -> dict[str, list[RecipeCategory]]:
    """Return active root categories."""
    return {"categories": get_container(request).category_service.get_roots()}


@router.get("/stats")
async def all_category_stats(request: Request) -> dict[str, list[CategoryStats]]:
    """Return recipe counts for every active category."""
    return {"stats": get_container(request).category_service.get_all_stats()}


@router.put("/reorder", dependencies=[Depends(require_user)])
async def reorder_categories(
    body: CategoryReorder, request: Request
) -> dict[str, list[RecipeCategory]]:
    """Assign new sort orders to siblings."""
    service = get_container(request).category_service
    updated = service.reorder_categories(
        body.parent_id, [(item.id, item.sort_order) for item in body.orders]
    )
    return {"categories": updated}


@router.get("/slug/{slug}")
async def category_by_slug(slug: str, request: Request) -> RecipeCategory:
    """Return an active category by slug."""
    return get_container(request).category_service.get_by_slug(slug)


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_user)]
)
async def create_category(body: CategoryCreate, request: Request) -> RecipeCategory:
    """Create a root or child category."""
    service = get_container(request).category_service
    return service.create_category(body.model_dump())


@router.get("/{category_id}")
async def get_category(category_id: UUID, request: Request) -> CategoryNode:
    """Return a category with its active direct children."""
    return get_container(request).category_service.get_with_children(category_id)


@router.get("/{category_id}/breadcrumb")
async def category_breadcrumb(
    category_id: UUID, request: Request
) -> dict[str, list[BreadcrumbEntry]]:
    """Return the chain from the root down to the category."""
    service = get_container(request).category_service
    return {"breadcrumb": service.get_breadcrumb(category_id)}


@router.get("/{category_id}/stats")
async def category_stats(category_id: UUID, request: Request) -> CategoryStats:
    """Return recipe and subcategory counts for a category."""
    return get_container(request).category_service.get_stats(category_id)


@router.post(
    "/{category_id}/recipe-count", dependencies=[Depends(require_user)]
)
async def refresh_recipe_count(
    category_id: UUID, request: Request
) -> dict[str, int]:
    """Recount the public recipes of a category."""
    service = get_container(request).category_service
    return {"recipe_count": service.refresh_recipe_count(category_id)}


@router.patch("/{category_id}", dependencies=[Depends(require_user)])
async def update_category(
    category_id: UUID, body: CategoryUpdate, request: Request
) -> RecipeCategory:
    """Update a category; descendants' paths follow."""
    service = get_container(request).category_service
    return service.update_category(category_id, body.model_dump(exclude_unset=True))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user)],
)
async def delete_category(category_id: UUID, request: Request) -> Response:
    """Delete a category without subcategories or recipes."""
    get_container(request).category_service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
