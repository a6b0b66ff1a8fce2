"""Domain models for the recipe category tree."""

from dataclasses import dataclass, field
from uuid import UUID

# Levels run 0..4, five in total.
MAX_CATEGORY_LEVEL = 4


@dataclass(frozen=True)
class RecipeCategory:
    """Flat category record pointing at its parent by id."""

    id: UUID
    name: str
    slug: str
    path: str
    level: int = 0
    parent_id: UUID | None = None
    description: str | None = None
    icon_name: str | None = None
    color_hex: str | None = None
    sort_order: int = 0
    is_active: bool = True
    recipe_count: int = 0


@dataclass
class CategoryNode:
    """Category with its materialized children, used for tree rendering."""

    category: RecipeCategory
    children: list["CategoryNode"] = field(default_factory=list)


@dataclass(frozen=True)
class BreadcrumbEntry:
    """One hop of a category breadcrumb."""

    id: UUID
    name: str
    slug: str
    path: str


@dataclass(frozen=True)
class CategoryFilters:
    """Search criteria for category listings."""

    search: str | None = None
    parent_id: UUID | None = None
    filter_by_parent: bool = False
    level: int | None = None
    # None matches active and inactive rows.
    is_active: bool | None = True


@dataclass(frozen=True)
class CategoryStats:
    """Recipe and subcategory counts for one category."""

    id: UUID
    name: str
    level: int
    public_recipes: int
    total_recipes: int
    subcategories: int
