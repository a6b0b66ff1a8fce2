"""Supabase repository for the recipe category tree."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import optional_uuid, to_row
from recipe_manager.domain.categories import CategoryFilters, RecipeCategory
from recipe_manager.domain.pagination import PageRequest
from recipe_manager.services.categories import CategoryRepository

_SORTABLE_COLUMNS = frozenset(
    {"sort_order", "name", "level", "path", "recipe_count", "created_at"}
)


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase implementation for recipe categories."""

    client: Client

    def create_category(self, payload: dict[str, object]) -> RecipeCategory:
        """Create a category and return it."""
        response = (
            self.client.table("recipe_categories").insert(to_row(payload)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe category")
        return _parse_category(response.data[0])

    def get_category(self, category_id: UUID) -> RecipeCategory | None:
        """Return a category by id, if present."""
        response = (
            self.client.table("recipe_categories")
            .select("*")
            .eq("id", str(category_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_category(response.data[0])

    def get_by_slug(self, slug: str) -> RecipeCategory | None:
        """Return the category holding slug, if any."""
        response = (
            self.client.table("recipe_categories")
            .select("*")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_category(response.data[0])

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> RecipeCategory:
        """Update a category and return it."""
        response = (
            self.client.table("recipe_categories")
            .update(to_row(payload))
            .eq("id", str(category_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe category")
        return _parse_category(response.data[0])

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category."""
        self.client.table("recipe_categories").delete().eq(
            "id", str(category_id)
        ).execute()

    def list_children(
        self, parent_id: UUID | None, active_only: bool = True
    ) -> list[RecipeCategory]:
        """Return direct children ordered by sort order then name."""
        query = self.client.table("recipe_categories").select("*")
        if parent_id is None:
            query = query.is_("parent_id", "null")
        else:
            query = query.eq("parent_id", str(parent_id))
        if active_only:
            query = query.eq("is_active", True)
        response = (
            query.order("sort_order", desc=False).order("name", desc=False).execute()
        )
        return [_parse_category(row) for row in response.data or []]

    def count_children(self, parent_id: UUID) -> int:
        """Return how many categories have parent_id as parent."""
        response = (
            self.client.table("recipe_categories")
            .select("id", count="exact")
            .eq("parent_id", str(parent_id))
            .execute()
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def list_categories(self, active_only: bool = True) -> list[RecipeCategory]:
        """Return every category ordered by path."""
        query = self.client.table("recipe_categories").select("*")
        if active_only:
            query = query.eq("is_active", True)
        response = query.order("path", desc=False).execute()
        return [_parse_category(row) for row in response.data or []]

    def search_categories(
        self, filters: CategoryFilters, page: PageRequest
    ) -> tuple[list[RecipeCategory], int]:
        """Return one page of matching categories and the total match count."""
        query = self.client.table("recipe_categories").select("*", count="exact")
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.or_(f"name.ilike.{pattern},description.ilike.{pattern}")
        if filters.filter_by_parent:
            if filters.parent_id is None:
                query = query.is_("parent_id", "null")
            else:
                query = query.eq("parent_id", str(filters.parent_id))
        if filters.level is not None:
            query = query.eq("level", filters.level)
        if filters.is_active is not None:
            query = query.eq("is_active", filters.is_active)
        sort_by = page.sort_by if page.sort_by in _SORTABLE_COLUMNS else "sort_order"
        query = query.order(sort_by, desc=page.descending)
        if sort_by != "name":
            query = query.order("name", desc=False)
        response = query.range(page.offset, page.offset + page.limit - 1).execute()
        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        return [_parse_category(row) for row in rows], total


def _parse_category(row: dict[str, object]) -> RecipeCategory:
    """Parse a recipe_categories row into a domain model."""
    return RecipeCategory(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        slug=str(row.get("slug", "")),
        path=str(row.get("path", "")),
        level=int(row.get("level") or 0),
        parent_id=optional_uuid(row.get("parent_id")),
        description=row.get("description"),
        icon_name=row.get("icon_name"),
        color_hex=row.get("color_hex"),
        sort_order=int(row.get("sort_order") or 0),
        is_active=bool(row.get("is_active", True)),
        recipe_count=int(row.get("recipe_count") or 0),
    )
