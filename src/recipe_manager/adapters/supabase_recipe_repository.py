"""Supabase repository for recipes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import (
    optional_float,
    optional_uuid,
    string_list,
    to_row,
)
from recipe_manager.domain.pagination import PageRequest
from recipe_manager.domain.recipes import Recipe, RecipeFilters
from recipe_manager.services.recipes import RecipeRepository

_SORTABLE_COLUMNS = frozenset(
    {
        "created_at",
        "updated_at",
        "name",
        "prep_time_minutes",
        "cook_time_minutes",
        "calories_per_serving",
    }
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase implementation for recipes."""

    client: Client

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        """Create a recipe and return it."""
        response = self.client.table("recipes").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return _parse_recipe(response.data[0])

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        """Update a recipe and return it."""
        response = (
            self.client.table("recipes")
            .update(to_row(payload))
            .eq("id", str(recipe_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe row."""
        self.client.table("recipes").delete().eq("id", str(recipe_id)).execute()

    def search_recipes(
        self, filters: RecipeFilters, page: PageRequest
    ) -> tuple[list[Recipe], int]:
        """Return one page of matching recipes and the total match count."""
        query = self.client.table("recipes").select("*", count="exact")
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.or_(f"name.ilike.{pattern},description.ilike.{pattern}")
        if filters.category_id is not None:
            query = query.eq("category_id", str(filters.category_id))
        if filters.created_by is not None:
            query = query.eq("created_by", filters.created_by)
        if filters.is_public is not None:
            query = query.eq("is_public", filters.is_public)
        if filters.is_verified is not None:
            query = query.eq("is_verified", filters.is_verified)
        if filters.diet_types:
            query = query.contains("diet_types", filters.diet_types)
        if filters.tags:
            query = query.contains("tags", filters.tags)
        if filters.difficulty_level is not None:
            query = query.eq("difficulty_level", filters.difficulty_level)
        if filters.max_prep_time is not None:
            query = query.lte("prep_time_minutes", filters.max_prep_time)
        sort_by = page.sort_by if page.sort_by in _SORTABLE_COLUMNS else "created_at"
        response = (
            query.order(sort_by, desc=page.descending)
            .range(page.offset, page.offset + page.limit - 1)
            .execute()
        )
        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        return [_parse_recipe(row) for row in rows], total

    def count_by_category(self, category_id: UUID, public_only: bool = False) -> int:
        """Return how many recipes reference a category."""
        query = (
            self.client.table("recipes")
            .select("id", count="exact")
            .eq("category_id", str(category_id))
        )
        if public_only:
            query = query.eq("is_public", True)
        response = query.execute()
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    return Recipe(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        servings=float(row.get("servings") or 1),
        created_by=str(row.get("created_by", "")),
        description=row.get("description"),
        category_id=optional_uuid(row.get("category_id")),
        is_public=bool(row.get("is_public", False)),
        is_verified=bool(row.get("is_verified", False)),
        difficulty_level=str(row.get("difficulty_level") or "medium"),
        prep_time_minutes=optional_float(row.get("prep_time_minutes")),
        cook_time_minutes=optional_float(row.get("cook_time_minutes")),
        cuisine_type=row.get("cuisine_type"),
        tags=string_list(row.get("tags")),
        diet_types=string_list(row.get("diet_types")),
        allergens=string_list(row.get("allergens")),
        calories_per_serving=float(row.get("calories_per_serving") or 0.0),
        protein_per_serving_g=float(row.get("protein_per_serving_g") or 0.0),
        carbs_per_serving_g=float(row.get("carbs_per_serving_g") or 0.0),
        fat_per_serving_g=float(row.get("fat_per_serving_g") or 0.0),
        fiber_per_serving_g=float(row.get("fiber_per_serving_g") or 0.0),
        sugar_per_serving_g=float(row.get("sugar_per_serving_g") or 0.0),
        sodium_per_serving_mg=float(row.get("sodium_per_serving_mg") or 0.0),
    )
