"""Supabase repository for recipe ingredient lines."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import optional_float, to_row
from recipe_manager.domain.recipes import RecipeIngredient
from recipe_manager.domain.units import Unit
from recipe_manager.services.recipes import IngredientRepository


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase implementation for recipe ingredients."""

    client: Client

    def create_ingredient(self, payload: dict[str, object]) -> RecipeIngredient:
        """Create an ingredient line and return it."""
        response = (
            self.client.table("recipe_ingredients").insert(to_row(payload)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recipe ingredient")
        return _parse_ingredient(response.data[0])

    def get_ingredient(self, ingredient_id: UUID) -> RecipeIngredient | None:
        """Return an ingredient line by id, if present."""
        response = (
            self.client.table("recipe_ingredients")
            .select("*")
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> RecipeIngredient:
        """Update an ingredient line and return it."""
        response = (
            self.client.table("recipe_ingredients")
            .update(to_row(payload))
            .eq("id", str(ingredient_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update recipe ingredient")
        return _parse_ingredient(response.data[0])

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient line."""
        self.client.table("recipe_ingredients").delete().eq(
            "id", str(ingredient_id)
        ).execute()

    def list_ingredients(self, recipe_id: UUID) -> list[RecipeIngredient]:
        """Return ingredient lines ordered by group then sort order."""
        response = (
            self.client.table("recipe_ingredients")
            .select("*")
            .eq("recipe_id", str(recipe_id))
            .order("group_name", desc=False)
            .order("sort_order", desc=False)
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every ingredient line of a recipe."""
        self.client.table("recipe_ingredients").delete().eq(
            "recipe_id", str(recipe_id)
        ).execute()


def _parse_ingredient(row: dict[str, object]) -> RecipeIngredient:
    """Parse a recipe_ingredients row into a domain model."""
    return RecipeIngredient(
        id=UUID(str(row["id"])),
        recipe_id=UUID(str(row["recipe_id"])),
        food_id=UUID(str(row["food_id"])),
        quantity=float(row.get("quantity") or 0.0),
        unit=Unit(str(row.get("unit") or Unit.G.value)),
        preparation_note=row.get("preparation_note"),
        is_optional=bool(row.get("is_optional", False)),
        group_name=row.get("group_name"),
        sort_order=int(row.get("sort_order") or 0),
        calories_calculated=optional_float(row.get("calories_calculated")),
        protein_calculated_g=optional_float(row.get("protein_calculated_g")),
        carbs_calculated_g=optional_float(row.get("carbs_calculated_g")),
        fat_calculated_g=optional_float(row.get("fat_calculated_g")),
        fiber_calculated_g=optional_float(row.get("fiber_calculated_g")),
        sugar_calculated_g=optional_float(row.get("sugar_calculated_g")),
        sodium_calculated_mg=optional_float(row.get("sodium_calculated_mg")),
    )
