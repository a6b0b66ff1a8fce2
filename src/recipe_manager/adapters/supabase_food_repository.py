"""Supabase repository for foods and their nutrient profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_manager.adapters.supabase_rows import optional_float, to_row
from recipe_manager.domain.foods import PROFILE_NUTRIENT_FIELDS, Food, NutrientProfile
from recipe_manager.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for foods and nutrient profiles."""

    client: Client

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_profile(self, food_id: UUID) -> NutrientProfile | None:
        """Return the nutrient profile of a food, if present."""
        response = (
            self.client.table("nutritional_values")
            .select("*")
            .eq("food_id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""
        response = self.client.table("foods").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food:
        """Update a food and return it."""
        response = (
            self.client.table("foods")
            .update(to_row(payload))
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food")
        return _parse_food(response.data[0])

    def upsert_profile(
        self, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Create or replace the nutrient profile of a food."""
        response = (
            self.client.table("nutritional_values")
            .upsert({**to_row(payload), "food_id": str(food_id)}, on_conflict="food_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store nutrient profile")
        return _parse_profile(response.data[0])


def _parse_food(row: dict[str, object]) -> Food:
    """Parse a food row into a domain model."""
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        serving_size_g=optional_float(row.get("serving_size_g")),
        category_id=row.get("category_id"),
        brand=row.get("brand"),
        is_verified=bool(row.get("is_verified", False)),
        verification_source=row.get("verification_source"),
        created_by=row.get("created_by"),
    )


def _parse_profile(row: dict[str, object]) -> NutrientProfile:
    """Parse a nutritional_values row; missing amounts read as zero."""
    amounts = {name: float(row.get(name) or 0.0) for name in PROFILE_NUTRIENT_FIELDS}
    confidence = row.get("confidence_score")
    return NutrientProfile(
        food_id=UUID(str(row["food_id"])),
        confidence_score=1.0 if confidence is None else float(confidence),
        source=row.get("source"),
        **amounts,
    )
