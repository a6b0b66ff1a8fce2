"""Domain models for foods and their nutrient profiles."""

from dataclasses import dataclass, fields, replace
from uuid import UUID

PROFILE_NUTRIENT_FIELDS = (
    "calories",
    "protein_g",
    "carbohydrates_g",
    "sugars_g",
    "fat_g",
    "saturated_fat_g",
    "fiber_g",
    "sodium_mg",
    "calcium_mg",
    "iron_mg",
    "vitamin_c_mg",
    "vitamin_d_ug",
)


@dataclass(frozen=True)
class Food:
    """Represents a food item that recipe ingredients reference."""

    id: UUID
    name: str
    serving_size_g: float | None = None
    category_id: str | None = None
    brand: str | None = None
    is_verified: bool = False
    verification_source: str | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class NutrientProfile:
    """Per-100g nutrient amounts for one food."""

    food_id: UUID
    calories: float = 0.0
    protein_g: float = 0.0
    carbohydrates_g: float = 0.0
    sugars_g: float = 0.0
    fat_g: float = 0.0
    saturated_fat_g: float = 0.0
    fiber_g: float = 0.0
    sodium_mg: float = 0.0
    calcium_mg: float = 0.0
    iron_mg: float = 0.0
    vitamin_c_mg: float = 0.0
    vitamin_d_ug: float = 0.0
    confidence_score: float = 1.0
    source: str | None = None

    def scale(self, factor: float) -> "NutrientProfile":
        """Return the profile with every nutrient amount multiplied by factor."""
        return replace(
            self,
            **{name: getattr(self, name) * factor for name in PROFILE_NUTRIENT_FIELDS},
        )

    def negative_fields(self) -> list[str]:
        """Return names of nutrient fields holding a negative amount."""
        return [
            item.name
            for item in fields(self)
            if item.name in PROFILE_NUTRIENT_FIELDS and getattr(self, item.name) < 0
        ]
