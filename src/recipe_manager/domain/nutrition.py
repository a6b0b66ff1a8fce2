"""Nutrition domain models."""

from dataclasses import dataclass

CONTRIBUTION_FIELDS = (
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "fiber_g",
    "sugar_g",
    "sodium_mg",
)


@dataclass(frozen=True)
class NutrientContribution:
    """Absolute nutrient amounts contributed by one ingredient line."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0

    def add(self, other: "NutrientContribution") -> "NutrientContribution":
        """Return the field-wise sum of two contributions."""
        return NutrientContribution(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            fiber_g=self.fiber_g + other.fiber_g,
            sugar_g=self.sugar_g + other.sugar_g,
            sodium_mg=self.sodium_mg + other.sodium_mg,
        )


@dataclass(frozen=True)
class PerServingSnapshot:
    """Recipe nutrient totals divided by the serving count."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0


@dataclass(frozen=True)
class MacroPercentages:
    """Share of energy coming from each macronutrient, in whole percent."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class NutritionAnalysis:
    """Derived indicators for a per-serving snapshot."""

    snapshot: PerServingSnapshot
    macro_percentages: MacroPercentages
    quality_score: int
    nutri_score: str
