"""Nutrition calculation for ingredient lines and per-serving snapshots."""

import logging
from dataclasses import dataclass, field

from recipe_manager.domain.foods import Food, NutrientProfile
from recipe_manager.domain.nutrition import (
    MacroPercentages,
    NutrientContribution,
    NutritionAnalysis,
    PerServingSnapshot,
)
from recipe_manager.domain.units import Unit
from recipe_manager.services.units import UnitConverter

_logger = logging.getLogger(__name__)

_KCAL_PER_G_PROTEIN = 4
_KCAL_PER_G_CARBS = 4
_KCAL_PER_G_FAT = 9


@dataclass(frozen=True)
class IngredientNutritionCalculator:
    """Computes the absolute nutrient contribution of one ingredient line."""

    converter: UnitConverter = field(default_factory=UnitConverter)

    def compute(
        self,
        quantity: float,
        unit: Unit | None,
        food: Food,
        profile: NutrientProfile | None,
    ) -> NutrientContribution:
        """Return the contribution of quantity/unit of food.

        A food without a nutrient profile contributes zero to every nutrient
        instead of failing the whole recipe.
        """
        if profile is None:
            _logger.debug("No nutrient profile for food %s, contributing zero", food.id)
            return NutrientContribution()
        grams = self.converter.to_grams(quantity, unit, food.serving_size_g)
        scaled = profile.scale(grams / 100.0)
        return NutrientContribution(
            calories=scaled.calories,
            protein_g=scaled.protein_g,
            carbs_g=scaled.carbohydrates_g,
            fat_g=scaled.fat_g,
            fiber_g=scaled.fiber_g,
            sugar_g=scaled.sugars_g,
            sodium_mg=scaled.sodium_mg,
        )


def analyze(snapshot: PerServingSnapshot) -> NutritionAnalysis:
    """Return derived indicators for a per-serving snapshot."""
    return NutritionAnalysis(
        snapshot=snapshot,
        macro_percentages=macro_percentages(snapshot),
        quality_score=quality_score(snapshot),
        nutri_score=estimate_nutri_score(snapshot),
    )


def macro_percentages(snapshot: PerServingSnapshot) -> MacroPercentages:
    """Return the share of energy from protein, carbs and fat."""
    protein_kcal = snapshot.protein_g * _KCAL_PER_G_PROTEIN
    carbs_kcal = snapshot.carbs_g * _KCAL_PER_G_CARBS
    fat_kcal = snapshot.fat_g * _KCAL_PER_G_FAT
    total = protein_kcal + carbs_kcal + fat_kcal
    if total == 0:
        return MacroPercentages(protein=0, carbs=0, fat=0)
    return MacroPercentages(
        protein=round(protein_kcal / total * 100),
        carbs=round(carbs_kcal / total * 100),
        fat=round(fat_kcal / total * 100),
    )


def quality_score(snapshot: PerServingSnapshot) -> int:
    """Score a serving from 0 to 100, penalizing energy, fat, sugar and salt."""
    score = 100
    if snapshot.calories > 400:
        score -= 10
    if snapshot.fat_g > 20:
        score -= 15
    if snapshot.sugar_g > 15:
        score -= 15
    if snapshot.sodium_mg > 600:
        score -= 20
    if snapshot.fiber_g > 3:
        score += 10
    if snapshot.protein_g > 10:
        score += 10
    return max(0, min(100, score))


_CALORIE_STEPS = ((335, 10), (270, 8), (230, 6), (185, 4), (140, 2))
_SUGAR_STEPS = ((45, 10), (36, 8), (27, 6), (18, 4), (9, 2))
_SODIUM_STEPS = ((900, 10), (720, 8), (540, 6), (360, 4), (180, 2))
_FIBER_STEPS = ((4.7, 5), (3.7, 4), (2.8, 3), (1.9, 2), (0.9, 1))
_PROTEIN_STEPS = ((8, 5), (6.4, 4), (4.8, 3), (3.2, 2), (1.6, 1))
_GRADES = ((-1, "A"), (2, "B"), (10, "C"), (18, "D"))


def estimate_nutri_score(snapshot: PerServingSnapshot) -> str:
    """Return a simplified Nutri-Score letter from A (best) to E."""
    points = (
        _step_points(snapshot.calories, _CALORIE_STEPS)
        + _step_points(snapshot.sugar_g, _SUGAR_STEPS)
        + _step_points(snapshot.sodium_mg, _SODIUM_STEPS)
        - _step_points(snapshot.fiber_g, _FIBER_STEPS)
        - _step_points(snapshot.protein_g, _PROTEIN_STEPS)
    )
    for ceiling, grade in _GRADES:
        if points <= ceiling:
            return grade
    return "E"


def _step_points(value: float, steps: tuple[tuple[float, int], ...]) -> int:
    for threshold, points in steps:
        if value >= threshold:
            return points
    return 0
