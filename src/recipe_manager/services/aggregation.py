"""Per-serving nutrition aggregation for recipes."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from recipe_manager.domain.errors import NotFoundError, ValidationFailedError
from recipe_manager.domain.nutrition import NutrientContribution, PerServingSnapshot
from recipe_manager.domain.recipes import RecipeIngredient, snapshot_payload

if TYPE_CHECKING:
    from recipe_manager.services.recipes import IngredientRepository, RecipeRepository

_logger = logging.getLogger(__name__)


@dataclass
class RecipeNutritionAggregator:
    """Recomputes and stores the per-serving snapshot of a recipe.

    Must run after every ingredient add, update or removal and after every
    change of the serving count; the stored snapshot is stale otherwise.
    """

    recipe_repository: "RecipeRepository"
    ingredient_repository: "IngredientRepository"

    def recalculate(self, recipe_id: UUID) -> PerServingSnapshot:
        """Sum ingredient contributions, divide by servings and persist."""
        recipe = self.recipe_repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        ingredients = self.ingredient_repository.list_ingredients(recipe_id)
        snapshot = per_serving(sum_contributions(ingredients), recipe.servings)
        self.recipe_repository.update_recipe(recipe_id, snapshot_payload(snapshot))
        _logger.info(
            "Recalculated recipe %s: %s ingredients, %.2f kcal per serving",
            recipe_id,
            len(ingredients),
            snapshot.calories,
        )
        return snapshot


def sum_contributions(ingredients: Iterable[RecipeIngredient]) -> NutrientContribution:
    """Return the field-wise sum of cached ingredient contributions."""
    total = NutrientContribution()
    for ingredient in ingredients:
        total = total.add(ingredient.contribution)
    return total


def per_serving(totals: NutrientContribution, servings: float) -> PerServingSnapshot:
    """Divide recipe totals by the serving count."""
    if servings < 1:
        raise ValidationFailedError("Servings must be at least 1")
    return PerServingSnapshot(
        calories=totals.calories / servings,
        protein_g=totals.protein_g / servings,
        carbs_g=totals.carbs_g / servings,
        fat_g=totals.fat_g / servings,
        fiber_g=totals.fiber_g / servings,
        sugar_g=totals.sugar_g / servings,
        sodium_mg=totals.sodium_mg / servings,
    )
