"""Recipe orchestration: ownership, ingredient nutrition and re-aggregation."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from recipe_manager.domain.errors import (
    NotAuthorizedError,
    NotFoundError,
    ValidationFailedError,
)
from recipe_manager.domain.foods import Food
from recipe_manager.domain.nutrition import NutritionAnalysis
from recipe_manager.domain.pagination import (
    Page,
    PageRequest,
    Pagination,
    validate_page_request,
)
from recipe_manager.domain.recipes import (
    ALLERGENS,
    DEFAULT_INGREDIENT_GROUP,
    DIET_TYPES,
    DIFFICULTY_LEVELS,
    IMAGE_TYPES,
    TECHNIQUES,
    IngredientLine,
    Recipe,
    RecipeDetail,
    RecipeFilters,
    RecipeImage,
    RecipeIngredient,
    RecipeInstruction,
    contribution_payload,
)
from recipe_manager.domain.units import Unit
from recipe_manager.services.aggregation import RecipeNutritionAggregator
from recipe_manager.services.categories import CategoryRepository
from recipe_manager.services.foods import FoodService
from recipe_manager.services.nutrition import IngredientNutritionCalculator, analyze
from recipe_manager.services.units import parse_unit

_logger = logging.getLogger(__name__)

_MAX_TEMPERATURE_CELSIUS = 300
_RECIPE_FIELDS = frozenset(
    {
        "name",
        "description",
        "servings",
        "category_id",
        "is_public",
        "difficulty_level",
        "prep_time_minutes",
        "cook_time_minutes",
        "cuisine_type",
        "tags",
        "diet_types",
        "allergens",
    }
)
_INGREDIENT_FIELDS = frozenset(
    {
        "food_id",
        "quantity",
        "unit",
        "preparation_note",
        "is_optional",
        "group_name",
        "sort_order",
    }
)
_INSTRUCTION_FIELDS = frozenset(
    {
        "step_number",
        "title",
        "description",
        "duration_minutes",
        "temperature_celsius",
        "technique",
        "equipment",
        "tips",
        "warning",
        "is_critical",
        "group_name",
    }
)
_NUTRITION_INPUTS = frozenset({"food_id", "quantity", "unit"})


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        """Create a recipe and return it."""

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        """Update a recipe and return it."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a recipe row."""

    def search_recipes(
        self, filters: RecipeFilters, page: PageRequest
    ) -> tuple[list[Recipe], int]:
        """Return one page of matching recipes and the total match count."""

    def count_by_category(self, category_id: UUID, public_only: bool = False) -> int:
        """Return how many recipes reference a category."""


class IngredientRepository(Protocol):
    """Persistence interface for recipe ingredient lines."""

    def create_ingredient(self, payload: dict[str, object]) -> RecipeIngredient:
        """Create an ingredient line and return it."""

    def get_ingredient(self, ingredient_id: UUID) -> RecipeIngredient | None:
        """Return an ingredient line by id, if present."""

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> RecipeIngredient:
        """Update an ingredient line and return it."""

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """Delete an ingredient line."""

    def list_ingredients(self, recipe_id: UUID) -> list[RecipeIngredient]:
        """Return ingredient lines ordered by group then sort order."""

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every ingredient line of a recipe."""


class InstructionRepository(Protocol):
    """Persistence interface for recipe instructions."""

    def create_instruction(self, payload: dict[str, object]) -> RecipeInstruction:
        """Create an instruction and return it."""

    def get_instruction(self, instruction_id: UUID) -> RecipeInstruction | None:
        """Return an instruction by id, if present."""

    def update_instruction(
        self, instruction_id: UUID, payload: dict[str, object]
    ) -> RecipeInstruction:
        """Update an instruction and return it."""

    def delete_instruction(self, instruction_id: UUID) -> None:
        """Delete an instruction."""

    def list_instructions(self, recipe_id: UUID) -> list[RecipeInstruction]:
        """Return instructions ordered by step number."""

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every instruction of a recipe."""


class ImageRepository(Protocol):
    """Persistence interface for recipe image metadata."""

    def create_image(self, payload: dict[str, object]) -> RecipeImage:
        """Create an image record and return it."""

    def get_image(self, image_id: UUID) -> RecipeImage | None:
        """Return an image by id, if present."""

    def update_image(self, image_id: UUID, payload: dict[str, object]) -> RecipeImage:
        """Update an image record and return it."""

    def delete_image(self, image_id: UUID) -> None:
        """Delete an image record."""

    def list_images(self, recipe_id: UUID) -> list[RecipeImage]:
        """Return images ordered by sort order."""

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        """Delete every image of a recipe."""


@dataclass
class RecipeService:  # noqa: PLR0904
    """Application service for recipes and their ingredients, steps and images.

    Every write checks that the caller owns the recipe. Every change to the
    ingredient set or to the serving count re-runs the nutrition aggregator
    before returning.
    """

    recipe_repository: RecipeRepository
    ingredient_repository: IngredientRepository
    instruction_repository: InstructionRepository
    image_repository: ImageRepository
    category_repository: CategoryRepository
    food_service: FoodService
    aggregator: RecipeNutritionAggregator
    calculator: IngredientNutritionCalculator = field(
        default_factory=IngredientNutritionCalculator
    )
    strict_units: bool = True
    max_page_limit: int = 100

    # Recipes

    def create_recipe(self, payload: dict[str, object], caller_id: str) -> Recipe:
        """Create a recipe owned by caller_id."""
        data = _pick(payload, _RECIPE_FIELDS)
        if not str(data.get("name") or "").strip():
            raise ValidationFailedError("Name and servings are required")
        if data.get("servings") is None:
            raise ValidationFailedError("Name and servings are required")
        self._validate_recipe_fields(data)
        recipe = self.recipe_repository.create_recipe(
            {**data, "name": str(data["name"]).strip(), "created_by": caller_id}
        )
        _logger.info("Created recipe %s for %s", recipe.id, caller_id)
        return recipe

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        """Return a recipe or raise ``NotFoundError``."""
        recipe = self.recipe_repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    async def get_recipe_detail(self, recipe_id: UUID) -> RecipeDetail:
        """Return a recipe with its parts, reading the parts concurrently."""
        recipe, ingredients, instructions, images = await asyncio.gather(
            asyncio.to_thread(self.get_recipe, recipe_id),
            asyncio.to_thread(self.list_ingredients, recipe_id),
            asyncio.to_thread(self.instruction_repository.list_instructions, recipe_id),
            asyncio.to_thread(self.image_repository.list_images, recipe_id),
        )
        category = None
        if recipe.category_id is not None:
            category = await asyncio.to_thread(
                self.category_repository.get_category, recipe.category_id
            )
        return RecipeDetail(
            recipe=recipe,
            ingredients=ingredients,
            instructions=instructions,
            images=images,
            category=category,
        )

    def update_recipe(
        self, recipe_id: UUID, payload: dict[str, object], caller_id: str
    ) -> Recipe:
        """Update recipe fields; a servings change refreshes the snapshot."""
        recipe = self._owned_recipe(recipe_id, caller_id)
        data = _pick(payload, _RECIPE_FIELDS)
        if "name" in data:
            data["name"] = str(data["name"] or "").strip()
            if not data["name"]:
                raise ValidationFailedError("Name is required")
        if "servings" in data and data["servings"] is None:
            raise ValidationFailedError("Servings are required")
        self._validate_recipe_fields(data)
        updated = self.recipe_repository.update_recipe(recipe_id, data)
        if "servings" in data and float(data["servings"]) != recipe.servings:
            self.aggregator.recalculate(recipe_id)
            return self.get_recipe(recipe_id)
        return updated

    def delete_recipe(self, recipe_id: UUID, caller_id: str) -> None:
        """Delete a recipe with its ingredients, instructions and images."""
        self._owned_recipe(recipe_id, caller_id)
        self.ingredient_repository.delete_for_recipe(recipe_id)
        self.instruction_repository.delete_for_recipe(recipe_id)
        self.image_repository.delete_for_recipe(recipe_id)
        self.recipe_repository.delete_recipe(recipe_id)
        _logger.info("Deleted recipe %s", recipe_id)

    async def create_complete_recipe(
        self, payload: dict[str, object], caller_id: str
    ) -> RecipeDetail:
        """Create a recipe with its ingredients and instructions in one call.

        All ingredient and instruction input is validated, and every food
        resolved, before the first write. Writes then run in order with no
        transaction: a store failure part way leaves the rows written so far.
        """
        ingredients = _as_list(payload.get("ingredients"), "ingredients")
        instructions = _as_list(payload.get("instructions"), "instructions")
        prepared = [self._prepare_ingredient(item) for item in ingredients]
        for item in instructions:
            _validate_instruction_fields(item, require_description=True)
        _check_step_sequence(instructions)

        recipe = self.create_recipe(payload, caller_id)
        for data, food in prepared:
            self._store_ingredient(recipe.id, data, food)
        if prepared:
            self.aggregator.recalculate(recipe.id)
        for item in instructions:
            self._store_instruction(recipe.id, item)
        return await self.get_recipe_detail(recipe.id)

    # Ingredients

    def add_ingredient(
        self, recipe_id: UUID, payload: dict[str, object], caller_id: str
    ) -> RecipeIngredient:
        """Add an ingredient line and refresh the recipe snapshot."""
        self._owned_recipe(recipe_id, caller_id)
        data, food = self._prepare_ingredient(payload)
        ingredient = self._store_ingredient(recipe_id, data, food)
        self.aggregator.recalculate(recipe_id)
        return ingredient

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object], caller_id: str
    ) -> RecipeIngredient:
        """Update an ingredient line and refresh the recipe snapshot."""
        ingredient = self._get_ingredient(ingredient_id)
        self._owned_recipe(ingredient.recipe_id, caller_id)
        data = _pick(payload, _INGREDIENT_FIELDS)
        if _NUTRITION_INPUTS & data.keys():
            merged = {
                "food_id": ingredient.food_id,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                **data,
            }
            prepared, food = self._prepare_ingredient(merged)
            profile = self.food_service.find_profile(food.id)
            contribution = self.calculator.compute(
                prepared["quantity"], prepared["unit"], food, profile
            )
            data = {**data, **prepared, **contribution_payload(contribution)}
        updated = self.ingredient_repository.update_ingredient(ingredient_id, data)
        self.aggregator.recalculate(ingredient.recipe_id)
        return updated

    def remove_ingredient(self, ingredient_id: UUID, caller_id: str) -> None:
        """Remove an ingredient line and refresh the recipe snapshot."""
        ingredient = self._get_ingredient(ingredient_id)
        self._owned_recipe(ingredient.recipe_id, caller_id)
        self.ingredient_repository.delete_ingredient(ingredient_id)
        self.aggregator.recalculate(ingredient.recipe_id)

    def list_ingredients(self, recipe_id: UUID) -> list[IngredientLine]:
        """Return ingredient lines joined with their foods."""
        return [
            IngredientLine(
                ingredient=item,
                food=self.food_service.find_food(item.food_id),
            )
            for item in self.ingredient_repository.list_ingredients(recipe_id)
        ]

    def group_ingredients(self, recipe_id: UUID) -> dict[str, list[IngredientLine]]:
        """Return ingredient lines keyed by group name."""
        grouped: dict[str, list[IngredientLine]] = {}
        for line in self.list_ingredients(recipe_id):
            group = line.ingredient.group_name or DEFAULT_INGREDIENT_GROUP
            grouped.setdefault(group, []).append(line)
        return grouped

    def refresh_nutrition(self, recipe_id: UUID, caller_id: str) -> Recipe:
        """Recompute every ingredient from current profiles, then the snapshot."""
        self._owned_recipe(recipe_id, caller_id)
        for ingredient in self.ingredient_repository.list_ingredients(recipe_id):
            food = self.food_service.find_food(ingredient.food_id)
            if food is None:
                _logger.warning(
                    "Food %s of ingredient %s is gone, keeping cached values",
                    ingredient.food_id,
                    ingredient.id,
                )
                continue
            contribution = self.calculator.compute(
                ingredient.quantity,
                ingredient.unit,
                food,
                self.food_service.find_profile(food.id),
            )
            self.ingredient_repository.update_ingredient(
                ingredient.id, contribution_payload(contribution)
            )
        self.aggregator.recalculate(recipe_id)
        return self.get_recipe(recipe_id)

    def analyze_recipe(self, recipe_id: UUID) -> NutritionAnalysis:
        """Return macro split, quality score and Nutri-Score per serving."""
        return analyze(self.get_recipe(recipe_id).snapshot)

    # Instructions

    def add_instruction(
        self, recipe_id: UUID, payload: dict[str, object], caller_id: str
    ) -> RecipeInstruction:
        """Add a step; without a step number it goes after the last one."""
        self._owned_recipe(recipe_id, caller_id)
        _validate_instruction_fields(payload, require_description=True)
        return self._store_instruction(recipe_id, payload)

    def update_instruction(
        self, instruction_id: UUID, payload: dict[str, object], caller_id: str
    ) -> RecipeInstruction:
        """Update a step."""
        instruction = self._get_instruction(instruction_id)
        self._owned_recipe(instruction.recipe_id, caller_id)
        data = _pick(payload, _INSTRUCTION_FIELDS)
        _validate_instruction_fields(data, require_description=False)
        step = data.get("step_number")
        if step is not None and step != instruction.step_number:
            self._ensure_step_free(instruction.recipe_id, int(step))
        return self.instruction_repository.update_instruction(instruction_id, data)

    def remove_instruction(self, instruction_id: UUID, caller_id: str) -> None:
        """Remove a step."""
        instruction = self._get_instruction(instruction_id)
        self._owned_recipe(instruction.recipe_id, caller_id)
        self.instruction_repository.delete_instruction(instruction_id)

    def list_instructions(self, recipe_id: UUID) -> list[RecipeInstruction]:
        """Return the steps of a recipe in order."""
        return self.instruction_repository.list_instructions(recipe_id)

    def reorder_instructions(
        self, recipe_id: UUID, steps: list[tuple[UUID, int]], caller_id: str
    ) -> list[RecipeInstruction]:
        """Assign new step numbers; the full sequence must stay unique."""
        self._owned_recipe(recipe_id, caller_id)
        current = {
            item.id: item.step_number
            for item in self.instruction_repository.list_instructions(recipe_id)
        }
        unknown = [str(item_id) for item_id, _ in steps if item_id not in current]
        if unknown:
            raise ValidationFailedError(
                "Only steps of this recipe can be reordered", details=unknown
            )
        if any(isinstance(step, bool) or step < 1 for _, step in steps):
            raise ValidationFailedError("step_number must be an integer >= 1")
        planned = {**current, **dict(steps)}
        if len(set(planned.values())) != len(planned):
            raise ValidationFailedError(f"Step numbers collide for recipe {recipe_id}")
        for instruction_id, step in steps:
            if current[instruction_id] != step:
                self.instruction_repository.update_instruction(
                    instruction_id, {"step_number": step}
                )
        return self.instruction_repository.list_instructions(recipe_id)

    def total_duration(self, recipe_id: UUID) -> float:
        """Sum the durations of all steps, in minutes."""
        return float(
            sum(
                item.duration_minutes or 0
                for item in self.instruction_repository.list_instructions(recipe_id)
            )
        )

    def equipment_list(self, recipe_id: UUID) -> list[str]:
        """Return the distinct equipment named by any step, sorted."""
        return sorted(
            {
                equipment
                for item in self.instruction_repository.list_instructions(recipe_id)
                for equipment in item.equipment
            }
        )

    # Images

    def add_image(
        self, recipe_id: UUID, payload: dict[str, object], caller_id: str
    ) -> RecipeImage:
        """Attach image metadata to a recipe."""
        self._owned_recipe(recipe_id, caller_id)
        url = str(payload.get("image_url") or "").strip()
        image_type = payload.get("image_type")
        errors = []
        if not url:
            errors.append("image_url is required")
        if image_type not in IMAGE_TYPES:
            errors.append(f"image_type must be one of {sorted(IMAGE_TYPES)}")
        if errors:
            raise ValidationFailedError("Invalid image", details=errors)
        is_primary = bool(payload.get("is_primary"))
        if is_primary:
            self._clear_primary(recipe_id)
        return self.image_repository.create_image(
            {
                "recipe_id": recipe_id,
                "instruction_id": payload.get("instruction_id"),
                "image_url": url,
                "image_type": image_type,
                "title": payload.get("title"),
                "alt_text": payload.get("alt_text"),
                "is_primary": is_primary,
                "sort_order": int(payload.get("sort_order") or 0),
                "uploaded_by": caller_id,
            }
        )

    def set_primary_image(self, image_id: UUID, caller_id: str) -> RecipeImage:
        """Make an image the only primary image of its recipe."""
        image = self._get_image(image_id)
        self._owned_recipe(image.recipe_id, caller_id)
        self._clear_primary(image.recipe_id)
        return self.image_repository.update_image(image_id, {"is_primary": True})

    def remove_image(self, image_id: UUID, caller_id: str) -> None:
        """Remove image metadata."""
        image = self._get_image(image_id)
        self._owned_recipe(image.recipe_id, caller_id)
        self.image_repository.delete_image(image_id)

    def list_images(self, recipe_id: UUID) -> list[RecipeImage]:
        """Return the images of a recipe."""
        return self.image_repository.list_images(recipe_id)

    # Listings

    def search_recipes(
        self, filters: RecipeFilters, page: PageRequest | None = None
    ) -> Page[Recipe]:
        """Return a page of recipes matching filters."""
        request = validate_page_request(page or PageRequest(), self.max_page_limit)
        items, total = self.recipe_repository.search_recipes(filters, request)
        return Page(items=items, pagination=Pagination.from_total(request, total))

    def list_public_recipes(self, page: PageRequest | None = None) -> Page[Recipe]:
        """Return public, verified recipes."""
        filters = RecipeFilters(is_public=True, is_verified=True)
        return self.search_recipes(filters, page)

    def list_user_recipes(
        self, user_id: str, page: PageRequest | None = None
    ) -> Page[Recipe]:
        """Return recipes created by user_id."""
        return self.search_recipes(RecipeFilters(created_by=user_id), page)

    # Helpers

    def _owned_recipe(self, recipe_id: UUID, caller_id: str) -> Recipe:
        recipe = self.get_recipe(recipe_id)
        if recipe.created_by != caller_id:
            raise NotAuthorizedError(f"Not authorized to modify recipe {recipe_id}")
        return recipe

    def _get_ingredient(self, ingredient_id: UUID) -> RecipeIngredient:
        ingredient = self.ingredient_repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient {ingredient_id} not found")
        return ingredient

    def _get_instruction(self, instruction_id: UUID) -> RecipeInstruction:
        instruction = self.instruction_repository.get_instruction(instruction_id)
        if instruction is None:
            raise NotFoundError(f"Instruction {instruction_id} not found")
        return instruction

    def _get_image(self, image_id: UUID) -> RecipeImage:
        image = self.image_repository.get_image(image_id)
        if image is None:
            raise NotFoundError(f"Image {image_id} not found")
        return image

    def _prepare_ingredient(
        self, payload: Mapping[str, object]
    ) -> tuple[dict[str, object], Food]:
        """Validate an ingredient line and resolve its food."""
        data = _pick(payload, _INGREDIENT_FIELDS)
        food_id = data.get("food_id")
        if food_id is None:
            raise ValidationFailedError("food_id is required")
        quantity = data.get("quantity")
        if not isinstance(quantity, int | float) or isinstance(quantity, bool):
            raise ValidationFailedError("quantity must be a number")
        if quantity <= 0:
            raise ValidationFailedError("quantity must be greater than 0")
        data["quantity"] = float(quantity)
        # Lenient mode stores unknown units as grams, the same multiplier of 1.
        data["unit"] = (
            parse_unit(data.get("unit"), strict=self.strict_units) or Unit.G
        )
        food = self.food_service.get_food(_as_uuid(food_id))
        data["food_id"] = food.id
        return data, food

    def _store_ingredient(
        self, recipe_id: UUID, data: dict[str, object], food: Food
    ) -> RecipeIngredient:
        contribution = self.calculator.compute(
            float(data["quantity"]),  # type: ignore[arg-type]
            data["unit"],  # type: ignore[arg-type]
            food,
            self.food_service.find_profile(food.id),
        )
        return self.ingredient_repository.create_ingredient(
            {
                "recipe_id": recipe_id,
                "is_optional": False,
                "sort_order": 0,
                **data,
                **contribution_payload(contribution),
            }
        )

    def _store_instruction(
        self, recipe_id: UUID, payload: Mapping[str, object]
    ) -> RecipeInstruction:
        data = _pick(payload, _INSTRUCTION_FIELDS)
        step = data.get("step_number")
        if step is None:
            existing = self.instruction_repository.list_instructions(recipe_id)
            step = max((item.step_number for item in existing), default=0) + 1
        else:
            self._ensure_step_free(recipe_id, int(step))
        return self.instruction_repository.create_instruction(
            {**data, "recipe_id": recipe_id, "step_number": int(step)}
        )

    def _ensure_step_free(self, recipe_id: UUID, step_number: int) -> None:
        taken = {
            item.step_number
            for item in self.instruction_repository.list_instructions(recipe_id)
        }
        if step_number in taken:
            raise ValidationFailedError(
                f"Step {step_number} already exists for recipe {recipe_id}"
            )

    def _clear_primary(self, recipe_id: UUID) -> None:
        for image in self.image_repository.list_images(recipe_id):
            if image.is_primary:
                self.image_repository.update_image(image.id, {"is_primary": False})

    def _validate_recipe_fields(self, data: dict[str, object]) -> None:
        errors: list[str] = []
        if "servings" in data:
            servings = data["servings"]
            if (
                isinstance(servings, bool)
                or not isinstance(servings, int | float)
                or servings < 1
            ):
                errors.append("servings must be a number >= 1")
        for name in ("prep_time_minutes", "cook_time_minutes"):
            value = data.get(name)
            if value is not None and (not isinstance(value, int | float) or value < 0):
                errors.append(f"{name} must be a non-negative number")
        difficulty = data.get("difficulty_level")
        if difficulty is not None and difficulty not in DIFFICULTY_LEVELS:
            errors.append(
                f"difficulty_level must be one of {sorted(DIFFICULTY_LEVELS)}"
            )
        for name, allowed in (("diet_types", DIET_TYPES), ("allergens", ALLERGENS)):
            unknown = [item for item in data.get(name) or [] if item not in allowed]
            if unknown:
                errors.append(f"unknown {name}: {', '.join(map(str, unknown))}")
        if "tags" in data:
            tags = [str(tag).strip().lower() for tag in data["tags"] or []]
            data["tags"] = [tag for tag in tags if tag]
        if errors:
            raise ValidationFailedError("Invalid recipe", details=errors)
        if data.get("category_id") is not None:
            category_id = _as_uuid(data["category_id"])
            if self.category_repository.get_category(category_id) is None:
                raise NotFoundError(f"Category {category_id} not found")
            data["category_id"] = category_id


def _validate_instruction_fields(
    data: Mapping[str, object], *, require_description: bool
) -> None:
    errors: list[str] = []
    if (require_description or "description" in data) and not str(
        data.get("description") or ""
    ).strip():
        errors.append("description is required")
    step = data.get("step_number")
    if step is not None and (not isinstance(step, int) or step < 1):
        errors.append("step_number must be an integer >= 1")
    duration = data.get("duration_minutes")
    if duration is not None and (not isinstance(duration, int | float) or duration < 0):
        errors.append("duration_minutes must be a non-negative number")
    temperature = data.get("temperature_celsius")
    if temperature is not None and (
        not isinstance(temperature, int | float)
        or not 0 <= temperature <= _MAX_TEMPERATURE_CELSIUS
    ):
        errors.append(
            f"temperature_celsius must be between 0 and {_MAX_TEMPERATURE_CELSIUS}"
        )
    technique = data.get("technique")
    if technique is not None and technique not in TECHNIQUES:
        errors.append(f"unknown technique: {technique}")
    if errors:
        raise ValidationFailedError("Invalid instruction", details=errors)


def _check_step_sequence(instructions: list[dict[str, object]]) -> None:
    """Reject step numbers that collide once steps are stored in order."""
    taken: set[int] = set()
    errors: list[str] = []
    for item in instructions:
        explicit = item.get("step_number")
        step = max(taken, default=0) + 1 if explicit is None else int(explicit)
        if step in taken:
            errors.append(f"step_number {step} is used more than once")
        taken.add(step)
    if errors:
        raise ValidationFailedError("Invalid instructions", details=errors)


def _pick(payload: Mapping[str, object], allowed: frozenset[str]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if key in allowed}


def _as_list(value: object, name: str) -> list[dict[str, object]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ValidationFailedError(f"{name} must be a list of objects")
    return value


def _as_uuid(value: object) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise ValidationFailedError(f"Invalid id: {value!r}") from None
