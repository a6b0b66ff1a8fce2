"""Shared test fixtures."""

from dataclasses import dataclass, field, fields, replace
from uuid import UUID, uuid4

import pytest

from recipe_manager.config import Settings
from recipe_manager.containers import AppContainer, wire_services
from recipe_manager.domain.categories import CategoryFilters, RecipeCategory
from recipe_manager.domain.foods import Food, NutrientProfile
from recipe_manager.domain.pagination import PageRequest
from recipe_manager.domain.recipes import (
    Recipe,
    RecipeFilters,
    RecipeImage,
    RecipeIngredient,
    RecipeInstruction,
)
from recipe_manager.services.categories import CategoryRepository, CategoryService
from recipe_manager.services.foods import FoodRepository, FoodService
from recipe_manager.services.recipes import (
    ImageRepository,
    IngredientRepository,
    InstructionRepository,
    RecipeRepository,
    RecipeService,
)

OWNER = "user-1"
OTHER_USER = "user-2"


def _known(model: type, payload: dict[str, object]) -> dict[str, object]:
    names = {item.name for item in fields(model)}
    return {key: value for key, value in payload.items() if key in names}


def _page(items: list, page: PageRequest) -> list:
    return items[page.offset : page.offset + page.limit]


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)
    profiles: dict[UUID, NutrientProfile] = field(default_factory=dict)
    profile_reads: int = 0

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def get_profile(self, food_id: UUID) -> NutrientProfile | None:
        self.profile_reads += 1
        return self.profiles.get(food_id)

    def create_food(self, payload: dict[str, object]) -> Food:
        food = Food(id=uuid4(), **_known(Food, payload))
        self.foods[food.id] = food
        return food

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food:
        food = replace(self.foods[food_id], **_known(Food, payload))
        self.foods[food_id] = food
        return food

    def upsert_profile(
        self, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        profile = NutrientProfile(food_id=food_id, **_known(NutrientProfile, payload))
        self.profiles[food_id] = profile
        return profile


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[UUID, Recipe] = field(default_factory=dict)

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        recipe = Recipe(id=uuid4(), **_known(Recipe, payload))
        self.recipes[recipe.id] = recipe
        return recipe

    def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        return self.recipes.get(recipe_id)

    def update_recipe(self, recipe_id: UUID, payload: dict[str, object]) -> Recipe:
        recipe = replace(self.recipes[recipe_id], **_known(Recipe, payload))
        self.recipes[recipe_id] = recipe
        return recipe

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)

    def search_recipes(
        self, filters: RecipeFilters, page: PageRequest
    ) -> tuple[list[Recipe], int]:
        matches = [
            recipe for recipe in self.recipes.values() if _matches(recipe, filters)
        ]
        matches.sort(key=lambda item: item.name, reverse=page.descending)
        return _page(matches, page), len(matches)

    def count_by_category(self, category_id: UUID, public_only: bool = False) -> int:
        return sum(
            1
            for recipe in self.recipes.values()
            if recipe.category_id == category_id
            and (recipe.is_public or not public_only)
        )


def _matches(recipe: Recipe, filters: RecipeFilters) -> bool:  # noqa: PLR0911
    if filters.search and filters.search.lower() not in recipe.name.lower():
        return False
    if filters.category_id is not None and recipe.category_id != filters.category_id:
        return False
    if filters.created_by is not None and recipe.created_by != filters.created_by:
        return False
    if filters.is_public is not None and recipe.is_public != filters.is_public:
        return False
    if filters.is_verified is not None and recipe.is_verified != filters.is_verified:
        return False
    if not set(filters.diet_types) <= set(recipe.diet_types):
        return False
    if not set(filters.tags) <= set(recipe.tags):
        return False
    if (
        filters.difficulty_level is not None
        and recipe.difficulty_level != filters.difficulty_level
    ):
        return False
    return filters.max_prep_time is None or (
        recipe.prep_time_minutes is not None
        and recipe.prep_time_minutes <= filters.max_prep_time
    )


@dataclass
class InMemoryIngredientRepository(IngredientRepository):
    """In-memory ingredient repository for tests."""

    ingredients: dict[UUID, RecipeIngredient] = field(default_factory=dict)

    def create_ingredient(self, payload: dict[str, object]) -> RecipeIngredient:
        ingredient = RecipeIngredient(id=uuid4(), **_known(RecipeIngredient, payload))
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def get_ingredient(self, ingredient_id: UUID) -> RecipeIngredient | None:
        return self.ingredients.get(ingredient_id)

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> RecipeIngredient:
        ingredient = replace(
            self.ingredients[ingredient_id], **_known(RecipeIngredient, payload)
        )
        self.ingredients[ingredient_id] = ingredient
        return ingredient

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        self.ingredients.pop(ingredient_id, None)

    def list_ingredients(self, recipe_id: UUID) -> list[RecipeIngredient]:
        rows = [
            item for item in self.ingredients.values() if item.recipe_id == recipe_id
        ]
        return sorted(rows, key=lambda item: (item.group_name or "", item.sort_order))

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        for item in self.list_ingredients(recipe_id):
            del self.ingredients[item.id]


@dataclass
class InMemoryInstructionRepository(InstructionRepository):
    """In-memory instruction repository for tests."""

    instructions: dict[UUID, RecipeInstruction] = field(default_factory=dict)

    def create_instruction(self, payload: dict[str, object]) -> RecipeInstruction:
        instruction = RecipeInstruction(
            id=uuid4(), **_known(RecipeInstruction, payload)
        )
        self.instructions[instruction.id] = instruction
        return instruction

    def get_instruction(self, instruction_id: UUID) -> RecipeInstruction | None:
        return self.instructions.get(instruction_id)

    def update_instruction(
        self, instruction_id: UUID, payload: dict[str, object]
    ) -> RecipeInstruction:
        instruction = replace(
            self.instructions[instruction_id], **_known(RecipeInstruction, payload)
        )
        self.instructions[instruction_id] = instruction
        return instruction

    def delete_instruction(self, instruction_id: UUID) -> None:
        self.instructions.pop(instruction_id, None)

    def list_instructions(self, recipe_id: UUID) -> list[RecipeInstruction]:
        rows = [
            item for item in self.instructions.values() if item.recipe_id == recipe_id
        ]
        return sorted(rows, key=lambda item: item.step_number)

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        for item in self.list_instructions(recipe_id):
            del self.instructions[item.id]


@dataclass
class InMemoryImageRepository(ImageRepository):
    """In-memory image repository for tests."""

    images: dict[UUID, RecipeImage] = field(default_factory=dict)

    def create_image(self, payload: dict[str, object]) -> RecipeImage:
        image = RecipeImage(id=uuid4(), **_known(RecipeImage, payload))
        self.images[image.id] = image
        return image

    def get_image(self, image_id: UUID) -> RecipeImage | None:
        return self.images.get(image_id)

    def update_image(self, image_id: UUID, payload: dict[str, object]) -> RecipeImage:
        image = replace(self.images[image_id], **_known(RecipeImage, payload))
        self.images[image_id] = image
        return image

    def delete_image(self, image_id: UUID) -> None:
        self.images.pop(image_id, None)

    def list_images(self, recipe_id: UUID) -> list[RecipeImage]:
        rows = [item for item in self.images.values() if item.recipe_id == recipe_id]
        return sorted(rows, key=lambda item: item.sort_order)

    def delete_for_recipe(self, recipe_id: UUID) -> None:
        for item in self.list_images(recipe_id):
            del self.images[item.id]


@dataclass
class InMemoryCategoryRepository(CategoryRepository):
    """In-memory category repository for tests."""

    categories: dict[UUID, RecipeCategory] = field(default_factory=dict)
    writes: int = 0

    def create_category(self, payload: dict[str, object]) -> RecipeCategory:
        category = RecipeCategory(id=uuid4(), **_known(RecipeCategory, payload))
        self.categories[category.id] = category
        self.writes += 1
        return category

    def get_category(self, category_id: UUID) -> RecipeCategory | None:
        return self.categories.get(category_id)

    def get_by_slug(self, slug: str) -> RecipeCategory | None:
        return next(
            (item for item in self.categories.values() if item.slug == slug), None
        )

    def update_category(
        self, category_id: UUID, payload: dict[str, object]
    ) -> RecipeCategory:
        category = replace(
            self.categories[category_id], **_known(RecipeCategory, payload)
        )
        self.categories[category_id] = category
        self.writes += 1
        return category

    def delete_category(self, category_id: UUID) -> None:
        self.categories.pop(category_id, None)
        self.writes += 1

    def list_children(
        self, parent_id: UUID | None, active_only: bool = True
    ) -> list[RecipeCategory]:
        rows = [
            item
            for item in self.categories.values()
            if item.parent_id == parent_id and (item.is_active or not active_only)
        ]
        return sorted(rows, key=lambda item: (item.sort_order, item.name))

    def count_children(self, parent_id: UUID) -> int:
        return sum(
            1 for item in self.categories.values() if item.parent_id == parent_id
        )

    def list_categories(self, active_only: bool = True) -> list[RecipeCategory]:
        rows = [
            item
            for item in self.categories.values()
            if item.is_active or not active_only
        ]
        return sorted(rows, key=lambda item: item.path)

    def search_categories(
        self, filters: CategoryFilters, page: PageRequest
    ) -> tuple[list[RecipeCategory], int]:
        rows = [
            item
            for item in self.list_categories(active_only=False)
            if (filters.is_active is None or item.is_active == filters.is_active)
            and (not filters.search or filters.search.lower() in item.name.lower())
            and (not filters.filter_by_parent or item.parent_id == filters.parent_id)
            and (filters.level is None or item.level == filters.level)
        ]
        rows.sort(key=lambda item: (item.sort_order, item.name))
        return _page(rows, page), len(rows)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def ingredient_repository() -> InMemoryIngredientRepository:
    return InMemoryIngredientRepository()


@pytest.fixture
def category_repository() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    recipe_repository: InMemoryRecipeRepository,
    ingredient_repository: InMemoryIngredientRepository,
    category_repository: InMemoryCategoryRepository,
) -> AppContainer:
    return wire_services(
        settings,
        food_repository=food_repository,
        recipe_repository=recipe_repository,
        ingredient_repository=ingredient_repository,
        instruction_repository=InMemoryInstructionRepository(),
        image_repository=InMemoryImageRepository(),
        category_repository=category_repository,
    )


@pytest.fixture
def food_service(container: AppContainer) -> FoodService:
    return container.food_service


@pytest.fixture
def recipe_service(container: AppContainer) -> RecipeService:
    return container.recipe_service


@pytest.fixture
def category_service(container: AppContainer) -> CategoryService:
    return container.category_service


@pytest.fixture
def flour(food_service: FoodService) -> Food:
    food = food_service.create_food({"name": "Flour", "serving_size_g": 30.0})
    food_service.set_profile(
        food.id,
        {
            "calories": 364.0,
            "protein_g": 10.0,
            "carbohydrates_g": 76.0,
            "sugars_g": 0.3,
            "fat_g": 1.0,
            "fiber_g": 2.7,
            "sodium_mg": 2.0,
        },
    )
    return food


@pytest.fixture
def egg(food_service: FoodService) -> Food:
    food = food_service.create_food({"name": "Egg", "serving_size_g": 50.0})
    food_service.set_profile(
        food.id,
        {"calories": 143.0, "protein_g": 12.6, "fat_g": 9.5, "sodium_mg": 142.0},
    )
    return food
