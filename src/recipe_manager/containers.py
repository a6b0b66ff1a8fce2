"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import Client, create_client

from recipe_manager.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from recipe_manager.adapters.supabase_food_repository import SupabaseFoodRepository
from recipe_manager.adapters.supabase_image_repository import SupabaseImageRepository
from recipe_manager.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from recipe_manager.adapters.supabase_instruction_repository import (
    SupabaseInstructionRepository,
)
from recipe_manager.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from recipe_manager.config import Settings
from recipe_manager.services.aggregation import RecipeNutritionAggregator
from recipe_manager.services.cache import InMemoryCache
from recipe_manager.services.categories import CategoryRepository, CategoryService
from recipe_manager.services.foods import FoodRepository, FoodService
from recipe_manager.services.recipes import (
    ImageRepository,
    IngredientRepository,
    InstructionRepository,
    RecipeRepository,
    RecipeService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    recipe_service: RecipeService
    category_service: CategoryService
    aggregator: RecipeNutritionAggregator


def wire_services(  # noqa: PLR0913
    settings: Settings,
    food_repository: FoodRepository,
    recipe_repository: RecipeRepository,
    ingredient_repository: IngredientRepository,
    instruction_repository: InstructionRepository,
    image_repository: ImageRepository,
    category_repository: CategoryRepository,
) -> AppContainer:
    """Build the services on top of the given repositories."""
    food_service = FoodService(
        repository=food_repository,
        cache=InMemoryCache(),
        ttl_seconds=settings.profile_cache_ttl_seconds,
    )
    aggregator = RecipeNutritionAggregator(
        recipe_repository=recipe_repository,
        ingredient_repository=ingredient_repository,
    )
    recipe_service = RecipeService(
        recipe_repository=recipe_repository,
        ingredient_repository=ingredient_repository,
        instruction_repository=instruction_repository,
        image_repository=image_repository,
        category_repository=category_repository,
        food_service=food_service,
        aggregator=aggregator,
        strict_units=settings.strict_units,
        max_page_limit=settings.max_page_limit,
    )
    category_service = CategoryService(
        repository=category_repository,
        recipe_repository=recipe_repository,
        max_page_limit=settings.max_page_limit,
    )
    return AppContainer(
        settings=settings,
        food_service=food_service,
        recipe_service=recipe_service,
        category_service=category_service,
        aggregator=aggregator,
    )


def build_supabase_container(settings: Settings, client: Client) -> AppContainer:
    """Wire the services onto Supabase repositories sharing one client."""
    return wire_services(
        settings,
        food_repository=SupabaseFoodRepository(client),
        recipe_repository=SupabaseRecipeRepository(client),
        ingredient_repository=SupabaseIngredientRepository(client),
        instruction_repository=SupabaseInstructionRepository(client),
        image_repository=SupabaseImageRepository(client),
        category_repository=SupabaseCategoryRepository(client),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return build_supabase_container(resolved_settings, supabase_client)
