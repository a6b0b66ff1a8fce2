"""Domain models for recipes and their parts."""

from dataclasses import dataclass, field
from uuid import UUID

from recipe_manager.domain.categories import RecipeCategory
from recipe_manager.domain.foods import Food
from recipe_manager.domain.nutrition import NutrientContribution, PerServingSnapshot
from recipe_manager.domain.units import Unit

DIFFICULTY_LEVELS = frozenset({"easy", "medium", "hard"})

DIET_TYPES = frozenset(
    {
        "vegetarian",
        "vegan",
        "gluten_free",
        "dairy_free",
        "keto",
        "paleo",
        "low_carb",
        "low_fat",
    }
)

ALLERGENS = frozenset(
    {"gluten", "milk", "eggs", "nuts", "peanuts", "soy", "fish", "shellfish", "sesame"}
)

TECHNIQUES = frozenset(
    {
        "mix",
        "stir",
        "whisk",
        "blend",
        "chop",
        "dice",
        "slice",
        "mince",
        "saute",
        "fry",
        "boil",
        "simmer",
        "bake",
        "roast",
        "grill",
        "steam",
        "marinate",
        "rest",
        "chill",
        "freeze",
        "season",
        "knead",
        "fold",
    }
)

IMAGE_TYPES = frozenset(
    {"cover", "ingredient", "step", "final_result", "process", "plating", "variation"}
)

DEFAULT_INGREDIENT_GROUP = "Main Ingredients"


@dataclass(frozen=True)
class Recipe:
    """Represents a recipe with its cached per-serving nutrition."""

    id: UUID
    name: str
    servings: float
    created_by: str
    description: str | None = None
    category_id: UUID | None = None
    is_public: bool = False
    is_verified: bool = False
    difficulty_level: str = "medium"
    prep_time_minutes: float | None = None
    cook_time_minutes: float | None = None
    cuisine_type: str | None = None
    tags: list[str] = field(default_factory=list)
    diet_types: list[str] = field(default_factory=list)
    allergens: list[str] = field(default_factory=list)
    calories_per_serving: float = 0.0
    protein_per_serving_g: float = 0.0
    carbs_per_serving_g: float = 0.0
    fat_per_serving_g: float = 0.0
    fiber_per_serving_g: float = 0.0
    sugar_per_serving_g: float = 0.0
    sodium_per_serving_mg: float = 0.0

    @property
    def total_time_minutes(self) -> float | None:
        """Return prep plus cook time when either is known."""
        if self.prep_time_minutes is None and self.cook_time_minutes is None:
            return None
        return (self.prep_time_minutes or 0.0) + (self.cook_time_minutes or 0.0)

    @property
    def snapshot(self) -> PerServingSnapshot:
        """Return the cached per-serving nutrition as a snapshot."""
        return PerServingSnapshot(
            calories=self.calories_per_serving,
            protein_g=self.protein_per_serving_g,
            carbs_g=self.carbs_per_serving_g,
            fat_g=self.fat_per_serving_g,
            fiber_g=self.fiber_per_serving_g,
            sugar_g=self.sugar_per_serving_g,
            sodium_mg=self.sodium_per_serving_mg,
        )


@dataclass(frozen=True)
class RecipeIngredient:
    """One ingredient line of a recipe with its cached contribution."""

    id: UUID
    recipe_id: UUID
    food_id: UUID
    quantity: float
    unit: Unit
    preparation_note: str | None = None
    is_optional: bool = False
    group_name: str | None = None
    sort_order: int = 0
    calories_calculated: float | None = None
    protein_calculated_g: float | None = None
    carbs_calculated_g: float | None = None
    fat_calculated_g: float | None = None
    fiber_calculated_g: float | None = None
    sugar_calculated_g: float | None = None
    sodium_calculated_mg: float | None = None

    @property
    def contribution(self) -> NutrientContribution:
        """Return the cached contribution, reading missing values as zero."""
        return NutrientContribution(
            calories=self.calories_calculated or 0.0,
            protein_g=self.protein_calculated_g or 0.0,
            carbs_g=self.carbs_calculated_g or 0.0,
            fat_g=self.fat_calculated_g or 0.0,
            fiber_g=self.fiber_calculated_g or 0.0,
            sugar_g=self.sugar_calculated_g or 0.0,
            sodium_mg=self.sodium_calculated_mg or 0.0,
        )

    def display_text(self) -> str:
        """Return a human readable line such as '2 cup sifted (optional)'."""
        text = f"{self.quantity:g} {self.unit.value}"
        if self.preparation_note:
            text += f" {self.preparation_note}"
        if self.is_optional:
            text += " (optional)"
        return text


def contribution_payload(contribution: NutrientContribution) -> dict[str, float]:
    """Map a contribution onto the cached ingredient columns."""
    return {
        "calories_calculated": contribution.calories,
        "protein_calculated_g": contribution.protein_g,
        "carbs_calculated_g": contribution.carbs_g,
        "fat_calculated_g": contribution.fat_g,
        "fiber_calculated_g": contribution.fiber_g,
        "sugar_calculated_g": contribution.sugar_g,
        "sodium_calculated_mg": contribution.sodium_mg,
    }


def snapshot_payload(snapshot: PerServingSnapshot) -> dict[str, float]:
    """Map a per-serving snapshot onto the cached recipe columns."""
    return {
        "calories_per_serving": snapshot.calories,
        "protein_per_serving_g": snapshot.protein_g,
        "carbs_per_serving_g": snapshot.carbs_g,
        "fat_per_serving_g": snapshot.fat_g,
        "fiber_per_serving_g": snapshot.fiber_g,
        "sugar_per_serving_g": snapshot.sugar_g,
        "sodium_per_serving_mg": snapshot.sodium_mg,
    }


@dataclass(frozen=True)
class RecipeInstruction:
    """One numbered preparation step."""

    id: UUID
    recipe_id: UUID
    step_number: int
    description: str
    title: str | None = None
    duration_minutes: float | None = None
    temperature_celsius: float | None = None
    technique: str | None = None
    equipment: list[str] = field(default_factory=list)
    tips: list[str] = field(default_factory=list)
    warning: str | None = None
    is_critical: bool = False
    group_name: str | None = None

    def full_description(self) -> str:
        """Return the description with duration, temperature and warning."""
        text = self.description
        if self.duration_minutes:
            text += f" ({self.duration_minutes:g} minutes)"
        if self.temperature_celsius:
            text += f" at {self.temperature_celsius:g}°C"
        if self.warning:
            text += f" Warning: {self.warning}"
        return text


@dataclass(frozen=True)
class RecipeImage:
    """Image metadata attached to a recipe or one of its steps."""

    id: UUID
    recipe_id: UUID
    image_url: str
    image_type: str
    uploaded_by: str
    instruction_id: UUID | None = None
    title: str | None = None
    alt_text: str | None = None
    is_primary: bool = False
    sort_order: int = 0


@dataclass(frozen=True)
class IngredientLine:
    """Ingredient joined with the food it references."""

    ingredient: RecipeIngredient
    food: Food | None


@dataclass(frozen=True)
class RecipeDetail:
    """Recipe with ingredients, instructions, images and category."""

    recipe: Recipe
    ingredients: list[IngredientLine]
    instructions: list[RecipeInstruction]
    images: list[RecipeImage]
    category: RecipeCategory | None


@dataclass(frozen=True)
class RecipeFilters:
    """Search criteria for recipe listings."""

    search: str | None = None
    category_id: UUID | None = None
    created_by: str | None = None
    is_public: bool | None = None
    is_verified: bool | None = None
    diet_types: list[str] = field(default_factory=list)
    difficulty_level: str | None = None
    max_prep_time: float | None = None
    tags: list[str] = field(default_factory=list)
