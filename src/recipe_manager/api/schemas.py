"""Pydantic request bodies for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field


class FoodCreate(BaseModel):
    """New food payload."""

    name: str
    serving_size_g: float | None = None
    category_id: str | None = None
    brand: str | None = None


class FoodUpdate(BaseModel):
    """Partial food update."""

    name: str | None = None
    serving_size_g: float | None = None
    category_id: str | None = None
    brand: str | None = None


class NutrientProfileIn(BaseModel):
    """Per-100g nutrient amounts."""

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


class RecipeCreate(BaseModel):
    """New recipe payload."""

    name: str
    servings: float
    description: str | None = None
    category_id: UUID | None = None
    is_public: bool = False
    difficulty_level: str = "medium"
    prep_time_minutes: float | None = None
    cook_time_minutes: float | None = None
    cuisine_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    diet_types: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    """Partial recipe update."""

    name: str | None = None
    servings: float | None = None
    description: str | None = None
    category_id: UUID | None = None
    is_public: bool | None = None
    difficulty_level: str | None = None
    prep_time_minutes: float | None = None
    cook_time_minutes: float | None = None
    cuisine_type: str | None = None
    tags: list[str] | None = None
    diet_types: list[str] | None = None
    allergens: list[str] | None = None


class IngredientIn(BaseModel):
    """Ingredient line payload."""

    food_id: UUID
    quantity: float
    unit: str
    preparation_note: str | None = None
    is_optional: bool = False
    group_name: str | None = None
    sort_order: int = 0


class IngredientUpdate(BaseModel):
    """Partial ingredient line update."""

    food_id: UUID | None = None
    quantity: float | None = None
    unit: str | None = None
    preparation_note: str | None = None
    is_optional: bool | None = None
    group_name: str | None = None
    sort_order: int | None = None


class InstructionIn(BaseModel):
    """Instruction payload; step_number defaults to after the last step."""

    description: str
    step_number: int | None = None
    title: str | None = None
    duration_minutes: float | None = None
    temperature_celsius: float | None = None
    technique: str | None = None
    equipment: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    warning: str | None = None
    is_critical: bool = False
    group_name: str | None = None


class InstructionUpdate(BaseModel):
    """Partial instruction update."""

    description: str | None = None
    step_number: int | None = None
    title: str | None = None
    duration_minutes: float | None = None
    temperature_celsius: float | None = None
    technique: str | None = None
    equipment: list[str] | None = None
    tips: list[str] | None = None
    warning: str | None = None
    is_critical: bool | None = None
    group_name: str | None = None


class StepOrder(BaseModel):
    """One instruction and its new step number."""

    id: UUID
    step_number: int


class InstructionReorder(BaseModel):
    """New step numbers for instructions of one recipe."""

    steps: list[StepOrder]


class ImageIn(BaseModel):
    """Image metadata payload."""

    image_url: str
    image_type: str
    instruction_id: UUID | None = None
    title: str | None = None
    alt_text: str | None = None
    is_primary: bool = False
    sort_order: int = 0


class CompleteRecipeIn(RecipeCreate):
    """Recipe with its ingredients and instructions."""

    ingredients: list[IngredientIn] = Field(default_factory=list)
    instructions: list[InstructionIn] = Field(default_factory=list)


class CategoryCreate(BaseModel):
    """New category payload."""

    name: str
    slug: str | None = None
    description: str | None = None
    parent_id: UUID | None = None
    icon_name: str | None = None
    color_hex: str | None = None
    sort_order: int = 0
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """Partial category update; an explicit null parent_id makes it a root."""

    name: str | None = None
    slug: str | None = None
    description: str | None = None
    parent_id: UUID | None = None
    icon_name: str | None = None
    color_hex: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


class CategoryOrder(BaseModel):
    """One sibling and its new sort order."""

    id: UUID
    sort_order: int


class CategoryReorder(BaseModel):
    """New sort orders for the children of parent_id."""

    parent_id: UUID | None = None
    orders: list[CategoryOrder]
