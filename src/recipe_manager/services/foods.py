"""Services for foods and their nutrient profiles."""

import logging
from dataclasses import dataclass
from typing import Protocol, cast
from uuid import UUID

from recipe_manager.domain.errors import NotFoundError, ValidationFailedError
from recipe_manager.domain.foods import PROFILE_NUTRIENT_FIELDS, Food, NutrientProfile
from recipe_manager.services.cache import Cache

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for foods and nutrient profiles."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def get_profile(self, food_id: UUID) -> NutrientProfile | None:
        """Return the nutrient profile of a food, if present."""

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food:
        """Update a food and return it."""

    def upsert_profile(
        self, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Create or replace the single nutrient profile of a food."""


@dataclass
class FoodService:
    """Application service for food lookups and edits."""

    repository: FoodRepository
    cache: Cache
    ttl_seconds: int = 3600

    def find_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        food = self.cache.get_or_load(
            _food_key(food_id),
            lambda: self.repository.get_food(food_id),
            self.ttl_seconds,
        )
        return cast(Food | None, food)

    def get_food(self, food_id: UUID) -> Food:
        """Return a food by id or raise ``NotFoundError``."""
        food = self.find_food(food_id)
        if food is None:
            raise NotFoundError(f"Food {food_id} not found")
        return food

    def find_profile(self, food_id: UUID) -> NutrientProfile | None:
        """Return the nutrient profile of a food, if present."""
        profile = self.cache.get_or_load(
            _profile_key(food_id),
            lambda: self.repository.get_profile(food_id),
            self.ttl_seconds,
        )
        return cast(NutrientProfile | None, profile)

    def create_food(self, payload: dict[str, object]) -> Food:
        """Validate and create a food."""
        _validate_food_payload(payload, require_name=True)
        food = self.repository.create_food(payload)
        _logger.info("Created food %s (%s)", food.id, food.name)
        return food

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food:
        """Validate and update a food.

        Ingredient contributions already cached on recipes are not touched;
        callers refresh recipes explicitly.
        """
        self.get_food(food_id)
        _validate_food_payload(payload, require_name=False)
        food = self.repository.update_food(food_id, payload)
        self.cache.invalidate(_food_key(food_id))
        return food

    def set_profile(
        self, food_id: UUID, payload: dict[str, object]
    ) -> NutrientProfile:
        """Create or replace the nutrient profile of a food."""
        self.get_food(food_id)
        _validate_profile_payload(payload)
        profile = self.repository.upsert_profile(food_id, payload)
        self.cache.invalidate(_profile_key(food_id))
        _logger.info("Stored nutrient profile for food %s", food_id)
        return profile


def _food_key(food_id: UUID) -> str:
    return f"food:{food_id}"


def _profile_key(food_id: UUID) -> str:
    return f"profile:{food_id}"


def _validate_food_payload(payload: dict[str, object], *, require_name: bool) -> None:
    errors: list[str] = []
    name = payload.get("name")
    if (require_name or "name" in payload) and not str(name or "").strip():
        errors.append("name is required")
    serving_size = payload.get("serving_size_g")
    if serving_size is not None and (
        not isinstance(serving_size, int | float) or serving_size <= 0
    ):
        errors.append("serving_size_g must be a positive number")
    if errors:
        raise ValidationFailedError("Invalid food", details=errors)


def _validate_profile_payload(payload: dict[str, object]) -> None:
    errors: list[str] = []
    for name in PROFILE_NUTRIENT_FIELDS:
        value = payload.get(name)
        if value is None:
            continue
        if not isinstance(value, int | float) or value < 0:
            errors.append(f"{name} must be a non-negative number")
    confidence = payload.get("confidence_score")
    if confidence is not None and (
        not isinstance(confidence, int | float) or not 0 <= confidence <= 1
    ):
        errors.append("confidence_score must be between 0 and 1")
    if errors:
        raise ValidationFailedError("Invalid nutrient profile", details=errors)
