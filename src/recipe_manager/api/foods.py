"""Food and nutrient profile endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from recipe_manager.api.deps import get_container, require_user
from recipe_manager.api.schemas import (  # noqa: TC001
    FoodCreate,
    FoodUpdate,
    NutrientProfileIn,
)
from recipe_manager.domain.foods import Food, NutrientProfile  # noqa: TC001

router = APIRouter(prefix="/foods", tags=["foods"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    body: FoodCreate, request: Request, user_id: str = Depends(require_user)
) -> Food:
    """Create a food."""
    service = get_container(request).food_service
    return service.create_food({**body.model_dump(), "created_by": user_id})


@router.get("/{food_id}")
async def get_food(food_id: UUID, request: Request) -> Food:
    """Return a food."""
    return get_container(request).food_service.get_food(food_id)


@router.patch("/{food_id}", dependencies=[Depends(require_user)])
async def update_food(food_id: UUID, body: FoodUpdate, request: Request) -> Food:
    """Update a food. Recipes using it keep their values until refreshed."""
    service = get_container(request).food_service
    return service.update_food(food_id, body.model_dump(exclude_unset=True))


@router.get("/{food_id}/profile")
async def get_profile(food_id: UUID, request: Request) -> NutrientProfile:
    """Return the per-100g nutrient profile of a food."""
    service = get_container(request).food_service
    service.get_food(food_id)
    profile = service.find_profile(food_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return profile


@router.put("/{food_id}/profile", dependencies=[Depends(require_user)])
async def set_profile(
    food_id: UUID, body: NutrientProfileIn, request: Request
) -> NutrientProfile:
    """Create or replace the nutrient profile of a food."""
    return get_container(request).food_service.set_profile(
        food_id, body.model_dump()
    )
