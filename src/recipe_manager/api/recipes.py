"""Recipe endpoints, including ingredients, instructions and images."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, Response, status

from recipe_manager.api.deps import get_container, page_request, require_user
from recipe_manager.api.schemas import (  # noqa: TC001
    CompleteRecipeIn,
    ImageIn,
    IngredientIn,
    IngredientUpdate,
    InstructionIn,
    InstructionReorder,
    InstructionUpdate,
    RecipeCreate,
    RecipeUpdate,
)
from recipe_manager.domain.nutrition import NutritionAnalysis  # noqa: TC001
from recipe_manager.domain.pagination import Page, PageRequest
from recipe_manager.domain.recipes import (  # noqa: TC001
    Recipe,
    RecipeDetail,
    RecipeFilters,
    RecipeImage,
    RecipeIngredient,
    RecipeInstruction,
)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _page_body(page: Page[Recipe]) -> dict[str, object]:
    return {"items": page.items, "pagination": page.pagination}


@router.get("")
async def search_recipes(  # noqa: PLR0913
    request: Request,
    search: str | None = None,
    category_id: UUID | None = None,
    created_by: str | None = None,
    is_public: bool | None = None,
    is_verified: bool | None = None,
    diet_types: list[str] | None = Query(default=None),
    difficulty_level: str | None = None,
    max_prep_time: float | None = None,
    tags: list[str] | None = Query(default=None),
    page: PageRequest = Depends(page_request),
) -> dict[str, object]:
    """Search recipes with filters and pagination."""
    filters = RecipeFilters(
        search=search,
        category_id=category_id,
        created_by=created_by,
        is_public=is_public,
        is_verified=is_verified,
        diet_types=diet_types or [],
        difficulty_level=difficulty_level,
        max_prep_time=max_prep_time,
        tags=tags or [],
    )
    service = get_container(request).recipe_service
    return _page_body(service.search_recipes(filters, page))


@router.get("/public")
async def public_recipes(
    request: Request, page: PageRequest = Depends(page_request)
) -> dict[str, object]:
    """Return public, verified recipes."""
    service = get_container(request).recipe_service
    return _page_body(service.list_public_recipes(page))


@router.get("/mine")
async def my_recipes(
    request: Request,
    user_id: str = Depends(require_user),
    page: PageRequest = Depends(page_request),
) -> dict[str, object]:
    """Return the caller's recipes."""
    service = get_container(request).recipe_service
    return _page_body(service.list_user_recipes(user_id, page))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    body: RecipeCreate, request: Request, user_id: str = Depends(require_user)
) -> Recipe:
    """Create an empty recipe."""
    service = get_container(request).recipe_service
    return service.create_recipe(body.model_dump(), user_id)


@router.post("/complete", status_code=status.HTTP_201_CREATED)
async def create_complete_recipe(
    body: CompleteRecipeIn, request: Request, user_id: str = Depends(require_user)
) -> RecipeDetail:
    """Create a recipe with its ingredients and instructions."""
    service = get_container(request).recipe_service
    return await service.create_complete_recipe(body.model_dump(), user_id)


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: UUID, request: Request) -> RecipeDetail:
    """Return a recipe with ingredients, instructions, images and category."""
    return await get_container(request).recipe_service.get_recipe_detail(recipe_id)


@router.patch("/{recipe_id}")
async def update_recipe(
    recipe_id: UUID,
    body: RecipeUpdate,
    request: Request,
    user_id: str = Depends(require_user),
) -> Recipe:
    """Update recipe fields."""
    service = get_container(request).recipe_service
    return service.update_recipe(
        recipe_id, body.model_dump(exclude_unset=True), user_id
    )


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Delete a recipe and everything attached to it."""
    get_container(request).recipe_service.delete_recipe(recipe_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{recipe_id}/refresh-nutrition")
async def refresh_nutrition(
    recipe_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Recipe:
    """Recompute ingredient nutrition from current food profiles."""
    service = get_container(request).recipe_service
    return service.refresh_nutrition(recipe_id, user_id)


@router.get("/{recipe_id}/analysis")
async def analyze_recipe(recipe_id: UUID, request: Request) -> NutritionAnalysis:
    """Return macro split, quality score and Nutri-Score estimate."""
    return get_container(request).recipe_service.analyze_recipe(recipe_id)


@router.get("/{recipe_id}/ingredients")
async def list_ingredients(
    recipe_id: UUID, request: Request, grouped: bool = False
) -> dict[str, object]:
    """Return ingredient lines, optionally keyed by group."""
    service = get_container(request).recipe_service
    if grouped:
        return {"groups": service.group_ingredients(recipe_id)}
    return {"ingredients": service.list_ingredients(recipe_id)}


@router.post("/{recipe_id}/ingredients", status_code=status.HTTP_201_CREATED)
async def add_ingredient(
    recipe_id: UUID,
    body: IngredientIn,
    request: Request,
    user_id: str = Depends(require_user),
) -> RecipeIngredient:
    """Add an ingredient line."""
    service = get_container(request).recipe_service
    return service.add_ingredient(recipe_id, body.model_dump(), user_id)


@router.patch("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: UUID,
    body: IngredientUpdate,
    request: Request,
    user_id: str = Depends(require_user),
) -> RecipeIngredient:
    """Update an ingredient line."""
    service = get_container(request).recipe_service
    return service.update_ingredient(
        ingredient_id, body.model_dump(exclude_unset=True), user_id
    )


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_ingredient(
    ingredient_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Remove an ingredient line."""
    get_container(request).recipe_service.remove_ingredient(ingredient_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{recipe_id}/instructions")
async def list_instructions(
    recipe_id: UUID, request: Request
) -> dict[str, list[RecipeInstruction]]:
    """Return the steps of a recipe in order."""
    service = get_container(request).recipe_service
    return {"instructions": service.list_instructions(recipe_id)}


@router.post("/{recipe_id}/instructions", status_code=status.HTTP_201_CREATED)
async def add_instruction(
    recipe_id: UUID,
    body: InstructionIn,
    request: Request,
    user_id: str = Depends(require_user),
) -> RecipeInstruction:
    """Add a step."""
    service = get_container(request).recipe_service
    return service.add_instruction(
        recipe_id, body.model_dump(exclude_none=True), user_id
    )


@router.put("/{recipe_id}/instructions/reorder")
async def reorder_instructions(
    recipe_id: UUID,
    body: InstructionReorder,
    request: Request,
    user_id: str = Depends(require_user),
) -> dict[str, list[RecipeInstruction]]:
    """Assign new step numbers."""
    service = get_container(request).recipe_service
    steps = [(item.id, item.step_number) for item in body.steps]
    return {"instructions": service.reorder_instructions(recipe_id, steps, user_id)}


@router.get("/{recipe_id}/instructions/summary")
async def instruction_summary(recipe_id: UUID, request: Request) -> dict[str, object]:
    """Return total step duration and the equipment needed."""
    service = get_container(request).recipe_service
    return {
        "total_duration_minutes": service.total_duration(recipe_id),
        "equipment": service.equipment_list(recipe_id),
    }


@router.patch("/instructions/{instruction_id}")
async def update_instruction(
    instruction_id: UUID,
    body: InstructionUpdate,
    request: Request,
    user_id: str = Depends(require_user),
) -> RecipeInstruction:
    """Update a step."""
    service = get_container(request).recipe_service
    return service.update_instruction(
        instruction_id, body.model_dump(exclude_unset=True), user_id
    )


@router.delete(
    "/instructions/{instruction_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_instruction(
    instruction_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Remove a step."""
    get_container(request).recipe_service.remove_instruction(instruction_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{recipe_id}/images")
async def list_images(
    recipe_id: UUID, request: Request
) -> dict[str, list[RecipeImage]]:
    """Return the images of a recipe."""
    return {"images": get_container(request).recipe_service.list_images(recipe_id)}


@router.post("/{recipe_id}/images", status_code=status.HTTP_201_CREATED)
async def add_image(
    recipe_id: UUID,
    body: ImageIn,
    request: Request,
    user_id: str = Depends(require_user),
) -> RecipeImage:
    """Attach image metadata."""
    service = get_container(request).recipe_service
    return service.add_image(recipe_id, body.model_dump(), user_id)


@router.post("/images/{image_id}/primary")
async def set_primary_image(
    image_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> RecipeImage:
    """Make an image the primary image of its recipe."""
    return get_container(request).recipe_service.set_primary_image(image_id, user_id)


@router.delete("/images/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_image(
    image_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Remove image metadata."""
    get_container(request).recipe_service.remove_image(image_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
