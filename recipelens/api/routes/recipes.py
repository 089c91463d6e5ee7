"""Recipe generation and ingredient search endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from recipelens.api.dependencies import get_recipe_service
from recipelens.middleware.rate_limit import rate_limit_dependency
from recipelens.models.recipe import (
    FindRecipesRequest,
    GenerateRecipeRequest,
    RecipeListResponse,
    RecipeResponse,
)
from recipelens.services.recipe_service import RecipeService
from recipelens.utils.exceptions import ValidationError
from recipelens.utils.validators import validate_cuisine, validate_dish_name, validate_ingredients_list

logger = logging.getLogger(__name__)
router = APIRouter(tags=["recipes"])


@router.post("/generate-recipe", response_model=RecipeResponse, response_model_exclude_none=True)
async def generate_recipe(
    request: Request,
    body: GenerateRecipeRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """
    Generate a recipe for a dish name.

    Falls back to a generic recipe (with a `note`) when the recipe API fails.
    """
    logger.info(
        "Route /generate-recipe called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/generate-recipe",
            "params": {"dishName": (body.dishName or "")[:200], "cuisine": body.cuisine},
        },
    )

    try:
        dish_name = validate_dish_name(body.dishName)
        cuisine = validate_cuisine(body.cuisine)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        ) from e

    generated = await recipe_service.generate_recipe(dish_name, cuisine)
    return RecipeResponse(recipe=generated.recipe, note=generated.note)


@router.post("/find-recipes-by-ingredients", response_model=RecipeListResponse, response_model_exclude_none=True)
async def find_recipes_by_ingredients(
    request: Request,
    body: FindRecipesRequest,
    _: None = Depends(rate_limit_dependency),
    recipe_service: RecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    """
    Find up to three recipes that use the given ingredients.

    API failures are reported as `success: false` with an empty list.
    """
    logger.info(
        "Route /find-recipes-by-ingredients called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/find-recipes-by-ingredients",
            "params": {
                "ingredients_count": len(body.ingredients) if isinstance(body.ingredients, list) else None,
            },
        },
    )

    try:
        ingredients = validate_ingredients_list(body.ingredients)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e)},
        ) from e

    result = await recipe_service.find_by_ingredients(ingredients)
    return RecipeListResponse(success=result.success, recipes=result.recipes, error=result.error)
