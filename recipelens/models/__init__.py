"""Pydantic models."""

from recipelens.models.analysis import DishAnalysis, VisionDetails
from recipelens.models.recipe import (
    FindRecipesRequest,
    GenerateRecipeRequest,
    Ingredient,
    Recipe,
    RecipeListResponse,
    RecipeResponse,
    Step,
)
from recipelens.models.video import GenerateVideoRequest, VideoGeneration, VideoResult

__all__ = [
    "DishAnalysis",
    "FindRecipesRequest",
    "GenerateRecipeRequest",
    "GenerateVideoRequest",
    "Ingredient",
    "Recipe",
    "RecipeListResponse",
    "RecipeResponse",
    "Step",
    "VideoGeneration",
    "VideoResult",
    "VisionDetails",
]
