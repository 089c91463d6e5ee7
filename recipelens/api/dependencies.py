"""Shared API dependencies."""

from functools import lru_cache

from recipelens.services.dish_catalog import DishCatalog, get_default_catalog
from recipelens.services.dish_identifier import DishIdentifier
from recipelens.services.recipe_service import RecipeService
from recipelens.services.video_service import VideoService


@lru_cache(maxsize=1)
def get_dish_catalog() -> DishCatalog:
    """Known dish table, loaded once per process."""
    return get_default_catalog()


def get_dish_identifier() -> DishIdentifier:
    """Get dish identifier service instance."""
    return DishIdentifier(catalog=get_dish_catalog())


def get_recipe_service() -> RecipeService:
    """Get recipe service instance."""
    return RecipeService()


def get_video_service() -> VideoService:
    """Get video service instance."""
    return VideoService()
