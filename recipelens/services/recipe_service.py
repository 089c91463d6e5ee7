"""Recipe generation and ingredient search with fallbacks."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from recipelens.models.recipe import Recipe
from recipelens.services.fallbacks import DEFAULT_FIND_STEPS, FALLBACK_NOTE, fallback_recipe
from recipelens.services.recipe_api_service import RecipeAPIService
from recipelens.utils.exceptions import RecipeAPIError
from recipelens.utils.recipe_normalization import normalize_recipe_data

logger = logging.getLogger(__name__)

SEARCH_RESULTS = 5
DETAILED_RESULTS = 3


@dataclass
class GeneratedRecipe:
    recipe: Recipe
    note: Optional[str] = None


@dataclass
class IngredientSearchResult:
    recipes: List[Recipe]
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class RecipeService:
    """Unified service for turning dish names and ingredient lists into recipes."""

    def __init__(self, recipe_api: Optional[RecipeAPIService] = None) -> None:
        self.recipe_api = recipe_api or RecipeAPIService()

    async def generate_recipe(self, dish_name: str, cuisine: Optional[str] = None) -> GeneratedRecipe:
        """
        Strategy:
          1) Search for the dish (one hit), fetch its details, reshape.
          2) On no results, any API failure or a payload that cannot be
             reshaped, build a generic recipe around the dish name.
        """
        logger.info(f"Generating recipe for {dish_name} ({cuisine or 'International'} cuisine)")
        try:
            results = await self.recipe_api.search(dish_name, cuisine=cuisine, number=1)
            if not results:
                raise RecipeAPIError("No recipes found for this dish")

            details = await self.recipe_api.get_information(results[0]["id"])
            recipe = _normalize(details, fallback_cuisine=cuisine)
            return GeneratedRecipe(recipe=recipe)

        except (RecipeAPIError, KeyError, TypeError) as e:
            logger.warning(f"Error generating recipe, using fallback: {e}")
            return GeneratedRecipe(recipe=fallback_recipe(dish_name, cuisine), note=FALLBACK_NOTE)

    async def find_by_ingredients(self, ingredients: List[str]) -> IngredientSearchResult:
        """
        Search recipes that use the ingredients and fetch details for the top hits
        concurrently. Hits whose details fail are dropped; an empty outcome is
        reported as an error with no recipes.
        """
        logger.info(f"Searching for recipes with ingredients: {', '.join(ingredients)}")
        try:
            hits = await self.recipe_api.find_by_ingredients(ingredients, number=SEARCH_RESULTS)
            if not hits:
                raise RecipeAPIError("No recipes found for these ingredients")

            fetched = await asyncio.gather(
                *(self._fetch_details(hit, ingredients) for hit in hits[:DETAILED_RESULTS])
            )
            recipes = [recipe for recipe in fetched if recipe is not None]
            if not recipes:
                raise RecipeAPIError("Failed to retrieve recipe details")

            return IngredientSearchResult(recipes=recipes)

        except RecipeAPIError as e:
            logger.warning(f"Error finding recipes by ingredients: {e}")
            return IngredientSearchResult(recipes=[], error=str(e))

    async def _fetch_details(self, hit: Any, ingredients: List[str]) -> Optional[Recipe]:
        recipe_id = hit.get("id") if isinstance(hit, dict) else None
        if recipe_id is None:
            logger.warning(f"Skipping search hit without an id: {hit!r:.200}")
            return None
        try:
            details = await self.recipe_api.get_information(recipe_id)
            recipe = _normalize(
                details,
                default_description=f"A delicious recipe using {ingredients[0]}.",
                default_steps=DEFAULT_FIND_STEPS,
            )
        except RecipeAPIError as e:
            logger.error(f"Failed to get recipe details for ID {recipe_id}: {e}")
            return None

        logger.info(f"Recipe details retrieved successfully for: {recipe.name}")
        return recipe


def _normalize(details: Dict[str, Any], **kwargs: Any) -> Recipe:
    """normalize_recipe_data, with unusable payloads reported as RecipeAPIError."""
    try:
        return normalize_recipe_data(details, **kwargs)
    except (PydanticValidationError, TypeError, AttributeError) as e:
        raise RecipeAPIError(f"Unusable recipe payload: {e}") from e
