"""Recipe search/detail client (Spoonacular)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from recipelens.config import settings
from recipelens.utils.exceptions import RecipeAPIError

logger = logging.getLogger(__name__)


class RecipeAPIService:
    """Thin async wrapper over the recipe search API endpoints the app uses."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.recipe_generation_api_key
        self.base_url = (base_url or settings.recipe_api_base_url).rstrip("/")
        self._transport = transport

    async def search(self, query: str, cuisine: Optional[str] = None, number: int = 1) -> List[Dict[str, Any]]:
        """Full-text search returning recipes that have instructions."""
        data = await self._get(
            "/recipes/complexSearch",
            {
                "query": query,
                "cuisine": cuisine or "",
                "instructionsRequired": "true",
                "fillIngredients": "true",
                "addRecipeInformation": "true",
                "number": number,
            },
        )
        results = data.get("results") if isinstance(data, dict) else None
        return results or []

    async def find_by_ingredients(self, ingredients: List[str], number: int = 5) -> List[Dict[str, Any]]:
        """Recipes ranked to maximize use of the given ingredients."""
        data = await self._get(
            "/recipes/findByIngredients",
            {"ingredients": ",".join(ingredients), "number": number, "ranking": 1},
        )
        if not isinstance(data, list):
            raise RecipeAPIError(f"Unexpected findByIngredients payload: {type(data).__name__}")
        return data

    async def get_information(self, recipe_id: Any) -> Dict[str, Any]:
        """Full recipe details (ingredients, instructions, flags)."""
        data = await self._get(f"/recipes/{recipe_id}/information", {"includeNutrition": "false"})
        if not isinstance(data, dict) or not data:
            raise RecipeAPIError(f"Failed to get recipe details for ID: {recipe_id}")
        return data

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        if not self.api_key:
            raise RecipeAPIError("RECIPE_GENERATION_API_KEY is not configured")

        logger.info("Calling recipe API", extra={"endpoint": path})
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.http_timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params={**params, "apiKey": self.api_key})
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Recipe API error",
                extra={"endpoint": path, "status_code": e.response.status_code, "body": e.response.text[:500]},
            )
            raise RecipeAPIError(f"Recipe API returned {e.response.status_code} for {path}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise RecipeAPIError(f"Recipe API request to {path} failed: {e}") from e
