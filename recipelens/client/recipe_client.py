"""
Client for the RecipeLens backend functions.

Every call retries with exponential backoff (1s, 2s, 4s by default) and, once
retries are exhausted, returns local mock data so the caller always gets
something to show.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from recipelens.config import settings
from recipelens.models.analysis import DishAnalysis
from recipelens.models.recipe import Recipe
from recipelens.services.fallbacks import local_mock_recipe, mock_dish_analysis
from recipelens.utils.exceptions import BackendRequestError

logger = logging.getLogger(__name__)


class RecipeClient:
    """Calls backend functions with retries and local fallbacks."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        max_retries: Optional[int] = None,
        initial_delay: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.max_retries = settings.client_max_retries if max_retries is None else max_retries
        self.initial_delay = settings.client_initial_delay if initial_delay is None else initial_delay
        self.headers = headers or {}
        self._transport = transport
        self._sleep = sleep
        self._rng = rng

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------

    async def analyze_image(self, image_data: bytes, filename: str = "image.jpg") -> DishAnalysis:
        content_type = mimetypes.guess_type(filename)[0] or "image/jpeg"
        try:
            data = await self._invoke("identify-recipe", files={"image": (filename, image_data, content_type)})
            analysis = DishAnalysis.model_validate(data)
        except (BackendRequestError, PydanticValidationError) as e:
            logger.error(f"Error in analyze_image, using mock analysis: {e}")
            return mock_dish_analysis(self._rng)

        if not analysis.cuisine:
            analysis = analysis.model_copy(update={"cuisine": "International"})
        return analysis

    async def generate_recipe(self, dish_name: str, cuisine: Optional[str] = None) -> Recipe:
        try:
            data = await self._invoke("generate-recipe", json={"dishName": dish_name, "cuisine": cuisine})
            return Recipe.model_validate(data["recipe"])
        except (BackendRequestError, PydanticValidationError, KeyError, TypeError) as e:
            logger.error(f"Error in generate_recipe, using local recipe: {e}")
            return local_mock_recipe(dish_name, cuisine)

    async def find_recipes(self, ingredients: List[str]) -> List[Recipe]:
        try:
            data = await self._invoke("find-recipes-by-ingredients", json={"ingredients": ingredients})
            if not data.get("success", True):
                logger.info(f"No recipes for ingredients: {data.get('error')}")
            return [Recipe.model_validate(item) for item in data.get("recipes") or []]
        except (BackendRequestError, PydanticValidationError, AttributeError) as e:
            logger.error(f"Error in find_recipes: {e}")
            return []

    async def generate_video(self, recipe: Recipe) -> str:
        try:
            data = await self._invoke("generate-video", json={"recipe": recipe.model_dump()})
            video_url = data.get("videoUrl")
            if not video_url:
                raise BackendRequestError("generate-video returned no videoUrl")
            return video_url
        except (BackendRequestError, AttributeError) as e:
            logger.error(f"Error in generate_video, using sample video: {e}")
            return settings.fallback_video_url

    # ---------------------------------------------------------------------
    # Transport with retries
    # ---------------------------------------------------------------------

    async def _invoke(
        self,
        function: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        POST to a backend function. One initial attempt plus `max_retries`
        retries; the delay doubles after each failure.

        Raises:
            BackendRequestError: When every attempt failed
        """
        delay = self.initial_delay
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=settings.http_timeout,
                    headers=self.headers,
                    transport=self._transport,
                ) as client:
                    response = await client.post(f"/{function}", json=json, files=files)
                    response.raise_for_status()
                    return response.json()
            except (httpx.HTTPError, ValueError) as e:
                last_error = e
                logger.warning(
                    "Backend call %s attempt %d/%d failed: %s",
                    function,
                    attempt + 1,
                    self.max_retries + 1,
                    e,
                )

            if attempt < self.max_retries:
                await self._sleep(delay)
                delay *= 2

        raise BackendRequestError(f"{function} failed after {self.max_retries + 1} attempts: {last_error}")
