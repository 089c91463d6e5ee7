"""AI chef tutorial videos via the avatar video API (Synthesia)."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

import httpx

from recipelens.config import settings
from recipelens.models.recipe import Recipe
from recipelens.models.video import VideoGeneration, VideoResult
from recipelens.utils.exceptions import VideoAPIError

logger = logging.getLogger(__name__)

TEMPLATE_ID = "reuse_chef"
AVATAR = "chef1"
BACKGROUND = "kitchen"

# Provider status -> our VideoGeneration.status
_STATUS_MAP = {
    "pending": "pending",
    "in_progress": "processing",
    "processing": "processing",
    "complete": "completed",
    "completed": "completed",
    "failed": "failed",
    "error": "failed",
}


def build_video_script(recipe: Recipe) -> str:
    """Narration script for the AI chef."""
    ingredients = ", ".join(
        f"{ing.amount} {ing.name}" + (f" ({ing.notes})" if ing.notes else "")
        for ing in recipe.ingredients
    )
    steps = "\n".join(
        f"Step {i}: {step.instruction}" + (f" (Tip: {step.tip})" if step.tip else "")
        for i, step in enumerate(recipe.steps, start=1)
    )
    return (
        f"Recipe: {recipe.name}\n"
        f"Description: {recipe.description}\n"
        f"Cuisine: {recipe.cuisine}\n"
        f"Difficulty: {recipe.difficulty}\n"
        f"Cooking Time: {recipe.cookingTime} minutes\n"
        f"Servings: {recipe.servings}\n"
        f"\n"
        f"Ingredients:\n{ingredients}\n"
        f"\n"
        f"Instructions:\n{steps}\n"
    )


class VideoService:
    """Creates and polls tutorial video jobs, falling back to a sample video."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        fallback_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.video_generation_api_key
        self.base_url = (base_url or settings.video_api_base_url).rstrip("/")
        self.fallback_url = fallback_url or settings.fallback_video_url
        self._transport = transport

    async def generate(self, recipe: Recipe) -> VideoResult:
        """Start a video job; never raises."""
        logger.info("Generating video", extra={"recipe_name": recipe.name})
        try:
            data = await self._request(
                "POST",
                "/videos",
                json={
                    "test": False,
                    "title": f"Cooking Tutorial: {recipe.name}",
                    "description": f"AI Chef explains how to make {recipe.name}",
                    "visibility": "public",
                    "templateId": TEMPLATE_ID,
                    "input": {
                        "script": build_video_script(recipe),
                        "avatar": AVATAR,
                        "background": BACKGROUND,
                    },
                },
            )
            if not data.get("id"):
                raise VideoAPIError(f"Failed to generate video: {data}")
        except VideoAPIError as e:
            logger.warning("Video generation failed, serving sample video", extra={"error": str(e)})
            return VideoResult(videoUrl=self.fallback_url, fallback=True, error=str(e))

        return VideoResult(videoUrl=data.get("download") or self.fallback_url, videoId=str(data["id"]))

    async def get_status(self, video_id: str) -> VideoGeneration:
        """Current state of a video job; failures report status ``failed``."""
        try:
            data = await self._request("GET", f"/videos/{video_id}")
        except VideoAPIError as e:
            logger.warning("Video status lookup failed", extra={"video_id": video_id, "error": str(e)})
            return VideoGeneration(id=video_id, status="failed", videoUrl=self.fallback_url)

        status = _STATUS_MAP.get(str(data.get("status", "")).lower(), "pending")
        created = data.get("createdAt")
        return VideoGeneration(
            id=str(data.get("id") or video_id),
            status=status,
            videoUrl=data.get("download"),
            createdAt=str(created) if created is not None else None,
        )

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.api_key:
            raise VideoAPIError("Missing API key for video generation")

        token = base64.b64encode(self.api_key.encode("utf-8")).decode("ascii")
        headers = {"Authorization": f"Basic {token}"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=settings.http_timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise VideoAPIError(f"Video API returned {e.response.status_code}: {e.response.text[:200]}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise VideoAPIError(f"Video API request failed: {e}") from e

        if not isinstance(data, dict):
            raise VideoAPIError("Video API returned a non-object payload")
        return data
