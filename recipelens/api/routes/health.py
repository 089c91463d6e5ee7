"""Health check endpoint."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from recipelens.api.dependencies import get_dish_catalog
from recipelens.config import settings
from recipelens.middleware.performance import metrics

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """
    Readiness check for Cloud Run.

    Unconfigured APIs do not make the instance unready; their functions
    serve fallbacks instead.
    """
    dependencies = {
        "vision_api": "configured" if settings.google_cloud_vision_api_key else "fallback",
        "recipe_api": "configured" if settings.recipe_generation_api_key else "fallback",
        "video_api": "configured" if settings.video_generation_api_key else "fallback",
        "dish_table": "configured" if get_dish_catalog().enabled else "disabled",
    }
    return {"status": "ready", "dependencies": dependencies}


@router.get("/metrics")
async def performance_metrics() -> Dict[str, Any]:
    """
    Get performance metrics.

    Returns:
        Performance metrics including request counts, durations, and error rates
    """
    return {
        "status": "ok",
        **metrics.get_summary()
    }
