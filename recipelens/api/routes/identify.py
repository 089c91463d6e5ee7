"""Dish identification endpoint."""

import asyncio
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from recipelens.api.dependencies import get_dish_identifier
from recipelens.config import settings
from recipelens.middleware.rate_limit import rate_limit_dependency
from recipelens.models.analysis import DishAnalysis
from recipelens.services.dish_identifier import DishIdentifier
from recipelens.services.fallbacks import mock_dish_analysis
from recipelens.services.image_service import SUPPORTED_MIME_TYPES, ImageService
from recipelens.utils.exceptions import ImageProcessingError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["identify"])

# Answer before the platform's request timeout does
IDENTIFY_TIMEOUT_S = 60.0


@router.post("/identify-recipe", response_model=DishAnalysis, response_model_exclude_none=True)
async def identify_recipe(
    request: Request,
    image: Optional[UploadFile] = File(None, description="Food photo (JPEG, PNG or WebP)"),
    _: None = Depends(rate_limit_dependency),
    identifier: DishIdentifier = Depends(get_dish_identifier),
) -> DishAnalysis:
    """
    Identify the dish in an uploaded photo.

    - **image**: multipart field with the photo (max 10MB)
    """
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No image file provided"},
        )

    logger.info(
        "Route /identify-recipe called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/identify-recipe",
            "params": {
                "filename": image.filename,
                "content_type": image.content_type,
                "size": getattr(image, "size", "unknown"),
            },
        },
    )

    if image.content_type and image.content_type.lower() not in SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid image type",
                "detail": f"Unsupported content-type: {image.content_type}. Allowed: {sorted(SUPPORTED_MIME_TYPES)}",
            },
        )

    image_data = await image.read()
    if not image_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No image file provided"},
        )

    if len(image_data) > settings.max_request_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": "File too large",
                "detail": f"Max size is {settings.max_request_size} bytes",
            },
        )

    try:
        validated, mime_type = ImageService.validate_image(image_data, image.filename or "image")
    except ImageProcessingError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid image", "detail": str(e)},
        ) from e

    t0 = time.perf_counter()
    optimized, optimized_mime = ImageService.prepare_for_vision(validated, mime_type)
    if len(optimized) != len(validated):
        logger.info(
            "Image optimized for vision",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "orig_bytes": len(validated),
                "opt_bytes": len(optimized),
                "mime_out": optimized_mime,
                "resize_ms": round((time.perf_counter() - t0) * 1000.0, 2),
            },
        )

    try:
        return await asyncio.wait_for(identifier.identify(optimized), timeout=IDENTIFY_TIMEOUT_S)
    except asyncio.TimeoutError:
        logger.error(f"Dish identification took longer than {IDENTIFY_TIMEOUT_S:.0f}s, serving mock analysis")
        return mock_dish_analysis()
