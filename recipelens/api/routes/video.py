"""AI chef video endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from recipelens.api.dependencies import get_video_service
from recipelens.middleware.rate_limit import rate_limit_dependency
from recipelens.models.video import GenerateVideoRequest, VideoGeneration, VideoResult
from recipelens.services.video_service import VideoService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["video"])


@router.post("/generate-video", response_model=VideoResult, response_model_exclude_none=True)
async def generate_video(
    request: Request,
    body: GenerateVideoRequest,
    _: None = Depends(rate_limit_dependency),
    video_service: VideoService = Depends(get_video_service),
) -> VideoResult:
    """Start an AI chef tutorial for a recipe; a sample video is returned on failure."""
    if body.recipe is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "No recipe provided"},
        )

    logger.info(
        "Route /generate-video called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/generate-video",
            "params": {"recipe_name": body.recipe.name, "steps": len(body.recipe.steps)},
        },
    )
    return await video_service.generate(body.recipe)


@router.get("/video-status/{video_id}", response_model=VideoGeneration, response_model_exclude_none=True)
async def video_status(
    video_id: str = Path(..., min_length=1, max_length=128),
    video_service: VideoService = Depends(get_video_service),
) -> VideoGeneration:
    """Poll a video job started by /generate-video."""
    return await video_service.get_status(video_id)
