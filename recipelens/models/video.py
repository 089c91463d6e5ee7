"""Video generation models."""

from typing import Literal, Optional

from pydantic import BaseModel

from recipelens.models.recipe import Recipe

VideoStatus = Literal["pending", "processing", "completed", "failed"]


class GenerateVideoRequest(BaseModel):
    """Request body for /generate-video."""

    recipe: Optional[Recipe] = None


class VideoResult(BaseModel):
    """Response for /generate-video."""

    success: bool = True
    videoUrl: str
    videoId: Optional[str] = None
    fallback: bool = False
    error: Optional[str] = None


class VideoGeneration(BaseModel):
    """State of a video generation job."""

    id: str
    status: VideoStatus
    videoUrl: Optional[str] = None
    createdAt: Optional[str] = None
