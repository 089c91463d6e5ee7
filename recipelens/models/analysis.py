"""Dish analysis models."""

from typing import List, Optional

from pydantic import BaseModel, Field


class VisionDetails(BaseModel):
    """Top raw terms the vision API returned, for display/debugging."""

    topLabels: List[str] = Field(default_factory=list)
    topWebEntities: List[str] = Field(default_factory=list)


class DishAnalysis(BaseModel):
    """Best guess of which dish an uploaded photo shows."""

    dishName: str = Field(..., description="Best-guess dish name")
    cuisine: str = Field("International", description="Detected cuisine")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence between 0 and 1")
    alternatives: List[str] = Field(default_factory=list, description="Up to three other candidates")
    databaseMatch: Optional[bool] = Field(None, description="True when a known dish matched")
    matchScore: Optional[float] = Field(None, description="Weighted tally of the matching known dish")
    visionDetails: Optional[VisionDetails] = None
    fallback: bool = Field(False, description="True when the analysis is mock data")
