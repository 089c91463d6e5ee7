"""Image labeling client (Google Cloud Vision `images:annotate`)."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from recipelens.config import settings
from recipelens.utils.exceptions import VisionAPIError

logger = logging.getLogger(__name__)

MAX_RESULTS = 10


@dataclass
class VisionTerm:
    """A label or web entity with its relevance score."""

    description: str
    score: float


@dataclass
class VisionAnnotations:
    """The parts of an annotate response the dish heuristic reads."""

    labels: List[VisionTerm] = field(default_factory=list)
    web_entities: List[VisionTerm] = field(default_factory=list)
    best_guesses: List[str] = field(default_factory=list)


class VisionService:
    """Service for labeling food photos."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_cloud_vision_api_key
        self.api_url = api_url or settings.vision_api_url
        self._transport = transport

    async def annotate(self, image_data: bytes) -> VisionAnnotations:
        """
        Run label and web detection on an image.

        Raises:
            VisionAPIError: If the key is missing or the API call fails
        """
        if not self.api_key:
            raise VisionAPIError("GOOGLE_CLOUD_VISION_API_KEY is not configured")

        payload = {
            "requests": [
                {
                    "features": [
                        {"type": "LABEL_DETECTION", "maxResults": MAX_RESULTS},
                        {"type": "WEB_DETECTION", "maxResults": MAX_RESULTS},
                    ],
                    "image": {"content": base64.b64encode(image_data).decode("ascii")},
                }
            ]
        }

        logger.info("Calling vision API", extra={"image_bytes": len(image_data)})
        try:
            async with httpx.AsyncClient(timeout=settings.http_timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, params={"key": self.api_key}, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise VisionAPIError(f"Vision API returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise VisionAPIError(f"Vision API request failed: {e}") from e

        return self._parse_response(data)

    @staticmethod
    def _parse_response(data: Dict[str, Any]) -> VisionAnnotations:
        responses = data.get("responses") if isinstance(data, dict) else None
        if not responses:
            logger.error("Vision API response had no results", extra={"response": data})
            raise VisionAPIError("Failed to analyze image with the vision API")

        first = responses[0] or {}
        if "error" in first:
            raise VisionAPIError(f"Vision API error: {first['error'].get('message', first['error'])}")

        web = first.get("webDetection") or {}
        annotations = VisionAnnotations(
            labels=_terms(first.get("labelAnnotations")),
            web_entities=_terms(web.get("webEntities")),
            best_guesses=[g["label"] for g in web.get("bestGuessLabels") or [] if g.get("label")],
        )

        logger.info(
            "Vision API labels received",
            extra={
                "top_labels": [t.description for t in annotations.labels[:3]],
                "top_web_entities": [t.description for t in annotations.web_entities[:3]],
                "best_guesses": annotations.best_guesses,
            },
        )
        return annotations


def _terms(raw: Optional[List[Dict[str, Any]]]) -> List[VisionTerm]:
    # Web entities sometimes come back without a description
    return [
        VisionTerm(description=item["description"], score=float(item.get("score") or 0.0))
        for item in raw or []
        if item.get("description")
    ]
