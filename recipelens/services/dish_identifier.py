"""
Dish identification from vision labels.

A weighted tally over small in-memory lists:
1. Best web guess, else the top label, becomes the dish name.
2. Generic names ("food", "dish") are replaced by a confident web entity
   or by joining the top specific labels.
3. Cuisine comes from the first term mentioning a known cuisine.
4. When a known dish table is configured, every known dish is scored against
   the terms and a strong enough match replaces the guess.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from typing import List, Optional, Tuple

from recipelens.config import settings
from recipelens.models.analysis import DishAnalysis, VisionDetails
from recipelens.services.dish_catalog import DishCatalog, KnownDish
from recipelens.services.fallbacks import mock_dish_analysis
from recipelens.services.vision_service import VisionAnnotations, VisionService
from recipelens.utils.exceptions import CatalogError, VisionAPIError

logger = logging.getLogger(__name__)

CUISINE_KEYWORDS = [
    "Italian", "Chinese", "Indian", "Mexican", "Japanese", "Thai",
    "French", "Greek", "Spanish", "Mediterranean", "American", "Korean",
    "Vietnamese", "Turkish", "Lebanese", "Moroccan", "Brazilian",
]

DEFAULT_DISH_NAME = "Food Dish"
DEFAULT_CONFIDENCE = 0.5
WEB_GUESS_CONFIDENCE = 0.9
MIN_ENTITY_SCORE = 0.5
MAX_ALTERNATIVES = 3

_GENERIC_NAME = re.compile(r"^(food|recipe|dish)$", re.IGNORECASE)
_GENERIC_LABEL = re.compile(r"^(food|recipe|dish|meal|cuisine)$", re.IGNORECASE)
_GENERIC_WORDS = re.compile(r"\b(food|recipe|dish)\b", re.IGNORECASE)
_LEADING_FILLERS = [
    re.compile(r"^photo of ", re.IGNORECASE),
    re.compile(r"^picture of ", re.IGNORECASE),
    re.compile(r"^image of ", re.IGNORECASE),
    re.compile(r"^a ", re.IGNORECASE),
    re.compile(r"^an ", re.IGNORECASE),
    re.compile(r"^the ", re.IGNORECASE),
]

# Weighted tally against the known dish table
NAME_WEIGHT = 2.0
KEYWORD_WEIGHT = 1.0
CUISINE_WEIGHT = 0.5
BEST_GUESS_SCORE = 1.0


def _clamp(value: float) -> float:
    # Web entity scores are unnormalized and can exceed 1
    return max(0.0, min(1.0, value))


def detect_cuisine(annotations: VisionAnnotations) -> str:
    for term in [*annotations.labels, *annotations.web_entities]:
        for keyword in CUISINE_KEYWORDS:
            if keyword in term.description:
                return keyword
    return ""


def clean_dish_name(name: str) -> str:
    """Drop filler prefixes and capitalize every word."""
    name = name.strip()
    for pattern in _LEADING_FILLERS:
        name = pattern.sub("", name)
    name = name.strip()
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def analyze_annotations(annotations: VisionAnnotations) -> DishAnalysis:
    """Best-guess dish name, cuisine and confidence from raw vision terms."""
    labels = annotations.labels
    entities = annotations.web_entities

    dish_name = ""
    confidence = 0.0
    alternatives: List[str] = []

    if annotations.best_guesses:
        dish_name = " ".join(_GENERIC_WORDS.sub("", annotations.best_guesses[0]).split())
        confidence = WEB_GUESS_CONFIDENCE
        candidates = [e.description for e in entities if e.description != dish_name][:5]
        alternatives = [c for c in candidates if len(c) > 3][:MAX_ALTERNATIVES]
    elif labels:
        dish_name = labels[0].description
        confidence = labels[0].score
        alternatives = [label.description for label in labels[1:4]]

    if _GENERIC_NAME.match(dish_name):
        for entity in entities:
            if entity.score >= MIN_ENTITY_SCORE and not _GENERIC_NAME.match(entity.description):
                dish_name = entity.description
                confidence = entity.score
                break

    if len(dish_name) < 3:
        relevant = [label for label in labels if not _GENERIC_LABEL.match(label.description)][:2]
        if relevant:
            dish_name = " ".join(label.description for label in relevant)
            confidence = relevant[0].score

    if len(dish_name) < 3:
        dish_name = DEFAULT_DISH_NAME
        confidence = DEFAULT_CONFIDENCE

    return DishAnalysis(
        dishName=clean_dish_name(dish_name),
        cuisine=detect_cuisine(annotations) or "International",
        confidence=_clamp(confidence),
        alternatives=alternatives,
        visionDetails=VisionDetails(
            topLabels=[label.description for label in labels[:5]],
            topWebEntities=[entity.description for entity in entities[:5]],
        ),
    )


def _weighted_terms(annotations: VisionAnnotations) -> List[Tuple[str, float]]:
    terms = [(t.description.lower(), max(t.score, 0.0)) for t in [*annotations.labels, *annotations.web_entities]]
    terms.extend((guess.lower(), BEST_GUESS_SCORE) for guess in annotations.best_guesses)
    return terms


def score_known_dish(dish: KnownDish, terms: List[Tuple[str, float]]) -> float:
    name = dish.name.lower()
    cuisine = (dish.cuisine or "").lower()
    score = 0.0
    for term, weight in terms:
        if name and name in term:
            score += NAME_WEIGHT * weight
        for keyword in dish.keywords:
            if keyword in term:
                score += KEYWORD_WEIGHT * weight
        if cuisine and cuisine in term:
            score += CUISINE_WEIGHT * weight
    return score


def apply_known_dishes(
    analysis: DishAnalysis,
    annotations: VisionAnnotations,
    known_dishes: List[KnownDish],
    threshold: float,
) -> DishAnalysis:
    """Replace the guess with the best-scoring known dish when it clears the threshold."""
    terms = _weighted_terms(annotations)
    best: Optional[KnownDish] = None
    best_score = 0.0
    for dish in known_dishes:
        score = score_known_dish(dish, terms)
        if score > best_score:
            best, best_score = dish, score

    if best is None or best_score < threshold:
        logger.info("No known dish matched", extra={"best_score": round(best_score, 2)})
        return analysis.model_copy(update={"databaseMatch": False, "matchScore": round(best_score, 2)})

    alternatives = [analysis.dishName, *analysis.alternatives]
    alternatives = [a for a in dict.fromkeys(alternatives) if a.lower() != best.name.lower()]

    cuisine = analysis.cuisine
    if cuisine == "International" and best.cuisine:
        cuisine = best.cuisine

    logger.info("Known dish matched", extra={"dish_name": best.name, "match_score": round(best_score, 2)})
    return analysis.model_copy(
        update={
            "dishName": best.name,
            "cuisine": cuisine,
            "confidence": max(analysis.confidence, min(0.95, 0.6 + 0.1 * best_score)),
            "alternatives": alternatives[:MAX_ALTERNATIVES],
            "databaseMatch": True,
            "matchScore": round(best_score, 2),
        }
    )


class DishIdentifier:
    """Identifies the dish in a photo; serves mock analysis when vision is unavailable."""

    def __init__(
        self,
        vision_service: Optional[VisionService] = None,
        catalog: Optional[DishCatalog] = None,
        match_threshold: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.vision_service = vision_service or VisionService()
        self.catalog = catalog
        self.match_threshold = match_threshold if match_threshold is not None else settings.dish_match_threshold
        self._rng = rng

    async def identify(self, image_data: bytes) -> DishAnalysis:
        try:
            annotations = await self.vision_service.annotate(image_data)
        except VisionAPIError as e:
            logger.error(f"Vision analysis failed, serving mock analysis: {e}", exc_info=True)
            return mock_dish_analysis(self._rng)

        analysis = analyze_annotations(annotations)

        known_dishes = await self._known_dishes()
        if known_dishes:
            analysis = apply_known_dishes(analysis, annotations, known_dishes, self.match_threshold)

        logger.info(
            "Dish identified",
            extra={
                "dish_name": analysis.dishName,
                "cuisine": analysis.cuisine,
                "confidence": round(analysis.confidence, 3),
                "database_match": analysis.databaseMatch,
            },
        )
        return analysis

    async def _known_dishes(self) -> List[KnownDish]:
        if self.catalog is None or not self.catalog.enabled:
            return []
        try:
            return await asyncio.to_thread(self.catalog.load)
        except CatalogError as e:
            logger.warning(f"Known dish table unavailable, skipping match: {e}")
            return []
