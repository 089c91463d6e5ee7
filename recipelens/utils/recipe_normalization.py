"""Reshape recipe search API payloads into the Recipe model."""

import logging
import re
from typing import Any, Dict, List, Optional

from recipelens.models.recipe import Difficulty, Ingredient, Recipe, Step

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]*>")

DEFAULT_CUISINE = "International"
DEFAULT_COOKING_TIME = 30
DEFAULT_SERVINGS = 4
LONG_STEP_CHARS = 100
LONG_STEP_TIP = "Take your time with this step for best results."


def normalize_recipe_data(
    data: Dict[str, Any],
    *,
    fallback_cuisine: Optional[str] = None,
    default_description: Optional[str] = None,
    default_steps: Optional[List[str]] = None,
) -> Recipe:
    """Build a Recipe from a recipe-information payload.

    Handles:
    - HTML summaries (tags stripped, first sentence kept)
    - Missing cuisine (requested cuisine, then ``International``)
    - Difficulty from the ``veryPopular`` / ``veryHealthy`` flags
    - Zero or missing time/servings (defaults 30 minutes / 4 servings)
    - ``extendedIngredients`` -> Ingredient with "<amount> <unit>"
    - First ``analyzedInstructions`` block -> Step, tips on long steps
    """
    name = (data.get("title") or "").strip() or "Untitled Recipe"

    description = summarize(data.get("summary"))
    if not description:
        description = default_description or f"A delicious {name} recipe."

    cuisines = data.get("cuisines") or []
    cuisine = cuisines[0] if cuisines else (fallback_cuisine or DEFAULT_CUISINE)

    steps = _convert_steps(data.get("analyzedInstructions") or [])
    if not steps:
        steps = [Step(instruction=text) for text in (default_steps or ["No detailed steps available for this recipe."])]

    return Recipe(
        name=name,
        description=description,
        cuisine=cuisine,
        difficulty=difficulty_from_flags(data),
        cookingTime=_positive_int(data.get("readyInMinutes"), DEFAULT_COOKING_TIME),
        servings=_positive_int(data.get("servings"), DEFAULT_SERVINGS),
        ingredients=_convert_ingredients(data.get("extendedIngredients") or []),
        steps=steps,
        imageUrl=data.get("image") or None,
    )


def summarize(summary: Optional[str]) -> str:
    """First sentence of an HTML summary, terminated with a period."""
    if not summary:
        return ""
    text = _HTML_TAG.sub("", summary)
    first = text.split(".")[0].strip()
    return f"{first}." if first else ""


def difficulty_from_flags(data: Dict[str, Any]) -> Difficulty:
    if data.get("veryPopular"):
        return "Easy"
    if data.get("veryHealthy"):
        return "Medium"
    return "Hard"


def format_amount(amount: Any, unit: Any) -> str:
    """Render "<amount> <unit>" without float noise ("2.0" -> "2")."""
    if isinstance(amount, float):
        amount = int(amount) if amount.is_integer() else round(amount, 2)
    parts = [str(part) for part in (amount, unit) if part not in (None, "")]
    return " ".join(parts).strip() or "to taste"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _convert_ingredients(raw_ingredients: List[Dict[str, Any]]) -> List[Ingredient]:
    ingredients: List[Ingredient] = []
    for item in raw_ingredients:
        if not isinstance(item, dict):
            continue
        name = (item.get("name") or item.get("original") or "").strip()
        if not name:
            logger.debug("Skipping unnamed ingredient: %s", item)
            continue
        ingredients.append(
            Ingredient(
                name=name,
                amount=format_amount(item.get("amount"), item.get("unit")),
                notes=item.get("original") or None,
            )
        )
    return ingredients


def _convert_steps(instruction_blocks: List[Dict[str, Any]]) -> List[Step]:
    if not instruction_blocks or not isinstance(instruction_blocks[0], dict):
        return []

    steps: List[Step] = []
    for raw in instruction_blocks[0].get("steps") or []:
        text = (raw.get("step") or "").strip() if isinstance(raw, dict) else ""
        if not text:
            continue
        tip = LONG_STEP_TIP if len(text) > LONG_STEP_CHARS else None
        steps.append(Step(instruction=text, tip=tip))
    return steps
