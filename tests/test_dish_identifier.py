"""Tests for the dish identification heuristic."""

import asyncio
import random

import httpx
import pytest
from sqlalchemy import create_engine

from conftest import PNG_BYTES, json_transport

from recipelens.services.dish_catalog import DishCatalog, KnownDish, seed_known_dishes
from recipelens.services.dish_identifier import (
    DishIdentifier,
    analyze_annotations,
    apply_known_dishes,
    clean_dish_name,
    score_known_dish,
)
from recipelens.services.fallbacks import MOCK_DISHES
from recipelens.services.vision_service import VisionAnnotations, VisionService, VisionTerm

VISION_PATH = "/v1/images:annotate"


def terms(*pairs):
    return [VisionTerm(description=d, score=s) for d, s in pairs]


PAD_THAI = VisionAnnotations(
    labels=terms(("Food", 0.97), ("Rice noodles", 0.9), ("Noodle", 0.85)),
    web_entities=terms(("Pad thai", 0.95), ("Peanut", 0.6)),
)

KNOWN = [
    KnownDish(name="Pad Thai", cuisine="Thai", keywords=("rice noodle", "tamarind", "peanut")),
    KnownDish(name="Ramen", cuisine="Japanese", keywords=("noodle soup", "broth")),
]


def test_best_guess_wins():
    """Test the web best guess is used with generic words removed."""
    annotations = VisionAnnotations(
        labels=terms(("Food", 0.98), ("Spaghetti", 0.95), ("Italian food", 0.9)),
        web_entities=terms(("Carbonara", 1.2), ("Spaghetti", 0.8), ("Pasta", 0.7), ("Italian cuisine", 0.6), ("Egg", 0.5)),
        best_guesses=["pasta carbonara food"],
    )

    analysis = analyze_annotations(annotations)

    assert analysis.dishName == "Pasta Carbonara"
    assert analysis.confidence == 0.9
    assert analysis.cuisine == "Italian"
    assert analysis.alternatives == ["Carbonara", "Spaghetti", "Pasta"]
    assert analysis.visionDetails.topLabels == ["Food", "Spaghetti", "Italian food"]


def test_generic_label_replaced_by_web_entity():
    """Test a generic top label is replaced by a confident web entity."""
    annotations = VisionAnnotations(
        labels=terms(("Food", 0.97), ("Dish", 0.9), ("Noodle", 0.85)),
        web_entities=terms(("Ramen", 0.8)),
    )

    analysis = analyze_annotations(annotations)

    assert analysis.dishName == "Ramen"
    assert analysis.confidence == pytest.approx(0.8)
    assert analysis.alternatives == ["Dish", "Noodle"]
    assert analysis.cuisine == "International"


def test_empty_guess_joins_specific_labels():
    """Test a best guess that is only generic words falls back to joined labels."""
    annotations = VisionAnnotations(
        labels=terms(("Food", 0.9), ("Tomato", 0.8), ("Basil", 0.7)),
        best_guesses=["food"],
    )

    analysis = analyze_annotations(annotations)

    assert analysis.dishName == "Tomato Basil"
    assert analysis.confidence == pytest.approx(0.8)


def test_nothing_detected_defaults():
    """Test an empty response yields the default dish."""
    analysis = analyze_annotations(VisionAnnotations())

    assert analysis.dishName == "Food Dish"
    assert analysis.confidence == 0.5
    assert analysis.alternatives == []


def test_confidence_is_clamped():
    """Test unnormalized web entity scores never exceed 1."""
    annotations = VisionAnnotations(labels=terms(("Food", 0.9)), web_entities=terms(("Bibimbap", 1.4)))

    analysis = analyze_annotations(annotations)

    assert analysis.dishName == "Bibimbap"
    assert analysis.confidence == 1.0


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("photo of the pad thai", "Pad Thai"),
        ("a bowl of ramen", "Bowl Of Ramen"),
        ("An apple pie", "Apple Pie"),
        ("tiramisu", "Tiramisu"),
    ],
)
def test_clean_dish_name(raw, expected):
    """Test filler prefixes are dropped and words capitalized."""
    assert clean_dish_name(raw) == expected


def test_score_known_dish_tally():
    """Test the weighted tally over names, keywords and cuisine."""
    terms_ = [("pad thai", 0.95), ("rice noodles", 0.9), ("peanut", 0.6), ("food", 0.97)]

    assert score_known_dish(KNOWN[0], terms_) == pytest.approx(2 * 0.95 + 0.9 + 0.6 + 0.5 * 0.95)
    assert score_known_dish(KNOWN[1], terms_) == 0.0


def test_known_dish_match_replaces_guess():
    """Test a strong known dish match updates name, cuisine and confidence."""
    analysis = analyze_annotations(PAD_THAI)
    assert analysis.cuisine == "International"

    matched = apply_known_dishes(analysis, PAD_THAI, KNOWN, threshold=1.5)

    assert matched.dishName == "Pad Thai"
    assert matched.cuisine == "Thai"
    assert matched.databaseMatch is True
    assert matched.matchScore == pytest.approx(3.875, abs=0.01)
    assert matched.confidence == pytest.approx(0.95)
    assert matched.alternatives == ["Rice noodles", "Noodle"]


def test_known_dish_below_threshold():
    """Test weak matches leave the guess alone and flag no match."""
    analysis = analyze_annotations(PAD_THAI)

    result = apply_known_dishes(analysis, PAD_THAI, [KNOWN[1]], threshold=1.5)

    assert result.dishName == analysis.dishName
    assert result.databaseMatch is False


def _vision_transport(payload):
    def annotate(request: httpx.Request):
        assert request.url.params["key"] == "test-key"
        return payload

    return json_transport({VISION_PATH: annotate})


def test_identify_with_catalog(tmp_path):
    """Test identification end to end against a SQLite known dish table."""
    engine = create_engine(f"sqlite:///{tmp_path / 'dishes.db'}", future=True)
    seed_known_dishes(engine, KNOWN)

    payload = {
        "responses": [
            {
                "labelAnnotations": [
                    {"description": "Food", "score": 0.97},
                    {"description": "Rice noodles", "score": 0.9},
                ],
                "webDetection": {
                    "webEntities": [{"description": "Pad thai", "score": 0.95}, {"score": 0.3}],
                    "bestGuessLabels": [],
                },
            }
        ]
    }
    identifier = DishIdentifier(
        vision_service=VisionService(api_key="test-key", transport=_vision_transport(payload)),
        catalog=DishCatalog(engine=engine),
        match_threshold=1.5,
    )

    analysis = asyncio.run(identifier.identify(PNG_BYTES))

    assert analysis.dishName == "Pad Thai"
    assert analysis.cuisine == "Thai"
    assert analysis.databaseMatch is True
    assert 0.0 <= analysis.confidence <= 1.0
    assert analysis.fallback is False


def test_identify_unreadable_catalog_is_skipped(tmp_path):
    """Test a missing table does not break identification."""
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}", future=True)
    payload = {"responses": [{"labelAnnotations": [{"description": "Lasagna", "score": 0.88}]}]}
    identifier = DishIdentifier(
        vision_service=VisionService(api_key="test-key", transport=_vision_transport(payload)),
        catalog=DishCatalog(engine=engine),
    )

    analysis = asyncio.run(identifier.identify(PNG_BYTES))

    assert analysis.dishName == "Lasagna"
    assert analysis.databaseMatch is None


@pytest.mark.parametrize(
    "vision_service",
    [
        VisionService(api_key=""),
        VisionService(api_key="test-key", transport=json_transport({VISION_PATH: lambda r: (500, {"error": "boom"})})),
        VisionService(api_key="test-key", transport=json_transport({VISION_PATH: lambda r: {"responses": []}})),
    ],
)
def test_identify_falls_back_to_mock(vision_service):
    """Test vision failures return randomized mock analysis instead of raising."""
    identifier = DishIdentifier(vision_service=vision_service, rng=random.Random(7))

    analysis = asyncio.run(identifier.identify(PNG_BYTES))

    assert analysis.fallback is True
    assert analysis.dishName in MOCK_DISHES
    assert 0.7 <= analysis.confidence < 0.95
    assert len(set(analysis.alternatives)) == 3
    assert analysis.dishName not in analysis.alternatives
