"""Tests for the backend client's retries and fallbacks."""

import asyncio
import random

import httpx

from conftest import PNG_BYTES, json_transport

from recipelens.api.dependencies import get_dish_identifier, get_recipe_service
from recipelens.client.recipe_client import RecipeClient
from recipelens.config import settings
from recipelens.main import app
from recipelens.models.analysis import DishAnalysis
from recipelens.services.fallbacks import MOCK_DISHES, local_mock_recipe
from recipelens.services.recipe_api_service import RecipeAPIService
from recipelens.services.recipe_service import RecipeService


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_client(routes, sleep=None):
    return RecipeClient(
        base_url="http://backend.test",
        max_retries=3,
        initial_delay=1.0,
        transport=json_transport(routes),
        sleep=sleep or SleepRecorder(),
        rng=random.Random(3),
    )


def test_retries_back_off_exponentially():
    """Test four failed attempts sleep 1s, 2s then 4s and fall back."""
    attempts = []

    def broken(request: httpx.Request):
        attempts.append(request.url.path)
        return (503, {"error": "unavailable"})

    sleep = SleepRecorder()
    client = make_client({"/generate-recipe": broken}, sleep=sleep)

    recipe = asyncio.run(client.generate_recipe("Pasta Carbonara"))

    assert len(attempts) == 4
    assert sleep.delays == [1.0, 2.0, 4.0]
    assert recipe.name == "Creamy Pasta Carbonara"


def test_retry_succeeds_after_failures():
    """Test a call that recovers returns the backend's data."""
    responses = iter([(500, {"error": "boom"}), (502, {"error": "bad gateway"})])
    backend_recipe = local_mock_recipe("Chocolate Cake").model_dump()

    def flaky(request: httpx.Request):
        return next(responses, {"success": True, "recipe": backend_recipe})

    sleep = SleepRecorder()
    client = make_client({"/generate-recipe": flaky}, sleep=sleep)

    recipe = asyncio.run(client.generate_recipe("Chocolate Cake"))

    assert recipe.name == "Decadent Chocolate Cake"
    assert sleep.delays == [1.0, 2.0]


def test_analyze_image_falls_back_to_mock():
    """Test an unreachable backend yields a mock analysis."""
    analysis = asyncio.run(make_client({}).analyze_image(PNG_BYTES, "dish.png"))

    assert analysis.fallback is True
    assert analysis.dishName in MOCK_DISHES
    assert 0.7 <= analysis.confidence < 0.95
    assert len(set(analysis.alternatives)) == 3


def test_find_recipes_falls_back_to_empty():
    """Test ingredient search failure returns no recipes."""
    assert asyncio.run(make_client({}).find_recipes(["egg"])) == []


def test_find_recipes_reports_backend_error():
    """Test success false from the backend is an empty list."""
    client = make_client({
        "/find-recipes-by-ingredients": lambda r: {"success": False, "recipes": [], "error": "No recipes found"},
    })
    assert asyncio.run(client.find_recipes(["egg"])) == []


def test_generate_video_falls_back_to_sample():
    """Test video failures return the sample video URL."""
    client = make_client({"/generate-video": lambda r: {"success": True}})
    url = asyncio.run(client.generate_video(local_mock_recipe("Stew")))
    assert url == settings.fallback_video_url


def test_generate_video_returns_backend_url():
    """Test the backend's video URL is returned."""
    client = make_client({"/generate-video": lambda r: {"success": True, "videoUrl": "https://cdn/v.mp4"}})
    assert asyncio.run(client.generate_video(local_mock_recipe("Stew"))) == "https://cdn/v.mp4"


def test_client_against_app():
    """Test the client talks to the real application."""

    class StubIdentifier:
        async def identify(self, image_data):
            return DishAnalysis(dishName="Tacos", cuisine="Mexican", confidence=0.9)

    app.dependency_overrides[get_dish_identifier] = StubIdentifier
    app.dependency_overrides[get_recipe_service] = lambda: RecipeService(recipe_api=RecipeAPIService(api_key=""))

    client = RecipeClient(
        base_url="http://testserver",
        max_retries=0,
        transport=httpx.ASGITransport(app=app),
    )

    async def scenario():
        analysis = await client.analyze_image(PNG_BYTES, "dish.png")
        recipe = await client.generate_recipe(analysis.dishName, analysis.cuisine)
        return analysis, recipe

    analysis, recipe = asyncio.run(scenario())

    assert (analysis.dishName, analysis.cuisine, analysis.fallback) == ("Tacos", "Mexican", False)
    assert recipe.name == "Tacos"
    assert recipe.cuisine == "Mexican"
    assert len(recipe.steps) == 6
