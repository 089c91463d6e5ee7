"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Dict

import httpx
import pytest
from fastapi.testclient import TestClient

from recipelens.main import app
from recipelens.middleware.performance import metrics
from recipelens.middleware.rate_limit import limiter

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 128

CARBONARA_DETAILS: Dict[str, Any] = {
    "id": 716429,
    "title": "Pasta Carbonara",
    "summary": "<b>Pasta Carbonara</b> is a classic Roman dish. It takes about 25 minutes.",
    "cuisines": ["Italian", "European"],
    "veryPopular": False,
    "veryHealthy": True,
    "readyInMinutes": 25,
    "servings": 2,
    "image": "https://img.spoonacular.com/recipes/716429-556x370.jpg",
    "extendedIngredients": [
        {"name": "spaghetti", "amount": 200.0, "unit": "g", "original": "200g spaghetti"},
        {"name": "egg yolks", "amount": 3, "unit": "", "original": "3 egg yolks"},
    ],
    "analyzedInstructions": [
        {
            "name": "",
            "steps": [
                {"number": 1, "step": "Boil the pasta."},
                {
                    "number": 2,
                    "step": "Whisk the egg yolks with grated cheese and plenty of black pepper, then toss "
                    "with the hot pasta off the heat until creamy.",
                },
            ],
        }
    ],
}


def json_transport(routes: Dict[str, Callable[[httpx.Request], Any]]) -> httpx.MockTransport:
    """MockTransport answering by URL path; handlers return (status, payload) or a payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        result = route(request)
        status_code, payload = result if isinstance(result, tuple) else (200, result)
        return httpx.Response(status_code, content=json.dumps(payload), headers={"content-type": "application/json"})

    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def reset_app_state():
    """Fresh rate limits, metrics and dependency overrides for every test."""
    limiter.reset()
    metrics.reset()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)
