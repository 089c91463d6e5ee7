"""API endpoint tests."""

from conftest import PNG_BYTES

from recipelens.api.dependencies import get_dish_identifier, get_recipe_service, get_video_service
from recipelens.config import settings
from recipelens.main import app
from recipelens.models.analysis import DishAnalysis
from recipelens.models.video import VideoGeneration, VideoResult
from recipelens.services.fallbacks import local_mock_recipe
from recipelens.services.recipe_api_service import RecipeAPIService
from recipelens.services.recipe_service import GeneratedRecipe, IngredientSearchResult, RecipeService


class StubIdentifier:
    async def identify(self, image_data):
        return DishAnalysis(dishName="Pad Thai", cuisine="Thai", confidence=0.95, alternatives=["Noodle"], databaseMatch=True)


class StubRecipeService:
    async def generate_recipe(self, dish_name, cuisine=None):
        return GeneratedRecipe(recipe=local_mock_recipe(dish_name, cuisine))

    async def find_by_ingredients(self, ingredients):
        return IngredientSearchResult(recipes=[local_mock_recipe("Chicken Tikka")])


class StubVideoService:
    async def generate(self, recipe):
        return VideoResult(videoUrl="https://cdn.example.com/v.mp4", videoId="v-1")

    async def get_status(self, video_id):
        return VideoGeneration(id=video_id, status="processing")


def offline_recipe_service():
    return RecipeService(recipe_api=RecipeAPIService(api_key=""))


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_readiness_reports_dependencies(client):
    """Test readiness endpoint lists configured and fallback APIs."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert set(data["dependencies"]) == {"vision_api", "recipe_api", "video_api", "dish_table"}


def test_root_endpoint(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "RecipeLens API"


def test_request_id_header(client):
    """Test request IDs are echoed or generated and security headers added."""
    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    generated = client.get("/health")

    assert echoed.headers["X-Request-ID"] == "abc-123"
    assert len(generated.headers["X-Request-ID"]) == 36
    assert echoed.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Response-Time" in echoed.headers


def test_metrics_count_requests(client):
    """Test performance metrics see served requests."""
    client.get("/health")
    client.get("/health")

    data = client.get("/health/metrics").json()
    assert data["status"] == "ok"
    assert data["total_requests"] >= 2


def test_identify_requires_image(client):
    """Test a request without an image is rejected."""
    response = client.post("/identify-recipe")
    assert response.status_code == 400
    assert response.json() == {"error": "No image file provided"}


def test_identify_rejects_empty_image(client):
    """Test an empty upload is treated as a missing image."""
    response = client.post("/identify-recipe", files={"image": ("dish.png", b"", "image/png")})
    assert response.status_code == 400
    assert response.json() == {"error": "No image file provided"}


def test_identify_rejects_unsupported_type(client):
    """Test non-image uploads are rejected."""
    response = client.post("/identify-recipe", files={"image": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid image type"


def test_identify_rejects_bad_image_bytes(client):
    """Test a declared image that is not one is rejected."""
    response = client.post("/identify-recipe", files={"image": ("dish.png", b"not really a png", "image/png")})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid image"


def test_identify_recipe(client):
    """Test a valid upload returns the analysis."""
    app.dependency_overrides[get_dish_identifier] = StubIdentifier

    response = client.post("/identify-recipe", files={"image": ("dish.png", PNG_BYTES, "image/png")})

    assert response.status_code == 200
    data = response.json()
    assert data["dishName"] == "Pad Thai"
    assert data["databaseMatch"] is True
    assert "visionDetails" not in data


def test_generate_recipe_requires_name(client):
    """Test blank dish names are rejected."""
    for body in ({}, {"dishName": "   "}):
        response = client.post("/generate-recipe", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "No dish name provided"}


def test_generate_recipe(client):
    """Test a recipe is returned for a dish name."""
    app.dependency_overrides[get_recipe_service] = StubRecipeService

    response = client.post("/generate-recipe", json={"dishName": "Pasta Carbonara", "cuisine": "Italian"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["recipe"]["name"] == "Creamy Pasta Carbonara"
    assert "note" not in data


def test_generate_recipe_fallback_has_note(client):
    """Test an unavailable recipe API yields the generic recipe with a note."""
    app.dependency_overrides[get_recipe_service] = offline_recipe_service

    response = client.post("/generate-recipe", json={"dishName": "Moussaka"})

    assert response.status_code == 200
    data = response.json()
    assert data["recipe"]["name"] == "Moussaka"
    assert data["note"]


def test_find_recipes_validates_ingredients(client):
    """Test malformed ingredient lists are rejected."""
    cases = [
        ({}, "No ingredients provided or invalid format"),
        ({"ingredients": ["", "   "]}, "No ingredients provided or invalid format"),
        ({"ingredients": "eggs"}, "No ingredients provided or invalid format"),
        ({"ingredients": []}, "No ingredients provided or invalid format"),
        ({"ingredients": ["x" * 501]}, None),
        ({"ingredients": ["egg"] * 51}, None),
    ]
    for body, message in cases:
        response = client.post("/find-recipes-by-ingredients", json=body)
        assert response.status_code == 400
        if message:
            assert response.json() == {"error": message}


def test_find_recipes(client):
    """Test recipes are listed for ingredients."""
    app.dependency_overrides[get_recipe_service] = StubRecipeService

    response = client.post("/find-recipes-by-ingredients", json={"ingredients": ["chicken", "yogurt"]})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert [r["name"] for r in data["recipes"]] == ["Authentic Chicken Tikka Masala"]


def test_find_recipes_failure_is_reported(client):
    """Test API failures come back as success false with no recipes."""
    app.dependency_overrides[get_recipe_service] = offline_recipe_service

    response = client.post("/find-recipes-by-ingredients", json={"ingredients": ["egg"]})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["recipes"] == []
    assert data["error"]


def test_generate_video_requires_recipe(client):
    """Test a missing recipe is rejected."""
    response = client.post("/generate-video", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No recipe provided"}


def test_generate_video(client):
    """Test a video job is started for a recipe."""
    app.dependency_overrides[get_video_service] = StubVideoService
    recipe = local_mock_recipe("Chocolate Cake").model_dump()

    response = client.post("/generate-video", json={"recipe": recipe})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "videoUrl": "https://cdn.example.com/v.mp4",
        "videoId": "v-1",
        "fallback": False,
    }


def test_generate_video_fallback(client, monkeypatch):
    """Test an unconfigured video API serves the sample video."""
    monkeypatch.setattr(settings, "video_generation_api_key", None)
    recipe = local_mock_recipe("Chocolate Cake").model_dump()

    response = client.post("/generate-video", json={"recipe": recipe})

    assert response.status_code == 200
    data = response.json()
    assert data["fallback"] is True
    assert data["videoUrl"] == settings.fallback_video_url


def test_video_status(client):
    """Test video job status is reported."""
    app.dependency_overrides[get_video_service] = StubVideoService

    response = client.get("/video-status/v-1")

    assert response.status_code == 200
    assert response.json() == {"id": "v-1", "status": "processing"}


def test_check_secret(client, monkeypatch):
    """Test secret presence is reported without the value."""
    monkeypatch.setattr(settings, "recipe_generation_api_key", "sk-live-123")
    monkeypatch.setattr(settings, "video_generation_api_key", None)

    configured = client.post("/check-secret", json={"secretName": "recipe_generation_api_key"})
    missing = client.post("/check-secret", json={"secretName": "VIDEO_GENERATION_API_KEY"})
    unknown = client.post("/check-secret", json={"secretName": "PATH"})

    assert configured.json()["exists"] is True
    assert "sk-live-123" not in configured.text
    assert missing.json()["exists"] is False
    assert unknown.json()["exists"] is False


def test_check_secret_requires_name(client):
    """Test a missing secret name is rejected."""
    response = client.post("/check-secret", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "No secret name provided"}
