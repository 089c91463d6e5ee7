"""Application configuration using pydantic-settings."""

from typing import Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys (missing keys make the matching function serve fallbacks)
    google_cloud_vision_api_key: Optional[str] = None
    recipe_generation_api_key: Optional[str] = None
    video_generation_api_key: Optional[str] = None  # "username:password" for basic auth

    # External API endpoints
    vision_api_url: str = "https://vision.googleapis.com/v1/images:annotate"
    recipe_api_base_url: str = "https://api.spoonacular.com"
    video_api_base_url: str = "https://api.synthesia.io/v2"

    # Server
    port: int = 8080
    host: str = "0.0.0.0"

    # Logging
    log_level: str = "INFO"

    # HTTP Settings
    http_timeout: int = 30  # seconds
    max_request_size: int = 10 * 1024 * 1024  # 10MB

    # Rate Limiting
    rate_limit_per_hour: int = 100

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # Known dish reference table (read-only lookup)
    dish_database_url: Optional[str] = None
    dish_match_threshold: float = 1.5

    # Fallbacks
    fallback_video_url: str = "https://storage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4"

    # Client request layer
    backend_url: str = "http://localhost:8080"
    client_max_retries: int = 3
    client_initial_delay: float = 1.0  # seconds, doubled after every failed attempt

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get list of CORS origins."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def secrets(self) -> Dict[str, Optional[str]]:
        """API keys by their environment variable name."""
        return {
            "GOOGLE_CLOUD_VISION_API_KEY": self.google_cloud_vision_api_key,
            "RECIPE_GENERATION_API_KEY": self.recipe_generation_api_key,
            "VIDEO_GENERATION_API_KEY": self.video_generation_api_key,
        }


# Global settings instance
settings = Settings()
