"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    default_calorie_goal: float = 2000
    food_cache_size: int = 512
    frontend_url: str = "*"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_origins(raw: str) -> list[str]:
    """Parse allowed CORS origins from a comma-separated value."""
    origins = [chunk.strip() for chunk in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]
