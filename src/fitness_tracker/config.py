"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = {"memory", "supabase"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    openai_store: bool = False
    recipe_generation_timeout_seconds: float = 60.0
    timezone: str = "UTC"
    contribution_points: int = 10
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_storage_backend(raw: str | None) -> str:
    """Normalize the configured storage backend name."""
    if raw is None:
        return "memory"
    cleaned = raw.strip().lower()
    if cleaned not in STORAGE_BACKENDS:
        raise ValueError(f"Unsupported storage backend: {raw!r}")
    return cleaned
