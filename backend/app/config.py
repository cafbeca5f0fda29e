"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - query_cache_size >= 1 (QueryCache rejects smaller bounds)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Field length bounds are domain constants (core/domain_types.py), not settings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from app.core.domain_types import DEFAULT_QUERY_CACHE_SIZE, MAX_QUERY_LENGTH


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    query_cache_size: int = Field(DEFAULT_QUERY_CACHE_SIZE, ge=1)
    max_query_length: int = Field(MAX_QUERY_LENGTH, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
