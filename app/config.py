from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # General
    project_id: Optional[str] = Field(default=None, description="GCP project ID")
    log_level: str = Field("INFO", description="Root logging level.")

    # Storage
    storage_backend: Literal["gcs", "memory"] = Field(
        "gcs",
        description="Object store holding the images; 'memory' is for local development.",
    )

    # Responses
    cache_max_age: int = Field(2629440, ge=0, description="Cache-Control max-age in seconds (30.44 days).")

    # Image encoding
    webp_quality: int = Field(80, ge=1, le=100, description="WebP encoder quality (1-100).")
    webp_method: int = Field(4, ge=0, le=6, description="WebP encoder effort (0=fast, 6=slowest).")
    max_dimension: int = Field(
        4096,
        ge=1,
        le=16383,
        description="Largest width or height a variant may request (WebP caps at 16383).",
    )


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
