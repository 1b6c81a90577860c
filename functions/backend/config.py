"""
Configuration and settings for the AI backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.gemini import DEFAULT_MODEL


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")

    # LLM / Gemini
    api_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY")
    )
    gemini_model: str = Field(
        default=DEFAULT_MODEL, validation_alias="GEMINI_MODEL"
    )

    # Hosted data platform (Supabase). Only needed by callers that request
    # the data platform client.
    supabase_url: Optional[str] = Field(
        default=None, validation_alias="SUPABASE_URL"
    )
    supabase_key: Optional[str] = Field(
        default=None, validation_alias="SUPABASE_KEY"
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
