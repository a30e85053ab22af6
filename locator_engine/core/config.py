"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LOCATOR_LOG_LEVEL: str = Field(default="info")
    LOCATOR_LOG_DIR: Path | None = Field(default=None)
    LOCATOR_LOG_TO_FILE: bool = Field(default=False)
    LOCATOR_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")

    # Class resolution fallback for ids without an explicit definition
    LOCATOR_CLASS_SEARCH_MODULES: list[str] = Field(default_factory=list)
    LOCATOR_CLASS_ALIASES: dict[str, str] = Field(default_factory=dict)

    # JSON document with a top-level "services" mapping, loaded at bootstrap
    LOCATOR_DEFINITIONS_FILE: Path | None = Field(default=None)

    ADMIN_API_TOKEN: str | None = Field(default=None)
    ENABLE_ADMIN_AUTH: bool = Field(default=True)


settings = Settings()
config = settings  # Alias for backward compatibility


__all__ = ["Settings", "settings", "config"]
