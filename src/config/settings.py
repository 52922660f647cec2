# src/config/settings.py — v2
"""Typed configuration loaded from the environment / .env via pydantic-settings.

Every variable is prefixed with FEEDCACHE_, e.g. FEEDCACHE_STORE_PATH.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Remote feed ===
    feed_url: str = ""
    http_timeout: float = 10.0

    # === Store ===
    store_backend: Literal["json", "memory"] = "json"
    store_path: Path = Path("~/.feedcache/feed-store.json")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("http_timeout must be > 0")
        return v

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.feed_url and not self.feed_url.startswith(("http://", "https://")):
            errors.append("FEED_URL must be an http(s) URL")

        if self.store_backend == "json" and self.store_path.name == "":
            errors.append("STORE_PATH must name a file when STORE_BACKEND=json")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
