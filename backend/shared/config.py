"""
Central configuration shared by matchstreams services.
Uses pydantic-settings for env-based config with validation.
"""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Root settings shared across all services."""

    model_config = SettingsConfigDict(
        env_prefix="MS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── General ──────────────────────────────────────────────
    environment: Environment = Environment.DEV
    log_level: str = "INFO"
    instance_id: str = Field(default="", description="Host/container ID bound to every log entry")

    # ── Outbound HTTP ────────────────────────────────────────
    request_timeout_s: float = Field(default=10.0, description="Per-attempt timeout")
    request_max_attempts: int = Field(default=2, description="Attempts per request, first one included")
    request_retry_delay_s: float = Field(default=1.0, description="Fixed sleep between attempts")

    # ── Observability ────────────────────────────────────────
    metrics_enabled: bool = True
    metrics_textfile: Optional[str] = Field(
        default=None,
        description="Prometheus textfile-collector path written after each run",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton access to validated settings."""
    return Settings()
