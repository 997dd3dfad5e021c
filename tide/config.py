"""Application configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrustSettings(BaseModel):
    """Trust score configuration."""

    # Growth constant in trust = 1 - exp(-k * exchanges_per_user)
    # Higher values = trust saturates after fewer exchanges per member
    k: float = Field(default=0.5, gt=0)


class SeedSettings(BaseModel):
    """Seed catalog configuration."""

    # JSON file with communities and users
    # When unset the engine starts with an empty catalog
    path: Optional[Path] = None


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using `__` for nested values:

        ENVIRONMENT=production
        PORT=8080
        TRUST__K=0.8
        SEED__PATH=/data/communities.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows TRUST__K syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "localhost"
    port: int = 8000

    # Nested settings
    trust: TrustSettings = TrustSettings()
    seed: SeedSettings = SeedSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
