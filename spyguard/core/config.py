"""
Configuration management for SpyGuard.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults for the threat database and the detection layers.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

DEFAULT_DATABASE_URL = "https://api.spyguard.app/database/v1/threats.json"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


class DatabaseConfig(BaseModel):
    """Remote threat database configuration."""

    remote_url: str = Field(default=DEFAULT_DATABASE_URL, description="Threat database endpoint")
    timeout_seconds: float = Field(
        default=5.0, gt=0.0, le=60.0, allow_inf_nan=False, description="Total deadline for one refresh"
    )
    accept_header: str = Field(default="application/json", description="Accept header sent on fetch")


class HeuristicsConfig(BaseModel):
    """Thresholds used by the behavioral watchdog."""

    simple_tool_background_mb: float = Field(
        default=10.0, ge=0.0, description="Background MB above which a simple tool app leaks data"
    )
    high_background_mb: float = Field(
        default=50.0, ge=0.0, description="Background MB above which any user app is flagged"
    )


class Config(BaseModel):
    """Root configuration for SpyGuard."""

    project_name: str = Field(default="SpyGuard", description="Project identifier")
    log_level: LogLevel = Field(default="INFO", description="Logging level")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    heuristics: HeuristicsConfig = Field(default_factory=HeuristicsConfig)

    model_config = {"extra": "ignore"}

    @classmethod
    def from_env(cls) -> Config:
        """Create configuration from environment variables.

        Unrecognized log levels and unusable timeouts fall back to the defaults.
        """
        log_level = os.environ.get("SPYGUARD_LOG_LEVEL", "INFO").upper()
        return cls(
            log_level=log_level if log_level in LOG_LEVELS else "INFO",  # type: ignore[arg-type]
            database=_database_config_from_env(),
        )


def _database_config_from_env() -> DatabaseConfig:
    remote_url = os.environ.get("SPYGUARD_DATABASE_URL", DEFAULT_DATABASE_URL)
    timeout = os.environ.get("SPYGUARD_DATABASE_TIMEOUT")
    if timeout is None:
        return DatabaseConfig(remote_url=remote_url)
    try:
        return DatabaseConfig(remote_url=remote_url, timeout_seconds=timeout)
    except ValidationError:
        return DatabaseConfig(remote_url=remote_url)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()
