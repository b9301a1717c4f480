"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


OpenerStrategy = Literal["theme", "first_sentence", "off"]


class LLMSettings(BaseSettings):
    """Text generation provider configuration.

    Only OpenAI is wired today. Validation of provider-specific requirements
    happens in the factory, at first use, so the API can start without a key.
    """

    provider: str = Field(
        "openai",
        description="LLM provider name (currently only openai)",
    )
    model: str = Field(
        "gpt-4.1-mini",
        description="Model name used to generate affirmations",
    )
    api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("LLM_API_KEY", "OPENAI_API_KEY"),
        description="Provider API key (LLM_API_KEY or OPENAI_API_KEY)",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint for OpenAI-compatible gateways",
    )
    timeout_seconds: float = Field(
        45.0,
        description="Request timeout in seconds",
    )
    temperature: float = Field(
        1.1,
        ge=0.0,
        le=2.0,
        description="Sampling temperature; kept high so affirmations vary",
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
        populate_by_name=True,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    rate_limit_enabled: bool = Field(
        True,
        description="Enable best-effort rate limiting per client IP",
    )
    rate_limit_requests: int = Field(
        30,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        600,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    rate_limit_max_keys: int | None = Field(
        None,
        description="Optional cap on tracked clients (LRU eviction); unbounded when unset",
        ge=1,
    )

    opener_strategy: OpenerStrategy = Field(
        "theme",
        description="How the rotated opener is used: theme guidance, fixed first sentence, or off",
    )
    opener_history_cap: int = Field(
        20,
        description="Number of recent openers remembered per client and day mode",
        ge=0,
    )
    opener_retry_budget: int = Field(
        12,
        description="Draws attempted before a repeated opener is tolerated",
        ge=1,
    )
    opener_history_ttl_seconds: int = Field(
        24 * 60 * 60,
        description="Lifetime of an opener history before it is cleared",
        ge=1,
    )
    opener_max_keys: int | None = Field(
        None,
        description="Optional cap on tracked opener histories (LRU eviction)",
        ge=1,
    )

    state_sweep_interval_seconds: int = Field(
        900,
        description="Seconds between sweeps dropping expired limiter and opener keys (0 disables)",
        ge=0,
    )

    name_inclusion_probability: float = Field(
        0.35,
        ge=0.0,
        le=1.0,
        description="Chance of addressing the user by name when not forced",
    )
    cors_allow_origins: str = Field(
        "*",
        description="Comma-separated list of allowed CORS origins",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="Log line format",
    )
    output: Literal["stdout", "file"] = Field(
        "stdout",
        description="Where log lines are written",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (default logs/mirror_api.log)",
    )
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.
    """

    app_env: str = APP_ENV
    llm: LLMSettings = Field(default_factory=LLMSettings)
    app: AppSettings = Field(default_factory=AppSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
