"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_llm_settings() -> "LLMSettings":
    """Build LLM settings from environment.

    Static type checkers treat fields as constructor arguments, which is not
    how BaseSettings is meant to be used; hence the type ignore.
    """

    return LLMSettings()  # type: ignore[call-arg]


def _build_app_settings() -> "AppSettings":
    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class LLMSettings(BaseSettings):
    """Upstream generative-text provider configuration.

    The API key is optional here so the service can boot and report its
    health without credentials; the client factory enforces it on first use.
    """

    provider: str = Field(
        "gemini",
        description="LLM provider name (gemini or openai)",
    )
    model: str = Field(
        "gemini-2.5-flash",
        description="Model name (e.g., gemini-2.5-flash, gpt-4o-mini)",
    )
    api_key: str | None = Field(
        None,
        description="API key for the upstream provider",
    )
    base_url: str | None = Field(
        None,
        description="Custom API endpoint (OpenAI-compatible servers only)",
    )
    timeout_seconds: float = Field(
        45.0,
        description="Upstream request timeout in seconds",
    )
    temperature: float | None = Field(
        None,
        description="Sampling temperature; provider default when unset",
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    host: str = Field(
        "0.0.0.0",
        description="Bind address when started with python -m guide_api",
    )
    port: int = Field(
        3001,
        description="Bind port when started with python -m guide_api",
    )
    max_message_chars: int = Field(
        8000,
        description="Maximum chat message length in characters",
        ge=1,
    )
    chat_timeout_seconds: float | None = Field(
        120.0,
        description="How long a chat request waits for its queued upstream call",
    )
    cors_origins: str = Field(
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
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int | None = Field(
        10_000_000,
        description="Rotate the log file at this size (None disables rotation)",
    )
    backup_count: int = Field(5, description="Rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.

    Environments:
    - development: Local development
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    llm: LLMSettings = Field(default_factory=_build_llm_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


def parse_origins(origins: str | None) -> list[str]:
    """Split a comma-separated origin list, dropping blanks.

    Examples:
        >>> parse_origins("https://a.kz, https://b.kz")
        ['https://a.kz', 'https://b.kz']
        >>> parse_origins("")
        []
    """

    if not origins:
        return []
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


# Global settings instance - composed from domain-specific settings
settings = Settings()
