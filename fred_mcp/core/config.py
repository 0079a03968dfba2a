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


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


FRED_BASE_URL = "https://api.stlouisfed.org/fred"
FRED_API_KEY_URL = "https://fred.stlouisfed.org/docs/api/api_key.html"


def _build_fred_settings() -> "FredSettings":
    """Build FRED settings from environment.

    Pydantic Settings (v2) can populate values from environment variables.
    However, static type checkers often treat fields as constructor
    arguments, which is not how BaseSettings is intended to be used.
    """

    return FredSettings()  # type: ignore[call-arg]


def _build_app_settings() -> "AppSettings":
    return AppSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class FredSettings(BaseSettings):
    """FRED API access and outbound rate limit configuration.

    The API key is optional at this level so the settings object can always be
    built; the client factory refuses to start without it.
    """

    api_key: str | None = Field(
        None,
        description="FRED API key (free at fred.stlouisfed.org)",
    )
    base_url: str = Field(
        FRED_BASE_URL,
        description="Base URL of the FRED API",
    )
    timeout_seconds: float | None = Field(
        None,
        description="Request timeout in seconds (unset keeps the httpx default)",
    )
    rate_limit_requests: int = Field(
        120,
        description="Maximum outbound calls allowed within the trailing window",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        60.0,
        description="Trailing window size in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="FRED_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Process-wide server configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    transport: Literal["stdio", "sse", "streamable-http"] = Field(
        "stdio",
        description="MCP transport used by the fred-mcp entry point",
    )
    host: str = Field(
        "127.0.0.1",
        description="Bind host for HTTP transports",
    )
    port: int = Field(
        8000,
        description="Bind port for HTTP transports",
        ge=1,
        le=65535,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration.

    Output defaults to stderr: stdout is reserved for the MCP stdio protocol.
    """

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field("json", description="Log line format")
    output: Literal["stderr", "stdout", "file"] = Field(
        "stderr",
        description="Where log records are written",
    )
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int | None = Field(
        None,
        description="Rotate the log file after this many bytes (unset disables rotation)",
    )
    backup_count: int = Field(3, description="Rotated log files to keep")
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
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    fred: FredSettings = Field(default_factory=_build_fred_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
