"""Application settings.

Environment variables use APP_ prefix.
Example: APP_PORT=8080, APP_DEBUG=true
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Core FastAPI application settings."""

    service_name: str = Field(
        default="notify-service",
        description="Service identifier used in logs and metrics",
    )
    title: str = Field(
        default="Notify Service",
        description="OpenAPI title",
    )
    version: str = Field(default="0.1.0", description="Service version")
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")  # noqa: S104
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for uvicorn")
    debug: bool = Field(default=False, description="Enable debug mode (reload, verbose SQL)")
    api_prefix: str = Field(
        default="/api/v1",
        description="Prefix for versioned API routes",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,  # Immutable settings
        extra="ignore",
        env_ignore_empty=True,  # Ignore empty string env vars
    )
