"""Email provider settings.

Environment variables use EMAIL_ prefix.
Example: EMAIL_ENABLED=true, EMAIL_BACKEND=resend, EMAIL_API_KEY=re_...
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailSettings(BaseSettings):
    """Email delivery configuration.

    Supports two backends:
    - resend: Resend HTTP API (production)
    - console: Log emails to console (development, tests)
    """

    enabled: bool = Field(
        default=False,
        description="Enable real email delivery; console backend is used otherwise",
    )
    backend: Literal["resend", "console"] = Field(
        default="resend",
        description="Email backend: resend (production), console (dev)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Provider API key",
    )
    api_base_url: str = Field(
        default="https://api.resend.com",
        description="Provider API base URL",
    )
    from_email: str = Field(
        default="notifications@example.com",
        description="Default sender address",
    )
    from_name: str | None = Field(
        default="Notifications",
        description="Default sender display name",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="HTTP timeout for the provider call in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        """Whether the real provider can be used."""
        return self.enabled and self.backend != "console" and self.api_key is not None
