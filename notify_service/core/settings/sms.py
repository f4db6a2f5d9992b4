"""SMS provider settings.

Environment variables use SMS_ prefix.
Example: SMS_ENABLED=true, SMS_ACCOUNT_SID=AC..., SMS_FROM_NUMBER=+15550001111
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmsSettings(BaseSettings):
    """SMS delivery configuration.

    Supports two backends:
    - twilio: Twilio Messages REST API
    - console: Log messages to console (development, tests)
    """

    enabled: bool = Field(default=False, description="Enable real SMS delivery")
    backend: Literal["twilio", "console"] = Field(default="twilio")
    account_sid: str | None = Field(default=None, description="Twilio account SID")
    auth_token: SecretStr | None = Field(default=None, description="Twilio auth token")
    from_number: str | None = Field(
        default=None,
        description="Sender number in E.164 format",
    )
    api_base_url: str = Field(default="https://api.twilio.com/2010-04-01")
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Transport-level HTTP timeout; the dispatch wait bound is NOTIFY_SMS_TIMEOUT_SECONDS",
    )

    model_config = SettingsConfigDict(
        env_prefix="SMS_",
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
        return (
            self.enabled
            and self.backend != "console"
            and bool(self.account_sid)
            and self.auth_token is not None
            and bool(self.from_number)
        )
