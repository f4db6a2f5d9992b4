"""Notification dispatch settings.

Environment variables use NOTIFY_ prefix.
Example: NOTIFY_PORTAL_URL=https://app.example.com, NOTIFY_SMS_TIMEOUT_SECONDS=12
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchSettings(BaseSettings):
    """Behavioural knobs of the dispatch engine."""

    portal_url: str = Field(
        default="https://app.example.com",
        description="Generic portal link used when no action URL is supplied",
    )
    brand_name: str = Field(
        default="Notify",
        description="Brand shown in email headers and default subjects",
    )
    default_country_code: str = Field(
        default="1",
        pattern=r"^\d{1,3}$",
        description="Country calling code assumed for bare domestic numbers",
    )
    sms_timeout_seconds: float = Field(
        default=12.0,
        gt=0,
        le=120,
        description="Bounded wait on the SMS provider; expiry counts as queued",
    )
    fallback_recipient_name: str = Field(
        default="Valued User",
        description="Greeting name when the profile has no name",
    )
    default_severity: str = Field(
        default="info",
        description="Severity stored on in-app notifications",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
