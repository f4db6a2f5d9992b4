"""Unified settings composition for convenient access.

Usage:
    from notify_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.dispatch.sms_timeout_seconds)

Each nested settings class still respects its own env prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .app import AppSettings
from .dispatch import DispatchSettings
from .email import EmailSettings
from .logs import LoggingSettings
from .loader import (
    get_app_settings,
    get_db_settings,
    get_dispatch_settings,
    get_email_settings,
    get_logging_settings,
    get_sms_settings,
)
from .postgres import PostgresSettings
from .sms import SmsSettings


@dataclass(frozen=True, slots=True)
class Settings:
    """All settings domains in one object."""

    app: AppSettings
    db: PostgresSettings
    logging: LoggingSettings
    email: EmailSettings
    sms: SmsSettings
    dispatch: DispatchSettings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings built from the per-domain loaders."""
    return Settings(
        app=get_app_settings(),
        db=get_db_settings(),
        logging=get_logging_settings(),
        email=get_email_settings(),
        sms=get_sms_settings(),
        dispatch=get_dispatch_settings(),
    )
