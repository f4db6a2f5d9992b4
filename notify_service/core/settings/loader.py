"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from notify_service.core.settings.loader import get_dispatch_settings

    settings = get_dispatch_settings()  # First call: loads and validates
    settings = get_dispatch_settings()  # Subsequent calls: cached instance

Testing:
    get_dispatch_settings.cache_clear()
    # or construct directly: DispatchSettings(portal_url="https://portal.test")
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .dispatch import DispatchSettings
from .email import EmailSettings
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .sms import SmsSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> PostgresSettings:
    """Get cached database settings."""
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Get cached email provider settings."""
    return EmailSettings()


@lru_cache(maxsize=1)
def get_sms_settings() -> SmsSettings:
    """Get cached SMS provider settings."""
    return SmsSettings()


@lru_cache(maxsize=1)
def get_dispatch_settings() -> DispatchSettings:
    """Get cached dispatch engine settings."""
    return DispatchSettings()


def clear_all_caches() -> None:
    """Clear every settings cache (tests, config reload)."""
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_email_settings.cache_clear()
    get_sms_settings.cache_clear()
    get_dispatch_settings.cache_clear()
