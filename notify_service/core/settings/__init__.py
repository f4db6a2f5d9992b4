"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from notify_service.core.settings import get_dispatch_settings

Or use unified settings:
    from notify_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .dispatch import DispatchSettings
from .email import EmailSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_dispatch_settings,
    get_email_settings,
    get_logging_settings,
    get_sms_settings,
)
from .logs import LoggingSettings
from .postgres import PostgresSettings
from .sms import SmsSettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "DispatchSettings",
    "EmailSettings",
    "LoggingSettings",
    "PostgresSettings",
    "Settings",
    "SmsSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_dispatch_settings",
    "get_email_settings",
    "get_logging_settings",
    "get_settings",
    "get_sms_settings",
]
