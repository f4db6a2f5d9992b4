"""SMS provider factory.

Falls back to the console provider when the configured backend cannot be
used, mirroring the email factory.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from notify_service.core.settings import get_sms_settings

from .console import ConsoleSmsProvider
from .twilio import TwilioProvider

if TYPE_CHECKING:
    from notify_service.core.settings import SmsSettings

    from .base import BaseSmsProvider, SmsProvider

logger = logging.getLogger(__name__)

_REGISTRY: dict[str, type[BaseSmsProvider]] = {
    "console": ConsoleSmsProvider,
    "twilio": TwilioProvider,
}


def get_sms_provider(settings: SmsSettings | None = None) -> SmsProvider:
    """Build the SMS provider for the given (or cached) settings."""
    settings = settings or get_sms_settings()
    backend = settings.backend if settings.is_configured else "console"
    if backend != settings.backend:
        logger.info(
            "SMS backend not configured, using console provider",
            extra={"requested": settings.backend, "enabled": settings.enabled},
        )
    return _REGISTRY[backend](settings)


__all__ = ["get_sms_provider"]
