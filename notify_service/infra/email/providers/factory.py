"""Email provider factory.

Maps a backend name to a provider class and falls back to the console
provider when the configured backend cannot be used (disabled, missing
credentials), so local runs never fail for lack of credentials.

Usage:
    provider = get_email_provider()
    result = await provider.send(message)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from notify_service.core.settings import get_email_settings

from .console import ConsoleProvider
from .resend import ResendProvider

if TYPE_CHECKING:
    from notify_service.core.settings import EmailSettings

    from .base import BaseEmailProvider, EmailProvider

logger = logging.getLogger(__name__)


class EmailProviderFactory:
    """Registry of email provider classes keyed by backend name."""

    def __init__(self) -> None:
        self._registry: dict[str, type[BaseEmailProvider]] = {
            "console": ConsoleProvider,
            "resend": ResendProvider,
        }

    def register(self, name: str, provider_class: type[BaseEmailProvider]) -> None:
        """Register (or replace) a provider class."""
        self._registry[name] = provider_class
        logger.debug("Email provider registered", extra={"provider": name})

    def list_providers(self) -> list[str]:
        """Names of registered backends."""
        return sorted(self._registry)

    def create(self, settings: EmailSettings) -> EmailProvider:
        """Build the provider selected by ``settings``."""
        backend = settings.backend if settings.is_configured else "console"
        if backend != settings.backend:
            logger.info(
                "Email backend not configured, using console provider",
                extra={"requested": settings.backend, "enabled": settings.enabled},
            )
        provider_class = self._registry.get(backend)
        if provider_class is None:
            raise ValueError(f"Unknown email backend: {backend}")
        return provider_class(settings)


_factory = EmailProviderFactory()


def get_provider_factory() -> EmailProviderFactory:
    """Get the process-wide provider factory."""
    return _factory


def get_email_provider(settings: EmailSettings | None = None) -> EmailProvider:
    """Build the email provider for the given (or cached) settings."""
    return _factory.create(settings or get_email_settings())


__all__ = ["EmailProviderFactory", "get_email_provider", "get_provider_factory"]
