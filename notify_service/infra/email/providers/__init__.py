"""Email provider implementations."""

from .base import BaseEmailProvider, EmailDeliveryResult, EmailProvider
from .console import ConsoleProvider
from .factory import EmailProviderFactory, get_email_provider, get_provider_factory
from .resend import ResendProvider

__all__ = [
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailProvider",
    "EmailProviderFactory",
    "ResendProvider",
    "get_email_provider",
    "get_provider_factory",
]
