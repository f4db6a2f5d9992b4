"""Email delivery infrastructure.

Example:
    from notify_service.infra.email import EmailMessage, get_email_provider

    provider = get_email_provider()
    result = await provider.send(EmailMessage(to=["pat@example.com"], subject="Hi"))
"""

from .providers import (
    BaseEmailProvider,
    ConsoleProvider,
    EmailDeliveryResult,
    EmailProvider,
    EmailProviderFactory,
    ResendProvider,
    get_email_provider,
    get_provider_factory,
)
from .schemas import EmailMessage

__all__ = [
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailMessage",
    "EmailProvider",
    "EmailProviderFactory",
    "ResendProvider",
    "get_email_provider",
    "get_provider_factory",
]
