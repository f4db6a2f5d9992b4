"""Console email provider for development.

Logs emails instead of sending them. Always succeeds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
import uuid

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from notify_service.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleProvider(BaseEmailProvider):
    """Console email provider for development.

    Example:
        provider = ConsoleProvider(settings)
        result = await provider.send(message)
        assert result.success  # Always true
    """

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return "console"

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        message_id = f"console-{uuid.uuid4()}"
        from_email = message.from_email or self._settings.from_email

        separator = "=" * 60
        lines = [
            separator,
            "EMAIL (console provider - not actually sent)",
            separator,
            f"Message-ID: {message_id}",
            f"From: {from_email}",
            f"To: {', '.join(message.to)}",
            f"Subject: {message.subject}",
        ]
        if message.tags:
            lines.append(f"Tags: {', '.join(message.tags)}")
        lines.append("-" * 60)
        lines.append(message.body_text or "(no plain-text body)")
        lines.append(separator)

        logger.info("\n".join(lines), extra={"message_id": message_id})
        return EmailDeliveryResult.success_result(
            message_id=message_id,
            provider=self.provider_name,
        )


__all__ = ["ConsoleProvider"]
