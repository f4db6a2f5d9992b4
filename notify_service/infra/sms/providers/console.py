"""Console SMS provider for development. Always succeeds."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
import uuid

from .base import BaseSmsProvider, SmsDeliveryResult, mask_phone

if TYPE_CHECKING:
    from notify_service.infra.sms.schemas import SmsMessage

logger = logging.getLogger(__name__)


class ConsoleSmsProvider(BaseSmsProvider):
    """Logs text messages instead of sending them."""

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return "console"

    async def _do_send(self, message: SmsMessage) -> SmsDeliveryResult:
        message_id = f"console-{uuid.uuid4()}"
        logger.info(
            "SMS (console provider - not actually sent)\n"
            f"To: {mask_phone(message.to)}\n{message.body}",
            extra={"message_id": message_id},
        )
        return SmsDeliveryResult.success_result(message_id=message_id, provider=self.provider_name)


__all__ = ["ConsoleSmsProvider"]
