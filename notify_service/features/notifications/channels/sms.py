"""SMS channel dispatcher.

The provider call runs under a bounded wait. When the bound expires, or
the provider reports a transport timeout, the message is counted as sent:
the provider may still deliver it asynchronously. A genuine error
response is a failure.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from pydantic import ValidationError

from notify_service.features.notifications.channels.base import ChannelOutcome
from notify_service.features.notifications.channels.phone import normalize_phone
from notify_service.features.notifications.enums import Channel
from notify_service.features.notifications.metrics import (
    notification_provider_duration_seconds,
    notification_sms_timeout_total,
)
from notify_service.infra.logging import get_logger
from notify_service.infra.sms import SmsMessage, get_sms_provider, mask_phone

if TYPE_CHECKING:
    from notify_service.core.settings import DispatchSettings
    from notify_service.infra.sms import SmsProvider


def compose_sms_body(title: str, body: str, *, join_link: str | None, portal_url: str) -> str:
    """Title, blank line, body, then the join link or the portal link."""
    footer = f"Join video call: {join_link}" if join_link else f"View in portal: {portal_url}"
    return f"{title}\n\n{body}\n\n{footer}"


class SmsChannelDispatcher:
    """Normalizes the number, composes the text and calls the SMS provider."""

    channel = Channel.SMS

    def __init__(self, settings: DispatchSettings, provider: SmsProvider | None = None) -> None:
        self._settings = settings
        self._provider = provider or get_sms_provider()
        self._logger = get_logger(__name__, channel=self.channel.value)

    async def send(
        self,
        *,
        phone: str,
        title: str,
        body: str,
        join_link: str | None = None,
    ) -> ChannelOutcome:
        to = normalize_phone(phone, self._settings.default_country_code)
        masked = mask_phone(to)
        log = self._logger.bind(to=masked)
        try:
            message = SmsMessage(
                to=to,
                body=compose_sms_body(
                    title, body, join_link=join_link, portal_url=self._settings.portal_url
                ),
            )
        except ValidationError as exc:
            log.warning("SMS could not be prepared", extra={"error": str(exc)})
            return ChannelOutcome.failed_outcome(self.channel, f"SMS failed: invalid message ({masked})")

        log.info("Sending SMS")
        start = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self._provider.send(message),
                timeout=self._settings.sms_timeout_seconds,
            )
        except TimeoutError:
            notification_sms_timeout_total.inc()
            log.warning(
                "SMS provider did not answer in time, treating as queued",
                extra={"timeout_seconds": self._settings.sms_timeout_seconds},
            )
            return ChannelOutcome.sent_outcome(self.channel)
        except Exception as exc:
            log.exception("SMS provider raised", extra={"error": str(exc)})
            return ChannelOutcome.failed_outcome(self.channel, f"SMS failed: {exc}")
        finally:
            notification_provider_duration_seconds.labels(channel=self.channel.value).observe(
                time.perf_counter() - start
            )

        if result.success:
            return ChannelOutcome.sent_outcome(self.channel, external_id=result.message_id)
        if result.error_code == "timeout":
            notification_sms_timeout_total.inc()
            log.warning(
                "SMS provider timed out, treating as queued",
                extra={"provider": result.provider},
            )
            return ChannelOutcome.sent_outcome(self.channel)
        return ChannelOutcome.failed_outcome(self.channel, f"SMS failed: {result.error}")
