"""Email channel dispatcher."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from pydantic import ValidationError

from notify_service.features.notifications.channels.base import ChannelOutcome
from notify_service.features.notifications.enums import Channel
from notify_service.features.notifications.metrics import notification_provider_duration_seconds
from notify_service.features.notifications.templates import (
    EmailTemplateRenderer,
    TemplateRenderError,
)
from notify_service.infra.email import EmailMessage, get_email_provider
from notify_service.infra.logging import get_logger

if TYPE_CHECKING:
    from notify_service.core.settings import DispatchSettings
    from notify_service.infra.email import EmailProvider


class EmailChannelDispatcher:
    """Renders the notification email and hands it to the email provider.

    Provider failures come back as a failed outcome, never as an exception.
    """

    channel = Channel.EMAIL

    def __init__(
        self,
        settings: DispatchSettings,
        provider: EmailProvider | None = None,
        renderer: EmailTemplateRenderer | None = None,
    ) -> None:
        self._settings = settings
        self._provider = provider or get_email_provider()
        self._renderer = renderer or EmailTemplateRenderer()
        self._logger = get_logger(__name__, channel=self.channel.value)

    def subject_for(self, title: str | None) -> str:
        return title or f"Notification from {self._settings.brand_name}"

    async def send(
        self,
        *,
        to: str,
        recipient_name: str,
        title: str,
        body: str,
        action_url: str,
    ) -> ChannelOutcome:
        try:
            rendered = self._renderer.render(
                recipient_name=recipient_name,
                title=title,
                body=body,
                action_url=action_url,
                portal_url=self._settings.portal_url,
                brand_name=self._settings.brand_name,
            )
            message = EmailMessage(
                to=[to],
                subject=self.subject_for(title),
                body_html=rendered.html,
                body_text=rendered.text,
            )
        except (TemplateRenderError, ValidationError) as exc:
            self._logger.warning("Email could not be prepared", extra={"error": str(exc)})
            return ChannelOutcome.failed_outcome(self.channel, f"Email failed: {exc}")

        start = time.perf_counter()
        try:
            result = await self._provider.send(message)
        except Exception as exc:
            self._logger.exception("Email provider raised", extra={"error": str(exc)})
            return ChannelOutcome.failed_outcome(self.channel, f"Email failed: {exc}")
        finally:
            notification_provider_duration_seconds.labels(channel=self.channel.value).observe(
                time.perf_counter() - start
            )

        if result.success:
            return ChannelOutcome.sent_outcome(self.channel, external_id=result.message_id)
        return ChannelOutcome.failed_outcome(self.channel, f"Email failed: {result.error}")
