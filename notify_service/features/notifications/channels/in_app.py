"""In-app channel dispatcher: writes the inbox row."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from notify_service.features.notifications.channels.base import ChannelOutcome
from notify_service.features.notifications.enums import Channel
from notify_service.features.notifications.models import Notification
from notify_service.features.notifications.repository import (
    NotificationRepository,
    get_notification_repository,
)
from notify_service.infra.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class InAppChannelDispatcher:
    """Persists one Notification per dispatch and commits it on its own.

    The returned outcome carries the new row id as ``external_id`` so later
    log entries of the same dispatch can reference it.
    """

    channel = Channel.IN_APP

    def __init__(
        self,
        repository: NotificationRepository | None = None,
        *,
        severity: str = "info",
    ) -> None:
        self._repository = repository or get_notification_repository()
        self._severity = severity
        self._logger = get_logger(__name__, channel=self.channel.value)

    async def send(
        self,
        session: AsyncSession,
        *,
        recipient_id: str,
        event_kind: str,
        title: str,
        body: str,
        metadata: dict[str, Any] | None = None,
        action_url: str | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ) -> ChannelOutcome:
        notification = Notification(
            recipient_id=recipient_id,
            event_kind=event_kind,
            title=title,
            body=body,
            severity=self._severity,
            context_data=dict(metadata or {}),
            action_url=action_url,
            entity_type=entity_type,
            entity_id=entity_id,
            read=False,
        )
        try:
            notification = await self._repository.create(session, notification)
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            self._logger.exception(
                "Failed to create in-app notification",
                extra={"recipient_id": recipient_id, "error": str(exc)},
            )
            return ChannelOutcome.failed_outcome(self.channel, f"In-app failed: {exc}")

        self._logger.info(
            "In-app notification created",
            extra={"notification_id": str(notification.id), "recipient_id": recipient_id},
        )
        return ChannelOutcome.sent_outcome(self.channel, external_id=str(notification.id))
