"""Best-effort delivery logging.

Every evaluated channel gets exactly one row. A failed write is reported
on this module's logger at WARNING and counted, then discarded: it never
reaches the caller and never triggers a retry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from notify_service.features.notifications.metrics import (
    notification_channel_outcome_total,
    notification_delivery_log_errors_total,
)
from notify_service.features.notifications.models import NotificationDeliveryLog
from notify_service.features.notifications.repository import (
    DeliveryLogRepository,
    get_delivery_log_repository,
)

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from notify_service.features.notifications.channels.base import ChannelOutcome

logger = logging.getLogger(__name__)


class DeliveryLogger:
    """Append-only sink for channel outcomes."""

    def __init__(self, repository: DeliveryLogRepository | None = None) -> None:
        self._repository = repository or get_delivery_log_repository()

    async def record(
        self,
        session: AsyncSession,
        outcome: ChannelOutcome,
        *,
        recipient_id: str | None,
        notification_id: UUID | None = None,
    ) -> None:
        """Write one row for ``outcome`` and commit it on its own."""
        notification_channel_outcome_total.labels(
            channel=outcome.channel.value, status=outcome.status.value
        ).inc()
        entry = NotificationDeliveryLog(
            notification_id=notification_id,
            recipient_id=recipient_id,
            channel=outcome.channel.value,
            status=outcome.status.value,
            external_id=outcome.external_id,
            error_message=outcome.error,
        )
        try:
            await self._repository.create(session, entry)
            await session.commit()
        except Exception as exc:
            notification_delivery_log_errors_total.inc()
            try:
                await session.rollback()
            except Exception as rollback_exc:
                logger.warning(
                    "Rollback after delivery log failure also failed",
                    extra={"error": str(rollback_exc)},
                )
            logger.warning(
                "Failed to write delivery log entry",
                extra={
                    "channel": outcome.channel.value,
                    "status": outcome.status.value,
                    "recipient_id": recipient_id,
                    "error": str(exc),
                },
            )
