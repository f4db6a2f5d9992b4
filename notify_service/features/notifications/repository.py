"""Repositories for the notifications feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from notify_service.core.database.repository import BaseRepository
from notify_service.features.notifications.models import (
    Notification,
    NotificationDeliveryLog,
    NotificationPreference,
    PracticeAutomationSettings,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class NotificationPreferenceRepository(BaseRepository[NotificationPreference]):
    """Repository for recipient channel toggles."""

    def __init__(self) -> None:
        super().__init__(NotificationPreference)

    async def get_for_key(
        self,
        session: AsyncSession,
        recipient_id: str,
        preference_key: str,
    ) -> NotificationPreference | None:
        """Get the toggles row for (recipient, preference key), if any."""
        stmt = select(NotificationPreference).where(
            NotificationPreference.recipient_id == recipient_id,
            NotificationPreference.preference_key == preference_key,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class PracticeAutomationSettingsRepository(BaseRepository[PracticeAutomationSettings]):
    """Repository for practice-level automation switches."""

    def __init__(self) -> None:
        super().__init__(PracticeAutomationSettings)

    async def get_for_organization(
        self,
        session: AsyncSession,
        organization_id: str,
    ) -> PracticeAutomationSettings | None:
        return await self.get_by(session, PracticeAutomationSettings.organization_id, organization_id)


class NotificationRepository(BaseRepository[Notification]):
    """Repository for in-app notifications."""

    def __init__(self) -> None:
        super().__init__(Notification)

    async def list_for_recipient(
        self,
        session: AsyncSession,
        recipient_id: str,
        *,
        limit: int = 50,
    ) -> Sequence[Notification]:
        """Newest-first notifications of one recipient."""
        stmt = (
            select(Notification)
            .where(Notification.recipient_id == recipient_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class DeliveryLogRepository(BaseRepository[NotificationDeliveryLog]):
    """Repository for delivery log entries (append-only)."""

    def __init__(self) -> None:
        super().__init__(NotificationDeliveryLog)

    async def list_for_notification(
        self,
        session: AsyncSession,
        notification_id: UUID,
    ) -> Sequence[NotificationDeliveryLog]:
        stmt = (
            select(NotificationDeliveryLog)
            .where(NotificationDeliveryLog.notification_id == notification_id)
            .order_by(NotificationDeliveryLog.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_recipient(
        self,
        session: AsyncSession,
        recipient_id: str | None,
    ) -> Sequence[NotificationDeliveryLog]:
        """Entries of one recipient; ``None`` selects guest deliveries."""
        if recipient_id is None:
            condition = NotificationDeliveryLog.recipient_id.is_(None)
        else:
            condition = NotificationDeliveryLog.recipient_id == recipient_id
        stmt = select(NotificationDeliveryLog).where(condition).order_by(NotificationDeliveryLog.id)
        result = await session.execute(stmt)
        return result.scalars().all()


_preference_repository: NotificationPreferenceRepository | None = None
_automation_settings_repository: PracticeAutomationSettingsRepository | None = None
_notification_repository: NotificationRepository | None = None
_delivery_log_repository: DeliveryLogRepository | None = None


def get_notification_preference_repository() -> NotificationPreferenceRepository:
    """Get NotificationPreferenceRepository singleton instance."""
    global _preference_repository
    if _preference_repository is None:
        _preference_repository = NotificationPreferenceRepository()
    return _preference_repository


def get_automation_settings_repository() -> PracticeAutomationSettingsRepository:
    """Get PracticeAutomationSettingsRepository singleton instance."""
    global _automation_settings_repository
    if _automation_settings_repository is None:
        _automation_settings_repository = PracticeAutomationSettingsRepository()
    return _automation_settings_repository


def get_notification_repository() -> NotificationRepository:
    """Get NotificationRepository singleton instance."""
    global _notification_repository
    if _notification_repository is None:
        _notification_repository = NotificationRepository()
    return _notification_repository


def get_delivery_log_repository() -> DeliveryLogRepository:
    """Get DeliveryLogRepository singleton instance."""
    global _delivery_log_repository
    if _delivery_log_repository is None:
        _delivery_log_repository = DeliveryLogRepository()
    return _delivery_log_repository
