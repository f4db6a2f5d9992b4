"""Preference store and organization automation settings lookup.

Both lookups are opt-out: a missing row, or a failed read, means enabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from notify_service.core.services.base import BaseService
from notify_service.features.notifications.repository import (
    NotificationPreferenceRepository,
    PracticeAutomationSettingsRepository,
    get_automation_settings_repository,
    get_notification_preference_repository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True, slots=True)
class ChannelPreferences:
    """Recipient toggles for one preference key."""

    email_enabled: bool = True
    sms_enabled: bool = True
    in_app_enabled: bool = True

    @property
    def all_disabled(self) -> bool:
        return not (self.email_enabled or self.sms_enabled or self.in_app_enabled)


@dataclass(frozen=True, slots=True)
class OrganizationAutomationSettings:
    """Organization switches for automation-classified events."""

    email_enabled: bool = True
    sms_enabled: bool = True


DEFAULT_PREFERENCES = ChannelPreferences()
DEFAULT_AUTOMATION_SETTINGS = OrganizationAutomationSettings()


class PreferenceStore(BaseService):
    """Read-only access to recipient and organization notification switches."""

    def __init__(
        self,
        preference_repository: NotificationPreferenceRepository | None = None,
        automation_repository: PracticeAutomationSettingsRepository | None = None,
    ) -> None:
        super().__init__()
        self._preferences = preference_repository or get_notification_preference_repository()
        self._automation = automation_repository or get_automation_settings_repository()

    async def get_channel_preferences(
        self,
        session: AsyncSession,
        recipient_id: str,
        preference_key: str,
    ) -> ChannelPreferences:
        """Toggles for (recipient, key); all enabled when no row exists."""
        try:
            row = await self._preferences.get_for_key(session, recipient_id, preference_key)
        except SQLAlchemyError as exc:
            await session.rollback()
            self.logger.warning(
                "Preference lookup failed, using defaults",
                extra={
                    "recipient_id": recipient_id,
                    "preference_key": preference_key,
                    "error": str(exc),
                },
            )
            return DEFAULT_PREFERENCES

        if row is None:
            self._lazy.debug(
                lambda: f"No preferences for {recipient_id}/{preference_key}, using defaults"
            )
            return DEFAULT_PREFERENCES

        return ChannelPreferences(
            email_enabled=row.email_enabled,
            sms_enabled=row.sms_enabled,
            in_app_enabled=row.in_app_enabled,
        )

    async def get_automation_settings(
        self,
        session: AsyncSession,
        organization_id: str | None,
    ) -> OrganizationAutomationSettings:
        """Organization switches; enabled when there is no organization or no row."""
        if not organization_id:
            return DEFAULT_AUTOMATION_SETTINGS

        try:
            row = await self._automation.get_for_organization(session, organization_id)
        except SQLAlchemyError as exc:
            await session.rollback()
            self.logger.warning(
                "Automation settings lookup failed, defaulting to enabled",
                extra={"organization_id": organization_id, "error": str(exc)},
            )
            return DEFAULT_AUTOMATION_SETTINGS

        if row is None:
            self._lazy.debug(
                lambda: f"No automation settings for organization {organization_id}, defaulting to enabled"
            )
            return DEFAULT_AUTOMATION_SETTINGS

        return OrganizationAutomationSettings(
            email_enabled=row.email_enabled,
            sms_enabled=row.sms_enabled,
        )
