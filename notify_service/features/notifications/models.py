"""SQLAlchemy models for the notifications feature.

Python attribute names follow the dispatch vocabulary (recipient_id,
event_kind, body); the column names follow the existing schema
(user_id, notification_type, message, metadata).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from notify_service.core.database import (
    Base,
    CreatedAtMixin,
    UUIDv7PKMixin,
    UUIDv7TimestampedBase,
)


class NotificationPreference(UUIDv7TimestampedBase):
    """Per-recipient channel toggles for one preference key.

    Written by the recipient through their settings screen; read-only to
    the dispatch engine. A missing row means every channel is enabled.
    """

    __tablename__ = "notification_preferences"
    __table_args__ = (UniqueConstraint("user_id", "event_type"),)

    recipient_id: Mapped[str] = mapped_column(
        "user_id",
        String(255),
        nullable=False,
        index=True,
        comment="Recipient identity",
    )
    preference_key: Mapped[str] = mapped_column(
        "event_type",
        String(100),
        nullable=False,
        comment="Canonical preference key (e.g. appointment_reminders)",
    )
    email_enabled: Mapped[bool] = mapped_column(Boolean(), default=True, nullable=False)
    sms_enabled: Mapped[bool] = mapped_column(Boolean(), default=True, nullable=False)
    in_app_enabled: Mapped[bool] = mapped_column(Boolean(), default=True, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<NotificationPreference(recipient_id={self.recipient_id!r}, "
            f"preference_key={self.preference_key!r})>"
        )


class PracticeAutomationSettings(UUIDv7TimestampedBase):
    """Organization-level switches for automated (reminder/follow-up) messages."""

    __tablename__ = "practice_automation_settings"

    organization_id: Mapped[str] = mapped_column(
        "practice_id",
        String(255),
        unique=True,
        nullable=False,
        comment="Practice (organization) identity",
    )
    email_enabled: Mapped[bool] = mapped_column(
        "enable_email_notifications",
        Boolean(),
        default=True,
        nullable=False,
    )
    sms_enabled: Mapped[bool] = mapped_column(
        "enable_sms_notifications",
        Boolean(),
        default=True,
        nullable=False,
    )


class Notification(Base, UUIDv7PKMixin, CreatedAtMixin):
    """In-app inbox entry.

    Created once by the in-app dispatcher. Only the inbox UI changes it
    afterwards (the ``read`` flag).
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_id_read", "user_id", "read"),
        Index("ix_notifications_entity", "entity_type", "entity_id"),
    )

    recipient_id: Mapped[str] = mapped_column(
        "user_id",
        String(255),
        nullable=False,
        index=True,
        comment="Recipient identity",
    )
    event_kind: Mapped[str] = mapped_column(
        "notification_type",
        String(100),
        nullable=False,
        comment="Event kind as supplied by the caller",
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column("message", Text(), nullable=False)
    severity: Mapped[str] = mapped_column(String(20), default="info", nullable=False)
    context_data: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSONB().with_variant(JSON(), "sqlite"),
        default=dict,
        nullable=False,
        comment="Caller-supplied metadata",
    )
    action_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    entity_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    entity_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    read: Mapped[bool] = mapped_column(Boolean(), default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, recipient_id={self.recipient_id!r}, event_kind={self.event_kind!r})>"


class NotificationDeliveryLog(Base, UUIDv7PKMixin, CreatedAtMixin):
    """Append-only record of one channel attempt in one dispatch call."""

    __tablename__ = "notification_delivery_logs"
    __table_args__ = (Index("ix_notification_delivery_logs_channel_status", "channel", "status"),)

    notification_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("notifications.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="In-app notification of the same dispatch, when one was written",
    )
    recipient_id: Mapped[str | None] = mapped_column(
        "user_id",
        String(255),
        nullable=True,
        index=True,
        comment="Recipient identity; empty for guest deliveries",
    )
    channel: Mapped[str] = mapped_column(String(20), nullable=False, comment="email, sms, in_app")
    status: Mapped[str] = mapped_column(String(20), nullable=False, comment="sent, failed, skipped")
    external_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="Provider message id"
    )
    error_message: Mapped[str | None] = mapped_column(Text(), nullable=True)

    def __repr__(self) -> str:
        return f"<NotificationDeliveryLog(channel={self.channel!r}, status={self.status!r})>"
