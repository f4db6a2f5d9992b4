"""Shared types for channel dispatchers."""

from __future__ import annotations

from dataclasses import dataclass

from notify_service.features.notifications.enums import Channel, DeliveryStatus


@dataclass(frozen=True, slots=True)
class ChannelOutcome:
    """Result of one channel attempt.

    Attributes:
        channel: Channel that was evaluated
        status: sent, failed or skipped
        external_id: Provider message id (or the in-app notification id)
        error: Human-readable reason when not sent
    """

    channel: Channel
    status: DeliveryStatus
    external_id: str | None = None
    error: str | None = None

    @property
    def sent(self) -> bool:
        return self.status is DeliveryStatus.SENT

    @classmethod
    def sent_outcome(cls, channel: Channel, external_id: str | None = None) -> ChannelOutcome:
        return cls(channel, DeliveryStatus.SENT, external_id=external_id)

    @classmethod
    def failed_outcome(cls, channel: Channel, error: str) -> ChannelOutcome:
        return cls(channel, DeliveryStatus.FAILED, error=error)

    @classmethod
    def skipped_outcome(cls, channel: Channel, reason: str | None = None) -> ChannelOutcome:
        return cls(channel, DeliveryStatus.SKIPPED, error=reason)
