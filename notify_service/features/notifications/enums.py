"""Enumerations shared across the notifications feature."""

from __future__ import annotations

from enum import StrEnum


class Channel(StrEnum):
    """Delivery channel."""

    IN_APP = "in_app"
    EMAIL = "email"
    SMS = "sms"

    @property
    def label(self) -> str:
        """Human-readable name used in result messages."""
        return _LABELS[self]


_LABELS = {Channel.IN_APP: "In-app", Channel.EMAIL: "Email", Channel.SMS: "SMS"}

# Evaluation and log order.
CHANNEL_ORDER: tuple[Channel, ...] = (Channel.IN_APP, Channel.EMAIL, Channel.SMS)


class DeliveryStatus(StrEnum):
    """Outcome recorded for one channel attempt."""

    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


class DeclineReason(StrEnum):
    """Why the policy engine declined a channel."""

    USER_DISABLED = "user_disabled"
    ORGANIZATION_DISABLED = "organization_disabled"
    NO_CONTACT = "no_contact"
