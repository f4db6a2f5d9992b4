"""Channel policy.

decision(channel) = user_pref AND has_contact AND (NOT is_automation OR org_setting)

User preference vetoes every channel for every event kind. Organization
settings only apply to automation events; they never suppress a
user-driven event. In-app needs no contact data and has no organization
switch.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from notify_service.features.notifications.enums import CHANNEL_ORDER, Channel, DeclineReason

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notify_service.features.notifications.classification import EventClassification
    from notify_service.features.notifications.contacts import ContactInfo
    from notify_service.features.notifications.preferences import (
        ChannelPreferences,
        OrganizationAutomationSettings,
    )

_NO_CONTACT_MESSAGES = MappingProxyType(
    {
        Channel.EMAIL: "No email address available",
        Channel.SMS: "No phone number available",
        Channel.IN_APP: "No recipient available",
    }
)


def decline_message(channel: Channel, reason: DeclineReason) -> str:
    """Human-readable explanation for a declined channel."""
    if reason is DeclineReason.USER_DISABLED:
        return f"{channel.label} disabled by user preference"
    if reason is DeclineReason.ORGANIZATION_DISABLED:
        return f"{channel.label} disabled at practice level"
    return _NO_CONTACT_MESSAGES[channel]


@dataclass(frozen=True, slots=True)
class ChannelDecision:
    """Final decision for one channel."""

    channel: Channel
    allowed: bool
    reason: DeclineReason | None = None

    @property
    def message(self) -> str | None:
        if self.reason is None:
            return None
        return decline_message(self.channel, self.reason)


@dataclass(frozen=True, slots=True)
class PolicyDecision:
    """Decisions for all three channels of one dispatch."""

    decisions: Mapping[Channel, ChannelDecision]

    def __getitem__(self, channel: Channel) -> ChannelDecision:
        return self.decisions[channel]

    def allows(self, channel: Channel) -> bool:
        return self.decisions[channel].allowed

    @property
    def declined(self) -> list[ChannelDecision]:
        return [self.decisions[c] for c in CHANNEL_ORDER if not self.decisions[c].allowed]


def decide_channel(
    channel: Channel,
    *,
    user_enabled: bool,
    has_contact: bool,
    is_automation: bool,
    organization_enabled: bool,
) -> ChannelDecision:
    """Evaluate one channel.

    Reason precedence: user preference, then organization (automation only),
    then missing contact data.
    """
    if not user_enabled:
        return ChannelDecision(channel, False, DeclineReason.USER_DISABLED)
    if is_automation and not organization_enabled:
        return ChannelDecision(channel, False, DeclineReason.ORGANIZATION_DISABLED)
    if not has_contact:
        return ChannelDecision(channel, False, DeclineReason.NO_CONTACT)
    return ChannelDecision(channel, True)


def evaluate_policy(
    classification: EventClassification,
    preferences: ChannelPreferences,
    contact: ContactInfo,
    organization: OrganizationAutomationSettings,
) -> PolicyDecision:
    """Combine classifier output, recipient toggles and organization settings."""
    automation = classification.is_automation
    decisions = {
        Channel.IN_APP: decide_channel(
            Channel.IN_APP,
            user_enabled=preferences.in_app_enabled,
            has_contact=True,
            is_automation=automation,
            organization_enabled=True,
        ),
        Channel.EMAIL: decide_channel(
            Channel.EMAIL,
            user_enabled=preferences.email_enabled,
            has_contact=contact.has_email,
            is_automation=automation,
            organization_enabled=organization.email_enabled,
        ),
        Channel.SMS: decide_channel(
            Channel.SMS,
            user_enabled=preferences.sms_enabled,
            has_contact=contact.has_phone,
            is_automation=automation,
            organization_enabled=organization.sms_enabled,
        ),
    }
    return PolicyDecision(MappingProxyType(decisions))


def all_user_disabled() -> PolicyDecision:
    """Decisions for the full opt-out short-circuit."""
    return PolicyDecision(
        MappingProxyType(
            {c: ChannelDecision(c, False, DeclineReason.USER_DISABLED) for c in CHANNEL_ORDER}
        )
    )
