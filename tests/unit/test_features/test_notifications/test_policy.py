"""Tests for channel policy evaluation."""

from __future__ import annotations

import pytest

from notify_service.features.notifications.classification import (
    AUTOMATION_EVENT_KINDS,
    classify_event,
)
from notify_service.features.notifications.contacts import NO_CONTACT, ContactInfo
from notify_service.features.notifications.enums import Channel, DeclineReason
from notify_service.features.notifications.policy import (
    all_user_disabled,
    decide_channel,
    decline_message,
    evaluate_policy,
)
from notify_service.features.notifications.preferences import (
    DEFAULT_AUTOMATION_SETTINGS,
    DEFAULT_PREFERENCES,
    ChannelPreferences,
    OrganizationAutomationSettings,
)

FULL_CONTACT = ContactInfo(
    email="pat@example.com",
    display_name="Pat",
    phone="+15551234567",
    organization_id="prac-1",
)
ORG_OFF = OrganizationAutomationSettings(email_enabled=False, sms_enabled=False)


def test_defaults_allow_every_channel_with_full_contact() -> None:
    policy = evaluate_policy(
        classify_event("order_update"), DEFAULT_PREFERENCES, FULL_CONTACT, DEFAULT_AUTOMATION_SETTINGS
    )

    assert all(policy.allows(channel) for channel in Channel)
    assert policy.declined == []


@pytest.mark.parametrize(
    "event_kind",
    [
        *sorted(AUTOMATION_EVENT_KINDS),
        "order_update",
        "patient_message",
        "payment_failed",
        "security_alert",
        "unknown_kind",
    ],
)
def test_user_preference_vetoes_every_event_category(event_kind: str) -> None:
    preferences = ChannelPreferences(email_enabled=False, sms_enabled=False, in_app_enabled=True)

    policy = evaluate_policy(
        classify_event(event_kind), preferences, FULL_CONTACT, DEFAULT_AUTOMATION_SETTINGS
    )

    assert policy.allows(Channel.IN_APP)
    assert policy[Channel.EMAIL].reason is DeclineReason.USER_DISABLED
    assert policy[Channel.SMS].message == "SMS disabled by user preference"


USER_DRIVEN_SAMPLE = [
    "patient_message",
    "order_update",
    "payment_failed",
    "security_alert",
    "document_assigned",
    "not_a_known_kind",
]


@pytest.mark.parametrize("event_kind", sorted(AUTOMATION_EVENT_KINDS))
def test_organization_switch_applies_to_automation_events(event_kind: str) -> None:
    policy = evaluate_policy(classify_event(event_kind), DEFAULT_PREFERENCES, FULL_CONTACT, ORG_OFF)

    assert policy.allows(Channel.IN_APP)
    assert policy[Channel.EMAIL].reason is DeclineReason.ORGANIZATION_DISABLED
    assert policy[Channel.EMAIL].message == "Email disabled at practice level"
    assert policy[Channel.SMS].message == "SMS disabled at practice level"


@pytest.mark.parametrize("event_kind", USER_DRIVEN_SAMPLE)
def test_organization_switch_never_suppresses_user_driven_events(event_kind: str) -> None:
    policy = evaluate_policy(classify_event(event_kind), DEFAULT_PREFERENCES, FULL_CONTACT, ORG_OFF)

    assert policy.allows(Channel.EMAIL)
    assert policy.allows(Channel.SMS)


def test_missing_contact_declines_external_channels_only() -> None:
    policy = evaluate_policy(
        classify_event("order_update"), DEFAULT_PREFERENCES, NO_CONTACT, DEFAULT_AUTOMATION_SETTINGS
    )

    assert policy.allows(Channel.IN_APP)
    assert policy[Channel.EMAIL].message == "No email address available"
    assert policy[Channel.SMS].message == "No phone number available"


def test_user_veto_takes_precedence_over_organization_and_contact() -> None:
    decision = decide_channel(
        Channel.SMS,
        user_enabled=False,
        has_contact=False,
        is_automation=True,
        organization_enabled=False,
    )

    assert decision.allowed is False
    assert decision.reason is DeclineReason.USER_DISABLED


def test_organization_veto_takes_precedence_over_missing_contact() -> None:
    decision = decide_channel(
        Channel.EMAIL,
        user_enabled=True,
        has_contact=False,
        is_automation=True,
        organization_enabled=False,
    )

    assert decision.reason is DeclineReason.ORGANIZATION_DISABLED


def test_all_user_disabled_lists_channels_in_order() -> None:
    policy = all_user_disabled()

    assert [d.channel for d in policy.declined] == [Channel.IN_APP, Channel.EMAIL, Channel.SMS]
    assert [d.message for d in policy.declined] == [
        "In-app disabled by user preference",
        "Email disabled by user preference",
        "SMS disabled by user preference",
    ]


def test_decline_message_for_in_app_without_recipient() -> None:
    assert decline_message(Channel.IN_APP, DeclineReason.NO_CONTACT) == "No recipient available"
