"""Tests for NotificationDispatchService orchestration."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from notify_service.features.notifications import (
    GuestNotificationRequest,
    NotificationDispatchService,
    NotificationRequest,
)
from notify_service.features.notifications.classification import AUTOMATION_EVENT_KINDS
from notify_service.features.notifications.delivery_log import DeliveryLogger
from notify_service.features.notifications.models import Notification
from notify_service.features.notifications.repository import (
    get_delivery_log_repository,
    get_notification_repository,
)
from notify_service.features.notifications.service import (
    ALL_CHANNELS_DISABLED,
    MISSING_GUEST_CONTACT_ERROR,
    MISSING_RECIPIENT_ERROR,
)
from notify_service.infra.logging import get_log_context
from tests.utils import (
    RecordingEmailProvider,
    RecordingSmsProvider,
    UnusedCollaborator,
    rows_by_channel,
)


async def _log_rows(session, recipient_id):
    return rows_by_channel(
        await get_delivery_log_repository().list_for_recipient(session, recipient_id)
    )


async def _notification_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Notification))).scalar_one()


async def _known_patient(seed, recipient_id: str = "usr-1", practice_id: str = "prac-1") -> None:
    await seed.profile(
        recipient_id, email="pat@example.com", full_name="Pat Doe", phone="5551234567"
    )
    await seed.patient(recipient_id, practice_id=practice_id)


def _request(event_kind: str = "appointment_reminder", **overrides) -> NotificationRequest:
    return NotificationRequest(
        recipient_id=overrides.pop("recipient_id", "usr-1"),
        event_kind=event_kind,
        title=overrides.pop("title", "Appointment tomorrow"),
        body=overrides.pop("body", "See you at 10:00"),
        **overrides,
    )


# ============================================================================
# Recipient path
# ============================================================================


async def test_all_channels_delivered_with_defaults(
    db_session, seed, dispatch_service, email_provider, sms_provider
) -> None:
    await _known_patient(seed)

    result = await dispatch_service.dispatch(db_session, _request())

    assert result.success is True
    assert result.channels_sent == ["in_app", "email", "sms"]
    assert result.errors == []
    assert result.notification_id is not None

    assert len(email_provider.sent) == 1
    assert "Dear Pat Doe," in email_provider.sent[0].body_html
    assert sms_provider.sent[0].to == "+15551234567"
    assert sms_provider.sent[0].body.endswith("View in portal: https://portal.example.com")

    rows = await _log_rows(db_session, "usr-1")
    assert set(rows) == {"in_app", "email", "sms"}
    assert {row.status for row in rows.values()} == {"sent"}
    assert {row.notification_id for row in rows.values()} == {result.notification_id}
    assert rows["in_app"].external_id == str(result.notification_id)
    assert rows["email"].external_id == "email-1"
    assert rows["sms"].external_id == "SM0001"


async def test_in_app_row_stores_request_fields(db_session, seed, dispatch_service) -> None:
    await _known_patient(seed)

    await dispatch_service.dispatch(
        db_session,
        _request(
            "order_update",
            title="Order shipped",
            body="On its way",
            metadata={"tracking": "1Z"},
            action_url="/orders/7",
            entity_type="order",
            entity_id="7",
        ),
    )

    (notification,) = await get_notification_repository().list_for_recipient(db_session, "usr-1")
    assert notification.event_kind == "order_update"
    assert notification.title == "Order shipped"
    assert notification.context_data == {"tracking": "1Z"}
    assert notification.action_url == "/orders/7"
    assert (notification.entity_type, notification.entity_id) == ("order", "7")
    assert notification.severity == "info"


async def test_full_opt_out_short_circuits(
    db_session, seed, dispatch_service, email_provider, sms_provider
) -> None:
    await _known_patient(seed)
    await seed.preferences(
        "usr-1",
        "appointment_reminders",
        email_enabled=False,
        sms_enabled=False,
        in_app_enabled=False,
    )

    result = await dispatch_service.dispatch(db_session, _request())

    assert result.success is True
    assert result.channels_sent == []
    assert result.message == ALL_CHANNELS_DISABLED
    assert result.errors == [
        "In-app disabled by user preference",
        "Email disabled by user preference",
        "SMS disabled by user preference",
    ]
    assert result.notification_id is None
    assert email_provider.sent == []
    assert sms_provider.sent == []
    assert await get_notification_repository().list_for_recipient(db_session, "usr-1") == []

    rows = await _log_rows(db_session, "usr-1")
    assert {row.status for row in rows.values()} == {"skipped"}
    assert len(rows) == 3


async def test_user_preference_vetoes_single_channel(
    db_session, seed, dispatch_service, sms_provider
) -> None:
    await _known_patient(seed)
    await seed.preferences("usr-1", "order_updates", sms_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request("order_update"))

    assert result.channels_sent == ["in_app", "email"]
    assert result.errors == ["SMS disabled by user preference"]
    assert sms_provider.sent == []
    rows = await _log_rows(db_session, "usr-1")
    assert rows["sms"].status == "skipped"
    assert rows["sms"].error_message == "SMS disabled by user preference"


async def test_preferences_are_scoped_to_the_event_preference_key(
    db_session, seed, dispatch_service
) -> None:
    await _known_patient(seed)
    await seed.preferences("usr-1", "payment_updates", email_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request("order_update"))

    assert result.channels_sent == ["in_app", "email", "sms"]


@pytest.mark.parametrize("event_kind", sorted(AUTOMATION_EVENT_KINDS))
async def test_organization_switch_suppresses_automation_event(
    db_session, seed, dispatch_service, email_provider, event_kind
) -> None:
    await _known_patient(seed)
    await seed.automation("prac-1", email_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request(event_kind))

    assert result.channels_sent == ["in_app", "sms"]
    assert result.errors == ["Email disabled at practice level"]
    assert email_provider.sent == []


@pytest.mark.parametrize(
    "event_kind",
    [
        "patient_message",
        "order_update",
        "payment_failed",
        "security_alert",
        "document_assigned",
        "not_a_known_kind",
    ],
)
async def test_organization_switch_ignored_for_user_driven_event(
    db_session, seed, dispatch_service, event_kind
) -> None:
    await _known_patient(seed)
    await seed.automation("prac-1", email_enabled=False, sms_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request(event_kind))

    assert result.channels_sent == ["in_app", "email", "sms"]


async def test_user_and_organization_vetoes_combine_for_reminder(
    db_session, seed, dispatch_service, email_provider, sms_provider
) -> None:
    await _known_patient(seed)
    await seed.preferences(
        "usr-1", "appointment_reminders", email_enabled=False, sms_enabled=True, in_app_enabled=True
    )
    await seed.automation("prac-1", sms_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request("appointment_reminder"))

    assert result.success is True
    assert result.channels_sent == ["in_app"]
    assert result.errors == [
        "Email disabled by user preference",
        "SMS disabled at practice level",
    ]
    assert email_provider.sent == []
    assert sms_provider.sent == []

    rows = await _log_rows(db_session, "usr-1")
    assert {channel: row.status for channel, row in rows.items()} == {
        "in_app": "sent",
        "email": "skipped",
        "sms": "skipped",
    }
    assert rows["email"].error_message == "Email disabled by user preference"
    assert rows["sms"].error_message == "SMS disabled at practice level"
    assert await _notification_count(db_session) == 1


async def test_user_veto_reported_before_organization_veto(
    db_session, seed, dispatch_service
) -> None:
    await _known_patient(seed)
    await seed.automation("prac-1", sms_enabled=False)
    await seed.preferences("usr-1", "appointment_reminders", sms_enabled=False)

    result = await dispatch_service.dispatch(db_session, _request())

    assert result.errors == ["SMS disabled by user preference"]


async def test_unknown_recipient_gets_in_app_only(
    db_session, dispatch_service, email_provider, sms_provider
) -> None:
    result = await dispatch_service.dispatch(db_session, _request(recipient_id="nobody"))

    assert result.channels_sent == ["in_app"]
    assert result.errors == ["No email address available", "No phone number available"]
    assert email_provider.sent == []
    assert sms_provider.sent == []


async def test_linkage_phone_is_used_for_sms(db_session, seed, dispatch_service, sms_provider) -> None:
    await seed.profile("usr-1", email="pat@example.com", name="Pat")
    await seed.patient("usr-1", practice_id="prac-1", phone="+15559876543")

    result = await dispatch_service.dispatch(db_session, _request())

    assert "sms" in result.channels_sent
    assert sms_provider.sent[0].to == "+15559876543"


async def test_email_failure_does_not_affect_sms(db_session, seed, dispatch_settings) -> None:
    await _known_patient(seed)
    sms_provider = RecordingSmsProvider()
    service = NotificationDispatchService(
        dispatch_settings,
        email_provider=RecordingEmailProvider(raises=RuntimeError("smtp down")),
        sms_provider=sms_provider,
    )

    result = await service.dispatch(db_session, _request())

    assert result.success is True
    assert result.channels_sent == ["in_app", "sms"]
    assert result.errors == ["Email failed: smtp down"]
    rows = await _log_rows(db_session, "usr-1")
    assert rows["email"].status == "failed"
    assert rows["email"].error_message == "Email failed: smtp down"
    assert rows["sms"].status == "sent"


async def test_slow_sms_provider_counts_as_sent(db_session, seed, dispatch_settings) -> None:
    await _known_patient(seed)
    service = NotificationDispatchService(
        dispatch_settings,
        email_provider=RecordingEmailProvider(),
        sms_provider=RecordingSmsProvider(delay=5.0),
    )

    result = await service.dispatch(db_session, _request())

    assert result.channels_sent == ["in_app", "email", "sms"]
    assert result.errors == []
    rows = await _log_rows(db_session, "usr-1")
    assert rows["sms"].status == "sent"
    assert rows["sms"].external_id is None


async def test_join_link_overrides_action_url(
    db_session, seed, dispatch_service, email_provider, sms_provider
) -> None:
    await _known_patient(seed)
    join = "https://video.example.com/j/42"

    await dispatch_service.dispatch(
        db_session,
        _request(
            "appointment_reminder",
            metadata={"join_links": {"patient": join}},
            action_url="/appointments/42",
        ),
    )

    assert f'href="{join}"' in email_provider.sent[0].body_html
    assert sms_provider.sent[0].body.endswith(f"Join video call: {join}")
    (notification,) = await get_notification_repository().list_for_recipient(db_session, "usr-1")
    assert notification.action_url == "/appointments/42"


async def test_request_action_url_used_without_override(
    db_session, seed, dispatch_service, email_provider
) -> None:
    await _known_patient(seed)

    await dispatch_service.dispatch(db_session, _request(action_url="https://portal.example.com/o/1"))

    assert 'href="https://portal.example.com/o/1"' in email_provider.sent[0].body_html


async def test_fallback_greeting_without_profile_name(
    db_session, seed, dispatch_service, email_provider
) -> None:
    await seed.profile("usr-1", email="pat@example.com")

    await dispatch_service.dispatch(db_session, _request())

    assert "Dear Valued User," in email_provider.sent[0].body_html


async def test_delivery_log_failure_is_invisible_to_caller(
    db_session, seed, dispatch_settings, email_provider, sms_provider
) -> None:
    from sqlalchemy.exc import SQLAlchemyError

    class BrokenRepository:
        async def create(self, session, instance):
            raise SQLAlchemyError("log table missing")

    await _known_patient(seed)
    service = NotificationDispatchService(
        dispatch_settings,
        email_provider=email_provider,
        sms_provider=sms_provider,
        delivery_logger=DeliveryLogger(BrokenRepository()),
    )

    result = await service.dispatch(db_session, _request())

    assert result.success is True
    assert result.channels_sent == ["in_app", "email", "sms"]


async def test_log_context_is_cleaned_up(db_session, seed, dispatch_service) -> None:
    await _known_patient(seed)

    await dispatch_service.dispatch(db_session, _request())

    context = get_log_context()
    assert "event_kind" not in context
    assert "recipient" not in context


# ============================================================================
# Guest path and structural failures
# ============================================================================


async def test_guest_dispatch_sends_without_lookups(
    db_session, dispatch_settings, email_provider, sms_provider
) -> None:
    service = NotificationDispatchService(
        dispatch_settings,
        email_provider=email_provider,
        sms_provider=sms_provider,
        contact_resolver=UnusedCollaborator("ContactResolver"),
        preference_store=UnusedCollaborator("PreferenceStore"),
        in_app=UnusedCollaborator("InAppChannelDispatcher"),
    )

    result = await service.dispatch_guest(
        db_session,
        GuestNotificationRequest(
            email="guest@example.com", phone="5550001111", title="Your visit", body="Join soon"
        ),
    )

    assert result.success is True
    assert result.channels_sent == ["email", "sms"]
    assert result.notification_id is None
    assert "Dear Valued User," in email_provider.sent[0].body_html
    assert sms_provider.sent[0].to == "+15550001111"

    rows = await _log_rows(db_session, None)
    assert set(rows) == {"email", "sms"}
    assert all(row.recipient_id is None for row in rows.values())
    assert await _notification_count(db_session) == 0


async def test_guest_dispatch_logs_only_channels_with_contact(
    db_session, dispatch_service, sms_provider
) -> None:
    result = await dispatch_service.dispatch_guest(
        db_session, GuestNotificationRequest(email="guest@example.com", title="T", body="B")
    )

    assert result.channels_sent == ["email"]
    assert result.errors == []
    assert sms_provider.sent == []
    assert set(await _log_rows(db_session, None)) == {"email"}


async def test_guest_dispatch_requires_contact(db_session, dispatch_service) -> None:
    result = await dispatch_service.dispatch_guest(db_session, GuestNotificationRequest())

    assert result.success is False
    assert result.errors == [MISSING_GUEST_CONTACT_ERROR]


async def test_request_without_recipient_routes_to_guest_path(
    db_session, dispatch_service, email_provider
) -> None:
    result = await dispatch_service.dispatch(
        db_session,
        NotificationRequest(event_kind="appointment_reminder", email="guest@example.com"),
    )

    assert result.channels_sent == ["email"]
    assert len(email_provider.sent) == 1
    assert await _notification_count(db_session) == 0


async def test_request_without_recipient_or_contact_is_rejected(
    db_session, dispatch_service, email_provider
) -> None:
    result = await dispatch_service.dispatch(
        db_session, NotificationRequest(event_kind="appointment_reminder")
    )

    assert result.success is False
    assert result.errors == [MISSING_RECIPIENT_ERROR]
    assert email_provider.sent == []
    assert await _log_rows(db_session, None) == {}


# ============================================================================
# Metrics
# ============================================================================


def _sample(name: str, labels: dict[str, str]) -> float:
    from prometheus_client import REGISTRY

    return REGISTRY.get_sample_value(name, labels) or 0.0


async def test_dispatch_counts_category_and_declines(db_session, seed, dispatch_service) -> None:
    await _known_patient(seed)
    await seed.automation("prac-1", sms_enabled=False)
    dispatched = _sample("notification_dispatch_total", {"category": "automation"})
    declined = _sample(
        "notification_policy_declined_total", {"channel": "sms", "reason": "organization_disabled"}
    )

    await dispatch_service.dispatch(db_session, _request("appointment_reminder"))

    assert _sample("notification_dispatch_total", {"category": "automation"}) == dispatched + 1
    assert (
        _sample(
            "notification_policy_declined_total",
            {"channel": "sms", "reason": "organization_disabled"},
        )
        == declined + 1
    )
