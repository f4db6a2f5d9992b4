"""Tests for request schemas and metadata link extraction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from notify_service.features.notifications.schemas import (
    GuestNotificationRequest,
    NotificationRequest,
    extract_join_link,
    extract_override_action_url,
)


def test_join_link_is_read_from_patient_entry() -> None:
    metadata = {"join_links": {"patient": " https://video.example.com/j/1 ", "provider": "x"}}

    assert extract_join_link(metadata) == "https://video.example.com/j/1"
    assert extract_override_action_url(metadata) == "https://video.example.com/j/1"


def test_override_falls_back_to_metadata_action_url() -> None:
    metadata = {"join_links": {"provider": "https://video.example.com/p"}, "action_url": "/orders/9"}

    assert extract_join_link(metadata) is None
    assert extract_override_action_url(metadata) == "/orders/9"


@pytest.mark.parametrize("metadata", [{}, {"join_links": "nope"}, {"action_url": "  "}])
def test_no_override_when_metadata_has_no_links(metadata: dict) -> None:
    assert extract_override_action_url(metadata) is None


def test_request_accepts_legacy_field_names() -> None:
    request = NotificationRequest.model_validate(
        {
            "user_id": "usr-1",
            "notification_type": "order_update",
            "title": "Order shipped",
            "message": "Your order is on its way",
            "metadata": {"action_url": "/orders/1"},
        }
    )

    assert request.recipient_id == "usr-1"
    assert request.event_kind == "order_update"
    assert request.body == "Your order is on its way"
    assert request.override_action_url == "/orders/1"
    assert request.join_link is None


def test_event_kind_is_required() -> None:
    with pytest.raises(ValidationError):
        NotificationRequest(recipient_id="usr-1", event_kind="")


def test_guest_contact_flags() -> None:
    assert GuestNotificationRequest(phone="5551234567").has_contact is True
    assert GuestNotificationRequest().has_contact is False
    assert NotificationRequest(event_kind="x", email="g@example.com").has_guest_contact is True


def test_links_cannot_be_supplied_directly() -> None:
    request = NotificationRequest.model_validate(
        {
            "recipient_id": "usr-1",
            "event_kind": "appointment_reminder",
            "join_link": "https://evil.example.com",
            "override_action_url": "https://evil.example.com",
        }
    )

    assert request.join_link is None
    assert request.override_action_url is None


def test_links_are_not_part_of_the_request_schema() -> None:
    properties = NotificationRequest.model_json_schema()["properties"]

    assert "join_link" not in properties
    assert "override_action_url" not in properties
    assert "metadata" in properties
