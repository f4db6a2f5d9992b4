"""Tests for best-effort delivery logging."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from notify_service.features.notifications.channels import ChannelOutcome
from notify_service.features.notifications.delivery_log import DeliveryLogger
from notify_service.features.notifications.enums import Channel
from notify_service.features.notifications.repository import get_delivery_log_repository


async def test_record_writes_one_row(db_session) -> None:
    await DeliveryLogger().record(
        db_session,
        ChannelOutcome.sent_outcome(Channel.SMS, external_id="SM1"),
        recipient_id="usr-1",
    )

    rows = await get_delivery_log_repository().list_for_recipient(db_session, "usr-1")
    assert len(rows) == 1
    assert (rows[0].channel, rows[0].status, rows[0].external_id) == ("sms", "sent", "SM1")
    assert rows[0].error_message is None


async def test_skipped_row_carries_reason(db_session) -> None:
    await DeliveryLogger().record(
        db_session,
        ChannelOutcome.skipped_outcome(Channel.EMAIL, "No email address available"),
        recipient_id="usr-1",
    )

    (row,) = await get_delivery_log_repository().list_for_recipient(db_session, "usr-1")
    assert row.status == "skipped"
    assert row.error_message == "No email address available"


async def test_guest_rows_have_no_recipient(db_session) -> None:
    await DeliveryLogger().record(
        db_session, ChannelOutcome.sent_outcome(Channel.EMAIL, "e-1"), recipient_id=None
    )

    rows = await get_delivery_log_repository().list_for_recipient(db_session, None)
    assert [row.recipient_id for row in rows] == [None]


async def test_write_failure_is_swallowed_and_logged(db_session, caplog) -> None:
    class BrokenRepository:
        async def create(self, session, instance):
            raise SQLAlchemyError("disk I/O error")

    with caplog.at_level(logging.WARNING, logger="notify_service.features.notifications.delivery_log"):
        await DeliveryLogger(BrokenRepository()).record(
            db_session,
            ChannelOutcome.failed_outcome(Channel.EMAIL, "Email failed: x"),
            recipient_id="usr-1",
        )

    assert "Failed to write delivery log entry" in caplog.text
