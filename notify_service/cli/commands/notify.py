"""Notification commands: dispatch, guest dispatch and classification.

Example:
    # Dispatch to a known recipient
    notify-service notify dispatch usr-1 appointment_reminder \\
        --title "Appointment tomorrow" --body "See you at 10:00"

    # Dispatch to a contact without an account
    notify-service notify guest --email guest@example.com --title "Hi" --body "..."

    # Show how an event kind is classified
    notify-service notify classify refill_reminder
"""

import json
import sys
from typing import Any

import click
from pydantic import ValidationError

from notify_service.cli.utils import coro, echo_json, error, warning


def _parse_metadata(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--metadata") from e
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--metadata")
    return value


def _emit(result: Any) -> None:
    echo_json(result.model_dump(mode="json"))
    if not result.success:
        error("; ".join(result.errors) or result.message or "Dispatch failed")
        sys.exit(1)
    if result.errors:
        warning(f"{len(result.errors)} channel(s) not delivered")


@click.group(name="notify")
def notify() -> None:
    """Notification dispatch commands."""


@notify.command()
@click.argument("recipient_id")
@click.argument("event_kind")
@click.option("--title", default="", help="Notification title")
@click.option("--body", default="", help="Notification body")
@click.option("--metadata", "metadata_json", default=None, help="Metadata as a JSON object")
@click.option("--action-url", default=None, help="Link shown in email and in-app")
@click.option("--entity-type", default=None, help="Related entity type")
@click.option("--entity-id", default=None, help="Related entity id")
@coro
async def dispatch(
    recipient_id: str,
    event_kind: str,
    title: str,
    body: str,
    metadata_json: str | None,
    action_url: str | None,
    entity_type: str | None,
    entity_id: str | None,
) -> None:
    """Dispatch EVENT_KIND to RECIPIENT_ID over every permitted channel."""
    from notify_service.features.notifications import NotificationRequest, get_dispatch_service
    from notify_service.infra.database import get_async_session

    try:
        request = NotificationRequest(
            recipient_id=recipient_id,
            event_kind=event_kind,
            title=title,
            body=body,
            metadata=_parse_metadata(metadata_json),
            action_url=action_url,
            entity_type=entity_type,
            entity_id=entity_id,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    async with get_async_session() as session:
        result = await get_dispatch_service().dispatch(session, request)
    _emit(result)


@notify.command()
@click.option("--email", default=None, help="Recipient email address")
@click.option("--phone", default=None, help="Recipient phone number")
@click.option("--title", default="", help="Notification title")
@click.option("--body", default="", help="Notification body")
@click.option("--metadata", "metadata_json", default=None, help="Metadata as a JSON object")
@coro
async def guest(
    email: str | None,
    phone: str | None,
    title: str,
    body: str,
    metadata_json: str | None,
) -> None:
    """Dispatch to a guest contact (email and/or SMS only)."""
    from notify_service.features.notifications import (
        GuestNotificationRequest,
        get_dispatch_service,
    )
    from notify_service.infra.database import get_async_session

    try:
        request = GuestNotificationRequest(
            email=email,
            phone=phone,
            title=title,
            body=body,
            metadata=_parse_metadata(metadata_json),
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e
    async with get_async_session() as session:
        result = await get_dispatch_service().dispatch_guest(session, request)
    _emit(result)


@notify.command()
@click.argument("event_kind")
def classify(event_kind: str) -> None:
    """Show the preference key and category of EVENT_KIND."""
    from notify_service.features.notifications import classify_event

    classification = classify_event(event_kind)
    echo_json(
        {
            "event_kind": classification.event_kind,
            "preference_key": classification.preference_key,
            "is_automation": classification.is_automation,
            "category": str(classification.category),
        }
    )
