"""Pydantic schemas for the notifications feature."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr


def extract_join_link(metadata: dict[str, Any]) -> str | None:
    """Video-session join link for the recipient (``metadata.join_links.patient``)."""
    join_links = metadata.get("join_links")
    if isinstance(join_links, dict):
        link = join_links.get("patient")
        if isinstance(link, str) and link.strip():
            return link.strip()
    return None


def extract_override_action_url(metadata: dict[str, Any]) -> str | None:
    """The one link callers may embed in metadata: join link, else ``action_url``."""
    link = extract_join_link(metadata)
    if link:
        return link
    action_url = metadata.get("action_url")
    if isinstance(action_url, str) and action_url.strip():
        return action_url.strip()
    return None


# ============================================================================
# Request Schemas
# ============================================================================


class NotificationContent(BaseModel):
    """Message content shared by recipient and guest requests.

    ``metadata`` stays an opaque map; only the override link is read from
    it, once, into ``join_link`` and ``override_action_url``.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(default="", max_length=500, description="Notification title")
    body: str = Field(
        default="",
        validation_alias=AliasChoices("body", "message"),
        description="Notification body text",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque caller data; may carry join_links.patient or action_url",
    )
    _join_link: str | None = PrivateAttr(default=None)
    _override_action_url: str | None = PrivateAttr(default=None)

    def model_post_init(self, context: Any, /) -> None:
        self._join_link = extract_join_link(self.metadata)
        self._override_action_url = extract_override_action_url(self.metadata)

    @property
    def join_link(self) -> str | None:
        """Video-session join link taken from ``metadata.join_links.patient``."""
        return self._join_link

    @property
    def override_action_url(self) -> str | None:
        """Link from metadata that replaces ``action_url`` (join link first)."""
        return self._override_action_url


class NotificationRequest(NotificationContent):
    """Dispatch request for a recipient with a durable identity.

    ``email``/``phone`` are only used when ``recipient_id`` is absent, in
    which case the request is delivered through the guest path.
    """

    recipient_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("recipient_id", "user_id"),
        max_length=255,
        description="Recipient identity",
    )
    event_kind: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("event_kind", "notification_type"),
        description="Event kind (e.g. appointment_reminder)",
    )
    action_url: str | None = Field(default=None, max_length=2048)
    entity_type: str | None = Field(default=None, max_length=100)
    entity_id: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, description="Guest fallback email")
    phone: str | None = Field(default=None, description="Guest fallback phone")

    @property
    def has_guest_contact(self) -> bool:
        return bool(self.email or self.phone)


class GuestNotificationRequest(NotificationContent):
    """Dispatch request for a contact without a durable identity."""

    email: str | None = Field(default=None, description="Recipient email address")
    phone: str | None = Field(default=None, description="Recipient phone number")

    @property
    def has_contact(self) -> bool:
        return bool(self.email or self.phone)


# ============================================================================
# Response Schemas
# ============================================================================


class DispatchResult(BaseModel):
    """Aggregate outcome of one dispatch call.

    ``success`` is false only for a request that could not be processed at
    all. Declined and failed channels are listed in ``errors``.
    """

    success: bool
    channels_sent: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    notification_id: UUID | None = Field(
        default=None, description="In-app notification id, when one was written"
    )
    message: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "channels_sent": ["in_app"],
                "errors": [
                    "Email disabled by user preference",
                    "SMS disabled at practice level",
                ],
                "notification_id": "01890f3e-8c5b-7cc4-9a55-0f1f4b7d2a10",
                "message": None,
            }
        }
    )


class EventClassificationResponse(BaseModel):
    """Classifier output for an event kind."""

    event_kind: str
    preference_key: str
    is_automation: bool
    category: str
