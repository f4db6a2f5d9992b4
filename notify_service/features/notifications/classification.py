"""Event classification.

Maps a caller-supplied event kind onto the preference key the recipient
controls and tells whether the event is automation (subject to
practice-level suppression) or user-driven (never suppressed by the
practice).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final

DEFAULT_PREFERENCE_KEY: Final = "system_alerts"


class EventCategory(StrEnum):
    """Who triggered the event."""

    AUTOMATION = "automation"
    USER_DRIVEN = "user_driven"


EVENT_PREFERENCE_KEYS: Final = MappingProxyType(
    {
        # Messaging
        "practice_message": "practice_message_received",
        "practice_message_received": "practice_message_received",
        "patient_message": "patient_message_received",
        "patient_message_received": "patient_message_received",
        # Appointments
        "appointment_booked": "appointment_booked",
        "appointment_confirmed": "appointment_confirmed",
        "appointment_rescheduled": "appointment_rescheduled",
        "appointment_cancelled": "appointment_cancelled",
        "appointment_changed": "appointment_changes",
        "appointment_reminder": "appointment_reminders",
        "appointment_follow_up": "follow_ups",
        "follow_up_reminder": "follow_ups",
        "patient_check_in": "patient_check_ins",
        # Clinical
        "medication_reminder": "prescription_status",
        "refill_reminder": "prescription_status",
        "prescription_created": "new_prescriptions",
        "prescription_updated": "prescription_status",
        "referral_received": "new_referrals",
        # Documents and forms
        "document_assigned": "document_assigned",
        "document_uploaded": "document_uploaded_by_patient",
        "intake_form_submitted": "new_patient_forms",
        # Orders, payments and subscriptions
        "order_update": "order_updates",
        "order_issue": "order_updates",
        "product_request_approved": "order_updates",
        "product_request_rejected": "order_updates",
        "payment_failed": "payment_updates",
        "payment_received": "payment_updates",
        "subscription_activated": "payment_updates",
        "subscription_renewed": "payment_updates",
        "subscription_reminder": "payment_updates",
        "subscription_suspended": "payment_updates",
        "commission_earned": "commission_updates",
        # Practice operations
        "task_assigned": "task_assignments",
        "staff_update": "staff_updates",
        "team_activity": "team_activity",
        "user_activity": "user_activity",
        "practice_announcement": "practice_announcements",
        "new_signup": "practice_signups",
        # Platform
        "security_alert": "security_notifications",
        "support_message": "support_requests",
        "system_error": "system_alerts",
        "admin_action_required": "system_alerts",
    }
)

# Recurring, system-scheduled event kinds. Everything else is user-driven,
# including messages, orders, payments, documents and security events.
AUTOMATION_EVENT_KINDS: Final = frozenset(
    {
        "appointment_reminder",
        "appointment_follow_up",
        "follow_up_reminder",
        "medication_reminder",
        "refill_reminder",
    }
)


@dataclass(frozen=True, slots=True)
class EventClassification:
    """Classifier output for one event kind."""

    event_kind: str
    preference_key: str
    is_automation: bool

    @property
    def category(self) -> EventCategory:
        return EventCategory.AUTOMATION if self.is_automation else EventCategory.USER_DRIVEN


def classify_event(event_kind: str) -> EventClassification:
    """Classify an event kind.

    Total: unknown kinds fall back to ``system_alerts`` and user-driven.
    Lookup ignores surrounding whitespace and case.
    """
    key = event_kind.strip().lower()
    return EventClassification(
        event_kind=event_kind,
        preference_key=EVENT_PREFERENCE_KEYS.get(key, DEFAULT_PREFERENCE_KEY),
        is_automation=key in AUTOMATION_EVENT_KINDS,
    )
