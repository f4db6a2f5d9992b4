"""Notification dispatch feature.

Decides which channels (in-app, email, SMS) fire for an event, resolves
recipient contact data, invokes the channel providers and records one
delivery log row per evaluated channel.
"""

from notify_service.features.notifications.classification import (
    EventClassification,
    classify_event,
)
from notify_service.features.notifications.schemas import (
    DispatchResult,
    GuestNotificationRequest,
    NotificationRequest,
)
from notify_service.features.notifications.service import (
    NotificationDispatchService,
    get_dispatch_service,
)

__all__ = [
    "DispatchResult",
    "EventClassification",
    "GuestNotificationRequest",
    "NotificationDispatchService",
    "NotificationRequest",
    "classify_event",
    "get_dispatch_service",
]
