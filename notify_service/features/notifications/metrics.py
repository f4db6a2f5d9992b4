"""Prometheus metrics for notification dispatch.

Usage:
    from notify_service.features.notifications.metrics import notification_dispatch_total

    notification_dispatch_total.labels(category="automation").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

notification_dispatch_total = Counter(
    "notification_dispatch_total",
    "Dispatch calls processed, by event category",
    labelnames=["category"],
)
"""
Labels:
    category: automation, user_driven or guest
"""

notification_channel_outcome_total = Counter(
    "notification_channel_outcome_total",
    "Channel outcomes recorded, by channel and status",
    labelnames=["channel", "status"],
)

notification_policy_declined_total = Counter(
    "notification_policy_declined_total",
    "Channels declined by policy, by channel and reason",
    labelnames=["channel", "reason"],
)
"""
Labels:
    channel: in_app, email, sms
    reason: user_disabled, organization_disabled, no_contact
"""

notification_sms_timeout_total = Counter(
    "notification_sms_timeout_total",
    "SMS provider calls that hit the wait bound and were counted as queued",
)

notification_delivery_log_errors_total = Counter(
    "notification_delivery_log_errors_total",
    "Delivery log writes that failed and were discarded",
)

notification_provider_duration_seconds = Histogram(
    "notification_provider_duration_seconds",
    "Time spent waiting on an external delivery provider",
    labelnames=["channel"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0, 30.0),
)
