"""Channel dispatchers: in-app, email and SMS."""

from notify_service.features.notifications.channels.base import ChannelOutcome
from notify_service.features.notifications.channels.email import EmailChannelDispatcher
from notify_service.features.notifications.channels.in_app import InAppChannelDispatcher
from notify_service.features.notifications.channels.phone import normalize_phone
from notify_service.features.notifications.channels.sms import (
    SmsChannelDispatcher,
    compose_sms_body,
)

__all__ = [
    "ChannelOutcome",
    "EmailChannelDispatcher",
    "InAppChannelDispatcher",
    "SmsChannelDispatcher",
    "compose_sms_body",
    "normalize_phone",
]
