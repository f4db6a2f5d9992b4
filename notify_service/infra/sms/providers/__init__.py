"""SMS provider implementations."""

from .base import BaseSmsProvider, SmsDeliveryResult, SmsProvider, mask_phone
from .console import ConsoleSmsProvider
from .factory import get_sms_provider
from .twilio import TwilioProvider

__all__ = [
    "BaseSmsProvider",
    "ConsoleSmsProvider",
    "SmsDeliveryResult",
    "SmsProvider",
    "TwilioProvider",
    "get_sms_provider",
    "mask_phone",
]
