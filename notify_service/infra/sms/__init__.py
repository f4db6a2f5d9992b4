"""SMS delivery infrastructure."""

from .providers import (
    BaseSmsProvider,
    ConsoleSmsProvider,
    SmsDeliveryResult,
    SmsProvider,
    TwilioProvider,
    get_sms_provider,
    mask_phone,
)
from .schemas import SmsMessage

__all__ = [
    "BaseSmsProvider",
    "ConsoleSmsProvider",
    "SmsDeliveryResult",
    "SmsMessage",
    "SmsProvider",
    "TwilioProvider",
    "get_sms_provider",
    "mask_phone",
]
