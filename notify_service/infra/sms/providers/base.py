"""Base SMS provider protocol and abstract class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from notify_service.core.settings import SmsSettings
    from notify_service.infra.sms.schemas import SmsMessage

logger = logging.getLogger(__name__)


def mask_phone(phone: str | None) -> str:
    """Mask a phone number for logs: first five characters, then ``***``."""
    if not phone:
        return ""
    return f"{phone[:5]}***"


@dataclass(frozen=True)
class SmsDeliveryResult:
    """Result of an SMS delivery attempt.

    ``error_code="timeout"`` marks a transport timeout; callers decide
    whether that counts as queued or failed.
    """

    success: bool
    message_id: str | None
    provider: str
    error: str | None = None
    error_code: str | None = None
    duration_ms: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.success and not self.error:
            object.__setattr__(self, "error", "Unknown error")

    @classmethod
    def success_result(
        cls,
        message_id: str | None,
        provider: str,
        duration_ms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> SmsDeliveryResult:
        """Create a successful delivery result."""
        return cls(
            success=True,
            message_id=message_id,
            provider=provider,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )

    @classmethod
    def failure_result(
        cls,
        provider: str,
        error: str,
        error_code: str | None = None,
        duration_ms: int | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> SmsDeliveryResult:
        """Create a failed delivery result."""
        return cls(
            success=False,
            message_id=None,
            provider=provider,
            error=error,
            error_code=error_code,
            duration_ms=duration_ms,
            metadata=metadata or {},
        )


@runtime_checkable
class SmsProvider(Protocol):
    """Protocol defining the SMS provider interface."""

    async def send(self, message: SmsMessage) -> SmsDeliveryResult:
        """Send a text message."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name (e.g., 'twilio', 'console')."""
        ...


class BaseSmsProvider(ABC):
    """Abstract base class for SMS providers.

    Adds timing, masked-number logging and exception-to-result conversion
    around ``_do_send``.
    """

    def __init__(self, settings: SmsSettings) -> None:
        self._settings = settings
        logger.info(
            f"{self.provider_name} SMS provider initialized",
            extra={"provider": self.provider_name},
        )

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    async def _do_send(self, message: SmsMessage) -> SmsDeliveryResult:
        """Implement the actual sending logic."""
        ...

    async def send(self, message: SmsMessage) -> SmsDeliveryResult:
        """Send a message with timing and error handling. Never raises."""
        start_time = time.perf_counter()
        masked = mask_phone(message.to)

        try:
            result = await self._do_send(message)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.exception(
                f"Unexpected error in {self.provider_name} provider",
                extra={"provider": self.provider_name, "to": masked, "error": str(e)},
            )
            return SmsDeliveryResult.failure_result(
                provider=self.provider_name,
                error=str(e) or type(e).__name__,
                error_code="exception",
                duration_ms=duration_ms,
            )

        if result.duration_ms is None:
            result = replace(result, duration_ms=int((time.perf_counter() - start_time) * 1000))

        if result.success:
            logger.info(
                f"SMS sent via {self.provider_name}",
                extra={
                    "message_id": result.message_id,
                    "provider": self.provider_name,
                    "to": masked,
                    "duration_ms": result.duration_ms,
                },
            )
        else:
            logger.warning(
                f"SMS send failed via {self.provider_name}",
                extra={
                    "provider": self.provider_name,
                    "to": masked,
                    "error": result.error,
                    "error_code": result.error_code,
                    "duration_ms": result.duration_ms,
                },
            )
        return result


__all__ = ["BaseSmsProvider", "SmsDeliveryResult", "SmsProvider", "mask_phone"]
