"""Base email provider protocol and abstract class.

Defines the contract that all email providers must implement.

Usage:
    class MyProvider(BaseEmailProvider):
        async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from notify_service.core.settings import EmailSettings
    from notify_service.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailDeliveryResult:
    """Result of an email delivery attempt.

    Attributes:
        success: Whether delivery succeeded
        message_id: Provider-assigned message ID (for tracking)
        provider: Provider name (resend, console)
        error: Error message if failed
        error_code: Error category for programmatic handling
        duration_ms: Time taken to send in milliseconds
        metadata: Provider-specific metadata
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
    ) -> EmailDeliveryResult:
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
    ) -> EmailDeliveryResult:
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
class EmailProvider(Protocol):
    """Protocol defining the email provider interface.

    Using Protocol allows duck typing and easier testing: any object with
    an async ``send`` and a ``provider_name`` can stand in for a provider.
    """

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Send an email message."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the provider name (e.g., 'resend', 'console')."""
        ...


class BaseEmailProvider(ABC):
    """Abstract base class for email providers.

    Provides timing measurement, logging and conversion of unexpected
    exceptions into failure results. Subclasses implement ``_do_send``
    and ``provider_name``.
    """

    def __init__(self, settings: EmailSettings) -> None:
        self._settings = settings
        logger.info(
            f"{self.provider_name} email provider initialized",
            extra={"provider": self.provider_name},
        )

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Implement the actual sending logic."""
        ...

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        """Send an email with timing and error handling.

        Never raises: unexpected errors become ``error_code="exception"``.
        """
        start_time = time.perf_counter()

        try:
            result = await self._do_send(message)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.exception(
                f"Unexpected error in {self.provider_name} provider",
                extra={
                    "provider": self.provider_name,
                    "error": str(e),
                    "duration_ms": duration_ms,
                },
            )
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=str(e) or type(e).__name__,
                error_code="exception",
                duration_ms=duration_ms,
            )

        if result.duration_ms is None:
            result = replace(result, duration_ms=int((time.perf_counter() - start_time) * 1000))

        if result.success:
            logger.info(
                f"Email sent via {self.provider_name}",
                extra={
                    "message_id": result.message_id,
                    "provider": self.provider_name,
                    "recipients": len(message.to),
                    "duration_ms": result.duration_ms,
                },
            )
        else:
            logger.warning(
                f"Email send failed via {self.provider_name}",
                extra={
                    "provider": self.provider_name,
                    "error": result.error,
                    "error_code": result.error_code,
                    "duration_ms": result.duration_ms,
                },
            )
        return result

    @property
    def settings(self) -> EmailSettings:
        """Settings the provider was built from."""
        return self._settings


__all__ = [
    "BaseEmailProvider",
    "EmailDeliveryResult",
    "EmailProvider",
]
