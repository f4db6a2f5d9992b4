"""Test doubles shared across the suite.

Usage:
    from tests.utils import RecordingEmailProvider, RecordingSmsProvider

    provider = RecordingSmsProvider(delay=5.0)  # slower than the SMS bound
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from notify_service.infra.email import EmailDeliveryResult
from notify_service.infra.sms import SmsDeliveryResult

if TYPE_CHECKING:
    from notify_service.infra.email import EmailMessage
    from notify_service.infra.sms import SmsMessage


@dataclass
class RecordingEmailProvider:
    """Email provider double that records messages.

    ``result`` is returned for every send; ``raises`` is raised instead
    when set. ``delay`` simulates a slow provider.
    """

    result: EmailDeliveryResult | None = None
    raises: BaseException | None = None
    delay: float = 0.0
    sent: list[EmailMessage] = field(default_factory=list)
    provider_name: str = "recording"

    async def send(self, message: EmailMessage) -> EmailDeliveryResult:
        self.sent.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        return self.result or EmailDeliveryResult.success_result(
            message_id=f"email-{len(self.sent)}", provider=self.provider_name
        )


@dataclass
class RecordingSmsProvider:
    """SMS provider double that records messages."""

    result: SmsDeliveryResult | None = None
    raises: BaseException | None = None
    delay: float = 0.0
    sent: list[SmsMessage] = field(default_factory=list)
    provider_name: str = "recording"

    async def send(self, message: SmsMessage) -> SmsDeliveryResult:
        self.sent.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        return self.result or SmsDeliveryResult.success_result(
            message_id=f"SM{len(self.sent):04d}", provider=self.provider_name
        )


def rows_by_channel(rows: Any) -> dict[str, Any]:
    """Index delivery log rows by channel name."""
    return {row.channel: row for row in rows}


class UnusedCollaborator:
    """Stand-in for a lookup component that must not be touched.

    Any attribute access fails the test, naming the collaborator.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    def __getattr__(self, attr: str) -> Any:
        raise AssertionError(f"{self._name}.{attr} must not be used")
