"""Twilio SMS provider.

Sends through the Twilio Messages REST API using httpx:

    POST {api_base_url}/Accounts/{account_sid}/Messages.json
    (basic auth account_sid:auth_token, form fields To, From, Body)

A 201 response carries the message ``sid``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from .base import BaseSmsProvider, SmsDeliveryResult

if TYPE_CHECKING:
    from notify_service.core.settings import SmsSettings
    from notify_service.infra.sms.schemas import SmsMessage

logger = logging.getLogger(__name__)


class TwilioProvider(BaseSmsProvider):
    """Twilio SMS provider.

    Raises:
        ValueError: If credentials or the sender number are missing.
    """

    def __init__(
        self,
        settings: SmsSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not settings.account_sid or settings.auth_token is None or not settings.from_number:
            raise ValueError("Twilio provider requires account_sid, auth_token and from_number")
        super().__init__(settings)
        self._account_sid = settings.account_sid
        self._auth_token = settings.auth_token.get_secret_value()
        self._from_number = settings.from_number
        self._base_url = settings.api_base_url.rstrip("/")
        self._transport = transport

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return "twilio"

    @property
    def messages_url(self) -> str:
        """Messages resource URL for the configured account."""
        return f"{self._base_url}/Accounts/{self._account_sid}/Messages.json"

    async def _do_send(self, message: SmsMessage) -> SmsDeliveryResult:
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.messages_url,
                    data={"To": message.to, "From": self._from_number, "Body": message.body},
                    auth=(self._account_sid, self._auth_token),
                    timeout=self._settings.http_timeout,
                )
        except httpx.TimeoutException:
            return SmsDeliveryResult.failure_result(
                provider=self.provider_name,
                error="Twilio API timeout",
                error_code="timeout",
            )
        except httpx.HTTPError as e:
            return SmsDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Twilio HTTP error: {e}",
                error_code="http_error",
            )

        if response.is_success:
            body = response.json()
            return SmsDeliveryResult.success_result(
                message_id=body.get("sid"),
                provider=self.provider_name,
                metadata={"status": body.get("status")},
            )

        error_body = response.text
        try:
            error_json = response.json()
        except ValueError:
            error_json = None
        if isinstance(error_json, dict) and error_json.get("message"):
            error_body = error_json["message"]

        return SmsDeliveryResult.failure_result(
            provider=self.provider_name,
            error=f"Twilio API error ({response.status_code}): {error_body}",
            error_code="auth_failed" if response.status_code in (401, 403) else "api_error",
            metadata={"status_code": response.status_code},
        )


__all__ = ["TwilioProvider"]
