"""Resend email provider.

Sends through the Resend HTTP API using httpx:

    POST {api_base_url}/emails
    Authorization: Bearer <api_key>
    {"from": ..., "to": [...], "subject": ..., "html": ..., "text": ...}

A 200 response carries ``{"id": "<message id>"}``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from .base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from notify_service.core.settings import EmailSettings
    from notify_service.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ResendProvider(BaseEmailProvider):
    """Resend email provider.

    Args:
        settings: Email settings with an API key.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Raises:
        ValueError: If the API key is missing.
    """

    SEND_ENDPOINT = "/emails"

    def __init__(
        self,
        settings: EmailSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if settings.api_key is None:
            raise ValueError("Resend provider requires api_key")
        super().__init__(settings)
        self._api_key = settings.api_key.get_secret_value()
        self._base_url = settings.api_base_url.rstrip("/")
        self._transport = transport

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return "resend"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        from_email = message.from_email or self._settings.from_email
        from_name = message.from_name or self._settings.from_name
        sender = f"{from_name} <{from_email}>" if from_name else str(from_email)

        payload: dict[str, Any] = {
            "from": sender,
            "to": [str(addr) for addr in message.to],
            "subject": message.subject,
        }
        if message.body_html:
            payload["html"] = message.body_html
        if message.body_text:
            payload["text"] = message.body_text
        if message.tags:
            payload["tags"] = [{"name": "category", "value": tag} for tag in message.tags]
        return payload

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        payload = self._build_payload(message)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}{self.SEND_ENDPOINT}",
                    json=payload,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    timeout=self._settings.timeout,
                )
        except httpx.TimeoutException:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="Resend API timeout",
                error_code="timeout",
            )
        except httpx.HTTPError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Resend HTTP error: {e}",
                error_code="http_error",
            )

        if response.is_success:
            body = response.json()
            return EmailDeliveryResult.success_result(
                message_id=body.get("id"),
                provider=self.provider_name,
                metadata={"status_code": response.status_code},
            )

        error_body = response.text
        try:
            error_json = response.json()
        except ValueError:
            error_json = None
        if isinstance(error_json, dict) and error_json.get("message"):
            error_body = error_json["message"]

        return EmailDeliveryResult.failure_result(
            provider=self.provider_name,
            error=f"Resend API error ({response.status_code}): {error_body}",
            error_code=_classify_http_error(response.status_code),
            metadata={"status_code": response.status_code},
        )


def _classify_http_error(status_code: int) -> str:
    if status_code in (401, 403):
        return "auth_failed"
    if status_code == 429:
        return "rate_limited"
    if status_code in (400, 422):
        return "bad_request"
    if status_code >= 500:
        return "server_error"
    return "api_error"


__all__ = ["ResendProvider"]
