"""Tests for email providers and the provider factory."""

from __future__ import annotations

import json

import httpx
import pytest

from notify_service.core.settings import EmailSettings
from notify_service.infra.email import (
    BaseEmailProvider,
    ConsoleProvider,
    EmailDeliveryResult,
    EmailMessage,
    EmailProvider,
    ResendProvider,
    get_email_provider,
)


def _settings(**overrides) -> EmailSettings:
    values = {
        "enabled": True,
        "backend": "resend",
        "api_key": "re_test_key",
        "api_base_url": "https://api.resend.test",
        "from_email": "no-reply@example.com",
        "from_name": "Acme Health",
    }
    values.update(overrides)
    return EmailSettings(**values)


def _message() -> EmailMessage:
    return EmailMessage(
        to=["pat@example.com"],
        subject="Appointment tomorrow",
        body_text="See you at 10:00",
        body_html="<p>See you at 10:00</p>",
        tags=["appointment_reminder"],
    )


async def test_resend_posts_message_and_returns_id() -> None:
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json={"id": "re_msg_1"})

    provider = ResendProvider(_settings(), transport=httpx.MockTransport(handler))

    result = await provider.send(_message())

    assert result.success is True
    assert result.message_id == "re_msg_1"
    assert result.duration_ms is not None
    request = captured["request"]
    assert str(request.url) == "https://api.resend.test/emails"
    assert request.headers["authorization"] == "Bearer re_test_key"
    payload = json.loads(request.content)
    assert payload["from"] == "Acme Health <no-reply@example.com>"
    assert payload["to"] == ["pat@example.com"]
    assert payload["html"] == "<p>See you at 10:00</p>"
    assert payload["tags"] == [{"name": "category", "value": "appointment_reminder"}]


@pytest.mark.parametrize(
    ("status_code", "error_code"),
    [(401, "auth_failed"), (429, "rate_limited"), (422, "bad_request"), (503, "server_error")],
)
async def test_resend_error_responses_are_classified(status_code: int, error_code: str) -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(status_code, json={"message": "nope"})
    )
    provider = ResendProvider(_settings(), transport=transport)

    result = await provider.send(_message())

    assert result.success is False
    assert result.error_code == error_code
    assert result.error == f"Resend API error ({status_code}): nope"


async def test_resend_timeout_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    provider = ResendProvider(_settings(), transport=httpx.MockTransport(handler))

    result = await provider.send(_message())

    assert result.success is False
    assert result.error_code == "timeout"


async def test_unexpected_exception_becomes_failure_result() -> None:
    class ExplodingProvider(BaseEmailProvider):
        @property
        def provider_name(self) -> str:
            return "exploding"

        async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
            raise RuntimeError("boom")

    result = await ExplodingProvider(_settings()).send(_message())

    assert result.success is False
    assert result.error == "boom"
    assert result.error_code == "exception"


def test_resend_requires_api_key() -> None:
    with pytest.raises(ValueError, match="api_key"):
        ResendProvider(_settings(api_key=None))


async def test_console_provider_always_succeeds() -> None:
    result = await ConsoleProvider(_settings(backend="console")).send(_message())

    assert result.success is True
    assert result.message_id.startswith("console-")


def test_factory_falls_back_to_console_when_unconfigured() -> None:
    provider = get_email_provider(_settings(enabled=False))

    assert isinstance(provider, ConsoleProvider)
    assert isinstance(provider, EmailProvider)


def test_factory_builds_configured_backend() -> None:
    assert get_email_provider(_settings()).provider_name == "resend"


def test_failure_result_always_has_error_text() -> None:
    result = EmailDeliveryResult(success=False, message_id=None, provider="x")

    assert result.error == "Unknown error"
