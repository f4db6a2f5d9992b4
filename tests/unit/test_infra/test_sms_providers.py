"""Tests for SMS providers and the provider factory."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest
from pydantic import ValidationError

from notify_service.core.settings import SmsSettings
from notify_service.infra.sms import (
    ConsoleSmsProvider,
    SmsMessage,
    TwilioProvider,
    get_sms_provider,
    mask_phone,
)


def _settings(**overrides) -> SmsSettings:
    values = {
        "enabled": True,
        "backend": "twilio",
        "account_sid": "AC123",
        "auth_token": "secret",
        "from_number": "+15550000000",
        "api_base_url": "https://api.twilio.test/2010-04-01",
    }
    values.update(overrides)
    return SmsSettings(**values)


def _message() -> SmsMessage:
    return SmsMessage(to="+15551234567", body="Reminder\n\nSee you tomorrow")


async def test_twilio_posts_form_and_returns_sid() -> None:
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(201, json={"sid": "SM42", "status": "queued"})

    provider = TwilioProvider(_settings(), transport=httpx.MockTransport(handler))

    result = await provider.send(_message())

    assert result.success is True
    assert result.message_id == "SM42"
    request = captured["request"]
    assert str(request.url) == "https://api.twilio.test/2010-04-01/Accounts/AC123/Messages.json"
    assert request.headers["authorization"].startswith("Basic ")
    form = parse_qs(request.content.decode())
    assert form == {
        "To": ["+15551234567"],
        "From": ["+15550000000"],
        "Body": ["Reminder\n\nSee you tomorrow"],
    }


async def test_twilio_error_response() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(400, json={"message": "The 'To' number is not valid"})
    )

    result = await TwilioProvider(_settings(), transport=transport).send(_message())

    assert result.success is False
    assert result.error_code == "api_error"
    assert "not valid" in result.error


async def test_twilio_timeout_is_flagged() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    result = await TwilioProvider(_settings(), transport=httpx.MockTransport(handler)).send(
        _message()
    )

    assert result.success is False
    assert result.error_code == "timeout"


def test_twilio_requires_credentials() -> None:
    with pytest.raises(ValueError, match="account_sid"):
        TwilioProvider(_settings(account_sid=None))


def test_factory_falls_back_to_console() -> None:
    assert isinstance(get_sms_provider(_settings(auth_token=None)), ConsoleSmsProvider)
    assert isinstance(get_sms_provider(_settings()), TwilioProvider)


def test_sms_message_requires_e164() -> None:
    with pytest.raises(ValidationError):
        SmsMessage(to="5551234567", body="x")


@pytest.mark.parametrize(
    ("phone", "masked"),
    [("+15551234567", "+1555***"), (None, ""), ("", "")],
)
def test_mask_phone(phone: str | None, masked: str) -> None:
    assert mask_phone(phone) == masked
