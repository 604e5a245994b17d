import httpx
import pytest

from app.core.config import Settings
from app.services import auth_service
from app.services.sms_service import SmsService

from conftest import FakeCollection


def twilio_settings(**overrides):
    values = {
        "TWILIO_ACCOUNT_SID": "AC_TEST",
        "TWILIO_AUTH_TOKEN": "AUTH_TEST",
        "TWILIO_FROM_NUMBER": "+14155238886",
    }
    values.update(overrides)
    return Settings(**values)


def test_not_configured_without_credentials():
    assert SmsService(Settings()).is_configured() is False
    assert SmsService(twilio_settings()).is_configured() is True


def test_recipient_gets_country_code():
    sms = SmsService(twilio_settings())
    assert sms.format_recipient("9999999999") == "+919999999999"
    assert sms.format_recipient("+15551234567") == "+15551234567"


@pytest.mark.asyncio
async def test_send_otp_posts_to_twilio():
    requests = []

    def handler(request: httpx.Request):
        requests.append(request)
        return httpx.Response(201, json={"sid": "SM123", "status": "queued"})

    sms = SmsService(twilio_settings(), transport=httpx.MockTransport(handler))
    result = await sms.send_otp("9999999999", "4821")

    assert result == {"success": True, "message_sid": "SM123", "status": "queued"}
    assert len(requests) == 1
    request = requests[0]
    assert request.url.path == "/2010-04-01/Accounts/AC_TEST/Messages.json"
    body = request.content.decode()
    assert "Your+OTP+is+4821" in body
    assert "%2B919999999999" in body


@pytest.mark.asyncio
async def test_send_failure_is_reported_not_raised():
    sms = SmsService(
        twilio_settings(),
        transport=httpx.MockTransport(lambda request: httpx.Response(400, text="bad number")),
    )
    result = await sms.send_otp("123", "0000")
    assert result["success"] is False
    assert "400" in result["error"]


@pytest.mark.asyncio
async def test_send_code_survives_sms_outage():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    config = twilio_settings()
    sms = SmsService(config, transport=httpx.MockTransport(handler))
    users = FakeCollection()

    result = await auth_service.send_code(users, "9999999999", config, sms)
    assert users.docs[0]["otp"] == result["otp"]


def test_configured_matches_settings():
    assert Settings().sms_enabled is False
    assert twilio_settings().sms_enabled is True
    assert SmsService(twilio_settings(TWILIO_FROM_NUMBER=None)).is_configured() is False
