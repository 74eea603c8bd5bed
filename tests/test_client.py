"""End-to-end tests for AnySmsClient against a mocked gateway."""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import parse_qsl

import httpx
import pytest

from anysms.config.settings import SmsSettings
from anysms.exceptions import (
    SmsConfigurationError,
    SmsFailure,
    SmsResponseError,
    SmsUnknownError,
    SmsValidationError,
    SmsWrongConfigurationError,
)
from anysms.models.enums import FailureCategory
from anysms.services.client import AnySmsClient
from conftest import make_settings, xml_response

SEND_URL = "https://www.any-sms.biz/gateway/send_sms.php"


def _success(request: httpx.Request) -> httpx.Response:
    return xml_response(
        error=0,
        nummer="00436641234567",
        msgid=12345678,
        preis=6.5,
        guthaben=42.16,
        limit=2.0,
    )


def _form(request: httpx.Request) -> list[tuple[str, str]]:
    return parse_qsl(request.content.decode(), keep_blank_values=True)


# -----------------------------------------------------------------------
# Successful sends
# -----------------------------------------------------------------------


class TestSendSmsSuccess:
    def test_default_gateway_success(self, make_client) -> None:
        client, transport = make_client(_success)
        result = client.send_sms("+436641234567", "Test message")

        assert result.phone_number == "00436641234567"
        assert result.message_id == 12345678
        assert result.costs == Decimal("6.5")
        assert result.balance == Decimal("42.16")
        assert result.credit_limit == Decimal("2.0")
        assert len(transport.requests) == 1, "exactly one request should be sent"

    def test_request_shape(self, make_client) -> None:
        client, transport = make_client(_success)
        client.send_sms("+436641234567", "Test message")

        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == SEND_URL
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert _form(request) == [
            ("id", "u"),
            ("pass", "p"),
            ("gateway", "9"),
            ("absender", "s"),
            ("nummer", "+436641234567"),
            ("text", "Test message"),
            ("xml", "1"),
        ]

    def test_explicit_gateway(self, make_client) -> None:
        client, transport = make_client(_success)
        client.send_sms_via(15, "+436641234567", "hi")
        assert dict(_form(transport.requests[0]))["gateway"] == "15"

    def test_test_mode_flag(self, make_client) -> None:
        client, transport = make_client(_success, make_settings(test=True))
        client.send_sms("+436641234567", "hi")
        assert _form(transport.requests[0])[-1] == ("test", "1")

    def test_message_may_be_omitted(self, make_client) -> None:
        client, transport = make_client(_success)
        client.send_sms("+436641234567")
        assert "text" not in dict(_form(transport.requests[0]))

    def test_custom_endpoint(self, make_client) -> None:
        settings = make_settings(base_url="http://gateway.test/api/", send_path="send.php")
        client, transport = make_client(_success, settings)
        client.send_sms("+436641234567", "hi")
        assert str(transport.requests[0].url) == "http://gateway.test/api/send.php"

    def test_charset_from_header_is_honoured(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = "<sms><error>0</error><nummer>+43664ä</nummer></sms>".encode("utf-8")
            return httpx.Response(200, content=body, headers={"Content-Type": "application/xml; charset=utf-8"})

        client, _ = make_client(handler)
        assert client.send_sms("+436641234567", "hi").phone_number == "+43664ä"

    def test_missing_charset_defaults_to_latin9(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = "<sms><error>0</error><nummer>€1</nummer></sms>".encode("iso-8859-15")
            return httpx.Response(200, content=body, headers={"Content-Type": "text/html"})

        client, _ = make_client(handler)
        assert client.send_sms("+436641234567", "hi").phone_number == "€1"


# -----------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------


class TestSendSmsFailures:
    def test_wrong_credentials(self, make_client) -> None:
        client, _ = make_client(lambda request: xml_response(error=-1, guthaben=42.0))
        with pytest.raises(SmsWrongConfigurationError) as exc_info:
            client.send_sms("+436641234567", "Test message")
        assert exc_info.value.category is FailureCategory.WRONG_CONFIGURATION
        assert exc_info.value.message == "Wrong username or password for user u"

    def test_invalid_phone_number_sends_nothing(self, make_client) -> None:
        client, transport = make_client(_success)
        with pytest.raises(SmsValidationError):
            client.send_sms("12345", "hi")
        assert transport.requests == [], "no request may be issued for an invalid number"

    def test_unmapped_code(self, make_client) -> None:
        client, _ = make_client(lambda request: xml_response(error=-99))
        with pytest.raises(SmsResponseError) as exc_info:
            client.send_sms("+436641234567", "hi")
        assert not isinstance(exc_info.value, SmsFailure)
        assert exc_info.value.error_code == -99

    def test_wrong_ip_uses_resolver(self, make_client) -> None:
        client, _ = make_client(lambda request: xml_response(error=-2))
        with pytest.raises(SmsWrongConfigurationError, match="192.0.2.10") as exc_info:
            client.send_sms("+436641234567", "hi")
        assert exc_info.value.argument == "192.0.2.10", "resolved address should be on the failure"

    @pytest.mark.parametrize("status_code", [400, 403, 500, 503])
    def test_http_error_status(self, make_client, status_code: int) -> None:
        client, _ = make_client(lambda request: httpx.Response(status_code, text="oops"))
        with pytest.raises(SmsUnknownError) as exc_info:
            client.send_sms("+436641234567", "hi")
        assert exc_info.value.category is FailureCategory.UNKNOWN_ERROR

    def test_transport_errors_propagate(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, transport = make_client(handler)
        with pytest.raises(httpx.ConnectError):
            client.send_sms("+436641234567", "hi")
        assert len(transport.requests) == 1, "failed sends must not be retried"

    def test_no_default_gateway(self, make_client) -> None:
        client, transport = make_client(_success, make_settings(default_gateway=None))
        with pytest.raises(SmsConfigurationError, match="No Default Gateway"):
            client.send_sms("+436641234567", "hi")
        assert transport.requests == []

    def test_explicit_gateway_without_default(self, make_client) -> None:
        client, _ = make_client(_success, make_settings(default_gateway=None))
        assert client.send_sms_via(3, "+436641234567", "hi").message_id == 12345678


# -----------------------------------------------------------------------
# Construction and lifecycle
# -----------------------------------------------------------------------


class TestClientLifecycle:
    @pytest.mark.parametrize("sender", ["ACMEShop1234", "12345678901234567"])
    def test_invalid_sender_fails_construction(self, sender: str) -> None:
        with pytest.raises(SmsConfigurationError):
            AnySmsClient(make_settings(sender=sender))

    def test_owned_http_client_is_closed(self) -> None:
        with AnySmsClient(make_settings()) as client:
            http_client = client._http
        assert http_client.is_closed

    def test_injected_http_client_stays_open(self, settings: SmsSettings) -> None:
        http_client = httpx.Client(transport=httpx.MockTransport(_success))
        with AnySmsClient(settings, http_client=http_client):
            pass
        assert not http_client.is_closed
        http_client.close()

    def test_from_settings_uses_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from anysms.config.settings import get_settings

        monkeypatch.setenv("ANY_SMS_USERNAME", "envuser")
        monkeypatch.setenv("ANY_SMS_SENDER", "ENVSENDER")
        monkeypatch.setenv("ANY_SMS_DEFAULT_GATEWAY", "7")
        get_settings.cache_clear()
        try:
            with AnySmsClient.from_settings() as client:
                assert client.settings.username == "envuser"
                assert client.settings.default_gateway == 7
        finally:
            get_settings.cache_clear()

    def test_concurrent_sends_share_client(self, make_client) -> None:
        from concurrent.futures import ThreadPoolExecutor

        client, transport = make_client(_success)
        numbers = [f"+43664{i:07d}" for i in range(20)]
        with ThreadPoolExecutor(max_workers=5) as pool:
            results = list(pool.map(lambda n: client.send_sms(n, "hi"), numbers))

        assert len(results) == 20
        sent = sorted(dict(_form(r))["nummer"] for r in transport.requests)
        assert sent == sorted(numbers)
