"""Shared fixtures for the any-sms test suite.

All tests run WITHOUT network access: HTTP goes through
``httpx.MockTransport`` and the local address lookup is replaced by a
fixed value.
"""

from __future__ import annotations

from typing import Callable, Iterator

import httpx
import pytest

from anysms.config.messages import MessageCatalog
from anysms.config.settings import SmsSettings
from anysms.services.client import AnySmsClient

FIXED_ADDRESS = "192.0.2.10"

Handler = Callable[[httpx.Request], httpx.Response]


def gateway_xml(**fields: object) -> str:
    """Render a gateway status document with the given elements."""
    body = "".join(f"<{name}>{value}</{name}>" for name, value in fields.items())
    return f'<?xml version="1.0" encoding="ISO-8859-15"?>\n<sms>{body}</sms>'


def xml_response(status_code: int = 200, **fields: object) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=gateway_xml(**fields).encode("iso-8859-15"),
        headers={"Content-Type": "text/html"},
    )


def make_settings(**overrides: object) -> SmsSettings:
    values: dict[str, object] = {
        "username": "u",
        "password": "p",
        "sender": "s",
        "default_gateway": 9,
        "test": False,
    }
    values.update(overrides)
    return SmsSettings(_env_file=None, **values)  # type: ignore[arg-type]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def settings() -> SmsSettings:
    return make_settings()


@pytest.fixture
def messages() -> MessageCatalog:
    return MessageCatalog("en")


@pytest.fixture
def make_client(
    settings: SmsSettings,
) -> Iterator[Callable[..., tuple[AnySmsClient, RecordingTransport]]]:
    """Factory returning a client wired to a recording mock transport."""
    created: list[httpx.Client] = []

    def _make(
        handler: Handler,
        client_settings: SmsSettings | None = None,
    ) -> tuple[AnySmsClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        http_client = httpx.Client(transport=transport)
        created.append(http_client)
        client = AnySmsClient(
            client_settings or settings,
            http_client=http_client,
            address_resolver=lambda: FIXED_ADDRESS,
        )
        return client, transport

    yield _make

    for http_client in created:
        http_client.close()
