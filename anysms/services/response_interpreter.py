"""Parsing and classification of gateway status documents.

The gateway answers every ``send_sms.php`` call with a small XML document,
sometimes labelled ``text/html``::

    <?xml version="1.0" encoding="ISO-8859-15"?>
    <sms>
      <error>0</error>
      <nummer>00436641234567</nummer>
      <msgid>12345678</msgid>
      <preis>6.5</preis>
      <guthaben>42.16</guthaben>
      <limit>2.0</limit>
    </sms>

Interpretation happens in two steps:

1. :func:`parse_gateway_response` turns the body into a
   :class:`GatewayResponse`.  Anything that is not a well-formed status
   document -- including an error code missing from
   :class:`GatewayErrorCode` -- raises :class:`SmsResponseError`.
2. :meth:`ResponseInterpreter.interpret` returns a :class:`SendResult` for
   code ``0`` and raises the :class:`SmsFailure` subclass of the mapped
   category otherwise, with a localized message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final
from xml.etree import ElementTree as ET

import structlog
from pydantic import ValidationError

from anysms.config.messages import MessageCatalog
from anysms.exceptions import SmsFailure, SmsResponseError, failure_for
from anysms.models.enums import (
    GATEWAY_ERRORS,
    UNKNOWN_ERROR_KEY,
    FailureCategory,
    GatewayErrorCode,
)
from anysms.models.sms import GatewayResponse, SendResult
from anysms.privacy import sanitize_phone
from anysms.services.network import AddressResolver, resolve_local_address

__all__ = [
    "RequestContext",
    "ResponseInterpreter",
    "parse_gateway_response",
]

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_ENCODING: Final[str] = "iso-8859-15"

_XML_DECLARATION_RE: Final[re.Pattern[str]] = re.compile(r"^\s*<\?xml[^>]*\?>")

# Optional minus and ASCII digits; int() alone would also take "+0", "1_8"
# and non-ASCII digits.
_ERROR_CODE_RE: Final[re.Pattern[str]] = re.compile(r"-?\d+", re.ASCII)

_RESPONSE_FIELDS: Final[frozenset[str]] = frozenset(
    {"error", "nummer", "msgid", "preis", "guthaben", "limit"},
)


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Values from the outgoing request that failure messages refer to."""

    username: str
    gateway: int
    phone_number: str


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _decode(body: str | bytes, encoding: str) -> str:
    if isinstance(body, bytes):
        return body.decode(encoding, errors="replace")
    return body


def _collect_fields(root: ET.Element) -> dict[str, str]:
    fields: dict[str, str] = {}
    for element in root.iter():
        tag = element.tag.lower() if isinstance(element.tag, str) else ""
        if tag in _RESPONSE_FIELDS and tag not in fields:
            text = (element.text or "").strip()
            if text:
                fields[tag] = text
    return fields


def parse_gateway_response(
    body: str | bytes,
    encoding: str = DEFAULT_ENCODING,
) -> GatewayResponse:
    """Parse a raw response body into a :class:`GatewayResponse`.

    Raises
    ------
    SmsResponseError
        If the body is not XML, has no integer ``error`` element, the
        error code is not a known :class:`GatewayErrorCode`, or one of the
        numeric fields is malformed.
    """
    text = _XML_DECLARATION_RE.sub("", _decode(body, encoding).lstrip("\ufeff"), count=1)
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise SmsResponseError(f"Gateway response is not valid XML: {exc}") from exc

    fields = _collect_fields(root)
    raw_code = fields.pop("error", None)
    if raw_code is None:
        raise SmsResponseError("Gateway response contains no error code")
    if _ERROR_CODE_RE.fullmatch(raw_code) is None:
        raise SmsResponseError(f"Gateway error code {raw_code!r} is not a number")
    code = int(raw_code)
    try:
        error = GatewayErrorCode(code)
    except ValueError:
        raise SmsResponseError(f"Unmappable Error Code {code}", error_code=code) from None

    try:
        return GatewayResponse(error=error, **fields)
    except ValidationError as exc:
        raise SmsResponseError(
            f"Gateway response has malformed fields: {exc.error_count()} error(s)",
            error_code=code,
        ) from exc


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class ResponseInterpreter:
    """Turns gateway responses into results or categorized failures.

    Parameters
    ----------
    messages:
        Catalogue the failure messages are taken from.
    address_resolver:
        Returns the local IP address for the "wrong IP" message.  Only
        called when the gateway reports that code.
    encoding:
        Charset for byte bodies that do not declare their own.
    """

    __slots__ = ("_address_resolver", "_encoding", "_messages")

    def __init__(
        self,
        messages: MessageCatalog,
        address_resolver: AddressResolver = resolve_local_address,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._messages = messages
        self._address_resolver = address_resolver
        self._encoding = encoding

    def interpret(self, body: str | bytes, context: RequestContext) -> SendResult:
        """Return the send result, or raise the failure the gateway reported."""
        try:
            response = parse_gateway_response(body, self._encoding)
        except SmsResponseError as exc:
            logger.error(
                "interpreter.unparseable_response",
                error=str(exc),
                error_code=exc.error_code,
                body=sanitize_phone(_decode(body, self._encoding)[:200]),
            )
            raise
        if response.error.is_ok:
            return response.to_result()
        raise self.failure_for(response.error, context)

    def failure_for(self, code: GatewayErrorCode, context: RequestContext) -> SmsFailure:
        """Build the localized failure for a non-zero error code."""
        mapping = GATEWAY_ERRORS[code]
        argument = self._message_argument(code, context)
        args = () if argument is None else (argument,)
        message = self._messages.get_message(mapping.message_key, *args)
        return failure_for(mapping.category, message, error_code=code, argument=argument)

    def unknown_failure(self) -> SmsFailure:
        """Failure for an exchange that produced no usable error code."""
        return failure_for(
            FailureCategory.UNKNOWN_ERROR,
            self._messages.get_message(UNKNOWN_ERROR_KEY),
        )

    def _message_argument(
        self,
        code: GatewayErrorCode,
        context: RequestContext,
    ) -> str | int | None:
        match code:
            case (
                GatewayErrorCode.WRONG_USERNAME_OR_PASSWORD
                | GatewayErrorCode.INSUFFICIENT_FUNDS_MAIN_ACCOUNT
                | GatewayErrorCode.INSUFFICIENT_FUNDS_SUB_ACCOUNT
            ):
                return context.username
            case GatewayErrorCode.WRONG_IP:
                return self._address_resolver()
            case GatewayErrorCode.WRONG_GATEWAY:
                return context.gateway
            case GatewayErrorCode.SMS_NOT_SENT | GatewayErrorCode.SPAM:
                return context.phone_number
            case _:
                return None
