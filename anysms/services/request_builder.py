"""Validation and assembly of the outbound ``send_sms.php`` form.

Everything in this module is pure: no I/O, no logging of secrets, and the
same inputs always produce the same :class:`SendRequest`.
"""

from __future__ import annotations

import re
from typing import Final

from anysms.config.settings import SmsSettings
from anysms.exceptions import SmsConfigurationError, SmsValidationError
from anysms.models.sms import SendRequest

__all__ = [
    "PHONE_NUMBER_RE",
    "is_phone_number",
    "validate_phone_number",
    "validate_sender",
    "build_send_request",
]

# Optional leading "+" and 10-25 ASCII digits, nothing else.
PHONE_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"\+?\d{10,25}", re.ASCII)

_GATEWAY_RE: Final[re.Pattern[str]] = re.compile(r"\d+", re.ASCII)

_MAX_ALPHANUMERIC_SENDER: Final[int] = 11
_MAX_NUMERIC_SENDER: Final[int] = 16


def is_phone_number(value: str) -> bool:
    return PHONE_NUMBER_RE.fullmatch(value) is not None


def validate_phone_number(phone_number: str | None) -> str:
    """Return *phone_number* unchanged or raise :class:`SmsValidationError`."""
    if phone_number is None:
        raise SmsValidationError("Phone Number must not be None")
    if not is_phone_number(phone_number):
        raise SmsValidationError(f"{phone_number} is not a valid Phone Number")
    return phone_number


def validate_sender(sender: str | None) -> str:
    """Check the sender id length rules of the gateway.

    A sender that looks like a phone number may have up to 16 characters,
    any other (alphanumeric) sender up to 11.

    Raises
    ------
    SmsConfigurationError
        If the sender is blank or too long.
    """
    if sender is None or not sender.strip():
        raise SmsConfigurationError("Sender must not be blank")
    if is_phone_number(sender):
        if len(sender) > _MAX_NUMERIC_SENDER:
            raise SmsConfigurationError(
                f"Sender Phone Number must not have more than {_MAX_NUMERIC_SENDER} Characters"
            )
    elif len(sender) > _MAX_ALPHANUMERIC_SENDER:
        raise SmsConfigurationError(
            f"Sender must have no more than {_MAX_ALPHANUMERIC_SENDER} Characters"
        )
    return sender


def _resolve_gateway(gateway: int | str | None) -> int:
    if gateway is None or (isinstance(gateway, str) and not gateway.strip()):
        raise SmsValidationError("Gateway must not be empty")
    if isinstance(gateway, int) and not isinstance(gateway, bool):
        return gateway
    if isinstance(gateway, str) and _GATEWAY_RE.fullmatch(gateway):
        return int(gateway)
    raise SmsValidationError(f"{gateway!r} is not a valid Gateway")


def build_send_request(
    gateway: int | str | None,
    phone_number: str | None,
    message: str | None,
    settings: SmsSettings,
) -> SendRequest:
    """Validate the call arguments and assemble the request.

    Parameters
    ----------
    gateway:
        Numeric carrier route.  Defaulting from the settings happens in the
        caller; ``None`` here is an error.
    phone_number:
        Destination, ``+`` optional, 10-25 digits.
    message:
        SMS text.  Blank text is left out of the form entirely.
    settings:
        Account credentials, sender id and the test flag.
    """
    resolved_gateway = _resolve_gateway(gateway)
    validate_phone_number(phone_number)

    return SendRequest(
        username=settings.username,
        password=settings.password_value,
        gateway=resolved_gateway,
        sender=settings.sender,
        phone_number=phone_number,
        message=message if message and message.strip() else None,
        test=settings.test,
    )
