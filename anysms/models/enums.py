"""Wire-level enumerations for the any-sms gateway protocol.

``GatewayErrorCode`` is the bidirectional table between the integer the
gateway puts into its ``<error>`` element and the symbolic outcome:
``GatewayErrorCode(-5)`` goes one way, ``int(code)`` the other.  Unknown
integers raise ``ValueError`` on lookup and are never coerced.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Final

__all__ = [
    "FailureCategory",
    "GatewayErrorCode",
    "ErrorMapping",
    "GATEWAY_ERRORS",
    "UNKNOWN_ERROR_KEY",
]


class FailureCategory(StrEnum):
    """Categories a gateway-reported failure is classified into."""

    __slots__ = ()

    WRONG_CONFIGURATION = "wrong_configuration"
    BILLING = "billing"
    NOT_SENT = "not_sent"
    SPAM = "spam"
    UNKNOWN_ERROR = "unknown_error"


class GatewayErrorCode(IntEnum):
    """Error codes returned by ``send_sms.php``; ``0`` means the SMS was accepted."""

    OK = 0
    WRONG_USERNAME_OR_PASSWORD = -1
    WRONG_IP = -2
    INSUFFICIENT_FUNDS_MAIN_ACCOUNT = -3
    INSUFFICIENT_FUNDS_SUB_ACCOUNT = -4
    SMS_NOT_SENT = -5
    WRONG_GATEWAY = -6
    SPAM = -9
    NO_BILLING_INFO = -18

    @property
    def is_ok(self) -> bool:
        return self is GatewayErrorCode.OK


@dataclass(frozen=True, slots=True)
class ErrorMapping:
    """Failure category and message key for one non-zero error code."""

    category: FailureCategory
    message_key: str


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

GATEWAY_ERRORS: Final[dict[GatewayErrorCode, ErrorMapping]] = {
    GatewayErrorCode.WRONG_USERNAME_OR_PASSWORD: ErrorMapping(
        FailureCategory.WRONG_CONFIGURATION, "wrong_credentials",
    ),
    GatewayErrorCode.WRONG_IP: ErrorMapping(
        FailureCategory.WRONG_CONFIGURATION, "wrong_ip",
    ),
    GatewayErrorCode.INSUFFICIENT_FUNDS_MAIN_ACCOUNT: ErrorMapping(
        FailureCategory.BILLING, "insufficient_funds_main_account",
    ),
    GatewayErrorCode.INSUFFICIENT_FUNDS_SUB_ACCOUNT: ErrorMapping(
        FailureCategory.BILLING, "insufficient_funds_sub_account",
    ),
    GatewayErrorCode.SMS_NOT_SENT: ErrorMapping(
        FailureCategory.NOT_SENT, "sms_not_sent",
    ),
    GatewayErrorCode.WRONG_GATEWAY: ErrorMapping(
        FailureCategory.WRONG_CONFIGURATION, "wrong_gateway",
    ),
    GatewayErrorCode.SPAM: ErrorMapping(
        FailureCategory.SPAM, "spam",
    ),
    GatewayErrorCode.NO_BILLING_INFO: ErrorMapping(
        FailureCategory.BILLING, "no_billing_information",
    ),
}

# Message key for failures that do not come with a gateway error code.
UNKNOWN_ERROR_KEY: Final[str] = "unknown_error"
