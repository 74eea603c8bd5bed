"""Exception hierarchy for the any-sms client.

Three families are kept apart on purpose:

* Local problems detected before anything goes over the wire --
  :class:`SmsValidationError` and :class:`SmsConfigurationError`.
* A response the client cannot make sense of -- :class:`SmsResponseError`.
  Unknown gateway error codes end up here rather than in a business category.
* Business failures reported by the gateway -- subclasses of
  :class:`SmsFailure`, one per :class:`FailureCategory`.

Nothing here is retried by the client.
"""

from __future__ import annotations

from typing import ClassVar

from anysms.models.enums import FailureCategory, GatewayErrorCode

__all__ = [
    "SmsError",
    "SmsValidationError",
    "SmsConfigurationError",
    "SmsResponseError",
    "SmsFailure",
    "SmsWrongConfigurationError",
    "SmsBillingError",
    "SmsNotSentError",
    "SmsSpamError",
    "SmsUnknownError",
    "failure_for",
]


class SmsError(Exception):
    """Base class for every error raised by :mod:`anysms`."""


class SmsValidationError(SmsError, ValueError):
    """A call argument (phone number, gateway) was rejected before sending."""


class SmsConfigurationError(SmsError):
    """The client is misconfigured or the local host cannot be inspected."""


class SmsResponseError(SmsError):
    """The gateway answered with something that is not a valid status document."""

    def __init__(self, message: str, *, error_code: int | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class SmsFailure(SmsError):
    """The gateway processed the request and refused to deliver it.

    ``argument`` is the value the message refers to: the username, the local
    IP address, the gateway or the destination number.  It is ``None`` for
    failures whose message takes no argument.
    """

    category: ClassVar[FailureCategory]

    def __init__(
        self,
        message: str,
        *,
        error_code: GatewayErrorCode | None = None,
        argument: str | int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.argument = argument

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(category={self.category.value!r}, "
            f"error_code={self.error_code!r}, argument={self.argument!r}, "
            f"message={self.message!r})"
        )


class SmsWrongConfigurationError(SmsFailure):
    category = FailureCategory.WRONG_CONFIGURATION


class SmsBillingError(SmsFailure):
    category = FailureCategory.BILLING


class SmsNotSentError(SmsFailure):
    category = FailureCategory.NOT_SENT


class SmsSpamError(SmsFailure):
    category = FailureCategory.SPAM


class SmsUnknownError(SmsFailure):
    category = FailureCategory.UNKNOWN_ERROR


def failure_for(
    category: FailureCategory,
    message: str,
    *,
    error_code: GatewayErrorCode | None = None,
    argument: str | int | None = None,
) -> SmsFailure:
    """Build the exception matching *category*."""
    match category:
        case FailureCategory.WRONG_CONFIGURATION:
            failure_type: type[SmsFailure] = SmsWrongConfigurationError
        case FailureCategory.BILLING:
            failure_type = SmsBillingError
        case FailureCategory.NOT_SENT:
            failure_type = SmsNotSentError
        case FailureCategory.SPAM:
            failure_type = SmsSpamError
        case FailureCategory.UNKNOWN_ERROR:
            failure_type = SmsUnknownError
        case _:
            raise ValueError(f"Unhandled failure category {category!r}")
    return failure_type(message, error_code=error_code, argument=argument)
