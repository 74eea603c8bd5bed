"""anysms -- client for the any-sms.biz HTTP SMS gateway.

Builds the form-encoded ``send_sms.php`` request, posts it, and turns the
gateway's XML status document into a :class:`SendResult` or a typed
:class:`SmsFailure`.
"""

from anysms.config import MessageCatalog, SmsSettings, get_settings
from anysms.exceptions import (
    SmsBillingError,
    SmsConfigurationError,
    SmsError,
    SmsFailure,
    SmsNotSentError,
    SmsResponseError,
    SmsSpamError,
    SmsUnknownError,
    SmsValidationError,
    SmsWrongConfigurationError,
)
from anysms.logging_setup import configure_logging
from anysms.models import FailureCategory, GatewayErrorCode, SendRequest, SendResult
from anysms.services import (
    AnySmsClient,
    RequestContext,
    ResponseInterpreter,
    build_send_request,
    parse_gateway_response,
    validate_phone_number,
    validate_sender,
)

__version__ = "1.0.0"

__all__ = [
    "AnySmsClient",
    "FailureCategory",
    "GatewayErrorCode",
    "MessageCatalog",
    "RequestContext",
    "ResponseInterpreter",
    "SendRequest",
    "SendResult",
    "SmsBillingError",
    "SmsConfigurationError",
    "SmsError",
    "SmsFailure",
    "SmsNotSentError",
    "SmsResponseError",
    "SmsSettings",
    "SmsSpamError",
    "SmsUnknownError",
    "SmsValidationError",
    "SmsWrongConfigurationError",
    "build_send_request",
    "configure_logging",
    "get_settings",
    "parse_gateway_response",
    "validate_phone_number",
    "validate_sender",
]
