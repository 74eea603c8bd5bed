from anysms.models.enums import (
    GATEWAY_ERRORS,
    ErrorMapping,
    FailureCategory,
    GatewayErrorCode,
)
from anysms.models.sms import GatewayResponse, SendRequest, SendResult

__all__ = [
    "ErrorMapping",
    "FailureCategory",
    "GATEWAY_ERRORS",
    "GatewayErrorCode",
    "GatewayResponse",
    "SendRequest",
    "SendResult",
]
