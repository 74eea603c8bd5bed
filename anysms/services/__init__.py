"""Request building, response interpretation and the HTTP client."""

from anysms.services.client import AnySmsClient
from anysms.services.network import resolve_local_address
from anysms.services.request_builder import (
    build_send_request,
    validate_phone_number,
    validate_sender,
)
from anysms.services.response_interpreter import (
    RequestContext,
    ResponseInterpreter,
    parse_gateway_response,
)

__all__ = [
    "AnySmsClient",
    "RequestContext",
    "ResponseInterpreter",
    "build_send_request",
    "parse_gateway_response",
    "resolve_local_address",
    "validate_phone_number",
    "validate_sender",
]
