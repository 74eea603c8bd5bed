"""Lookup of the local host's IP address.

Only needed to word the "wrong IP" failure, so it runs lazily when the
gateway reports that code.  Tests substitute any zero-argument callable
returning a string.
"""

from __future__ import annotations

import socket
from typing import Callable

import structlog

from anysms.exceptions import SmsConfigurationError

__all__ = ["AddressResolver", "resolve_local_address"]

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

AddressResolver = Callable[[], str]


def resolve_local_address() -> str:
    """Return the IP address the local host name resolves to.

    Resolution is bounded by the system resolver's own timeout.

    Raises
    ------
    SmsConfigurationError
        If the host name cannot be resolved.
    """
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError as exc:
        logger.error("network.local_address_failed", error=str(exc))
        raise SmsConfigurationError(
            "Error while getting the IP of the Localhost"
        ) from exc
