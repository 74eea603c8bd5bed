"""Structured logging configuration.

The library itself only calls ``structlog.get_logger``; applications that
want JSON (or console) output with timestamps and levels call
:func:`configure_logging` once at startup.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import structlog

from anysms.config.settings import SmsSettings
from anysms.privacy import sanitize_phone

__all__ = ["configure_logging", "mask_phone_numbers"]


def mask_phone_numbers(
    logger: Any, method_name: str, event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask phone numbers in every string value before rendering.

    Catches numbers that end up in free text, such as exception messages
    or the gateway body, which the client cannot mask at the call site.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = sanitize_phone(value)
    return event_dict


def configure_logging(settings: SmsSettings, stream: TextIO | None = None) -> None:
    """Set up structlog with JSON or console rendering based on settings.

    Output goes to *stream*, standard error by default, so that it stays out
    of the host application's standard output.
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_phone_numbers,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream or sys.stderr),
        cache_logger_on_first_use=True,
    )
