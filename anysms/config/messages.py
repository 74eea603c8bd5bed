"""Localized failure messages for gateway error codes.

Templates use positional ``{0}`` placeholders, filled with the argument
that belongs to the failure (username, IP address, gateway or phone
number).  English is the fallback for every other locale.
"""

from __future__ import annotations

from typing import Final

import structlog

__all__ = [
    "DEFAULT_LOCALE",
    "MESSAGES",
    "MessageCatalog",
    "get_supported_locales",
]

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_LOCALE: Final[str] = "en"


# ---------------------------------------------------------------------------
# Message registry
# ---------------------------------------------------------------------------

MESSAGES: Final[dict[str, dict[str, str]]] = {
    "en": {
        "wrong_credentials": "Wrong username or password for user {0}",
        "wrong_ip": "Sending SMS from IP address {0} is not allowed",
        "insufficient_funds_main_account": (
            "Insufficient funds on the main account of user {0}"
        ),
        "insufficient_funds_sub_account": (
            "Insufficient funds on the sub account of user {0}"
        ),
        "sms_not_sent": "The SMS to {0} could not be sent",
        "wrong_gateway": "Gateway {0} is not available for this account",
        "spam": "The SMS to {0} has been rejected as spam",
        "no_billing_information": "No billing information available",
        "unknown_error": "An unknown error occurred while sending the SMS",
    },
    "de": {
        "wrong_credentials": "Falscher Benutzername oder falsches Passwort für Benutzer {0}",
        "wrong_ip": "Der SMS-Versand von der IP-Adresse {0} ist nicht erlaubt",
        "insufficient_funds_main_account": (
            "Zu wenig Guthaben auf dem Hauptkonto von Benutzer {0}"
        ),
        "insufficient_funds_sub_account": (
            "Zu wenig Guthaben auf dem Unterkonto von Benutzer {0}"
        ),
        "sms_not_sent": "Die SMS an {0} konnte nicht versendet werden",
        "wrong_gateway": "Gateway {0} ist für dieses Konto nicht verfügbar",
        "spam": "Die SMS an {0} wurde als Spam abgelehnt",
        "no_billing_information": "Keine Abrechnungsinformationen vorhanden",
        "unknown_error": "Beim Versand der SMS ist ein unbekannter Fehler aufgetreten",
    },
}


def get_supported_locales() -> list[str]:
    return sorted(MESSAGES)


class MessageCatalog:
    """Read-only lookup of message templates for one locale.

    Parameters
    ----------
    locale:
        Preferred locale, e.g. ``"de"`` or ``"de-AT"``.  Region suffixes
        fall back to the language, unknown languages to English.
    messages:
        Alternative registry, mainly for tests.
    """

    __slots__ = ("_locale", "_messages")

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        messages: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self._messages = MESSAGES if messages is None else messages
        self._locale = _normalise_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def get_message(self, key: str, *args: object) -> str:
        """Format the template for *key* with positional *args*.

        Never raises: an unknown key yields ``"unknown Message Key <key>"``
        and a template that cannot be formatted is returned as-is.
        """
        template = self._lookup(key)
        if template is None:
            logger.warning("messages.unknown_key", key=key, locale=self._locale)
            return f"unknown Message Key {key}"
        try:
            return template.format(*args)
        except (IndexError, KeyError, ValueError):
            logger.warning(
                "messages.format_failed",
                key=key,
                locale=self._locale,
                arg_count=len(args),
            )
            return template

    def _lookup(self, key: str) -> str | None:
        for locale in (self._locale, DEFAULT_LOCALE):
            template = self._messages.get(locale, {}).get(key)
            if template is not None:
                return template
        return None


def _normalise_locale(locale: str) -> str:
    language = locale.replace("_", "-").split("-", 1)[0].strip().lower()
    return language or DEFAULT_LOCALE
