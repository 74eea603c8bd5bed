"""Client settings loaded from environment variables.

Uses pydantic-settings for validation and type coercion.  All keys use
the ``ANY_SMS_`` prefix (``ANY_SMS_USERNAME``, ``ANY_SMS_SENDER``, ...) and
may also come from a ``.env`` file in the working directory.

Settings are read once and treated as immutable afterwards; the client
receives them explicitly instead of reaching for a module global.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Final, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["DEFAULT_BASE_URL", "DEFAULT_SEND_PATH", "SmsSettings", "get_settings"]

DEFAULT_BASE_URL: Final[str] = "https://www.any-sms.biz/gateway"
DEFAULT_SEND_PATH: Final[str] = "/send_sms.php"


class SmsSettings(BaseSettings):
    """Credentials and behaviour of the any-sms client."""

    model_config = SettingsConfigDict(
        env_prefix="ANY_SMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    # ── Account ────────────────────────────────────────────────────────
    username: str
    password: SecretStr | None = None
    sender: str
    default_gateway: int | None = None
    test: bool = False

    # ── Transport ──────────────────────────────────────────────────────
    base_url: str = DEFAULT_BASE_URL
    send_path: str = DEFAULT_SEND_PATH
    timeout_seconds: float = Field(default=30.0, gt=0)
    response_encoding: str = "iso-8859-15"

    # ── Messages ───────────────────────────────────────────────────────
    locale: str = "en"

    # ── Logging ────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("username", "sender")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    # ── Derived Properties ─────────────────────────────────────────────

    @property
    def send_url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.send_path.lstrip("/")

    @property
    def password_value(self) -> str | None:
        return self.password.get_secret_value() if self.password else None


@lru_cache(maxsize=1)
def get_settings() -> SmsSettings:
    """Return the settings read from the environment, cached after the first call."""
    return SmsSettings()  # type: ignore[call-arg]
