"""Synchronous client for the any-sms HTTP gateway.

One call to :meth:`AnySmsClient.send_sms` is one blocking POST: the
request is validated and built, sent, and the response interpreted on the
caller's thread.  There is no retry, queueing or background work.  The
client holds no mutable state besides its ``httpx.Client``, which is safe
to share between threads.

Usage::

    with AnySmsClient(SmsSettings()) as client:
        result = client.send_sms("+436641234567", "Hello!")
        print(result.message_id, result.balance)
"""

from __future__ import annotations

import time
from types import TracebackType

import httpx
import structlog

from anysms.config.messages import MessageCatalog
from anysms.config.settings import SmsSettings, get_settings
from anysms.exceptions import SmsConfigurationError, SmsFailure
from anysms.models.sms import SendResult
from anysms.privacy import mask_phone, sanitize_form
from anysms.services.network import AddressResolver, resolve_local_address
from anysms.services.request_builder import build_send_request, validate_sender
from anysms.services.response_interpreter import RequestContext, ResponseInterpreter

__all__ = ["AnySmsClient"]

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_ACCEPT = "application/xml, text/xml, text/html;q=0.9"


class AnySmsClient:
    """Send SMS through the any-sms gateway.

    Parameters
    ----------
    settings:
        Account credentials, sender id, default gateway and test flag.
        The sender id is checked here; a bad one makes construction fail.
    http_client:
        Transport to use.  When omitted the client creates (and closes)
        its own ``httpx.Client`` with the configured timeout.
    messages:
        Catalogue for failure messages; defaults to the configured locale.
    address_resolver:
        Local IP lookup used for the "wrong IP" failure message.
    """

    __slots__ = ("_http", "_interpreter", "_owns_http", "_settings")

    def __init__(
        self,
        settings: SmsSettings,
        *,
        http_client: httpx.Client | None = None,
        messages: MessageCatalog | None = None,
        address_resolver: AddressResolver = resolve_local_address,
    ) -> None:
        validate_sender(settings.sender)

        self._settings = settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            timeout=settings.timeout_seconds,
            headers={"Accept": _ACCEPT},
        )
        self._interpreter = ResponseInterpreter(
            messages or MessageCatalog(settings.locale),
            address_resolver,
            settings.response_encoding,
        )

        logger.info(
            "client.initialised",
            username=settings.username,
            sender=settings.sender,
            default_gateway=settings.default_gateway,
            test=settings.test,
        )

    @classmethod
    def from_settings(
        cls,
        settings: SmsSettings | None = None,
        **kwargs: object,
    ) -> AnySmsClient:
        """Create a client from *settings* or, if omitted, the environment."""
        return cls(settings or get_settings(), **kwargs)  # type: ignore[arg-type]

    @property
    def settings(self) -> SmsSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> AnySmsClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send_sms(self, phone_number: str, message: str | None = None) -> SendResult:
        """Send *message* to *phone_number* via the default gateway.

        Raises
        ------
        SmsConfigurationError
            If no default gateway is configured.
        """
        gateway = self._settings.default_gateway
        if gateway is None:
            raise SmsConfigurationError("No Default Gateway defined")
        return self.send_sms_via(gateway, phone_number, message)

    def send_sms_via(
        self,
        gateway: int | str,
        phone_number: str,
        message: str | None = None,
    ) -> SendResult:
        """Send *message* to *phone_number* via an explicit gateway.

        Returns
        -------
        SendResult
            Echoed phone number, message id, cost, balance and credit limit.

        Raises
        ------
        SmsValidationError
            Bad phone number or gateway; nothing is sent.
        SmsFailure
            The gateway refused the SMS; the subclass names the category.
        SmsResponseError
            The response could not be parsed or carried an unknown code.
        httpx.HTTPError
            The exchange itself failed.
        """
        request = build_send_request(gateway, phone_number, message, self._settings)
        log = logger.bind(
            gateway=request.gateway,
            to=mask_phone(request.phone_number),
            test=request.test,
        )
        form = request.to_form()
        log.debug("client.request_built", form=sanitize_form(form))

        start = time.perf_counter()
        response = self._http.post(
            self._settings.send_url,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        if response.is_error:
            log.error(
                "client.http_error",
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
            )
            raise self._interpreter.unknown_failure()

        context = RequestContext(
            username=request.username,
            gateway=request.gateway,
            phone_number=request.phone_number,
        )
        try:
            result = self._interpreter.interpret(self._body_text(response), context)
        except SmsFailure as exc:
            log.warning(
                "client.gateway_error",
                category=exc.category.value,
                error_code=int(exc.error_code) if exc.error_code is not None else None,
                elapsed_ms=elapsed_ms,
            )
            raise

        log.info(
            "client.sms_sent",
            message_id=result.message_id,
            costs=str(result.costs) if result.costs is not None else None,
            balance=str(result.balance) if result.balance is not None else None,
            elapsed_ms=elapsed_ms,
        )
        return result

    def _body_text(self, response: httpx.Response) -> str:
        # The gateway often omits the charset; httpx would fall back to UTF-8.
        if response.charset_encoding:
            return response.text
        return response.content.decode(self._settings.response_encoding, errors="replace")
