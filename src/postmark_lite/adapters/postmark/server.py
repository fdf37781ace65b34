"""Postmark server handle and send operations.

Provides :class:`Server`, which binds an API key to the send operations, and
the configuration-driven helpers used by the composition root.

Contents:
    * :class:`Server` - Client handle with ``send`` and the simple shortcuts.
    * :func:`build_server` - Build a Server from :class:`ServerConfig`.
    * :func:`send_message` - One-shot send used by the CLI services.
"""

from __future__ import annotations

import logging
from typing import Final

from postmark_lite.domain.errors import ConfigurationError
from postmark_lite.domain.message import Message
from postmark_lite.domain.outcomes import SendResult, error_for_status

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ServerConfig
from .payload import build_payload, encode_payload
from .transport import TransportHandle, shared_transport_handle

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON: Final[str] = "application/json"
HEADER_ACCEPT: Final[str] = "Accept"
HEADER_CONTENT_TYPE: Final[str] = "Content-Type"
HEADER_SERVER_TOKEN: Final[str] = "X-Postmark-Server-Token"


class Server:
    """Postmark server bound to one API key.

    Servers are cheap; construct one per API key and reuse it. Attributes
    may be changed directly between sends.

    Args:
        api_key: Server API token sent with every request.
        default_from: Sender used when a message has an empty ``From``.
        default_reply_to: Reply-to used when a message has an empty ``ReplyTo``.
        endpoint: Full URL of the ``/email`` endpoint.
        timeout: Per-request timeout in seconds.
        transport_handle: Transport holder; defaults to the process-wide handle.

    Example:
        >>> server = Server("secret-token", default_from="noreply@example.com")
        >>> server.endpoint
        'https://api.postmarkapp.com/email'
        >>> "secret-token" in repr(server)
        False
    """

    def __init__(
        self,
        api_key: str,
        *,
        default_from: str | None = None,
        default_reply_to: str | None = None,
        endpoint: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport_handle: TransportHandle | None = None,
    ) -> None:
        self.api_key = api_key
        self.default_from = default_from
        self.default_reply_to = default_reply_to
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport_handle = transport_handle if transport_handle is not None else shared_transport_handle()

    def __repr__(self) -> str:
        return (
            f"Server(api_key='[REDACTED]', default_from={self.default_from!r}, "
            f"default_reply_to={self.default_reply_to!r}, endpoint={self.endpoint!r}, "
            f"timeout={self.timeout!r})"
        )

    def send_simple(self, from_address: str, to: str, subject: str, text_body: str, html_body: str) -> SendResult:
        """Send a message with both a text/plain and a text/html body."""
        message = Message.simple(
            from_address=from_address,
            to=to,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
        return self.send(message)

    def send_simple_html(self, from_address: str, to: str, subject: str, body: str) -> SendResult:
        """Send a message with only a text/html body."""
        return self.send_simple(from_address, to, subject, "", body)

    def send_simple_text(self, from_address: str, to: str, subject: str, body: str) -> SendResult:
        """Send a message with only a text/plain body."""
        return self.send_simple(from_address, to, subject, body, "")

    def send(self, message: Message) -> SendResult:
        """Serialize *message*, POST it to the API, and map the status code.

        Args:
            message: Message to send. It is read, never modified.

        Returns:
            SendResult carrying the status code and raw response body.

        Raises:
            TransportError: The exchange could not be completed or the
                message could not be encoded.
            UnauthorizedError: Status 401.
            UnprocessableError: Status 422.
            InternalServerError: Status 500.
            UnknownResponseError: Any other non-200 status.
        """
        payload = build_payload(
            message,
            default_from=self.default_from,
            default_reply_to=self.default_reply_to,
        )
        content = encode_payload(payload)
        headers = {
            HEADER_ACCEPT: CONTENT_TYPE_JSON,
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
            HEADER_SERVER_TOKEN: self.api_key,
        }

        logger.info(
            "Sending message",
            extra={
                "endpoint": self.endpoint,
                "sender": payload["From"],
                "recipients": payload["To"],
                "subject": payload["Subject"],
                "tag": payload["Tag"],
                "header_count": len(payload["Headers"]),
            },
        )

        transport = self._transport_handle.get()
        response = transport.post(self.endpoint, headers=headers, content=content, timeout=self.timeout)
        logger.debug("Postmark API responded", extra={"status_code": response.status_code})

        error = error_for_status(response.status_code, response.body)
        if error is not None:
            raise error
        return SendResult(status_code=response.status_code, body=response.body)


def build_server(config: ServerConfig, *, transport_handle: TransportHandle | None = None) -> Server:
    """Build a :class:`Server` from validated configuration.

    Without an explicit handle the server uses the process-wide transport;
    the configured timeout is applied per request.

    Raises:
        ConfigurationError: When no API key is configured.

    Example:
        >>> build_server(ServerConfig(api_key="token")).api_key
        'token'
        >>> build_server(ServerConfig())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: No Postmark API key configured
    """
    if config.api_key is None:
        raise ConfigurationError("No Postmark API key configured (postmark.api_key is empty)")
    return Server(
        config.api_key,
        default_from=config.default_from,
        default_reply_to=config.default_reply_to,
        endpoint=config.api_url,
        timeout=config.timeout,
        transport_handle=transport_handle,
    )


def send_message(*, config: ServerConfig, message: Message) -> SendResult:
    """Send *message* with a server built from *config*.

    Raises:
        ConfigurationError: No API key configured.
        TransportError: The exchange could not be completed.
        ApiError: Any non-200 status (see :meth:`Server.send`).
    """
    return build_server(config).send(message)


__all__ = [
    "CONTENT_TYPE_JSON",
    "HEADER_ACCEPT",
    "HEADER_CONTENT_TYPE",
    "HEADER_SERVER_TOKEN",
    "Server",
    "build_server",
    "send_message",
]
