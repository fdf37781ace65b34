"""HTTP transport and the process-wide shared transport handle.

Contents:
    * :class:`HttpxTransport` - :class:`HttpTransport` backed by ``httpx.Client``.
    * :class:`TransportHandle` - Lazily builds one transport, exactly once.
    * :func:`shared_transport_handle` - Default handle shared by all servers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

import httpx

from postmark_lite.application.ports import HttpTransport, TransportResponse
from postmark_lite.domain.errors import TransportError

from .config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Synchronous transport on top of a single ``httpx.Client``.

    ``httpx.Client`` pools connections and is safe to share between threads,
    so one instance serves every server using the same handle.

    Args:
        timeout: Per-request timeout in seconds.
        client: Pre-built client, mainly for tests (``httpx.MockTransport``).
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None) -> None:
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def post(
        self, url: str, *, headers: Mapping[str, str], content: bytes, timeout: float | None = None
    ) -> TransportResponse:
        """POST *content* to *url* and return the status code and body text.

        Args:
            timeout: Seconds for this request; None keeps the client default.

        Raises:
            TransportError: Connection, DNS, timeout, or URL failures, and
                header values that cannot be encoded as ASCII.
        """
        request_timeout = timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT
        try:
            response = self._client.post(url, headers=dict(headers), content=content, timeout=request_timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.debug("HTTP exchange failed", extra={"url": url}, exc_info=True)
            raise TransportError(f"HTTP exchange with {url} failed: {exc}") from exc
        except UnicodeEncodeError as exc:
            raise TransportError(f"Request headers for {url} are not ASCII-encodable: {exc.reason}") from exc
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()


class TransportHandle:
    """Holder that builds its transport on first use, exactly once.

    Concurrent first callers of :meth:`get` all receive the same fully
    constructed instance. The lock only guards construction and is released
    before any request is issued.

    Example:
        >>> calls = []
        >>> handle = TransportHandle(lambda: calls.append(1) or HttpxTransport())
        >>> handle.initialised
        False
        >>> handle.get() is handle.get()
        True
        >>> len(calls)
        1
        >>> handle.reset()
    """

    def __init__(self, factory: Callable[[], HttpTransport]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._transport: HttpTransport | None = None

    @property
    def initialised(self) -> bool:
        """Whether the transport has been built."""
        return self._transport is not None

    def get(self) -> HttpTransport:
        """Return the transport, building it on the first call."""
        transport = self._transport
        if transport is not None:
            return transport
        with self._lock:
            if self._transport is None:
                logger.debug("Initialising shared HTTP transport")
                self._transport = self._factory()
            return self._transport

    def reset(self) -> None:
        """Close and forget the current transport; the next :meth:`get` rebuilds it."""
        with self._lock:
            transport, self._transport = self._transport, None
        if transport is not None:
            transport.close()


_SHARED_HANDLE = TransportHandle(HttpxTransport)


def shared_transport_handle() -> TransportHandle:
    """Return the process-wide handle used by servers without their own."""
    return _SHARED_HANDLE


__all__ = [
    "HttpxTransport",
    "TransportHandle",
    "shared_transport_handle",
]
