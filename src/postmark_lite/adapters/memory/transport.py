"""In-memory HTTP transport doubles.

Contents:
    * :class:`RecordedRequest` - One captured POST.
    * :class:`FakeTransport` - Returns a fixed status and records requests.
    * :class:`CountingTransportFactory` - Factory that counts constructions.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field

from postmark_lite.application.ports import TransportResponse


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    """A POST captured by :class:`FakeTransport`."""

    url: str
    headers: dict[str, str]
    content: bytes
    timeout: float | None = None


def _empty_request_list() -> list[RecordedRequest]:
    return []


@dataclass
class FakeTransport:
    """Transport double answering every request with a fixed status.

    Attributes:
        status_code: Status returned for every request.
        body: Response body text returned for every request.
        raise_exception: When set, ``post`` records the request and raises it.
        requests: Captured requests in call order.
        closed: Whether ``close`` has been called.

    Example:
        >>> transport = FakeTransport(status_code=422, body="bad")
        >>> transport.post("https://api.test/email", headers={}, content=b"{}").status_code
        422
        >>> len(transport.requests)
        1
    """

    status_code: int = 200
    body: str = ""
    raise_exception: Exception | None = None
    requests: list[RecordedRequest] = field(default_factory=_empty_request_list)
    closed: bool = False

    def post(
        self, url: str, *, headers: Mapping[str, str], content: bytes, timeout: float | None = None
    ) -> TransportResponse:
        """Record the request and return the configured response."""
        self.requests.append(RecordedRequest(url=url, headers=dict(headers), content=content, timeout=timeout))
        if self.raise_exception is not None:
            raise self.raise_exception
        return TransportResponse(status_code=self.status_code, body=self.body)

    def close(self) -> None:
        """Mark the transport closed."""
        self.closed = True


class CountingTransportFactory:
    """Transport factory that counts how many transports it built.

    Every call returns a new :class:`FakeTransport` with the configured
    status. ``delay`` widens the construction window so concurrent first
    callers actually race.

    Example:
        >>> factory = CountingTransportFactory()
        >>> _ = factory()
        >>> factory.calls
        1
    """

    def __init__(self, *, status_code: int = 200, delay: float = 0.0) -> None:
        self.status_code = status_code
        self.delay = delay
        self.calls = 0
        self.built: list[FakeTransport] = []
        self._lock = threading.Lock()

    def __call__(self) -> FakeTransport:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        transport = FakeTransport(status_code=self.status_code)
        self.built.append(transport)
        return transport


__all__ = [
    "CountingTransportFactory",
    "FakeTransport",
    "RecordedRequest",
]
