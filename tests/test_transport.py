"""Transport stories: one-time shared initialization and the httpx adapter."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from postmark_lite.adapters.memory import CountingTransportFactory, FakeTransport
from postmark_lite.adapters.postmark import HttpxTransport, Server, TransportHandle, shared_transport_handle
from postmark_lite.domain.errors import TransportError, UnauthorizedError
from postmark_lite.domain.message import Message

# ======================== TransportHandle ========================


@pytest.mark.os_agnostic
def test_handle_builds_nothing_until_first_use() -> None:
    """Construction is lazy."""
    factory = CountingTransportFactory()

    handle = TransportHandle(factory)

    assert factory.calls == 0
    assert handle.initialised is False


@pytest.mark.os_agnostic
def test_handle_returns_the_same_transport_every_time() -> None:
    """Repeated get() calls reuse the first transport."""
    factory = CountingTransportFactory()
    handle = TransportHandle(factory)

    first = handle.get()
    second = handle.get()

    assert first is second
    assert factory.calls == 1
    assert handle.initialised is True


@pytest.mark.os_agnostic
def test_concurrent_first_sends_from_many_servers_build_one_transport() -> None:
    """Racing first sends across servers initialize the transport exactly once."""
    factory = CountingTransportFactory(delay=0.05)
    handle = TransportHandle(factory)
    servers = [Server(f"token-{i}", transport_handle=handle) for i in range(16)]
    barrier = threading.Barrier(len(servers))

    def _send(server: Server) -> int:
        barrier.wait()
        return server.send_simple_text("a@example.com", "b@example.com", "Hi", "Hello").status_code

    with ThreadPoolExecutor(max_workers=len(servers)) as pool:
        statuses = list(pool.map(_send, servers))

    assert statuses == [200] * len(servers)
    assert factory.calls == 1
    assert len(factory.built) == 1
    assert len(factory.built[0].requests) == len(servers)


@pytest.mark.os_agnostic
def test_concurrent_get_returns_one_fully_built_instance() -> None:
    """Every racing caller observes the identical instance."""
    factory = CountingTransportFactory(delay=0.02)
    handle = TransportHandle(factory)
    barrier = threading.Barrier(8)

    def _get(_: int) -> object:
        barrier.wait()
        return handle.get()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_get, range(8)))

    assert all(result is results[0] for result in results)
    assert factory.calls == 1


@pytest.mark.os_agnostic
def test_reset_closes_and_rebuilds_on_next_use() -> None:
    """reset() closes the current transport; the next get() builds a new one."""
    factory = CountingTransportFactory()
    handle = TransportHandle(factory)
    first = handle.get()

    handle.reset()
    second = handle.get()

    assert isinstance(first, FakeTransport)
    assert first.closed is True
    assert second is not first
    assert factory.calls == 2


@pytest.mark.os_agnostic
def test_reset_on_unused_handle_is_harmless() -> None:
    """Resetting before first use builds nothing."""
    factory = CountingTransportFactory()
    handle = TransportHandle(factory)

    handle.reset()

    assert factory.calls == 0


@pytest.mark.os_agnostic
def test_shared_handle_is_process_wide() -> None:
    """Every call returns the same handle."""
    assert shared_transport_handle() is shared_transport_handle()


# ======================== HttpxTransport ========================


@pytest.mark.os_agnostic
def test_httpx_transport_returns_status_and_text() -> None:
    """The response status and body text pass through unparsed."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(422, text='{"ErrorCode":300}')

    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(_handler)))

    response = transport.post(
        "https://api.test.invalid/email",
        headers={"X-Postmark-Server-Token": "token"},
        content=b'{"To":"a@example.com"}',
    )

    assert response.status_code == 422
    assert response.body == '{"ErrorCode":300}'
    assert seen[0].method == "POST"
    assert seen[0].headers["X-Postmark-Server-Token"] == "token"
    assert seen[0].content == b'{"To":"a@example.com"}'


@pytest.mark.os_agnostic
def test_httpx_connection_failure_becomes_transport_error() -> None:
    """Network failures surface as TransportError with the cause chained."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(_handler)))

    with pytest.raises(TransportError, match="connection refused") as exc_info:
        transport.post("https://api.test.invalid/email", headers={}, content=b"{}")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.os_agnostic
def test_httpx_timeout_becomes_transport_error() -> None:
    """Timeouts are transport failures too."""

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(_handler)))

    with pytest.raises(TransportError):
        transport.post("https://api.test.invalid/email", headers={}, content=b"{}")


@pytest.mark.os_agnostic
def test_per_request_timeout_overrides_client_default() -> None:
    """The timeout argument reaches the outgoing request."""
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(_handler), timeout=30.0))

    transport.post("https://api.test.invalid/email", headers={}, content=b"{}", timeout=2.5)
    transport.post("https://api.test.invalid/email", headers={}, content=b"{}")

    assert seen[0].extensions["timeout"]["read"] == 2.5
    assert seen[1].extensions["timeout"]["read"] == 30.0


@pytest.mark.os_agnostic
def test_non_ascii_api_key_becomes_transport_error() -> None:
    """A token httpx cannot encode as a header fails as TransportError."""
    transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(lambda _: httpx.Response(200))))
    server = Server("tökén", transport_handle=TransportHandle(lambda: transport))

    with pytest.raises(TransportError, match="ASCII") as exc_info:
        server.send(Message(to="b@example.com"))

    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)


@pytest.mark.os_agnostic
def test_server_over_httpx_maps_unauthorized_end_to_end() -> None:
    """A real httpx client wired through a handle yields the typed error."""

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Content-Type"] == "application/json"
        return httpx.Response(401, text='{"ErrorCode":10,"Message":"Bad or missing API token"}')

    client = httpx.Client(transport=httpx.MockTransport(_handler))
    handle = TransportHandle(lambda: HttpxTransport(client=client))
    server = Server("wrong-token", endpoint="https://api.test.invalid/email", transport_handle=handle)

    with pytest.raises(UnauthorizedError) as exc_info:
        server.send(Message(to="a@example.com"))

    assert "Bad or missing API token" in exc_info.value.body
    handle.reset()


@pytest.mark.os_agnostic
def test_httpx_transport_close_closes_client() -> None:
    """close() releases the underlying client."""
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    transport = HttpxTransport(client=client)

    transport.close()

    assert client.is_closed
