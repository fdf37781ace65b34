"""Shared pytest fixtures for client, CLI, and module-entry tests.

All shared fixtures live here; tests receive them through pytest's conftest
discovery. Fixture names read as plain English.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from postmark_lite.adapters.memory import FakeTransport
from postmark_lite.adapters.postmark import Server, TransportHandle

if TYPE_CHECKING:
    from postmark_lite.adapters.memory import MessageSpy
    from postmark_lite.composition import AppServices


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

TEST_ENDPOINT = "https://api.test.invalid/email"


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output and ``result.stderr`` for error
    messages; ``result.output`` interleaves both.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests.

    Example:
        def test_info(cli_runner: CliRunner, production_factory: Callable[[], AppServices]) -> None:
            result = cli_runner.invoke(cli, ["info"], obj=production_factory)
            assert result.exit_code == 0
    """
    from postmark_lite.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test.

    Use this whenever a test reads or mutates the global
    ``lib_cli_exit_tools.config`` traceback flags.
    """
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before each test.

    Only clears before, not after, so a monkeypatched loader without
    ``cache_clear`` does not break teardown.
    """
    from postmark_lite.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Example:
        def test_postmark_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
            config = config_factory({"postmark": {"api_key": "token"}})
            assert config.get("postmark.api_key") == "token"
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Provide a transport answering 200 that records every request."""
    return FakeTransport(status_code=200, body='{"ErrorCode":0,"Message":"OK"}')


@pytest.fixture
def server_factory(fake_transport: FakeTransport) -> Callable[..., Server]:
    """Return a factory building Servers wired to ``fake_transport``.

    Example:
        def test_send(server_factory: Callable[..., Server], fake_transport: FakeTransport) -> None:
            server = server_factory(default_from="noreply@example.com")
            server.send_simple_text("", "a@example.com", "Hi", "Hello")
            assert len(fake_transport.requests) == 1
    """

    def _factory(api_key: str = "server-token", **kwargs: Any) -> Server:
        kwargs.setdefault("endpoint", TEST_ENDPOINT)
        kwargs.setdefault("transport_handle", TransportHandle(lambda: fake_transport))
        return Server(api_key, **kwargs)

    return _factory


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a services factory whose config loader returns *config_data*.

    Only the I/O boundary (``get_config``) is replaced; display and logging
    stay production.
    """
    from postmark_lite.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            send_message=prod.send_message,
            load_server_config_from_dict=prod.load_server_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was called with."""
    from postmark_lite.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            send_message=prod.send_message,
            load_server_config_from_dict=prod.load_server_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject


@dataclass
class SendCliContext:
    """Services factory and message spy for ``send`` command tests.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        spy: MessageSpy capturing what the command tried to send.
    """

    factory: Callable[[], Any]
    spy: MessageSpy


@pytest.fixture
def send_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SendCliContext]:
    """Create a ``send`` test context from the ``[postmark]`` section contents.

    Example:
        def test_send(cli_runner: CliRunner, send_cli_context: Callable[..., SendCliContext]) -> None:
            ctx = send_cli_context({"api_key": "token"})
            result = cli_runner.invoke(cli, ["send", "--to", "a@b.com", "--subject", "Hi"], obj=ctx.factory)
            assert ctx.spy.sent_messages[0]["message"].to == "a@b.com"
    """
    from postmark_lite.adapters.memory import MessageSpy as MessageSpyImpl
    from postmark_lite.adapters.memory import load_server_config_from_dict_in_memory
    from postmark_lite.composition import AppServices, build_production

    def _create(postmark_data: dict[str, Any]) -> SendCliContext:
        spy = MessageSpyImpl()
        config = Config({"postmark": postmark_data}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            send_message=spy.send_message,
            load_server_config_from_dict=load_server_config_from_dict_in_memory,
            init_logging=prod.init_logging,
        )
        return SendCliContext(factory=lambda: test_services, spy=spy)

    return _create
