"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that operate entirely
in memory -- no filesystem, no network, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.postmark` - MessageSpy and in-memory config loader
    * :mod:`.transport` - FakeTransport and CountingTransportFactory
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory
from .postmark import MessageSpy, load_server_config_from_dict_in_memory
from .transport import CountingTransportFactory, FakeTransport, RecordedRequest

# Static conformance assertions
if TYPE_CHECKING:
    from postmark_lite.application.ports import (
        DisplayConfig,
        GetConfig,
        HttpTransport,
        InitLogging,
        LoadServerConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_server_config: LoadServerConfigFromDict = load_server_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport: HttpTransport = FakeTransport()

__all__ = [
    "CountingTransportFactory",
    "FakeTransport",
    "MessageSpy",
    "RecordedRequest",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_server_config_from_dict_in_memory",
]
