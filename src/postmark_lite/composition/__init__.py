"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# Postmark services
from ..adapters.postmark.config import load_server_config_from_dict
from ..adapters.postmark.server import send_message

# Static conformance assertions, checked by pyright.
if TYPE_CHECKING:
    from ..adapters.memory.postmark import MessageSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadServerConfigFromDict,
        SendMessage,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_send_message: SendMessage = send_message
    _assert_load_server_config_from_dict: LoadServerConfigFromDict = load_server_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    send_message: SendMessage
    load_server_config_from_dict: LoadServerConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        send_message=send_message,
        load_server_config_from_dict=load_server_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: MessageSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: MessageSpy capturing send calls. A fresh one is created when
            None; pass your own to assert on captured messages.
    """
    from ..adapters.memory import (
        MessageSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_server_config_from_dict_in_memory,
    )

    message_spy = spy if spy is not None else MessageSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        send_message=message_spy.send_message,
        load_server_config_from_dict=load_server_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Postmark
    "send_message",
    "load_server_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
