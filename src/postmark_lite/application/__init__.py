"""Application layer - port definitions.

Contains port protocols that define the interfaces for adapter
implementations.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    HttpTransport,
    InitLogging,
    LoadServerConfigFromDict,
    SendMessage,
    TransportResponse,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "HttpTransport",
    "InitLogging",
    "LoadServerConfigFromDict",
    "SendMessage",
    "TransportResponse",
]
