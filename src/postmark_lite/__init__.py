"""Public package surface for the Postmark client.

Routes imports through the architectural layers:
- Domain exports: Message model, send outcomes, error types
- Adapter exports: Server handle and transports
- Composition exports: Wired configuration loader
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Postmark adapter exports
from .adapters.postmark import (
    HttpxTransport,
    Server,
    ServerConfig,
    TransportHandle,
    build_server,
    shared_transport_handle,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    ApiError,
    ConfigurationError,
    Header,
    InternalServerError,
    Message,
    PostmarkError,
    SendResult,
    TransportError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableError,
)

__all__ = [
    "ApiError",
    "ConfigurationError",
    "Header",
    "HttpxTransport",
    "InternalServerError",
    "Message",
    "PostmarkError",
    "SendResult",
    "Server",
    "ServerConfig",
    "TransportError",
    "TransportHandle",
    "UnauthorizedError",
    "UnknownResponseError",
    "UnprocessableError",
    "build_server",
    "get_config",
    "print_info",
    "shared_transport_handle",
]
