"""Postmark adapter - HTTP API client.

Structure:
    * :mod:`.config` - Server configuration model and loader
    * :mod:`.payload` - JSON payload codec
    * :mod:`.transport` - httpx transport and shared transport handle
    * :mod:`.server` - Server handle and send operations
"""

from __future__ import annotations

from .config import DEFAULT_API_URL, ServerConfig, load_server_config_from_dict
from .payload import build_payload, decode_message, encode_payload
from .server import Server, build_server, send_message
from .transport import HttpxTransport, TransportHandle, shared_transport_handle

__all__ = [
    "DEFAULT_API_URL",
    "HttpxTransport",
    "Server",
    "ServerConfig",
    "TransportHandle",
    "build_payload",
    "build_server",
    "decode_message",
    "encode_payload",
    "load_server_config_from_dict",
    "send_message",
    "shared_transport_handle",
]
