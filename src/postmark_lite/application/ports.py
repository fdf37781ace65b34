"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines the signature an adapter must satisfy. Existing
module-level functions and classes satisfy these protocols automatically via
structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``ServerConfig``) are imported under ``TYPE_CHECKING`` only so that
    layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.message import Message
from ..domain.outcomes import SendResult

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.postmark.config import ServerConfig


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and raw body text of one HTTP exchange."""

    status_code: int
    body: str = ""


class HttpTransport(Protocol):
    """Issue a POST request with custom headers and a byte body.

    ``timeout`` overrides the transport default for one request.
    Implementations raise :class:`~postmark_lite.domain.errors.TransportError`
    when the exchange cannot be completed. They must be safe to share
    between threads once constructed.
    """

    def post(
        self, url: str, *, headers: Mapping[str, str], content: bytes, timeout: float | None = ...
    ) -> TransportResponse: ...

    def close(self) -> None: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendMessage(Protocol):
    """Send one message using the configured Postmark server."""

    def __call__(self, *, config: ServerConfig, message: Message) -> SendResult: ...


class LoadServerConfigFromDict(Protocol):
    """Load ServerConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ServerConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "HttpTransport",
    "InitLogging",
    "LoadServerConfigFromDict",
    "SendMessage",
    "TransportResponse",
]
