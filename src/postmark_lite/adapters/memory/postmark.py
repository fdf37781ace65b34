"""In-memory Postmark adapters for testing.

Provides functions that satisfy the same Protocols as the production
adapters but never touch the network.

Contents:
    * :class:`MessageSpy` - Captures send calls for test assertions.
    * :func:`load_server_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from postmark_lite.domain.message import Message
from postmark_lite.domain.outcomes import SendResult, error_for_status

from ..postmark.config import ServerConfig


def _empty_send_list() -> list[dict[str, Any]]:
    return []


@dataclass
class MessageSpy:
    """Captures send operations for test assertions.

    Each test should create its own spy. ``send_message`` matches the
    SendMessage protocol expected by AppServices.

    Attributes:
        sent_messages: Captured ``{"config": ..., "message": ...}`` records.
        status_code: Simulated API status; non-200 raises the mapped error.
        raise_exception: When set, raised after the call is recorded.

    Example:
        >>> spy = MessageSpy()
        >>> spy.send_message(config=ServerConfig(api_key="t"), message=Message(to="a@example.com")).status_code
        200
        >>> len(spy.sent_messages)
        1
    """

    sent_messages: list[dict[str, Any]] = field(default_factory=_empty_send_list)
    status_code: int = 200
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for the next test."""
        self.sent_messages.clear()
        self.raise_exception = None

    def send_message(self, *, config: ServerConfig, message: Message) -> SendResult:
        """Record the call and return or raise according to the spy state.

        Raises:
            Exception: ``raise_exception`` when set.
            ApiError: Mapped from ``status_code`` when it is not 200.
        """
        self.sent_messages.append({"config": config, "message": message.model_copy(deep=True)})
        if self.raise_exception is not None:
            raise self.raise_exception
        error = error_for_status(self.status_code)
        if error is not None:
            raise error
        return SendResult(status_code=self.status_code)


def load_server_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> ServerConfig:
    """Parse the ``[postmark]`` section with the real Pydantic model."""
    section = config_dict.get("postmark", {})
    return ServerConfig.model_validate(section if section else {})


__all__ = [
    "MessageSpy",
    "load_server_config_from_dict_in_memory",
]
