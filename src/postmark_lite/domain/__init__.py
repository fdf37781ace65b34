"""Domain layer - pure message and outcome logic with no I/O.

Contents:
    * :mod:`.message` - Message and Header models
    * :mod:`.outcomes` - Status code to outcome mapping
    * :mod:`.enums` - Domain enumerations (OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import OutputFormat
from .errors import (
    ApiError,
    ConfigurationError,
    InternalServerError,
    PostmarkError,
    TransportError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableError,
)
from .message import Header, Message
from .outcomes import SendResult, error_for_status

__all__ = [
    # Models
    "Header",
    "Message",
    "SendResult",
    "error_for_status",
    # Enums
    "OutputFormat",
    # Errors
    "ApiError",
    "ConfigurationError",
    "InternalServerError",
    "PostmarkError",
    "TransportError",
    "UnauthorizedError",
    "UnknownResponseError",
    "UnprocessableError",
]
