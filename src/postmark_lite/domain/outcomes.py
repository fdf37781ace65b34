"""Pure mapping from HTTP status codes to send outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .errors import (
    ApiError,
    InternalServerError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableError,
)

RESPONSE_SUCCESS: Final[int] = 200
RESPONSE_UNAUTHORIZED: Final[int] = 401
RESPONSE_UNPROCESSABLE: Final[int] = 422
RESPONSE_INTERNAL_ERROR: Final[int] = 500

_ERRORS_BY_STATUS: Final[dict[int, type[ApiError]]] = {
    RESPONSE_UNAUTHORIZED: UnauthorizedError,
    RESPONSE_UNPROCESSABLE: UnprocessableError,
    RESPONSE_INTERNAL_ERROR: InternalServerError,
}


@dataclass(frozen=True, slots=True)
class SendResult:
    """Successful outcome of a send call.

    Attributes:
        status_code: Always 200 for a successful send.
        body: Raw response body text as returned by the API.
    """

    status_code: int
    body: str = ""


def error_for_status(status_code: int, body: str = "") -> ApiError | None:
    """Return the error matching *status_code*, or None on success.

    Only the status code drives the outcome; *body* is attached to the
    error for the caller and never inspected.

    Examples:
        >>> error_for_status(200) is None
        True
        >>> type(error_for_status(401)).__name__
        'UnauthorizedError'
        >>> type(error_for_status(422)).__name__
        'UnprocessableError'
        >>> type(error_for_status(500)).__name__
        'InternalServerError'
        >>> type(error_for_status(403)).__name__
        'UnknownResponseError'
    """
    if status_code == RESPONSE_SUCCESS:
        return None
    error_type = _ERRORS_BY_STATUS.get(status_code, UnknownResponseError)
    return error_type(status_code, body)


__all__ = [
    "RESPONSE_INTERNAL_ERROR",
    "RESPONSE_SUCCESS",
    "RESPONSE_UNAUTHORIZED",
    "RESPONSE_UNPROCESSABLE",
    "SendResult",
    "error_for_status",
]
