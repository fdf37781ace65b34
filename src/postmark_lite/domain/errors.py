"""Domain-specific exceptions for typed error handling at boundaries.

Every failure of a send call reaches the caller as one of these types.
Status-derived failures share :class:`ApiError` so callers can inspect the
HTTP status code and the raw response body.
"""

from __future__ import annotations


class PostmarkError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PostmarkError):
    """Missing, invalid, or incomplete configuration.

    Raised when the server token is absent or configuration values are
    malformed. Typically caught at CLI boundaries to provide user-friendly
    error messages.

    Example:
        >>> err = ConfigurationError("No API key configured")
        >>> str(err)
        'No API key configured'
    """


class TransportError(PostmarkError):
    """The HTTP exchange itself could not be completed.

    Covers connection refusal, DNS failures, timeouts, and failures to encode
    the message as JSON. The underlying exception is chained as ``__cause__``.

    Example:
        >>> str(TransportError("Connection refused"))
        'Connection refused'
    """


class ApiError(PostmarkError):
    """The API answered with a status code other than 200.

    Attributes:
        status_code: HTTP status code returned by the API.
        body: Raw response body text, never parsed.
    """

    default_message = "The Postmark API returned an error response."

    def __init__(self, status_code: int, body: str = "", message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.status_code = status_code
        self.body = body

    def __reduce__(self) -> tuple[type[ApiError], tuple[int, str, str]]:
        return (type(self), (self.status_code, self.body, str(self)))


class UnauthorizedError(ApiError):
    """Status 401: the server API key is missing or incorrect.

    Example:
        >>> err = UnauthorizedError(401)
        >>> err.status_code
        401
        >>> str(err)
        'The server API key is missing or incorrect.'
    """

    default_message = "The server API key is missing or incorrect."


class UnprocessableError(ApiError):
    """Status 422: the message fields were rejected by the API."""

    default_message = "The message is invalid. Check if all required fields are filled correctly."


class InternalServerError(ApiError):
    """Status 500: transient upstream failure; the caller may retry."""

    default_message = "The Postmark server has an internal server error."


class UnknownResponseError(ApiError):
    """Any status code without a dedicated outcome.

    Example:
        >>> UnknownResponseError(403).status_code
        403
    """

    default_message = "The Postmark API returned an unknown HTTP response code."


__all__ = [
    "ApiError",
    "ConfigurationError",
    "InternalServerError",
    "PostmarkError",
    "TransportError",
    "UnauthorizedError",
    "UnknownResponseError",
    "UnprocessableError",
]
