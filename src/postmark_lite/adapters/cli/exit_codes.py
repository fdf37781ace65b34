"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values, so
scripts can tell a bad token from a rejected message or a network outage.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions.

    * 0-1: generic success / failure
    * 22: EINVAL (bad CLI argument)
    * 65: EX_DATAERR (API rejected the message, 422)
    * 69: EX_UNAVAILABLE (API internal error or unknown status)
    * 74: EX_IOERR (HTTP exchange failed)
    * 77: EX_NOPERM (API key rejected, 401)
    * 78: EX_CONFIG (missing or invalid configuration)

    Example:
        >>> int(ExitCode.UNAUTHORIZED)
        77
        >>> ExitCode.SUCCESS
        <ExitCode.SUCCESS: 0>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22
    MESSAGE_REJECTED = 65
    UPSTREAM_FAILURE = 69
    TRANSPORT_FAILURE = 74
    UNAUTHORIZED = 77
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
