"""Send message CLI command.

Builds a :class:`~postmark_lite.domain.message.Message` from CLI options and
sends it through the configured Postmark server.

Contents:
    * :func:`cli_send` - The ``send`` command.
    * :func:`execute_with_send_error_handling` - Maps send failures to exit codes.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from typing import Any, NoReturn, cast

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from postmark_lite.adapters.postmark.config import ServerConfig
from postmark_lite.domain.errors import (
    ConfigurationError,
    InternalServerError,
    TransportError,
    UnauthorizedError,
    UnknownResponseError,
    UnprocessableError,
)
from postmark_lite.domain.message import Message
from postmark_lite.domain.outcomes import SendResult

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset (None) options so only explicit overrides remain.

    Example:
        >>> filter_sentinels(api_key=None, timeout=5.0)
        {'timeout': 5.0}
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def apply_validated_overrides(base_config: ServerConfig, overrides: dict[str, Any]) -> ServerConfig:
    """Merge *overrides* into *base_config* and re-run model validation.

    ``model_copy(update=...)`` would skip the validators, so the merged dict
    goes through ``model_validate`` instead.

    Raises:
        ValidationError: When an override holds an invalid value.
    """
    if not overrides:
        return base_config
    return ServerConfig.model_validate({**base_config.model_dump(), **overrides})


def summarize_validation_error(exc: ValidationError) -> str:
    """Describe validation failures without echoing input values.

    Pydantic embeds the offending input in its message, which for a model
    level check is the whole config including the API key.
    """
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def _parse_headers(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[tuple[str, str]]:
    """Click callback splitting ``NAME=VALUE`` header options.

    Raises:
        click.BadParameter: When an entry lacks ``=`` or has an empty name.
    """
    parsed: list[tuple[str, str]] = []
    for raw in value:
        name, sep, header_value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", ctx=ctx, param=param)
        parsed.append((name.strip(), header_value))
    return parsed


def build_cli_message(
    *,
    from_address: str | None,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text_body: str,
    html_body: str,
    reply_to: str | None,
    tag: str | None,
    headers: list[tuple[str, str]],
) -> Message:
    """Assemble a Message, accumulating repeated address options in order.

    Example:
        >>> msg = build_cli_message(
        ...     from_address="a@example.com", recipients=("b@example.com", "c@example.com"),
        ...     cc=(), bcc=(), subject="Hi", text_body="Hello", html_body="",
        ...     reply_to=None, tag=None, headers=[("X-Id", "7")],
        ... )
        >>> msg.to
        'b@example.com, c@example.com'
        >>> msg.headers[0].name
        'X-Id'
    """
    message = Message(
        from_address=from_address or "",
        subject=subject,
        text_body=text_body,
        html_body=html_body,
        reply_to=reply_to or "",
        tag=tag or "",
    )
    for address in recipients:
        message.append_to(address)
    for address in cc:
        message.append_cc(address)
    for address in bcc:
        message.append_bcc(address)
    for name, value in headers:
        message.add_header(name, value)
    return message


def execute_with_send_error_handling(operation: Callable[[], SendResult], *, recipients: str) -> None:
    """Run *operation* and translate every failure into an exit code.

    Exceptions are caught most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. UnauthorizedError -> UNAUTHORIZED (77)
    3. UnprocessableError -> MESSAGE_REJECTED (65)
    4. InternalServerError / UnknownResponseError -> UPSTREAM_FAILURE (69)
    5. TransportError -> TRANSPORT_FAILURE (74)
    6. Exception -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: On any failure.
    """
    try:
        result = operation()
    except ConfigurationError as exc:
        _handle_send_error(exc, "Postmark configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except UnauthorizedError as exc:
        _handle_send_error(exc, "Postmark rejected the API key", "Unauthorized", ExitCode.UNAUTHORIZED)
    except UnprocessableError as exc:
        _handle_send_error(exc, "Postmark rejected the message", "Message rejected", ExitCode.MESSAGE_REJECTED)
    except (InternalServerError, UnknownResponseError) as exc:
        _handle_send_error(exc, "Postmark API failure", "API failure", ExitCode.UPSTREAM_FAILURE)
    except TransportError as exc:
        _handle_send_error(exc, "HTTP exchange failed", "Failed to reach the API", ExitCode.TRANSPORT_FAILURE)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _handle_send_error(
            exc,
            "Unexpected error sending message",
            "Unexpected error",
            ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )
    else:
        click.echo("\nMessage sent successfully!")
        logger.info("Message sent via CLI", extra={"recipients": recipients, "status_code": result.status_code})


def _handle_send_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    exit_code: ExitCode,
    *,
    log_traceback: bool = False,
) -> NoReturn:
    """Log *exc*, print a short message, and exit with *exit_code*."""
    details: dict[str, Any] = {"error": str(exc), "error_type": type(exc).__name__}
    status_code = getattr(exc, "status_code", None)
    if status_code is not None:
        details["status_code"] = status_code
    logger.error(log_message, extra=details, exc_info=log_traceback)
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    body = cast(str, getattr(exc, "body", ""))
    if body:
        click.echo(body, err=True)
    raise SystemExit(exit_code)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--from", "from_address", default=None, help="Sender address (uses postmark.default_from if omitted)")
@click.option("--to", "recipients", multiple=True, required=True, help="Recipient address (repeatable)")
@click.option("--cc", multiple=True, default=(), help="CC address (repeatable)")
@click.option("--bcc", multiple=True, default=(), help="BCC address (repeatable)")
@click.option("--subject", required=True, help="Subject line")
@click.option("--text", "text_body", default="", help="Plain-text body")
@click.option("--html", "html_body", default="", help="HTML body")
@click.option("--reply-to", default=None, help="Reply-to address (uses postmark.default_reply_to if omitted)")
@click.option("--tag", default=None, help="Tag used to categorize the message")
@click.option(
    "--header",
    "headers",
    multiple=True,
    default=(),
    metavar="NAME=VALUE",
    callback=_parse_headers,
    help="Custom SMTP header (repeatable)",
)
@click.option("--api-key", default=None, help="Override postmark.api_key")
@click.option("--api-url", default=None, help="Override postmark.api_url")
@click.option("--timeout", type=float, default=None, help="Override postmark.timeout in seconds")
@click.pass_context
def cli_send(
    ctx: click.Context,
    from_address: str | None,
    recipients: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    subject: str,
    text_body: str,
    html_body: str,
    reply_to: str | None,
    tag: str | None,
    headers: list[tuple[str, str]],
    api_key: str | None,
    api_url: str | None,
    timeout: float | None,
) -> None:
    """Send one message through the Postmark API."""
    cli_ctx = get_cli_context(ctx)
    message = build_cli_message(
        from_address=from_address,
        recipients=recipients,
        cc=cc,
        bcc=bcc,
        subject=subject,
        text_body=text_body,
        html_body=html_body,
        reply_to=reply_to,
        tag=tag,
        headers=headers,
    )
    extra = {"command": "send", "recipients": message.to, "subject": subject}

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        try:
            server_config = cli_ctx.services.load_server_config_from_dict(cli_ctx.config.as_dict())
        except ValidationError as exc:
            _handle_send_error(
                ConfigurationError(summarize_validation_error(exc)),
                "Invalid configuration",
                "Invalid postmark configuration",
                ExitCode.CONFIG_ERROR,
            )
        try:
            server_config = apply_validated_overrides(
                server_config,
                filter_sentinels(api_key=api_key, api_url=api_url, timeout=timeout),
            )
        except ValidationError as exc:
            _handle_send_error(
                ValueError(summarize_validation_error(exc)),
                "Invalid configuration",
                "Invalid option value",
                ExitCode.INVALID_ARGUMENT,
            )

        execute_with_send_error_handling(
            functools.partial(cli_ctx.services.send_message, config=server_config, message=message),
            recipients=message.to,
        )


__all__ = [
    "apply_validated_overrides",
    "build_cli_message",
    "cli_send",
    "execute_with_send_error_handling",
    "filter_sentinels",
    "summarize_validation_error",
]
