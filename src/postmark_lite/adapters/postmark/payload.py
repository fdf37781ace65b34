"""JSON payload codec for the Postmark ``/email`` endpoint.

The payload always carries the full key set (``From, To, Cc, Bcc, Tag,
Subject, HtmlBody, TextBody, ReplyTo, Headers``), including empty values.
"""

from __future__ import annotations

from typing import Any, Final

import orjson

from postmark_lite.domain.errors import TransportError
from postmark_lite.domain.message import Message

PAYLOAD_KEYS: Final[tuple[str, ...]] = (
    "From",
    "To",
    "Cc",
    "Bcc",
    "Tag",
    "Subject",
    "HtmlBody",
    "TextBody",
    "ReplyTo",
    "Headers",
)


def build_payload(
    message: Message,
    *,
    default_from: str | None = None,
    default_reply_to: str | None = None,
) -> dict[str, Any]:
    """Return the JSON-ready request body for *message*.

    Server defaults fill ``From`` and ``ReplyTo`` only when the message
    leaves them empty. The message itself is never modified.

    Example:
        >>> payload = build_payload(Message(to="a@example.com"), default_from="noreply@example.com")
        >>> payload["From"], payload["To"], payload["Headers"]
        ('noreply@example.com', 'a@example.com', [])
        >>> tuple(payload) == PAYLOAD_KEYS
        True
    """
    dumped = message.model_dump(by_alias=True)
    payload = {key: dumped[key] for key in PAYLOAD_KEYS}
    if not payload["From"] and default_from:
        payload["From"] = default_from
    if not payload["ReplyTo"] and default_reply_to:
        payload["ReplyTo"] = default_reply_to
    return payload


def encode_payload(payload: dict[str, Any]) -> bytes:
    """Serialize *payload* to UTF-8 JSON bytes.

    Raises:
        TransportError: When the payload holds values JSON cannot represent.

    Example:
        >>> encode_payload({"From": "a@example.com"})
        b'{"From":"a@example.com"}'
    """
    try:
        return orjson.dumps(payload)
    except orjson.JSONEncodeError as exc:
        raise TransportError(f"Failed to encode message as JSON: {exc}") from exc


def decode_message(data: bytes | str) -> Message:
    """Parse an encoded payload back into a :class:`Message`.

    Example:
        >>> decode_message(b'{"To":"a@example.com","Headers":null}').to
        'a@example.com'
    """
    return Message.model_validate(orjson.loads(data))


__all__ = [
    "PAYLOAD_KEYS",
    "build_payload",
    "decode_message",
    "encode_payload",
]
