"""Outbound email message model with the fixed Postmark field schema.

Field names are snake_case in Python and carry explicit PascalCase aliases
matching the API keys, so the wire schema never depends on attribute names.

Contents:
    * :class:`Header` - Single SMTP header name/value pair.
    * :class:`Message` - Mutable outbound email record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Separator used when accumulating recipient addresses.
RECIPIENT_SEPARATOR = ", "


class Header(BaseModel):
    """SMTP header emitted verbatim in the payload.

    Example:
        >>> Header(name="X-Campaign", value="spring").model_dump(by_alias=True)
        {'Name': 'X-Campaign', 'Value': 'spring'}
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    value: str = Field(alias="Value")


def _append_address(current: str, address: str) -> str:
    """Return *current* with *address* appended using the recipient separator.

    Examples:
        >>> _append_address("", "a@example.com")
        'a@example.com'
        >>> _append_address("a@example.com", "b@example.com")
        'a@example.com, b@example.com'
    """
    if current:
        return current + RECIPIENT_SEPARATOR + address
    return address


class Message(BaseModel):
    """Mutable outbound email message.

    Recipient fields are comma-joined strings built incrementally; no
    deduplication or address validation happens here.

    Example:
        >>> message = Message(from_address="sender@example.com", subject="Hi")
        >>> message.append_to("a@example.com")
        >>> message.append_to("b@example.com")
        >>> message.to
        'a@example.com, b@example.com'
    """

    model_config = ConfigDict(populate_by_name=True)

    from_address: str = Field(default="", alias="From")
    to: str = Field(default="", alias="To")
    cc: str = Field(default="", alias="Cc")
    bcc: str = Field(default="", alias="Bcc")
    tag: str = Field(default="", alias="Tag")
    subject: str = Field(default="", alias="Subject")
    html_body: str = Field(default="", alias="HtmlBody")
    text_body: str = Field(default="", alias="TextBody")
    reply_to: str = Field(default="", alias="ReplyTo")
    headers: list[Header] = Field(default_factory=list, alias="Headers")

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_null_headers(cls, v: Any) -> Any:
        """Treat a JSON ``null`` header list as empty.

        Example:
            >>> Message.model_validate({"Headers": None}).headers
            []
        """
        return [] if v is None else v

    @classmethod
    def simple(
        cls,
        from_address: str,
        to: str,
        subject: str,
        html_body: str = "",
        text_body: str = "",
    ) -> Message:
        """Build a complete message in one call.

        Sets the fields directly; ``to`` is stored as given rather than
        accumulated.

        Example:
            >>> msg = Message.simple("a@example.com", "b@example.com", "Hi", text_body="Hello")
            >>> (msg.to, msg.text_body, msg.html_body)
            ('b@example.com', 'Hello', '')
        """
        return cls(
            from_address=from_address,
            to=to,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

    def append_to(self, recipient: str) -> None:
        """Add a recipient to the ``To`` field."""
        self.to = _append_address(self.to, recipient)

    def append_cc(self, recipient: str) -> None:
        """Add an address to the ``Cc`` field."""
        self.cc = _append_address(self.cc, recipient)

    def append_bcc(self, recipient: str) -> None:
        """Add an address to the ``Bcc`` field."""
        self.bcc = _append_address(self.bcc, recipient)

    def add_header(self, name: str, value: str) -> None:
        """Append a custom SMTP header, keeping insertion order."""
        self.headers.append(Header(name=name, value=value))


__all__ = [
    "Header",
    "Message",
    "RECIPIENT_SEPARATOR",
]
