"""Static package metadata surfaced to CLI commands and documentation.

Values here are kept in sync with ``pyproject.toml`` so the CLI can report
its identity without importing installation metadata at runtime.

Contents:
    * Identity constants (``name``, ``title``, ``version``, ``shell_command``).
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config path discovery.
    * :func:`print_info` - Human-readable metadata dump.
"""

from __future__ import annotations

from typing import Final

name: Final[str] = "postmark_lite"
title: Final[str] = "Minimal client for the Postmark transactional email API"
version: Final[str] = "1.0.0"
homepage: Final[str] = "https://github.com/postmark-lite/postmark-lite"
author: Final[str] = "postmark-lite contributors"
shell_command: Final[str] = "postmark-lite"

#: Vendor, app, and slug identifiers for lib_layered_config path resolution.
LAYEREDCONF_VENDOR: Final[str] = "postmark-lite"
LAYEREDCONF_APP: Final[str] = "postmark-lite"
LAYEREDCONF_SLUG: Final[str] = "postmark-lite"


def print_info() -> None:
    """Print the package metadata as aligned ``key = value`` lines.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for postmark_lite:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
