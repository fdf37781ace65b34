"""Configuration display backed by lib_layered_config's Rich renderer."""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from postmark_lite.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render *config* after flushing pending log output.

    lib_layered_config masks sensitive keys such as ``api_key`` itself.

    Args:
        config: Loaded layered configuration.
        output_format: Human-readable TOML-like output or JSON.
        section: Only show this section when given.
        console: Rich console override, mainly for tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: If the requested section does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(config, output_format=lib_format, section=section, profile=profile, console=console)


__all__ = ["display_config"]
