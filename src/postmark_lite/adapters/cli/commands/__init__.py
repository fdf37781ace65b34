"""CLI command implementations.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Send command from :mod:`.send`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send import cli_send

__all__ = [
    "cli_config",
    "cli_info",
    "cli_send",
]
