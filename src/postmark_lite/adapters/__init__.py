"""Adapters layer - infrastructure and framework integrations.

Connects the application to external systems (Postmark HTTP API,
configuration files, logging, command line).

Contents:
    * :mod:`.postmark` - Postmark API client (server, payload, transport)
    * :mod:`.config` - Configuration loading, display, and overrides
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory test doubles
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
