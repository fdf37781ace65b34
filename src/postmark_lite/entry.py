"""Console script entry point with production wiring."""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the ``postmark-lite`` console script with production services."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
