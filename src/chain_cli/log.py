"""Logging setup for the chain_cli logger namespace."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "chain_cli"


def configure_logging(verbose: bool = False) -> None:
    """Send chain_cli log records to stderr.

    DEBUG when *verbose*, otherwise WARNING. Safe to call more than once.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    root.handlers.clear()
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
