"""Logging setup for donothing and the scripts built on it."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    """Send log records to stderr through rich.

    Operator-facing output goes to the procedure's own stdout, so logs are kept off it.
    Calling this more than once only updates the level.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_level=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
