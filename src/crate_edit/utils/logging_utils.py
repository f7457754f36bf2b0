"""Logging configuration for crate-edit.

Diagnostics go through the stdlib :mod:`logging` module and are written
to stderr.  User-facing output (progress lines, error reports) never
goes through logging; it is rendered by the CLI console.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT: str = "[%(levelname)s] %(message)s"

_HANDLER_NAME = "crate_edit"


def resolve_level(name: str) -> int:
    """Return the numeric logging level for *name*, ``WARNING`` if unknown."""
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: str) -> None:
    """Install a single stderr handler on the package logger.

    Calling this more than once only updates the level; it never stacks
    duplicate handlers.
    """
    logger = logging.getLogger("crate_edit")
    logger.setLevel(resolve_level(level))

    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
