"""CLI console helpers with optional Rich support.

Progress lines go to stdout, diagnostics to stderr.  Rich is imported
lazily so bootstrap paths (``--help``, ``--version``) keep working when
it is not installed; output then degrades to plain ``print``.

Colour is decided by Rich per stream: it is disabled automatically when
the stream is not a terminal.
"""

from __future__ import annotations

import sys
from typing import Any

from crate_edit.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def _stream(self) -> Any:
        return sys.stderr if self._stderr else sys.stdout

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except MissingDependencyError:
            print(*objects, file=self._stream())
            return
        rich_console.print(*objects, soft_wrap=True)

    def labelled(self, label: str, message: str, *, style: str, width: int = 0) -> None:
        """Print ``label`` styled and right-aligned to *width*, then *message*.

        *message* is never interpreted as Rich markup, so crate names and
        paths are rendered verbatim.
        """
        padded = label.rjust(width)
        try:
            rich_console = get_rich_console(stderr=self._stderr)
            from rich.text import Text
        except (MissingDependencyError, ModuleNotFoundError):
            print(f"{padded} {message}", file=self._stream())
            return
        rich_console.print(Text.assemble((padded, style), f" {message}"), soft_wrap=True)


console = _ConsoleProxy(stderr=True)
"""Diagnostics and errors."""

out_console = _ConsoleProxy(stderr=False)
"""Success-path progress lines."""
