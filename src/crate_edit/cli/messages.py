"""Cargo-style terminal messages for progress and failures.

Progress lines mimic cargo's own output: a bold green verb padded to
twelve columns, then the details::

          Adding serde v^1.0.100 to dependencies
        Removing rand from dev-dependencies
"""

from __future__ import annotations

from crate_edit.cli.console import console, out_console
from crate_edit.core.models import AddProgress, RemoveProgress
from crate_edit.exceptions import CrateEditError

VERB_WIDTH: int = 12


def format_added(progress: AddProgress) -> str:
    """Return the details following ``Adding`` for *progress*."""
    dependency = progress.dependency
    parts = [dependency.name]
    if dependency.version is not None:
        parts.append(f"v{dependency.version}")
    else:
        parts.append("(unknown version)")
    parts.append("to")
    if progress.optional:
        parts.append("optional")
    parts.append(progress.section.describe())
    return " ".join(parts)


def format_removed(progress: RemoveProgress) -> str:
    return f"{progress.name} from {progress.section.describe()}"


def report_added(progress: AddProgress) -> None:
    out_console.labelled(
        "Adding", format_added(progress), style="bold green", width=VERB_WIDTH,
    )


def report_removed(progress: RemoveProgress) -> None:
    out_console.labelled(
        "Removing", format_removed(progress), style="bold green", width=VERB_WIDTH,
    )


def cause_chain(exc: BaseException) -> list[BaseException]:
    """Return the explicit ``raise ... from`` causes of *exc*, outermost first."""
    causes: list[BaseException] = []
    current = exc.__cause__
    while current is not None and current not in causes:
        causes.append(current)
        current = current.__cause__
    return causes


def _report_causes(exc: BaseException) -> None:
    for cause in cause_chain(exc):
        detail = str(cause) or type(cause).__name__
        console.labelled("Caused by:", detail, style="red")


def report_error(exc: CrateEditError) -> None:
    """Render *exc*, every cause in its chain, and its hint to stderr."""
    console.labelled("Error:", str(exc), style="bold red")
    _report_causes(exc)
    if exc.hint:
        console.labelled("Hint:", exc.hint, style="yellow")


def report_unexpected(exc: Exception) -> None:
    """Render an exception that escaped the typed hierarchy, with its causes."""
    console.labelled(
        "Unexpected error.",
        f"Please report this issue.\n  {type(exc).__name__}: {exc}",
        style="bold red",
    )
    _report_causes(exc)
