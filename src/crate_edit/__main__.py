"""Allow ``python -m crate_edit`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m crate_edit`` behaves identically to the ``crate-edit``
console script.
"""

from __future__ import annotations

from crate_edit.cli.app import cli

if __name__ == "__main__":
    cli()
