"""Upgrade policy: maps an upgrade mode to a requirement operator.

Cargo treats ``1.2.3`` as ``^1.2.3``; the operators below make the
chosen floating range explicit in the manifest:

* ``none``  → ``=``  exact match
* ``patch`` → ``~``  patch updates only
* ``minor`` → ``^``  semver-compatible updates (default)
* ``all``   → ``>=`` any newer version
"""

from __future__ import annotations

from crate_edit.core.models import UpgradeMode
from crate_edit.exceptions import InvalidUpgradeModeError

_PREFIXES: dict[UpgradeMode, str] = {
    UpgradeMode.NONE: "=",
    UpgradeMode.PATCH: "~",
    UpgradeMode.MINOR: "^",
    UpgradeMode.ALL: ">=",
}


def parse_upgrade_mode(text: str) -> UpgradeMode:
    """Parse *text* case-insensitively into an :class:`UpgradeMode`.

    Raises
    ------
    InvalidUpgradeModeError
        If *text* is not one of ``none``, ``patch``, ``minor``, ``all``.
    """
    try:
        return UpgradeMode(text.strip().lower())
    except ValueError:
        raise InvalidUpgradeModeError(
            f"Invalid upgrade mode: {text!r}",
            hint="Choose one of: none, patch, minor, all.",
        ) from None


def upgrade_prefix(mode: UpgradeMode | str) -> str:
    """Return the requirement operator for *mode*."""
    if isinstance(mode, str):
        mode = parse_upgrade_mode(mode)
    return _PREFIXES[mode]
