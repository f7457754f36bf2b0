"""Manifest section resolution.

``add`` and ``rm`` deliberately use different kind enums: only ``add``
knows about optional dependencies and target platforms.
"""

from __future__ import annotations

from crate_edit.core.models import AddDepKind, RemoveDepKind, SectionPath
from crate_edit.exceptions import EmptyTargetSpecifierError

DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "dev-dependencies"
BUILD_DEPENDENCIES = "build-dependencies"


def add_section(kind: AddDepKind, target: str | None = None) -> SectionPath:
    """Return the table path ``add`` should insert into.

    Dev and build dependencies ignore *target*.  Normal and optional
    dependencies go to ``target.<target>.dependencies`` when a target is
    given.

    Raises
    ------
    EmptyTargetSpecifierError
        If *target* is an empty string for a normal/optional dependency.
    """
    if kind is AddDepKind.DEV:
        return SectionPath((DEV_DEPENDENCIES,))
    if kind is AddDepKind.BUILD:
        return SectionPath((BUILD_DEPENDENCIES,))

    if target is None:
        return SectionPath((DEPENDENCIES,))
    if not target:
        raise EmptyTargetSpecifierError(
            "Target specification may not be empty.",
            hint="Pass a platform, e.g. --target x86_64-unknown-linux-gnu.",
        )
    return SectionPath(("target", target, DEPENDENCIES))


def remove_section(kind: RemoveDepKind) -> SectionPath:
    """Return the table path ``rm`` should remove from."""
    if kind is RemoveDepKind.DEV:
        return SectionPath((DEV_DEPENDENCIES,))
    if kind is RemoveDepKind.BUILD:
        return SectionPath((BUILD_DEPENDENCIES,))
    return SectionPath((DEPENDENCIES,))
