"""Classification of raw crate references.

A crate reference given on the command line is exactly one of:

1. a pinned version: ``name@version``;
2. a source locator: a URL or something that looks like a path;
3. a plain crate name.

Classification looks only at the literal string; explicit command flags
are never consulted here.
"""

from __future__ import annotations

import re

from crate_edit.core.models import CrateSpecifier, PinnedVersion, PlainName, SourceLocator
from crate_edit.core.versions import is_valid_requirement
from crate_edit.exceptions import InvalidCrateNameError, InvalidVersionLiteralError

_PINNED = re.compile(r"^(?P<name>[^@/\\:]+)@(?P<version>.*)$")

# Crate names are ASCII alphanumerics, ``-`` and ``_``; any of these
# characters means the user meant a path.
_PATH_MARKERS: tuple[str, ...] = (".", "/", "\\")


def is_url(raw: str) -> bool:
    return "://" in raw


def is_path_like(raw: str) -> bool:
    """Return ``True`` when *raw* can only sensibly be a filesystem path."""
    return any(marker in raw for marker in _PATH_MARKERS)


def parse_crate_specifier(raw: str) -> CrateSpecifier:
    """Classify *raw* into a :data:`CrateSpecifier`.

    Raises
    ------
    InvalidCrateNameError
        If *raw* is empty or only whitespace.
    InvalidVersionLiteralError
        If *raw* has the ``name@version`` shape but the version part is
        not valid version syntax.
    """
    text = raw.strip()
    if not text:
        raise InvalidCrateNameError("Crate name must not be empty.")

    match = _PINNED.match(text)
    if match is not None:
        name = match.group("name")
        version = match.group("version")
        if not is_valid_requirement(version):
            raise InvalidVersionLiteralError(
                f"Invalid crate version requirement: {version!r} in {text!r}",
                hint="Use name@version, e.g. serde@1.0.100.",
            )
        return PinnedVersion(name=name, version=version.strip())

    if is_url(text) or is_path_like(text):
        return SourceLocator(raw=text)

    return PlainName(name=text)
