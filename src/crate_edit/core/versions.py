"""Version syntax helpers built on :mod:`semantic_version`.

Requirements use Cargo's syntax (``1.2``, ``^1.2.3``, ``~1``, ``>=1, <2``,
``*``).  Whitespace inside a requirement is insignificant and stripped
before parsing.  Nothing here compares versions for the core; ordering
is only used by registry clients to pick the latest release.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import semantic_version

_WHITESPACE = re.compile(r"\s+")


def _normalize(requirement: str) -> str:
    return _WHITESPACE.sub("", requirement)


def is_valid_requirement(requirement: str) -> bool:
    """Return ``True`` when *requirement* is a well-formed requirement."""
    normalized = _normalize(requirement)
    if not normalized:
        return False
    try:
        semantic_version.SimpleSpec(normalized)
    except ValueError:
        return False
    return True


def parse_version(text: str) -> semantic_version.Version | None:
    """Parse a full ``major.minor.patch`` version (with tags), else ``None``."""
    try:
        return semantic_version.Version(text.strip())
    except ValueError:
        return None


def select_latest(
    candidates: Iterable[str],
    *,
    allow_prerelease: bool = False,
) -> str | None:
    """Return the highest version in *candidates*.

    Unparseable entries are ignored, as are prereleases unless
    *allow_prerelease* is set.  Returns ``None`` when nothing qualifies.
    """
    best: semantic_version.Version | None = None
    best_text: str | None = None
    for text in candidates:
        parsed = parse_version(text)
        if parsed is None:
            continue
        if parsed.prerelease and not allow_prerelease:
            continue
        if best is None or parsed > best:
            best = parsed
            best_text = text.strip()
    return best_text
