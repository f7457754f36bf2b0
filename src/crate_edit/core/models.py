"""Domain models for crate-edit.

All models are **frozen** dataclasses or enums: immutable value objects
created fresh per invocation and discarded once the manifest edit has
been requested.  They carry zero I/O and no third-party dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Crate specifiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PlainName:
    """A bare crate name, e.g. ``serde``."""

    name: str


@dataclass(frozen=True, slots=True)
class PinnedVersion:
    """A crate name with an inline version, e.g. ``serde@1.0.100``."""

    name: str
    version: str


@dataclass(frozen=True, slots=True)
class SourceLocator:
    """A URL or filesystem path from which the crate name is derived."""

    raw: str


CrateSpecifier = Union[PlainName, PinnedVersion, SourceLocator]
"""Exactly one classification of a raw crate reference."""


# ---------------------------------------------------------------------------
# Upgrade policy
# ---------------------------------------------------------------------------

class UpgradeMode(Enum):
    """How far a freshly looked-up version may float."""

    NONE = "none"
    PATCH = "patch"
    MINOR = "minor"
    ALL = "all"


# ---------------------------------------------------------------------------
# Dependency descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RegistrySource:
    """Dependency fetched from the registry."""

    version_requirement: str | None = None


@dataclass(frozen=True, slots=True)
class GitSource:
    """Dependency fetched from a git repository."""

    url: str


@dataclass(frozen=True, slots=True)
class PathSource:
    """Dependency read from a local directory."""

    path: str


DependencySource = Union[RegistrySource, GitSource, PathSource]


@dataclass(frozen=True, slots=True)
class Dependency:
    """A normalized dependency ready to be written into a manifest."""

    name: str
    source: DependencySource
    optional: bool = False

    @property
    def version(self) -> str | None:
        """Registry version requirement, or ``None`` for git/path sources."""
        if isinstance(self.source, RegistrySource):
            return self.source.version_requirement
        return None

    def with_optional(self, optional: bool) -> Dependency:
        """Return a copy with the ``optional`` flag set to *optional*."""
        return replace(self, optional=optional)


# ---------------------------------------------------------------------------
# Explicit source flags
# ---------------------------------------------------------------------------

class SourceFlagKind(Enum):
    VERSION = "vers"
    GIT = "git"
    PATH = "path"


@dataclass(frozen=True, slots=True)
class SourceFlag:
    """The single source-selecting flag that applies to a plain name."""

    kind: SourceFlagKind
    value: str

    @classmethod
    def from_flags(
        cls,
        *,
        version: str | None = None,
        git: str | None = None,
        path: str | None = None,
    ) -> SourceFlag | None:
        """Pick one flag by the fixed precedence ``vers → git → path``."""
        if version is not None:
            return cls(SourceFlagKind.VERSION, version)
        if git is not None:
            return cls(SourceFlagKind.GIT, git)
        if path is not None:
            return cls(SourceFlagKind.PATH, path)
        return None


# ---------------------------------------------------------------------------
# Source locator results
# ---------------------------------------------------------------------------

class LocatorKind(Enum):
    GIT = "git"
    PATH = "path"


@dataclass(frozen=True, slots=True)
class LocatedSource:
    """What the source-locator collaborator learned about a URL or path."""

    name: str
    """Crate name read from the source's own manifest."""

    kind: LocatorKind

    locator: str
    """The URL or path exactly as the user supplied it."""


# ---------------------------------------------------------------------------
# Dependency kinds and sections
# ---------------------------------------------------------------------------

class AddDepKind(Enum):
    """Where ``add`` should put a dependency.

    ``OPTIONAL`` is a modifier of ``NORMAL`` surfaced as a kind so that
    section lookup and the optional flag come from one choice.
    """

    NORMAL = "normal"
    DEV = "dev"
    BUILD = "build"
    OPTIONAL = "optional"


class RemoveDepKind(Enum):
    """Where ``rm`` should look for a dependency.  Never optional or targeted."""

    NORMAL = "normal"
    DEV = "dev"
    BUILD = "build"


@dataclass(frozen=True, slots=True)
class SectionPath:
    """Ordered table keys locating a dependency table in the manifest."""

    segments: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def table(self) -> str:
        """Name of the innermost table, e.g. ``dev-dependencies``."""
        return self.segments[-1]

    @property
    def target(self) -> str | None:
        """Platform of a ``target.<platform>.<table>`` path, else ``None``."""
        if len(self.segments) == 3 and self.segments[0] == "target":
            return self.segments[1]
        return None

    def describe(self) -> str:
        """Human-readable form used in progress messages."""
        if self.target is not None:
            return f"{self.table} for target `{self.target}`"
        return ".".join(self.segments)


# ---------------------------------------------------------------------------
# Command requests and progress events
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AddRequest:
    """Everything ``add`` needs, already parsed from the command line."""

    crates: tuple[str, ...]
    kind: AddDepKind = AddDepKind.NORMAL
    version: str | None = None
    git: str | None = None
    path: str | None = None
    target: str | None = None
    upgrade: UpgradeMode = UpgradeMode.MINOR
    allow_prerelease: bool = False

    @property
    def optional(self) -> bool:
        return self.kind is AddDepKind.OPTIONAL


@dataclass(frozen=True, slots=True)
class AddProgress:
    """Emitted once per dependency just before it is inserted."""

    dependency: Dependency
    section: SectionPath
    optional: bool


@dataclass(frozen=True, slots=True)
class RemoveProgress:
    """Emitted just before a dependency is removed."""

    name: str
    section: SectionPath
