"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so resolution and orchestration are testable without
network access, a real manifest or a command line.
"""

from __future__ import annotations

from typing import Protocol

from crate_edit.core.models import Dependency, LocatedSource, SectionPath


class RegistryClient(Protocol):
    """Contract for crate registry backends."""

    def lookup_latest(self, name: str, allow_prerelease: bool) -> str:
        """Return the latest published version of crate *name*.

        Prereleases are only eligible when *allow_prerelease* is set.

        Raises
        ------
        RegistryLookupError
            When the crate does not exist, the registry cannot be
            reached, or no eligible version is published.
        """
        ...  # pragma: no cover


class SourceLocatorResolver(Protocol):
    """Contract for turning a URL or path into a named crate source."""

    def resolve(self, raw: str) -> LocatedSource:
        """Derive the crate name and source kind for *raw*.

        Raises
        ------
        InvalidLocatorError
            When *raw* is not a supported URL or does not point at a
            readable crate manifest.
        """
        ...  # pragma: no cover


class ManifestDocument(Protocol):
    """Contract for an opened, in-memory package manifest.

    Mutations only touch memory; :meth:`write` is the single point at
    which the backing file is modified.
    """

    def insert(self, section: SectionPath, dependency: Dependency) -> None:
        """Insert *dependency* into the table at *section*.

        Raises
        ------
        TableInsertConflictError
            When the entry already exists or a table on the path is not
            a table.
        """
        ...  # pragma: no cover

    def remove(self, section: SectionPath, name: str) -> None:
        """Remove entry *name* from the table at *section*.

        Raises
        ------
        EntryNotFoundError
            When the table or the entry does not exist.
        """
        ...  # pragma: no cover

    def write(self) -> None:
        """Serialise the document back to its manifest file."""
        ...  # pragma: no cover
