"""``Cargo.toml`` document backed by :mod:`tomlkit`.

:class:`CargoManifest` satisfies
:class:`~crate_edit.core.protocols.ManifestDocument`.  Edits happen on an
in-memory, format-preserving document; the file on disk is rewritten
only by :meth:`CargoManifest.write`, in a single ``with`` block.

Entry shapes
------------
* Registry dependency, not optional → ``serde = "^1.0"``
* Anything else → inline table, e.g.
  ``foo = { git = "https://github.com/o/foo", optional = true }``
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from crate_edit.config import MANIFEST_FILE_NAME
from crate_edit.core.models import Dependency, GitSource, RegistrySource, SectionPath
from crate_edit.exceptions import (
    EntryNotFoundError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    TableInsertConflictError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Locating the manifest
# ---------------------------------------------------------------------------

def find_manifest(path: str | Path | None = None, *, start: Path | None = None) -> Path:
    """Return the manifest file to edit.

    An explicit *path* may name the file itself or the directory holding
    it.  Without *path*, directories are searched upward from *start*
    (default: the working directory) for a ``Cargo.toml``.

    Raises
    ------
    ManifestNotFoundError
        If no manifest exists at *path* or in any parent directory.
    """
    if path is not None:
        candidate = Path(path)
        if candidate.is_dir():
            candidate = candidate / MANIFEST_FILE_NAME
        if not candidate.is_file():
            raise ManifestNotFoundError(
                f"Unable to find {MANIFEST_FILE_NAME} at {path}.",
            )
        return candidate

    directory = (start or Path.cwd()).resolve()
    while True:
        candidate = directory / MANIFEST_FILE_NAME
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            raise ManifestNotFoundError(
                f"Unable to find {MANIFEST_FILE_NAME} in "
                f"{(start or Path.cwd()).resolve()} or any parent directory.",
                hint="Pass --manifest-path to point at the manifest.",
            )
        directory = directory.parent


# ---------------------------------------------------------------------------
# Entry rendering
# ---------------------------------------------------------------------------

def dependency_item(dependency: Dependency) -> Any:
    """Render *dependency* as the TOML value stored under its name."""
    source = dependency.source
    if isinstance(source, RegistrySource) and not dependency.optional:
        return source.version_requirement or "*"

    item = tomlkit.inline_table()
    if isinstance(source, RegistrySource):
        item["version"] = source.version_requirement or "*"
    elif isinstance(source, GitSource):
        item["git"] = source.url
    else:
        item["path"] = source.path
    if dependency.optional:
        item["optional"] = True
    return item


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class CargoManifest:
    """An opened ``Cargo.toml``.

    Usage::

        manifest = CargoManifest.open(None)        # search from cwd
        manifest.insert(SectionPath(("dependencies",)), dependency)
        manifest.write()
    """

    def __init__(self, path: Path, document: tomlkit.TOMLDocument) -> None:
        self._path: Path = path
        self._document: tomlkit.TOMLDocument = document

    @classmethod
    def open(cls, path: str | Path | None = None) -> CargoManifest:
        """Locate and parse the manifest.

        Raises
        ------
        ManifestNotFoundError
            If no manifest can be located.
        ManifestParseError
            If the manifest is not valid TOML.
        """
        manifest_path = find_manifest(path)
        logger.debug("Opening %s", manifest_path)
        try:
            text = manifest_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ManifestError(f"Could not read {manifest_path}.") from exc
        try:
            document = tomlkit.parse(text)
        except TOMLKitError as exc:
            raise ManifestParseError(
                f"Unable to parse {manifest_path}.",
            ) from exc
        return cls(manifest_path, document)

    @property
    def path(self) -> Path:
        return self._path

    def dumps(self) -> str:
        """Serialise the in-memory document."""
        return tomlkit.dumps(self._document)

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def insert(self, section: SectionPath, dependency: Dependency) -> None:
        """Insert *dependency* into *section*, creating missing tables.

        Raises
        ------
        TableInsertConflictError
            If the entry exists or a key on the path is not a table.
        """
        table = self._table_for_insert(section)
        if dependency.name in table:
            raise TableInsertConflictError(
                f"The dependency `{dependency.name}` already exists in "
                f"`{section.describe()}`.",
                hint=f"Remove it first with `cargo rm {dependency.name}`.",
            )
        table[dependency.name] = dependency_item(dependency)
        logger.debug("Inserted %s into %s", dependency.name, section.describe())

    def remove(self, section: SectionPath, name: str) -> None:
        """Remove *name* from *section*, dropping tables left empty.

        Raises
        ------
        EntryNotFoundError
            If the table or the entry does not exist.
        """
        parents: list[tuple[MutableMapping[str, Any], str]] = []
        container: Any = self._document
        for key in section:
            if not isinstance(container, MutableMapping) or key not in container:
                raise EntryNotFoundError(
                    f"The table `{section.describe()}` could not be found.",
                )
            parents.append((container, key))
            container = container[key]

        if not isinstance(container, MutableMapping) or name not in container:
            raise EntryNotFoundError(
                f"The dependency `{name}` could not be found in "
                f"`{section.describe()}`.",
            )
        del container[name]

        for parent, key in reversed(parents):
            if len(parent[key]) > 0:
                break
            del parent[key]
        logger.debug("Removed %s from %s", name, section.describe())

    def write(self) -> None:
        """Rewrite the manifest file with the in-memory document."""
        text = self.dumps()
        try:
            with self._path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise ManifestError(f"Could not write {self._path}.") from exc
        logger.debug("Wrote %s", self._path)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _table_for_insert(self, section: SectionPath) -> MutableMapping[str, Any]:
        container: Any = self._document
        last = len(section) - 1
        for depth, key in enumerate(section):
            if key not in container:
                # Intermediate ``target`` tables are super tables so the
                # output reads ``[target.<platform>.dependencies]``.
                container[key] = tomlkit.table(is_super_table=depth < last)
            item = container[key]
            if not isinstance(item, MutableMapping):
                raise TableInsertConflictError(
                    f"The key `{key}` in {MANIFEST_FILE_NAME} is not a table.",
                    hint=f"Expected `{'.'.join(section.segments[: depth + 1])}` "
                    "to be a table.",
                )
            container = item
        return container
