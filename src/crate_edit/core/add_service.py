"""Core add service: orchestrates ``add`` from request to written manifest.

Pipeline
--------
1. Resolve the target section from the dependency kind and platform.
2. Resolve every crate reference into a :class:`Dependency`.
3. For each dependency: report progress, then insert it in memory.
4. Write the manifest once, only after every insertion succeeded.

Guarantees
----------
* No ``print()``; progress is reported through an optional callback.
* Resolution completes before the first mutation, so a failing crate
  leaves the manifest untouched.
* Only :class:`~crate_edit.exceptions.CrateEditError` subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from crate_edit.core.dependency_resolver import DependencyResolver
from crate_edit.core.models import AddProgress, AddRequest, Dependency, SectionPath
from crate_edit.core.protocols import ManifestDocument
from crate_edit.core.sections import add_section
from crate_edit.exceptions import CrateEditError, InvalidArgumentError, ManifestError

logger = logging.getLogger(__name__)

AddProgressCallback = Callable[[AddProgress], None]


class AddService:
    """Service that adds resolved dependencies to an opened manifest.

    Parameters
    ----------
    manifest:
        Any object satisfying the :class:`ManifestDocument` protocol.
    resolver:
        The :class:`DependencyResolver` used for crate references.
    """

    def __init__(self, manifest: ManifestDocument, resolver: DependencyResolver) -> None:
        self._manifest: ManifestDocument = manifest
        self._resolver: DependencyResolver = resolver

    def add(
        self,
        request: AddRequest,
        *,
        progress_callback: AddProgressCallback | None = None,
    ) -> list[Dependency]:
        """Add every crate of *request* and write the manifest.

        Returns
        -------
        list[Dependency]
            The dependencies that were inserted, in request order.

        Raises
        ------
        InvalidArgumentError
            If ``--target`` (or a source flag) is combined with several crates.
        EmptyTargetSpecifierError
            If the target platform is empty.
        TableInsertConflictError
            If a dependency is already present in the section.
        """
        if len(request.crates) > 1 and request.target is not None:
            raise InvalidArgumentError(
                "--target can only be used with a single crate.",
            )

        section = add_section(request.kind, request.target)
        dependencies = self._resolver.resolve(
            request.crates,
            version=request.version,
            git=request.git,
            path=request.path,
            upgrade=request.upgrade,
            allow_prerelease=request.allow_prerelease,
            optional=request.optional,
        )

        for dependency in dependencies:
            if progress_callback is not None:
                progress_callback(
                    AddProgress(
                        dependency=dependency,
                        section=section,
                        optional=request.optional,
                    )
                )
            self._insert(section, dependency)

        self._write()
        logger.info(
            "Added %d dependenc%s to %s",
            len(dependencies),
            "y" if len(dependencies) == 1 else "ies",
            section.describe(),
        )
        return dependencies

    # ------------------------------------------------------------------
    # Manifest delegation (safe boundary)
    # ------------------------------------------------------------------

    def _insert(self, section: SectionPath, dependency: Dependency) -> None:
        try:
            self._manifest.insert(section, dependency)
        except CrateEditError:
            raise
        except Exception as exc:
            raise ManifestError(
                f"Could not edit `Cargo.toml` while adding {dependency.name!r}: {exc}",
            ) from exc

    def _write(self) -> None:
        try:
            self._manifest.write()
        except CrateEditError:
            raise
        except Exception as exc:
            raise ManifestError(f"Could not write `Cargo.toml`: {exc}") from exc
