"""Core remove service: deletes one dependency and writes the manifest."""

from __future__ import annotations

import logging
from collections.abc import Callable

from crate_edit.core.models import RemoveDepKind, RemoveProgress
from crate_edit.core.protocols import ManifestDocument
from crate_edit.core.sections import remove_section
from crate_edit.exceptions import CrateEditError, ManifestError

logger = logging.getLogger(__name__)

RemoveProgressCallback = Callable[[RemoveProgress], None]


class RemoveService:
    """Service that removes a dependency from an opened manifest.

    Removal is never optional-aware nor target-aware: the section comes
    from :class:`RemoveDepKind` alone.
    """

    def __init__(self, manifest: ManifestDocument) -> None:
        self._manifest: ManifestDocument = manifest

    def remove(
        self,
        name: str,
        kind: RemoveDepKind = RemoveDepKind.NORMAL,
        *,
        progress_callback: RemoveProgressCallback | None = None,
    ) -> None:
        """Remove *name* from the section for *kind* and write the manifest.

        Raises
        ------
        EntryNotFoundError
            If the section or the entry does not exist; nothing is written.
        """
        section = remove_section(kind)
        if progress_callback is not None:
            progress_callback(RemoveProgress(name=name, section=section))

        try:
            self._manifest.remove(section, name)
            self._manifest.write()
        except CrateEditError:
            raise
        except Exception as exc:
            raise ManifestError(
                f"Could not edit `Cargo.toml` while removing {name!r}: {exc}",
            ) from exc

        logger.info("Removed %s from %s", name, section.describe())
