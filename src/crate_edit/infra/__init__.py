"""Infrastructure layer: external system integration.

This layer wraps all interaction with crates.io, git hosts and the
filesystem.  Every raw third-party exception is caught here and
re-raised as a :class:`~crate_edit.exceptions.CrateEditError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from crate_edit.infra.crates_io import CratesIoClient
from crate_edit.infra.manifest import CargoManifest, find_manifest
from crate_edit.infra.source_locator import CargoSourceLocator

__all__: list[str] = [
    "CargoManifest",
    "CargoSourceLocator",
    "CratesIoClient",
    "find_manifest",
]
