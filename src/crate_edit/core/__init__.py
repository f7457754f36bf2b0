"""Core / service layer: pure resolution logic and orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; collaborators arrive through protocols.
* No imports from ``cli`` or ``infra``.
"""

from crate_edit.core.add_service import AddService
from crate_edit.core.dependency_resolver import DependencyResolver
from crate_edit.core.models import (
    AddDepKind,
    AddRequest,
    Dependency,
    GitSource,
    PathSource,
    RegistrySource,
    RemoveDepKind,
    SectionPath,
    UpgradeMode,
)
from crate_edit.core.protocols import ManifestDocument, RegistryClient, SourceLocatorResolver
from crate_edit.core.remove_service import RemoveService

__all__: list[str] = [
    "AddDepKind",
    "AddRequest",
    "AddService",
    "Dependency",
    "DependencyResolver",
    "GitSource",
    "ManifestDocument",
    "PathSource",
    "RegistryClient",
    "RegistrySource",
    "RemoveDepKind",
    "RemoveService",
    "SectionPath",
    "SourceLocatorResolver",
    "UpgradeMode",
]
