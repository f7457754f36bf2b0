"""Custom exception hierarchy for crate-edit.

All exceptions that cross layer boundaries must inherit from
:class:`CrateEditError`.  Raw third-party exceptions (``requests``,
``tomllib``, ``tomlkit``, ``OSError``) must NEVER propagate beyond the
infrastructure layer. They are caught there and re-raised as a typed
subclass defined here, with the original kept as ``__cause__``.

Hierarchy
---------
CrateEditError
├── InvalidArgumentError
│   └── InvalidCrateNameError
├── InvalidVersionError
│   ├── InvalidVersionLiteralError
│   └── InvalidVersionRequirementError
├── InvalidUpgradeModeError
├── RegistryLookupError
├── InvalidLocatorError
├── EmptyTargetSpecifierError
├── MissingDependencyError
└── ManifestError
    ├── ManifestNotFoundError
    ├── ManifestParseError
    ├── TableInsertConflictError
    └── EntryNotFoundError
"""

from __future__ import annotations


class CrateEditError(Exception):
    """Base exception for all crate-edit errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render the message and
    its cause chain without a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Arguments -------------------------------------------------------------

class InvalidArgumentError(CrateEditError):
    """Raised when command arguments are combined in an unsupported way."""


class InvalidCrateNameError(InvalidArgumentError):
    """Raised when a crate reference is empty."""


# --- Versions --------------------------------------------------------------

class InvalidVersionError(CrateEditError):
    """Base class for malformed version syntax."""


class InvalidVersionLiteralError(InvalidVersionError):
    """Raised when the version embedded in ``name@version`` is malformed."""


class InvalidVersionRequirementError(InvalidVersionError):
    """Raised when the ``--vers`` requirement is malformed."""


class InvalidUpgradeModeError(CrateEditError):
    """Raised for an upgrade mode outside ``none|patch|minor|all``."""


# --- Sources ---------------------------------------------------------------

class RegistryLookupError(CrateEditError):
    """Raised when the registry cannot provide a usable latest version."""


class InvalidLocatorError(CrateEditError):
    """Raised when a URL or path cannot be turned into a crate source."""


# --- Sections --------------------------------------------------------------

class EmptyTargetSpecifierError(CrateEditError):
    """Raised when ``--target`` is given an empty platform."""


# --- Environment -----------------------------------------------------------

class MissingDependencyError(CrateEditError):
    """Raised when an optional runtime package is not installed."""


# --- Manifest --------------------------------------------------------------

class ManifestError(CrateEditError):
    """Base class for manifest access and editing failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when no ``Cargo.toml`` can be located."""


class ManifestParseError(ManifestError):
    """Raised when a ``Cargo.toml`` is not valid TOML."""


class TableInsertConflictError(ManifestError):
    """Raised when an entry already exists or a table has the wrong shape."""


class EntryNotFoundError(ManifestError):
    """Raised when the dependency (or its table) to remove is absent."""
