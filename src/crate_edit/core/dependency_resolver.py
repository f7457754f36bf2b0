"""Dependency resolution: crate references and flags to descriptors.

The resolver combines the specifier classification, the explicit
``--vers``/``--git``/``--path`` flags and the upgrade policy with
registry and source-locator lookups injected at construction time.

Precedence for a single crate
-----------------------------
1. ``name@version`` wins over every flag.
2. A URL or path wins over the explicit source flags.
3. A plain name takes ``--vers`` → ``--git`` → ``--path`` → latest
   registry version prefixed by the upgrade policy.

Several crates at once accept no source flags; every token is resolved
independently and the first failure aborts the whole batch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from crate_edit.core.models import (
    Dependency,
    GitSource,
    LocatedSource,
    LocatorKind,
    PathSource,
    PinnedVersion,
    RegistrySource,
    SourceFlag,
    SourceFlagKind,
    SourceLocator,
    UpgradeMode,
)
from crate_edit.core.protocols import RegistryClient, SourceLocatorResolver
from crate_edit.core.specifier import parse_crate_specifier
from crate_edit.core.upgrade_policy import upgrade_prefix
from crate_edit.core.versions import is_valid_requirement
from crate_edit.exceptions import (
    CrateEditError,
    InvalidArgumentError,
    InvalidLocatorError,
    InvalidVersionRequirementError,
    RegistryLookupError,
)

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Stateless service that turns crate references into dependencies.

    Parameters
    ----------
    registry:
        Any object satisfying the :class:`RegistryClient` protocol.
    locator:
        Any object satisfying the :class:`SourceLocatorResolver` protocol.
    """

    def __init__(
        self,
        registry: RegistryClient,
        locator: SourceLocatorResolver,
    ) -> None:
        self._registry: RegistryClient = registry
        self._locator: SourceLocatorResolver = locator

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        crates: Sequence[str],
        *,
        version: str | None = None,
        git: str | None = None,
        path: str | None = None,
        upgrade: UpgradeMode = UpgradeMode.MINOR,
        allow_prerelease: bool = False,
        optional: bool = False,
    ) -> list[Dependency]:
        """Resolve one or more crate references.

        A single reference honours the source flags; several references
        dispatch to :meth:`resolve_batch`.

        Raises
        ------
        InvalidArgumentError
            If *crates* is empty, or source flags accompany several crates.
        """
        if not crates:
            raise InvalidArgumentError("At least one crate must be given.")

        if len(crates) > 1:
            if any(flag is not None for flag in (version, git, path)):
                raise InvalidArgumentError(
                    "--vers, --git and --path can only be used with a single crate.",
                    hint="Add the crates one at a time to give each its own source.",
                )
            return self.resolve_batch(
                crates,
                upgrade=upgrade,
                allow_prerelease=allow_prerelease,
                optional=optional,
            )

        dependency = self.resolve_one(
            crates[0],
            source_flag=SourceFlag.from_flags(version=version, git=git, path=path),
            upgrade=upgrade,
            allow_prerelease=allow_prerelease,
        )
        return [dependency.with_optional(optional)]

    def resolve_batch(
        self,
        crates: Sequence[str],
        *,
        upgrade: UpgradeMode = UpgradeMode.MINOR,
        allow_prerelease: bool = False,
        optional: bool = False,
    ) -> list[Dependency]:
        """Resolve every reference in *crates*, in order, failing fast.

        Nothing is returned unless every reference resolved.
        """
        resolved: list[Dependency] = []
        for raw in crates:
            dependency = self.resolve_one(
                raw,
                source_flag=None,
                upgrade=upgrade,
                allow_prerelease=allow_prerelease,
            )
            resolved.append(dependency.with_optional(optional))
        return resolved

    def resolve_one(
        self,
        raw: str,
        *,
        source_flag: SourceFlag | None = None,
        upgrade: UpgradeMode = UpgradeMode.MINOR,
        allow_prerelease: bool = False,
    ) -> Dependency:
        """Resolve a single reference; ``optional`` is left unset."""
        specifier = parse_crate_specifier(raw)

        if isinstance(specifier, PinnedVersion):
            if source_flag is not None:
                logger.debug(
                    "Inline version of %s overrides --%s",
                    specifier.name,
                    source_flag.kind.value,
                )
            return Dependency(
                name=specifier.name,
                source=RegistrySource(version_requirement=specifier.version),
            )

        if isinstance(specifier, SourceLocator):
            return self._from_locator(specifier.raw)

        return self._from_plain_name(
            specifier.name,
            source_flag,
            upgrade=upgrade,
            allow_prerelease=allow_prerelease,
        )

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _from_locator(self, raw: str) -> Dependency:
        located = self._locate(raw)
        if located.kind is LocatorKind.GIT:
            return Dependency(name=located.name, source=GitSource(url=located.locator))
        return Dependency(name=located.name, source=PathSource(path=located.locator))

    def _from_plain_name(
        self,
        name: str,
        source_flag: SourceFlag | None,
        *,
        upgrade: UpgradeMode,
        allow_prerelease: bool,
    ) -> Dependency:
        if source_flag is None:
            return self._from_registry(
                name,
                upgrade=upgrade,
                allow_prerelease=allow_prerelease,
            )

        if source_flag.kind is SourceFlagKind.VERSION:
            if not is_valid_requirement(source_flag.value):
                raise InvalidVersionRequirementError(
                    f"Invalid dependency version requirement: {source_flag.value!r}",
                    hint="Examples of valid requirements: 1.2.3, ^1.2, ~1.2.3, >=1, <2.",
                )
            return Dependency(
                name=name,
                source=RegistrySource(version_requirement=source_flag.value),
            )
        if source_flag.kind is SourceFlagKind.GIT:
            return Dependency(name=name, source=GitSource(url=source_flag.value))
        return Dependency(name=name, source=PathSource(path=source_flag.value))

    def _from_registry(
        self,
        name: str,
        *,
        upgrade: UpgradeMode,
        allow_prerelease: bool,
    ) -> Dependency:
        latest = self._lookup_latest(name, allow_prerelease)
        requirement = f"{upgrade_prefix(upgrade)}{latest}"
        logger.debug("Resolved %s to %s", name, requirement)
        return Dependency(
            name=name,
            source=RegistrySource(version_requirement=requirement),
        )

    # ------------------------------------------------------------------
    # Collaborator delegation (safe boundary)
    # ------------------------------------------------------------------

    def _lookup_latest(self, name: str, allow_prerelease: bool) -> str:
        """Call the registry and ensure only our exceptions escape."""
        try:
            latest = self._registry.lookup_latest(name, allow_prerelease)
        except CrateEditError:
            raise
        except Exception as exc:
            raise RegistryLookupError(
                f"Unexpected registry error while looking up {name!r}: {exc}",
            ) from exc

        if not latest:
            raise RegistryLookupError(
                f"No available versions exist for crate {name!r}.",
                hint=None if allow_prerelease else "Try --allow-prerelease.",
            )
        return latest

    def _locate(self, raw: str) -> LocatedSource:
        """Call the locator and ensure only our exceptions escape."""
        try:
            return self._locator.resolve(raw)
        except CrateEditError:
            raise
        except Exception as exc:
            raise InvalidLocatorError(
                f"Unable to derive a crate name from {raw!r}: {exc}",
            ) from exc
