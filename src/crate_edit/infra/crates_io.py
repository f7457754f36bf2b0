"""crates.io backed implementation of :class:`~crate_edit.core.protocols.RegistryClient`.

This module is the **only** place that talks to the crate registry.  All
``requests`` exceptions and malformed payloads are mapped to
:class:`~crate_edit.exceptions.RegistryLookupError` here.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from crate_edit.config import Settings
from crate_edit.core.versions import select_latest
from crate_edit.exceptions import RegistryLookupError
from crate_edit.version import __version__

logger = logging.getLogger(__name__)

USER_AGENT: str = f"crate-edit/{__version__}"
"""crates.io rejects API requests without a descriptive User-Agent."""


class CratesIoClient:
    """Concrete :class:`RegistryClient` backed by the crates.io HTTP API.

    Usage::

        client = CratesIoClient(Settings.from_env())
        client.lookup_latest("serde", allow_prerelease=False)  # "1.0.210"
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings: Settings = settings or Settings()

    def versions_url(self, name: str) -> str:
        return f"{self._settings.registry_url}/api/v1/crates/{name}/versions"

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def lookup_latest(self, name: str, allow_prerelease: bool) -> str:
        """Return the newest non-yanked version of crate *name*.

        Raises
        ------
        RegistryLookupError
            When the crate is unknown, the registry is unreachable or
            answers with an unexpected payload, or when no version is
            eligible.
        """
        payload = self._fetch_versions(name)
        candidates = [
            str(entry["num"])
            for entry in self._extract_versions(name, payload)
            if not entry.get("yanked", False)
        ]
        latest = select_latest(candidates, allow_prerelease=allow_prerelease)
        if latest is None:
            raise RegistryLookupError(
                f"No available versions exist for crate {name!r}.",
                hint=None if allow_prerelease else "Try --allow-prerelease.",
            )
        logger.debug("Latest version of %s is %s", name, latest)
        return latest

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _fetch_versions(self, name: str) -> Any:
        url = self.versions_url(name)
        logger.debug("GET %s", url)
        try:
            response = requests.get(
                url,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                timeout=self._settings.http_timeout,
            )
        except requests.Timeout as exc:
            raise RegistryLookupError(
                f"Timed out fetching versions of {name!r} from the registry.",
                hint=f"The request to {url} took longer than "
                f"{self._settings.http_timeout:g} seconds.",
            ) from exc
        except requests.RequestException as exc:
            raise RegistryLookupError(
                f"Failed to fetch versions of {name!r} from the registry.",
                hint="Check your network connection.",
            ) from exc

        if response.status_code == 404:
            raise RegistryLookupError(
                f"The crate {name!r} could not be found on the registry.",
            )
        if response.status_code != 200:
            raise RegistryLookupError(
                f"Registry answered HTTP {response.status_code} for {name!r}.",
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RegistryLookupError(
                f"Invalid JSON received from the registry for {name!r}.",
            ) from exc

    @staticmethod
    def _extract_versions(name: str, payload: Any) -> list[dict[str, Any]]:
        versions = payload.get("versions") if isinstance(payload, dict) else None
        if not isinstance(versions, list):
            raise RegistryLookupError(
                f"Invalid JSON received from the registry for {name!r}.",
            )
        return [
            entry
            for entry in versions
            if isinstance(entry, dict) and "num" in entry
        ]
