"""Source locator: derive a crate's name from a git URL or local path.

Supported locators
------------------
* ``https://github.com/<owner>/<repo>`` (optionally ending in ``/`` or
  ``.git``): the raw ``Cargo.toml`` of the default branch is fetched.
* ``https://gitlab.com/<owner>/<repo>`` (same suffixes).
* Any filesystem path: ``<path>/Cargo.toml`` is read.

In every case the crate name is ``[package].name`` of that manifest.
``requests``, ``tomllib`` and ``OSError`` failures are mapped to
:class:`~crate_edit.exceptions.InvalidLocatorError`.
"""

from __future__ import annotations

import logging
import re
import tomllib
from pathlib import Path
from typing import Any

import requests

from crate_edit.config import MANIFEST_FILE_NAME, Settings
from crate_edit.core.models import LocatedSource, LocatorKind
from crate_edit.core.specifier import is_url
from crate_edit.exceptions import InvalidLocatorError
from crate_edit.infra.crates_io import USER_AGENT

logger = logging.getLogger(__name__)

_GITHUB = re.compile(r"^https://github\.com/([-_0-9a-zA-Z]+)/([-_.0-9a-zA-Z]+?)(?:/|\.git)?$")
_GITLAB = re.compile(r"^https://gitlab\.com/([-_0-9a-zA-Z]+)/([-_.0-9a-zA-Z]+?)(?:/|\.git)?$")


def github_raw_manifest_url(owner: str, repo: str) -> str:
    return f"https://raw.githubusercontent.com/{owner}/{repo}/HEAD/{MANIFEST_FILE_NAME}"


def gitlab_raw_manifest_url(owner: str, repo: str) -> str:
    return f"https://gitlab.com/{owner}/{repo}/-/raw/HEAD/{MANIFEST_FILE_NAME}"


def package_name(manifest: dict[str, Any], origin: str) -> str:
    """Return ``[package].name`` of a parsed manifest.

    Raises
    ------
    InvalidLocatorError
        If the ``[package]`` table or its ``name`` is missing.
    """
    package = manifest.get("package")
    if not isinstance(package, dict):
        raise InvalidLocatorError(f"Manifest at {origin} has no [package] table.")
    name = package.get("name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidLocatorError(f"Manifest at {origin} has no package name.")
    return name.strip()


class CargoSourceLocator:
    """Concrete :class:`SourceLocatorResolver` for git hosts and paths."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings: Settings = settings or Settings()

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def resolve(self, raw: str) -> LocatedSource:
        """Derive the crate name behind *raw*.

        Raises
        ------
        InvalidLocatorError
            For unsupported URLs, unreachable hosts and missing or
            malformed manifests.
        """
        if is_url(raw):
            return LocatedSource(
                name=self._name_from_url(raw),
                kind=LocatorKind.GIT,
                locator=raw,
            )
        return LocatedSource(
            name=self._name_from_path(raw),
            kind=LocatorKind.PATH,
            locator=raw,
        )

    # ------------------------------------------------------------------
    # Git hosts
    # ------------------------------------------------------------------

    def _name_from_url(self, url: str) -> str:
        github = _GITHUB.match(url)
        if github is not None:
            manifest_url = github_raw_manifest_url(*github.groups())
        else:
            gitlab = _GITLAB.match(url)
            if gitlab is None:
                raise InvalidLocatorError(
                    f"Unable to parse crate name from {url!r}.",
                    hint="Only https://github.com/<owner>/<repo> and "
                    "https://gitlab.com/<owner>/<repo> URLs are supported; "
                    "use --git with an explicit crate name otherwise.",
                )
            manifest_url = gitlab_raw_manifest_url(*gitlab.groups())

        text = self._download(manifest_url, url)
        try:
            manifest = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidLocatorError(
                f"Invalid {MANIFEST_FILE_NAME} fetched from {url!r}.",
            ) from exc
        return package_name(manifest, manifest_url)

    def _download(self, manifest_url: str, url: str) -> str:
        logger.debug("GET %s", manifest_url)
        try:
            response = requests.get(
                manifest_url,
                headers={"User-Agent": USER_AGENT},
                timeout=self._settings.http_timeout,
            )
        except requests.RequestException as exc:
            raise InvalidLocatorError(
                f"Failed to fetch {MANIFEST_FILE_NAME} for {url!r}.",
                hint="Check your network connection.",
            ) from exc

        if response.status_code != 200:
            raise InvalidLocatorError(
                f"Failed to fetch {MANIFEST_FILE_NAME} for {url!r} "
                f"(HTTP {response.status_code}).",
                hint="The repository must have a Cargo.toml at its root.",
            )
        return response.text

    # ------------------------------------------------------------------
    # Local paths
    # ------------------------------------------------------------------

    @staticmethod
    def _name_from_path(raw: str) -> str:
        manifest_path = Path(raw) / MANIFEST_FILE_NAME
        if not manifest_path.is_file():
            raise InvalidLocatorError(
                f"Unable to parse crate name from {raw!r}.",
                hint=f"No {MANIFEST_FILE_NAME} found at {manifest_path}.",
            )
        try:
            with manifest_path.open("rb") as handle:
                manifest = tomllib.load(handle)
        except OSError as exc:
            raise InvalidLocatorError(f"Could not read {manifest_path}.") from exc
        except tomllib.TOMLDecodeError as exc:
            raise InvalidLocatorError(f"Invalid TOML in {manifest_path}.") from exc
        return package_name(manifest, str(manifest_path))
