"""Runtime settings for crate-edit.

Settings are read once per invocation from environment variables and
handed to the infrastructure adapters at construction time.  Command
line flags (e.g. ``--log-level``) take precedence over the values
loaded here.

Environment variables
---------------------
``CRATE_EDIT_REGISTRY_URL``
    Base URL of the crates.io compatible registry API.
``CRATE_EDIT_HTTP_TIMEOUT``
    Timeout in seconds for every HTTP request.
``CRATE_EDIT_LOG_LEVEL``
    Name of the stdlib logging level (``DEBUG``, ``INFO``, ...).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from crate_edit.exceptions import InvalidArgumentError

DEFAULT_REGISTRY_URL: str = "https://crates.io"
DEFAULT_HTTP_TIMEOUT: float = 10.0
DEFAULT_LOG_LEVEL: str = "WARNING"

MANIFEST_FILE_NAME: str = "Cargo.toml"
"""File name looked up when locating or reading a crate manifest."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime configuration."""

    registry_url: str = DEFAULT_REGISTRY_URL
    """Registry base URL, without trailing slash."""

    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    """Timeout in seconds for registry and git-host requests."""

    log_level: str = DEFAULT_LOG_LEVEL
    """Upper-case logging level name."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Raises
        ------
        InvalidArgumentError
            If ``CRATE_EDIT_HTTP_TIMEOUT`` is not a positive number.
        """
        env = os.environ if environ is None else environ

        registry_url = env.get("CRATE_EDIT_REGISTRY_URL", DEFAULT_REGISTRY_URL)
        raw_timeout = env.get("CRATE_EDIT_HTTP_TIMEOUT")
        log_level = env.get("CRATE_EDIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)

        timeout = DEFAULT_HTTP_TIMEOUT
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise InvalidArgumentError(
                    f"Invalid CRATE_EDIT_HTTP_TIMEOUT: {raw_timeout!r}",
                    hint="Use a number of seconds, e.g. 10.",
                ) from exc
            if timeout <= 0:
                raise InvalidArgumentError(
                    f"Invalid CRATE_EDIT_HTTP_TIMEOUT: {raw_timeout!r}",
                    hint="The timeout must be greater than zero.",
                )

        return cls(
            registry_url=registry_url.rstrip("/"),
            http_timeout=timeout,
            log_level=log_level.strip().upper() or DEFAULT_LOG_LEVEL,
        )
