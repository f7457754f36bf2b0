"""Shared pytest fixtures and configuration for the crate-edit test suite.

Guidelines
----------
* No internet access in any test.
* ``requests`` must be mocked at the infra boundary.
* Core tests must be pure: collaborators are ``MagicMock`` objects.
* Manifests live under ``tmp_path``; tests must not depend on OS state.
"""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_MANIFEST = """\
[package]
name = "demo"
version = "0.1.0"
edition = "2021"

# keep me
[dependencies]
log = "0.4"
"""


@pytest.fixture()
def manifest_path(tmp_path: Path) -> Path:
    """A small ``Cargo.toml`` with one normal dependency."""
    path = tmp_path / "Cargo.toml"
    path.write_text(SAMPLE_MANIFEST, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CRATE_EDIT_REGISTRY_URL", "CRATE_EDIT_HTTP_TIMEOUT", "CRATE_EDIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
