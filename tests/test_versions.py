"""Tests for version helpers (core/versions.py) and the upgrade policy."""

from __future__ import annotations

import pytest

from crate_edit.core.models import UpgradeMode
from crate_edit.core.upgrade_policy import parse_upgrade_mode, upgrade_prefix
from crate_edit.core.versions import is_valid_requirement, parse_version, select_latest
from crate_edit.exceptions import InvalidUpgradeModeError


# ---------------------------------------------------------------------------
# Requirements
# ---------------------------------------------------------------------------

class TestRequirements:
    @pytest.mark.parametrize(
        "req",
        ["1.0.100", "0.4.2", "1.2", "^1.2.3", "~1.2", ">=1, <2", "=1.0.0", "*"],
    )
    def test_valid(self, req: str) -> None:
        assert is_valid_requirement(req)

    @pytest.mark.parametrize("req", ["", "  ", "abc", "1..2", "latest"])
    def test_invalid(self, req: str) -> None:
        assert not is_valid_requirement(req)


# ---------------------------------------------------------------------------
# Latest selection
# ---------------------------------------------------------------------------

class TestSelectLatest:
    def test_picks_highest_semver(self) -> None:
        assert select_latest(["1.2.0", "1.10.0", "1.9.3"]) == "1.10.0"

    def test_skips_prerelease_by_default(self) -> None:
        assert select_latest(["0.5.1", "0.6.0-alpha"]) == "0.5.1"

    def test_allows_prerelease_when_asked(self) -> None:
        assert select_latest(["0.5.1", "0.6.0-alpha"], allow_prerelease=True) == "0.6.0-alpha"

    def test_ignores_garbage(self) -> None:
        assert select_latest(["nope", "0.1.0"]) == "0.1.0"

    def test_none_when_nothing_qualifies(self) -> None:
        assert select_latest(["1.0.0-rc.1"]) is None
        assert select_latest([]) is None

    def test_parse_version(self) -> None:
        assert parse_version("0.6.0-alpha").prerelease == ("alpha",)
        assert parse_version(" 1.2.3 ") is not None
        assert parse_version("1.2") is None
        assert parse_version("garbage") is None


# ---------------------------------------------------------------------------
# Upgrade policy
# ---------------------------------------------------------------------------

class TestUpgradePolicy:
    @pytest.mark.parametrize(
        ("mode", "prefix"),
        [
            (UpgradeMode.NONE, "="),
            (UpgradeMode.PATCH, "~"),
            (UpgradeMode.MINOR, "^"),
            (UpgradeMode.ALL, ">="),
        ],
    )
    def test_prefix_per_mode(self, mode: UpgradeMode, prefix: str) -> None:
        assert upgrade_prefix(mode) == prefix

    @pytest.mark.parametrize(
        ("text", "prefix"),
        [("none", "="), ("PATCH", "~"), ("Minor", "^"), ("aLL", ">=")],
    )
    def test_text_is_case_insensitive(self, text: str, prefix: str) -> None:
        assert upgrade_prefix(text) == prefix

    def test_parse_upgrade_mode(self) -> None:
        assert parse_upgrade_mode(" minor ") is UpgradeMode.MINOR

    @pytest.mark.parametrize("text", ["major", "", "^"])
    def test_unknown_mode_is_rejected(self, text: str) -> None:
        with pytest.raises(InvalidUpgradeModeError):
            upgrade_prefix(text)
