"""Tests for crate reference classification (core/specifier.py)."""

from __future__ import annotations

import pytest

from crate_edit.core.models import PinnedVersion, PlainName, SourceLocator
from crate_edit.core.specifier import is_path_like, is_url, parse_crate_specifier
from crate_edit.exceptions import InvalidCrateNameError, InvalidVersionLiteralError


class TestPinnedVersion:
    def test_name_at_version(self) -> None:
        assert parse_crate_specifier("serde@1.0.100") == PinnedVersion("serde", "1.0.100")

    def test_requirement_operators_are_kept(self) -> None:
        assert parse_crate_specifier("bitflags@^0.3") == PinnedVersion("bitflags", "^0.3")

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse_crate_specifier("  rand@0.8  ") == PinnedVersion("rand", "0.8")

    @pytest.mark.parametrize("raw", ["serde@", "serde@abc", "serde@1..2"])
    def test_malformed_version_is_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidVersionLiteralError) as exc_info:
            parse_crate_specifier(raw)
        assert exc_info.value.hint is not None


class TestSourceLocator:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://github.com/serde-rs/serde",
            "https://gitlab.com/owner/repo.git",
            "../sibling",
            "./local",
            "vendor/crate",
            "C:\\work\\crate",
            ".",
        ],
    )
    def test_urls_and_paths(self, raw: str) -> None:
        assert parse_crate_specifier(raw) == SourceLocator(raw)

    def test_helpers(self) -> None:
        assert is_url("https://example.com/x")
        assert not is_url("serde")
        assert is_path_like("a/b")
        assert not is_path_like("serde_json")


class TestPlainName:
    @pytest.mark.parametrize("raw", ["serde", "serde_json", "tokio-util"])
    def test_plain(self, raw: str) -> None:
        assert parse_crate_specifier(raw) == PlainName(raw)

    def test_whitespace_is_stripped(self) -> None:
        assert parse_crate_specifier("  log ") == PlainName("log")

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_empty_is_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidCrateNameError):
            parse_crate_specifier(raw)
