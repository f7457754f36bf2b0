"""Tests for AddService and RemoveService (core/add_service.py, core/remove_service.py).

The manifest and resolver collaborators are **mocked**.  These tests
verify ordering guarantees: progress before insertion, a single write
after every insertion, and no mutation when resolution fails.
"""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest

from crate_edit.core.add_service import AddService
from crate_edit.core.models import (
    AddDepKind,
    AddProgress,
    AddRequest,
    Dependency,
    RegistrySource,
    RemoveDepKind,
    RemoveProgress,
    SectionPath,
    UpgradeMode,
)
from crate_edit.core.remove_service import RemoveService
from crate_edit.exceptions import (
    EmptyTargetSpecifierError,
    EntryNotFoundError,
    InvalidArgumentError,
    ManifestError,
    RegistryLookupError,
    TableInsertConflictError,
)

DEPS = SectionPath(("dependencies",))


def _resolver(deps: list[Dependency] | Exception) -> MagicMock:
    resolver = MagicMock()
    if isinstance(deps, Exception):
        resolver.resolve.side_effect = deps
    else:
        resolver.resolve.return_value = deps
    return resolver


# ---------------------------------------------------------------------------
# AddService
# ---------------------------------------------------------------------------

class TestAddService:
    def test_inserts_then_writes_once(self) -> None:
        serde = Dependency("serde", RegistrySource("^1.0"))
        rand = Dependency("rand", RegistrySource("^0.8"))
        manifest = MagicMock()
        service = AddService(manifest, _resolver([serde, rand]))

        result = service.add(AddRequest(crates=("serde", "rand")))

        assert result == [serde, rand]
        assert manifest.mock_calls == [
            call.insert(DEPS, serde),
            call.insert(DEPS, rand),
            call.write(),
        ]

    def test_request_is_forwarded_to_resolver(self) -> None:
        resolver = _resolver([Dependency("foo", RegistrySource("0.4.2"), optional=True)])
        request = AddRequest(
            crates=("foo",),
            kind=AddDepKind.OPTIONAL,
            version="0.4.2",
            upgrade=UpgradeMode.NONE,
            allow_prerelease=True,
        )
        AddService(MagicMock(), resolver).add(request)
        resolver.resolve.assert_called_once_with(
            ("foo",),
            version="0.4.2",
            git=None,
            path=None,
            upgrade=UpgradeMode.NONE,
            allow_prerelease=True,
            optional=True,
        )

    def test_progress_precedes_each_insert(self) -> None:
        dep = Dependency("log", RegistrySource("^0.4"))
        manifest = MagicMock()
        events: list[object] = []
        manifest.insert.side_effect = lambda *_: events.append("insert")

        AddService(manifest, _resolver([dep])).add(
            AddRequest(crates=("log",), kind=AddDepKind.DEV),
            progress_callback=events.append,
        )

        assert events == [
            AddProgress(dep, SectionPath(("dev-dependencies",)), optional=False),
            "insert",
        ]

    def test_target_section(self) -> None:
        dep = Dependency("winapi", RegistrySource("^0.3"))
        manifest = MagicMock()
        AddService(manifest, _resolver([dep])).add(
            AddRequest(crates=("winapi",), target="cfg(windows)"),
        )
        manifest.insert.assert_called_once_with(
            SectionPath(("target", "cfg(windows)", "dependencies")), dep,
        )

    def test_target_with_several_crates_rejected(self) -> None:
        manifest = MagicMock()
        resolver = _resolver([])
        with pytest.raises(InvalidArgumentError, match="--target"):
            AddService(manifest, resolver).add(AddRequest(crates=("a", "b"), target="x"))
        resolver.resolve.assert_not_called()
        assert manifest.mock_calls == []

    def test_empty_target_rejected_before_resolution(self) -> None:
        resolver = _resolver([])
        with pytest.raises(EmptyTargetSpecifierError):
            AddService(MagicMock(), resolver).add(AddRequest(crates=("a",), target=""))
        resolver.resolve.assert_not_called()

    def test_resolution_failure_leaves_manifest_untouched(self) -> None:
        manifest = MagicMock()
        callback = MagicMock()
        service = AddService(manifest, _resolver(RegistryLookupError("nope")))

        with pytest.raises(RegistryLookupError):
            service.add(AddRequest(crates=("a", "b")), progress_callback=callback)

        assert manifest.mock_calls == []
        callback.assert_not_called()

    def test_insert_conflict_aborts_without_write(self) -> None:
        manifest = MagicMock()
        manifest.insert.side_effect = TableInsertConflictError("exists")
        dep = Dependency("log", RegistrySource("^0.4"))

        with pytest.raises(TableInsertConflictError):
            AddService(manifest, _resolver([dep])).add(AddRequest(crates=("log",)))
        manifest.write.assert_not_called()

    def test_unexpected_manifest_error_is_wrapped(self) -> None:
        manifest = MagicMock()
        manifest.write.side_effect = RuntimeError("disk full")
        dep = Dependency("log", RegistrySource("^0.4"))

        with pytest.raises(ManifestError) as exc_info:
            AddService(manifest, _resolver([dep])).add(AddRequest(crates=("log",)))
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# RemoveService
# ---------------------------------------------------------------------------

class TestRemoveService:
    def test_removes_then_writes(self) -> None:
        manifest = MagicMock()
        RemoveService(manifest).remove("rand", RemoveDepKind.BUILD)
        assert manifest.mock_calls == [
            call.remove(SectionPath(("build-dependencies",)), "rand"),
            call.write(),
        ]

    def test_progress_is_reported(self) -> None:
        callback = MagicMock()
        RemoveService(MagicMock()).remove("rand", progress_callback=callback)
        callback.assert_called_once_with(RemoveProgress("rand", DEPS))

    def test_missing_entry_is_not_written(self) -> None:
        manifest = MagicMock()
        manifest.remove.side_effect = EntryNotFoundError("missing")
        with pytest.raises(EntryNotFoundError):
            RemoveService(manifest).remove("ghost")
        manifest.write.assert_not_called()

    def test_unexpected_error_is_wrapped(self) -> None:
        manifest = MagicMock()
        manifest.remove.side_effect = KeyError("rand")
        with pytest.raises(ManifestError) as exc_info:
            RemoveService(manifest).remove("rand")
        assert isinstance(exc_info.value.__cause__, KeyError)
