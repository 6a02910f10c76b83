"""Tests for DeclarationIndex — memoized scan and lookups."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from goscope.core.config import ScanConfig
from goscope.index.declaration_index import DeclarationIndex
from goscope.index.scanner import DeclarationScanner
from goscope.index.schema import DeclarationKind


@pytest.fixture()
def index(go_project: Path) -> DeclarationIndex:
    return DeclarationIndex(go_project)


class TestAllDeclarations:
    def test_scans_whole_tree(self, index: DeclarationIndex) -> None:
        names = {d.name for d in index.all_declarations()}
        assert names == {
            "Client", "NewClient", "SendMessage", "DefaultTimeout",
            "JID", "Message", "MessageHandler",
            "DeviceContainer", "Device", "ErrNotFound",
        }

    def test_excluded_files_not_scanned(self, index: DeclarationIndex) -> None:
        names = {d.name for d in index.all_declarations()}
        assert not names & {"TestClient", "Vendored", "Hidden"}

    def test_result_is_memoized(
        self, index: DeclarationIndex, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[Path] = []
        original = DeclarationScanner.scan_file

        def counting(self: DeclarationScanner, path: Path, root: Path):  # type: ignore[no-untyped-def]
            calls.append(path)
            return original(self, path, root)

        monkeypatch.setattr(DeclarationScanner, "scan_file", counting)
        first = index.all_declarations()
        second = index.all_declarations()
        assert first is second
        assert len(calls) == 3

    def test_concurrent_first_access_scans_once(
        self, index: DeclarationIndex, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        scans: list[int] = []
        original = DeclarationIndex._scan_all

        def counting(self: DeclarationIndex):  # type: ignore[no-untyped-def]
            scans.append(1)
            return original(self)

        monkeypatch.setattr(DeclarationIndex, "_scan_all", counting)
        results: list[object] = []
        threads = [
            threading.Thread(target=lambda: results.append(index.all_declarations()))
            for _ in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(scans) == 1
        assert all(r is results[0] for r in results)

    def test_instances_do_not_share_cache(
        self, go_project: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        other_root = tmp_path_factory.mktemp("other")
        (other_root / "main.go").write_text("func Only() {}\n", encoding="utf-8")
        assert {d.name for d in DeclarationIndex(other_root).all_declarations()} == {"Only"}
        assert len(DeclarationIndex(go_project).all_declarations()) == 10

    def test_new_instance_sees_changes(self, go_project: Path) -> None:
        first = DeclarationIndex(go_project)
        first.all_declarations()
        (go_project / "extra.go").write_text("func Added() {}\n", encoding="utf-8")
        assert first.find("Added") is None
        assert DeclarationIndex(go_project).find("Added") is not None

    def test_read_error_propagates(
        self, index: DeclarationIndex, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing(self: DeclarationScanner, path: Path, root: Path):  # type: ignore[no-untyped-def]
            raise PermissionError(f"cannot read {path}")

        monkeypatch.setattr(DeclarationScanner, "scan_file", failing)
        with pytest.raises(OSError):
            index.all_declarations()

    def test_missing_root_is_empty(self, tmp_path: Path) -> None:
        assert DeclarationIndex(tmp_path / "missing").all_declarations() == ()

    def test_custom_suffix(self, tmp_path: Path) -> None:
        (tmp_path / "a.gox").write_text("func Custom() {}\n", encoding="utf-8")
        (tmp_path / "b.go").write_text("func Plain() {}\n", encoding="utf-8")
        index = DeclarationIndex(tmp_path, ScanConfig(source_suffix=".gox"))
        assert [d.name for d in index.all_declarations()] == ["Custom"]


class TestLookups:
    def test_find_exact(self, index: DeclarationIndex) -> None:
        found = index.find("Client")
        assert found is not None
        assert found.kind == DeclarationKind.RECORD
        assert found.source_file == "client.go"
        assert found.line_number == 10

    def test_find_case_insensitive_fallback(self, index: DeclarationIndex) -> None:
        found = index.find("sendmessage")
        assert found is not None and found.name == "SendMessage"

    def test_find_missing(self, index: DeclarationIndex) -> None:
        assert index.find("DoesNotExist") is None

    def test_by_module_case_insensitive(self, index: DeclarationIndex) -> None:
        assert {d.name for d in index.by_module("TYPES")} == {"JID", "Message", "MessageHandler"}

    def test_by_module_unknown(self, index: DeclarationIndex) -> None:
        assert index.by_module("nope") == []

    def test_by_kind(self, index: DeclarationIndex) -> None:
        assert {d.name for d in index.by_kind(DeclarationKind.CONTRACT)} == {
            "MessageHandler", "DeviceContainer",
        }
        assert [d.name for d in index.contracts()] == [
            d.name for d in index.by_kind(DeclarationKind.CONTRACT)
        ]

    def test_functions_and_methods(self, index: DeclarationIndex) -> None:
        assert {d.name for d in index.functions_and_methods()} == {"NewClient", "SendMessage"}

    def test_constants_and_variables(self, index: DeclarationIndex) -> None:
        assert {d.name for d in index.constants_and_variables()} == {
            "DefaultTimeout", "ErrNotFound",
        }

    def test_modules(self, index: DeclarationIndex) -> None:
        assert index.modules() == ["root", "store", "types"]

    def test_record_members(self, index: DeclarationIndex) -> None:
        client = index.find("Client")
        assert client is not None
        assert [(m.name, m.type) for m in client.members] == [
            ("Store", "*store.Device"),
            ("Log", "log.Logger"),
            ("version", "int"),
        ]
        assert client.documentation == "Client talks to the server."
