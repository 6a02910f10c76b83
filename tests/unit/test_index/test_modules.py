"""Tests for ModuleAggregator — summaries, highlights and statistics."""

from __future__ import annotations

from pathlib import Path

import pytest

from goscope.index.declaration_index import DeclarationIndex
from goscope.index.modules import ModuleAggregator, interest_score
from goscope.index.schema import Declaration, DeclarationKind


@pytest.fixture()
def aggregator(go_project: Path) -> ModuleAggregator:
    return ModuleAggregator(DeclarationIndex(go_project))


class TestInterestScore:
    def _decl(self, name: str, kind: DeclarationKind, docs: str | None = None) -> Declaration:
        return Declaration(
            name=name, kind=kind, source_file="a.go", module="root",
            signature="x", line_number=1, documentation=docs,
        )

    def test_documented_function(self) -> None:
        assert interest_score(self._decl("Run", DeclarationKind.FUNCTION, "Runs.")) == 7

    def test_record(self) -> None:
        assert interest_score(self._decl("Device", DeclarationKind.RECORD)) == 4

    def test_long_constant_name(self) -> None:
        decl = self._decl("A" * 25, DeclarationKind.CONSTANT)
        assert interest_score(decl) == 0


class TestSummarize:
    def test_root_module(self, aggregator: ModuleAggregator) -> None:
        summary = aggregator.summarize("root")
        assert summary.total == 4
        assert summary.files == ["client.go"]
        assert summary.counts[DeclarationKind.RECORD] == 1
        assert summary.counts[DeclarationKind.FUNCTION] == 1
        assert summary.counts[DeclarationKind.METHOD] == 1
        assert summary.counts[DeclarationKind.CONSTANT] == 1
        assert summary.counts[DeclarationKind.CONTRACT] == 0

    def test_highlight_order(self, aggregator: ModuleAggregator) -> None:
        summary = aggregator.summarize("root")
        # NewClient / SendMessage: docs+callable+short = 7; Client 6; DefaultTimeout 1
        assert [d.name for d in summary.highlights] == [
            "NewClient", "SendMessage", "Client", "DefaultTimeout",
        ]

    def test_highlight_count(self, aggregator: ModuleAggregator) -> None:
        assert len(aggregator.summarize("root", highlight_count=2).highlights) == 2

    def test_unknown_module_is_empty(self, aggregator: ModuleAggregator) -> None:
        summary = aggregator.summarize("nope")
        assert summary.total == 0
        assert summary.files == []
        assert summary.highlights == []
        assert set(summary.counts.values()) == {0}


class TestStatistics:
    def test_module_statistics(self, aggregator: ModuleAggregator) -> None:
        stats = aggregator.statistics("store")
        assert stats.total == 3
        assert stats.counts[DeclarationKind.CONTRACT] == 1
        assert stats.counts[DeclarationKind.VARIABLE] == 1

    def test_library_statistics(self, aggregator: ModuleAggregator) -> None:
        stats = aggregator.library_statistics()
        assert stats.total == 10
        assert sum(stats.counts.values()) == 10
        assert [m.module for m in stats.modules] == ["root", "store", "types"]
        assert [m.total for m in stats.modules] == [4, 3, 3]
        assert stats.top_contracts == ["DeviceContainer", "MessageHandler"]
        assert stats.top_types == ["Client", "Device", "JID", "Message"]
        assert stats.top_functions == ["NewClient", "SendMessage"]
