"""ModuleAggregator — per-module counts, highlights and library statistics."""

from __future__ import annotations

from collections.abc import Iterable

from goscope.index.declaration_index import DeclarationIndex
from goscope.index.schema import (
    CALLABLE_KINDS,
    COMPOSITE_KINDS,
    Declaration,
    DeclarationKind,
    LibraryStatistics,
    ModuleStatistics,
    ModuleSummary,
    empty_kind_counts,
)

_SHORT_NAME_LENGTH = 24


def interest_score(decl: Declaration) -> int:
    """Secondary score used to pick a module's highlights."""
    score = 0
    if decl.documentation:
        score += 2
    if decl.kind in CALLABLE_KINDS:
        score += 4
    if decl.kind in COMPOSITE_KINDS:
        score += 3
    if len(decl.name) <= _SHORT_NAME_LENGTH:
        score += 1
    return score


def count_by_kind(declarations: Iterable[Declaration]) -> dict[DeclarationKind, int]:
    counts = empty_kind_counts()
    for decl in declarations:
        counts[decl.kind] += 1
    return counts


def _first_names(declarations: Iterable[Declaration], limit: int) -> list[str]:
    return sorted(d.name for d in declarations)[:limit]


class ModuleAggregator:
    """Group the declarations of a ``DeclarationIndex`` by module.

    Unknown modules are not an error: they summarize to zero declarations.
    """

    def __init__(self, index: DeclarationIndex) -> None:
        self._index = index

    def summarize(self, module: str, highlight_count: int = 12) -> ModuleSummary:
        """Return counts, files and the most interesting declarations of *module*."""
        declarations = self._index.by_module(module)
        highlights = sorted(
            declarations,
            key=lambda d: (-interest_score(d), d.name),
        )[:max(1, highlight_count)]
        return ModuleSummary(
            module=module,
            total=len(declarations),
            counts=count_by_kind(declarations),
            files=sorted({d.source_file for d in declarations}),
            highlights=highlights,
        )

    def statistics(self, module: str) -> ModuleStatistics:
        declarations = self._index.by_module(module)
        return ModuleStatistics(
            module=module,
            counts=count_by_kind(declarations),
            total=len(declarations),
        )

    def library_statistics(self) -> LibraryStatistics:
        """Totals by kind, counts for every module and headline names."""
        all_decls = self._index.all_declarations()

        grouped: dict[str, list[Declaration]] = {}
        for decl in all_decls:
            grouped.setdefault(decl.module, []).append(decl)

        modules = [
            ModuleStatistics(module=name, counts=count_by_kind(decls), total=len(decls))
            for name, decls in sorted(grouped.items())
        ]
        return LibraryStatistics(
            total=len(all_decls),
            counts=count_by_kind(all_decls),
            modules=modules,
            top_contracts=_first_names(self._index.contracts(), 15),
            top_types=_first_names(
                (d for d in all_decls
                 if d.kind in (DeclarationKind.ALIAS, DeclarationKind.RECORD)),
                20,
            ),
            top_functions=_first_names(self._index.functions_and_methods(), 20),
        )
