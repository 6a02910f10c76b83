"""Immutable dataclass models for the declaration index."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeclarationKind(str, Enum):
    """The seven kinds of top-level declaration the scanner recognizes.

    Values are the Go-native labels; the ranker matches query terms against
    them.
    """

    CONTRACT = "interface"
    RECORD = "struct"
    ALIAS = "type"
    FUNCTION = "function"
    METHOD = "method"
    CONSTANT = "const"
    VARIABLE = "variable"


ROOT_MODULE = "root"

CALLABLE_KINDS = frozenset({DeclarationKind.FUNCTION, DeclarationKind.METHOD})
COMPOSITE_KINDS = frozenset({DeclarationKind.CONTRACT, DeclarationKind.RECORD})
VALUE_KINDS = frozenset({DeclarationKind.CONSTANT, DeclarationKind.VARIABLE})


def empty_kind_counts() -> dict[DeclarationKind, int]:
    """Return a zero-filled per-kind counter in declaration order."""
    return {kind: 0 for kind in DeclarationKind}


# ── Dataclass models ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Member:
    """A field or method entry owned by a struct or interface declaration."""

    name: str
    type: str
    parameters: tuple[str, ...] = ()
    return_type: str = ""
    is_method: bool = False
    is_call_signature: bool = False
    is_index_signature: bool = False


@dataclass(frozen=True)
class Declaration:
    """One recognized top-level exported symbol."""

    name: str
    kind: DeclarationKind
    source_file: str        # relative path from the scanned root
    module: str             # first path segment, or ROOT_MODULE
    signature: str
    line_number: int        # 1-based
    full_block: str | None = None
    members: tuple[Member, ...] = ()
    documentation: str | None = None
    literal_value: str | None = None

    @property
    def text(self) -> str:
        """Full captured block when available, otherwise the signature."""
        return self.full_block or self.signature


@dataclass(frozen=True)
class ModuleStatistics:
    """Per-kind declaration counts for one module."""

    module: str
    counts: dict[DeclarationKind, int]
    total: int


@dataclass(frozen=True)
class ModuleSummary:
    """Counts, files and highlighted declarations of one module."""

    module: str
    total: int
    counts: dict[DeclarationKind, int]
    files: list[str]
    highlights: list[Declaration]


@dataclass(frozen=True)
class LibraryStatistics:
    """Whole-tree snapshot: totals, per-module counts and headline names."""

    total: int
    counts: dict[DeclarationKind, int]
    modules: list[ModuleStatistics]
    top_contracts: list[str]
    top_types: list[str]
    top_functions: list[str]


@dataclass(frozen=True)
class DependencyInfo:
    """Imports and exports of one module."""

    module: str
    imports: list[str]
    exports: list[str]
    re_exports: list[str] = field(default_factory=list)  # reserved, always empty


@dataclass(frozen=True)
class RankedResult:
    """A declaration paired with its relevance score and matched signals."""

    declaration: Declaration
    score: int
    matched_in: tuple[str, ...]


@dataclass(frozen=True)
class Relations:
    """Heuristic embedding/usage relations of a declaration."""

    target: Declaration
    parents: list[str]
    children: list[str]


@dataclass(frozen=True)
class TopicOverview:
    """Ranked results for a topic, aggregated by module and kind."""

    topic: str
    results: list[RankedResult]
    modules: list[tuple[str, int]]
    kinds: list[tuple[DeclarationKind, int]]
