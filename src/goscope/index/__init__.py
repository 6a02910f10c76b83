"""Declaration index module — line-pattern structural analysis of Go sources."""

from goscope.index.declaration_index import DeclarationIndex
from goscope.index.dependencies import DependencyAnalyzer
from goscope.index.modules import ModuleAggregator
from goscope.index.ranker import ContextSearch, rank_declarations
from goscope.index.relations import RelationshipInferrer
from goscope.index.scanner import DeclarationScanner
from goscope.index.schema import (
    Declaration,
    DeclarationKind,
    DependencyInfo,
    LibraryStatistics,
    Member,
    ModuleStatistics,
    ModuleSummary,
    RankedResult,
    Relations,
    TopicOverview,
)

__all__ = [
    "ContextSearch",
    "Declaration",
    "DeclarationIndex",
    "DeclarationKind",
    "DeclarationScanner",
    "DependencyAnalyzer",
    "DependencyInfo",
    "LibraryStatistics",
    "Member",
    "ModuleAggregator",
    "ModuleStatistics",
    "ModuleSummary",
    "RankedResult",
    "Relations",
    "RelationshipInferrer",
    "TopicOverview",
    "rank_declarations",
]
