"""Keyword relevance ranking over indexed declarations.

Each whitespace-separated query term is matched (substring, lower-cased)
against six fields of every candidate.  Weights per term:

  name-exact 25 > name 12 > signature 6 > docs 5 = module 5 > file 4 = kind 4

All matching weights add up, except that an exact name match replaces the
substring-name weight (the ``name`` label is still recorded).  Candidates
scoring zero are dropped unless the query has no terms.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from goscope.index.declaration_index import DeclarationIndex
from goscope.index.schema import (
    Declaration,
    DeclarationKind,
    RankedResult,
    TopicOverview,
)

logger = logging.getLogger(__name__)

WEIGHT_NAME_EXACT = 25
WEIGHT_NAME = 12
WEIGHT_SIGNATURE = 6
WEIGHT_DOCS = 5
WEIGHT_MODULE = 5
WEIGHT_FILE = 4
WEIGHT_KIND = 4


def _score(decl: Declaration, terms: list[str]) -> tuple[int, tuple[str, ...]]:
    name = decl.name.lower()
    fields = (
        ("signature", decl.signature.lower(), WEIGHT_SIGNATURE),
        ("docs", (decl.documentation or "").lower(), WEIGHT_DOCS),
        ("file", decl.source_file.lower(), WEIGHT_FILE),
        ("module", decl.module.lower(), WEIGHT_MODULE),
        ("kind", decl.kind.value, WEIGHT_KIND),
    )
    score = 0
    matched: dict[str, None] = {}

    for term in terms:
        if name == term:
            score += WEIGHT_NAME_EXACT
            matched["name-exact"] = None
            matched["name"] = None
        elif term in name:
            score += WEIGHT_NAME
            matched["name"] = None
        for label, text, weight in fields:
            if term in text:
                score += weight
                matched[label] = None

    return score, tuple(matched)


def rank_declarations(
    declarations: Iterable[Declaration],
    query: str,
    limit: int = 20,
    module: str | None = None,
    kind: DeclarationKind | None = None,
) -> list[RankedResult]:
    """Score, filter and order *declarations* against *query*.

    Results are ordered by score (descending), then name, then location, so
    the output does not depend on input order.  *limit* is clamped to >= 1.
    """
    terms = query.lower().split()
    module_filter = module.lower() if module else None

    ranked: list[RankedResult] = []
    for decl in declarations:
        if module_filter is not None and decl.module.lower() != module_filter:
            continue
        if kind is not None and decl.kind != kind:
            continue
        score, matched = _score(decl, terms)
        if terms and score == 0:
            continue
        ranked.append(RankedResult(declaration=decl, score=score, matched_in=matched))

    ranked.sort(key=lambda r: (
        -r.score,
        r.declaration.name,
        r.declaration.source_file,
        r.declaration.line_number,
    ))
    return ranked[:max(1, limit)]


class ContextSearch:
    """Ranked search over a ``DeclarationIndex``.

    Parameters
    ----------
    index:
        The index to search (caller owns lifecycle).
    """

    def __init__(self, index: DeclarationIndex) -> None:
        self._index = index

    def search(
        self,
        query: str,
        limit: int = 20,
        module: str | None = None,
        kind: DeclarationKind | None = None,
    ) -> list[RankedResult]:
        results = rank_declarations(
            self._index.all_declarations(), query, limit, module=module, kind=kind,
        )
        logger.debug("Search %r: %d results", query, len(results))
        return results

    def fuzzy(self, query: str, limit: int = 20) -> list[Declaration]:
        """Return only the declarations of a ranked search (name suggestions)."""
        return [r.declaration for r in self.search(query, limit)]

    def explore_topic(self, topic: str, limit: int = 25) -> TopicOverview:
        """Rank *topic* and tally which modules and kinds the hits fall in."""
        results = self.search(topic, limit)
        modules = Counter(r.declaration.module for r in results)
        kinds = Counter(r.declaration.kind for r in results)
        return TopicOverview(
            topic=topic,
            results=results,
            modules=modules.most_common(),
            kinds=kinds.most_common(),
        )
