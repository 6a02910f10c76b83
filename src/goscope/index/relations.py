"""Heuristic embedding/usage relations between declarations.

Relations are inferred from plain text containment, not type resolution:

  parents  — bare capitalized identifiers on their own line inside the
             target's block (Go embedding), for interfaces, structs and
             type declarations only
  children — other declarations whose signature or block mentions the
             target's name (case-insensitive)

Coincidental name containment produces false positives.
"""

from __future__ import annotations

import re

from goscope.index.declaration_index import DeclarationIndex
from goscope.index.schema import DeclarationKind, Relations

_EMBEDDED_RE = re.compile(r"^[A-Z][A-Za-z0-9_]*$")

_PARENT_KINDS = frozenset({
    DeclarationKind.CONTRACT,
    DeclarationKind.RECORD,
    DeclarationKind.ALIAS,
})


class RelationshipInferrer:
    """Infer relations for declarations of a ``DeclarationIndex``."""

    def __init__(self, index: DeclarationIndex) -> None:
        self._index = index

    def relations_of(self, name: str) -> Relations | None:
        """Return the relations of *name*, or None if it is not indexed."""
        target = self._index.find(name)
        if target is None:
            return None

        parents: set[str] = set()
        if target.kind in _PARENT_KINDS:
            for line in target.text.split("\n"):
                stripped = line.strip()
                if _EMBEDDED_RE.match(stripped):
                    parents.add(stripped)

        needle = target.name.lower()
        children = {
            candidate.name
            for candidate in self._index.all_declarations()
            if candidate.name != target.name and needle in candidate.text.lower()
        }

        return Relations(
            target=target,
            parents=sorted(parents),
            children=sorted(children),
        )
