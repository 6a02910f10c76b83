"""Import extraction and per-module import/export reports.

Imports come from scanning each collected file's import statements.
Exports are not scanned: a module exports exactly the names of the indexed
declarations that belong to it.
"""

from __future__ import annotations

import logging
import re

from goscope.index.collector import module_of, relative_path
from goscope.index.declaration_index import DeclarationIndex
from goscope.index.schema import DependencyInfo

logger = logging.getLogger(__name__)

_SINGLE_IMPORT_RE = re.compile(r'^import\s+"([^"]+)"')
_IMPORT_BLOCK_RE = re.compile(r"^import\s*\(")
_BLOCK_ITEM_RE = re.compile(r'^(?:[A-Za-z_]\w*\s+)?"([^"]+)"')


def extract_imports(content: str) -> list[str]:
    """Return import paths in source order (duplicates kept).

    Handles ``import "path"`` and parenthesized blocks whose items may carry
    an alias identifier.  A block ends at a line that is exactly ``)``, or on
    its opening line when that line already closes the parenthesis.
    """
    imports: list[str] = []
    lines = re.split(r"\r?\n", content)

    index = 0
    while index < len(lines):
        line = lines[index].strip()

        single = _SINGLE_IMPORT_RE.match(line)
        block = _IMPORT_BLOCK_RE.match(line)
        if single:
            imports.append(single.group(1))
        elif block:
            rest = line[block.end():]
            if ")" in rest:
                # import ("fmt"; "os") closes on its own line
                for item in rest[:rest.index(")")].split(";"):
                    m = _BLOCK_ITEM_RE.match(item.strip())
                    if m:
                        imports.append(m.group(1))
                index += 1
                continue
            for inner in range(index + 1, len(lines)):
                item = lines[inner].strip()
                if item == ")":
                    index = inner
                    break
                m = _BLOCK_ITEM_RE.match(item)
                if m:
                    imports.append(m.group(1))
            else:
                index = len(lines)
        index += 1

    return imports


class DependencyAnalyzer:
    """Build ``DependencyInfo`` reports from a ``DeclarationIndex``."""

    def __init__(self, index: DeclarationIndex) -> None:
        self._index = index

    def analyze(self) -> list[DependencyInfo]:
        """Return one report per module that owns a source file, sorted by module.

        Read errors propagate, as for the index scan.
        """
        root = self._index.root
        imports: dict[str, set[str]] = {}
        exports: dict[str, set[str]] = {}

        for path in self._index.source_files():
            module = module_of(relative_path(root, path))
            content = path.read_text(encoding="utf-8", errors="replace")
            imports.setdefault(module, set()).update(extract_imports(content))
            exports.setdefault(module, set())

        for decl in self._index.all_declarations():
            if decl.module in exports:
                exports[decl.module].add(decl.name)

        logger.debug("Dependency analysis: %d modules", len(imports))
        return [
            DependencyInfo(
                module=module,
                imports=sorted(imports[module]),
                exports=sorted(exports[module]),
            )
            for module in sorted(imports)
        ]
