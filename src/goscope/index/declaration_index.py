"""DeclarationIndex — lazily scanned, memoized declaration set for one tree.

The first call to ``all_declarations()`` collects every source file under
the root and scans it; the result is cached on the instance for its whole
lifetime.  There is no refresh: build a new index to pick up changes.
Instances never share state, so indexes over different roots can coexist.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from goscope.core.config import ScanConfig
from goscope.index.collector import collect_source_files, resolve_repo_root
from goscope.index.scanner import DeclarationScanner
from goscope.index.schema import (
    CALLABLE_KINDS,
    VALUE_KINDS,
    Declaration,
    DeclarationKind,
)

logger = logging.getLogger(__name__)


class DeclarationIndex:
    """In-memory index of the exported declarations under a Go source root.

    Parameters
    ----------
    root:
        Any path inside the tree; resolved to the directory holding the
        root marker (itself or its parent).
    config:
        Scan settings; defaults to ``ScanConfig()``.
    """

    def __init__(self, root: Path, config: ScanConfig | None = None) -> None:
        self._config = config or ScanConfig()
        self._root = resolve_repo_root(root, self._config.root_marker)
        self._scanner = DeclarationScanner(self._config.max_signature_lines)
        self._cache: tuple[Declaration, ...] | None = None
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    # ── Scanning ──────────────────────────────────────────────────────────────

    def source_files(self) -> list[Path]:
        """Return the collected source files in traversal order."""
        return collect_source_files(
            self._root,
            suffix=self._config.source_suffix,
            test_suffix=self._config.test_suffix,
            skip_dirs=self._config.skip_dirs,
        )

    def all_declarations(self) -> tuple[Declaration, ...]:
        """Return every declaration in the tree, scanning on first use.

        A read error aborts the scan and propagates; nothing is cached, so
        a later call retries.
        """
        cached = self._cache
        if cached is not None:
            return cached
        with self._lock:
            if self._cache is None:
                self._cache = self._scan_all()
            return self._cache

    def _scan_all(self) -> tuple[Declaration, ...]:
        files = self.source_files()
        extracted: list[Declaration] = []
        for path in files:
            extracted.extend(self._scanner.scan_file(path, self._root))
        logger.info(
            "Indexed %s: %d files, %d declarations",
            self._root, len(files), len(extracted),
        )
        return tuple(extracted)

    # ── Lookup and filters ────────────────────────────────────────────────────

    def find(self, name: str) -> Declaration | None:
        """Exact name lookup with a case-insensitive fallback."""
        declarations = self.all_declarations()
        for decl in declarations:
            if decl.name == name:
                return decl
        lowered = name.lower()
        for decl in declarations:
            if decl.name.lower() == lowered:
                return decl
        return None

    def by_module(self, module: str) -> list[Declaration]:
        """Return declarations of *module* (case-insensitive)."""
        lowered = module.lower()
        return [d for d in self.all_declarations() if d.module.lower() == lowered]

    def by_kind(self, kind: DeclarationKind) -> list[Declaration]:
        return [d for d in self.all_declarations() if d.kind == kind]

    def contracts(self) -> list[Declaration]:
        return self.by_kind(DeclarationKind.CONTRACT)

    def constants_and_variables(self) -> list[Declaration]:
        return [d for d in self.all_declarations() if d.kind in VALUE_KINDS]

    def functions_and_methods(self) -> list[Declaration]:
        return [d for d in self.all_declarations() if d.kind in CALLABLE_KINDS]

    def modules(self) -> list[str]:
        """Return the sorted names of modules that own declarations."""
        return sorted({d.module for d in self.all_declarations()})
