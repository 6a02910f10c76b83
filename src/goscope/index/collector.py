"""Source-file discovery and path helpers for a Go source tree.

The collector walks directories in ``os.walk`` enumeration order (no sorting), so
callers must not depend on alphabetical order.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from goscope.index.schema import ROOT_MODULE

SOURCE_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"
ROOT_MARKER = "go.mod"
SKIP_DIRS = frozenset({"vendor"})


def resolve_repo_root(path: Path, marker: str = ROOT_MARKER) -> Path:
    """Return the project root for *path*.

    The root is *path* itself or its parent, whichever holds *marker*.
    Falls back to the resolved *path* when neither does.
    """
    normalized = path.resolve()
    if (normalized / marker).exists():
        return normalized
    parent = normalized.parent
    if (parent / marker).exists():
        return parent
    return normalized


def collect_source_files(
    root: Path,
    suffix: str = SOURCE_SUFFIX,
    test_suffix: str = TEST_SUFFIX,
    skip_dirs: Iterable[str] = SKIP_DIRS,
) -> list[Path]:
    """Return every non-test source file under *root*.

    Hidden entries and *skip_dirs* are not descended into.  Returns an empty
    list if *root* does not exist.
    """
    if not root.is_dir():
        return []
    skip = frozenset(skip_dirs)
    result: list[Path] = []
    for directory, dirs, files in os.walk(root):
        dirs[:] = [d for d in dirs if not d.startswith(".") and d not in skip]
        for name in files:
            if name.startswith("."):
                continue
            if name.endswith(suffix) and not name.endswith(test_suffix):
                result.append(Path(directory) / name)
    return result


def relative_path(root: Path, file_path: Path) -> str:
    """Return *file_path* relative to *root* with forward slashes."""
    return Path(os.path.relpath(file_path, root)).as_posix()


def module_of(relative: str) -> str:
    """Return the module (first path segment) of a root-relative path."""
    parts = relative.split("/")
    return parts[0] if len(parts) > 1 else ROOT_MODULE
