"""goscope - query the declaration index of a Go source tree."""

from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.console import Console

from goscope.core.config import EnvSettings, GoscopeConfig, load_config
from goscope.index.collector import resolve_repo_root
from goscope.index.declaration_index import DeclarationIndex
from goscope.index.dependencies import DependencyAnalyzer
from goscope.index.modules import ModuleAggregator
from goscope.index.ranker import ContextSearch
from goscope.index.relations import RelationshipInferrer
from goscope.index.schema import DeclarationKind

load_dotenv()

_HELP = """\
Usage: goscope <command> [ARGS] [--dir <path>]

Commands:
  find <name>                       Exact (then case-insensitive) lookup
  search <query> [--module <m>] [--kind <k>] [--limit <n>]
  module <name> [--limit <n>]       Summary of one module
  stats                             Whole-tree statistics
  deps                              Per-module imports and exports
  relations <name>                  Embedded types and referencing declarations
  topic <topic>                     Ranked hits grouped by module and kind

The source root defaults to $GOSCOPE_REPO_PATH, then the current directory.
Results are printed as JSON.
"""

_err = Console(stderr=True)


def main() -> None:
    """Entry point for the goscope CLI."""
    args = sys.argv[1:]
    if not args or args[0] in ("--help", "-h"):
        print(_HELP)
        sys.exit(0)

    env = EnvSettings()
    logging.basicConfig(
        level=env.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command, positional, options = _parse_args(args)
    root = Path(options.get("dir") or env.repo_path or Path.cwd())
    config = load_config(resolve_repo_root(root))
    index = DeclarationIndex(root, config.scan)

    result = _run(command, positional, options, index, config)
    if result is None:
        sys.exit(1)
    Console().print_json(data=_to_plain(result))


def _parse_args(args: list[str]) -> tuple[str, list[str], dict[str, str]]:
    """Split argv into command, positional words and ``--flag value`` options."""
    command = args[0]
    positional: list[str] = []
    options: dict[str, str] = {}
    i = 1
    while i < len(args):
        arg = args[i]
        if arg.startswith("--") and i + 1 < len(args):
            options[arg[2:]] = args[i + 1]
            i += 2
        elif arg.startswith("--"):
            _err.print(f"Missing value for {arg}")
            sys.exit(1)
        else:
            positional.append(arg)
            i += 1
    return command, positional, options


def _run(
    command: str,
    positional: list[str],
    options: dict[str, str],
    index: DeclarationIndex,
    config: GoscopeConfig,
) -> Any:
    text = " ".join(positional)
    try:
        limit = int(options["limit"]) if "limit" in options else None
    except ValueError:
        _err.print(f"Invalid --limit {options['limit']!r}: expected an integer")
        return None

    if command == "find":
        found = index.find(text)
        if found is None:
            suggestions = ContextSearch(index).fuzzy(text, 5)
            names = ", ".join(d.name for d in suggestions) or "none"
            _err.print(f"Symbol {text!r} not found. Did you mean: {names}")
        return found

    if command == "search":
        try:
            kind = DeclarationKind(options["kind"]) if "kind" in options else None
        except ValueError:
            valid = ", ".join(k.value for k in DeclarationKind)
            _err.print(f"Invalid --kind {options['kind']!r}. Valid kinds: {valid}")
            return None
        return ContextSearch(index).search(
            text,
            limit or config.search.default_limit,
            module=options.get("module"),
            kind=kind,
        )

    if command == "module":
        summary = ModuleAggregator(index).summarize(
            text, limit or config.search.highlight_count,
        )
        if summary.total == 0:
            _err.print(
                f"Module {text!r} has no declarations. "
                f"Known modules: {', '.join(index.modules()) or 'none'}"
            )
            return None
        return summary

    if command == "stats":
        return ModuleAggregator(index).library_statistics()

    if command == "deps":
        return DependencyAnalyzer(index).analyze()

    if command == "relations":
        relations = RelationshipInferrer(index).relations_of(text)
        if relations is None:
            _err.print(f"Type {text!r} not found.")
        return relations

    if command == "topic":
        return ContextSearch(index).explore_topic(
            text, limit or config.search.topic_limit,
        )

    _err.print(f"Unknown command: {command}\nRun 'goscope --help' for usage.")
    return None


def _to_plain(value: Any) -> Any:
    """Convert dataclasses, enums and tuples into JSON-ready structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, DeclarationKind):
        return value.value
    if isinstance(value, dict):
        return {_to_plain(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


if __name__ == "__main__":
    main()
