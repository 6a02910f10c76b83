"""Line-pattern declaration scanner for Go source files.

DeclarationScanner makes a single forward pass over a file's lines.  Each
trimmed line is tested against the recognizers below in priority order; the
first match wins.  Composite declarations (interfaces, structs, grouped
const/var blocks) capture their balanced block and the scan resumes after
it, so inner lines are never matched as top-level declarations.

This is not a parser.  Lines that match nothing are skipped and unbalanced
blocks are captured through end of file; the scanner itself never raises.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from goscope.index.blocks import (
    capture_braced_block,
    capture_paren_block,
    capture_signature,
)
from goscope.index.collector import module_of, relative_path
from goscope.index.schema import Declaration, DeclarationKind, Member

logger = logging.getLogger(__name__)

# ── Recognizer patterns ───────────────────────────────────────────────────────

# Optional type-parameter list directly after the name: ``Set[T comparable]``,
# with one level of nested brackets as in ``Index[S ~[]E, E comparable]``
_TYPE_PARAMS = r"(?:\[(?:[^\[\]]|\[[^\[\]]*\])*\])?"

_CONTRACT_RE = re.compile(rf"^type\s+([A-Z]\w*){_TYPE_PARAMS}\s+interface\s*\{{")
_RECORD_RE = re.compile(rf"^type\s+([A-Z]\w*){_TYPE_PARAMS}\s+struct\s*\{{")
_ALIAS_RE = re.compile(rf"^type\s+([A-Z]\w*){_TYPE_PARAMS}\s*(=)?\s*(.+)$")
_METHOD_RE = re.compile(r"^func\s*\(([^)]+)\)\s*([A-Z]\w*)\s*\(")
_FUNCTION_RE = re.compile(rf"^func\s+([A-Z]\w*){_TYPE_PARAMS}\s*\(")
_CONST_BLOCK_RE = re.compile(r"^const\s*\(")
_VAR_BLOCK_RE = re.compile(r"^var\s*\(")
_SINGLE_CONST_RE = re.compile(r"^const\s+([A-Z]\w*)\b(.*)$")
_SINGLE_VAR_RE = re.compile(r"^var\s+([A-Z]\w*)\b(.*)$")

_EXPORTED_RE = re.compile(r"^[A-Z]")
_MEMBER_NAME_RE = re.compile(r"^([A-Za-z_]\w*)\s*\(")
_FIELD_RE = re.compile(r"^([A-Za-z_]\w*)\s+(.+)$")
_GROUPED_MEMBER_RE = re.compile(r"^([A-Za-z_]\w*)\b(.*)$")
_TRAILING_COMMENT_RE = re.compile(r"\s*//.*$")
_LINE_SPLIT_RE = re.compile(r"\r?\n")
_INLINE_BODY_RE = re.compile(r"(?:struct|interface)\s*\{")


def match_contract(line: str) -> re.Match[str] | None:
    return _CONTRACT_RE.match(line)


def match_record(line: str) -> re.Match[str] | None:
    return _RECORD_RE.match(line)


def match_alias(line: str) -> re.Match[str] | None:
    """Match ``type Name = X`` / ``type Name X`` unless the line opens a body.

    Composite types that only contain ``struct{}``, such as
    ``map[string]struct{}`` or ``chan struct{}``, are aliases.
    """
    m = _ALIAS_RE.match(line)
    if m is None or _INLINE_BODY_RE.match(m.group(3)):
        return None
    return m


def match_method(line: str) -> re.Match[str] | None:
    return _METHOD_RE.match(line)


def match_function(line: str) -> re.Match[str] | None:
    return _FUNCTION_RE.match(line)


def match_const_block(line: str) -> re.Match[str] | None:
    return _CONST_BLOCK_RE.match(line)


def match_var_block(line: str) -> re.Match[str] | None:
    return _VAR_BLOCK_RE.match(line)


def match_single_const(line: str) -> re.Match[str] | None:
    return _SINGLE_CONST_RE.match(line)


def match_single_var(line: str) -> re.Match[str] | None:
    return _SINGLE_VAR_RE.match(line)


def is_exported(name: str) -> bool:
    return bool(name) and _EXPORTED_RE.match(name) is not None


# ── Documentation ─────────────────────────────────────────────────────────────

def extract_doc_above(lines: list[str], line_index: int) -> str | None:
    """Collect the contiguous comment run directly above *line_index*.

    One blank line between the comment run and the declaration is bridged.
    Returns None when no comment text is found.
    """
    docs: list[str] = []
    skipped_blank = False
    seen_comment = False
    cursor = line_index - 1

    while cursor >= 0:
        trimmed = lines[cursor].strip()

        if not trimmed:
            if seen_comment or skipped_blank:
                break
            skipped_blank = True
            cursor -= 1
            continue

        if trimmed.startswith("//"):
            docs.insert(0, re.sub(r"^//\s?", "", trimmed))
        elif trimmed.startswith(("/*", "*")) or trimmed.endswith("*/"):
            text = re.sub(r"\*/$", "", trimmed)
            text = re.sub(r"^/\*+\s?", "", text)
            text = re.sub(r"^\*\s?", "", text).strip()
            # bare ``/*`` and ``*/`` lines carry no text
            if text:
                docs.insert(0, text)
        else:
            break
        seen_comment = True
        cursor -= 1

    text = " ".join(docs).strip()
    return text or None


# ── Member sub-parsers ────────────────────────────────────────────────────────

def _body_lines(block_text: str) -> list[str]:
    """Return the lines between the opening and closing delimiter lines.

    A block written on one line has its body taken from between the first
    ``{`` and the last ``}`` and split on ``;``.
    """
    lines = block_text.split("\n")
    if len(lines) == 1:
        line = lines[0]
        start, end = line.find("{"), line.rfind("}")
        if start == -1 or end <= start:
            return []
        return line[start + 1:end].split(";")
    return lines[1:-1]


def _split_call(text: str) -> tuple[str, str, str] | None:
    """Split ``Name(params) tail`` honouring nested parentheses."""
    m = _MEMBER_NAME_RE.match(text)
    if not m:
        return None
    depth = 0
    for pos in range(m.end() - 1, len(text)):
        char = text[pos]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return m.group(1), text[m.end():pos], text[pos + 1:].strip()
    return None


def parse_contract_methods(block_text: str) -> list[Member]:
    """Parse ``Name(params) results`` lines of an interface body."""
    methods: list[Member] = []
    for line in _body_lines(block_text):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//"):
            continue
        parts = _split_call(trimmed)
        if parts is None:
            continue
        name, params, returns = parts
        methods.append(Member(
            name=name,
            type=returns,
            parameters=tuple(p.strip() for p in params.split(",") if p.strip()),
            return_type=returns,
            is_method=True,
        ))
    return methods


def parse_record_fields(block_text: str) -> list[Member]:
    """Parse ``Name Type`` lines of a struct body; embedded types are dropped."""
    fields: list[Member] = []
    for line in _body_lines(block_text):
        cleaned = _TRAILING_COMMENT_RE.sub("", line).strip()
        if not cleaned:
            continue
        m = _FIELD_RE.match(cleaned)
        if not m:
            continue
        fields.append(Member(name=m.group(1), type=m.group(2).strip()))
    return fields


def _literal_of(remainder: str) -> str | None:
    """Right-hand side of ``= value`` if present, else the bare remainder."""
    _, eq, rhs = remainder.partition("=")
    value = rhs if eq else remainder
    return value.strip() or None


def parse_grouped_members(
    block_text: str,
    first_line: int,
) -> list[tuple[str, str, str | None, int]]:
    """Parse members of a ``const (`` / ``var (`` block.

    Returns ``(name, signature, literal, line_number)`` tuples; the opening
    and closing lines are excluded by position.  *first_line* is the
    1-based line number of the opening line.
    """
    lines = block_text.split("\n")
    members: list[tuple[str, str, str | None, int]] = []
    for index in range(1, len(lines) - 1):
        line = _TRAILING_COMMENT_RE.sub("", lines[index]).strip()
        if not line:
            continue
        m = _GROUPED_MEMBER_RE.match(line)
        if not m:
            continue
        members.append((m.group(1), line, _literal_of(m.group(2)), first_line + index))
    return members


# ── Scanner ───────────────────────────────────────────────────────────────────

class DeclarationScanner:
    """Extract exported top-level declarations from Go source text.

    Usage::

        scanner = DeclarationScanner()
        decls = scanner.scan_file(root / "types/events.go", root)
    """

    def __init__(self, max_signature_lines: int = 12) -> None:
        self._max_signature_lines = max_signature_lines

    def scan_file(self, file_path: Path, root: Path) -> list[Declaration]:
        """Read and scan one file.  OSError propagates to the caller."""
        content = file_path.read_text(encoding="utf-8", errors="replace")
        rel = relative_path(root, file_path)
        return self.scan(content, rel, module_of(rel))

    def scan(self, content: str, source_file: str, module: str) -> list[Declaration]:
        """Return the declarations found in *content*, in source order."""
        lines = _LINE_SPLIT_RE.split(content)
        results: list[Declaration] = []

        index = 0
        while index < len(lines):
            line = lines[index].strip()
            if line:
                index = self._scan_line(lines, index, line, source_file, module, results)
            index += 1

        logger.debug("Scanned %s: %d declarations", source_file, len(results))
        return results

    def _scan_line(
        self,
        lines: list[str],
        index: int,
        line: str,
        source_file: str,
        module: str,
        out: list[Declaration],
    ) -> int:
        """Match one trimmed line; return the index of the last consumed line."""

        def emit(
            name: str,
            kind: DeclarationKind,
            signature: str,
            *,
            line_number: int | None = None,
            full_block: str | None = None,
            members: tuple[Member, ...] = (),
            literal_value: str | None = None,
        ) -> None:
            out.append(Declaration(
                name=name,
                kind=kind,
                source_file=source_file,
                module=module,
                signature=signature,
                line_number=line_number or index + 1,
                full_block=full_block,
                members=members,
                documentation=extract_doc_above(lines, index),
                literal_value=literal_value,
            ))

        m = match_contract(line)
        if m:
            block = capture_braced_block(lines, index)
            emit(
                m.group(1), DeclarationKind.CONTRACT, _first_line(block.text),
                full_block=block.text,
                members=tuple(parse_contract_methods(block.text)),
            )
            return block.end_line

        m = match_record(line)
        if m:
            block = capture_braced_block(lines, index)
            emit(
                m.group(1), DeclarationKind.RECORD, _first_line(block.text),
                full_block=block.text,
                members=tuple(parse_record_fields(block.text)),
            )
            return block.end_line

        m = match_alias(line)
        if m:
            emit(m.group(1), DeclarationKind.ALIAS, line, literal_value=m.group(3).strip())
            return index

        m = match_method(line)
        if m:
            signature = capture_signature(lines, index, self._max_signature_lines)
            emit(m.group(2), DeclarationKind.METHOD, signature)
            return index

        m = match_function(line)
        if m:
            signature = capture_signature(lines, index, self._max_signature_lines)
            emit(m.group(1), DeclarationKind.FUNCTION, signature)
            return index

        for matcher, kind in (
            (match_const_block, DeclarationKind.CONSTANT),
            (match_var_block, DeclarationKind.VARIABLE),
        ):
            if matcher(line):
                block = capture_paren_block(lines, index)
                for name, signature, literal, line_number in parse_grouped_members(
                    block.text, index + 1,
                ):
                    if not is_exported(name):
                        continue
                    emit(
                        name, kind, signature,
                        literal_value=literal, line_number=line_number,
                    )
                return block.end_line

        for matcher, kind in (
            (match_single_const, DeclarationKind.CONSTANT),
            (match_single_var, DeclarationKind.VARIABLE),
        ):
            m = matcher(line)
            if m:
                emit(m.group(1), kind, line, literal_value=_literal_of(m.group(2)))
                return index

        return index


def _first_line(text: str) -> str:
    return text.split("\n")[0].strip()
