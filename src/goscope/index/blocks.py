"""Delimiter-balanced block capture over a list of source lines.

Truncated input never raises: an unbalanced block is captured through the
last line.
"""

from __future__ import annotations

from typing import NamedTuple


class BlockCapture(NamedTuple):
    """Captured text and the index of its last line."""

    text: str
    end_line: int


def capture_balanced(
    lines: list[str],
    start_line: int,
    open_char: str,
    close_char: str,
) -> BlockCapture:
    """Consume lines from *start_line* until the delimiter balance returns to zero.

    Closing delimiters seen before the first opening one cannot end the
    block.
    """
    balance = 0
    started = False
    chunk: list[str] = []

    for index in range(start_line, len(lines)):
        line = lines[index]
        chunk.append(line)
        for char in line:
            if char == open_char:
                balance += 1
                started = True
            elif char == close_char:
                balance -= 1
        if started and balance == 0:
            return BlockCapture("\n".join(chunk), index)

    return BlockCapture("\n".join(chunk), len(lines) - 1)


def capture_braced_block(lines: list[str], start_line: int) -> BlockCapture:
    return capture_balanced(lines, start_line, "{", "}")


def capture_paren_block(lines: list[str], start_line: int) -> BlockCapture:
    return capture_balanced(lines, start_line, "(", ")")


def capture_signature(
    lines: list[str],
    start_line: int,
    max_lines: int = 12,
) -> str:
    """Join a possibly multi-line function header into one line.

    Stops after the line that opens the body, after a line that closes the
    parameter list, or once *max_lines* lines have been consumed.
    """
    chunk: list[str] = []
    balance = 0

    for index in range(start_line, len(lines)):
        line = lines[index]
        chunk.append(line.strip())
        balance += line.count("(") - line.count(")")

        if "{" in line:
            break
        if balance <= 0 and line.strip().endswith(")"):
            break
        if index - start_line + 1 >= max_lines:
            break

    return " ".join(chunk)
