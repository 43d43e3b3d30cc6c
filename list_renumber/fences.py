"""Finding fenced code blocks so whole-document runs leave them alone."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import CLOSING_FENCE_MAX_INDENT, CODE_FENCE_PATTERN
from .models import CodeFence


def indent_columns(line: str) -> int:
    """Width of the leading whitespace, with tabs stopping every four columns.

    Examples:
        indent_columns("  \\tcode")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
        elif character == "\t":
            columns += 4 - columns % 4
        else:
            break
    return columns


def opening_fence(line: str) -> CodeFence | None:
    """Return the fence `line` opens, or None when it opens nothing.

    Examples:
        opening_fence("```python")  # CodeFence(char="`", length=3)
    """
    match = CODE_FENCE_PATTERN.match(line)
    if match is None:
        return None

    columns = indent_columns(match.group("indent"))
    run = match.group("fence")
    if columns > CLOSING_FENCE_MAX_INDENT:
        return None
    # Backtick fences cannot carry backticks in their info string
    if run[0] == "`" and "`" in match.group("info"):
        return None
    return CodeFence(char=run[0], length=len(run), indent_columns=columns)


def closes_fence(fence: CodeFence, line: str) -> bool:
    """Whether `line` ends the block opened by `fence`.

    The closing run must use the same character, be at least as long as the
    opening run, be indented at most three columns and carry nothing after it.
    """
    if indent_columns(line) > CLOSING_FENCE_MAX_INDENT:
        return False
    body = line.lstrip(" \t")
    run = len(body) - len(body.lstrip(fence.char))
    return run >= fence.length and not body[run:].strip()


def code_fence_ranges(lines: Sequence[str]) -> list[tuple[int, int]]:
    """Find fenced code blocks, including their fence lines.

    An unclosed fence runs to the end of the document.

    Args:
        lines: Document lines without terminators.

    Returns:
        list[tuple[int, int]]: Inclusive zero-based ``(first, last)`` pairs.

    Examples:
        code_fence_ranges(["1. a", "```", "2. b", "```"])  # [(1, 3)]
    """
    ranges: list[tuple[int, int]] = []
    fence: CodeFence | None = None
    opened_at = 0

    for index, line in enumerate(lines):
        if fence is None:
            fence = opening_fence(line)
            opened_at = index
        elif closes_fence(fence, line):
            ranges.append((opened_at, index))
            fence = None

    if fence is not None:
        ranges.append((opened_at, len(lines) - 1))
    return ranges


def unfenced_ranges(lines: Sequence[str]) -> list[tuple[int, int]]:
    """Return the inclusive line spans that lie outside fenced code blocks.

    Examples:
        unfenced_ranges(["1. a", "```", "x", "```", "2. b"])  # [(0, 0), (4, 4)]
    """
    spans: list[tuple[int, int]] = []
    next_start = 0
    for first, last in code_fence_ranges(lines):
        if first > next_start:
            spans.append((next_start, first - 1))
        next_start = last + 1
    if next_start < len(lines):
        spans.append((next_start, len(lines) - 1))
    return spans
