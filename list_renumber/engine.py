"""Scanning numbered lists and generating renumbering edits."""

from __future__ import annotations

import logging

from .buffer import LineBuffer
from .classifier import classify, render_item
from .constants import DEFAULT_DELIMITERS
from .locator import items_above
from .models import Edit, EndOfBuffer, ListItem, PlainLine, ScanMode, ScannedLine, ScanResult
from .stack import IndentStack

logger = logging.getLogger(__name__)


def read_line(
    buffer: LineBuffer, index: int, delimiters: str = DEFAULT_DELIMITERS
) -> ScannedLine:
    """Classify the line at `index`, or report the end of the buffer."""
    if index > buffer.last_line():
        return EndOfBuffer(line=index)
    return classify(buffer.get_line(index), delimiters)


def indent_level(item: ListItem, indent_size: int = 1) -> int:
    return item.indent_width // indent_size


def build_stack(
    buffer: LineBuffer,
    line: int,
    delimiters: str = DEFAULT_DELIMITERS,
    indent_size: int = 1,
) -> IndentStack:
    """Replay the numbered items directly above `line` into a fresh stack."""
    return IndentStack.replay(
        (indent_level(item, indent_size), item.ordinal)
        for item in items_above(buffer, line, delimiters)
    )


def scan(
    buffer: LineBuffer,
    start_line: int,
    mode: ScanMode = ScanMode.LOCAL,
    seed_ordinal: int | None = None,
    *,
    delimiters: str = DEFAULT_DELIMITERS,
    indent_size: int = 1,
) -> ScanResult:
    """Compute the edits that make a numbered list count up without gaps.

    The first line of a sequence cannot be wrong relative to a predecessor it
    does not have, so the scan begins one line later when `start_line` is the
    first line of the buffer, follows a non-list line, or is indented deeper
    than the item above it. Otherwise the scan starts at `start_line` and
    continues the numbering of the items above it.

    Args:
        buffer: Buffer to read lines from; it is never modified.
        start_line: Zero-based index of the line the caller wants fixed.
        mode: `ScanMode.LOCAL` stops at the first item that already carries its
            expected number; `ScanMode.FULL` continues to the end of the list.
        seed_ordinal: When positive, the outermost level continues after this
            value regardless of the items above the scan.
        delimiters: Characters accepted after list numbers.
        indent_size: Whitespace characters per indentation step; widths within one
            step share a nesting level.

    Returns:
        ScanResult: Edits addressed by original line index and the last list
            line visited. A `start_line` that is not a numbered item yields no
            edits and ends where it started.

    Examples:
        scan(TextBuffer(["1. a", "3. b"]), 0).edits  # [Edit(1, "3. b", "2. b")]
    """
    current = read_line(buffer, start_line, delimiters)
    if not isinstance(current, ListItem):
        return ScanResult(edits=[], end_line=start_line)

    if start_line <= 0:
        if start_line == buffer.last_line():
            return ScanResult(edits=[], end_line=start_line)
        return generate_edits(
            buffer,
            start_line + 1,
            mode,
            seed_ordinal,
            delimiters=delimiters,
            indent_size=indent_size,
        )

    previous = classify(buffer.get_line(start_line - 1), delimiters)
    if not isinstance(previous, ListItem) or previous.indent_width < current.indent_width:
        start_line += 1

    return generate_edits(
        buffer,
        start_line,
        mode,
        seed_ordinal,
        delimiters=delimiters,
        indent_size=indent_size,
    )


def generate_edits(
    buffer: LineBuffer,
    line: int,
    mode: ScanMode = ScanMode.FULL,
    seed_ordinal: int | None = None,
    *,
    delimiters: str = DEFAULT_DELIMITERS,
    indent_size: int = 1,
) -> ScanResult:
    """Walk forward from `line` and renumber items that break their sequence.

    The first item seen at a nesting level with no recorded value keeps its
    own number and becomes the baseline for its siblings. A nested list opens
    one level below its parent however far it is indented, so returning to the
    parent's indent resumes the parent's sequence.

    Args:
        buffer: Buffer to read lines from.
        line: Zero-based index where the forward walk begins.
        mode: Termination policy, see `scan`.
        seed_ordinal: Optional positive value for the outermost level.
        delimiters: Characters accepted after list numbers.
        indent_size: Whitespace characters per indentation step; widths within one
            step share a nesting level.

    Returns:
        ScanResult: Accumulated edits and the index of the last list line visited.
    """
    stack = build_stack(buffer, line, delimiters, indent_size)
    if seed_ordinal is not None and seed_ordinal > 0:
        first = read_line(buffer, line, delimiters)
        outer = indent_level(first, indent_size) if isinstance(first, ListItem) else 0
        stack.set_initial_value(seed_ordinal, outer)

    edits: list[Edit] = []
    first_line = True

    while True:
        info = read_line(buffer, line, delimiters)
        if isinstance(info, (EndOfBuffer, PlainLine)):
            break

        text = buffer.get_line(line)
        level = indent_level(info, indent_size)
        logger.debug(
            "line: %d, indent: %d, ordinal: %d, content offset: %d",
            line,
            info.indent_width,
            info.ordinal,
            info.content_offset,
        )

        previous_ordinal = stack.value_at(level)
        expected = None if previous_ordinal is None else previous_ordinal + 1

        if expected is not None and expected != info.ordinal:
            edits.append(Edit(line=line, old_text=text, new_text=render_item(text, info, expected)))
            stack.record_line(level, expected)
        elif expected is not None and mode is ScanMode.LOCAL and not first_line:
            break
        else:
            stack.record_line(level, info.ordinal)

        first_line = False
        line += 1

    return ScanResult(edits=edits, end_line=line - 1)
