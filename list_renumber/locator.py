"""Locating the first line of a contiguous numbered-list block."""

from __future__ import annotations

from .buffer import LineBuffer
from .classifier import classify
from .constants import DEFAULT_DELIMITERS
from .models import ListItem


def locate_start(
    buffer: LineBuffer, from_line: int, delimiters: str = DEFAULT_DELIMITERS
) -> int | None:
    """Find the top of the numbered-list block containing `from_line`.

    Walks backward while the previous line is also a numbered item, whatever
    its indentation, so nested items resolve to the start of their outer list.

    Args:
        buffer: Buffer to read lines from.
        from_line: Zero-based index of the line to start from.
        delimiters: Characters accepted after list numbers.

    Returns:
        int | None: Index of the block's first line (`from_line` itself when
            nothing above continues it), or None when `from_line` is not a
            numbered item.

    Examples:
        locate_start(TextBuffer(["text", "1. a", "2. b"]), 2)  # 1
    """
    if not isinstance(classify(buffer.get_line(from_line), delimiters), ListItem):
        return None

    start = from_line
    while start > 0 and isinstance(classify(buffer.get_line(start - 1), delimiters), ListItem):
        start -= 1
    return start


def items_above(
    buffer: LineBuffer, line: int, delimiters: str = DEFAULT_DELIMITERS
) -> list[ListItem]:
    """Return the numbered items directly above `line`, top-most first."""
    items: list[ListItem] = []
    index = line - 1
    while index >= 0:
        info = classify(buffer.get_line(index), delimiters)
        if not isinstance(info, ListItem):
            break
        items.append(info)
        index -= 1
    items.reverse()
    return items
