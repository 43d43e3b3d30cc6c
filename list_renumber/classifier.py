"""Classification of single lines into numbered-list items and plain text."""

from __future__ import annotations

import re
from functools import cache

from .constants import DEFAULT_DELIMITERS, LIST_ITEM_PATTERN
from .models import LineInfo, ListItem, PlainLine


@cache
def _marker_pattern(delimiters: str) -> re.Pattern[str]:
    if delimiters == DEFAULT_DELIMITERS:
        return LIST_ITEM_PATTERN
    delimiter_class = "".join(re.escape(char) for char in delimiters)
    return re.compile(
        rf"^(?P<indent>[ \t]*)(?P<number>[0-9]+)(?P<delimiter>[{delimiter_class}]) "
    )


def leading_whitespace_width(line: str) -> int:
    """Count the leading space and tab characters of a line.

    Every character counts as one, tabs included.

    Examples:
        leading_whitespace_width("\\t\\t1. item")  # 2
    """
    return len(line) - len(line.lstrip(" \t"))


def classify(line: str, delimiters: str = DEFAULT_DELIMITERS) -> LineInfo:
    """Describe a line as a numbered-list item or plain text.

    A line is a list item when it consists of optional leading spaces or tabs,
    one or more ASCII digits, one of `delimiters`, and a single space. Anything
    else, including an empty line, is plain text.

    Args:
        line: Line content without its line terminator.
        delimiters: Characters accepted after the digits.

    Returns:
        LineInfo: `ListItem` with the parsed ordinal and the offset where the
            item's content begins, or `PlainLine` whose content starts right
            after the leading whitespace.

    Examples:
        classify("  3. text")  # ListItem(indent_width=2, ordinal=3, content_offset=5)
        classify("text")  # PlainLine(indent_width=0, content_offset=0)
    """
    match = _marker_pattern(delimiters).match(line)
    if match is None:
        indent_width = leading_whitespace_width(line)
        return PlainLine(indent_width=indent_width, content_offset=indent_width)

    return ListItem(
        indent_width=len(match.group("indent")),
        ordinal=int(match.group("number")),
        content_offset=match.end(),
        delimiter=match.group("delimiter"),
    )


def render_item(line: str, item: ListItem, ordinal: int) -> str:
    """Rewrite the marker of a classified line with a new ordinal.

    Indentation, delimiter, and content are kept as they are.

    Examples:
        render_item("  3. text", classify("  3. text"), 2)  # "  2. text"
    """
    return f"{line[: item.indent_width]}{ordinal}{item.delimiter} {line[item.content_offset :]}"
