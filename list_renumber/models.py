"""Data models for list-renumber."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


@dataclass(frozen=True)
class ListItem:
    """A line that starts with a numbered-list marker.

    Attributes:
        indent_width: Number of leading space or tab characters.
        ordinal: Integer value of the marker (``3`` in ``"3. text"``).
        content_offset: Index just past the marker and its trailing space.
        delimiter: Character that followed the digits (``"."`` by default).
    """

    indent_width: int
    ordinal: int
    content_offset: int
    delimiter: str = "."


@dataclass(frozen=True)
class PlainLine:
    """A line without a numbered-list marker.

    Attributes:
        indent_width: Number of leading space or tab characters.
        content_offset: Where the content begins, always equal to `indent_width`.
    """

    indent_width: int
    content_offset: int


@dataclass(frozen=True)
class EndOfBuffer:
    """Marker returned when reading past the last line of a buffer."""

    line: int


LineInfo = Union[ListItem, PlainLine]
ScannedLine = Union[ListItem, PlainLine, EndOfBuffer]


@dataclass(frozen=True)
class Edit:
    """A full-line replacement.

    Attributes:
        line: Zero-based index of the line to replace.
        old_text: Text the line is expected to hold before the edit.
        new_text: Replacement text.
    """

    line: int
    old_text: str
    new_text: str


@dataclass
class ScanResult:
    """Edits produced by one scan and the last list line it visited."""

    edits: list[Edit] = field(default_factory=list)
    end_line: int | None = None


class ScanMode(Enum):
    """Termination policy for a scan.

    Attributes:
        LOCAL: Stop at the first line that already carries its expected number.
        FULL: Continue to the end of the contiguous list.
    """

    LOCAL = auto()
    FULL = auto()


@dataclass(frozen=True)
class CodeFence:
    """The opening fence of a fenced code block.

    Attributes:
        char: Fence character, a backtick or a tilde.
        length: Number of fence characters on the opening line.
        indent_columns: Indentation width preceding the opening fence.
    """

    char: str
    length: int
    indent_columns: int = 0
