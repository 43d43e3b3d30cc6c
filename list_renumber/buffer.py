"""Line-oriented text buffers consumed by the renumbering engine."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from .exceptions import EditConflictError, LineIndexError
from .models import Edit


class LineBuffer(Protocol):
    """Read access the engine needs from a text buffer."""

    def get_line(self, index: int) -> str: ...

    def last_line(self) -> int: ...


class EditableBuffer(LineBuffer, Protocol):
    """A buffer that can also apply a batch of line replacements atomically."""

    def apply_edit_batch(self, edits: Sequence[Edit]) -> None: ...


class TextBuffer:
    """In-memory document stored as a list of lines.

    Line terminators are kept aside so `to_text` reproduces the original
    endings of untouched lines.

    Examples:
        buffer = TextBuffer.from_text("1. a\\n3. b\\n")
        buffer.get_line(1)  # "3. b"
    """

    def __init__(self, lines: Iterable[str] = (), endings: Iterable[str] | None = None):
        self._lines = list(lines) or [""]
        if endings is None:
            self._endings = ["\n"] * (len(self._lines) - 1) + [""]
        else:
            self._endings = list(endings)
        if len(self._endings) != len(self._lines):
            raise ValueError("`endings` must have one entry per line")
        self.version = 0

    @classmethod
    def from_text(cls, text: str) -> TextBuffer:
        """Split `text` into lines, remembering each line's terminator."""
        lines: list[str] = []
        endings: list[str] = []
        for part in text.splitlines(keepends=True):
            content = part.splitlines()[0]
            lines.append(content)
            endings.append(part[len(content) :])
        if not lines:
            return cls()
        return cls(lines, endings)

    def to_text(self) -> str:
        return "".join(line + ending for line, ending in zip(self._lines, self._endings))

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def last_line(self) -> int:
        return len(self._lines) - 1

    def get_line(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            raise LineIndexError(index, len(self._lines))
        return self._lines[index]

    def apply_edit_batch(self, edits: Sequence[Edit]) -> None:
        """Replace the named lines in one all-or-nothing step.

        Every edit is checked against the current content before any line is
        touched, so a failing batch leaves the buffer unchanged.

        Args:
            edits: Full-line replacements addressed by original line index.

        Raises:
            EditConflictError: If an edit targets a missing line, expects text the
                line no longer holds, introduces a line break, or disagrees with
                another edit of the same batch.
        """
        staged: dict[int, str] = {}
        for edit in edits:
            if edit.line < 0 or edit.line >= len(self._lines):
                raise EditConflictError(edit.line, "line is out of bounds")
            if self._lines[edit.line] != edit.old_text:
                raise EditConflictError(edit.line, "line content changed since the edit was made")
            if "\n" in edit.new_text or "\r" in edit.new_text:
                raise EditConflictError(edit.line, "replacement text contains a line break")
            if staged.get(edit.line, edit.new_text) != edit.new_text:
                raise EditConflictError(edit.line, "conflicting edits in the same batch")
            staged[edit.line] = edit.new_text

        if not staged:
            return

        for line, text in staged.items():
            self._lines[line] = text
        self.version += 1
