"""Per-level numbering state used while scanning a list."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable


class IndentStack:
    """Last ordinal assigned at each open nesting level of the current scan.

    Levels are keyed by indentation, but stored contiguously: the outermost
    open indent is depth 0 and every deeper indent seen since opens the next
    depth, however many columns deeper it sits. An item at a shallower indent
    closes every level nested inside it, so a later nested list starts its own
    numbering from whatever its first item declares.

    Examples:
        stack = IndentStack()
        stack.record_line(0, 1)
        stack.record_line(4, 5)
        stack.depth_of(4)  # 1
        stack.record_line(0, 2)
        stack.values()  # (2,)
    """

    def __init__(self) -> None:
        self._indents: list[int] = []
        self._values: list[int] = []

    @classmethod
    def replay(cls, entries: Iterable[tuple[int, int]]) -> IndentStack:
        """Build a stack by recording ``(indent, ordinal)`` pairs in order."""
        stack = cls()
        for indent, ordinal in entries:
            stack.record_line(indent, ordinal)
        return stack

    def depth_of(self, indent: int) -> int:
        """Depth an item at `indent` occupies, opening a new level if needed."""
        return bisect_left(self._indents, indent)

    def value_at(self, indent: int) -> int | None:
        depth = self.depth_of(indent)
        if depth < len(self._indents) and self._indents[depth] == indent:
            return self._values[depth]
        return None

    def height(self) -> int:
        return len(self._values)

    def indents(self) -> tuple[int, ...]:
        return tuple(self._indents)

    def values(self) -> tuple[int, ...]:
        return tuple(self._values)

    def set_initial_value(self, value: int, indent: int = 0) -> None:
        """Seed the outermost level so the next item there continues after `value`.

        `indent` names the outermost level when the stack is still empty.
        """
        if self._values:
            self._values[0] = value
        else:
            self._indents.append(indent)
            self._values.append(value)

    def record_line(self, indent: int, ordinal: int) -> None:
        """Record `ordinal` as the latest value seen at `indent`.

        Levels nested deeper than `indent` are closed. An indent that matches
        no open level, including one between two open levels, opens a new
        level directly below the deepest shallower one.
        """
        depth = self.depth_of(indent)
        if depth < len(self._indents) and self._indents[depth] == indent:
            del self._indents[depth + 1 :]
            del self._values[depth + 1 :]
            self._values[depth] = ordinal
            return

        del self._indents[depth:]
        del self._values[depth:]
        self._indents.append(indent)
        self._values.append(ordinal)
