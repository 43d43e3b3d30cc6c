"""Package-specific exception types."""

from __future__ import annotations


class LineIndexError(IndexError):
    """Raised when a buffer line is accessed outside its bounds.

    Args:
        index: Zero-based index that was requested.
        line_count: Number of lines held by the buffer.
    """

    def __init__(self, index: int, line_count: int):
        self.index = index
        self.line_count = line_count
        super().__init__(f"Line {index} is out of bounds (buffer has {line_count} lines)")


class EditConflictError(ValueError):
    """Raised when an edit batch cannot be applied as a whole.

    Nothing from the batch is applied when this is raised.

    Args:
        line: Zero-based line index of the offending edit.
        reason: Human-readable description of the conflict.
    """

    def __init__(self, line: int, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Cannot apply edit to line {line}: {reason}")


class LineTooLongError(ValueError):
    """Raised when a line exceeds the configured maximum length.

    Args:
        line_number: One-based index of the offending line.
        max_line_length: Maximum allowed line length in characters.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} characters"
        )
