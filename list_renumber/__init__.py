"""
list-renumber: keeps numbered lists in plain-text documents counting correctly.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    list-renumber steps.md
    list-renumber steps.md --line 12

Library Usage:
    from list_renumber import TextBuffer, renumber_at_cursor, renumber_range

    buffer = TextBuffer.from_text("1. a\\n3. b\\n")
    renumber_range(buffer, 0, buffer.last_line())
    text = buffer.to_text()  # "1. a\\n2. b\\n"
"""

from .buffer import EditableBuffer, LineBuffer, TextBuffer
from .classifier import classify
from .config import RenumberConfig
from .engine import scan
from .exceptions import EditConflictError, LineIndexError, LineTooLongError
from .locator import locate_start
from .models import (
    Edit,
    EndOfBuffer,
    LineInfo,
    ListItem,
    PlainLine,
    ScanMode,
    ScannedLine,
    ScanResult,
)
from .operations import (
    apply_edits,
    collect_document_edits,
    collect_range_edits,
    plan_at_cursor,
    renumber_at_cursor,
    renumber_range,
)
from .stack import IndentStack

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "classify",
    "locate_start",
    "scan",
    "IndentStack",
    # Entry points
    "renumber_at_cursor",
    "renumber_range",
    "plan_at_cursor",
    "collect_range_edits",
    "collect_document_edits",
    "apply_edits",
    # Buffers
    "LineBuffer",
    "EditableBuffer",
    "TextBuffer",
    # Data models
    "Edit",
    "EndOfBuffer",
    "LineInfo",
    "ScannedLine",
    "ListItem",
    "PlainLine",
    "ScanMode",
    "ScanResult",
    "RenumberConfig",
    # Exceptions
    "EditConflictError",
    "LineIndexError",
    "LineTooLongError",
    # Version
    "__version__",
]
