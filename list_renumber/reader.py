"""Reading documents into text buffers."""

from __future__ import annotations

from pathlib import Path

from .buffer import TextBuffer
from .config import ConfigError, RenumberConfig, validate_config
from .exceptions import LineTooLongError
from .filesystem import open_document


class ReadFileError(Exception):
    """Raised when reading a document file fails."""


def read_document(content: str, max_line_length: int | None = None) -> TextBuffer:
    """Load document text into a `TextBuffer`.

    Args:
        content: Full document text.
        max_line_length: Maximum allowed line length, excluding line endings.
            No limit is enforced when omitted.

    Returns:
        TextBuffer: Buffer holding the document lines.

    Raises:
        LineTooLongError: If a line exceeds `max_line_length`.

    Examples:
        read_document("1. a\\n3. b\\n", max_line_length=80)
    """
    buffer = TextBuffer.from_text(content)
    if max_line_length is not None:
        for line_number, line in enumerate(buffer.lines):
            if len(line) > max_line_length:
                raise LineTooLongError(line_number + 1, max_line_length)
    return buffer


def read_file(
    filepath: Path,
    max_line_length: int | None = None,
    config: RenumberConfig | None = None,
) -> TextBuffer:
    """Read a document file into a `TextBuffer`.

    Args:
        filepath: Path to the document.
        max_line_length: Optional override for the maximum allowed line length.
        config: Configuration providing the default line-length limit.

    Returns:
        TextBuffer: Buffer holding the file's lines.

    Raises:
        ReadFileError: If configuration is invalid, a line is too long, or the
            file cannot be read or decoded.

    Examples:
        buffer = read_file(Path("README.md"), 120, config)
    """
    config = config or RenumberConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ReadFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ReadFileError("`max_line_length` override must be a positive integer")

    try:
        with open_document(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ReadFileError(error_message) from error
    except IOError as error:
        raise ReadFileError(str(error)) from error

    try:
        return read_document(content, effective_max_line_length)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ReadFileError(error_message) from error
