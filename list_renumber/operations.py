"""Public renumbering entry points built on the scanning engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .buffer import EditableBuffer, LineBuffer
from .classifier import classify
from .config import RenumberConfig
from .engine import scan
from .fences import unfenced_ranges
from .locator import locate_start
from .models import Edit, ListItem, ScanMode, ScanResult

logger = logging.getLogger(__name__)


def apply_edits(buffer: EditableBuffer, edits: Sequence[Edit]) -> bool:
    """Apply `edits` to `buffer` as one batch.

    Returns:
        bool: True when the batch held at least one edit and was applied.

    Raises:
        EditConflictError: If the buffer rejects the batch; nothing is applied.
    """
    if not edits:
        return False
    buffer.apply_edit_batch(list(edits))
    logger.debug("applied %d edit(s)", len(edits))
    return True


def plan_at_cursor(
    buffer: LineBuffer, line: int, config: RenumberConfig | None = None
) -> ScanResult:
    """Compute the local fix-up for the list containing `line` without applying it.

    Returns:
        ScanResult: Edits for the list, with `end_line` set to None when `line`
            is not part of a numbered list.
    """
    config = config or RenumberConfig()
    start = locate_start(buffer, line, config.delimiters)
    if start is None:
        return ScanResult(edits=[], end_line=None)

    return scan(
        buffer,
        start,
        ScanMode.LOCAL,
        delimiters=config.delimiters,
        indent_size=config.indent_size,
    )


def renumber_at_cursor(
    buffer: EditableBuffer, line: int, config: RenumberConfig | None = None
) -> bool:
    """Renumber the list containing the cursor line.

    Resolves the start of the list that contains `line`, scans it in local
    mode, and applies the resulting edits in one batch.

    Args:
        buffer: Buffer to read and update.
        line: Zero-based index of the top line of the current selection.
        config: Marker and nesting settings; defaults to `RenumberConfig()`.

    Returns:
        bool: True when any line changed.

    Examples:
        buffer = TextBuffer(["1. a", "3. b"])
        renumber_at_cursor(buffer, 0)  # True; buffer.lines == ("1. a", "2. b")
    """
    return apply_edits(buffer, plan_at_cursor(buffer, line, config).edits)


def collect_range_edits(
    buffer: LineBuffer, start: int, end: int, config: RenumberConfig | None = None
) -> list[Edit]:
    """Compute full-block edits for every list touching ``[start, end]``.

    Each block is scanned once; the walk skips past a block as soon as it has
    been renumbered. Blocks that begin above `start` are renumbered from their
    true first line.

    Args:
        buffer: Buffer to read lines from.
        start: Zero-based first line of the range.
        end: Zero-based last line of the range, clamped to the buffer.
        config: Marker and nesting settings.

    Returns:
        list[Edit]: Edits addressed by original line index, in line order.
    """
    config = config or RenumberConfig()
    edits: list[Edit] = []
    line = max(start, 0)
    end = min(end, buffer.last_line())

    while line <= end:
        if isinstance(classify(buffer.get_line(line), config.delimiters), ListItem):
            block_start = locate_start(buffer, line, config.delimiters)
            if block_start is not None:
                result = scan(
                    buffer,
                    block_start,
                    ScanMode.FULL,
                    delimiters=config.delimiters,
                    indent_size=config.indent_size,
                )
                edits.extend(result.edits)
                if result.end_line is not None:
                    line = max(line, result.end_line)
        line += 1

    return edits


def renumber_range(
    buffer: EditableBuffer, start: int, end: int, config: RenumberConfig | None = None
) -> bool:
    """Renumber every list touching ``[start, end]`` and apply the edits at once.

    Returns:
        bool: True when any line changed.

    Examples:
        buffer = TextBuffer(["1. a", "1. b", "", "4. c", "9. d"])
        renumber_range(buffer, 0, 4)  # buffer.lines[1] == "2. b", [4] == "5. d"
    """
    edits = collect_range_edits(buffer, start, end, config)
    logger.debug("range %d-%d produced %d edit(s)", start, end, len(edits))
    return apply_edits(buffer, edits)


def collect_document_edits(
    buffer: LineBuffer, config: RenumberConfig | None = None
) -> list[Edit]:
    """Compute edits for every list in the buffer.

    Fenced code blocks are skipped when `config.skip_code_blocks` is set.
    """
    config = config or RenumberConfig()
    last_line = buffer.last_line()
    if not config.skip_code_blocks:
        return collect_range_edits(buffer, 0, last_line, config)

    lines = [buffer.get_line(index) for index in range(last_line + 1)]
    edits: list[Edit] = []
    for first, last in unfenced_ranges(lines):
        edits.extend(collect_range_edits(buffer, first, last, config))
    return edits
