"""
Renumbers ordered lists in a text document.
By default every list in the file is fixed in place; `--check` only reports.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import ConfigError, build_config
from .filesystem import (
    DocumentSnapshot,
    get_max_file_size,
    get_max_line_length,
    resolve_document,
    write_buffer,
)
from .operations import apply_edits, collect_document_edits, collect_range_edits, plan_at_cursor
from .reader import ReadFileError, read_file

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="list-renumber")
@click.option(
    "--line",
    type=click.IntRange(min=1),
    help="Renumber the list containing this line (1-based), stopping at the first correct item.",
)
@click.option(
    "--start", type=click.IntRange(min=1), help="First line of the range to renumber (1-based)"
)
@click.option(
    "--end", type=click.IntRange(min=1), help="Last line of the range to renumber (1-based)"
)
@click.option("--delimiters", help="Characters accepted after list numbers (e.g. '.)')")
@click.option("--indent-size", type=int, help="Whitespace characters per nesting level")
@click.option(
    "--check", is_flag=True, help="Report lines that would change and exit 1; write nothing"
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the renumbered document instead of writing it",
)
@click.option("-v", "--verbose", is_flag=True, help="Log each scanned line to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    line: int | None = None,
    start: int | None = None,
    end: int | None = None,
    delimiters: str | None = None,
    indent_size: int | None = None,
    check: bool = False,
    to_stdout: bool = False,
    verbose: bool = False,
):
    """
    Entry point for renumbering the ordered lists of a document.

    Args:
        filepath: Path to the document to process.
        line: One-based line whose list is fixed locally.
        start: One-based first line of a range to renumber.
        end: One-based last line of a range to renumber.
        delimiters: Override for the accepted marker delimiters.
        indent_size: Override for the whitespace width of one nesting level.
        check: Report pending changes instead of writing them.
        to_stdout: Print the result instead of rewriting the file.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths, lines
            outside the document, or invalid configuration values.
        click.ClickException: If reading fails due to limits or malformed
            content, or if filesystem safety checks fail.

    Examples:
        list-renumber steps.md --line 12
        list-renumber notes.md --start 10 --end 40 --check
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if line is not None and (start is not None or end is not None):
        raise click.BadParameter("`--line` cannot be combined with `--start`/`--end`.")

    base_dir = Path.cwd().resolve()
    try:
        path = resolve_document(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(path.parent, delimiters=delimiters, indent_size=indent_size)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        snapshot = DocumentSnapshot.capture(path)
        snapshot.check_size(max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        buffer = read_file(path, max_line_length, config)
    except ReadFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        snapshot.ensure_unchanged()
    except IOError as error:
        raise click.ClickException(str(error)) from error

    line_count = buffer.line_count
    past_end = "Line {} is past the end of the document ({} lines)."
    if line is not None:
        if line > line_count:
            raise click.BadParameter(past_end.format(line, line_count))
        edits = plan_at_cursor(buffer, line - 1, config).edits
    elif start is not None or end is not None:
        first = start or 1
        last = end or line_count
        if first > last:
            raise click.BadParameter(f"Range start {first} is after range end {last}.")
        if first > line_count:
            raise click.BadParameter(past_end.format(first, line_count))
        edits = collect_range_edits(buffer, first - 1, last - 1, config)
    else:
        edits = collect_document_edits(buffer, config)

    logger.info("%s: %d line(s) to renumber", path, len(edits))

    if check:
        for edit in edits:
            click.echo(f"{path.name}:{edit.line + 1}: {edit.old_text} -> {edit.new_text}")
        if edits:
            click.get_current_context().exit(1)
        return

    changed = apply_edits(buffer, edits)

    if to_stdout:
        click.echo(buffer.to_text(), nl=False)
        return

    if changed:
        try:
            write_buffer(buffer, snapshot, warn=lambda message: click.echo(message, err=True))
        except IOError as error:
            raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
