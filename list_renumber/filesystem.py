"""Locating, guarding and rewriting the documents list-renumber edits in place."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .buffer import TextBuffer
from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_MAX_LINE_LENGTH, DOCUMENT_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "LIST_RENUMBER_MAX_FILE_SIZE"
MAX_LINE_LENGTH_ENV_VAR = "LIST_RENUMBER_MAX_LINE_LENGTH"


def _limit_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        limit = int(raw)
    except ValueError as error:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}.") from error
    if limit <= 0:
        raise ValueError(f"{name} must be a positive integer, got {limit}.")
    return limit


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Byte limit for a document, from `LIST_RENUMBER_MAX_FILE_SIZE` or `default`.

    Raises:
        ValueError: If the environment value is not a positive integer.
    """
    return _limit_from_env(MAX_FILE_SIZE_ENV_VAR, default)


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Character limit per line, from `LIST_RENUMBER_MAX_LINE_LENGTH` or `default`."""
    return _limit_from_env(MAX_LINE_LENGTH_ENV_VAR, default)


def contains_symlink(path: Path) -> bool:
    """Whether `path` or any directory above it is a symlink."""
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def resolve_document(raw_path: str, base_dir: Path) -> Path:
    """Turn a user-supplied path into the absolute path of an editable document.

    Args:
        raw_path: Path given on the command line, absolute or relative.
        base_dir: Working directory the document must live under.

    Returns:
        Path: The resolved document path.

    Raises:
        ValueError: If the path traverses a symlink, is missing, is not a
            regular file, lies outside `base_dir`, or has an extension that
            is not a text document.

    Examples:
        resolve_document("docs/steps.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()
    if contains_symlink(path):
        raise ValueError(f"Refusing to follow symlinks: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")
    if resolved.suffix.lower() not in DOCUMENT_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a supported text document "
            f"(expected one of {', '.join(DOCUMENT_EXTENSIONS)})."
        )
    return resolved


@dataclass(frozen=True)
class DocumentSnapshot:
    """File metadata taken before a document is read.

    The same snapshot guards the rewrite: the file must still match it, and
    the replacement inherits its mode, owner and access time.

    Attributes:
        path: Document the snapshot describes.
        size: Size in bytes.
        mtime_ns: Modification time in nanoseconds.
        atime_ns: Access time in nanoseconds.
        mode: Permission bits.
        inode: Inode number, when the platform reports one.
        device: Device number, when the platform reports one.
        uid: Owning user, when the platform reports one.
        gid: Owning group, when the platform reports one.
    """

    path: Path
    size: int
    mtime_ns: int
    atime_ns: int
    mode: int
    inode: int | None = None
    device: int | None = None
    uid: int | None = None
    gid: int | None = None

    @classmethod
    def capture(cls, path: Path) -> DocumentSnapshot:
        """Snapshot `path` without following symlinks.

        Raises:
            IOError: If the path is inaccessible, a symlink, or not a regular file.
        """
        try:
            info = os.stat(path, follow_symlinks=False)
        except OSError as error:
            raise IOError(f"Error accessing {path}: {error}") from error

        if stat.S_ISLNK(info.st_mode):
            raise IOError(f"Refusing to follow symlinks: {path}")
        if not stat.S_ISREG(info.st_mode):
            raise IOError(f"{path} is not a regular file.")

        return cls(
            path=path,
            size=info.st_size,
            mtime_ns=info.st_mtime_ns,
            atime_ns=info.st_atime_ns,
            mode=stat.S_IMODE(info.st_mode),
            inode=getattr(info, "st_ino", None),
            device=getattr(info, "st_dev", None),
            uid=getattr(info, "st_uid", None),
            gid=getattr(info, "st_gid", None),
        )

    def fingerprint(self) -> tuple[int | None, int | None, int, int]:
        # Reading a file moves only its atime, so it is left out
        return (self.inode, self.device, self.size, self.mtime_ns)

    def check_size(self, max_size: int) -> None:
        """Raise `IOError` when the document is larger than `max_size` bytes."""
        if self.size > max_size:
            raise IOError(f"{self.path} exceeds the maximum allowed size of {max_size} bytes.")

    def ensure_unchanged(self) -> None:
        """Raise `IOError` if the document on disk no longer matches this snapshot."""
        current = DocumentSnapshot.capture(self.path)
        if current.fingerprint() != self.fingerprint():
            raise IOError(f"{self.path} changed during processing; refusing to overwrite.")


def open_document(path: Path) -> TextIO:
    """Open `path` as UTF-8 text with line endings passed through untranslated.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with open_document(Path("steps.md")) as handle:
            text = handle.read()
    """
    try:
        return open(path, "r", encoding="UTF-8", newline="")
    except (FileNotFoundError, PermissionError, IsADirectoryError, NotADirectoryError) as error:
        raise IOError(f"Error accessing {path}: {error}") from error


def write_buffer(
    buffer: TextBuffer,
    snapshot: DocumentSnapshot,
    warn: Callable[[str], None] | None = None,
) -> None:
    """Atomically replace the snapshotted document with the contents of `buffer`.

    Each line is written back with the terminator it was read with. The file
    keeps the permissions and access time recorded in `snapshot`, and its
    owner where the process is allowed to set it.

    Args:
        buffer: Renumbered document.
        snapshot: Metadata captured before the document was read.
        warn: Optional callback for non-fatal problems.

    Raises:
        IOError: If the document changed since `snapshot` was taken or the
            replacement cannot be written.

    Examples:
        snapshot = DocumentSnapshot.capture(path)
        buffer = read_file(path)
        renumber_range(buffer, 0, buffer.last_line())
        write_buffer(buffer, snapshot)
    """
    snapshot.ensure_unchanged()
    path = snapshot.path

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", newline="", delete=False, dir=path.parent
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(buffer.to_text())
            handle.flush()
            os.fsync(handle.fileno())
            os.chmod(temp_path, snapshot.mode)

            if snapshot.uid is not None and snapshot.gid is not None and hasattr(os, "chown"):
                try:
                    os.chown(temp_path, snapshot.uid, snapshot.gid)
                except PermissionError:
                    if warn is not None:
                        warn(f"Warning: could not keep the owner of {path.name}.")

        os.replace(temp_path, path)
        os.utime(path, ns=(snapshot.atime_ns, path.stat().st_mtime_ns))
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
