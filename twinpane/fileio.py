"""Filesystem collaborators: line files, directory listings and copying."""

import errno
import os
import shutil
from pathlib import Path

from .models import PARENT_DIR, FileEntry

# Only the head of a file is inspected by the binary check
TEXT_PROBE_SIZE = 8192


def _long_path(path: Path) -> str:
    """Convert path to long path format on Windows to handle paths > 260 chars."""
    path_str = str(Path(path).resolve())
    if os.name == 'nt' and not path_str.startswith('\\\\?\\'):
        return '\\\\?\\' + path_str
    return path_str


class CopyError:
    """Record of an entry that failed to copy."""

    def __init__(self, name: str, src_path: str, dst_path: str, error: str):
        self.name = name
        self.src_path = src_path
        self.dst_path = dst_path
        self.error = error

    def __str__(self) -> str:
        return self.error


def is_text_content(data: bytes) -> bool:
    """Return False if a NUL byte occurs in the first 8 KiB."""
    return b"\x00" not in data[:TEXT_PROBE_SIZE]


def split_lines(text: str) -> list[str]:
    """
    Split file content into a line buffer.

    A single trailing empty line produced by a trailing newline is dropped,
    and an empty result becomes one empty line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        lines = [""]
    return lines


def join_lines(lines: list[str]) -> str:
    """Serialize a line buffer with exactly one trailing newline."""
    return "\n".join(lines) + "\n"


def read_bytes(path) -> bytes:
    """Read a whole file."""
    with open(_long_path(path), 'rb') as f:
        return f.read()


def decode_lines(data: bytes) -> list[str]:
    """
    Decode raw file content into a line buffer.

    Bytes that are not valid UTF-8 are carried as surrogate escapes so that
    write_lines puts them back unchanged.
    """
    return split_lines(data.decode("utf-8", errors="surrogateescape"))


def write_lines(path, lines: list[str]) -> None:
    """Write a line buffer back to disk."""
    with open(_long_path(path), 'wb') as f:
        f.write(join_lines(lines).encode("utf-8", errors="surrogateescape"))


def _sort_key(entry: FileEntry) -> tuple:
    # parent link first, then directories, then files
    return (not entry.is_parent, not entry.is_dir, entry.name.lower())


def list_directory(path, include_parent: bool = True) -> list[FileEntry]:
    """
    List exactly one directory level.

    Args:
        path: Directory to list
        include_parent: Prepend the ``..`` placeholder unless path is a root

    Returns:
        Entries sorted with directories before files, case-insensitively
    """
    path = Path(path)
    entries = []

    if include_parent:
        parent = path.resolve().parent
        if parent != path.resolve():
            entries.append(FileEntry(name=PARENT_DIR, path=str(parent), is_dir=True))

    with os.scandir(_long_path(path)) as it:
        for item in it:
            try:
                stat = item.stat()
                is_dir = item.is_dir()
            except OSError:
                continue
            entries.append(FileEntry(
                name=item.name,
                path=str(path / item.name),
                is_dir=is_dir,
                size=0 if is_dir else stat.st_size,
                mod_time=stat.st_mtime,
            ))

    entries.sort(key=_sort_key)
    return entries


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file, creating parent directories if needed."""
    dst_long = _long_path(dst)
    dst_parent = os.path.dirname(dst_long)
    os.makedirs(dst_parent, exist_ok=True)
    shutil.copy2(_long_path(src), dst_long)


def copy_file_or_dir(src, dst) -> None:
    """Copy a single file, or a whole directory tree, from src to dst."""
    src = Path(src)
    dst = Path(dst)
    if os.path.isdir(_long_path(src)):
        shutil.copytree(_long_path(src), _long_path(dst), dirs_exist_ok=True)
    else:
        if os.path.isdir(_long_path(dst)):
            raise IsADirectoryError(errno.EISDIR, "Cannot overwrite directory with file", str(dst))
        copy_file(src, dst)


def safe_copy(src, dst, name: str) -> CopyError | None:
    """
    Copy a file or directory safely, returning a CopyError if the copy fails.
    Returns None on success.
    """
    try:
        copy_file_or_dir(src, dst)
        return None
    except (OSError, shutil.Error) as e:
        return CopyError(name, str(src), str(dst), str(e))
