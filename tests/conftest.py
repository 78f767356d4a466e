"""Shared test fixtures."""

import os
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _set_mtime(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


@pytest.fixture
def sample_folders(temp_dir):
    """Create a left/right directory pair covering every compare status."""
    left = temp_dir / "left"
    right = temp_dir / "right"
    left.mkdir()
    right.mkdir()

    (left / "only_left.txt").write_text("only on the left")
    (left / "subdir").mkdir()
    (left / "subdir" / "nested.txt").write_text("nested on the left")

    (right / "only_right.txt").write_text("only on the right")

    (left / "same.txt").write_text("same content")
    (right / "same.txt").write_text("same content")
    _set_mtime(left / "same.txt", 1700000000.0)
    _set_mtime(right / "same.txt", 1700000000.0)

    (left / "changed.txt").write_text("newer content on the left")
    (right / "changed.txt").write_text("older right")
    _set_mtime(left / "changed.txt", 1700000500.0)
    _set_mtime(right / "changed.txt", 1700000000.0)

    (left / "shared_dir").mkdir()
    (right / "shared_dir").mkdir()

    return left, right


@pytest.fixture
def text_files(temp_dir):
    """Create two text files that differ on one line."""
    left = temp_dir / "left.txt"
    right = temp_dir / "right.txt"
    left.write_text("a\nb\nc\n")
    right.write_text("a\nx\nc\n")
    return left, right
