"""Tests for twinpane.fileio module."""

import os

import pytest

from twinpane.fileio import (
    CopyError,
    copy_file,
    copy_file_or_dir,
    decode_lines,
    is_text_content,
    join_lines,
    list_directory,
    safe_copy,
    split_lines,
    write_lines,
)


class TestLineSerialization:
    """Tests for split_lines / join_lines and file round trips."""

    @pytest.mark.parametrize("text,expected", [
        ("", [""]),
        ("\n", [""]),
        ("a", ["a"]),
        ("a\n", ["a"]),
        ("a\nb", ["a", "b"]),
        ("a\nb\n\n", ["a", "b", ""]),
    ])
    def test_split_lines(self, text, expected):
        assert split_lines(text) == expected

    def test_join_lines_single_trailing_newline(self):
        assert join_lines(["a", "b"]) == "a\nb\n"
        assert join_lines([""]) == "\n"

    def test_round_trip_normalizes_trailing_newline(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"one\ntwo")
        write_lines(path, decode_lines(path.read_bytes()))
        assert path.read_bytes() == b"one\ntwo\n"

    def test_round_trip_keeps_content(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"one\n\ntwo\n")
        write_lines(path, decode_lines(path.read_bytes()))
        assert path.read_bytes() == b"one\n\ntwo\n"

    def test_round_trip_keeps_invalid_utf8(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"caf\xe9\nna\xefve\n")
        lines = decode_lines(path.read_bytes())
        assert len(lines) == 2
        write_lines(path, lines)
        assert path.read_bytes() == b"caf\xe9\nna\xefve\n"


class TestIsTextContent:
    """Tests for is_text_content function."""

    @pytest.mark.parametrize("data,expected", [
        (b"Hello, World!", True),
        (b"", True),
        (b"Line 1\nLine 2", True),
        (b"\x00\x01\x02", False),
        ("Hello 世界".encode("utf-8"), True),
        (b"x" * 8191 + b"\x00", False),
        (b"x" * 8192 + b"\x00", True),
    ])
    def test_detection(self, data, expected):
        assert is_text_content(data) is expected


class TestListDirectory:
    """Tests for list_directory function."""

    def test_sorted_dirs_first(self, temp_dir):
        (temp_dir / "b.txt").write_text("bb")
        (temp_dir / "A.txt").write_text("a")
        (temp_dir / "zdir").mkdir()
        (temp_dir / "Cdir").mkdir()

        entries = list_directory(temp_dir)
        assert [e.name for e in entries] == ["..", "Cdir", "zdir", "A.txt", "b.txt"]
        assert entries[0].is_parent

    def test_metadata(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_text("12345")
        os.utime(path, (1600000000.0, 1600000000.0))
        (temp_dir / "d").mkdir()

        entries = {e.name: e for e in list_directory(temp_dir, include_parent=False)}
        assert set(entries) == {"f.txt", "d"}
        assert entries["f.txt"].size == 5
        assert entries["f.txt"].mod_time == 1600000000.0
        assert entries["f.txt"].path == str(temp_dir / "f.txt")
        assert entries["d"].is_dir
        assert entries["d"].size == 0

    def test_single_level(self, temp_dir):
        (temp_dir / "d").mkdir()
        (temp_dir / "d" / "inner.txt").write_text("x")
        names = [e.name for e in list_directory(temp_dir, include_parent=False)]
        assert names == ["d"]

    def test_missing_directory_raises(self, temp_dir):
        with pytest.raises(OSError):
            list_directory(temp_dir / "nope")


class TestCopy:
    """Tests for copy helpers."""

    def test_copy_file_creates_parent_dirs(self, temp_dir):
        src = temp_dir / "source.txt"
        dst = temp_dir / "sub" / "nested" / "dest.txt"
        src.write_text("content")
        copy_file(src, dst)
        assert dst.read_text() == "content"

    def test_copy_preserves_mtime(self, temp_dir):
        src = temp_dir / "source.txt"
        dst = temp_dir / "dest.txt"
        src.write_text("content")
        copy_file_or_dir(src, dst)
        assert dst.stat().st_mtime == src.stat().st_mtime

    def test_copy_directory_tree(self, temp_dir):
        src = temp_dir / "tree"
        (src / "a" / "b").mkdir(parents=True)
        (src / "a" / "b" / "leaf.txt").write_text("leaf")
        (src / "top.txt").write_text("top")
        dst = temp_dir / "copy"

        copy_file_or_dir(src, dst)
        assert (dst / "a" / "b" / "leaf.txt").read_text() == "leaf"
        assert (dst / "top.txt").read_text() == "top"

    def test_copy_directory_into_existing(self, temp_dir):
        src = temp_dir / "tree"
        src.mkdir()
        (src / "new.txt").write_text("new")
        dst = temp_dir / "existing"
        dst.mkdir()
        (dst / "old.txt").write_text("old")

        copy_file_or_dir(src, dst)
        assert (dst / "new.txt").exists()
        assert (dst / "old.txt").exists()

    def test_file_over_directory_raises(self, temp_dir):
        src = temp_dir / "x.txt"
        src.write_text("x")
        dst = temp_dir / "target"
        dst.mkdir()
        with pytest.raises(IsADirectoryError):
            copy_file_or_dir(src, dst)
        assert list(dst.iterdir()) == []

    def test_safe_copy_success(self, temp_dir):
        src = temp_dir / "s.txt"
        src.write_text("x")
        assert safe_copy(src, temp_dir / "d.txt", "s.txt") is None

    def test_safe_copy_failure(self, temp_dir):
        error = safe_copy(temp_dir / "missing.txt", temp_dir / "d.txt", "missing.txt")
        assert isinstance(error, CopyError)
        assert error.name == "missing.txt"
        assert error.src_path == str(temp_dir / "missing.txt")
        assert error.error
