"""Single-level directory comparison."""

from collections import Counter
from typing import Iterable, Optional

from .models import CompareEntry, CompareStatus, FileEntry


class CompareSnapshot:
    """Per-name classification of two directory listings."""

    def __init__(self, entries: dict[str, CompareEntry],
                 left_dir: Optional[str] = None, right_dir: Optional[str] = None):
        self.entries = entries
        self.left_dir = left_dir
        self.right_dir = right_dir

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __getitem__(self, name: str) -> CompareEntry:
        return self.entries[name]

    def get(self, name: str) -> Optional[CompareEntry]:
        return self.entries.get(name)

    def names(self) -> list[str]:
        return sorted(self.entries)

    def counts(self) -> dict[CompareStatus, int]:
        tally = Counter(entry.status for entry in self.entries.values())
        return {status: tally.get(status, 0) for status in CompareStatus}

    def summary(self) -> str:
        counts = self.counts()
        return (
            f"Compare: {len(self.entries)} files"
            f" | Left only: {counts[CompareStatus.LEFT_ONLY]}"
            f" | Right only: {counts[CompareStatus.RIGHT_ONLY]}"
            f" | Different: {counts[CompareStatus.DIFFERENT]}"
            f" | Identical: {counts[CompareStatus.IDENTICAL]}"
        )


def classify(left: FileEntry, right: FileEntry) -> CompareStatus:
    """Classify a name present on both sides."""
    if left.is_dir and right.is_dir:
        # directories are compared by name only
        return CompareStatus.IDENTICAL
    if not left.is_dir and not right.is_dir:
        if left.size == right.size and left.mod_time == right.mod_time:
            return CompareStatus.IDENTICAL
        return CompareStatus.DIFFERENT
    return CompareStatus.DIFFERENT


def compare_listings(
    left_entries: Iterable[FileEntry],
    right_entries: Iterable[FileEntry],
    left_dir: Optional[str] = None,
    right_dir: Optional[str] = None
) -> CompareSnapshot:
    """
    Classify every name across two single-level listings.

    The parent-directory placeholder is ignored on both sides.

    Args:
        left_entries: Left pane listing
        right_entries: Right pane listing
        left_dir: Directory the left listing came from
        right_dir: Directory the right listing came from

    Returns:
        A fresh CompareSnapshot
    """
    left_files = {e.name: e for e in left_entries if not e.is_parent}
    right_files = {e.name: e for e in right_entries if not e.is_parent}

    results = {}
    for name, left_file in left_files.items():
        right_file = right_files.get(name)
        if right_file is None:
            results[name] = CompareEntry(name, CompareStatus.LEFT_ONLY, left=left_file)
        else:
            results[name] = CompareEntry(
                name, classify(left_file, right_file), left=left_file, right=right_file
            )

    for name, right_file in right_files.items():
        if name not in left_files:
            results[name] = CompareEntry(name, CompareStatus.RIGHT_ONLY, right=right_file)

    return CompareSnapshot(results, left_dir=left_dir, right_dir=right_dir)
