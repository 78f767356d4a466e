"""Directory compare session and file-level synchronization."""

import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from tqdm import tqdm

from .compare import CompareSnapshot, compare_listings
from .fileio import CopyError, list_directory, safe_copy
from .models import PARENT_DIR, CompareStatus, FileEntry, Side, SyncDirection


@dataclass
class SyncResult:
    """Counters and errors accumulated over one sync batch."""
    left_to_right: int = 0
    right_to_left: int = 0
    newer_copied: int = 0
    errors: list[CopyError] = field(default_factory=list)

    @property
    def copied(self) -> int:
        return self.left_to_right + self.right_to_left

    @property
    def last_error(self) -> Optional[CopyError]:
        return self.errors[-1] if self.errors else None


class CompareSession:
    """
    The single active comparison between two directories.

    The snapshot is rebuilt from fresh listings after every sync, never
    patched in place.
    """

    def __init__(
        self,
        left_dir,
        right_dir,
        progress: bool = False,
        on_status: Optional[Callable[[str], None]] = None
    ):
        self.left_dir = str(left_dir)
        self.right_dir = str(right_dir)
        self.progress = progress
        self.on_status = on_status
        self.status = ""
        self.active = False
        self.left_entries: list[FileEntry] = []
        self.right_entries: list[FileEntry] = []
        self.snapshot: Optional[CompareSnapshot] = None

    def _set_status(self, message: str) -> None:
        self.status = message
        if self.on_status:
            self.on_status(message)

    def directory(self, side: Side) -> str:
        return self.left_dir if side is Side.LEFT else self.right_dir

    def entries(self, side: Side) -> list[FileEntry]:
        return self.left_entries if side is Side.LEFT else self.right_entries

    def rebuild(self) -> CompareSnapshot:
        """List both directories again and classify from scratch."""
        self.left_entries = list_directory(self.left_dir)
        self.right_entries = list_directory(self.right_dir)
        self.snapshot = compare_listings(
            self.left_entries, self.right_entries,
            left_dir=self.left_dir, right_dir=self.right_dir
        )
        return self.snapshot

    def enter(self) -> CompareSnapshot:
        snapshot = self.rebuild()
        self.active = True
        self._set_status(snapshot.summary())
        return snapshot

    def exit(self) -> None:
        self.active = False
        self.snapshot = None
        self.left_entries = []
        self.right_entries = []
        self._set_status("Compare mode exited")

    # Selection

    def toggle_selection(self, side: Side, name: str) -> bool:
        """Flip the selection mark of a named entry; returns the new mark."""
        for entry in self.entries(side):
            if entry.name == name and not entry.is_parent:
                entry.selected = not entry.selected
                return entry.selected
        return False

    def select(self, side: Side, name: str) -> bool:
        """Mark a named entry as selected; returns False if no such entry."""
        for entry in self.entries(side):
            if entry.name == name and not entry.is_parent:
                entry.selected = True
                return True
        return False

    def selected_names(self, side: Side) -> list[str]:
        return [e.name for e in self.entries(side) if e.selected and not e.is_parent]

    def clear_selection(self, side: Side) -> None:
        for entry in self.entries(side):
            entry.selected = False

    # Sync

    def _copy(self, name: str, src: str, dst_dir: str, result: SyncResult) -> bool:
        error = safe_copy(src, os.path.join(dst_dir, name), name)
        if error:
            result.errors.append(error)
            return False
        return True

    def _targets(self, direction: SyncDirection, highlighted: Optional[str]) -> list[str]:
        source = Side.LEFT if direction is SyncDirection.LEFT_TO_RIGHT else Side.RIGHT
        names = self.selected_names(source)
        if not names and highlighted and highlighted != PARENT_DIR:
            names = [highlighted]

        allowed = (direction.source_status, CompareStatus.DIFFERENT)
        targets = []
        for name in names:
            entry = self.snapshot.get(name)
            if entry is not None and entry.status in allowed:
                targets.append(name)
        return targets

    def sync_one_direction(self, direction: SyncDirection,
                           highlighted: Optional[str] = None) -> SyncResult:
        """
        Copy the selected entries, or the highlighted one, to the other side.

        Only entries whose status allows the direction are copied. Failures
        are collected and the batch carries on.
        """
        result = SyncResult()
        if not self.active:
            self._set_status("Not in compare mode")
            return result

        source = Side.LEFT if direction is SyncDirection.LEFT_TO_RIGHT else Side.RIGHT
        targets = self._targets(direction, highlighted)
        if not targets:
            wanted = direction.source_status.value
            self._set_status(f"No files to sync (select {wanted} or different files)")
            return result

        dst_dir = self.directory(source.other)
        copied = 0
        for name in tqdm(targets, desc="Syncing", unit="file", disable=not self.progress):
            entry = self.snapshot[name]
            src = entry.left if source is Side.LEFT else entry.right
            if self._copy(name, src.path, dst_dir, result):
                copied += 1

        if source is Side.LEFT:
            result.left_to_right = copied
        else:
            result.right_to_left = copied

        if result.last_error:
            self._set_status(
                f"Synced {copied} file(s) {direction.arrow}, last error: {result.last_error}"
            )
        else:
            self._set_status(f"Synced {copied} file(s) {direction.arrow}")

        self.clear_selection(source)
        self.rebuild()
        return result

    def sync_both_ways(self) -> SyncResult:
        """
        Bring both directories into agreement.

        One-sided entries are copied across; differing files are resolved
        by copying the newer modification time over the older.
        """
        result = SyncResult()
        if not self.active:
            self._set_status("Not in compare mode")
            return result

        for name in tqdm(self.snapshot.names(), desc="Syncing", unit="file", disable=not self.progress):
            entry = self.snapshot[name]

            if entry.status is CompareStatus.LEFT_ONLY:
                if self._copy(name, entry.left.path, self.right_dir, result):
                    result.left_to_right += 1

            elif entry.status is CompareStatus.RIGHT_ONLY:
                if self._copy(name, entry.right.path, self.left_dir, result):
                    result.right_to_left += 1

            elif entry.status is CompareStatus.DIFFERENT:
                if entry.left.is_dir or entry.right.is_dir:
                    continue
                if entry.left.mod_time > entry.right.mod_time:
                    if self._copy(name, entry.left.path, self.right_dir, result):
                        result.left_to_right += 1
                        result.newer_copied += 1
                elif entry.right.mod_time > entry.left.mod_time:
                    if self._copy(name, entry.right.path, self.left_dir, result):
                        result.right_to_left += 1
                        result.newer_copied += 1

        message = (
            f"Synced both ways: {result.left_to_right} left→right, "
            f"{result.right_to_left} right→left, {result.newer_copied} newer copied"
        )
        if result.last_error:
            message += f" | Error: {result.last_error}"
        self._set_status(message)

        self.rebuild()
        return result
