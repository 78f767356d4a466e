"""Data models for twinpane."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PARENT_DIR = ".."


class DiffKind(Enum):
    """Classification of a diff block."""
    EQUAL = "equal"
    ADD = "add"
    DELETE = "delete"
    MODIFY = "modify"


class Side(Enum):
    """One of the two panes."""
    LEFT = 0
    RIGHT = 1

    @property
    def other(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class CompareStatus(Enum):
    """Classification of a name across two directory listings."""
    LEFT_ONLY = "left_only"
    RIGHT_ONLY = "right_only"
    DIFFERENT = "different"
    IDENTICAL = "identical"


class SyncDirection(Enum):
    """Direction of a one-way sync."""
    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"

    @property
    def arrow(self) -> str:
        return "left→right" if self is SyncDirection.LEFT_TO_RIGHT else "right→left"

    @property
    def source_status(self) -> CompareStatus:
        if self is SyncDirection.LEFT_TO_RIGHT:
            return CompareStatus.LEFT_ONLY
        return CompareStatus.RIGHT_ONLY


@dataclass
class DiffBlock:
    """
    A classified run relating a left range to a right range.

    Ranges are closed intervals; an empty range has ``end == start - 1``.
    """
    left_start: int
    left_end: int
    right_start: int
    right_end: int
    kind: DiffKind

    @property
    def left_count(self) -> int:
        return self.left_end - self.left_start + 1

    @property
    def right_count(self) -> int:
        return self.right_end - self.right_start + 1


@dataclass
class FileMeta:
    """Metadata captured from one listing entry."""
    size: int
    mod_time: float
    is_dir: bool


@dataclass
class FileEntry:
    """One entry of a single-level directory listing."""
    name: str
    path: str
    is_dir: bool = False
    size: int = 0
    mod_time: float = 0.0
    selected: bool = False

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_DIR

    @property
    def meta(self) -> FileMeta:
        return FileMeta(size=self.size, mod_time=self.mod_time, is_dir=self.is_dir)


@dataclass
class CompareEntry:
    """Classification of one name across both listings."""
    name: str
    status: CompareStatus
    left: Optional[FileEntry] = None
    right: Optional[FileEntry] = None

    @property
    def left_meta(self) -> Optional[FileMeta]:
        return self.left.meta if self.left else None

    @property
    def right_meta(self) -> Optional[FileMeta]:
        return self.right.meta if self.right else None
