"""Side-by-side diff session: open, navigate, merge, edit, save, close."""

from enum import Enum
from typing import Callable, Optional

from .diff import (
    DEFAULT_LOOKAHEAD,
    calculate_diff,
    find_next_difference,
    find_previous_difference,
    splice_block,
)
from .editor import LineEditor
from .fileio import decode_lines, is_text_content, read_bytes, write_lines
from .models import DiffBlock, DiffKind, FileEntry, Side


class SessionState(Enum):
    CLOSED = "closed"
    VIEWING = "viewing"
    EDITING = "editing"


class CloseAction(Enum):
    """Explicit answer to the unsaved-changes prompt."""
    SAVE = "save"
    DISCARD = "discard"
    CANCEL = "cancel"


class CloseResult(Enum):
    CLOSED = "closed"
    WARNED = "warned"
    CANCELLED = "cancelled"


class EditOp(Enum):
    INSERT_CHAR = "insert_char"
    INSERT_TAB = "insert_tab"
    SPLIT_LINE = "split_line"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


_MOTIONS = {
    EditOp.UP: LineEditor.move_up,
    EditOp.DOWN: LineEditor.move_down,
    EditOp.LEFT: LineEditor.move_left,
    EditOp.RIGHT: LineEditor.move_right,
    EditOp.HOME: LineEditor.home,
    EditOp.END: LineEditor.end,
}

_MUTATIONS = {
    EditOp.INSERT_TAB: LineEditor.insert_tab,
    EditOp.SPLIT_LINE: LineEditor.split_line,
    EditOp.BACKSPACE: LineEditor.backspace,
    EditOp.DELETE: LineEditor.delete,
}


class DiffSession:
    """
    The single active diff between two text files.

    Owns both line buffers and the block list derived from them. Every
    outcome is reported as a human-readable string in ``status`` and
    forwarded to ``on_status`` when given.
    """

    def __init__(self, lookahead: int = DEFAULT_LOOKAHEAD,
                 on_status: Optional[Callable[[str], None]] = None):
        self.lookahead = lookahead
        self.on_status = on_status
        self.status = ""
        self._reset()

    def _reset(self) -> None:
        self.state = SessionState.CLOSED
        self.left_path: Optional[str] = None
        self.right_path: Optional[str] = None
        self.left_lines: list[str] = []
        self.right_lines: list[str] = []
        self.blocks: list[DiffBlock] = []
        self.current_index = 0
        self.left_modified = False
        self.right_modified = False
        self.active_side = Side.LEFT
        self.scroll_row = 0
        self._editor: Optional[LineEditor] = None

    def _set_status(self, message: str) -> None:
        self.status = message
        if self.on_status:
            self.on_status(message)

    @property
    def is_open(self) -> bool:
        return self.state is not SessionState.CLOSED

    @property
    def is_modified(self) -> bool:
        return self.left_modified or self.right_modified

    @property
    def current_block(self) -> Optional[DiffBlock]:
        if 0 <= self.current_index < len(self.blocks):
            return self.blocks[self.current_index]
        return None

    @property
    def cursor(self) -> tuple[int, int]:
        if self._editor is None:
            return 0, 0
        return self._editor.row, self._editor.col

    def lines(self, side: Side) -> list[str]:
        return self.left_lines if side is Side.LEFT else self.right_lines

    def _mark_modified(self, side: Side) -> None:
        if side is Side.LEFT:
            self.left_modified = True
        else:
            self.right_modified = True

    def recompute(self) -> None:
        """Re-derive the whole block list from the current buffers."""
        self.blocks = calculate_diff(self.left_lines, self.right_lines, self.lookahead)
        if self.current_index >= len(self.blocks):
            self.current_index = len(self.blocks) - 1

    # Lifecycle

    def open(self, left: Optional[FileEntry], right: Optional[FileEntry]) -> bool:
        """
        Load two files and compute their diff.

        Each failed precondition reports its own reason and leaves the
        session untouched.

        Returns:
            True if the session is now viewing the two files
        """
        if self.is_open:
            self._set_status("A diff session is already open")
            return False
        if left is None or right is None:
            self._set_status("Both panes must have a file selected")
            return False
        if left.is_parent or right.is_parent:
            self._set_status("Cannot diff parent directory link")
            return False
        if left.is_dir or right.is_dir:
            self._set_status("Both selections must be files, not directories")
            return False

        try:
            left_content = read_bytes(left.path)
        except OSError as e:
            self._set_status(f"Error reading left file: {e}")
            return False
        try:
            right_content = read_bytes(right.path)
        except OSError as e:
            self._set_status(f"Error reading right file: {e}")
            return False

        if not is_text_content(left_content) or not is_text_content(right_content):
            self._set_status("Both files must be readable text files")
            return False

        self._reset()
        self.left_path = left.path
        self.right_path = right.path
        self.left_lines = decode_lines(left_content)
        self.right_lines = decode_lines(right_content)
        self.recompute()
        self.state = SessionState.VIEWING
        self._set_status("Diff mode: n:Next p:Prev >:Copy→ <:Copy← e:Edit s:Save q:Exit")
        return True

    def _require_viewing(self) -> bool:
        if self.state is SessionState.VIEWING:
            return True
        if self.state is SessionState.EDITING:
            self._set_status("Not available in edit mode")
        else:
            self._set_status("No diff session open")
        return False

    def save(self) -> int:
        """
        Write every modified side back to disk.

        A failed write keeps its modified flag and the in-memory buffer.

        Returns:
            Number of files saved
        """
        if not self._require_viewing():
            return 0

        saved = 0
        if self.left_modified:
            try:
                write_lines(self.left_path, self.left_lines)
            except OSError as e:
                self._set_status(f"Error saving left file: {e}")
                return saved
            self.left_modified = False
            saved += 1

        if self.right_modified:
            try:
                write_lines(self.right_path, self.right_lines)
            except OSError as e:
                self._set_status(f"Error saving right file: {e}")
                return saved
            self.right_modified = False
            saved += 1

        if saved == 0:
            self._set_status("No changes to save")
        elif saved == 1:
            self._set_status("Saved 1 file")
        else:
            self._set_status("Saved both files")
        return saved

    def close(self, action: Optional[CloseAction] = None) -> CloseResult:
        """
        Leave the diff session.

        Without an action, unsaved changes make the first call warn and clear
        the modified flags, so the following call closes. With an explicit
        action the prompt is answered directly.
        """
        if self.state is SessionState.CLOSED:
            return CloseResult.CLOSED
        if self.state is SessionState.EDITING:
            self._set_status("Exit edit mode first")
            return CloseResult.CANCELLED

        if action is CloseAction.CANCEL:
            self._set_status("Close cancelled")
            return CloseResult.CANCELLED

        if action is CloseAction.SAVE and self.is_modified:
            self.save()
            if self.is_modified:
                return CloseResult.WARNED

        if action is None and self.is_modified:
            self._set_status("Unsaved changes! Press Ctrl+S to save, ESC again to discard")
            self.left_modified = False
            self.right_modified = False
            return CloseResult.WARNED

        self._reset()
        self._set_status("Diff mode exited")
        return CloseResult.CLOSED

    # Navigation

    def _jump(self, found: Optional[tuple[int, bool]]) -> bool:
        if found is None:
            self._set_status("No differences found")
            return False
        index, wrapped = found
        self.current_index = index
        self.scroll_row = max(0, self.blocks[index].left_start)
        suffix = " (wrapped)" if wrapped else ""
        self._set_status(f"Difference {index + 1}/{len(self.blocks)}{suffix}")
        return True

    def next_difference(self) -> bool:
        if not self._require_viewing():
            return False
        return self._jump(find_next_difference(self.blocks, self.current_index))

    def previous_difference(self) -> bool:
        if not self._require_viewing():
            return False
        return self._jump(find_previous_difference(self.blocks, self.current_index))

    # Merging

    def _copy_block(self, source: Side) -> bool:
        if not self._require_viewing():
            return False
        block = self.current_block
        if block is None:
            self._set_status("No difference selected")
            return False
        if block.kind is DiffKind.EQUAL:
            self._set_status("No difference at current position")
            return False

        left_range = (block.left_start, block.left_end)
        right_range = (block.right_start, block.right_end)
        if source is Side.LEFT:
            splice_block(self.left_lines, self.right_lines, left_range, right_range)
            self.right_modified = True
            message = "Copied left → right"
        else:
            splice_block(self.right_lines, self.left_lines, right_range, left_range)
            self.left_modified = True
            message = "Copied right → left"

        self.recompute()
        self._set_status(message)
        return True

    def copy_left_to_right(self) -> bool:
        return self._copy_block(Side.LEFT)

    def copy_right_to_left(self) -> bool:
        return self._copy_block(Side.RIGHT)

    def switch_side(self) -> None:
        if not self._require_viewing():
            return
        self.active_side = self.active_side.other
        self._set_status(f"Active side: {self.active_side.name.lower()}")

    # Editing

    def enter_edit(self) -> bool:
        if not self._require_viewing():
            return False
        row = self.scroll_row
        block = self.current_block
        if self.active_side is Side.RIGHT and block is not None:
            row = max(0, block.right_start)
        self._editor = LineEditor(self.lines(self.active_side), row=row, col=0)
        self.state = SessionState.EDITING
        self._set_status("Edit mode: ESC to exit")
        return True

    def edit(self, op: EditOp, ch: str = "") -> bool:
        """
        Apply one edit operation to the active side at the cursor.

        Returns:
            True if the buffer changed
        """
        if self.state is not SessionState.EDITING:
            self._set_status("Not in edit mode")
            return False

        if op in _MOTIONS:
            _MOTIONS[op](self._editor)
            return False
        if op is EditOp.INSERT_CHAR:
            changed = self._editor.insert_char(ch)
        else:
            changed = _MUTATIONS[op](self._editor)
        if changed:
            self._mark_modified(self.active_side)
        return changed

    def exit_edit(self) -> None:
        if self.state is not SessionState.EDITING:
            return
        self.scroll_row = self._editor.row
        self._editor = None
        self.state = SessionState.VIEWING
        self.recompute()
        self._set_status("Edit mode exited")
