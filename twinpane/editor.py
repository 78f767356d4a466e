"""Cursor-addressed editing of a single line buffer."""

TAB_WIDTH = 4


class LineEditor:
    """
    Edits one line buffer in place at a (row, col) cursor.

    Mutating methods return True when the buffer changed. The buffer is
    never left with zero lines.
    """

    def __init__(self, lines: list[str], row: int = 0, col: int = 0):
        if not lines:
            lines.append("")
        self.lines = lines
        self.row = max(0, min(row, len(lines) - 1))
        self.col = max(0, min(col, len(self.lines[self.row])))

    @property
    def current_line(self) -> str:
        return self.lines[self.row]

    def _clamp_col(self) -> None:
        if self.col > len(self.current_line):
            self.col = len(self.current_line)

    # Cursor motion

    def move_up(self) -> None:
        if self.row > 0:
            self.row -= 1
            self._clamp_col()

    def move_down(self) -> None:
        if self.row < len(self.lines) - 1:
            self.row += 1
            self._clamp_col()

    def move_left(self) -> None:
        if self.col > 0:
            self.col -= 1

    def move_right(self) -> None:
        if self.col < len(self.current_line):
            self.col += 1

    def home(self) -> None:
        self.col = 0

    def end(self) -> None:
        self.col = len(self.current_line)

    # Mutation

    def insert_char(self, ch: str) -> bool:
        line = self.current_line
        self.lines[self.row] = line[:self.col] + ch + line[self.col:]
        self.col += len(ch)
        return True

    def insert_tab(self) -> bool:
        return self.insert_char(" " * TAB_WIDTH)

    def split_line(self) -> bool:
        """Break the current line at the cursor; the cursor moves to the new line."""
        line = self.current_line
        self.lines[self.row] = line[:self.col]
        self.lines.insert(self.row + 1, line[self.col:])
        self.row += 1
        self.col = 0
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor, joining lines at column 0."""
        if self.col > 0:
            line = self.current_line
            self.lines[self.row] = line[:self.col - 1] + line[self.col:]
            self.col -= 1
            return True
        if self.row > 0:
            prev_len = len(self.lines[self.row - 1])
            self.lines[self.row - 1] += self.lines.pop(self.row)
            self.row -= 1
            self.col = prev_len
            return True
        return False

    def delete(self) -> bool:
        """Delete the character at the cursor, joining the next line at end of line."""
        line = self.current_line
        if self.col < len(line):
            self.lines[self.row] = line[:self.col] + line[self.col + 1:]
            return True
        if self.row < len(self.lines) - 1:
            self.lines[self.row] += self.lines.pop(self.row + 1)
            return True
        return False
