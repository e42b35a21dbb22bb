# tedi/core/CursorModel.py
"""tedi.core.CursorModel
========================

Logical cursor position inside a `Buffer`.

`row` ranges over ``0..=len(buffer)``; ``row == len(buffer)`` is the virtual
row past the end of the file, where typing appends a new line. `col` is a raw
column (tabs count as one) in ``0..=len(raw)``. The rendered column used for
drawing is derived on demand through `Row.raw_to_rendered`.

Movement never leaves the cursor dangling: after every move the column is
clamped to the destination row's raw length.
"""

import logging
from enum import Enum

from tedi.core.Buffer import Buffer


logger = logging.getLogger("tedi.core")


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


class CursorModel:
    """Cursor position in raw units, bound to a buffer for row lengths."""

    def __init__(self, buffer: Buffer, row: int = 0, col: int = 0) -> None:
        self.buffer = buffer
        self.row = row
        self.col = col
        self.clamp()

    def __repr__(self) -> str:
        return f"CursorModel(row={self.row}, col={self.col})"

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col

    @property
    def on_virtual_row(self) -> bool:
        return self.row >= len(self.buffer)

    @property
    def rendered_col(self) -> int:
        """Column of the cursor in the rendered (tab-expanded) line."""
        if self.on_virtual_row:
            return 0
        return self.buffer[self.row].raw_to_rendered(self.col, self.buffer.tab_width)

    def move_to(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        self.clamp()

    def clamp(self) -> None:
        """Pull the cursor back inside the buffer after a length-affecting edit."""
        self.row = max(0, min(self.row, len(self.buffer)))
        self.col = max(0, min(self.col, self.buffer.row_len(self.row)))

    def move(self, direction: Direction) -> bool:
        """Apply one movement step.

        Returns:
            True if the position changed.
        """
        before = self.position
        number_of_rows = len(self.buffer)

        if direction is Direction.UP:
            if self.row > 0:
                self.row -= 1
        elif direction is Direction.DOWN:
            if self.row < number_of_rows:
                self.row += 1
        elif direction is Direction.LEFT:
            if self.col > 0:
                self.col -= 1
            elif self.row > 0:
                self.row -= 1
                self.col = self.buffer.row_len(self.row)
        elif direction is Direction.RIGHT:
            if self.row < number_of_rows:
                if self.col < self.buffer.row_len(self.row):
                    self.col += 1
                else:
                    self.row += 1
                    self.col = 0
        elif direction is Direction.HOME:
            self.col = 0
        elif direction is Direction.END:
            self.col = self.buffer.row_len(self.row)

        self.clamp()
        changed = self.position != before
        if changed:
            logger.debug("cursor %s -> (%d,%d)", direction.value, self.row, self.col)
        return changed
