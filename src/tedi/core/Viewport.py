# tedi/core/Viewport.py
"""tedi.core.Viewport
=====================

Scroll offsets over a fixed-size text area.

`scroll` is run once per refresh, after the cursor has settled. It moves
`row_offset` and `column_offset` by the smallest amount that brings the cursor
back into the visible window:

- cursor above the window -> the window starts at the cursor row,
- cursor below the window -> the cursor becomes the last visible row,

and the same rule horizontally against the cursor's rendered column. The
window is never recentred.
"""

import logging

from tedi.core.CursorModel import CursorModel


logger = logging.getLogger("tedi.core")


class Viewport:
    """Visible window of ``screen_height`` rows by ``screen_width`` rendered columns."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = max(1, screen_width)
        self.screen_height = max(1, screen_height)
        self.row_offset = 0
        self.column_offset = 0
        self.rendered_col = 0

    def __repr__(self) -> str:
        return (
            f"Viewport({self.screen_width}x{self.screen_height}, "
            f"offset=({self.row_offset},{self.column_offset}))"
        )

    def resize(self, screen_width: int, screen_height: int) -> None:
        self.screen_width = max(1, screen_width)
        self.screen_height = max(1, screen_height)
        logger.debug("Viewport resized to %dx%d", self.screen_width, self.screen_height)

    def scroll(self, cursor: CursorModel) -> bool:
        """Reconcile the offsets with *cursor*.

        Returns:
            True if either offset changed.
        """
        before = (self.row_offset, self.column_offset)
        self.rendered_col = cursor.rendered_col

        if cursor.row < self.row_offset:
            self.row_offset = cursor.row
        elif cursor.row >= self.row_offset + self.screen_height:
            self.row_offset = cursor.row - self.screen_height + 1

        if self.rendered_col < self.column_offset:
            self.column_offset = self.rendered_col
        elif self.rendered_col >= self.column_offset + self.screen_width:
            self.column_offset = self.rendered_col - self.screen_width + 1

        return (self.row_offset, self.column_offset) != before

    def visible_rows(self, number_of_rows: int) -> range:
        """Buffer indexes of the rows shown on screen."""
        end = min(number_of_rows, self.row_offset + self.screen_height)
        return range(self.row_offset, max(self.row_offset, end))

    def screen_cursor(self, cursor: CursorModel) -> tuple[int, int]:
        """Screen-space ``(y, x)`` of the cursor. Call after `scroll`."""
        return cursor.row - self.row_offset, self.rendered_col - self.column_offset
