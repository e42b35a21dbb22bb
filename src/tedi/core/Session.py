# tedi/core/Session.py
"""tedi.core.Session
====================

The editing session: one `Buffer`, its `CursorModel`, the `Viewport` and the
status message, driven one command at a time.

This is the only surface the outer collaborators use:

- content source: `open_lines`, `open_path`, `load_bytes`;
- content sink: `save` (the buffer text itself comes from `Buffer.to_text`);
- input: `execute(command, arg)`, which reports whether the command was accepted;
- render: `refresh`, which reconciles the scroll offsets once and returns a
  `Frame` with the visible slice of rows, the aligned highlight tags and the
  screen-space cursor.

Every operation runs to completion before the next command is accepted.
User-visible failures (no file name, I/O errors, undecodable content) end up
as a single status message; they never unwind editing state.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from tedi.core.Buffer import Buffer
from tedi.core.CursorModel import CursorModel, Direction
from tedi.core.LanguageProfile import Highlight, select_profile
from tedi.core.Row import DEFAULT_TAB_WIDTH
from tedi.core.StatusMessage import StatusMessage
from tedi.core.Viewport import Viewport
from tedi.utils.utils import ContentDecodeError, decode_content, read_text_file, split_lines, write_text_file


logger = logging.getLogger("tedi.core")

HELP_MESSAGE = "HELP: Ctrl-S = Save | Ctrl-Q = Quit"
DEFAULT_QUIT_TIMES = 3


class Command(Enum):
    INSERT_CHAR = "insert_char"
    DELETE_BACKWARD = "delete_backward"
    DELETE_FORWARD = "delete_forward"
    NEWLINE = "newline"
    MOVE = "move"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    PAGE_LEFT = "page_left"
    PAGE_RIGHT = "page_right"
    SAVE = "save"
    QUIT = "quit"


class SaveError(Exception):
    """The buffer cannot be saved, e.g. it has no file name yet."""


@dataclass
class FrameLine:
    """One visible row, already sliced to the horizontal window."""

    index: int
    text: str
    highlight: list[Highlight] = field(default_factory=list)


@dataclass
class Frame:
    """Everything the screen painter needs for one refresh."""

    lines: list[FrameLine]
    cursor: tuple[int, int]
    status: str
    message: Optional[str]
    screen_height: int
    screen_width: int
    empty_buffer: bool = False


class Session:
    """A single editing session over one buffer.

    Attributes:
        buffer (Buffer): The document being edited.
        cursor (CursorModel): Logical cursor inside `buffer`.
        viewport (Viewport): Scroll offsets over the text area.
        status (StatusMessage): Self-expiring message bar text.
        running (bool): False once a quit command was accepted.
    """

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        screen_width: int = 80,
        screen_height: int = 24,
    ) -> None:
        self.config: dict[str, Any] = config or {}
        editor_cfg = self.config.get("editor", {})
        self.tab_width: int = int(editor_cfg.get("tab_size", DEFAULT_TAB_WIDTH))
        self.max_quit_times: int = int(editor_cfg.get("quit_times", DEFAULT_QUIT_TIMES))
        self.encoding: str = str(editor_cfg.get("encoding", "utf-8"))

        self.buffer = Buffer(tab_width=self.tab_width)
        self.cursor = CursorModel(self.buffer)
        self.viewport = Viewport(screen_width, screen_height)
        self.status = StatusMessage(
            HELP_MESSAGE, timeout=float(editor_cfg.get("status_timeout", 5.0))
        )
        self.quit_times: int = self.max_quit_times
        self.running: bool = True

    # --- Content source ---
    def open_lines(self, lines: Iterable[str], filename: Optional[str] = None) -> None:
        """Replace the buffer content with *lines*; the extension of *filename* picks the dialect."""
        self.buffer.filename = filename
        self.buffer.profile = select_profile(filename)
        self.buffer.load(lines)
        self.cursor.move_to(0, 0)
        self.viewport.row_offset = 0
        self.viewport.column_offset = 0
        logger.info("Opened %d rows (%s) from %r", len(self.buffer), self.buffer.file_type, filename)

    def load_bytes(
        self, data: bytes, filename: Optional[str] = None, encoding: Optional[str] = None
    ) -> bool:
        """Decode *data* (guessing the encoding unless given) and load it.

        Undecodable content leaves the buffer unchanged.
        """
        try:
            text, used = decode_content(data, encoding)
        except ContentDecodeError as e:
            logger.error(f"Could not decode content for {filename!r}: {e}")
            self.status.set_message(f"Can't open: {e}")
            return False
        self.encoding = used
        self.open_lines(split_lines(text), filename)
        return True

    def open_path(self, path: Union[str, Path]) -> bool:
        """Open *path*; a file that does not exist yet gives an empty buffer with that name."""
        filename = str(path)
        if not Path(filename).exists():
            self.open_lines([], filename)
            self.status.set_message(f"New file: {Path(filename).name}")
            return True
        try:
            lines, used = read_text_file(filename)
        except ContentDecodeError as e:
            logger.error(f"Could not decode '{filename}': {e}")
            self.status.set_message(f"Can't open {Path(filename).name}: not a text file")
            return False
        except OSError as e:
            logger.error(f"Failed to read '{filename}': {e}", exc_info=True)
            self.status.set_message(f"Can't open {Path(filename).name}: {e.strerror or e}")
            return False
        self.encoding = used
        self.open_lines(lines, filename)
        return True

    # --- Content sink ---
    def _write_buffer(self, target: Optional[str]) -> int:
        if not target:
            raise SaveError("No file name specified, save aborted")
        text = self.buffer.to_text()
        try:
            return write_text_file(target, text, self.encoding)
        except ContentDecodeError as e:
            if self.encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
                raise
            # Nothing has been written yet; encoding happens before the file is opened.
            logger.warning(f"{e}; saving '{target}' as utf-8 instead")
            written = write_text_file(target, text, "utf-8")
            self.encoding = "utf-8"
            return written

    def save(self, filename: Optional[str] = None) -> bool:
        """Write the buffer to its file, or to *filename* which becomes its new identity.

        The identity only changes once the write succeeded. Text the file's
        encoding cannot represent is saved as UTF-8.

        Returns:
            True if the content was written.
        """
        target = filename or self.buffer.filename
        try:
            written = self._write_buffer(target)
        except SaveError as e:
            logger.warning(str(e))
            self.status.set_message(str(e))
            return False
        except (OSError, ContentDecodeError) as e:
            logger.error(f"Failed to save '{target}': {e}", exc_info=True)
            self.status.set_message(f"Can't save! I/O error: {e}")
            return False
        if filename:
            self.buffer.filename = filename
            self.buffer.select_profile_for(filename)
        self.buffer.mark_saved()
        self.status.set_message(f"{written} bytes written to disk")
        logger.info("Saved %d bytes to '%s'", written, self.buffer.filename)
        return True

    # --- Input ---
    def execute(self, command: Command, arg: Any = None) -> bool:
        """Apply one command.

        Args:
            command: What to do.
            arg: The character for INSERT_CHAR, the `Direction` for MOVE,
                an optional file name for SAVE.

        Returns:
            True if the command was accepted and changed something.
        """
        if command is not Command.QUIT:
            self.quit_times = self.max_quit_times

        if command is Command.INSERT_CHAR:
            return self.insert_char(arg)
        if command is Command.DELETE_BACKWARD:
            return self.delete_backward()
        if command is Command.DELETE_FORWARD:
            return self.delete_forward()
        if command is Command.NEWLINE:
            return self.insert_newline()
        if command is Command.MOVE:
            return self.cursor.move(Direction(arg))
        if command is Command.PAGE_UP:
            return self.page_vertical(Direction.UP)
        if command is Command.PAGE_DOWN:
            return self.page_vertical(Direction.DOWN)
        if command is Command.PAGE_LEFT:
            return self.page_horizontal(-1)
        if command is Command.PAGE_RIGHT:
            return self.page_horizontal(1)
        if command is Command.SAVE:
            return self.save(arg)
        if command is Command.QUIT:
            return self.request_quit()
        logger.warning("Unhandled command %r", command)
        return False

    def insert_char(self, ch: str) -> bool:
        if not isinstance(ch, str) or len(ch) != 1 or ch in "\r\n":
            logger.debug("insert_char: rejected %r", ch)
            return False
        row, col = self.cursor.position
        self.buffer.insert_char(row, col, ch)
        self.cursor.move_to(row, col + 1)
        return True

    def delete_backward(self) -> bool:
        row, col = self.cursor.position
        new_position = self.buffer.delete_char(row, col)
        if new_position is None:
            return False
        self.cursor.move_to(*new_position)
        return True

    def delete_forward(self) -> bool:
        row, col = self.cursor.position
        last = len(self.buffer) - 1
        if row > last or (row == last and col >= self.buffer.row_len(row)):
            return False
        self.cursor.move(Direction.RIGHT)
        return self.delete_backward()

    def insert_newline(self) -> bool:
        row, col = self.cursor.position
        self.buffer.insert_newline(row, col)
        self.cursor.move_to(row + 1, 0)
        return True

    def page_vertical(self, direction: Direction) -> bool:
        """Move one screen up or down, starting from the window edge."""
        before = self.cursor.position
        height = self.viewport.screen_height
        if direction is Direction.UP:
            self.cursor.move_to(self.viewport.row_offset, self.cursor.col)
        else:
            bottom = min(self.viewport.row_offset + height - 1, len(self.buffer))
            self.cursor.move_to(bottom, self.cursor.col)
        for _ in range(height):
            self.cursor.move(direction)
        return self.cursor.position != before

    def page_horizontal(self, sign: int) -> bool:
        """Move the cursor one screen width left (``sign < 0``) or right in its row."""
        if self.cursor.on_virtual_row:
            return False
        row = self.buffer[self.cursor.row]
        target = max(0, self.cursor.rendered_col + sign * self.viewport.screen_width)
        before = self.cursor.col
        self.cursor.move_to(self.cursor.row, row.rendered_to_raw(target, self.buffer.tab_width))
        return self.cursor.col != before

    def request_quit(self) -> bool:
        """Quit, unless there are unsaved changes and confirmations are left."""
        if self.buffer.dirty > 0 and self.quit_times > 0:
            self.status.set_message(
                f"WARNING!!! File has unsaved changes. Press Ctrl-Q {self.quit_times} more times to quit."
            )
            self.quit_times -= 1
            return True
        logger.info("Quit accepted (dirty=%d)", self.buffer.dirty)
        self.running = False
        return True

    # --- Render ---
    def resize(self, screen_width: int, screen_height: int) -> None:
        self.viewport.resize(screen_width, screen_height)

    def status_line(self) -> tuple[str, str]:
        """Left and right halves of the status bar."""
        name = Path(self.buffer.filename).name if self.buffer.filename else "[No Name]"
        modified = " (modified)" if self.buffer.dirty > 0 else ""
        left = f"{name[:20]} - {len(self.buffer)} lines{modified}"
        right = f"{self.buffer.file_type} | {self.cursor.row + 1}/{len(self.buffer)}"
        return left, right

    def refresh(self) -> Frame:
        """Reconcile the viewport with the cursor and snapshot the visible window."""
        self.viewport.scroll(self.cursor)
        start = self.viewport.column_offset
        end = start + self.viewport.screen_width
        lines = [
            FrameLine(idx, self.buffer[idx].rendered[start:end], self.buffer[idx].highlight[start:end])
            for idx in self.viewport.visible_rows(len(self.buffer))
        ]
        left, right = self.status_line()
        width = self.viewport.screen_width
        gap = max(1, width - len(left) - len(right))
        status = (left + " " * gap + right)[:width]
        return Frame(
            lines=lines,
            cursor=self.viewport.screen_cursor(self.cursor),
            status=status,
            message=self.status.message,
            screen_height=self.viewport.screen_height,
            screen_width=width,
            empty_buffer=len(self.buffer) == 0,
        )
