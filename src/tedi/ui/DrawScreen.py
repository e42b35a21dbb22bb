# tedi/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen paints a `Frame` produced by `Session.refresh()` with curses.

It is responsible for:
- drawing the visible rows, one curses attribute change per highlight run,
- filling rows past the end of the buffer with ``~`` and showing the welcome
  banner when the buffer is empty,
- the reverse-video status bar and the message bar below it,
- placing the terminal cursor,
- mapping highlight tags to curses color pairs taken from the ``[colors]``
  section of the configuration.

All scroll decisions are made by the core before the frame is built; this
class never moves offsets. Curses errors (typically drawing into the last
cell of the window) are caught and logged so the editor stays responsive.
"""

import curses
import logging
from typing import Any, Iterable, Optional

from tedi.core.LanguageProfile import Highlight, HighlightKind
from tedi.core.Session import Frame, FrameLine
from tedi.utils.utils import APP_NAME, APP_VERSION, DEFAULT_CONFIG


def color_runs(tags: Iterable[Highlight]) -> list[tuple[int, int, Highlight]]:
    """Group consecutive equal tags.

    Returns:
        ``(start, end, tag)`` triples with ``end`` exclusive, in order. The
        runs cover the input exactly; two neighbouring runs never share a tag.
    """
    runs: list[tuple[int, int, Highlight]] = []
    start = 0
    current: Optional[Highlight] = None
    idx = -1
    for idx, tag in enumerate(tags):
        if current is None:
            current = tag
        elif tag != current:
            runs.append((start, idx, current))
            start, current = idx, tag
    if current is not None:
        runs.append((start, idx + 1, current))
    return runs


def welcome_line(width: int) -> str:
    """Centered version banner, ``~``-prefixed like the other empty rows."""
    welcome = f"{APP_NAME} editor --- Version {APP_VERSION}"[:width]
    padding = (width - len(welcome)) // 2
    if padding:
        return "~" + " " * (padding - 1) + welcome
    return welcome


## ================= class DrawScreen ==============================
class DrawScreen:
    """Renders frames onto a curses window.

    Attributes:
        stdscr (curses.window): The window painted on.
        config (dict[str, Any]): Editor configuration; only ``colors`` is read.
        color_names (dict[str, str]): Highlight kind name -> curses color name.
        colors (dict[str, int]): Curses color name -> attribute, filled lazily.
        monochrome (bool): True when the terminal has no color support.
    """

    MIN_WINDOW_WIDTH = 10
    MIN_WINDOW_HEIGHT = 3
    DEFAULT_KEYWORD_COLOR = "yellow"

    def __init__(self, stdscr: Any, config: Optional[dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.config = config or {}
        self.color_names: dict[str, str] = {
            **DEFAULT_CONFIG["colors"],
            **self.config.get("colors", {}),
        }
        self.colors: dict[str, int] = {}
        self.monochrome = False
        self._next_pair = 1
        self.init_colors()

    # ------------------------------------------------------------------
    # colors
    # ------------------------------------------------------------------
    def init_colors(self) -> None:
        """Start curses colors, degrading to plain attributes when unavailable."""
        self.colors = {}
        self._next_pair = 1
        try:
            if not curses.has_colors() or curses.COLORS < 8:
                logging.warning("Terminal has no or limited color support (< 8). Using monochrome attributes.")
                self.monochrome = True
                return
            curses.start_color()
            curses.use_default_colors()
        except curses.error as e:
            logging.warning(f"Color initialisation failed ({e}), using monochrome attributes.")
            self.monochrome = True
            return
        self.monochrome = False

    @staticmethod
    def _color_index(name: str) -> int:
        """Curses color number for a color name; -1 is the terminal default."""
        if not name or name.lower() == "default":
            return -1
        index = getattr(curses, f"COLOR_{name.upper()}", None)
        if isinstance(index, int):
            return index
        logging.warning(f"Unknown color name '{name}', using terminal default.")
        return -1

    def _color_attr(self, name: str) -> int:
        """Attribute for foreground color *name*, allocating a color pair on first use."""
        if name in self.colors:
            return self.colors[name]
        attr = curses.A_NORMAL
        if self._next_pair >= curses.COLOR_PAIRS:
            logging.warning(f"Ran out of color pairs. Cannot initialize '{name}'.")
        else:
            try:
                curses.init_pair(self._next_pair, self._color_index(name), -1)
                attr = curses.color_pair(self._next_pair)
                self._next_pair += 1
            except curses.error as e:
                logging.warning(f"init_pair failed for '{name}': {e}")
        self.colors[name] = attr
        return attr

    def attr_for(self, tag: Highlight) -> int:
        """Curses attribute a highlight tag is painted with."""
        if self.monochrome:
            if tag.kind is HighlightKind.KEYWORD:
                return curses.A_BOLD
            if tag.is_comment:
                return curses.A_DIM
            return curses.A_NORMAL
        if tag.kind is HighlightKind.KEYWORD:
            name = tag.color or self.DEFAULT_KEYWORD_COLOR
        else:
            name = self.color_names.get(tag.kind.value, "default")
        return self._color_attr(name)

    # ------------------------------------------------------------------
    # drawing
    # ------------------------------------------------------------------
    def draw(self, frame: Frame) -> None:
        """Paint *frame*: text rows, status bar, message bar, then the cursor."""
        try:
            height, width = self.stdscr.getmaxyx()
            if height < self.MIN_WINDOW_HEIGHT or width < self.MIN_WINDOW_WIDTH:
                self._show_small_window_error(height, width)
                return

            self.stdscr.erase()
            self._draw_rows(frame)
            self._draw_status_bar(frame)
            self._draw_message_bar(frame)
            self._position_cursor(frame)
        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)
        self._update_display()

    def _draw_rows(self, frame: Frame) -> None:
        for screen_row in range(frame.screen_height):
            if screen_row < len(frame.lines):
                self._draw_single_line(screen_row, frame.lines[screen_row])
            elif frame.empty_buffer and screen_row == frame.screen_height // 3:
                self._addstr(screen_row, 0, welcome_line(frame.screen_width), curses.A_NORMAL)
            else:
                self._addstr(screen_row, 0, "~", curses.A_NORMAL)

    def _draw_single_line(self, screen_row: int, line: FrameLine) -> None:
        """Draw one already-sliced row, one addstr per color run."""
        for start, end, tag in color_runs(line.highlight):
            self._addstr(screen_row, start, line.text[start:end], self.attr_for(tag))

    def _draw_status_bar(self, frame: Frame) -> None:
        y = frame.screen_height
        status = frame.status.ljust(frame.screen_width)[: frame.screen_width]
        self._addstr(y, 0, status, curses.A_REVERSE)

    def _draw_message_bar(self, frame: Frame) -> None:
        y = frame.screen_height + 1
        message = (frame.message or "")[: frame.screen_width]
        try:
            self.stdscr.move(y, 0)
            self.stdscr.clrtoeol()
        except curses.error:
            return
        if message:
            self._addstr(y, 0, message, curses.A_NORMAL)

    def _position_cursor(self, frame: Frame) -> None:
        y, x = frame.cursor
        try:
            self.stdscr.move(y, x)
        except curses.error as e:
            logging.warning(f"Curses error positioning cursor at ({y}, {x}): {e}")

    def _addstr(self, y: int, x: int, text: str, attr: int) -> None:
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell advances the cursor past the window.
            logging.debug("addstr failed at (%d,%d) for %d chars", y, x, len(text))

    def _show_small_window_error(self, height: int, width: int) -> None:
        msg = f"Window too small ({width}x{height})"
        try:
            self.stdscr.erase()
            self.stdscr.addstr(0, 0, msg[: max(0, width - 1)])
        except curses.error:
            pass
        self._update_display()

    def _update_display(self) -> None:
        """Flush pending drawing with noutrefresh() + doupdate() to avoid flicker."""
        try:
            self.stdscr.noutrefresh()
            curses.doupdate()
        except curses.error as e:
            logging.error(f"Curses doupdate error: {e}")
