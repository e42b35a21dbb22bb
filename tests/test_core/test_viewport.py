# tests/test_core/test_viewport.py
"""Viewport Tests
========================

Unit tests for `tedi.core.Viewport`: minimal vertical and horizontal scrolling
and the screen-space cursor.
"""

from tedi.core.Buffer import Buffer
from tedi.core.CursorModel import CursorModel
from tedi.core.Viewport import Viewport


def test_cursor_below_window_becomes_last_visible_row() -> None:
    """Cursor on row 25 with a 10-row screen puts the window at row 16."""
    buf = Buffer([f"line {i}" for i in range(40)])
    cursor = CursorModel(buf, 25, 0)
    view = Viewport(80, 10)

    assert view.scroll(cursor) is True
    assert view.row_offset == 16
    assert view.screen_cursor(cursor) == (9, 0)
    assert list(view.visible_rows(len(buf))) == list(range(16, 26))


def test_cursor_above_window_becomes_first_visible_row() -> None:
    buf = Buffer([str(i) for i in range(40)])
    view = Viewport(80, 10)
    view.row_offset = 20
    view.scroll(CursorModel(buf, 5, 0))
    assert view.row_offset == 5


def test_cursor_inside_window_does_not_scroll() -> None:
    buf = Buffer([str(i) for i in range(40)])
    view = Viewport(80, 10)
    view.row_offset = 3
    assert view.scroll(CursorModel(buf, 12, 0)) is False
    assert view.row_offset == 3


def test_horizontal_scroll_uses_rendered_column() -> None:
    buf = Buffer(["\t" * 10 + "x"])
    cursor = CursorModel(buf, 0, 10)
    view = Viewport(20, 5)

    view.scroll(cursor)
    assert view.rendered_col == 40
    assert view.column_offset == 21
    assert view.screen_cursor(cursor) == (0, 19)

    cursor.move_to(0, 0)
    view.scroll(cursor)
    assert view.column_offset == 0


def test_virtual_row_is_reachable() -> None:
    buf = Buffer(["a", "b", "c"])
    view = Viewport(10, 3)
    cursor = CursorModel(buf, 3, 0)
    view.scroll(cursor)
    assert view.row_offset == 1
    assert list(view.visible_rows(len(buf))) == [1, 2]


def test_resize_keeps_minimum_size() -> None:
    view = Viewport(80, 24)
    view.resize(0, -5)
    assert (view.screen_width, view.screen_height) == (1, 1)
