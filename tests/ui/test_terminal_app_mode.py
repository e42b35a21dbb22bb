# tests/ui/test_terminal_app_mode.py
"""Unit tests for `TerminalAppMode`, the scoped raw terminal mode.

The terminal must be restored on every exit path, including an exception
escaping the editing loop.
"""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from tedi.ui.TerminalAppMode import TerminalAppMode


@pytest.fixture
def patched_curses(curses_mock: MagicMock) -> Generator[MagicMock, None, None]:
    curses_mock.tigetstr.return_value = b"\x1b[?1049h"
    with patch("tedi.ui.TerminalAppMode.curses", curses_mock):
        yield curses_mock


def test_context_manager_enters_and_restores(patched_curses: MagicMock, mock_stdscr: MagicMock) -> None:
    with TerminalAppMode(mock_stdscr) as mode:
        assert mode.active is True
        patched_curses.raw.assert_called_once()
        patched_curses.noecho.assert_called_once()
        mock_stdscr.keypad.assert_called_with(True)

    assert mode.active is False
    patched_curses.noraw.assert_called_once()
    patched_curses.echo.assert_called_once()
    mock_stdscr.keypad.assert_called_with(False)
    requested = [c.args[0] for c in patched_curses.tigetstr.call_args_list]
    assert requested == ["smcup", "smkx", "rmkx", "rmcup"]


def test_terminal_is_restored_when_the_loop_raises(
    patched_curses: MagicMock, mock_stdscr: MagicMock
) -> None:
    mode = TerminalAppMode(mock_stdscr)
    with pytest.raises(RuntimeError):
        with mode:
            raise RuntimeError("boom")
    assert mode.active is False
    patched_curses.noraw.assert_called_once()


def test_raw_falls_back_to_cbreak(patched_curses: MagicMock, mock_stdscr: MagicMock) -> None:
    patched_curses.raw.side_effect = patched_curses.error("no raw")
    with TerminalAppMode(mock_stdscr):
        patched_curses.cbreak.assert_called_once()


def test_exit_without_enter_is_a_no_op(patched_curses: MagicMock) -> None:
    TerminalAppMode().exit()
    patched_curses.noraw.assert_not_called()


def test_enter_requires_a_window(patched_curses: MagicMock) -> None:
    with pytest.raises(ValueError):
        with TerminalAppMode():
            pass
