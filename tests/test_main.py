# tests/test_main.py
"""Tests for the entry point wiring in `tedi.main`."""

import curses
from pathlib import Path
from unittest.mock import MagicMock, patch

from tedi import main
from tedi.core.Session import Session


def test_resolve_cli_path(tmp_path: Path) -> None:
    assert main._resolve_cli_path(["tedi"]) is None
    assert main._resolve_cli_path(["tedi", "  "]) is None
    assert main._resolve_cli_path(["tedi", str(tmp_path / "a.c")]) == tmp_path / "a.c"


def test_run_loop_draws_dispatches_and_resizes() -> None:
    session = Session({}, screen_width=80, screen_height=22)
    screen = MagicMock()
    keys = MagicMock()
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (12, 40)

    def stop(_key):
        session.running = False
        return True

    keys.get_key_input.side_effect = [curses.KEY_RESIZE, curses.error(), "q"]
    keys.handle_input.side_effect = stop

    main.run_loop(session, screen, keys, stdscr)

    assert screen.draw.call_count == 3
    keys.handle_input.assert_called_once_with("q")
    assert (session.viewport.screen_width, session.viewport.screen_height) == (40, 10)


def test_main_app_runner_opens_file_and_restores_terminal(mock_stdscr: MagicMock, tmp_path: Path) -> None:
    target = tmp_path / "x.py"
    target.write_text("pass\n", encoding="utf-8")
    opened = {}

    def fake_loop(session, screen, keys, stdscr):
        opened["lines"] = session.buffer.lines()

    with (
        patch.object(main, "TerminalAppMode") as mode_cls,
        patch.object(main, "DrawScreen"),
        patch.object(main, "run_loop", side_effect=fake_loop),
        patch.object(main.signal, "signal"),
    ):
        main.main_app_runner(mock_stdscr, {}, target)

    assert opened["lines"] == ["pass"]
    mode_cls.return_value.__enter__.assert_called_once()
    mode_cls.return_value.__exit__.assert_called_once()
