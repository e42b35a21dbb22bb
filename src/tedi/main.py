#!/usr/bin/env python3
# tedi/main.py
"""
tedi Main Entry Point
=====================

This module is the entry point for launching the tedi editor. It performs:
1) Configuration & Logging: loads config and initializes logging before anything else.
2) Language registration: user dialects from ``[languages]`` are added to the registry.
3) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
4) Application Run: builds the Session and its collaborators and runs the edit loop.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

from tedi.core.LanguageProfile import register_from_config
from tedi.core.Session import Session
from tedi.ui.DrawScreen import DrawScreen
from tedi.ui.KeyBinder import KeyBinder
from tedi.ui.TerminalAppMode import TerminalAppMode
from tedi.utils.logging_config import setup_logging
from tedi.utils.utils import load_config


logger = logging.getLogger("tedi")

# Rows reserved below the text area: status bar and message bar.
RESERVED_ROWS = 2


def _resolve_cli_path(argv: list[str]) -> Optional[Path]:
    """
    Resolve an optional CLI path from argv[1], expanded to a user path.
    The file does NOT need to exist on disk; Save writes to that name.
    """
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def run_loop(session: Session, screen: DrawScreen, keys: KeyBinder, stdscr: Any) -> None:
    """Refresh, draw and dispatch one key at a time until the session stops running."""
    while session.running:
        screen.draw(session.refresh())
        try:
            key = keys.get_key_input(stdscr)
        except curses.error:
            # get_wch() is interrupted by signals such as SIGWINCH.
            continue
        if key == curses.KEY_RESIZE:
            height, width = stdscr.getmaxyx()
            session.resize(width, max(1, height - RESERVED_ROWS))
            continue
        keys.handle_input(key)


def main_app_runner(stdscr: Any, config: dict[str, Any], file_to_open: Optional[Path]) -> None:
    """
    Target for `curses.wrapper`. Enters raw mode for the lifetime of the session.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path (may or may not exist on disk).
    """
    with TerminalAppMode(stdscr):
        # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
        if hasattr(signal, "SIGTSTP"):
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)

        height, width = stdscr.getmaxyx()
        session = Session(config, screen_width=width, screen_height=max(1, height - RESERVED_ROWS))
        screen = DrawScreen(stdscr, config)
        keys = KeyBinder(session, config)

        if file_to_open is not None:
            session.open_path(file_to_open)

        run_loop(session, screen, keys, stdscr)


def start() -> None:
    """
    Loads configuration, initializes logging and locale, and runs the curses
    application via wrapper.
    """
    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("tedi editor starting up...")
    registered = register_from_config(config)
    if registered:
        logger.info("Registered %d user language profile(s).", registered)

    # Locale is important for proper character encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = _resolve_cli_path(sys.argv)

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("tedi editor shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
