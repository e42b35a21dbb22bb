# src/tedi/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from typing import Any, Optional


class TerminalAppMode:
    """
    Put the terminal into the raw editing mode the editor needs, and give it back.

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - Application cursor keys (smkx/rmkx).
    - raw + noecho (cbreak fallback), keypad(True), short ESC delay.
    - No scrolling at curses level (scrollok(False)).

    Use it as a context manager so the terminal is restored on every exit path,
    including exceptions raised by the editing loop:

        with TerminalAppMode(stdscr):
            ...
    """

    ESC_DELAY_MS = 35

    def __init__(self, stdscr: Optional[Any] = None) -> None:
        self._entered: bool = False
        self._stdscr: Optional[Any] = stdscr

    def __enter__(self) -> "TerminalAppMode":
        if self._stdscr is None:
            raise ValueError("TerminalAppMode needs a window to enter")
        self.enter(self._stdscr)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exit()

    @property
    def active(self) -> bool:
        return self._entered

    def enter(self, stdscr: Any) -> None:
        self._stdscr = stdscr

        try:
            curses.setupterm()
        except curses.error as e:
            logging.debug("setupterm() failed or not required: %r", e)

        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()  # deliver ^S, ^Q and ^Z to us
        except curses.error:
            curses.cbreak()
        curses.noecho()

        stdscr.keypad(True)
        try:
            curses.set_escdelay(self.ESC_DELAY_MS)
        except (AttributeError, curses.error):
            pass

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen + raw input).")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            if self._stdscr is not None:
                self._stdscr.keypad(False)
        except curses.error:
            pass

        try:
            curses.noraw()
        except curses.error:
            try:
                curses.nocbreak()
            except curses.error:
                pass
        try:
            curses.echo()
        except curses.error:
            pass

        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Capability missing on some consoles.
            logging.debug("tputs(%s) skipped: %r", capname, e)
