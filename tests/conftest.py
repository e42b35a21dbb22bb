# tests/conftest.py
"""Pytest configuration with shared fixtures for the tedi editor tests.

Core tests run against real objects; UI tests patch the ``curses`` name inside
the module under test so nothing touches a real terminal.
"""

from __future__ import annotations

import curses
from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

from tedi.core.Buffer import Buffer
from tedi.core.LanguageProfile import make_profile, reset_registry
from tedi.core.Session import Session


# --- Registry isolation ---
@pytest.fixture(autouse=True)
def clean_registry() -> Generator[None, None, None]:
    """Keep user profile registrations from leaking between tests."""
    reset_registry()
    yield
    reset_registry()


# --- Curses doubles ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr with terminal size (24, 80)."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def curses_mock() -> MagicMock:
    """A curses module double with the constants the UI code reads.

    ``error`` stays the real exception class so ``except curses.error`` works.
    """
    mock = MagicMock()
    mock.error = curses.error
    mock.has_colors.return_value = True
    mock.COLORS = 256
    mock.COLOR_PAIRS = 256
    mock.A_NORMAL = 0
    mock.A_BOLD = 1
    mock.A_DIM = 2
    mock.A_REVERSE = 4
    mock.COLOR_BLACK = 0
    mock.COLOR_RED = 1
    mock.COLOR_GREEN = 2
    mock.COLOR_YELLOW = 3
    mock.COLOR_BLUE = 4
    mock.COLOR_MAGENTA = 5
    mock.COLOR_CYAN = 6
    mock.COLOR_WHITE = 7
    mock.color_pair.side_effect = lambda n: n << 8
    return mock


# --- Configuration ---
@pytest.fixture
def mock_config() -> dict[str, dict[str, Any]]:
    """Baseline configuration for tedi tests."""
    return {
        "editor": {
            "tab_size": 4,
            "quit_times": 3,
            "status_timeout": 5.0,
            "encoding": "utf-8",
        },
        "colors": {},
        "keybindings": {},
        "languages": {},
    }


# --- Core fixtures ---
@pytest.fixture
def c_profile():
    """A small C-like dialect with both comment styles and two keyword groups."""
    return make_profile(
        "c",
        ["c", "h"],
        line_comment="//",
        block_comment=("/*", "*/"),
        keywords=[("yellow", ["if", "else", "return", "while"]), ("green", ["int", "char"])],
    )


@pytest.fixture
def sample_text() -> list[str]:
    """Provide a sample C snippet as a list of lines."""
    return [
        "int main() {",
        "\tint x = 42; // answer",
        "\t/* start",
        "\t   still comment */",
        "\treturn x;",
        "}",
    ]


@pytest.fixture
def c_buffer(sample_text: list[str], c_profile) -> Buffer:
    return Buffer(sample_text, filename="main.c", profile=c_profile)


@pytest.fixture
def session(mock_config: dict[str, dict[str, Any]]) -> Session:
    """A 10 rows by 20 columns session with an empty buffer."""
    return Session(mock_config, screen_width=20, screen_height=10)


# --- Filesystem fixtures ---
@pytest.fixture
def test_file_path(tmp_path: Path) -> Path:
    """Create a small C file in a temporary directory."""
    test_file = tmp_path / "hello.c"
    test_file.write_text("int x;\n/* a\nb */\n", encoding="utf-8")
    return test_file
