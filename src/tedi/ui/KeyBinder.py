# tedi/ui/KeyBinder.py
"""KeyBinder.py
==================
Translates terminal key presses into session commands.

The curses window runs with ``keypad(True)``, so arrows, Home/End, PageUp/PageDown
and Delete arrive as ``curses.KEY_*`` integers and printable input arrives as
``str`` from ``get_wch()``. Escape sequences that curses does not decode on its
own (common with tmux and bare TTYs) are normalised through
`ESCAPE_SEQUENCE_MAP`. Everything is reduced to a logical key name first
("up", "ctrl+s", "pagedown", ...) and then looked up in the binding table,
which the ``[keybindings]`` section of the configuration may override.

Main Methods:
1. get_key_input: Reads one key (or escape sequence) from the terminal.
2. resolve: Turns a raw key into ``(Command, arg)`` or None.
3. handle_input: Resolves a key and executes it on the session.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from tedi.core.CursorModel import Direction
from tedi.core.Session import Command
from tedi.utils.logging_config import KEY_LOGGER

if TYPE_CHECKING:
    from tedi.core.Session import Session


KeyInput = Union[int, str]

# Action name -> (Command, argument)
ACTIONS: dict[str, tuple[Command, Any]] = {
    "move_up": (Command.MOVE, Direction.UP),
    "move_down": (Command.MOVE, Direction.DOWN),
    "move_left": (Command.MOVE, Direction.LEFT),
    "move_right": (Command.MOVE, Direction.RIGHT),
    "move_home": (Command.MOVE, Direction.HOME),
    "move_end": (Command.MOVE, Direction.END),
    "page_up": (Command.PAGE_UP, None),
    "page_down": (Command.PAGE_DOWN, None),
    "page_left": (Command.PAGE_LEFT, None),
    "page_right": (Command.PAGE_RIGHT, None),
    "backspace": (Command.DELETE_BACKWARD, None),
    "delete": (Command.DELETE_FORWARD, None),
    "newline": (Command.NEWLINE, None),
    "save_file": (Command.SAVE, None),
    "quit": (Command.QUIT, None),
}

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "move_up": ["up"],
    "move_down": ["down"],
    "move_left": ["left"],
    "move_right": ["right"],
    "move_home": ["home"],
    "move_end": ["end"],
    "page_up": ["pageup"],
    "page_down": ["pagedown"],
    "page_left": ["ctrl+left", "alt-h"],
    "page_right": ["ctrl+right", "alt-l"],
    "backspace": ["backspace", "ctrl+h"],
    "delete": ["delete"],
    "newline": ["enter"],
    "save_file": ["ctrl+s"],
    "quit": ["ctrl+q"],
}


class KeyBinder:
    """Maps key presses to `Command`s and feeds them to a `Session`.

    Attributes:
        session (Session): The session commands are executed on.
        keybindings (dict[str, list[str]]): Action name -> logical key names.
        key_map (dict[str, str]): Logical key name -> action name.
    """

    # Escape sequences without the leading ESC.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
        "[1;5C": "ctrl+right", "[1;5D": "ctrl+left",
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",
        "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",
    }

    CURSES_KEY_NAMES: dict[str, str] = {
        "KEY_UP": "up",
        "KEY_DOWN": "down",
        "KEY_LEFT": "left",
        "KEY_RIGHT": "right",
        "KEY_HOME": "home",
        "KEY_END": "end",
        "KEY_PPAGE": "pageup",
        "KEY_NPAGE": "pagedown",
        "KEY_DC": "delete",
        "KEY_BACKSPACE": "backspace",
        "KEY_ENTER": "enter",
        "KEY_RESIZE": "resize",
    }

    def __init__(self, session: "Session", config: Optional[dict[str, Any]] = None) -> None:
        self.session = session
        self.config = config or {}
        self.keybindings = self._load_keybindings()
        self.key_map = self._setup_key_map()
        self._code_names = self._curses_code_names()

    def _load_keybindings(self) -> dict[str, list[str]]:
        """Defaults overridden by ``config["keybindings"]`` (a string or list per action)."""
        bindings = {action: list(keys) for action, keys in DEFAULT_KEYBINDINGS.items()}
        for action, keys in self.config.get("keybindings", {}).items():
            if action not in ACTIONS:
                logging.warning("Unknown action '%s' in keybindings, ignored.", action)
                continue
            bindings[action] = [keys] if isinstance(keys, str) else list(keys)
        return bindings

    def _setup_key_map(self) -> dict[str, str]:
        key_map: dict[str, str] = {}
        for action, keys in self.keybindings.items():
            for key in keys:
                key_map[str(key).lower()] = action
        return key_map

    @classmethod
    def _curses_code_names(cls) -> dict[int, str]:
        names: dict[int, str] = {}
        for attr, name in cls.CURSES_KEY_NAMES.items():
            code = getattr(curses, attr, None)
            if isinstance(code, int):
                names[code] = name
        return names

    def key_name(self, key: KeyInput) -> Optional[str]:
        """Reduce a raw key to its logical name, or None for printable text."""
        if isinstance(key, int):
            if key in self._code_names:
                return self._code_names[key]
            if key in (8, 127):
                return "backspace" if key == 127 else "ctrl+h"
            if key in (10, 13):
                return "enter"
            if 1 <= key <= 26:
                return f"ctrl+{chr(key + 96)}"
            return None
        if len(key) == 1:
            code = ord(key)
            if key in ("\n", "\r"):
                return "enter"
            if code in (8, 127):
                return "backspace" if code == 127 else "ctrl+h"
            if 1 <= code <= 26 and key != "\t":
                return f"ctrl+{chr(code + 96)}"
            return None
        return key.lower()

    def resolve(self, key: KeyInput) -> Optional[tuple[Command, Any]]:
        """Map a raw key to the command it triggers."""
        name = self.key_name(key)
        if name is not None:
            action = self.key_map.get(name)
            return ACTIONS[action] if action else None
        # Integer keys at or above KEY_MIN are function keys, never text.
        char = key if isinstance(key, str) else chr(key) if 32 <= key < curses.KEY_MIN else ""
        if char == "\t" or (char and char.isprintable()):
            return Command.INSERT_CHAR, char
        return None

    def handle_input(self, key: KeyInput) -> bool:
        """Execute the command bound to *key*.

        Returns:
            True if the command was accepted by the session.
        """
        KEY_LOGGER.debug("key %r", key)
        resolved = self.resolve(key)
        if resolved is None:
            logging.debug("handle_input: unbound key %r", key)
            return False
        command, arg = resolved
        return self.session.execute(command, arg)

    def get_key_input(self, window: Any) -> KeyInput:
        """Read one key; ESC sequences are collected and mapped to logical names.

        Returns:
            A curses key code, a one-character string, a logical key name such as
            ``"ctrl+right"``, or ``"esc"`` for a lone or unknown escape.
        """
        key = window.get_wch()
        if key != "\x1b":
            return key

        seq = ""
        window.nodelay(True)
        try:
            while True:
                try:
                    nx = window.get_wch()
                except curses.error:
                    break
                if not isinstance(nx, str):
                    break
                seq += nx
        finally:
            window.nodelay(False)

        if len(seq) == 1 and seq.isprintable():
            return f"alt-{seq.lower()}"
        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if mapped:
            return mapped
        if seq:
            logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
        return "esc"
