# src/tedi/core/__init__.py
"""Public facade for tedi.core: re-export main classes from CamelCase modules.

Keeps one-class-per-file module names (Buffer.py, Row.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Buffer import Buffer  # noqa: F401
from .Classifier import classify_row, update_syntax  # noqa: F401
from .CursorModel import CursorModel, Direction  # noqa: F401
from .LanguageProfile import Highlight, HighlightKind, LanguageProfile, select_profile  # noqa: F401
from .Row import Row  # noqa: F401
from .Session import Command, Frame, SaveError, Session  # noqa: F401
from .StatusMessage import StatusMessage  # noqa: F401
from .Viewport import Viewport  # noqa: F401


__all__ = [
    "Buffer",
    "Command",
    "CursorModel",
    "Direction",
    "Frame",
    "Highlight",
    "HighlightKind",
    "LanguageProfile",
    "Row",
    "SaveError",
    "Session",
    "StatusMessage",
    "Viewport",
    "classify_row",
    "select_profile",
    "update_syntax",
]
