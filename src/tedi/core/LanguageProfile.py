# tedi/core/LanguageProfile.py
"""tedi.core.LanguageProfile
============================

Static description of highlighting dialects and the per-character highlight tags.

A `LanguageProfile` is pure data: the file extensions it claims, a file-type label,
the line-comment marker, an optional block-comment delimiter pair and an ordered
list of keyword groups, each carrying the color its words are painted with.
Profiles never carry behavior; the single classification routine in
`tedi.core.Classifier` is parameterized by them.

Profiles live in a small registry keyed by extension. The built-in dialects are
registered at import time, and user dialects from the ``[languages]`` section of
the configuration can be added on top with `register_from_config`.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


logger = logging.getLogger("tedi.core")


class HighlightKind(Enum):
    """Semantic class of one rendered character."""

    NORMAL = "normal"
    NUMBER = "number"
    STRING = "string"
    CHAR_LITERAL = "char_literal"
    COMMENT = "comment"
    MULTILINE_COMMENT = "multiline_comment"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class Highlight:
    """One highlight tag. `color` is only meaningful for keywords."""

    kind: HighlightKind
    color: Optional[str] = None

    @classmethod
    def keyword(cls, color: str) -> "Highlight":
        return cls(HighlightKind.KEYWORD, color)

    @property
    def is_comment(self) -> bool:
        return self.kind in (HighlightKind.COMMENT, HighlightKind.MULTILINE_COMMENT)


NORMAL = Highlight(HighlightKind.NORMAL)
NUMBER = Highlight(HighlightKind.NUMBER)
STRING = Highlight(HighlightKind.STRING)
CHAR_LITERAL = Highlight(HighlightKind.CHAR_LITERAL)
COMMENT = Highlight(HighlightKind.COMMENT)
MULTILINE_COMMENT = Highlight(HighlightKind.MULTILINE_COMMENT)


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable highlighting dialect.

    Attributes:
        file_type: Human readable label shown in the status bar ("rust", "c", ...).
        extensions: Extensions claimed by this dialect, lower case, without the dot.
        line_comment: Line comment marker. An empty string disables line comments.
        block_comment: ``(start, end)`` delimiters, or None when the dialect has none.
        keywords: Ordered ``(color, words)`` groups; earlier groups win on overlap.
    """

    file_type: str
    extensions: frozenset[str] = field(default_factory=frozenset)
    line_comment: str = ""
    block_comment: Optional[tuple[str, str]] = None
    keywords: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def matches(self, filename: Optional[str]) -> bool:
        """Return True if *filename* carries one of this profile's extensions."""
        ext = extension_of(filename)
        return bool(ext) and ext in self.extensions


def extension_of(filename: Optional[str]) -> str:
    """Return the lower-cased extension of *filename* without the leading dot."""
    if not filename:
        return ""
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in base.lstrip("."):
        return ""
    return base.rsplit(".", 1)[-1].lower()


def make_profile(
    file_type: str,
    extensions: Iterable[str],
    line_comment: str = "",
    block_comment: Optional[Iterable[str]] = None,
    keywords: Optional[Iterable[tuple[str, Iterable[str]]]] = None,
) -> LanguageProfile:
    """Build a `LanguageProfile` from loose iterables (config tables, literals)."""
    pair: Optional[tuple[str, str]] = None
    if block_comment:
        start, end = tuple(block_comment)
        if start and end:
            pair = (str(start), str(end))
    groups = tuple(
        (str(color), tuple(dict.fromkeys(str(w) for w in words if w)))
        for color, words in (keywords or ())
    )
    return LanguageProfile(
        file_type=file_type,
        extensions=frozenset(str(e).lstrip(".").lower() for e in extensions),
        line_comment=line_comment or "",
        block_comment=pair,
        keywords=groups,
    )


# --- Built-in dialects ---
RUST = make_profile(
    "rust",
    ["rs"],
    line_comment="//",
    block_comment=("/*", "*/"),
    keywords=[
        ("yellow", [
            "pub", "mod", "unsafe", "extern", "crate", "use", "type", "struct", "enum",
            "union", "const", "static", "mut", "let", "if", "else", "impl", "trait",
            "for", "fn", "self", "Self", "while", "true", "false", "in", "continue",
            "break", "loop", "match", "return", "where", "as", "ref", "move", "dyn",
        ]),
        ("green", [
            "isize", "i8", "i16", "i32", "i64", "i128", "usize", "u8", "u16", "u32",
            "u64", "u128", "f32", "f64", "char", "str", "bool", "String", "Vec",
            "Option", "Result",
        ]),
    ],
)

C = make_profile(
    "c",
    ["c", "h", "cpp", "hpp", "cc", "cxx"],
    line_comment="//",
    block_comment=("/*", "*/"),
    keywords=[
        ("yellow", [
            "auto", "break", "case", "continue", "default", "do", "else", "enum",
            "extern", "for", "goto", "if", "register", "return", "sizeof", "static",
            "struct", "switch", "typedef", "union", "volatile", "while", "NULL",
            "class", "namespace", "public", "private", "protected", "template",
            "virtual", "new", "delete", "this", "true", "false",
        ]),
        ("green", [
            "int", "long", "double", "float", "char", "unsigned", "signed", "void",
            "short", "const", "bool",
        ]),
    ],
)

PYTHON = make_profile(
    "python",
    ["py", "pyw"],
    line_comment="#",
    keywords=[
        ("yellow", [
            "and", "as", "assert", "async", "await", "break", "class", "continue",
            "def", "del", "elif", "else", "except", "finally", "for", "from",
            "global", "if", "import", "in", "is", "lambda", "nonlocal", "not", "or",
            "pass", "raise", "return", "try", "while", "with", "yield",
        ]),
        ("green", ["True", "False", "None", "self", "cls"]),
    ],
)

JAVASCRIPT = make_profile(
    "javascript",
    ["js", "mjs", "cjs", "ts"],
    line_comment="//",
    block_comment=("/*", "*/"),
    keywords=[
        ("yellow", [
            "break", "case", "catch", "class", "const", "continue", "default",
            "delete", "do", "else", "export", "extends", "finally", "for",
            "function", "if", "import", "in", "instanceof", "let", "new", "return",
            "switch", "this", "throw", "try", "typeof", "var", "void", "while",
            "yield", "async", "await", "of",
        ]),
        ("green", ["true", "false", "null", "undefined", "NaN", "Infinity"]),
    ],
)

BUILTIN_PROFILES: tuple[LanguageProfile, ...] = (RUST, C, PYTHON, JAVASCRIPT)

_registry: list[LanguageProfile] = list(BUILTIN_PROFILES)


def registered_profiles() -> tuple[LanguageProfile, ...]:
    return tuple(_registry)


def register_profile(profile: LanguageProfile) -> None:
    """Register *profile*; later registrations take precedence on shared extensions."""
    _registry.insert(0, profile)
    logger.debug(
        "Registered language profile '%s' for extensions %s",
        profile.file_type,
        sorted(profile.extensions),
    )


def reset_registry() -> None:
    """Drop every user registration and return to the built-in dialects."""
    _registry[:] = list(BUILTIN_PROFILES)


def register_from_config(config: dict[str, Any]) -> int:
    """Register user dialects found under ``config["languages"]``.

    Each entry is a table with ``extensions``, optional ``line_comment``,
    optional ``block_comment`` (two strings) and optional ``keywords``, a table
    mapping a color name to a word or a list of words. Malformed entries are
    logged and skipped.

    Returns:
        The number of profiles registered.
    """
    languages = config.get("languages", {}) if isinstance(config, dict) else {}
    count = 0
    for name, table in languages.items():
        if not isinstance(table, dict) or not table.get("extensions"):
            logger.warning("Language '%s' has no extensions, skipped.", name)
            continue
        try:
            profile = make_profile(
                str(name),
                table["extensions"],
                line_comment=table.get("line_comment", ""),
                block_comment=table.get("block_comment"),
                keywords=[
                    (color, [words] if isinstance(words, str) else words)
                    for color, words in table.get("keywords", {}).items()
                ],
            )
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Invalid language definition '{name}': {e}")
            continue
        register_profile(profile)
        count += 1
    return count


def select_profile(filename: Optional[str]) -> Optional[LanguageProfile]:
    """Return the profile claiming *filename*'s extension, or None for plain text."""
    for profile in _registry:
        if profile.matches(filename):
            logger.debug("Selected profile '%s' for %r", profile.file_type, filename)
            return profile
    return None
