# tedi/core/Classifier.py
"""tedi.core.Classifier
=======================

Incremental syntax classification of buffer rows.

`update_syntax` rescans one row's rendered text left to right and assigns a
`Highlight` tag to every character. The scan is a small state machine carrying
three pieces of state:

- whether the previous character was a separator (keyword and number boundary),
- the quote character of an open string or char literal, if any,
- whether a block comment is open. This one is seeded from the previous row's
  ``ends_in_block_comment`` flag and written back to the row when the scan ends.

Rules are tried in a fixed order at every position: line comment, block comment,
string/char literal, number, keyword, normal. When the row's block-comment flag
changes, the following row is classified again, and so on until a row's flag is
left unchanged or the buffer ends. That cascade only ever touches the
contiguous run of rows whose comment state really changed.
"""

import logging
from typing import Optional, Sequence

from tedi.core.LanguageProfile import (
    CHAR_LITERAL,
    COMMENT,
    MULTILINE_COMMENT,
    NORMAL,
    NUMBER,
    STRING,
    Highlight,
    LanguageProfile,
)
from tedi.core.Row import Row


logger = logging.getLogger("tedi.core")

SEPARATORS = frozenset(",.()+-/*=~%<>\"';&")


def is_separator(ch: str) -> bool:
    return ch.isspace() or ch in SEPARATORS


def _literal_tag(quote: str) -> Highlight:
    return STRING if quote == '"' else CHAR_LITERAL


def classify_row(
    rendered: str, profile: Optional[LanguageProfile], in_comment: bool
) -> tuple[list[Highlight], bool]:
    """Classify one rendered line.

    Args:
        rendered: The tab-expanded text of the row.
        profile: Dialect to highlight with. None tags everything Normal.
        in_comment: True if a block comment is open when the row starts.

    Returns:
        ``(highlight, ends_in_block_comment)``.
    """
    if profile is None:
        return [NORMAL] * len(rendered), False

    hl: list[Highlight] = []
    n = len(rendered)
    line_marker = profile.line_comment
    block = profile.block_comment
    prev_sep = True
    in_string: Optional[str] = None
    i = 0

    while i < n:
        c = rendered[i]
        prev_hl = hl[i - 1] if i > 0 else NORMAL

        # line comment
        if in_string is None and not in_comment and line_marker:
            if rendered.startswith(line_marker, i):
                hl.extend([COMMENT] * (n - i))
                break

        # block comment
        if block is not None and in_string is None:
            start, end = block
            if in_comment:
                if rendered.startswith(end, i):
                    hl.extend([MULTILINE_COMMENT] * len(end))
                    i += len(end)
                    in_comment = False
                    prev_sep = True
                else:
                    hl.append(MULTILINE_COMMENT)
                    i += 1
                continue
            if rendered.startswith(start, i):
                hl.extend([MULTILINE_COMMENT] * len(start))
                i += len(start)
                in_comment = True
                continue

        # string and char literals
        if in_string is not None:
            tag = _literal_tag(in_string)
            hl.append(tag)
            if c == "\\" and i + 1 < n:
                hl.append(tag)
                i += 2
                continue
            if c == in_string:
                in_string = None
            i += 1
            prev_sep = True
            continue
        if c in ('"', "'"):
            in_string = c
            hl.append(_literal_tag(c))
            i += 1
            continue

        # numbers
        if (c.isdigit() and (prev_sep or prev_hl == NUMBER)) or (
            c == "." and prev_hl == NUMBER
        ):
            hl.append(NUMBER)
            i += 1
            prev_sep = False
            continue

        # keywords
        if prev_sep:
            matched = _match_keyword(rendered, i, profile)
            if matched is not None:
                length, tag = matched
                hl.extend([tag] * length)
                i += length
                prev_sep = False
                continue

        hl.append(NORMAL)
        prev_sep = is_separator(c)
        i += 1

    return hl, in_comment


def _match_keyword(
    rendered: str, i: int, profile: LanguageProfile
) -> Optional[tuple[int, Highlight]]:
    for color, words in profile.keywords:
        for word in words:
            end = i + len(word)
            if not rendered.startswith(word, i):
                continue
            if end == len(rendered) or is_separator(rendered[end]):
                return len(word), Highlight.keyword(color)
    return None


def update_syntax(
    at: int, rows: Sequence[Row], profile: Optional[LanguageProfile]
) -> int:
    """Re-classify ``rows[at]`` and cascade forward while the comment flag flips.

    Args:
        at: Index of the row whose rendered text changed.
        rows: The full row sequence, used for the previous row's comment state
            and for the forward cascade.
        profile: Dialect to highlight with, or None for plain text.

    Returns:
        The number of rows that were classified (1 + length of the cascade).
    """
    classified = 0
    while at < len(rows):
        row = rows[at]
        carried = at > 0 and rows[at - 1].ends_in_block_comment
        row.highlight, open_at_end = classify_row(row.rendered, profile, carried)
        assert len(row.highlight) == len(row.rendered), (
            f"row {at}: {len(row.highlight)} tags for {len(row.rendered)} characters"
        )
        classified += 1
        changed = row.ends_in_block_comment != open_at_end
        row.ends_in_block_comment = open_at_end
        if not changed:
            break
        at += 1
    if classified > 1:
        logger.debug("Block comment state cascaded over %d rows", classified - 1)
    return classified
