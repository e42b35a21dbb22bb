# tedi/core/Buffer.py
"""tedi.core.Buffer
===================

Ordered sequence of `Row` objects plus the identity of the file they came from.

The buffer owns every structural edit: inserting and deleting characters,
splitting a row on newline, joining a row onto its predecessor, inserting and
deleting whole rows. After each edit it re-renders the touched rows and
re-classifies them with the selected `LanguageProfile`; the classifier cascades
forward on its own when a block-comment flag flips.

Row-insertion bookkeeping: a freshly inserted row starts with the comment flag
that its successor last saw from its old predecessor. The cascade stops as soon
as a row's flag is unchanged, so this seeding keeps the successor correct
without rescanning it when nothing changed.

Every structural edit increments `dirty`; a successful save resets it.
"""

import logging
from typing import Iterable, Iterator, Optional

from tedi.core.Classifier import update_syntax
from tedi.core.LanguageProfile import LanguageProfile, select_profile
from tedi.core.Row import DEFAULT_TAB_WIDTH, Row


logger = logging.getLogger("tedi.core")


class Buffer:
    """The text of one open document.

    Attributes:
        rows (list[Row]): Line ``i`` of the document is ``rows[i]``.
        filename (Optional[str]): File identity used when saving, None for a new buffer.
        dirty (int): Number of edits since the last load or save. 0 means unmodified.
        profile (Optional[LanguageProfile]): Dialect used for highlighting.
        tab_width (int): Tab stop distance used when rendering rows.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        filename: Optional[str] = None,
        profile: Optional[LanguageProfile] = None,
        tab_width: int = DEFAULT_TAB_WIDTH,
    ) -> None:
        if tab_width < 1:
            raise ValueError(f"tab_width must be positive, got {tab_width}")
        self.filename: Optional[str] = filename
        self.profile: Optional[LanguageProfile] = profile
        self.tab_width: int = tab_width
        self.dirty: int = 0
        self.rows: list[Row] = []
        self.load(lines or [])

    # --- Construction / content source ---
    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        filename: Optional[str] = None,
        tab_width: int = DEFAULT_TAB_WIDTH,
    ) -> "Buffer":
        """Create a buffer, picking the dialect from *filename*'s extension."""
        return cls(lines, filename, select_profile(filename), tab_width)

    def load(self, lines: Iterable[str]) -> None:
        """Replace the whole content with *lines*. Resets the dirty counter."""
        self.rows = [Row(raw=line) for line in lines]
        for row in self.rows:
            row.render(self.tab_width)
        self._reclassify_all()
        self.dirty = 0
        logger.debug("Buffer loaded: %d rows, filename=%r", len(self.rows), self.filename)

    def set_profile(self, profile: Optional[LanguageProfile]) -> None:
        self.profile = profile
        self._reclassify_all()

    def select_profile_for(self, filename: Optional[str]) -> Optional[LanguageProfile]:
        """Select the dialect by *filename*'s extension and re-highlight everything."""
        self.set_profile(select_profile(filename))
        return self.profile

    def set_tab_width(self, tab_width: int) -> None:
        if tab_width < 1:
            raise ValueError(f"tab_width must be positive, got {tab_width}")
        self.tab_width = tab_width
        for row in self.rows:
            row.render(tab_width)
        self._reclassify_all()

    def _reclassify_all(self) -> None:
        for row in self.rows:
            row.ends_in_block_comment = False
        for at in range(len(self.rows)):
            update_syntax(at, self.rows, self.profile)

    # --- Read access ---
    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, at: int) -> Row:
        return self.rows[at]

    @property
    def number_of_rows(self) -> int:
        return len(self.rows)

    @property
    def file_type(self) -> str:
        return self.profile.file_type if self.profile else "no ft"

    def row_len(self, at: int) -> int:
        """Raw length of row *at*; 0 for the virtual row past the end."""
        return len(self.rows[at].raw) if 0 <= at < len(self.rows) else 0

    def lines(self) -> list[str]:
        return [row.raw for row in self.rows]

    # --- Content sink ---
    def to_text(self) -> str:
        """Raw rows joined by newline, without a trailing newline."""
        return "\n".join(row.raw for row in self.rows)

    def byte_length(self, encoding: str = "utf-8") -> int:
        return len(self.to_text().encode(encoding))

    def mark_saved(self, filename: Optional[str] = None) -> None:
        if filename is not None:
            self.filename = filename
        self.dirty = 0

    # --- Internal helpers ---
    def _refresh(self, at: int) -> None:
        self.rows[at].render(self.tab_width)
        update_syntax(at, self.rows, self.profile)

    def _seed_flag(self, at: int) -> bool:
        # What the row that will follow an insertion at `at` currently sees.
        return at > 0 and self.rows[at - 1].ends_in_block_comment

    # --- Row level edits ---
    def insert_row(self, at: int, text: str = "") -> None:
        """Insert a new row holding *text* before index *at* (``at == len`` appends)."""
        if not 0 <= at <= len(self.rows):
            raise IndexError(f"insert_row: index {at} outside 0..{len(self.rows)}")
        row = Row(raw=text, ends_in_block_comment=self._seed_flag(at))
        self.rows.insert(at, row)
        self._refresh(at)
        self.dirty += 1

    def delete_row(self, at: int) -> str:
        """Remove row *at* and return its raw content."""
        if not 0 <= at < len(self.rows):
            raise IndexError(f"delete_row: index {at} outside 0..{len(self.rows) - 1}")
        removed = self.rows.pop(at)
        if at < len(self.rows):
            predecessor_flag = at > 0 and self.rows[at - 1].ends_in_block_comment
            if predecessor_flag != removed.ends_in_block_comment:
                update_syntax(at, self.rows, self.profile)
        self.dirty += 1
        return removed.raw

    # --- Character level edits ---
    def insert_char(self, row: int, col: int, ch: str) -> None:
        """Insert *ch* at ``(row, col)``; ``row == len`` appends a new row first."""
        if row == len(self.rows):
            self.insert_row(row, "")
        line = self.rows[row]
        col = max(0, min(col, len(line.raw)))
        line.raw = line.raw[:col] + ch + line.raw[col:]
        self._refresh(row)
        self.dirty += 1

    def delete_char(self, row: int, col: int) -> Optional[tuple[int, int]]:
        """Delete the character before ``(row, col)``.

        At column 0 the row is joined onto the end of the previous row.

        Returns:
            The cursor position after the deletion, or None if nothing was
            deleted (document start, or the virtual row past the end).
        """
        if row >= len(self.rows) or (row == 0 and col == 0):
            return None
        line = self.rows[row]
        if col > 0:
            col = min(col, len(line.raw))
            line.raw = line.raw[: col - 1] + line.raw[col:]
            self._refresh(row)
            self.dirty += 1
            return row, col - 1
        return self.join_rows(row)

    def join_rows(self, row: int) -> tuple[int, int]:
        """Append row *row* onto row ``row - 1`` and remove it.

        Returns:
            The join point, i.e. the position where the second row's text now starts.
        """
        if not 0 < row < len(self.rows):
            raise IndexError(f"join_rows: index {row} outside 1..{len(self.rows) - 1}")
        removed = self.rows.pop(row)
        previous = self.rows[row - 1]
        join_col = len(previous.raw)
        previous.raw += removed.raw
        # The row now following the merged one last saw the removed row's flag.
        previous.ends_in_block_comment = removed.ends_in_block_comment
        self._refresh(row - 1)
        self.dirty += 1
        logger.debug("Joined row %d onto row %d at column %d", row, row - 1, join_col)
        return row - 1, join_col

    def insert_newline(self, row: int, col: int) -> None:
        """Break the line at ``(row, col)``.

        At column 0 an empty row is inserted before *row*; otherwise the row is
        truncated to ``[0, col)`` and a new row holding ``[col, end)`` follows it.
        """
        if col == 0 or row >= len(self.rows):
            self.insert_row(row, "")
            return
        line = self.rows[row]
        col = min(col, len(line.raw))
        tail = line.raw[col:]
        old_flag = line.ends_in_block_comment
        line.raw = line.raw[:col]
        self.rows.insert(row + 1, Row(raw=tail, ends_in_block_comment=old_flag))
        self.rows[row + 1].render(self.tab_width)
        self._refresh(row)
        update_syntax(row + 1, self.rows, self.profile)
        self.dirty += 1
