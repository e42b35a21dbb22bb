# tedi/core/Row.py
"""tedi.core.Row
================

One line of text held by the buffer.

`raw` is the authoritative content, exactly as typed or read from disk. Every
other field is derived from it:

- `rendered` is the tab-expanded display form, what actually occupies screen
  columns. ``len(rendered) >= len(raw)``, equal only when the line has no tabs.
- `highlight` holds exactly one tag per rendered character.
- `ends_in_block_comment` is True when a block comment is still open at the end
  of the line.

Rendering (`render`) invalidates `highlight`; the owner (`tedi.core.Buffer`)
re-classifies the row right after, so the two arrays never drift apart.

The module also provides the two coordinate mappings between raw columns and
rendered columns used for cursor placement and horizontal scrolling.
"""

from dataclasses import dataclass, field

from tedi.core.LanguageProfile import Highlight


DEFAULT_TAB_WIDTH = 4


def expand_tabs(raw: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Return *raw* with every tab replaced by spaces up to the next tab stop."""
    if "\t" not in raw:
        return raw
    out: list[str] = []
    col = 0
    for ch in raw:
        if ch == "\t":
            pad = tab_width - (col % tab_width)
            out.append(" " * pad)
            col += pad
        else:
            out.append(ch)
            col += 1
    return "".join(out)


@dataclass
class Row:
    """A single buffer line with its derived display state."""

    raw: str = ""
    rendered: str = ""
    highlight: list[Highlight] = field(default_factory=list)
    ends_in_block_comment: bool = False

    def __len__(self) -> int:
        return len(self.raw)

    @property
    def rendered_len(self) -> int:
        return len(self.rendered)

    def render(self, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        """Recompute `rendered` from `raw` and drop the now stale highlight."""
        self.rendered = expand_tabs(self.raw, tab_width)
        self.highlight = []

    # --- Coordinate mapping ---
    def raw_to_rendered(self, col: int, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
        """Map a raw column to the rendered column where it is displayed.

        Columns past the end of the line are treated as the end of the line.
        """
        rx = 0
        for ch in self.raw[:col]:
            if ch == "\t":
                rx += (tab_width - 1) - (rx % tab_width)
            rx += 1
        return rx

    def rendered_to_raw(self, rcol: int, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
        """Map a rendered column back to the raw column that owns it.

        Every rendered column inside a tab's expansion maps to the tab itself, so
        this is only an approximate inverse of `raw_to_rendered`. Returns 0 for
        column 0 or an empty row, and the raw length when *rcol* lies at or past
        the end of the rendered line.
        """
        if rcol <= 0 or not self.raw:
            return 0
        width = 0
        for idx, ch in enumerate(self.raw):
            if ch == "\t":
                width += (tab_width - 1) - (width % tab_width)
            width += 1
            if width > rcol:
                return idx
        return len(self.raw)
