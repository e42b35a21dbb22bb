# tests/test_core/test_buffer.py
"""Buffer Tests
========================

Unit tests for `tedi.core.Buffer`.

This test module verifies that:

1. Character insert/delete and row split/join are exact inverses.
2. Every edit keeps ``len(highlight) == len(rendered)`` on every row.
3. Block comment state stays correct when rows are inserted, split, joined
   or deleted around an open comment.
4. The dirty counter counts edits and is reset by load and save.
"""

import pytest

from tedi.core.Buffer import Buffer
from tedi.core.Classifier import classify_row
from tedi.core.LanguageProfile import MULTILINE_COMMENT, NORMAL, Highlight


def assert_consistent(buf: Buffer) -> None:
    """Every row carries exactly the state a full rescan would give it."""
    carried = False
    for idx, row in enumerate(buf):
        assert len(row.highlight) == len(row.rendered), f"row {idx}"
        expected, carried = classify_row(row.rendered, buf.profile, carried)
        assert row.highlight == expected, f"row {idx}"
        assert row.ends_in_block_comment == carried, f"row {idx}"


def test_load_renders_and_classifies(c_buffer: Buffer) -> None:
    assert len(c_buffer) == 6
    assert c_buffer.file_type == "c"
    assert c_buffer[1].rendered.startswith("    int")
    assert c_buffer[2].ends_in_block_comment is True
    assert c_buffer[3].ends_in_block_comment is False
    assert c_buffer.dirty == 0
    assert_consistent(c_buffer)


def test_plain_buffer_has_no_file_type() -> None:
    buf = Buffer(["a"])
    assert buf.file_type == "no ft"
    assert buf[0].highlight == [NORMAL]


def test_from_lines_picks_profile_by_extension() -> None:
    assert Buffer.from_lines(["x"], "lib.rs").file_type == "rust"
    assert Buffer.from_lines(["x"], "notes.txt").profile is None


def test_invalid_tab_width_is_rejected() -> None:
    with pytest.raises(ValueError):
        Buffer(["a"], tab_width=0)


def test_insert_char_then_delete_restores_row(c_buffer: Buffer) -> None:
    before = c_buffer[0].raw
    c_buffer.insert_char(0, 3, "X")
    assert c_buffer[0].raw == "intX main() {"
    assert c_buffer.delete_char(0, 4) == (0, 3)
    assert c_buffer[0].raw == before
    assert c_buffer.dirty == 2
    assert_consistent(c_buffer)


def test_insert_char_on_virtual_row_appends_a_row(c_buffer: Buffer) -> None:
    c_buffer.insert_char(len(c_buffer), 0, "z")
    assert len(c_buffer) == 7
    assert c_buffer[6].raw == "z"
    assert_consistent(c_buffer)


def test_delete_char_at_document_start_is_a_no_op(c_buffer: Buffer) -> None:
    assert c_buffer.delete_char(0, 0) is None
    assert c_buffer.delete_char(len(c_buffer), 0) is None
    assert c_buffer.dirty == 0


def test_newline_then_backspace_restores_rows(c_buffer: Buffer) -> None:
    lines = c_buffer.lines()
    c_buffer.insert_newline(0, 4)
    assert c_buffer[0].raw == "int "
    assert c_buffer[1].raw == "main() {"
    assert c_buffer.delete_char(1, 0) == (0, 4)
    assert c_buffer.lines() == lines
    assert_consistent(c_buffer)


def test_newline_at_column_zero_inserts_empty_row_before(c_buffer: Buffer) -> None:
    c_buffer.insert_newline(1, 0)
    assert c_buffer[1].raw == ""
    assert c_buffer[2].raw == "\tint x = 42; // answer"
    assert_consistent(c_buffer)


def test_opening_a_block_comment_cascades_down(c_profile) -> None:
    buf = Buffer(["a", "b", "c"], profile=c_profile)
    buf.insert_char(0, 1, "/")
    buf.insert_char(0, 2, "*")
    assert [row.ends_in_block_comment for row in buf] == [True, True, True]
    assert buf[2].highlight == [MULTILINE_COMMENT]
    assert_consistent(buf)


def test_closing_a_block_comment_cascades_down(c_profile) -> None:
    buf = Buffer(["/*", "b", "c"], profile=c_profile)
    assert buf[2].highlight == [MULTILINE_COMMENT]
    buf.delete_char(0, 2)
    assert [row.ends_in_block_comment for row in buf] == [False, False, False]
    assert buf[2].highlight == [NORMAL]
    assert_consistent(buf)


def test_splitting_inside_a_comment_keeps_state(c_profile) -> None:
    buf = Buffer(["/* abc", "def */", "if"], profile=c_profile)
    buf.insert_newline(0, 4)
    assert buf.lines() == ["/* a", "bc", "def */", "if"]
    assert buf[1].highlight == [MULTILINE_COMMENT] * 2
    assert buf[3].highlight == [Highlight.keyword("yellow")] * 2
    assert_consistent(buf)


def test_joining_rows_across_a_comment(c_profile) -> None:
    buf = Buffer(["x /*", "y */", "z"], profile=c_profile)
    buf.join_rows(1)
    assert buf.lines() == ["x /*y */", "z"]
    assert buf[0].ends_in_block_comment is False
    assert buf[1].highlight == [NORMAL]
    assert_consistent(buf)


def test_insert_and_delete_row(c_profile) -> None:
    buf = Buffer(["/*", "a", "*/"], profile=c_profile)
    buf.insert_row(1, "new")
    assert buf[1].highlight == [MULTILINE_COMMENT] * 3
    assert buf.delete_row(0) == "/*"
    assert buf.lines() == ["new", "a", "*/"]
    assert_consistent(buf)
    with pytest.raises(IndexError):
        buf.insert_row(10, "x")
    with pytest.raises(IndexError):
        buf.delete_row(3)


def test_every_edit_keeps_tags_aligned(c_buffer: Buffer) -> None:
    c_buffer.insert_char(2, 0, "\t")
    c_buffer.insert_newline(3, 2)
    c_buffer.delete_char(4, 0)
    c_buffer.insert_char(0, 0, '"')
    c_buffer.join_rows(5)
    c_buffer.delete_row(0)
    assert_consistent(c_buffer)


def test_set_tab_width_rerenders(c_buffer: Buffer) -> None:
    c_buffer.set_tab_width(8)
    assert c_buffer[1].rendered.startswith("        int")
    assert_consistent(c_buffer)


def test_to_text_and_byte_length() -> None:
    buf = Buffer(["ab", "ç"])
    assert buf.to_text() == "ab\nç"
    assert buf.byte_length() == 5


def test_mark_saved_resets_dirty() -> None:
    buf = Buffer(["a"])
    buf.insert_char(0, 1, "b")
    assert buf.dirty == 1
    buf.mark_saved("out.txt")
    assert buf.dirty == 0
    assert buf.filename == "out.txt"
