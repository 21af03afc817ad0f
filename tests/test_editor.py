"""Tests for buffer insertion at editor positions."""

import pytest

from newmethod.core.editor import EditorContext, Position, insert_text, offset_of
from newmethod.core.errors import NoActiveTarget


class TestOffsetOf:
    def test_start_of_line(self):
        assert offset_of("ab\ncd\n", Position(1, 0)) == 3

    def test_column_clamped_to_line(self):
        assert offset_of("ab\ncd", Position(0, 10)) == 2

    def test_line_past_end_is_end_of_document(self):
        assert offset_of("ab\ncd", Position(5, 0)) == 5

    def test_crlf_line_end(self):
        assert offset_of("ab\r\ncd", Position(0, 9)) == 2


class TestInsertText:
    """Inserts are applied against the original document."""

    def test_cursor_and_two_lines_below(self):
        text = "l0\nl1\nl2\nl3\n"
        result = insert_text(text, [(Position(0, 2), " SIG"), (Position(2, 0), "BODY\n")])
        assert result == "l0 SIG\nl1\nBODY\nl2\nl3\n"

    def test_same_position_keeps_order(self):
        result = insert_text("x", [(Position(3, 0), "A"), (Position(5, 0), "B")])
        assert result == "xAB"

    def test_empty_document(self):
        assert insert_text("", [(Position(0, 0), "sig"), (Position(2, 0), "\nbody")]) == "sig\nbody"


class TestEditorContext:
    def test_require_file(self):
        assert EditorContext("/tmp/a.go").require_file() == "/tmp/a.go"

    def test_require_file_without_file(self):
        with pytest.raises(NoActiveTarget, match="no selected file"):
            EditorContext().require_file()

    def test_cursor(self):
        assert EditorContext("a", 3, 4).cursor == Position(3, 4)
