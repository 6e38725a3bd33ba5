"""Unit tests for offset -> line mapping."""

from java_lens.line_index import build_line_index, offset_to_line


class TestLineIndex:
    def test_line_starts(self):
        assert build_line_index("ab\ncd\n\nef") == [0, 3, 6, 7]

    def test_no_newline(self):
        assert build_line_index("abc") == [0]

    def test_offsets_map_to_lines(self):
        starts = build_line_index("ab\ncd\n\nef")
        assert offset_to_line(0, starts) == 1
        assert offset_to_line(2, starts) == 1  # the newline belongs to its line
        assert offset_to_line(3, starts) == 2
        assert offset_to_line(6, starts) == 3
        assert offset_to_line(8, starts) == 4

    def test_past_end_is_last_line(self):
        starts = build_line_index("a\nb")
        assert offset_to_line(100, starts) == 2

    def test_negative_offset_clamps_to_first_line(self):
        assert offset_to_line(-5, [0, 10]) == 1
