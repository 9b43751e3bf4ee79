from pathlib import Path

import pytest

from hectoedit.annotations import AnnotationType, FileType
from hectoedit.buffer import Buffer
from hectoedit.highlighter import Highlighter
from hectoedit.line import Line
from hectoedit.prelude import Location


def make(*texts):
    return Buffer([Line(text) for text in texts])


def texts(buffer):
    return [str(line) for line in buffer.lines]


def test_load_splits_lines_and_strips_crlf(tmp_path: Path):
    path = tmp_path / "main.rs"
    path.write_bytes(b"fn main() {\r\n  x\n}\n")
    buffer = Buffer.load(path)
    assert texts(buffer) == ["fn main() {", "  x", "}"]
    assert len(buffer) == 3
    assert buffer.is_file_loaded()
    assert buffer.file_info.file_type is FileType.RUST
    assert buffer.dirty is False


def test_load_keeps_inner_empty_lines_and_unterminated_last(tmp_path: Path):
    path = tmp_path / "notes.txt"
    path.write_text("a\n\nb", encoding="utf-8")
    assert texts(Buffer.load(path)) == ["a", "", "b"]


def test_load_empty_file(tmp_path: Path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    buffer = Buffer.load(path)
    assert len(buffer) == 0
    assert buffer.file_info.file_type is FileType.TEXT


def test_load_missing_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        Buffer.load(tmp_path / "missing.txt")


def test_new_buffer_has_no_file():
    buffer = Buffer()
    assert not buffer.is_file_loaded()
    assert len(buffer) == 0


def test_insert_char_past_last_line_appends_line():
    buffer = make("abc")
    buffer.insert_char("x", Location(grapheme_idx=0, line_idx=1))
    assert texts(buffer) == ["abc", "x"]
    assert buffer.dirty


def test_insert_char_inside_line():
    buffer = make("ac")
    buffer.insert_char("b", Location(grapheme_idx=1, line_idx=0))
    assert texts(buffer) == ["abc"]
    assert buffer.dirty


def test_insert_char_far_beyond_end_is_ignored():
    buffer = make("abc")
    buffer.insert_char("x", Location(grapheme_idx=0, line_idx=5))
    assert texts(buffer) == ["abc"]
    assert buffer.dirty is False


def test_delete_at_line_end_joins_next_line():
    buffer = make("ab", "cd")
    buffer.delete(Location(grapheme_idx=2, line_idx=0))
    assert texts(buffer) == ["ab" + "cd"]
    assert buffer.dirty


def test_delete_inside_line():
    buffer = make("abc")
    buffer.delete(Location(grapheme_idx=1, line_idx=0))
    assert texts(buffer) == ["ac"]


def test_delete_at_end_of_last_line_does_nothing():
    buffer = make("abc")
    buffer.delete(Location(grapheme_idx=3, line_idx=0))
    assert texts(buffer) == ["abc"]
    assert buffer.dirty is False


def test_insert_newline_splits_line():
    buffer = make("hello world")
    buffer.insert_newline(Location(grapheme_idx=5, line_idx=0))
    assert texts(buffer) == ["hello", " world"]
    assert buffer.dirty


def test_insert_newline_past_last_line_adds_empty_line():
    buffer = make("abc")
    buffer.insert_newline(Location(grapheme_idx=0, line_idx=1))
    assert texts(buffer) == ["abc", ""]


def test_grapheme_count_and_width_out_of_range_are_zero():
    buffer = make("abc")
    assert buffer.grapheme_count(0) == 3
    assert buffer.grapheme_count(7) == 0
    assert buffer.width_until(7, 2) == 0


def test_width_until_matches_line_width():
    buffer = make("日本")
    assert buffer.width_until(0, 2) == Line("日本").width()


def test_search_forward_wraps_to_next_line():
    buffer = make("abc", "xbc")
    found = buffer.search_forward("bc", Location(grapheme_idx=2, line_idx=0))
    assert found == Location(grapheme_idx=1, line_idx=1)
    wrapped = buffer.search_forward("bc", Location(grapheme_idx=2, line_idx=1))
    assert wrapped == Location(grapheme_idx=1, line_idx=0)


def test_search_forward_searches_start_line_twice():
    buffer = make("ab ab")
    found = buffer.search_forward("ab", Location(grapheme_idx=4, line_idx=0))
    assert found == Location(grapheme_idx=0, line_idx=0)


def test_search_forward_tolerates_location_past_line_end():
    buffer = make("ab", "ab")
    found = buffer.search_forward("ab", Location(grapheme_idx=3, line_idx=0))
    assert found == Location(grapheme_idx=0, line_idx=1)


def test_search_backward_wraps_to_last_line():
    buffer = make("abc", "xbc")
    found = buffer.search_backward("bc", Location(grapheme_idx=0, line_idx=0))
    assert found == Location(grapheme_idx=1, line_idx=1)


def test_search_result_points_at_query():
    buffer = make("one", "two three", "four")
    found = buffer.search_backward("three", Location(grapheme_idx=0, line_idx=2))
    line = str(buffer.lines[found.line_idx])
    assert line[found.grapheme_idx:].startswith("three")


def test_search_empty_query_or_buffer_returns_none():
    assert make("abc").search_forward("", Location()) is None
    assert make("abc").search_backward("", Location()) is None
    assert Buffer().search_forward("a", Location()) is None
    assert make("abc").search_forward("zzz", Location()) is None


def test_save_as_round_trip(tmp_path: Path):
    buffer = make("first", "second")
    buffer.insert_char("!", Location(grapheme_idx=6, line_idx=1))
    target = tmp_path / "out.rs"
    buffer.save_as(target)
    assert buffer.dirty is False
    assert buffer.is_file_loaded()
    assert buffer.file_info.file_type is FileType.RUST
    assert texts(Buffer.load(target)) == texts(buffer)


def test_save_writes_to_loaded_path(tmp_path: Path):
    path = tmp_path / "doc.txt"
    path.write_text("a\n", encoding="utf-8")
    buffer = Buffer.load(path)
    buffer.insert_char("b", Location(grapheme_idx=1, line_idx=0))
    buffer.save()
    assert buffer.dirty is False
    assert texts(Buffer.load(path)) == texts(buffer)


def test_save_without_path_raises():
    with pytest.raises(ValueError):
        make("abc").save()


def test_highlighted_substring_marks_matches():
    buffer = make("abc")
    highlighter = Highlighter("b", None, FileType.TEXT)
    buffer.highlight(0, highlighter)
    annotated = buffer.get_highlighted_substring(0, 0, 10, highlighter)
    parts = [(part.string, part.annotation_type) for part in annotated]
    assert parts == [("a", None), ("b", AnnotationType.MATCH), ("c", None)]


def test_highlighted_substring_past_end_is_none():
    buffer = make("abc")
    assert buffer.get_highlighted_substring(3, 0, 10, Highlighter()) is None