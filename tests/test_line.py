import pytest

from hectoedit.annotations import Annotation, AnnotationType
from hectoedit.line import GraphemeWidth, Line


def test_str_round_trip():
    assert str(Line("hello world")) == "hello world"


def test_len_is_utf8_byte_length():
    text = "äöü x"
    assert len(Line(text)) == len(text.encode("utf-8"))


def test_combining_sequence_is_one_grapheme():
    line = Line("e\u0301x")
    assert line.grapheme_count() == 2


def test_wide_graphemes_take_two_columns():
    line = Line("日本語")
    assert line.width() == int(GraphemeWidth.FULL) * line.grapheme_count()


def test_width_until_bounds():
    line = Line("a日b")
    assert line.width_until(0) == 0
    assert line.width_until(line.grapheme_count()) == line.width()


def test_tab_is_rendered_as_space():
    line = Line("a\tb")
    assert line.get_visible_graphemes(0, line.width()) == "a b"


def test_control_character_replacement():
    line = Line("\x01")
    assert line.get_visible_graphemes(0, 10) == "▯"


def test_zero_width_character_replacement():
    line = Line("\u200b")
    assert line.get_visible_graphemes(0, 10) == "·"


def test_wide_whitespace_replacement_is_half_width():
    line = Line("\u3000")
    assert line.get_visible_graphemes(0, 10) == "␣"
    assert line.width() == int(GraphemeWidth.HALF)


def test_empty_range_gives_empty_string():
    line = Line("hello")
    assert line.get_visible_graphemes(3, 3) == ""
    assert line.get_visible_graphemes(4, 2) == ""


def test_truncation_to_range():
    line = Line("hello world")
    assert line.get_visible_graphemes(0, 5) == "hello"
    assert line.get_visible_graphemes(6, 11) == "world"


def test_wide_grapheme_clipped_on_the_right():
    assert Line("日本").get_visible_graphemes(0, 3) == "日⋯"


def test_wide_grapheme_clipped_on_the_left():
    assert Line("日本").get_visible_graphemes(1, 4) == "⋯本"


def test_annotations_follow_visible_text():
    line = Line("let x")
    annotation = Annotation(AnnotationType.KEYWORD, 0, 3)
    parts = list(line.get_annotated_visible_substr(0, line.width(), [annotation]))
    assert parts[0].string == "let"
    assert parts[0].annotation_type is AnnotationType.KEYWORD
    assert "".join(part.string for part in parts) == "let x"


def test_insert_then_delete_restores_line():
    line = Line("hello")
    line.insert_char("X", 2)
    assert str(line) == "heXllo"
    line.delete(2)
    assert str(line) == "hello"


def test_insert_past_end_appends():
    line = Line("ab")
    line.insert_char("c", line.grapheme_count())
    assert str(line) == "abc"


def test_append_char_grows_by_one_grapheme():
    line = Line("日本")
    before = line.grapheme_count()
    line.append_char("語")
    assert line.grapheme_count() == before + 1
    assert str(line).endswith("語")


def test_delete_out_of_range_is_noop():
    line = Line("abc")
    line.delete(10)
    assert str(line) == "abc"


def test_delete_last_on_empty_line():
    line = Line()
    line.delete_last()
    assert str(line) == ""
    assert line.grapheme_count() == 0


def test_delete_last_removes_whole_grapheme():
    line = Line("ae\u0301")
    line.delete_last()
    assert str(line) == "a"


def test_split_and_append_round_trip():
    line = Line("hello world")
    tail = line.split(5)
    assert str(line) == "hello"
    assert str(tail) == " world"
    line.append(tail)
    assert str(line) == "hello world"


def test_split_past_end_returns_empty_line():
    line = Line("abc")
    tail = line.split(3)
    assert str(tail) == ""
    assert str(line) == "abc"


def test_search_forward_finds_match_after_start():
    line = Line("abcabc")
    found = line.search_forward("abc", 1)
    assert found >= 1
    assert str(line)[found : found + 3] == "abc"


def test_search_forward_at_end_returns_none():
    line = Line("abc")
    assert line.search_forward("a", line.grapheme_count()) is None


def test_search_backward_finds_match_before_start():
    line = Line("abcabc")
    found = line.search_backward("abc", 5)
    assert found is not None and found < 5
    assert str(line)[found : found + 3] == "abc"


def test_search_backward_at_start_returns_none():
    assert Line("abc").search_backward("a", 0) is None


def test_search_ignores_partial_grapheme_matches():
    assert Line("e\u0301x").search_forward("e", 0) is None


def test_search_past_grapheme_count_raises():
    with pytest.raises(IndexError):
        Line("abc").search_forward("a", 7)


def test_find_all_returns_aligned_byte_indices():
    text = "ä ä"
    line = Line(text)
    matches = line.find_all("ä", 0, len(line))
    data = text.encode("utf-8")
    needle = "ä".encode("utf-8")
    assert [grapheme for _, grapheme in matches] == [0, 2]
    assert all(data[start : start + len(needle)] == needle for start, _ in matches)


def test_find_all_misaligned_range_returns_nothing():
    line = Line("ä")
    assert line.find_all("ä", 1, len(line)) == []