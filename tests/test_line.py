from __future__ import annotations

import pytest

from linebuffer.buffer import (
    RESET_MARKER,
    HighlightClass,
    Line,
    SearchDirection,
)

NONE = HighlightClass.NONE
NUMBER = HighlightClass.NUMBER
SEARCH = HighlightClass.SEARCH


def make_line(text: str, word: str | None = None) -> Line:
    line = Line(text)
    line.highlight(word)
    return line


@pytest.mark.parametrize("text", ["", "a", "hello world", "tab\there", "1234567890"])
def test_ascii_length_matches_character_count(text: str) -> None:
    assert len(Line(text)) == len(text)


def test_length_counts_grapheme_clusters() -> None:
    assert len(Line("e\u0301a")) == 2
    assert len(Line("\U0001F1E9\U0001F1EAx")) == 2
    assert Line("não").grapheme_length == 3


def test_new_line_starts_without_highlighting() -> None:
    line = Line("abc")

    assert line.highlighting == ()
    assert not line.is_empty()
    assert Line().is_empty()


def test_insert_in_middle_and_past_end() -> None:
    line = Line("ac")

    line.insert(1, "b")
    line.insert(99, "d")

    assert line.text == "abcd"
    assert len(line) == 4


def test_insert_keeps_combining_cluster_intact() -> None:
    line = Line("e\u0301x")

    line.insert(1, "y")

    assert line.text == "e\u0301yx"
    assert len(line) == 3


def test_delete_removes_whole_grapheme() -> None:
    line = Line("e\u0301x")

    line.delete(0)

    assert line.text == "x"
    assert len(line) == 1


def test_delete_past_end_is_noop() -> None:
    line = Line("abc")

    line.delete(3)
    line.delete(50)

    assert line.text == "abc"


@pytest.mark.parametrize("position", [0, 2, 5, 6])
def test_insert_then_delete_restores_text(position: int) -> None:
    original = "héllo\u0301!"
    line = Line(original)

    line.insert(position, "Z")
    line.delete(position)

    assert line.text == original


@pytest.mark.parametrize("position", [0, 3, 5, 11, 40])
def test_split_then_append_reconstructs(position: int) -> None:
    original = "héllo wörld"
    line = Line(original)

    remainder = line.split(position)
    line.append(remainder)

    assert line.text == original
    assert len(line) == 11


def test_split_returns_remainder_and_truncates() -> None:
    line = Line("\U0001F1E9\U0001F1EAab")

    remainder = line.split(1)

    assert line.text == "\U0001F1E9\U0001F1EA"
    assert len(line) == 1
    assert remainder.text == "ab"
    assert len(remainder) == 2


def test_find_forward_and_backward() -> None:
    line = Line("hello world")

    assert line.find("o", 0, SearchDirection.FORWARD) == 4
    assert line.find("o", 5, SearchDirection.FORWARD) == 7
    assert line.find("o", 11, SearchDirection.BACKWARD) == 7
    assert line.find("o", 7, SearchDirection.BACKWARD) == 4


def test_find_single_occurrence_agrees_in_both_directions() -> None:
    line = Line("café \U0001F1E9\U0001F1EA needle end")

    forward = line.find("needle", 0, SearchDirection.FORWARD)
    backward = line.find("needle", len(line), SearchDirection.BACKWARD)

    assert forward == 7
    assert backward == forward


def test_find_rejects_empty_query_and_out_of_range_start() -> None:
    line = Line("abc")

    assert line.find("", 0, SearchDirection.FORWARD) is None
    assert line.find("a", 4, SearchDirection.FORWARD) is None
    assert line.find("z", 0, SearchDirection.FORWARD) is None


def test_find_reports_grapheme_index_after_multibyte_text() -> None:
    assert Line("a\u00f1b").find("b", 0) == 2
    assert Line("\U0001F1E9\U0001F1EAab").find("a", 0) == 1


def test_find_skips_hits_inside_a_cluster() -> None:
    assert Line("e\u0301 e").find("\u0301", 0) is None
    assert Line("xe\u0301e").find("e", 0) == 1
    assert Line("xe\u0301e").find("\u0301e", 0) is None


def test_backward_find_excludes_start_column() -> None:
    line = Line("abab")

    assert line.find("ab", 4, SearchDirection.BACKWARD) == 2
    assert line.find("ab", 3, SearchDirection.BACKWARD) == 0
    assert line.find("ab", 1, SearchDirection.BACKWARD) is None


def test_highlight_word_and_digits() -> None:
    line = make_line("xab1ab", "ab")

    assert line.highlighting == (NONE, SEARCH, SEARCH, NUMBER, SEARCH, SEARCH)


def test_highlight_matches_do_not_overlap() -> None:
    line = make_line("aaa", "aa")

    assert line.highlighting == (SEARCH, SEARCH, NONE)


def test_highlight_without_word_marks_digits_only() -> None:
    line = make_line("e\u0301 12")

    assert line.highlighting == (NONE, NONE, NUMBER, NUMBER)
    assert len(line.highlighting) == len(line)


def test_highlight_uses_grapheme_positions_for_matches() -> None:
    line = make_line("e\u0301ab1", "ab")

    assert line.highlighting == (NONE, SEARCH, SEARCH, NUMBER)


def test_render_emits_marker_per_transition_and_trailing_reset() -> None:
    line = make_line("a1b")

    rendered = line.render(0, 3)

    assert rendered == (
        "a" + NUMBER.marker() + "1" + NONE.marker() + "b" + RESET_MARKER
    )


def test_render_starts_with_marker_when_first_grapheme_is_highlighted() -> None:
    line = make_line("ab c", "ab")

    rendered = line.render(0, 4)

    assert rendered == SEARCH.marker() + "ab" + NONE.marker() + " c" + RESET_MARKER


def test_render_empty_range_still_resets() -> None:
    line = make_line("abc")

    assert line.render(2, 1) == RESET_MARKER
    assert Line().render(0, 10) == RESET_MARKER


def test_render_expands_tabs() -> None:
    line = make_line("\tx")

    assert line.render(0, 10) == "    x" + RESET_MARKER
    assert line.text == "\tx"


def test_render_clamps_end_to_byte_length() -> None:
    line = make_line("\u00f1")

    assert line.render(0, 100) == "\u00f1" + RESET_MARKER
    assert line.render(1, 100) == RESET_MARKER


def test_render_slices_by_grapheme() -> None:
    line = make_line("e\u0301xyz")

    assert line.render(1, 3) == "xy" + RESET_MARKER


def test_as_bytes_is_utf8() -> None:
    assert Line("\u00f1").as_bytes() == b"\xc3\xb1"
