"""Tests for text reflow and matching."""

from wikiterm.text import (wrap_text, find_matches, find_url_spans, line_for_offset,
                           line_count, words_before_line, line_for_word, heading_lines)


def test_wrap_breaks_at_width():
    assert wrap_text("hello world foo", 11) == "hello world\nfoo\n"


def test_wrap_keeps_blank_lines():
    assert wrap_text("a\n\nb", 10) == "a\n\nb\n"


def test_wrap_long_word_gets_own_line():
    assert wrap_text("supercalifragilistic is long", 5) == "supercalifragilistic\nis\nlong\n"


def test_wrap_nonpositive_width_returns_text():
    assert wrap_text("some text", 0) == "some text"
    assert wrap_text("some text", -3) == "some text"


def test_wrapped_lines_fit_width():
    text = ("The Go programming language was designed at Google in 2007 to improve "
            "programming productivity in an era of multicore networked machines.\n\n"
            "It is syntactically similar to C.")
    for width in (10, 17, 30, 80):
        wrapped = wrap_text(text, width)
        assert wrapped.endswith("\n")
        for line in wrapped.splitlines():
            assert len(line) <= width or len(line.split()) == 1
        # Words and their order are unchanged
        assert wrapped.split() == text.split()


def test_wrap_empty_text():
    assert wrap_text("", 20) == "\n"


def test_find_matches_overlapping():
    assert find_matches("aaaa", "aa") == [0, 1, 2]


def test_find_matches_case_insensitive():
    assert find_matches("Hello World", "world") == [6]
    assert find_matches("Go go GO", "gO") == [0, 3, 6]


def test_find_matches_empty_query():
    assert find_matches("anything", "") == []


def test_find_matches_no_match():
    assert find_matches("abc", "xyz") == []


def test_find_matches_offsets_survive_length_changing_lowercase():
    # "İ".lower() is two characters; offsets must still index the original
    text = "İstanbul ISTANBUL"
    matches = find_matches(text, "stanbul")
    assert matches == [1, 10]
    for m in matches:
        assert text[m:m + 7].lower() == "stanbul"


def test_find_url_spans():
    text = "see https://example.com/x now"
    assert find_url_spans(text) == [(4, 25)]
    assert text[4:25] == "https://example.com/x"


def test_find_url_spans_none():
    assert find_url_spans("no links here, http:// alone") == []


def test_line_helpers():
    text = "a b\nc\nd e\n"
    assert line_for_offset(text, 0) == 0
    assert line_for_offset(text, 4) == 1
    assert line_for_offset(text, 6) == 2
    assert line_count(text) == 3
    assert words_before_line(text, 2) == 3
    assert line_for_word(text, 0) == 0
    assert line_for_word(text, 2) == 1
    assert line_for_word(text, 3) == 2


def test_line_for_word_skips_blank_lines():
    assert line_for_word("a\n\nb\n", 1) == 2


def test_line_for_word_past_end():
    assert line_for_word("a b\nc\n", 10) == 1
    assert line_for_word("", 3) == 0


def test_url_spans_exclude_trailing_punctuation():
    text = "See the site (https://go.dev). Or https://example.org/a, then https://x.io/b;"
    spans = find_url_spans(text)
    assert [text[s:e] for s, e in spans] == [
        "https://go.dev", "https://example.org/a", "https://x.io/b"]


def test_url_spans_keep_balanced_parentheses():
    text = "Read https://en.wikipedia.org/wiki/Go_(game). Also (https://en.wikipedia.org/wiki/Go_(game))"
    spans = find_url_spans(text)
    assert [text[s:e] for s, e in spans] == [
        "https://en.wikipedia.org/wiki/Go_(game)",
        "https://en.wikipedia.org/wiki/Go_(game)",
    ]


def test_heading_lines_come_from_source_lines():
    text = "HISTORY OF THE GAME\n\nThe program was run by NASA."
    # Heading wraps onto two lines; "NASA." lands alone but is not a heading
    assert wrap_text(text, 12).splitlines() == [
        "HISTORY OF", "THE GAME", "", "The program", "was run by", "NASA."]
    assert heading_lines(text, 12) == frozenset({0, 1})


def test_heading_lines_without_wrapping():
    assert heading_lines("INTRO\nbody\nSEE ALSO", 0) == frozenset({0, 2})
