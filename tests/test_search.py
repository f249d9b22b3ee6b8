"""Tests for phrase search and result navigation."""

from ctedit.buffer import Buffer, Line
from ctedit.highlight import HighlightTag
from ctedit.search import SearchData


def create_buffer(lines, syntax=None):
    buffer = Buffer(syntax_highlight=syntax)
    buffer.lines = [Line(text) for text in lines]
    buffer.update_syntax()
    return buffer


def test_matches_do_not_overlap():
    buffer = create_buffer(["aaaa"])
    search = SearchData()

    first = search.find_results("aa", buffer)

    assert first == (0, 0)
    assert search.results == [(0, 0), (2, 0)]
    assert search.index == 0


def test_next_cycles_through_results():
    buffer = create_buffer(["aaaa"])
    search = SearchData()
    search.find_results("aa", buffer)

    assert search.get_next() == (2, 0)
    assert search.index == 1
    assert search.get_next() == (0, 0)
    assert search.index == 0


def test_previous_wraps_to_last_result():
    buffer = create_buffer(["ab", "xab", "ab"])
    search = SearchData()
    search.find_results("ab", buffer)

    assert search.get_previous() == (0, 2)
    assert search.get_previous() == (1, 1)
    assert search.get_previous() == (0, 0)


def test_results_are_in_document_order():
    buffer = create_buffer(["one fox", "no match", "fox fox"])
    search = SearchData()

    search.find_results("fox", buffer)

    assert search.results == [(4, 0), (0, 2), (4, 2)]


def test_navigation_without_results_returns_none():
    buffer = create_buffer(["abc"])
    search = SearchData()

    assert search.find_results("zzz", buffer) is None
    assert search.results == []
    assert search.get_next() is None
    assert search.get_previous() is None
    assert search.current() is None


def test_matches_are_tagged_as_search_results():
    buffer = create_buffer(["let fox = 1;"])
    search = SearchData()

    search.find_results("fox", buffer)

    tags = buffer.lines[0].tags
    assert tags[4:7] == [HighlightTag.SEARCH_RESULT] * 3
    assert HighlightTag.SEARCH_RESULT not in tags[:4] + tags[7:]


def test_highlighted_buffer_overlay_replaces_syntax_tags():
    from ctedit.highlight import RUST_SYNTAX
    buffer = create_buffer(["let x"], syntax=RUST_SYNTAX)
    search = SearchData()

    search.find_results("et", buffer)

    assert buffer.lines[0].tags == [
        HighlightTag.KEYWORD,
        HighlightTag.SEARCH_RESULT,
        HighlightTag.SEARCH_RESULT,
        HighlightTag.STANDARD,
        HighlightTag.IDENTIFIER,
    ]


def test_new_search_clears_previous_overlay():
    buffer = create_buffer(["abc abc"])
    search = SearchData()
    search.find_results("abc", buffer)
    search.get_next()

    search.find_results("c", buffer)

    assert search.index == 0
    assert search.results == [(2, 0), (6, 0)]
    tags = buffer.lines[0].tags
    assert tags.count(HighlightTag.SEARCH_RESULT) == 2


def test_empty_phrase_clears_results_and_overlay():
    buffer = create_buffer(["abc"])
    search = SearchData()
    search.find_results("b", buffer)

    assert search.find_results("", buffer) is None
    assert search.results == []
    assert HighlightTag.SEARCH_RESULT not in buffer.lines[0].tags


def test_retokenize_drops_overlay():
    buffer = create_buffer(["abc"])
    search = SearchData()
    search.find_results("b", buffer)

    buffer.update_syntax()

    assert HighlightTag.SEARCH_RESULT not in buffer.lines[0].tags


def test_current_tracks_selected_result():
    buffer = create_buffer(["x x x"])
    search = SearchData()
    search.find_results("x", buffer)
    search.get_next()

    assert search.current() == (2, 0)
