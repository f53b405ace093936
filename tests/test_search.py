"""Tests for hecto.search -- match collection and navigation."""

from __future__ import annotations

from hecto.buffer import Buffer
from hecto.position import Location, MatchPosition, Position
from hecto.search import Search, SearchInfo, SearchState

LINES = ["zero", "one", "the needle here", "three", "four", "needle again"]


def _active_search(query: str, at: Location = Location()) -> Search:
    search = Search()
    search.enter(at, Position(1, 2))
    search.update_query(query, Buffer.from_lines(LINES), at)
    return search


class TestSearchInfo:
    def test_anchor_selects_first_match_at_or_after(self) -> None:
        info = SearchInfo()
        matches = [MatchPosition(2, 4), MatchPosition(5, 0)]
        info.set_matches(matches, MatchPosition(3, 0))
        assert info.current_match == MatchPosition(5, 0)

    def test_anchor_past_last_match_wraps(self) -> None:
        info = SearchInfo()
        info.set_matches([MatchPosition(0, 0)], MatchPosition(4, 0))
        assert info.current == 0

    def test_next_without_selection_starts_at_first_match(self) -> None:
        info = SearchInfo(matches=[MatchPosition(2, 4), MatchPosition(5, 0)], current=None)
        assert info.select_next() == MatchPosition(2, 4)
        assert info.select_next() == MatchPosition(5, 0)
        assert info.select_next() == MatchPosition(2, 4)

    def test_previous_without_selection_starts_at_last_match(self) -> None:
        info = SearchInfo()
        info.set_matches([MatchPosition(2, 4), MatchPosition(5, 0)], MatchPosition(0, 0))
        info.current = None
        assert info.select_previous() == MatchPosition(5, 0)
        assert info.select_previous() == MatchPosition(2, 4)
        assert info.select_previous() == MatchPosition(5, 0)

    def test_no_matches(self) -> None:
        info = SearchInfo()
        info.set_matches([], MatchPosition(0, 0))
        assert info.current is None
        assert info.select_next() is None
        assert info.select_previous() is None


class TestSearch:
    """The search state machine over a small document."""

    def test_inactive_by_default(self) -> None:
        search = Search()
        assert search.state is SearchState.INACTIVE
        assert search.current_match is None
        assert search.next() is None

    def test_matches_in_document_order(self) -> None:
        search = _active_search("needle")
        assert search.state is SearchState.ACTIVE
        assert search.matches == [MatchPosition(2, 4), MatchPosition(5, 0)]
        assert search.current_match == MatchPosition(2, 4)

    def test_next_wraps_around(self) -> None:
        search = _active_search("needle")
        assert search.next() == MatchPosition(5, 0)
        assert search.next() == MatchPosition(2, 4)

    def test_previous_wraps_around(self) -> None:
        search = _active_search("needle")
        assert search.previous() == MatchPosition(5, 0)
        assert search.previous() == MatchPosition(2, 4)

    def test_query_anchored_at_location(self) -> None:
        search = _active_search("needle", Location(3, 0))
        assert search.current_match == MatchPosition(5, 0)

    def test_match_under_cursor_is_selected(self) -> None:
        search = _active_search("needle", Location(2, 4))
        assert search.current_match == MatchPosition(2, 4)

    def test_anchor_after_last_match_wraps_to_first(self) -> None:
        search = _active_search("needle", Location(5, 1))
        assert search.current_match == MatchPosition(2, 4)

    def test_empty_query_has_no_matches(self) -> None:
        search = _active_search("")
        assert search.matches == []
        assert search.current_match is None
        assert search.next() is None

    def test_no_match_is_not_an_error(self) -> None:
        search = _active_search("missing")
        assert search.is_active
        assert search.current_match is None

    def test_commit_deactivates(self) -> None:
        search = _active_search("needle")
        search.commit()
        assert search.state is SearchState.INACTIVE
        assert search.query == ""

    def test_cancel_returns_snapshot_after_navigation(self) -> None:
        search = _active_search("needle", Location(1, 1))
        search.next()
        search.next()
        assert search.cancel() == (Location(1, 1), Position(1, 2))
        assert not search.is_active

    def test_cancel_when_inactive(self) -> None:
        assert Search().cancel() is None

    def test_update_query_when_inactive(self) -> None:
        search = Search()
        assert search.update_query("x", Buffer.from_lines(["x"]), Location()) is None
