"""Incremental search: match collection, navigation and cursor restore.

A :class:`Search` is inactive until :meth:`Search.enter` snapshots the
cursor and scroll offset.  While active, each query change re-scans the
whole buffer; next/previous cycle through the matches; commit keeps the
cursor where it is and cancel hands back the snapshot.
"""

from __future__ import annotations

import enum
import logging
from bisect import bisect_left
from dataclasses import dataclass, field

from hecto.buffer import Buffer
from hecto.position import Location, MatchPosition, Position

logger = logging.getLogger(__name__)


class SearchState(enum.Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass
class SearchInfo:
    """State of one search session."""

    prev_location: Location = field(default_factory=Location)
    prev_scroll_offset: Position = field(default_factory=Position)
    query: str = ""
    matches: list[MatchPosition] = field(default_factory=list)
    current: int | None = None

    @property
    def current_match(self) -> MatchPosition | None:
        if self.current is None or not self.matches:
            return None
        return self.matches[self.current]

    def set_matches(self, matches: list[MatchPosition], anchor: MatchPosition) -> None:
        """Replace the match set and select the first match at or after *anchor*."""
        self.matches = matches
        if not matches:
            self.current = None
            return
        idx = bisect_left(matches, anchor)
        self.current = idx if idx < len(matches) else 0

    def select_next(self) -> MatchPosition | None:
        if not self.matches:
            return None
        if self.current is None:
            self.current = 0
        else:
            self.current = (self.current + 1) % len(self.matches)
        return self.matches[self.current]

    def select_previous(self) -> MatchPosition | None:
        if not self.matches:
            return None
        if self.current is None:
            self.current = len(self.matches) - 1
        else:
            self.current = (self.current - 1) % len(self.matches)
        return self.matches[self.current]


class Search:
    """The search state machine."""

    def __init__(self) -> None:
        self._info: SearchInfo | None = None

    @property
    def state(self) -> SearchState:
        return SearchState.ACTIVE if self._info is not None else SearchState.INACTIVE

    @property
    def is_active(self) -> bool:
        return self._info is not None

    @property
    def info(self) -> SearchInfo | None:
        return self._info

    @property
    def query(self) -> str:
        return self._info.query if self._info is not None else ""

    @property
    def matches(self) -> list[MatchPosition]:
        return self._info.matches if self._info is not None else []

    @property
    def current_match(self) -> MatchPosition | None:
        return self._info.current_match if self._info is not None else None

    def enter(self, location: Location, scroll_offset: Position) -> None:
        self._info = SearchInfo(prev_location=location, prev_scroll_offset=scroll_offset)
        logger.debug("Search entered at %s", location)

    def update_query(
        self, query: str, buffer: Buffer, from_location: Location
    ) -> MatchPosition | None:
        """Re-scan *buffer* for *query*; return the newly selected match."""
        if self._info is None:
            return None
        self._info.query = query
        line = buffer.line(from_location.line_idx)
        from_byte = line.grapheme_to_byte_index(from_location.grapheme_idx) if line is not None else 0
        anchor = MatchPosition(from_location.line_idx, from_byte)
        self._info.set_matches(buffer.find_all(query), anchor)
        logger.debug("Query %r: %d matches", query, len(self._info.matches))
        return self._info.current_match

    def next(self) -> MatchPosition | None:
        return self._info.select_next() if self._info is not None else None

    def previous(self) -> MatchPosition | None:
        return self._info.select_previous() if self._info is not None else None

    def commit(self) -> None:
        self._info = None

    def cancel(self) -> tuple[Location, Position] | None:
        """Leave search mode, returning the location and scroll offset to restore."""
        info = self._info
        self._info = None
        if info is None:
            return None
        return info.prev_location, info.prev_scroll_offset
