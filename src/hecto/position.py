"""Coordinate value types shared by the document, the view and the terminal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Location:
    """A cursor location in the document, in grapheme units."""

    line_idx: int = 0
    grapheme_idx: int = 0


@dataclass(frozen=True)
class Position:
    """A display position: row and column in terminal cells.

    Used for scroll offsets as well as for screen coordinates.
    """

    row: int = 0
    col: int = 0

    def saturating_sub(self, other: Position) -> Position:
        return Position(
            row=max(self.row - other.row, 0),
            col=max(self.col - other.col, 0),
        )


@dataclass(frozen=True, order=True)
class MatchPosition:
    """Start of a search match: line index and byte offset within the line."""

    line_idx: int
    byte_idx: int


@dataclass(frozen=True)
class Size:
    height: int = 0
    width: int = 0
