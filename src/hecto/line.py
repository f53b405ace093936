"""A single line of text with grapheme-aware editing and indexing.

A :class:`Line` owns its text and a lazily rebuilt list of
:class:`~hecto.fragment.TextFragment`.  Every mutation drops the cached
fragments; the next read rebuilds them from the text.  All index-taking
methods clamp out-of-range values instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence

from hecto.annotations import AnnotatedStringIterator, Annotation
from hecto.fragment import TextFragment, build_fragments
from hecto.utils import byte_length


class Line:
    """One document line."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._fragments: list[TextFragment] | None = None

    # -- cache ---------------------------------------------------------------

    @property
    def fragments(self) -> list[TextFragment]:
        if self._fragments is None:
            self._fragments = build_fragments(self._text)
        return self._fragments

    def _set_text(self, text: str) -> None:
        self._text = text
        self._fragments = None

    # -- basic queries -------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def byte_length(self) -> int:
        frags = self.fragments
        return frags[-1].end if frags else 0

    @property
    def grapheme_count(self) -> int:
        return len(self.fragments)

    @property
    def width(self) -> int:
        return sum(fragment.width for fragment in self.fragments)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._text == other._text

    # -- index conversion ----------------------------------------------------

    def _clamp(self, grapheme_idx: int) -> int:
        return min(max(grapheme_idx, 0), self.grapheme_count)

    def _char_offset(self, grapheme_idx: int) -> int:
        """Offset into ``self._text`` (code points) of a grapheme boundary."""
        return sum(len(f.grapheme) for f in self.fragments[: self._clamp(grapheme_idx)])

    def grapheme_to_byte_index(self, grapheme_idx: int) -> int:
        """Byte offset where the grapheme at *grapheme_idx* starts."""
        idx = self._clamp(grapheme_idx)
        frags = self.fragments
        if idx < len(frags):
            return frags[idx].start
        return self.byte_length

    def byte_to_grapheme_index(self, byte_idx: int) -> int:
        """Index of the grapheme containing *byte_idx* (end of line if past it)."""
        if byte_idx <= 0:
            return 0
        for idx, fragment in enumerate(self.fragments):
            if fragment.end > byte_idx:
                return idx
        return self.grapheme_count

    def width_up_to(self, grapheme_idx: int) -> int:
        """Display column at which the grapheme at *grapheme_idx* starts."""
        return sum(f.width for f in self.fragments[: self._clamp(grapheme_idx)])

    def grapheme_index_at_column(self, column: int) -> int:
        """The grapheme boundary at or before display *column*.

        A wide glyph covering *column* resolves to the boundary before it;
        the end of the line is returned for columns past its width.
        """
        if column <= 0:
            return 0
        col = 0
        for idx, fragment in enumerate(self.fragments):
            if col >= column or col + fragment.width > column:
                return idx
            col += fragment.width
        return self.grapheme_count

    # -- editing -------------------------------------------------------------

    def insert(self, grapheme_idx: int, character: str) -> None:
        """Insert *character* (any text) before the grapheme at *grapheme_idx*."""
        if not character:
            return
        at = self._char_offset(grapheme_idx)
        self._set_text(self._text[:at] + character + self._text[at:])

    def append_char(self, character: str) -> None:
        self.insert(self.grapheme_count, character)

    def delete(self, grapheme_idx: int) -> None:
        """Remove the grapheme at *grapheme_idx*; no-op when out of range."""
        if grapheme_idx < 0 or grapheme_idx >= self.grapheme_count:
            return
        start = self._char_offset(grapheme_idx)
        end = start + len(self.fragments[grapheme_idx].grapheme)
        self._set_text(self._text[:start] + self._text[end:])

    def delete_last(self) -> None:
        self.delete(self.grapheme_count - 1)

    def split_at(self, grapheme_idx: int) -> Line:
        """Truncate at *grapheme_idx* and return the removed tail as a new line."""
        at = self._char_offset(grapheme_idx)
        tail = self._text[at:]
        self._set_text(self._text[:at])
        return Line(tail)

    def append(self, other: Line) -> None:
        if other._text:
            self._set_text(self._text + other._text)

    # -- search --------------------------------------------------------------

    def find_all(self, query: str) -> list[tuple[int, int]]:
        """Find the non-overlapping occurrences of *query*, left to right.

        Returns ``(byte_idx, grapheme_idx)`` pairs, where ``grapheme_idx`` is
        the grapheme containing the first byte of the match.
        """
        if not query:
            return []
        text = self._text
        results: list[tuple[int, int]] = []
        byte_idx = 0
        scanned = 0
        char_idx = text.find(query)
        while char_idx != -1:
            byte_idx += byte_length(text[scanned:char_idx])
            scanned = char_idx
            results.append((byte_idx, self.byte_to_grapheme_index(byte_idx)))
            char_idx = text.find(query, char_idx + len(query))
        return results

    # -- rendering -----------------------------------------------------------

    def annotated_spans(
        self,
        start_col: int,
        end_col: int,
        annotations: Sequence[Annotation] = (),
    ) -> AnnotatedStringIterator:
        """Spans covering columns ``[start_col, end_col)`` with highlights applied."""
        return AnnotatedStringIterator(self.fragments, start_col, end_col, annotations)

    def visible_text(self, start_col: int, end_col: int) -> str:
        """Plain rendered text of a column window, without padding."""
        end_col = min(end_col, max(self.width, start_col))
        return "".join(span.text for span in self.annotated_spans(start_col, end_col))
