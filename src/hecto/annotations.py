"""Highlight annotations and the annotated-span iterator.

An :class:`Annotation` tags a half-open byte range of a line with an
:class:`AnnotationType`.  :class:`AnnotatedStringIterator` walks a line's
fragments for a column window and yields :class:`AnnotatedSpan` runs with
the winning annotation applied, ready for a theme to style.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from hecto.fragment import TextFragment


class AnnotationType(enum.Enum):
    """Highlight kinds, with their precedence on overlap."""

    MATCH = "match"
    SELECTION = "selection"
    SELECTED_MATCH = "selectedMatch"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]


_PRECEDENCE: dict[AnnotationType, int] = {
    AnnotationType.MATCH: 0,
    AnnotationType.SELECTION: 1,
    AnnotationType.SELECTED_MATCH: 2,
}


@dataclass(frozen=True)
class Annotation:
    annotation_type: AnnotationType
    start: int
    end: int

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


@dataclass(frozen=True)
class AnnotatedSpan:
    """A run of rendered text sharing one style (``None`` = unstyled)."""

    text: str
    annotation_type: AnnotationType | None = None


def resolve_annotation(
    annotations: Sequence[Annotation], start: int, end: int
) -> AnnotationType | None:
    """Return the highest-precedence annotation type overlapping ``[start, end)``."""
    winner: AnnotationType | None = None
    for annotation in annotations:
        if not annotation.overlaps(start, end):
            continue
        kind = annotation.annotation_type
        if winner is None or kind.precedence > winner.precedence:
            winner = kind
    return winner


class AnnotatedStringIterator:
    """Lazily yields styled spans covering exactly ``[start_col, end_col)``.

    Fragments cut by either edge of the window render as a single space.
    Adjacent fragments that resolve to the same style are merged.  If the
    line ends inside the window the remainder is padded with unstyled
    spaces.  Each call to ``iter()`` starts a fresh pass.
    """

    def __init__(
        self,
        fragments: Sequence[TextFragment],
        start_col: int,
        end_col: int,
        annotations: Sequence[Annotation] = (),
    ) -> None:
        self._fragments = fragments
        self._start_col = max(start_col, 0)
        self._end_col = max(end_col, 0)
        self._annotations = sorted(annotations, key=lambda a: a.start)

    def __iter__(self) -> Iterator[AnnotatedSpan]:
        return self._spans()

    def _cells(self) -> Iterator[tuple[str, AnnotationType | None]]:
        """Yield ``(text, style)`` per visible fragment, then padding."""
        start_col, end_col = self._start_col, self._end_col
        col = 0
        for fragment in self._fragments:
            if col >= end_col:
                return
            fragment_end = col + fragment.width
            if fragment_end <= start_col:
                col = fragment_end
                continue
            style = resolve_annotation(self._annotations, fragment.start, fragment.end)
            if col < start_col or fragment_end > end_col:
                # Straddles an edge: only one column of it can be visible.
                yield " ", style
            else:
                yield fragment.rendered, style
            col = fragment_end
        covered = max(col, start_col)
        if covered < end_col:
            yield " " * (end_col - covered), None

    def _spans(self) -> Iterator[AnnotatedSpan]:
        if self._start_col >= self._end_col:
            return
        pending: list[str] = []
        pending_style: AnnotationType | None = None
        for text, style in self._cells():
            if pending and style != pending_style:
                yield AnnotatedSpan("".join(pending), pending_style)
                pending = []
            pending_style = style
            pending.append(text)
        if pending:
            yield AnnotatedSpan("".join(pending), pending_style)
