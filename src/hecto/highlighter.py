"""Per-line annotations for one render pass: search matches and selection."""

from __future__ import annotations

from hecto.annotations import Annotation, AnnotationType
from hecto.line import Line
from hecto.position import Location, MatchPosition
from hecto.utils import byte_length


class Highlighter:
    """Builds the annotations of each rendered line.

    ``matches`` must be in document order; ``selection`` is a pair of
    locations in any order, or ``None``.
    """

    def __init__(
        self,
        query: str = "",
        matches: list[MatchPosition] | None = None,
        selected_match: MatchPosition | None = None,
        selection: tuple[Location, Location] | None = None,
    ) -> None:
        self._query_bytes = byte_length(query)
        self._selected_match = selected_match if self._query_bytes else None
        self._matches_by_line: dict[int, list[int]] = {}
        if self._query_bytes:
            for match in matches or []:
                self._matches_by_line.setdefault(match.line_idx, []).append(match.byte_idx)
        self._selection = tuple(sorted(selection)) if selection is not None else None

    def annotations(self, line_idx: int, line: Line) -> list[Annotation]:
        result: list[Annotation] = []
        self._highlight_matches(line_idx, line, result)
        self._highlight_selection(line_idx, line, result)
        self._highlight_selected_match(line_idx, line, result)
        return result

    def _match_annotation(self, kind: AnnotationType, start: int, line: Line) -> Annotation | None:
        end = min(start + self._query_bytes, line.byte_length)
        if start >= end:
            return None
        return Annotation(kind, start, end)

    def _highlight_matches(self, line_idx: int, line: Line, result: list[Annotation]) -> None:
        for start in self._matches_by_line.get(line_idx, ()):
            annotation = self._match_annotation(AnnotationType.MATCH, start, line)
            if annotation is not None:
                result.append(annotation)

    def _highlight_selected_match(self, line_idx: int, line: Line, result: list[Annotation]) -> None:
        match = self._selected_match
        if match is None or match.line_idx != line_idx:
            return
        annotation = self._match_annotation(AnnotationType.SELECTED_MATCH, match.byte_idx, line)
        if annotation is not None:
            result.append(annotation)

    def _highlight_selection(self, line_idx: int, line: Line, result: list[Annotation]) -> None:
        if self._selection is None:
            return
        first, last = self._selection
        if not first.line_idx <= line_idx <= last.line_idx:
            return
        start = line.grapheme_to_byte_index(first.grapheme_idx) if line_idx == first.line_idx else 0
        end = (
            line.grapheme_to_byte_index(last.grapheme_idx)
            if line_idx == last.line_idx
            else line.byte_length
        )
        if start < end:
            result.append(Annotation(AnnotationType.SELECTION, start, end))
