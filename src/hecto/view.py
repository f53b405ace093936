"""The document view: cursor, scrolling, selection, search and rendering.

A :class:`View` owns the :class:`~hecto.buffer.Buffer` being edited and
everything needed to show a window onto it.  Edit and move commands are
applied here; the editor only decides which commands reach the view.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from hecto.annotations import AnnotatedSpan
from hecto.buffer import Buffer
from hecto.commands import Direction, Edit, EditKind, Move
from hecto.components.status_bar import DocumentStatus
from hecto.highlighter import Highlighter
from hecto.position import Location, MatchPosition, Position, Size
from hecto.search import Search
from hecto.theme import PLAIN_THEME, Theme

logger = logging.getLogger(__name__)

NAME = "hecto"
VERSION = "0.1.0"


def welcome_message(width: int) -> str:
    """The welcome row: a tilde, then the centred editor name and version."""
    if width <= 0:
        return ""
    message = f"{NAME} editor -- version {VERSION}"
    remaining = width - 1
    if remaining < len(message):
        return "~"
    return "~" + message.center(remaining)


class View:
    """A scrollable window onto a buffer."""

    def __init__(self, buffer: Buffer | None = None, theme: Theme = PLAIN_THEME) -> None:
        self.buffer = buffer if buffer is not None else Buffer()
        self.theme = theme
        self.size = Size()
        self.text_location = Location()
        self.scroll_offset = Position()
        self.search = Search()
        self.selection_anchor: Location | None = None
        self.needs_redraw = True

    # ------------------------------------------------------------------
    # UIComponent
    # ------------------------------------------------------------------

    def resize(self, size: Size) -> None:
        self.size = size
        self.scroll_text_location_into_view()
        self.needs_redraw = True

    def invalidate(self) -> None:
        self.needs_redraw = True

    def render(self, width: int) -> list[str]:
        self.needs_redraw = False
        return [self.theme.render_spans(row) for row in self.visible_spans(width)]

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def load(self, path: str | os.PathLike[str]) -> None:
        """Replace the buffer with the contents of *path*; raises :class:`OSError`."""
        self.buffer = Buffer.load(path)
        self.text_location = Location()
        self.scroll_offset = Position()
        self.selection_anchor = None
        self.needs_redraw = True

    def save(self) -> None:
        self.buffer.save()
        self.needs_redraw = True

    def save_as(self, path: str | os.PathLike[str]) -> None:
        self.buffer.save_as(path)
        self.needs_redraw = True

    @property
    def is_file_loaded(self) -> bool:
        return self.buffer.is_file_loaded

    def get_status(self) -> DocumentStatus:
        return DocumentStatus(
            total_lines=self.buffer.height,
            current_line_idx=self.text_location.line_idx,
            is_modified=self.buffer.dirty,
            file_name=str(self.buffer.file_info),
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selection(self) -> tuple[Location, Location] | None:
        """The selected range in document order, or ``None`` when empty."""
        anchor = self.selection_anchor
        if anchor is None or anchor == self.text_location:
            return None
        return (min(anchor, self.text_location), max(anchor, self.text_location))

    def clear_selection(self) -> None:
        if self.selection_anchor is not None:
            self.selection_anchor = None
            self.needs_redraw = True

    # ------------------------------------------------------------------
    # Edit commands
    # ------------------------------------------------------------------

    def handle_edit_command(self, command: Edit) -> None:
        self.clear_selection()
        if command.kind is EditKind.INSERT:
            self._insert_char(command.character)
        elif command.kind is EditKind.INSERT_NEWLINE:
            self._insert_newline()
        elif command.kind is EditKind.DELETE:
            self._delete()
        elif command.kind is EditKind.DELETE_BACKWARD:
            self._delete_backward()
        self.scroll_text_location_into_view()
        self.needs_redraw = True

    def _insert_char(self, character: str) -> None:
        old_len = self.buffer.grapheme_count(self.text_location.line_idx)
        self.buffer.insert_char(character, self.text_location)
        new_len = self.buffer.grapheme_count(self.text_location.line_idx)
        # A combining character merges into the previous cluster
        if new_len > old_len:
            self._move_right()

    def _insert_newline(self) -> None:
        self.buffer.insert_newline(self.text_location)
        self._move_right()

    def _delete(self) -> None:
        self.buffer.delete(self.text_location)

    def _delete_backward(self) -> None:
        if self.text_location.line_idx == 0 and self.text_location.grapheme_idx == 0:
            return
        self._move_left()
        self._delete()

    # ------------------------------------------------------------------
    # Move commands
    # ------------------------------------------------------------------

    def handle_move_command(self, command: Move) -> None:
        if command.select:
            if self.selection_anchor is None:
                self.selection_anchor = self.text_location
        else:
            self.clear_selection()

        height = self.size.height
        direction = command.direction
        if direction is Direction.UP:
            self._move_up(1)
        elif direction is Direction.DOWN:
            self._move_down(1)
        elif direction is Direction.LEFT:
            self._move_left()
        elif direction is Direction.RIGHT:
            self._move_right()
        elif direction is Direction.PAGE_UP:
            self._move_up(max(height - 1, 1))
        elif direction is Direction.PAGE_DOWN:
            self._move_down(max(height - 1, 1))
        elif direction is Direction.START_OF_LINE:
            self._move_to_start_of_line()
        elif direction is Direction.END_OF_LINE:
            self._move_to_end_of_line()

        self.scroll_text_location_into_view()
        if command.select:
            self.needs_redraw = True

    def _move_vertically(self, line_idx: int) -> None:
        """Move to *line_idx*, keeping the display column where possible."""
        column = self.buffer.width_until(
            self.text_location.line_idx, self.text_location.grapheme_idx
        )
        line_idx = min(max(line_idx, 0), self.buffer.height)
        line = self.buffer.line(line_idx)
        grapheme_idx = line.grapheme_index_at_column(column) if line is not None else 0
        self.text_location = Location(line_idx, grapheme_idx)

    def _move_up(self, step: int) -> None:
        self._move_vertically(self.text_location.line_idx - step)

    def _move_down(self, step: int) -> None:
        self._move_vertically(self.text_location.line_idx + step)

    def _move_left(self) -> None:
        loc = self.text_location
        if loc.grapheme_idx > 0:
            self.text_location = Location(loc.line_idx, loc.grapheme_idx - 1)
        elif loc.line_idx > 0:
            line_idx = loc.line_idx - 1
            self.text_location = Location(line_idx, self.buffer.grapheme_count(line_idx))

    def _move_right(self) -> None:
        loc = self.text_location
        if loc.grapheme_idx < self.buffer.grapheme_count(loc.line_idx):
            self.text_location = Location(loc.line_idx, loc.grapheme_idx + 1)
        elif loc.line_idx < self.buffer.height:
            self.text_location = Location(loc.line_idx + 1, 0)

    def _move_to_start_of_line(self) -> None:
        self.text_location = Location(self.text_location.line_idx, 0)

    def _move_to_end_of_line(self) -> None:
        line_idx = self.text_location.line_idx
        self.text_location = Location(line_idx, self.buffer.grapheme_count(line_idx))

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    def text_location_to_position(self) -> Position:
        loc = self.text_location
        return Position(row=loc.line_idx, col=self.buffer.width_until(loc.line_idx, loc.grapheme_idx))

    def caret_position(self) -> Position:
        """The cursor's screen position inside the view."""
        return self.text_location_to_position().saturating_sub(self.scroll_offset)

    def _scroll_vertically(self, to: int) -> None:
        height = self.size.height
        row = self.scroll_offset.row
        if to < row:
            row = to
        elif height > 0 and to >= row + height:
            row = to - height + 1
        if row != self.scroll_offset.row:
            self.scroll_offset = Position(row=row, col=self.scroll_offset.col)
            self.needs_redraw = True

    def _scroll_horizontally(self, to: int) -> None:
        width = self.size.width
        col = self.scroll_offset.col
        if to < col:
            col = to
        elif width > 0 and to >= col + width:
            col = to - width + 1
        if col != self.scroll_offset.col:
            self.scroll_offset = Position(row=self.scroll_offset.row, col=col)
            self.needs_redraw = True

    def scroll_text_location_into_view(self) -> None:
        position = self.text_location_to_position()
        self._scroll_vertically(position.row)
        self._scroll_horizontally(position.col)

    def center_text_location(self) -> None:
        """Scroll so that the cursor sits in the middle of the view."""
        position = self.text_location_to_position()
        vertical_mid = -(-self.size.height // 2)
        horizontal_mid = -(-self.size.width // 2)
        self.scroll_offset = Position(
            row=max(position.row - vertical_mid, 0),
            col=max(position.col - horizontal_mid, 0),
        )
        self.needs_redraw = True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def enter_search(self) -> None:
        self.clear_selection()
        self.search.enter(self.text_location, self.scroll_offset)

    def exit_search(self) -> None:
        """Leave search mode, keeping the cursor at the selected match."""
        self.search.commit()
        self.needs_redraw = True

    def dismiss_search(self) -> None:
        """Leave search mode and restore the cursor and scroll from before it."""
        restored = self.search.cancel()
        if restored is not None:
            self.text_location, self.scroll_offset = restored
            self.scroll_text_location_into_view()
        self.needs_redraw = True

    def search_query(self, query: str) -> None:
        match = self.search.update_query(query, self.buffer, self.text_location)
        if match is not None:
            self._move_to_match(match)
        self.needs_redraw = True

    def search_next(self) -> None:
        match = self.search.next()
        if match is not None:
            self._move_to_match(match)

    def search_prev(self) -> None:
        match = self.search.previous()
        if match is not None:
            self._move_to_match(match)

    def _move_to_match(self, match: MatchPosition) -> None:
        line = self.buffer.line(match.line_idx)
        grapheme_idx = line.byte_to_grapheme_index(match.byte_idx) if line is not None else 0
        self.text_location = Location(match.line_idx, grapheme_idx)
        logger.debug("Moved to match at %s", self.text_location)
        self.center_text_location()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _highlighter(self) -> Highlighter:
        return Highlighter(
            query=self.search.query,
            matches=self.search.matches,
            selected_match=self.search.current_match,
            selection=self.selection,
        )

    def visible_spans(self, width: int | None = None) -> Iterator[list[AnnotatedSpan]]:
        """Yield, per visible row, spans covering exactly *width* columns."""
        if width is None:
            width = self.size.width
        height = self.size.height
        top = self.scroll_offset.row
        left = self.scroll_offset.col
        highlighter = self._highlighter()
        show_welcome = self.buffer.is_empty and not self.buffer.is_file_loaded
        welcome_row = height // 3

        for row in range(height):
            line_idx = top + row
            line = self.buffer.line(line_idx)
            if line is not None:
                annotations = highlighter.annotations(line_idx, line)
                yield list(line.annotated_spans(left, left + width, annotations))
            elif show_welcome and row == welcome_row:
                yield [AnnotatedSpan(welcome_message(width).ljust(width))]
            elif width > 0:
                yield [AnnotatedSpan("~".ljust(width))]
            else:
                yield []
