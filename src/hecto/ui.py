"""Component protocol and the differential screen renderer.

Every part of the editor window (document view, status bar, message bar,
command bar) implements :class:`UIComponent`.  The editor stacks their
rendered rows into one frame and hands it to :class:`Screen`, which only
rewrites the rows that changed since the previous frame.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from hecto.position import Position, Size

if TYPE_CHECKING:
    from hecto.terminal import Terminal

__all__ = [
    "UIComponent",
    "Screen",
]

# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class UIComponent(Protocol):
    """A rectangular part of the editor window."""

    needs_redraw: bool

    def resize(self, size: Size) -> None:
        """Give the component its new area."""
        ...

    def render(self, width: int) -> list[str]:
        """Render the component into terminal rows, at most *width* cells each."""
        ...

    def invalidate(self) -> None:
        """Mark the component as needing a re-render."""
        ...


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J"
_CLEAR_TO_EOL = "\x1b[K"


def _move_to(row: int, col: int) -> str:
    return f"\x1b[{row + 1};{col + 1}H"


class Screen:
    """Full-screen differential renderer on top of a :class:`Terminal`.

    The first frame, and any frame drawn after the terminal size changed,
    repaints every row.  Later frames rewrite only the rows whose text
    differs from the previous frame.
    """

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._previous_lines: list[str] = []
        self._previous_size: Size | None = None
        self._full_redraw_count = 0

    @property
    def lines(self) -> list[str]:
        """The rows of the last frame drawn."""
        return list(self._previous_lines)

    @property
    def full_redraws(self) -> int:
        return self._full_redraw_count

    def invalidate(self) -> None:
        """Forget the previous frame so the next draw repaints everything."""
        self._previous_lines = []
        self._previous_size = None

    def draw(self, lines: list[str], cursor: Position) -> None:
        size = Size(height=self.terminal.rows, width=self.terminal.columns)
        if size.height <= 0 or size.width <= 0:
            return
        lines = lines[: size.height]

        force_full = size != self._previous_size
        if force_full:
            self._full_redraw_count += 1

        out: list[str] = [HIDE_CURSOR]
        if force_full:
            out.append(_CLEAR_SCREEN)
            previous: list[str] = []
        else:
            previous = self._previous_lines

        for row, line in enumerate(lines):
            if force_full or row >= len(previous) or previous[row] != line:
                out.append(_move_to(row, 0))
                out.append(line)
                out.append(_CLEAR_TO_EOL)

        # Rows that existed in the previous frame but not in this one
        for row in range(len(lines), len(previous)):
            out.append(_move_to(row, 0))
            out.append(_CLEAR_TO_EOL)

        self._previous_lines = lines
        self._previous_size = size

        cursor_row = min(max(cursor.row, 0), size.height - 1)
        cursor_col = min(max(cursor.col, 0), size.width - 1)
        out.append(_move_to(cursor_row, cursor_col))
        out.append(SHOW_CURSOR)

        self.terminal.write("".join(out))
