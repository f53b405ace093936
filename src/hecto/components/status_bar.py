"""Status bar: file name, line count and modified flag, with the cursor row."""

from __future__ import annotations

from dataclasses import dataclass

from hecto.position import Size
from hecto.theme import PLAIN_THEME, Theme
from hecto.utils import visible_width


@dataclass(frozen=True)
class DocumentStatus:
    """Snapshot of the document shown by the status bar."""

    total_lines: int = 0
    current_line_idx: int = 0
    is_modified: bool = False
    file_name: str = "[No Name]"

    @property
    def modified_indicator(self) -> str:
        return "(modified)" if self.is_modified else ""

    @property
    def line_count(self) -> str:
        return f"{self.total_lines} lines"

    @property
    def position_indicator(self) -> str:
        return f"{self.current_line_idx + 1}/{self.total_lines}"


class StatusBar:
    """One inverted row; left part describes the file, right part the cursor row."""

    def __init__(self, theme: Theme = PLAIN_THEME) -> None:
        self._theme = theme
        self._status = DocumentStatus()
        self._size = Size()
        self.needs_redraw = True

    @property
    def status(self) -> DocumentStatus:
        return self._status

    def update_status(self, status: DocumentStatus) -> None:
        if status != self._status:
            self._status = status
            self.needs_redraw = True

    def resize(self, size: Size) -> None:
        self._size = size
        self.needs_redraw = True

    def invalidate(self) -> None:
        self.needs_redraw = True

    def render(self, width: int) -> list[str]:
        self.needs_redraw = False
        status = self._status
        beginning = f"{status.file_name} - {status.line_count} {status.modified_indicator}"
        position = status.position_indicator
        remainder = max(width - visible_width(beginning), 0)
        text = beginning + position.rjust(remainder)
        used = visible_width(text)
        if used > width:
            # Does not fit: show an empty bar rather than a clipped one
            text, used = "", 0
        return [self._theme.status_bar(text + " " * (width - used))]
