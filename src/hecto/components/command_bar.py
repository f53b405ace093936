"""Command bar: a prompt followed by a single-line input value."""

from __future__ import annotations

from hecto.commands import Edit, EditKind
from hecto.line import Line
from hecto.position import Size
from hecto.utils import visible_width


class CommandBar:
    """Prompt plus editable value, scrolled so the end of the value shows."""

    def __init__(self) -> None:
        self._prompt = ""
        self._value = Line()
        self._size = Size()
        self.needs_redraw = True

    @property
    def prompt(self) -> str:
        return self._prompt

    @property
    def value(self) -> str:
        return self._value.text

    def set_prompt(self, prompt: str) -> None:
        self._prompt = prompt
        self.needs_redraw = True

    def clear_value(self) -> None:
        self._value = Line()
        self.needs_redraw = True

    def handle_edit_command(self, command: Edit) -> None:
        """Apply an edit to the value; newline and forward delete are ignored."""
        if command.kind is EditKind.INSERT:
            self._value.append_char(command.character)
        elif command.kind is EditKind.DELETE_BACKWARD:
            self._value.delete_last()
        else:
            return
        self.needs_redraw = True

    def caret_position_col(self) -> int:
        end = visible_width(self._prompt) + self._value.width
        return min(end, self._size.width)

    def resize(self, size: Size) -> None:
        self._size = size
        self.needs_redraw = True

    def invalidate(self) -> None:
        self.needs_redraw = True

    def render(self, width: int) -> list[str]:
        self.needs_redraw = False
        area_for_value = max(width - visible_width(self._prompt), 0)
        value_end = self._value.width
        value_start = max(value_end - area_for_value, 0)
        text = f"{self._prompt}{self._value.visible_text(value_start, value_end)}"
        if visible_width(text) > width:
            return [""]
        return [text]
