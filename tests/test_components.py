"""Tests for hecto.components -- status, message and command bars."""

from __future__ import annotations

from hecto.commands import Edit, EditKind
from hecto.components import CommandBar, DocumentStatus, MessageBar, StatusBar
from hecto.position import Size
from hecto.theme import Theme


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


# ---------------------------------------------------------------------------
# StatusBar
# ---------------------------------------------------------------------------


class TestStatusBar:
    def test_layout(self) -> None:
        bar = StatusBar()
        bar.update_status(DocumentStatus(2, 0, True, "a.txt"))
        assert bar.render(30) == ["a.txt - 2 lines (modified) 1/2"]

    def test_unmodified_pads_position_right(self) -> None:
        bar = StatusBar()
        bar.update_status(DocumentStatus(2, 1, False, "a.txt"))
        (row,) = bar.render(30)
        assert row.startswith("a.txt - 2 lines ")
        assert row.endswith(" 2/2")
        assert len(row) == 30

    def test_too_narrow_renders_blank(self) -> None:
        bar = StatusBar()
        bar.update_status(DocumentStatus(2, 0, False, "a.txt"))
        assert bar.render(10) == [" " * 10]

    def test_theme_is_applied(self) -> None:
        bar = StatusBar(Theme(status_bar=lambda s: f"<{s}>"))
        (row,) = bar.render(40)
        assert row.startswith("<[No Name] - 0 lines")
        assert row.endswith("1/0>")

    def test_redraw_only_on_change(self) -> None:
        bar = StatusBar()
        bar.render(20)
        bar.update_status(DocumentStatus())
        assert not bar.needs_redraw
        bar.update_status(DocumentStatus(total_lines=1))
        assert bar.needs_redraw


# ---------------------------------------------------------------------------
# MessageBar
# ---------------------------------------------------------------------------


class TestMessageBar:
    def test_shows_message(self) -> None:
        bar = MessageBar(timeout=5, clock=FakeClock())
        bar.update_message("hello")
        assert bar.render(20) == ["hello"]

    def test_truncates_to_width(self) -> None:
        bar = MessageBar(timeout=5, clock=FakeClock())
        bar.update_message("hello world")
        assert bar.render(5) == ["hello"]

    def test_expired_message_is_cleared_once(self) -> None:
        clock = FakeClock()
        bar = MessageBar(timeout=5, clock=clock)
        bar.update_message("hello")
        bar.render(20)
        assert not bar.needs_redraw
        clock.now += 6
        assert bar.is_expired
        assert bar.needs_redraw
        assert bar.render(20) == [""]
        assert not bar.needs_redraw

    def test_new_message_resets_timer(self) -> None:
        clock = FakeClock()
        bar = MessageBar(timeout=5, clock=clock)
        bar.update_message("one")
        clock.now += 6
        bar.update_message("two")
        assert not bar.is_expired
        assert bar.render(20) == ["two"]


# ---------------------------------------------------------------------------
# CommandBar
# ---------------------------------------------------------------------------


def type_into(bar: CommandBar, text: str) -> None:
    for ch in text:
        bar.handle_edit_command(Edit(EditKind.INSERT, ch))


class TestCommandBar:
    def test_prompt_and_value(self) -> None:
        bar = CommandBar()
        bar.resize(Size(1, 20))
        bar.set_prompt("Search: ")
        type_into(bar, "ab")
        assert bar.value == "ab"
        assert bar.render(20) == ["Search: ab"]
        assert bar.caret_position_col() == 10

    def test_delete_backward(self) -> None:
        bar = CommandBar()
        type_into(bar, "ab")
        bar.handle_edit_command(Edit(EditKind.DELETE_BACKWARD))
        assert bar.value == "a"

    def test_newline_and_delete_are_ignored(self) -> None:
        bar = CommandBar()
        type_into(bar, "ab")
        bar.handle_edit_command(Edit(EditKind.INSERT_NEWLINE))
        bar.handle_edit_command(Edit(EditKind.DELETE))
        assert bar.value == "ab"

    def test_long_value_scrolls_to_end(self) -> None:
        bar = CommandBar()
        bar.resize(Size(1, 6))
        bar.set_prompt("P: ")
        type_into(bar, "abcdef")
        assert bar.render(6) == ["P: def"]
        assert bar.caret_position_col() == 6

    def test_clear_value(self) -> None:
        bar = CommandBar()
        type_into(bar, "ab")
        bar.clear_value()
        assert bar.value == ""

    def test_prompt_wider_than_bar(self) -> None:
        bar = CommandBar()
        bar.set_prompt("a long prompt: ")
        assert bar.render(5) == [""]
