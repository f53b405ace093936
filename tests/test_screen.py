"""Tests for hecto.ui.Screen -- differential full-screen rendering."""

from __future__ import annotations

from hecto.position import Position
from hecto.ui import HIDE_CURSOR, SHOW_CURSOR, Screen

from .virtual_terminal import VirtualTerminal


def make_screen(rows: int = 3, columns: int = 10) -> tuple[Screen, VirtualTerminal]:
    terminal = VirtualTerminal(rows=rows, columns=columns)
    return Screen(terminal), terminal


class TestScreen:
    def test_first_draw_is_full(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab", "cd", "ef"], Position(0, 0))
        out = terminal.output
        assert "\x1b[2J" in out
        assert "\x1b[1;1Hab\x1b[K" in out
        assert "\x1b[2;1Hcd\x1b[K" in out
        assert "\x1b[3;1Hef\x1b[K" in out
        assert screen.full_redraws == 1

    def test_only_changed_rows_are_rewritten(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab", "cd", "ef"], Position(0, 0))
        terminal.clear_buffer()
        screen.draw(["ab", "cX", "ef"], Position(0, 0))
        out = terminal.output
        assert "\x1b[2;1HcX\x1b[K" in out
        assert "ab" not in out
        assert "ef" not in out
        assert "\x1b[2J" not in out

    def test_unchanged_frame_only_moves_cursor(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab"], Position(0, 0))
        terminal.clear_buffer()
        screen.draw(["ab"], Position(0, 1))
        assert terminal.output == "\x1b[?25l\x1b[1;2H\x1b[?25h"

    def test_removed_rows_are_cleared(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab", "cd"], Position(0, 0))
        terminal.clear_buffer()
        screen.draw(["ab"], Position(0, 0))
        assert "\x1b[2;1H\x1b[K" in terminal.output

    def test_size_change_forces_full_redraw(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab"], Position(0, 0))
        terminal.columns = 20
        terminal.clear_buffer()
        screen.draw(["ab"], Position(0, 0))
        assert "\x1b[1;1Hab\x1b[K" in terminal.output
        assert screen.full_redraws == 2

    def test_invalidate_forces_full_redraw(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab"], Position(0, 0))
        screen.invalidate()
        screen.draw(["ab"], Position(0, 0))
        assert screen.full_redraws == 2

    def test_extra_rows_are_dropped(self) -> None:
        screen, _ = make_screen(rows=2)
        screen.draw(["a", "b", "c"], Position(0, 0))
        assert screen.lines == ["a", "b"]

    def test_cursor_is_clamped(self) -> None:
        screen, terminal = make_screen(rows=2, columns=5)
        screen.draw(["a"], Position(7, 9))
        assert terminal.output.endswith("\x1b[2;5H\x1b[?25h")

    def test_each_frame_is_one_write(self) -> None:
        screen, terminal = make_screen()
        screen.draw(["ab", "cd"], Position(1, 1))
        assert len(terminal.writes) == 1
        (frame,) = terminal.writes
        assert frame.startswith(HIDE_CURSOR)
        assert frame.endswith("\x1b[2;2H" + SHOW_CURSOR)


class _WriteOnlyTerminal:
    """Just the size and ``write`` members that drawing relies on."""

    rows = 2
    columns = 4

    def __init__(self) -> None:
        self.data = ""

    def write(self, data: str) -> None:
        self.data += data


class TestScreenTerminalUse:
    def test_draws_through_write_alone(self) -> None:
        terminal = _WriteOnlyTerminal()
        screen = Screen(terminal)  # type: ignore[arg-type]
        screen.draw(["hi", "yo"], Position(0, 2))
        assert "\x1b[1;1Hhi\x1b[K" in terminal.data
        assert "\x1b[2;1Hyo\x1b[K" in terminal.data
        assert terminal.data.endswith("\x1b[1;3H" + SHOW_CURSOR)
