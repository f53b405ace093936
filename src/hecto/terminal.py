"""Terminal abstraction for raw-mode, full-screen stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, line wrapping
and the window title via ANSI escape sequences.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from hecto.ui import SHOW_CURSOR

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALTERNATE_SCREEN_ENABLE = "\x1b[?1049h"
_ALTERNATE_SCREEN_DISABLE = "\x1b[?1049l"
_LINE_WRAP_DISABLE = "\x1b[?7l"
_LINE_WRAP_ENABLE = "\x1b[?7h"

_CLEAR_SCREEN = "\x1b[2J\x1b[H"

_SET_TITLE_FMT = "\x1b]0;{}\x07"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def set_title(self, title: str) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    ``start`` switches to raw mode and the alternate screen, disables line
    wrapping and installs a SIGWINCH handler; ``stop`` undoes all of it and
    is safe to call more than once.
    """

    def __init__(self) -> None:
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self._stdin_reader_active: bool = False
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._started: bool = False

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Enable raw mode, enter the alternate screen and read stdin."""
        self._input_handler = on_input
        self._resize_handler = on_resize

        fd = sys.stdin.fileno()

        # Save previous terminal state
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._started = True

        self._raw_write(_ALTERNATE_SCREEN_ENABLE + _LINE_WRAP_DISABLE + _CLEAR_SCREEN)

        # Set up SIGWINCH handler for resize events
        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._start_stdin_reader()
        logger.debug("Terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Restore terminal state and clean up all handlers."""
        if not self._started:
            return
        self._started = False

        self._remove_stdin_reader()

        # Restore SIGWINCH handler
        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        self._raw_write(_CLEAR_SCREEN + SHOW_CURSOR + _LINE_WRAP_ENABLE + _ALTERNATE_SCREEN_DISABLE)

        # Restore terminal attributes
        fd = sys.stdin.fileno()
        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

        self._input_handler = None
        self._resize_handler = None
        logger.debug("Terminal stopped")

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        self._raw_write(data)

    # -- title ----------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self._raw_write(_SET_TITLE_FMT.format(title))

    # -- private: stdin reading --------------------------------------------

    def _start_stdin_reader(self) -> None:
        """Register an asyncio reader on stdin that forwards decoded input."""
        if self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_event_loop()
            loop.add_reader(sys.stdin.fileno(), self._on_stdin_readable)
            self._stdin_reader_active = True
        except RuntimeError:
            # No running event loop -- cannot register reader
            logger.warning("No event loop; stdin reader not installed")

    def _remove_stdin_reader(self) -> None:
        if not self._stdin_reader_active:
            return
        try:
            loop = asyncio.get_event_loop()
            loop.remove_reader(sys.stdin.fileno())
        except (RuntimeError, ValueError):
            logger.debug("stdin reader already gone")
        self._stdin_reader_active = False

    def _on_stdin_readable(self) -> None:
        """Callback invoked by the event loop when stdin has data."""
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError:
            return

        if not raw:
            return

        data = raw.decode("utf-8", errors="replace")
        if self._input_handler is not None:
            self._input_handler(data)

    # -- private: SIGWINCH -------------------------------------------------

    def _on_sigwinch(
        self,
        signum: int,
        frame: object,
    ) -> None:
        """Handle terminal resize signals."""
        if self._resize_handler is not None:
            self._resize_handler()

    # -- private: raw write ------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass
