"""The editor controller: prompts, quit confirmation and the screen loop.

The :class:`Editor` owns the view and the bars, turns terminal input into
commands, routes each command according to the active prompt and redraws
the screen after every batch of input.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import time
from typing import Callable

from hecto.commands import (
    Command,
    Direction,
    Edit,
    EditKind,
    Move,
    System,
    SystemKind,
    command_from_key,
    resize_command,
)
from hecto.components import CommandBar, MessageBar, StatusBar
from hecto.config import Settings
from hecto.keys import parse_key, split_input
from hecto.position import Position, Size
from hecto.terminal import Terminal
from hecto.theme import PLAIN_THEME, Theme
from hecto.ui import Screen, UIComponent
from hecto.view import NAME, View

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-F = find | Ctrl-S = save | Ctrl-Q = quit"
SEARCH_PROMPT = "Search (Esc to cancel, Arrows to navigate): "
SAVE_PROMPT = "Save as: "

# Seconds between checks for an expired message
TICK_INTERVAL = 0.25


class PromptType(enum.Enum):
    NONE = "none"
    SEARCH = "search"
    SAVE = "save"


class Editor:
    """A full-screen editor session on one terminal."""

    def __init__(
        self,
        terminal: Terminal,
        settings: Settings | None = None,
        theme: Theme = PLAIN_THEME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.terminal = terminal
        self.settings = settings if settings is not None else Settings()
        self.view = View(theme=theme)
        self.status_bar = StatusBar(theme)
        self.message_bar = MessageBar(self.settings.message_timeout, clock)
        self.command_bar = CommandBar()
        self.prompt_type = PromptType.NONE
        self.should_quit = False
        self.quit_times = 0
        self.title = ""
        self.terminal_size = Size()
        self.screen = Screen(terminal)
        self._rows: dict[str, list[str]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._quit_event: asyncio.Event | None = None
        self.update_message(HELP_MESSAGE)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def load(self, path: str | os.PathLike[str]) -> None:
        """Open *path* in the view; failures are reported in the message bar."""
        try:
            self.view.load(path)
        except OSError as e:
            logger.warning("Could not open %s: %s", path, e)
            self.update_message(f"ERR: Could not open file: {os.fspath(path)}")

    def update_message(self, message: str) -> None:
        self.message_bar.update_message(message)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Run until the user quits; the terminal is always restored."""
        self._loop = asyncio.get_running_loop()
        self._quit_event = asyncio.Event()
        try:
            self.terminal.start(self.handle_input, self._on_terminal_resize)
            self.handle_resize(Size(height=self.terminal.rows, width=self.terminal.columns))
            self.refresh_screen()
            logger.info("Editor started (%dx%d)", self.terminal_size.width, self.terminal_size.height)
            while not self.should_quit:
                try:
                    await asyncio.wait_for(self._quit_event.wait(), timeout=TICK_INTERVAL)
                except asyncio.TimeoutError:
                    if self.message_bar.needs_redraw:
                        self.refresh_screen()
        finally:
            self.terminal.stop()
            self._loop = None
            self._quit_event = None
            logger.info("Editor stopped")

    def _request_quit(self) -> None:
        self.should_quit = True
        if self._quit_event is not None:
            self._quit_event.set()

    def _on_terminal_resize(self) -> None:
        # Called from the SIGWINCH handler: defer to the event loop
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._handle_terminal_resize)
        else:
            self._handle_terminal_resize()

    def _handle_terminal_resize(self) -> None:
        self.process_command(resize_command(Size(height=self.terminal.rows, width=self.terminal.columns)))
        self.refresh_screen()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        """Process a chunk of raw terminal input, then redraw."""
        for sequence in split_input(data):
            key_id = parse_key(sequence)
            command = command_from_key(key_id)
            if command is None:
                logger.debug("Ignoring input %r", sequence)
                continue
            self.process_command(command)
            if self.should_quit:
                return
        self.refresh_screen()

    def process_command(self, command: Command) -> None:
        if isinstance(command, System) and command.kind is SystemKind.RESIZE:
            if command.size is not None:
                self.handle_resize(command.size)
            return
        if self.prompt_type is PromptType.NONE:
            self._process_command_no_prompt(command)
        elif self.prompt_type is PromptType.SEARCH:
            self._process_command_during_search(command)
        elif self.prompt_type is PromptType.SAVE:
            self._process_command_during_save(command)

    def handle_resize(self, size: Size) -> None:
        self.terminal_size = size
        self.view.resize(Size(height=max(size.height - 2, 0), width=size.width))
        bar_size = Size(height=1, width=size.width)
        self.message_bar.resize(bar_size)
        self.status_bar.resize(bar_size)
        self.command_bar.resize(bar_size)

    # -- no prompt ----------------------------------------------------------

    def _process_command_no_prompt(self, command: Command) -> None:
        if isinstance(command, System) and command.kind is SystemKind.QUIT:
            self._handle_quit_command()
            return
        self._reset_quit_times()

        if isinstance(command, System):
            if command.kind is SystemKind.SAVE:
                self._handle_save_command()
            elif command.kind is SystemKind.SEARCH:
                self.set_prompt(PromptType.SEARCH)
            elif command.kind is SystemKind.DISMISS:
                self.view.clear_selection()
        elif isinstance(command, Edit):
            self.view.handle_edit_command(command)
        elif isinstance(command, Move):
            self.view.handle_move_command(command)

    def _handle_quit_command(self) -> None:
        is_modified = self.view.get_status().is_modified
        if not is_modified or self.quit_times + 1 >= self.settings.quit_times:
            self._request_quit()
            return
        remaining = self.settings.quit_times - self.quit_times - 1
        self.update_message(
            f"WARNING! File has unsaved changes. Press Ctrl-Q {remaining} more times to quit."
        )
        self.quit_times += 1

    def _reset_quit_times(self) -> None:
        if self.quit_times > 0:
            self.quit_times = 0
            self.update_message("")

    def _handle_save_command(self) -> None:
        if self.view.is_file_loaded:
            self._save(None)
        else:
            self.set_prompt(PromptType.SAVE)

    def _save(self, file_name: str | None) -> None:
        try:
            if file_name is None:
                self.view.save()
            else:
                self.view.save_as(file_name)
        except OSError:
            logger.exception("Saving %s failed", file_name or self.view.buffer.file_info)
            self.update_message("Error writing file!")
            return
        self.update_message("File saved successfully.")

    # -- save prompt --------------------------------------------------------

    def _process_command_during_save(self, command: Command) -> None:
        if isinstance(command, System):
            if command.kind is SystemKind.DISMISS:
                self.set_prompt(PromptType.NONE)
                self.update_message("Save aborted.")
        elif isinstance(command, Edit):
            if command.kind is EditKind.INSERT_NEWLINE:
                file_name = self.command_bar.value
                self.set_prompt(PromptType.NONE)
                if file_name:
                    self._save(file_name)
                else:
                    self.update_message("Save aborted.")
            else:
                self.command_bar.handle_edit_command(command)

    # -- search prompt ------------------------------------------------------

    def _process_command_during_search(self, command: Command) -> None:
        if isinstance(command, System):
            if command.kind is SystemKind.DISMISS:
                self.set_prompt(PromptType.NONE)
                self.view.dismiss_search()
        elif isinstance(command, Edit):
            if command.kind is EditKind.INSERT_NEWLINE:
                self.set_prompt(PromptType.NONE)
                self.view.exit_search()
            else:
                self.command_bar.handle_edit_command(command)
                self.view.search_query(self.command_bar.value)
        elif isinstance(command, Move):
            if command.direction in (Direction.RIGHT, Direction.DOWN):
                self.view.search_next()
            elif command.direction in (Direction.LEFT, Direction.UP):
                self.view.search_prev()

    # -- prompt switching ---------------------------------------------------

    @property
    def in_prompt(self) -> bool:
        return self.prompt_type is not PromptType.NONE

    def set_prompt(self, prompt_type: PromptType) -> None:
        if prompt_type is PromptType.NONE:
            self.message_bar.invalidate()
        elif prompt_type is PromptType.SAVE:
            self.command_bar.set_prompt(SAVE_PROMPT)
        elif prompt_type is PromptType.SEARCH:
            self.view.enter_search()
            self.command_bar.set_prompt(SEARCH_PROMPT)
        self.command_bar.clear_value()
        self.prompt_type = prompt_type

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def refresh_status(self) -> None:
        status = self.view.get_status()
        self.status_bar.update_status(status)
        title = f"{status.file_name} - {NAME}"
        if title != self.title:
            self.terminal.set_title(title)
            self.title = title

    def _component_rows(self, key: str, component: UIComponent, width: int) -> list[str]:
        if component.needs_redraw or key not in self._rows:
            self._rows[key] = component.render(width)
        return self._rows[key]

    def refresh_screen(self) -> None:
        size = self.terminal_size
        if size.height == 0 or size.width == 0:
            return
        self.refresh_status()
        width = size.width

        frame: list[str] = []
        if size.height > 2:
            frame.extend(self._component_rows("view", self.view, width))
        if size.height > 1:
            frame.extend(self._component_rows("status", self.status_bar, width))
        if self.in_prompt:
            frame.extend(self._component_rows("command", self.command_bar, width))
        else:
            frame.extend(self._component_rows("message", self.message_bar, width))

        if self.in_prompt:
            cursor = Position(row=size.height - 1, col=self.command_bar.caret_position_col())
        else:
            cursor = self.view.caret_position()
        self.screen.draw(frame, cursor)
