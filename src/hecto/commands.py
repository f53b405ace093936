"""Editor commands and the key-id to command mapping."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from hecto.position import Size


class EditKind(enum.Enum):
    INSERT = "insert"
    INSERT_NEWLINE = "insertNewline"
    DELETE = "delete"
    DELETE_BACKWARD = "deleteBackward"


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    START_OF_LINE = "startOfLine"
    END_OF_LINE = "endOfLine"


class SystemKind(enum.Enum):
    SAVE = "save"
    QUIT = "quit"
    SEARCH = "search"
    DISMISS = "dismiss"
    RESIZE = "resize"


@dataclass(frozen=True)
class Edit:
    kind: EditKind
    character: str = ""


@dataclass(frozen=True)
class Move:
    direction: Direction
    select: bool = False


@dataclass(frozen=True)
class System:
    kind: SystemKind
    size: Size | None = None


Command = Union[Edit, Move, System]


_MOVE_KEYS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "pageUp": Direction.PAGE_UP,
    "pageDown": Direction.PAGE_DOWN,
    "home": Direction.START_OF_LINE,
    "end": Direction.END_OF_LINE,
}

_SYSTEM_KEYS: dict[str, SystemKind] = {
    "ctrl+q": SystemKind.QUIT,
    "ctrl+s": SystemKind.SAVE,
    "ctrl+f": SystemKind.SEARCH,
    "escape": SystemKind.DISMISS,
}

_EDIT_KEYS: dict[str, Edit] = {
    "enter": Edit(EditKind.INSERT_NEWLINE),
    "tab": Edit(EditKind.INSERT, "\t"),
    "backspace": Edit(EditKind.DELETE_BACKWARD),
    "delete": Edit(EditKind.DELETE),
}


def command_from_key(key_id: str | None) -> Command | None:
    """Map a key identifier from :func:`hecto.keys.parse_key` to a command."""
    if not key_id:
        return None
    if key_id in _SYSTEM_KEYS:
        return System(_SYSTEM_KEYS[key_id])
    if key_id in _EDIT_KEYS:
        return _EDIT_KEYS[key_id]
    if key_id in _MOVE_KEYS:
        return Move(_MOVE_KEYS[key_id])
    modifier, _, base = key_id.partition("+")
    if base in _MOVE_KEYS:
        if modifier == "shift":
            return Move(_MOVE_KEYS[base], select=True)
        # ctrl and alt navigation keys move like the plain keys
        if modifier in ("ctrl", "alt"):
            return Move(_MOVE_KEYS[base])
    # A single printable character (modifier ids are longer than one char)
    if len(key_id) == 1 and key_id.isprintable():
        return Edit(EditKind.INSERT, key_id)
    return None


def resize_command(size: Size) -> System:
    return System(SystemKind.RESIZE, size)
