"""Message bar: the most recent message, until it expires."""

from __future__ import annotations

import time
from typing import Callable

from hecto.position import Size
from hecto.utils import truncate_to_width

DEFAULT_MESSAGE_TIMEOUT = 5.0


class MessageBar:
    """Shows the last message for ``timeout`` seconds.

    An expired message renders as an empty row.  ``needs_redraw`` turns
    true once when the message expires so that the editor clears it.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_MESSAGE_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._timeout = timeout
        self._clock = clock
        self._message = ""
        self._set_at = clock()
        self._cleared_after_expiry = False
        self._needs_redraw = True
        self._size = Size()

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_expired(self) -> bool:
        return self._clock() - self._set_at > self._timeout

    @property
    def needs_redraw(self) -> bool:
        return self._needs_redraw or (self.is_expired and not self._cleared_after_expiry)

    @needs_redraw.setter
    def needs_redraw(self, value: bool) -> None:
        self._needs_redraw = value

    def update_message(self, message: str) -> None:
        self._message = message
        self._set_at = self._clock()
        self._cleared_after_expiry = False
        self._needs_redraw = True

    def resize(self, size: Size) -> None:
        self._size = size
        self._needs_redraw = True

    def invalidate(self) -> None:
        self._needs_redraw = True

    def render(self, width: int) -> list[str]:
        self._needs_redraw = False
        if self.is_expired:
            self._cleared_after_expiry = True
            return [""]
        return [truncate_to_width(self._message, width)]
