"""Editor window components."""

from hecto.components.command_bar import CommandBar
from hecto.components.message_bar import MessageBar
from hecto.components.status_bar import DocumentStatus, StatusBar

__all__ = [
    "CommandBar",
    "DocumentStatus",
    "MessageBar",
    "StatusBar",
]
