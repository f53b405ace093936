"""hecto: a Unicode-aware terminal text editor."""

# Document model
from hecto.annotations import AnnotatedSpan, AnnotatedStringIterator, Annotation, AnnotationType
from hecto.buffer import Buffer, FileInfo
from hecto.fragment import TextFragment, build_fragments
from hecto.line import Line
from hecto.position import Location, MatchPosition, Position, Size

# Search and highlighting
from hecto.highlighter import Highlighter
from hecto.search import Search, SearchInfo, SearchState

# Commands and input
from hecto.commands import Command, Direction, Edit, EditKind, Move, System, SystemKind, command_from_key
from hecto.keys import parse_key, split_input

# Components and editor
from hecto.components import CommandBar, DocumentStatus, MessageBar, StatusBar
from hecto.config import Settings, ThemeSettings, load_settings
from hecto.editor import Editor, PromptType
from hecto.terminal import ProcessTerminal, Terminal
from hecto.theme import PLAIN_THEME, Theme, default_theme
from hecto.ui import Screen, UIComponent
from hecto.utils import grapheme_width, visible_width
from hecto.view import VERSION, View

__version__ = VERSION

__all__ = [
    # Document model
    "AnnotatedSpan",
    "AnnotatedStringIterator",
    "Annotation",
    "AnnotationType",
    "Buffer",
    "FileInfo",
    "Line",
    "Location",
    "MatchPosition",
    "Position",
    "Size",
    "TextFragment",
    "build_fragments",
    # Search and highlighting
    "Highlighter",
    "Search",
    "SearchInfo",
    "SearchState",
    # Commands and input
    "Command",
    "Direction",
    "Edit",
    "EditKind",
    "Move",
    "System",
    "SystemKind",
    "command_from_key",
    "parse_key",
    "split_input",
    # Components and editor
    "CommandBar",
    "DocumentStatus",
    "Editor",
    "MessageBar",
    "PLAIN_THEME",
    "ProcessTerminal",
    "PromptType",
    "Screen",
    "Settings",
    "StatusBar",
    "Terminal",
    "Theme",
    "ThemeSettings",
    "UIComponent",
    "View",
    "default_theme",
    "grapheme_width",
    "load_settings",
    "visible_width",
]
