"""Styling functions that turn annotated spans into terminal strings."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable

from hecto.annotations import AnnotatedSpan, AnnotationType

_RESET = "\x1b[0m"
_REVERSE = "\x1b[7m"
_REVERSE_OFF = "\x1b[27m"


def _identity(text: str) -> str:
    return text


def _parse_hex(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"invalid colour {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def colorize(foreground: str | None, background: str | None) -> Callable[[str], str]:
    """Return a styling function for 24-bit foreground/background colours."""
    codes: list[str] = []
    if foreground:
        r, g, b = _parse_hex(foreground)
        codes.append(f"38;2;{r};{g};{b}")
    if background:
        r, g, b = _parse_hex(background)
        codes.append(f"48;2;{r};{g};{b}")
    if not codes:
        return _identity
    prefix = f"\x1b[{';'.join(codes)}m"

    def style(text: str) -> str:
        return f"{prefix}{text}{_RESET}"

    return style


def inverse(text: str) -> str:
    return f"{_REVERSE}{text}{_REVERSE_OFF}"


@dataclass
class Theme:
    match: Callable[[str], str] = _identity
    selected_match: Callable[[str], str] = _identity
    selection: Callable[[str], str] = _identity
    status_bar: Callable[[str], str] = _identity

    def style_for(self, annotation_type: AnnotationType | None) -> Callable[[str], str]:
        if annotation_type is AnnotationType.MATCH:
            return self.match
        if annotation_type is AnnotationType.SELECTED_MATCH:
            return self.selected_match
        if annotation_type is AnnotationType.SELECTION:
            return self.selection
        return _identity

    def render_spans(self, spans: Iterable[AnnotatedSpan]) -> str:
        return "".join(self.style_for(span.annotation_type)(span.text) for span in spans)


PLAIN_THEME = Theme()


def default_theme(
    match: str = "#d3d3d3",
    selected_match: str = "#ffff99",
    selection: str = "#3a5fcd",
) -> Theme:
    return Theme(
        match=colorize("#ffffff", match),
        selected_match=colorize("#000000", selected_match),
        selection=colorize("#ffffff", selection),
        status_bar=inverse,
    )
