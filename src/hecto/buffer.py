"""Document storage: the ordered lines of a file plus its file association."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from hecto.line import Line
from hecto.position import Location, MatchPosition

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ERRORS = "surrogateescape"


@dataclass
class FileInfo:
    path: Path | None = None

    @property
    def has_path(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        return self.path.name if self.path is not None else "[No Name]"


def _split_lines(contents: str) -> list[str]:
    if not contents:
        return []
    lines = contents.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Buffer:
    """The lines of one document.

    Locations passed in are clamped to the document; a location one line
    past the end addresses the (virtual) empty line after the last one.
    """

    def __init__(self, lines: list[Line] | None = None, file_info: FileInfo | None = None) -> None:
        self._lines: list[Line] = lines if lines is not None else []
        self.file_info = file_info if file_info is not None else FileInfo()
        self.dirty = False

    # -- construction / serialization ---------------------------------------

    @classmethod
    def from_lines(cls, texts: Iterable[str]) -> Buffer:
        return cls([Line(text) for text in texts])

    def to_lines(self) -> list[str]:
        return [line.text for line in self._lines]

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Buffer:
        """Read *path*; raises :class:`OSError` when it cannot be read."""
        file_path = Path(path)
        contents = file_path.read_bytes().decode(ENCODING, ERRORS)
        buffer = cls.from_lines(_split_lines(contents))
        buffer.file_info = FileInfo(file_path)
        logger.info("Loaded %s (%d lines)", file_path, buffer.height)
        return buffer

    def _write(self, path: Path) -> None:
        data = "".join(f"{line.text}\n" for line in self._lines).encode(ENCODING, ERRORS)
        with tempfile.NamedTemporaryFile(
            mode="wb", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as temp_file:
            temp_name = temp_file.name
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        try:
            os.replace(temp_name, path)
        except OSError:
            os.unlink(temp_name)
            raise
        logger.info("Saved %s (%d lines)", path, self.height)

    def save(self) -> None:
        """Write the document back to its file; raises :class:`OSError` on failure."""
        if self.file_info.path is None:
            raise ValueError("document has no file name")
        self._write(self.file_info.path)
        self.dirty = False

    def save_as(self, path: str | os.PathLike[str]) -> None:
        file_path = Path(path)
        self._write(file_path)
        self.file_info = FileInfo(file_path)
        self.dirty = False

    # -- queries -------------------------------------------------------------

    @property
    def height(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_file_loaded(self) -> bool:
        return self.file_info.has_path

    def line(self, line_idx: int) -> Line | None:
        if 0 <= line_idx < len(self._lines):
            return self._lines[line_idx]
        return None

    def grapheme_count(self, line_idx: int) -> int:
        line = self.line(line_idx)
        return line.grapheme_count if line is not None else 0

    def width_until(self, line_idx: int, grapheme_idx: int) -> int:
        line = self.line(line_idx)
        return line.width_up_to(grapheme_idx) if line is not None else 0

    def find_all(self, query: str) -> list[MatchPosition]:
        """Every match of *query* in document reading order."""
        if not query:
            return []
        return [
            MatchPosition(line_idx, byte_idx)
            for line_idx, line in enumerate(self._lines)
            for byte_idx, _ in line.find_all(query)
        ]

    # -- editing -------------------------------------------------------------

    def insert_char(self, character: str, at: Location) -> None:
        if at.line_idx >= self.height:
            self._lines.append(Line(character))
        else:
            self._lines[max(at.line_idx, 0)].insert(at.grapheme_idx, character)
        self.dirty = True

    def delete(self, at: Location) -> None:
        """Delete the grapheme at *at*, or join the next line when at its end."""
        line = self.line(at.line_idx)
        if line is None:
            return
        if at.grapheme_idx >= line.grapheme_count:
            if at.line_idx + 1 < self.height:
                line.append(self._lines.pop(at.line_idx + 1))
                self.dirty = True
        elif at.grapheme_idx >= 0:
            line.delete(at.grapheme_idx)
            self.dirty = True

    def insert_newline(self, at: Location) -> None:
        if at.line_idx >= self.height:
            self._lines.append(Line())
        else:
            tail = self._lines[max(at.line_idx, 0)].split_at(at.grapheme_idx)
            self._lines.insert(max(at.line_idx, 0) + 1, tail)
        self.dirty = True
