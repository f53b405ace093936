"""Tests for hecto.buffer -- loading, saving and line-level edits."""

from __future__ import annotations

from pathlib import Path

import pytest

from hecto.buffer import Buffer, FileInfo
from hecto.position import Location, MatchPosition


class TestLoad:
    """Splitting file contents into lines."""

    def test_trailing_newline_adds_no_line(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"one\ntwo\n")
        assert Buffer.load(path).to_lines() == ["one", "two"]

    def test_no_trailing_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"one\ntwo")
        assert Buffer.load(path).to_lines() == ["one", "two"]

    def test_crlf_is_stripped(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"one\r\ntwo\r\n")
        assert Buffer.load(path).to_lines() == ["one", "two"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"")
        buffer = Buffer.load(path)
        assert buffer.is_empty
        assert buffer.is_file_loaded

    def test_single_newline_is_one_empty_line(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"\n")
        assert Buffer.load(path).to_lines() == [""]

    def test_file_info(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_bytes(b"x\n")
        buffer = Buffer.load(path)
        assert str(buffer.file_info) == "notes.txt"
        assert not buffer.dirty

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            Buffer.load(tmp_path / "missing.txt")


class TestSave:
    def test_save_writes_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"one\n")
        buffer = Buffer.load(path)
        buffer.insert_char("!", Location(0, 3))
        assert buffer.dirty
        buffer.save()
        assert path.read_bytes() == b"one!\n"
        assert not buffer.dirty

    def test_undecodable_bytes_survive(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"ok\xff\xfe\n")
        buffer = Buffer.load(path)
        assert buffer.to_lines() == ["ok\udcff\udcfe"]
        buffer.save()
        assert path.read_bytes() == b"ok\xff\xfe\n"

    def test_save_without_name(self) -> None:
        with pytest.raises(ValueError):
            Buffer.from_lines(["x"]).save()

    def test_save_as_sets_file_info(self, tmp_path: Path) -> None:
        buffer = Buffer.from_lines(["a", "b"])
        buffer.save_as(tmp_path / "new.txt")
        assert (tmp_path / "new.txt").read_text() == "a\nb\n"
        assert buffer.file_info == FileInfo(tmp_path / "new.txt")
        assert buffer.is_file_loaded

    def test_no_temporary_files_left(self, tmp_path: Path) -> None:
        Buffer.from_lines(["a"]).save_as(tmp_path / "new.txt")
        assert [p.name for p in tmp_path.iterdir()] == ["new.txt"]

    def test_failed_save_raises_oserror(self, tmp_path: Path) -> None:
        buffer = Buffer.from_lines(["a"])
        buffer.dirty = True
        with pytest.raises(OSError):
            buffer.save_as(tmp_path / "missing" / "new.txt")
        assert buffer.dirty
        assert not buffer.is_file_loaded


class TestEditing:
    def test_insert_on_virtual_last_line(self) -> None:
        buffer = Buffer.from_lines(["a"])
        buffer.insert_char("b", Location(1, 0))
        assert buffer.to_lines() == ["a", "b"]

    def test_insert_into_empty_buffer(self) -> None:
        buffer = Buffer()
        buffer.insert_char("x", Location(0, 0))
        assert buffer.to_lines() == ["x"]
        assert buffer.dirty

    def test_newline_splits_line(self) -> None:
        buffer = Buffer.from_lines(["hello"])
        buffer.insert_newline(Location(0, 2))
        assert buffer.to_lines() == ["he", "llo"]

    def test_newline_past_end_appends(self) -> None:
        buffer = Buffer.from_lines(["a"])
        buffer.insert_newline(Location(1, 0))
        assert buffer.to_lines() == ["a", ""]

    def test_delete_at_end_merges_next_line(self) -> None:
        buffer = Buffer.from_lines(["he", "llo"])
        buffer.delete(Location(0, 2))
        assert buffer.to_lines() == ["hello"]

    def test_delete_at_end_of_last_line_is_noop(self) -> None:
        buffer = Buffer.from_lines(["a"])
        buffer.delete(Location(0, 1))
        buffer.delete(Location(3, 0))
        assert buffer.to_lines() == ["a"]
        assert not buffer.dirty

    def test_split_then_merge_restores(self) -> None:
        buffer = Buffer.from_lines(["abc", "def"])
        buffer.insert_newline(Location(1, 1))
        buffer.delete(Location(1, 1))
        assert buffer.to_lines() == ["abc", "def"]


class TestQueries:
    def test_line_out_of_range(self) -> None:
        buffer = Buffer.from_lines(["a"])
        assert buffer.line(1) is None
        assert buffer.line(-1) is None
        assert buffer.grapheme_count(5) == 0
        assert buffer.width_until(5, 3) == 0

    def test_find_all(self) -> None:
        buffer = Buffer.from_lines(["xax", "", "aa"])
        assert buffer.find_all("a") == [
            MatchPosition(0, 1),
            MatchPosition(2, 0),
            MatchPosition(2, 1),
        ]
