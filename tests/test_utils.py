"""Tests for hecto.utils -- grapheme widths and byte accounting."""

from __future__ import annotations

from hecto.utils import (
    byte_length,
    grapheme_width,
    graphemes,
    is_non_printable,
    truncate_to_width,
    visible_width,
)


# ---------------------------------------------------------------------------
# grapheme_width
# ---------------------------------------------------------------------------


class TestGraphemeWidth:
    """Display width of single grapheme clusters."""

    def test_ascii_is_one(self) -> None:
        assert grapheme_width("a") == 1

    def test_cjk_is_two(self) -> None:
        assert grapheme_width("世") == 2

    def test_emoji_is_two(self) -> None:
        assert grapheme_width("\U0001f389") == 2

    def test_combined_accent_takes_base_width(self) -> None:
        assert grapheme_width("e\u0301") == 1

    def test_lone_combining_mark_is_zero(self) -> None:
        assert grapheme_width("\u0301") == 0

    def test_control_is_zero(self) -> None:
        assert grapheme_width("\x07") == 0

    def test_skin_tone_sequence_is_two(self) -> None:
        assert grapheme_width("\U0001f44d\U0001f3fd") == 2

    def test_flag_is_two(self) -> None:
        assert grapheme_width("\U0001f1e9\U0001f1ea") == 2

    def test_zwj_family_is_two(self) -> None:
        assert grapheme_width("\U0001f468\u200d\U0001f469\u200d\U0001f467") == 2

    def test_empty_is_zero(self) -> None:
        assert grapheme_width("") == 0


class TestGraphemes:
    def test_clusters_of_mixed_text(self) -> None:
        assert graphemes("cafe\u0301\U0001f389") == ["c", "a", "f", "e\u0301", "\U0001f389"]


# ---------------------------------------------------------------------------
# byte_length / is_non_printable
# ---------------------------------------------------------------------------


class TestByteLength:
    def test_ascii(self) -> None:
        assert byte_length("abc") == 3

    def test_multibyte(self) -> None:
        assert byte_length("caf\u00e9") == 5
        assert byte_length("\U0001f389") == 4

    def test_escaped_byte_counts_once(self) -> None:
        # "\udcff" stands for the undecodable byte 0xff
        assert byte_length("\udcff") == 1

    def test_other_lone_surrogate(self) -> None:
        assert byte_length("\ud800") == 3


class TestIsNonPrintable:
    def test_control_characters(self) -> None:
        assert is_non_printable("\x00")
        assert is_non_printable("\x1b")

    def test_escaped_byte(self) -> None:
        assert is_non_printable("\udcff")

    def test_printable(self) -> None:
        assert not is_non_printable("a")
        assert not is_non_printable("é")


# ---------------------------------------------------------------------------
# visible_width / truncate_to_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    def test_sgr_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[7mab\x1b[27m") == 2

    def test_wide_characters(self) -> None:
        assert visible_width("a\U0001f389b") == 4


class TestTruncateToWidth:
    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("abc", 5) == "abc"

    def test_never_splits_wide_glyph(self) -> None:
        assert truncate_to_width("a\U0001f389b", 2) == "a"

    def test_zero_width(self) -> None:
        assert truncate_to_width("abc", 0) == ""
