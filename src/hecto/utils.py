"""Unicode text utilities: grapheme segmentation, width measurement, byte offsets.

Provides the grapheme-cluster segmenter, the terminal display width of a
single cluster, printable-ness classification, UTF-8 byte accounting and a
few helpers for measuring and truncating plain or ANSI-styled strings.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[str]:
    """Split *text* into its grapheme clusters, in order."""
    return list(grapheme.graphemes(text))


# ---------------------------------------------------------------------------
# Byte accounting
# ---------------------------------------------------------------------------


def byte_length(text: str) -> int:
    """Return the length of *text* encoded as UTF-8.

    Code points produced by the ``surrogateescape`` error handler count as
    the single byte they stand for; any other lone surrogate counts as the
    three bytes ``surrogatepass`` would write.
    """
    if text.isascii():
        return len(text)
    try:
        return len(text.encode("utf-8", "surrogateescape"))
    except UnicodeEncodeError:
        return len(text.encode("utf-8", "surrogatepass"))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

_NON_PRINTABLE_CATEGORIES = ("Cc", "Cs")


def is_non_printable(g: str) -> bool:
    """Return ``True`` for a single control character or lone surrogate."""
    if len(g) != 1:
        return False
    return unicodedata.category(g) in _NON_PRINTABLE_CATEGORIES


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _codepoint_width(ch: str) -> int:
    w = _wcwidth.wcwidth(ch)
    if w < 0:
        return 0
    return min(w, 2)


def grapheme_width(g: str) -> int:
    """Return the terminal display width (0, 1 or 2) of a grapheme cluster.

    Rules:
    1. Zero-width clusters (combining marks, joiners, format characters) -> 0
    2. Wide or full-width code points and emoji sequences -> 2
    3. Everything else, unassigned code points included -> 1

    Control characters report 0 here; :func:`is_non_printable` flags them
    so the caller can substitute a visible placeholder.
    """
    if not g:
        return 0

    # Single codepoint fast path
    if len(g) == 1:
        cp = ord(g)
        if 0x20 <= cp < 0x7F:
            return 1
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        if 0xD800 <= cp <= 0xDFFF:
            return 0
        return _codepoint_width(g)

    cached = _width_cache.get(g)
    if cached is not None:
        return cached

    # Emoji indicators anywhere in the cluster:
    # VS16, ZWJ sequences, skin tone modifiers, regional indicator pairs
    for ch in g:
        cp = ord(ch)
        if cp == 0xFE0F or cp == 0x200D:
            return _cache_width(g, 2)
        if 0x1F3FB <= cp <= 0x1F3FF:
            return _cache_width(g, 2)
        if 0x1F1E6 <= cp <= 0x1F1FF:
            return _cache_width(g, 2)

    # The base character decides; trailing marks add nothing.
    base = g[0]
    cat = unicodedata.category(base)
    if cat.startswith("M") or cat == "Cf":
        return _cache_width(g, 0)
    if ord(base) >= 0x1F000:
        return _cache_width(g, 2)

    return _cache_width(g, _codepoint_width(base))


# ---------------------------------------------------------------------------
# Measuring styled strings
# ---------------------------------------------------------------------------

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*, ignoring SGR codes."""
    if not text:
        return 0
    stripped = strip_ansi(text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(grapheme_width(g) for g in grapheme.graphemes(stripped))


def truncate_to_width(text: str, max_width: int) -> str:
    """Truncate plain *text* so that it occupies at most *max_width* columns.

    Clusters are never cut: a wide glyph that would straddle the limit is
    dropped entirely.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text
    result: list[str] = []
    used = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if used + w > max_width:
            break
        result.append(g)
        used += w
    return "".join(result)
