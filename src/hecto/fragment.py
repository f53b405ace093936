"""Text fragments: one grapheme cluster with its resolved display properties."""

from __future__ import annotations

from dataclasses import dataclass

import grapheme

from hecto.utils import byte_length, grapheme_width, is_non_printable

CONTROL_PLACEHOLDER = "\u25af"  # ▯
WHITESPACE_PLACEHOLDER = "\u2423"  # ␣
ZERO_WIDTH_PLACEHOLDER = "\u00b7"  # ·


@dataclass(frozen=True)
class TextFragment:
    """A single grapheme cluster of a line.

    ``width`` is the number of columns the fragment occupies on screen, which
    is the width of ``replacement`` when one is set.  ``start`` and ``end``
    delimit the cluster's original bytes in the owning line.
    """

    grapheme: str
    width: int
    start: int
    end: int
    replacement: str | None = None

    @property
    def rendered(self) -> str:
        """The text written to the terminal for this fragment."""
        return self.replacement if self.replacement is not None else self.grapheme


def _replacement_for(g: str, natural_width: int) -> str | None:
    if g == " ":
        return None
    if g == "\t":
        return " "
    if is_non_printable(g):
        return CONTROL_PLACEHOLDER
    if natural_width > 0 and g.isspace():
        return WHITESPACE_PLACEHOLDER
    if natural_width == 0:
        return ZERO_WIDTH_PLACEHOLDER
    return None


def build_fragments(text: str) -> list[TextFragment]:
    """Segment *text* into classified fragments.

    Every cluster gets a width of 1 or 2: anything that would otherwise be
    invisible (controls, stray combining marks, joiners) is given a one
    column placeholder so that the cursor never sits on a zero-width cell.
    A natural width of 0 is only ever reported by
    :func:`~hecto.utils.grapheme_width`; the fragment renders its
    placeholder instead.
    """
    fragments: list[TextFragment] = []
    offset = 0
    for g in grapheme.graphemes(text):
        size = byte_length(g)
        natural_width = grapheme_width(g)
        replacement = _replacement_for(g, natural_width)
        width = 1 if replacement is not None else natural_width
        fragments.append(
            TextFragment(
                grapheme=g,
                width=width,
                start=offset,
                end=offset + size,
                replacement=replacement,
            )
        )
        offset += size
    return fragments
