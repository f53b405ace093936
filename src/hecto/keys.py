"""Keyboard input splitting and parsing for legacy terminal sequences.

``split_input`` cuts one raw stdin chunk into complete key sequences and
``parse_key`` turns each sequence into a key identifier such as ``"a"``,
``"ctrl+q"`` or ``"shift+left"``.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

ESC = "\x1b"

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
}

LEGACY_SHIFT_SEQUENCES: dict[str, str] = {
    "\x1b[1;2A": "up",
    "\x1b[1;2B": "down",
    "\x1b[1;2C": "right",
    "\x1b[1;2D": "left",
    "\x1b[1;2H": "home",
    "\x1b[1;2F": "end",
    "\x1b[3;2~": "delete",
    "\x1b[5;2~": "pageUp",
    "\x1b[6;2~": "pageDown",
    "\x1b[Z": "tab",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
    "\x1b[1;5H": "home",
    "\x1b[1;5F": "end",
    "\x1b[5;5~": "pageUp",
    "\x1b[6;5~": "pageDown",
}

LEGACY_ALT_SEQUENCES: dict[str, str] = {
    "\x1b[1;3A": "up",
    "\x1b[1;3B": "down",
    "\x1b[1;3C": "right",
    "\x1b[1;3D": "left",
}


# ---------------------------------------------------------------------------
# split_input: cut a raw chunk into complete sequences
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> bool:
    """Whether *data*, which starts with ESC, is a complete escape sequence."""
    if len(data) == 1:
        return False

    after_esc = data[1:]

    # CSI sequences: ESC [ params final-byte
    if after_esc.startswith("["):
        if len(data) < 3:
            return False
        return 0x40 <= ord(data[-1]) <= 0x7E

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return len(after_esc) >= 2

    # Meta key sequences: ESC followed by a single character
    return True


def split_input(data: str) -> list[str]:
    """Split one chunk of terminal input into key sequences.

    Escape sequences are kept whole; every other character is its own
    sequence.  A sequence cut off at the end of the chunk is returned as
    is, so a lone ESC stays a key of its own.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(data):
        if data[pos] != ESC:
            sequences.append(data[pos])
            pos += 1
            continue

        seq_end = pos + 1
        while seq_end < len(data):
            # Another ESC always starts a new sequence
            if data[seq_end] == ESC:
                break
            seq_end += 1
            if _is_complete_sequence(data[pos:seq_end]):
                break
        sequences.append(data[pos:seq_end])
        pos = seq_end

    return sequences


# ---------------------------------------------------------------------------
# parse_key: determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse one key sequence and return the key identifier, or ``None``."""
    if not data:
        return None

    # --- Legacy escape sequences ---
    # Check modified sequences first (they're longer / more specific)
    for seq_dict, mod_prefix in [
        (LEGACY_CTRL_SEQUENCES, "ctrl+"),
        (LEGACY_SHIFT_SEQUENCES, "shift+"),
        (LEGACY_ALT_SEQUENCES, "alt+"),
        (LEGACY_KEY_SEQUENCES, ""),
    ]:
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    # --- Simple single-byte keys ---
    if data == ESC:
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == "\x7f" or data == "\x08":
        return "backspace"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == ESC:
        ch = data[1]
        if ch.isprintable():
            return "alt+" + ch.lower()
        return None

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None
