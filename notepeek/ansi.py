"""ANSI-aware text measurement and clipping.

Frames are assembled from styled strings, so widths must ignore escape
sequences and count wide characters as two cells. Only colour (SGR)
sequences survive clipping; anything that could move the cursor or switch
terminal modes is dropped, and note text is escaped before it is styled.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"

# C0 controls except tab/newline/carriage return, DEL, and C1 controls.
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(text: str) -> str:
    """Replace control characters in untrusted text with visible ``\\xNN`` escapes."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def char_display_width(ch: str, col: int) -> int:
    """Cells taken by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch) or not ch.isprintable():
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return visible column count of ``text`` with escapes stripped."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def _is_sgr(sequence: str) -> bool:
    return sequence.endswith("m") and "?" not in sequence


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut a styled line down to ``max_cols`` cells.

    Colour sequences are kept and take no width. Other CSI sequences and bare
    control characters are removed, and tabs become spaces.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    pos = 0
    while pos < len(text) and col < max_cols:
        match = ANSI_ESCAPE_RE.match(text, pos) if text[pos] == "\x1b" else None
        if match is not None:
            if _is_sgr(match.group(0)):
                out.append(match.group(0))
            pos = match.end()
            continue
        ch = text[pos]
        pos += 1
        width = char_display_width(ch, col)
        if col + width > max_cols:
            break
        col += width
        if ch == "\t":
            out.append(" " * width)
        elif width or unicodedata.combining(ch):
            out.append(ch)

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad it with spaces to exactly that width.

    A reset is appended after styled content so padding and whatever follows
    on the row render unstyled.
    """
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    pad = " " * (width - display_width(clipped))
    if "\033" in clipped:
        return clipped + RESET + pad
    return clipped + pad
