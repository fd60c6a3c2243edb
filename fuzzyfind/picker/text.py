"""Display-width aware clipping for picker rows.

Wide East Asian characters take two cells and combining marks none, so rows
are measured in terminal cells rather than code points.
"""

from __future__ import annotations

import unicodedata

ELLIPSIS = "…"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_line(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns, keeping the start."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def clip_line_keep_tail(text: str, max_cols: int) -> str:
    """Trim ``text`` from the left so its tail stays visible.

    Paths are matched from their end, so the tail is the informative part.
    A leading ellipsis marks the cut.
    """
    if max_cols <= 0 or not text:
        return ""
    if display_width(text) <= max_cols:
        return text
    if max_cols == 1:
        return ELLIPSIS

    budget = max_cols - 1
    out: list[str] = []
    col = 0
    for ch in reversed(text):
        w = char_display_width(ch)
        if col + w > budget:
            break
        out.append(ch)
        col += w
    return ELLIPSIS + "".join(reversed(out))
