"""Picker state, key handling, and frame rendering.

Everything here is pure with respect to the terminal: keys come in as
tokens from ``input.read_key`` and frames go out as strings, so the loop
only wires them together.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..session import FilterResult, ProjectIndex, display_label
from .text import clip_line, clip_line_keep_tail, display_width

QUIT_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_G"})
PROMPT = "> "


@dataclass
class PickerState:
    """Mutable state of one picker session."""

    query: str = ""
    selected: int = 0
    list_start: int = 0
    result: FilterResult = field(default_factory=lambda: FilterResult(paths=[]))
    selection: str | None = None
    total: int = 0


def refresh_matches(state: PickerState, index: ProjectIndex) -> None:
    """Re-run the filter for the current query and reset the cursor."""
    state.result = index.filter(state.query)
    state.total = len(index)
    state.selected = 0
    state.list_start = 0


def _move_selection(state: PickerState, direction: int) -> None:
    """Move selection by ``direction`` while clamping to list bounds."""
    if not state.result.paths:
        return
    state.selected = max(0, min(len(state.result.paths) - 1, state.selected + direction))


def ensure_selection_visible(state: PickerState, visible_rows: int) -> None:
    visible_rows = max(1, visible_rows)
    if state.selected < state.list_start:
        state.list_start = state.selected
    elif state.selected >= state.list_start + visible_rows:
        state.list_start = state.selected - visible_rows + 1


def is_query_char(key: str) -> bool:
    return len(key) == 1 and key.isprintable() and not key.isspace()


def handle_picker_key(key: str, state: PickerState, index: ProjectIndex, visible_rows: int) -> bool:
    """Apply one key token; return whether the picker should close.

    ``state.selection`` is set only when the user confirms a row.
    """
    if key in QUIT_KEYS:
        state.selection = None
        return True
    if key == "ENTER":
        if not state.result.paths:
            return False
        state.selection = state.result.paths[state.selected]
        return True
    if key in {"UP", "CTRL_P"}:
        _move_selection(state, -1)
    elif key in {"DOWN", "CTRL_N", "TAB"}:
        _move_selection(state, 1)
    elif key == "PAGE_UP":
        _move_selection(state, -max(1, visible_rows))
    elif key == "PAGE_DOWN":
        _move_selection(state, max(1, visible_rows))
    elif key == "HOME":
        state.selected = 0
    elif key == "END":
        _move_selection(state, len(state.result.paths))
    elif key in {"BACKSPACE", "DELETE"}:
        if state.query:
            state.query = state.query[:-1]
            refresh_matches(state, index)
    elif key == "CTRL_U":
        if state.query:
            state.query = ""
            refresh_matches(state, index)
    elif is_query_char(key):
        state.query += key
        refresh_matches(state, index)
    ensure_selection_visible(state, visible_rows)
    return False


def format_row(path: str, score: int | None, prefix: str, max_cols: int) -> str:
    label = display_label(path, prefix)
    if score is None:
        return clip_line_keep_tail(label, max_cols)
    head = f"{score:02d} "
    return clip_line(head, max_cols) + clip_line_keep_tail(label, max_cols - len(head))


def render_picker(state: PickerState, cols: int, rows: int, prefix: str = "") -> str:
    """Build one full frame: match rows on top, query line at the bottom.

    The bottom line always fits ``cols`` display cells. A one-row terminal
    shows only the query line.
    """
    visible_rows = max(0, rows - 1)
    ensure_selection_visible(state, visible_rows)

    out: list[str] = ["\x1b[H"]
    paths = state.result.paths
    for screen_row in range(visible_rows):
        out.append("\x1b[2K")
        row = state.list_start + screen_row
        if row < len(paths):
            line = format_row(paths[row], state.result.score_for_row(row), prefix, cols)
            if row == state.selected:
                out.append(f"\x1b[7m{line}\x1b[0m")
            else:
                out.append(line)
        out.append("\r\n")

    counter = f"  {len(paths)}/{state.total}"
    query_line = clip_line(PROMPT + state.query, max(0, cols - display_width(counter)))
    out.append("\x1b[2K" + query_line + clip_line(counter, cols - display_width(query_line)))
    return "".join(out)
