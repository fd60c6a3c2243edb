"""Interactive picker event loop.

Draws the filtered project list on the controlling terminal and returns the
chosen path, or ``None`` when the user aborts.
"""

from __future__ import annotations

from ..session import ProjectIndex
from .input import read_key
from .terminal import TerminalController, open_controlling_tty
from .view import PickerState, handle_picker_key, refresh_matches, render_picker


def run_picker_on(
    terminal: TerminalController,
    index: ProjectIndex,
    initial_query: str = "",
    prefix: str = "",
) -> str | None:
    """Drive the picker on an already-open terminal until it closes."""
    state = PickerState(query=initial_query)
    refresh_matches(state, index)

    with terminal.raw_mode():
        while True:
            cols, rows = terminal.size()
            terminal.write(render_picker(state, cols, rows, prefix))
            key = read_key(terminal.stdin_fd)
            if key == "":
                # End of input behaves like an abort.
                return None
            if handle_picker_key(key, state, index, visible_rows=max(1, rows - 1)):
                return state.selection


def run_picker(index: ProjectIndex, initial_query: str = "", prefix: str = "") -> str | None:
    """Open the controlling terminal and run the picker on it."""
    with open_controlling_tty() as fd:
        terminal = TerminalController(stdin_fd=fd, stdout_fd=fd)
        return run_picker_on(terminal, index, initial_query, prefix)
