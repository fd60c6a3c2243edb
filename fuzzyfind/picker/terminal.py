"""Terminal control helpers for the picker session.

Owns raw-mode lifecycle and alternate-screen switching on the controlling
terminal, leaving stdout free for the selected path.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

CONTROLLING_TTY = "/dev/tty"


class TerminalController:
    """Manage terminal mode transitions for one picker run."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen buffer and tty state."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the terminal, with a safe fallback."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return 80, 24
        return max(1, size.columns), max(1, size.lines)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


@contextlib.contextmanager
def open_controlling_tty():
    """Yield a read/write fd for the controlling terminal.

    Raises ``SystemExit`` when the process has no terminal to draw on.
    """
    try:
        fd = os.open(CONTROLLING_TTY, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise SystemExit(f"No terminal available for the picker: {exc.strerror}") from exc
    try:
        yield fd
    finally:
        os.close(fd)
