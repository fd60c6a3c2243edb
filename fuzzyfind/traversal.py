"""Explicit-stack directory walker with per-directory descent control.

The visitor sees every entry of a directory and returns a ``Signal``.
Signals are aggregated per directory before deciding whether to descend.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Callable


class Signal(enum.Enum):
    """Per-entry vote on whether the containing directory is descended."""

    CONTINUE_DEFAULT = "continue"
    CONTINUE_FORCED = "continue-forced"
    STOP_DEFAULT = "stop"
    STOP_FORCED = "stop-forced"


Visitor = Callable[[str, str, bool], Signal]


class DescentVerdict:
    """Aggregate entry signals for one directory into a descend decision.

    Precedence is fixed: any ``STOP_FORCED`` wins, then any
    ``CONTINUE_FORCED``, otherwise descend only when at least one entry said
    ``CONTINUE_DEFAULT`` and none said ``STOP_DEFAULT``.
    """

    __slots__ = ("saw_continue_default", "saw_continue_forced", "saw_stop_default", "saw_stop_forced")

    def __init__(self) -> None:
        self.saw_continue_default = False
        self.saw_continue_forced = False
        self.saw_stop_default = False
        self.saw_stop_forced = False

    def record(self, signal: Signal) -> None:
        if signal is Signal.CONTINUE_DEFAULT:
            self.saw_continue_default = True
        elif signal is Signal.CONTINUE_FORCED:
            self.saw_continue_forced = True
        elif signal is Signal.STOP_DEFAULT:
            self.saw_stop_default = True
        elif signal is Signal.STOP_FORCED:
            self.saw_stop_forced = True
        else:
            raise ValueError(f"unknown traversal signal: {signal!r}")

    def should_descend(self) -> bool:
        if self.saw_stop_forced:
            return False
        if self.saw_continue_forced:
            return True
        return self.saw_continue_default and not self.saw_stop_default


def _list_entries(directory: str) -> list[tuple[str, bool]] | None:
    """Return ``(name, is_dir)`` pairs sorted by name, or ``None`` if unreadable."""
    entries: list[tuple[str, bool]] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                entries.append((entry.name, is_dir))
    except OSError:
        return None
    entries.sort(key=lambda item: item[0])
    return entries


def walk(root: str, visit: Visitor) -> None:
    """Depth-first walk of ``root`` driven by ``visit`` signals.

    ``visit(directory, name, is_dir)`` is called once per entry of every
    visited directory. Unreadable directories are skipped without error.
    Subdirectories are pushed in reverse so they pop in name order.
    """
    stack: list[str] = [root]

    while stack:
        current = stack.pop()
        entries = _list_entries(current)
        if entries is None:
            continue

        verdict = DescentVerdict()
        for name, is_dir in entries:
            verdict.record(visit(current, name, is_dir))

        if not verdict.should_descend():
            continue
        for name, is_dir in reversed(entries):
            if is_dir:
                stack.append(os.path.join(current, name))


__all__ = ["DescentVerdict", "Signal", "Visitor", "walk"]
