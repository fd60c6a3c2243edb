"""Low-level terminal input decoding.

Reads raw bytes from the terminal and translates them into key tokens.
Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x07": "CTRL_G",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    b"3": "DELETE",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    raw = bytearray(lead)
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw.extend(nxt)
    return raw.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    named = _CONTROL_KEYS.get(ch)
    if named is not None:
        return named

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    tilde = _CSI_TILDE_KEYS.get(seq)
    if tilde is not None:
        terminator = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if terminator == b"~":
            return tilde
    return "ESC"
