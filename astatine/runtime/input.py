"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Multi-byte UTF-8 characters are decoded as a single printable token. Escape
sequences are read to their final byte so no tail is left on stdin; ones
without a name come back as ``UNKNOWN``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
# Longest CSI parameter run accepted before the sequence is abandoned.
MAX_CSI_LENGTH = 32

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

# Final byte of a parameterless CSI / SS3 sequence.
_FINAL_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

# ``ESC [ <n> ~`` sequences (vt and xterm numbering).
_TILDE_KEYS = {
    "1": "HOME",
    "2": "INSERT",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

# xterm modifier parameter in ``ESC [ 1 ; <m> <final>``.
_MODIFIER_PREFIXES = {
    "2": "SHIFT_",
    "3": "ALT_",
    "5": "CTRL_",
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
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    raw = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        raw += more
    return raw.decode("utf-8", errors="replace")


def _csi_token(params: str, final: str) -> str:
    if final == "~":
        return _TILDE_KEYS.get(params.split(";", 1)[0], "UNKNOWN")
    name = _FINAL_KEYS.get(final)
    if name is None:
        return "UNKNOWN"
    if not params:
        return name
    _, _, modifier = params.partition(";")
    prefix = _MODIFIER_PREFIXES.get(modifier)
    return prefix + name if prefix else "UNKNOWN"


def _read_csi(fd: int) -> str:
    """Consume ``ESC [`` parameters up to the final byte (0x40..0x7E)."""
    params = ""
    while len(params) <= MAX_CSI_LENGTH:
        ch = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if ch is None:
            return "UNKNOWN"
        code = ch[0]
        if 0x40 <= code <= 0x7E:
            return _csi_token(params, chr(code))
        params += chr(code)
    return "UNKNOWN"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; returns ``""`` on timeout or EOF.

    ``ESC`` is only produced for a lone escape byte. ``ESC`` followed by a
    character is Alt+character and yields ``ALT_<char>``.
    """
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return ""

    ch = os.read(fd, 1)
    if not ch:
        return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ALT_O"
        return _FINAL_KEYS.get(final.decode("latin-1"), "UNKNOWN")
    if seq == b"\x1b":
        return "ESC"
    control = _CONTROL_KEYS.get(seq)
    if control is not None:
        return "ALT_" + control
    return "ALT_" + _read_utf8_char(fd, seq)
