"""Keyboard input decoding from a raw terminal."""

from __future__ import annotations

import os
import select
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from teaterm.model import Event

ESC = 0x1b


class Key(Enum):
    """Named keys. The value is the short label shown by str(KeyPress)."""
    ESCAPE = "esc"
    DELETE = "del"
    FORWARD_DELETE = "fdel"
    PAGE_UP = "pgup"
    PAGE_DOWN = "pgdwn"
    TAB = "tab"
    RETURN = "ret"
    END = "end"
    HOME = "home"
    FN = "fn"
    CLEAR = "clr"
    UP = "↑"
    DOWN = "↓"
    LEFT = "←"
    RIGHT = "→"
    SPACE = "␣"
    CHAR = "char"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    EJECT = "eject"


@dataclass(frozen=True)
class KeyPress(Event):
    """A key press event. `char` is set only for Key.CHAR."""
    key: Key
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> KeyPress:
        """Key press for a printable character."""
        return cls(Key.CHAR, char)

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.key is Key.CHAR

    def __str__(self) -> str:
        if self.key is Key.CHAR and self.char is not None:
            return self.char
        return self.key.value


SIMPLE_KEYS: dict[int, Key] = {
    8: Key.DELETE,
    127: Key.DELETE,
    9: Key.TAB,
    10: Key.RETURN,
    13: Key.RETURN,
    32: Key.SPACE,
}

# Final byte of `ESC [ x` sequences
CSI_KEYS: dict[int, Key] = {
    ord('A'): Key.UP,
    ord('B'): Key.DOWN,
    ord('C'): Key.RIGHT,
    ord('D'): Key.LEFT,
}


class InputReader:
    """
    Non-blocking key decoder.

    Reads one byte at a time with os.read() so Python's buffering never holds
    back part of an escape sequence. Anything not recognised is dropped or
    collapses to Key.ESCAPE; decoding never raises.
    """

    def __init__(
        self,
        fd: Optional[int] = None,
        escape_timeout: float = 0.1,
        sequence_timeout: float = 0.05,
    ) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self.escape_timeout = escape_timeout
        self.sequence_timeout = sequence_timeout

    def next_key(self) -> Optional[KeyPress]:
        """Return the next key press, or None if no input is pending."""
        if not self._has_input(0):
            return None
        byte = self._read_byte()
        if byte is None:
            return None
        return self._classify(byte)

    def _classify(self, byte: int) -> Optional[KeyPress]:
        if byte in SIMPLE_KEYS:
            return KeyPress(SIMPLE_KEYS[byte])
        if byte == ESC:
            return self._parse_escape_sequence()
        if 33 <= byte <= 126:
            return KeyPress.of(chr(byte))
        # Unknown control byte
        return None

    def _parse_escape_sequence(self) -> KeyPress:
        """
        Decode what follows ESC.

        Idle -> SawEscape waits escape_timeout for a second byte, and
        SawEscape -> SawBracket waits sequence_timeout for the final byte.
        A lone ESC, a timeout, or an unknown byte all mean Key.ESCAPE.
        """
        if not self._has_input(self.escape_timeout):
            return KeyPress(Key.ESCAPE)
        second = self._read_byte()
        if second != ord('['):
            return KeyPress(Key.ESCAPE)

        if not self._has_input(self.sequence_timeout):
            return KeyPress(Key.ESCAPE)
        third = self._read_byte()
        if third is None:
            return KeyPress(Key.ESCAPE)
        return KeyPress(CSI_KEYS.get(third, Key.ESCAPE))

    def _read_byte(self) -> Optional[int]:
        try:
            data = os.read(self._fd, 1)
        except (OSError, BlockingIOError):
            return None
        return data[0] if data else None

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout seconds."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
