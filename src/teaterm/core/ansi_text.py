"""ANSI text utilities - measuring and padding strings with escape codes."""

from __future__ import annotations

import re

# Pattern to match CSI escape sequences (SGR and friends)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')


def strip_ansi(s: str) -> str:
    """Remove escape sequences, leaving only visible text."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(strip_ansi(s))


def pad_to_width(s: str, width: int, char: str = ' ') -> str:
    """Pad string with char to reach exactly width visible characters."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)


def to_raw_lines(text: str) -> str:
    """
    Rewrite line breaks for a terminal with output post-processing disabled.

    Raw mode turns off the tty's LF -> CRLF translation, so every break
    needs an explicit carriage return.
    """
    return text.replace('\r\n', '\n').replace('\n', '\r\n')
