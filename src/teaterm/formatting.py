"""SGR color and style codes for model bodies."""

from __future__ import annotations

import sys
from enum import Enum
from typing import Optional, TextIO

RESET = '\x1b[0m'


class AnsiColor(Enum):
    """
    Foreground SGR color codes (30-37, 90-97).

    str() gives the foreground sequence; `bg` gives the background sequence,
    which is the same code offset by 10.
    """
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GREY = 37
    # "Intense black", usually rendered darker than GREY
    DARK_GREY = 90
    INTENSE_RED = 91
    INTENSE_GREEN = 92
    INTENSE_YELLOW = 93
    INTENSE_BLUE = 94
    INTENSE_MAGENTA = 95
    INTENSE_CYAN = 96
    WHITE = 97

    @property
    def fg(self) -> str:
        return f'\x1b[{self.value}m'

    @property
    def bg(self) -> str:
        return f'\x1b[{self.value + 10}m'

    def __str__(self) -> str:
        return self.fg


class AnsiFmt(Enum):
    """SGR text style codes."""
    RESET = 0
    BOLD = 1
    ITALIC = 3  # not supported by every terminal
    UNDERLINE = 4
    BLINK = 5
    RAPID_BLINK = 6
    INVERT = 7
    HIDDEN = 8
    STRIKETHROUGH = 9

    @property
    def code(self) -> str:
        return f'\x1b[{self.value}m'

    def __str__(self) -> str:
        return self.code


def colored(text: str, color: AnsiColor, background: Optional[AnsiColor] = None) -> str:
    """Wrap text in a color sequence and a trailing reset."""
    prefix = color.fg + (background.bg if background is not None else '')
    return f"{prefix}{text}{RESET}"


def styled(text: str, *formats: AnsiFmt) -> str:
    """Wrap text in one or more style sequences and a trailing reset."""
    return ''.join(f.code for f in formats) + text + RESET


def beep(out: Optional[TextIO] = None) -> None:
    """Ring the terminal bell."""
    out = out or sys.stdout
    out.write('\x07')
    out.flush()
