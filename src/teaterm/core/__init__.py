"""Core terminal infrastructure - raw mode, key decoding, ANSI text helpers."""

from teaterm.core.terminal import TerminalController
from teaterm.core.input import InputReader, KeyPress, Key

__all__ = [
    "TerminalController",
    "InputReader",
    "KeyPress",
    "Key",
]
