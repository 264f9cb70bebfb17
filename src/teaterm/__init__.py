"""
teaterm: an Elm-style runtime for terminal UIs

A Model receives events, returns a replacement model plus an optional
command, and renders itself as text. The runtime owns the terminal.

Quick Start:
    >>> from dataclasses import dataclass, replace
    >>> import teaterm
    >>> @dataclass
    ... class Counter(teaterm.Model):
    ...     count: int = 0
    ...     def update(self, event):
    ...         if event == teaterm.KeyPress(teaterm.Key.ESCAPE):
    ...             return self, teaterm.ExitWith(f"Counted {self.count}")
    ...         return replace(self, count=self.count + 1), None
    ...     def body(self):
    ...         return f"Pressed {self.count} keys\\n(esc quits)"
    >>> teaterm.run(Counter())  # doctest: +SKIP

Features:
    - Raw-mode terminal handling restored even on fatal signals
    - Key decoding with timeout-bounded escape sequences
    - Background producers merged into the event feed with SubscribeTo
    - Focus delegation for composite models
    - Premade widgets: button, toggle, text field, spinner, selector
"""

import logging

__version__ = "0.1.0"

from teaterm.config import MetamorphosisPolicy, Settings, get_settings, set_settings
from teaterm.core.input import InputReader, Key, KeyPress
from teaterm.core.terminal import TerminalController
from teaterm.errors import (
    AttributeReadFailed,
    AttributeWriteFailed,
    IllegalMemberError,
    MetamorphosisViolation,
    NotATerminal,
    TeatermError,
    TerminalError,
)
from teaterm.events import EventMultiplexer
from teaterm.focus import FocusableModel, FocusManager
from teaterm.model import (
    Command,
    Event,
    Exit,
    ExitWith,
    FocusCommand,
    Model,
    SubscribeTo,
    TUICommand,
)
from teaterm.runtime import TUI, run

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Contracts
    "Model",
    "Event",
    "Command",
    "TUICommand",
    "Exit",
    "ExitWith",
    "SubscribeTo",
    "FocusCommand",
    "FocusableModel",
    "FocusManager",
    # Input
    "Key",
    "KeyPress",
    "InputReader",
    # Runtime
    "TUI",
    "run",
    "TerminalController",
    "EventMultiplexer",
    # Configuration
    "Settings",
    "MetamorphosisPolicy",
    "get_settings",
    "set_settings",
    # Errors
    "TeatermError",
    "TerminalError",
    "NotATerminal",
    "AttributeReadFailed",
    "AttributeWriteFailed",
    "IllegalMemberError",
    "MetamorphosisViolation",
]
