"""Single-line text input."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusableModel
from teaterm.formatting import AnsiColor, AnsiFmt, RESET, beep
from teaterm.model import Command, Event, FocusCommand, Model


@dataclass
class TextField(FocusableModel):
    """
    Editable line of text.

    Printable keys and space append, delete removes the last character
    (ringing the bell when empty) and return asks the parent to move focus on.
    """
    label: str = ""
    placeholder: str = ""
    max_chars: Optional[int] = None
    value: str = ""

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if not isinstance(event, KeyPress):
            return self, None

        if event.key is Key.DELETE:
            if not self.value:
                beep()
                return self, None
            return replace(self, value=self.value[:-1]), None
        if event.key is Key.RETURN:
            return self, FocusCommand.NEXT
        if event.key is Key.SPACE:
            return self._append(" "), None
        if event.is_char and event.char:
            return self._append(event.char), None
        return self, None

    def _append(self, text: str) -> TextField:
        if self.max_chars is not None and len(self.value) >= self.max_chars:
            return self
        return replace(self, value=self.value + text)

    def body(self) -> str:
        label = f"{AnsiFmt.INVERT}{self.label}{RESET}" if self.is_focused else self.label
        if not self.value:
            return f"{label}: {AnsiColor.DARK_GREY}{self.placeholder}{RESET}"
        cursor = f"{AnsiFmt.BLINK}{AnsiColor.CYAN}|{RESET}" if self.is_focused else ""
        return f"{label}: {self.value}{cursor}"
