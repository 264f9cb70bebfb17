"""Checkbox / switch toggle."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusableModel
from teaterm.formatting import AnsiColor, colored
from teaterm.model import Command, Event, Model


class ToggleStyle(Enum):
    """How a Toggle draws its state."""
    CHECKBOX = "checkbox"
    SWITCH = "switch"

    def mark(self, checked: bool) -> str:
        if self is ToggleStyle.CHECKBOX:
            return "■" if checked else " "
        if checked:
            return "-" + colored("•", AnsiColor.GREEN)
        return colored("•", AnsiColor.RED) + "-"


@dataclass
class Toggle(FocusableModel):
    """A value that return or space switches on and off."""
    style: ToggleStyle = ToggleStyle.CHECKBOX
    checked: bool = False

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if isinstance(event, KeyPress) and event.key in (Key.RETURN, Key.SPACE):
            return replace(self, checked=not self.checked), None
        return self, None

    def body(self) -> str:
        if self.is_focused:
            left, right = colored("[", AnsiColor.CYAN), colored("]", AnsiColor.CYAN)
        else:
            left, right = "[", "]"
        return left + self.style.mark(self.checked) + right
