"""Push button."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusableModel
from teaterm.formatting import AnsiFmt, RESET
from teaterm.model import Command, Event, Model


@dataclass
class Button(FocusableModel):
    """Returns `command` when pressed with return or space."""
    label: str = ""
    command: Optional[Command] = None

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if isinstance(event, KeyPress) and event.key in (Key.RETURN, Key.SPACE):
            return self, self.command
        return self, None

    def body(self) -> str:
        if self.is_focused:
            return f"{AnsiFmt.INVERT}[{self.label}]{RESET}"
        return f"[{self.label}]"
