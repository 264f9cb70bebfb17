"""Pick one of several options."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusableModel
from teaterm.formatting import AnsiColor, AnsiFmt, RESET, beep
from teaterm.model import Command, Event, Model


@dataclass
class Selector(FocusableModel):
    """Left/right move through `options`; delete jumps back to the first."""
    options: list[str] = field(default_factory=list)
    selection_index: int = 0

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("Selector needs at least one option")
        self.selection_index = max(0, min(len(self.options) - 1, self.selection_index))

    @property
    def selected(self) -> str:
        return self.options[self.selection_index]

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if not isinstance(event, KeyPress):
            return self, None

        if event.key is Key.LEFT:
            if self.selection_index == 0:
                beep()
                return self, None
            return replace(self, selection_index=self.selection_index - 1), None
        if event.key is Key.RIGHT:
            if self.selection_index == len(self.options) - 1:
                beep()
                return self, None
            return replace(self, selection_index=self.selection_index + 1), None
        if event.key is Key.DELETE:
            return replace(self, selection_index=0), None
        return self, None

    def body(self) -> str:
        at_start = self.selection_index == 0
        at_end = self.selection_index == len(self.options) - 1
        selected = self.selected
        left, right = "⯇", "⯈"
        if self.is_focused:
            selected = f"{AnsiFmt.INVERT}{selected}{RESET}"
            if not at_start:
                left = f"{AnsiColor.CYAN}⯇{RESET}"
            if not at_end:
                right = f"{AnsiColor.CYAN}⯈{RESET}"
        return f"{left} {selected} {right} [{self.selection_index + 1}/{len(self.options)}]"
