"""Numeric spinner."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusableModel
from teaterm.formatting import AnsiColor, AnsiFmt, RESET
from teaterm.model import Command, Event, FocusCommand, Model


@dataclass
class Spinner(FocusableModel):
    """
    An integer clamped to [minimum, maximum].

    Left/right step the value, typed digits replace it (and keep appending
    while typing continues), delete resets it to its initial value.
    """
    value: int = 0
    step: int = 1
    minimum: int = 0
    maximum: int = 250
    initial: Optional[int] = None
    typing: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"minimum {self.minimum} exceeds maximum {self.maximum}")
        if self.initial is None:
            self.initial = self.value
        self.value = self._clamp(self.value)

    def _clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))

    def set_focus(self, focused: bool) -> None:
        self.is_focused = focused
        self.typing = False

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if not isinstance(event, KeyPress):
            return replace(self, typing=False), None

        if event.key is Key.RETURN:
            return self, FocusCommand.NEXT
        if event.key is Key.LEFT:
            return self._with(self.value - self.step), None
        if event.key is Key.RIGHT:
            return self._with(self.value + self.step), None
        if event.key is Key.DELETE:
            return self._with(self.initial if self.initial is not None else 0), None
        if event.is_char and event.char and event.char.isdigit():
            digit = int(event.char)
            if self.typing:
                return self._with(int(f"{self.value}{digit}"), typing=True), None
            return self._with(digit, typing=True), None
        return replace(self, typing=False), None

    def _with(self, value: int, typing: bool = False) -> Spinner:
        return replace(self, value=self._clamp(value), typing=typing)

    def body(self) -> str:
        if not self.is_focused:
            return f"⯇ {self.value} ⯈"
        left = f"{AnsiColor.CYAN}⯇{RESET}" if self.value != self.minimum else "⯇"
        right = f"{AnsiColor.CYAN}⯈{RESET}" if self.value != self.maximum else "⯈"
        return f"{left} {AnsiFmt.INVERT}{self.value}{RESET} {right}"
