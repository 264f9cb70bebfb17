"""Live key decoder inspector."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.formatting import AnsiColor, colored
from teaterm.model import Command, Event, ExitWith, Model
from teaterm.widgets import Container, Line, Section

HISTORY = 16


@dataclass
class KeyLog(Model):
    """Shows the most recent decoded keys; escape (or reaching `limit`) exits."""
    limit: Optional[int] = None
    seen: int = 0
    history: list[str] = field(default_factory=list)

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if not isinstance(event, KeyPress):
            return self, None
        label = f"{event.key.name.lower()} ({event})" if event.is_char else event.key.name.lower()
        new = replace(self, seen=self.seen + 1, history=(self.history + [label])[-HISTORY:])
        if event.key is Key.ESCAPE or (self.limit is not None and new.seen >= self.limit):
            return new, ExitWith(f"Decoded {new.seen} key(s)")
        return new, None

    def body(self) -> str:
        rows = [Line(f"{colored(str(i + 1), AnsiColor.DARK_GREY)} {key}")
                for i, key in enumerate(self.history)]
        return str(Container(
            width=48,
            title=colored("Key inspector", AnsiColor.GREEN),
            contents=[
                Line(f"Keys decoded: {self.seen}"),
                Section("Latest"),
                rows or [Line(colored("press something", AnsiColor.DARK_GREY))],
            ],
            footer=colored("esc quits", AnsiColor.YELLOW),
        ))
