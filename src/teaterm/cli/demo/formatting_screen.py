"""Showcase of the SGR colors and styles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from teaterm.core.input import Key, KeyPress
from teaterm.formatting import AnsiColor, AnsiFmt, colored, styled
from teaterm.model import Command, Event, Model
from teaterm.widgets import Container, Line, Section


@dataclass
class FormattingScreen(Model):
    """Static page; escape goes back to the menu."""

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if isinstance(event, KeyPress) and event.key is Key.ESCAPE:
            from teaterm.cli.demo.menu import MainMenu
            return MainMenu(cursor=0), None
        return self, None

    def body(self) -> str:
        colors = [Line(f"{colored(color.name.lower().ljust(16), color)}"
                       f"{color.bg}  {AnsiFmt.RESET} background")
                  for color in AnsiColor]
        styles = [Line(styled(fmt.name.lower().replace("_", " "), fmt))
                  for fmt in AnsiFmt if fmt is not AnsiFmt.RESET]
        return str(Container(
            width=60,
            title="Terminal Formatting",
            contents=[Section("Colors"), colors, Section("Styles"), styles],
            footer=f"[{colored('esc', AnsiColor.YELLOW)}] "
                   f"{colored('return to main menu', AnsiColor.YELLOW)}",
        ))
