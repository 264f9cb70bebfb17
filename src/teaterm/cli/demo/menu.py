"""Demo main menu."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Optional

from teaterm import __version__
from teaterm.core.input import Key, KeyPress
from teaterm.formatting import AnsiColor, colored
from teaterm.model import Command, Event, ExitWith, Model
from teaterm.widgets import Container, Line, Section


@dataclass
class MainMenu(Model):
    """Up/down choose a screen, return opens it, escape quits."""
    options: ClassVar[tuple[str, ...]] = (
        "Terminal Formatting",
        "Premade Components & Focus Management",
        "Background Tasks",
    )

    cursor: int = 0

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        if not isinstance(event, KeyPress):
            return self, None

        count = len(self.options)
        if event.key is Key.UP:
            return replace(self, cursor=(self.cursor - 1) % count), None
        if event.key is Key.DOWN:
            return replace(self, cursor=(self.cursor + 1) % count), None
        if event.key is Key.RETURN:
            return self._open(), None
        if event.key is Key.ESCAPE:
            return self, ExitWith(colored("Happy Coding!", AnsiColor.BLUE))
        return self, None

    def _open(self) -> Model:
        # Screens import the menu back, so import them lazily.
        from teaterm.cli.demo.background import BackgroundTasksScreen
        from teaterm.cli.demo.formatting_screen import FormattingScreen
        from teaterm.cli.demo.premades import PremadesScreen

        screens = (
            FormattingScreen,
            lambda: PremadesScreen(is_focused=True),
            lambda: BackgroundTasksScreen(is_focused=True),
        )
        return screens[self.cursor]()

    def body(self) -> str:
        entries = []
        for index, option in enumerate(self.options):
            if index == self.cursor:
                entries.append(Line(f"{colored('[', AnsiColor.INTENSE_CYAN)} {option} "
                                    f"{colored(']', AnsiColor.INTENSE_CYAN)}"))
            else:
                entries.append(Line(f"  {option}  "))

        container = Container(
            width=80,
            title=colored("teaterm Example Project", AnsiColor.GREEN),
            contents=[
                Line(),
                Line(f"This is an example project to get familiar with "
                     f"{colored('teaterm', AnsiColor.RED)}."),
                Line("Below are some screens to showcase all the features."),
                Line(),
                Section("Choose an option: "),
                Line(),
                entries,
                Line(),
                Section(),
                Line("Every screen is a Model; the runtime swaps them on update."),
            ],
            footer=f"[{colored('↑', AnsiColor.CYAN)}][{colored('↓', AnsiColor.CYAN)}] "
                   f"{colored('navigate', AnsiColor.CYAN)} │ "
                   f"[{colored('ret', AnsiColor.GREEN)}] {colored('select', AnsiColor.GREEN)} │ "
                   f"[{colored('esc', AnsiColor.YELLOW)}] {colored('quit', AnsiColor.YELLOW)}",
        )
        return (f"{colored('example project', AnsiColor.GREY)}\n\n{container}\n\n"
                f"{colored(f'teaterm v{__version__}', AnsiColor.GREY)}")
