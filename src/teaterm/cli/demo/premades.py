"""Premade widgets under a FocusManager."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusManager
from teaterm.formatting import AnsiColor, colored
from teaterm.model import Command, Event, ExitWith, Model
from teaterm.widgets import (
    Button,
    Container,
    Line,
    Section,
    Selector,
    Spinner,
    TextField,
    Toggle,
    ToggleStyle,
)


@dataclass
class SubmitPressed(Command):
    """Returned by the submit button."""


@dataclass
class PremadesScreen(FocusManager):
    """A small form: up/down move focus, the widgets handle everything else."""
    managed_models: ClassVar[tuple[str, ...]] = (
        "name", "age", "flavour", "newsletter", "dark_mode", "submit",
    )

    name: TextField = field(default_factory=lambda: TextField(
        label="Name", placeholder="type your name", max_chars=24))
    age: Spinner = field(default_factory=lambda: Spinner(value=30, maximum=120))
    flavour: Selector = field(default_factory=lambda: Selector(
        options=["Vanilla", "Chocolate", "Strawberry", "Pistachio"]))
    newsletter: Toggle = field(default_factory=Toggle)
    dark_mode: Toggle = field(default_factory=lambda: Toggle(
        style=ToggleStyle.SWITCH, checked=True))
    submit: Button = field(default_factory=lambda: Button(
        label="Submit", command=SubmitPressed()))

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self)
        command = new.update_focused(event)

        if isinstance(command, SubmitPressed):
            who = new.name.value or "stranger"
            return new, ExitWith(
                f"Thanks {who}! {new.age.value} years old, likes {new.flavour.selected}."
            )
        if new.handle_focus_command(command):
            return new, None

        if isinstance(event, KeyPress):
            if event.key is Key.UP:
                new.focus_prev()
            elif event.key in (Key.DOWN, Key.TAB):
                new.focus_next()
            elif event.key is Key.ESCAPE:
                from teaterm.cli.demo.menu import MainMenu
                return MainMenu(cursor=1), None
        return new, command

    def body(self) -> str:
        return str(Container(
            width=60,
            title="Premade Components & Focus Management",
            contents=[
                Line(),
                Line(self.name.body()),
                Line(f"Age:        {self.age.body()}"),
                Line(f"Flavour:    {self.flavour.body()}"),
                Line(f"Newsletter: {self.newsletter.body()}"),
                Line(f"Dark mode:  {self.dark_mode.body()}"),
                Line(),
                Section(),
                Line(self.submit.body()),
            ],
            footer=f"[{colored('↑', AnsiColor.CYAN)}][{colored('↓', AnsiColor.CYAN)}] "
                   f"{colored('navigate', AnsiColor.CYAN)} │ "
                   f"[{colored('esc', AnsiColor.YELLOW)}] "
                   f"{colored('main menu', AnsiColor.YELLOW)}",
        ))
