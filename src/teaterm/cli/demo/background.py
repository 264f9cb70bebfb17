"""Background work reporting back through SubscribeTo."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field, replace
from typing import AsyncIterator, ClassVar, Optional

from teaterm.core.input import Key, KeyPress
from teaterm.focus import FocusManager
from teaterm.formatting import AnsiColor, colored
from teaterm.model import Command, Event, Model, SubscribeTo
from teaterm.widgets import Button, Container, Line, Section


class JobEvent(Event):
    """Events sent by the background job."""


@dataclass(frozen=True)
class Notification(JobEvent):
    message: str


@dataclass(frozen=True)
class Progressed(JobEvent):
    percent: float


@dataclass(frozen=True)
class Done(JobEvent):
    pass


@dataclass(frozen=True)
class Failed(JobEvent):
    reason: str


@dataclass(frozen=True)
class StartJob(Command):
    pass


@dataclass(frozen=True)
class CancelJob(Command):
    pass


async def run_job(
    cancel: asyncio.Event, step: float = 1.0, rng: Optional[random.Random] = None
) -> AsyncIterator[JobEvent]:
    """
    Pretend to do five steps of work.

    Every event makes the run loop update and repaint, so keep them coarse.
    The cancel flag is checked between steps.
    """
    rng = rng or random.Random()
    script: list[list[JobEvent]] = [
        [Notification("Doing the thing..."), Progressed(20)],
        [Progressed(40), Notification("50% chance to fail! Fingers crossed.")],
        [],  # the coin flip happens here
        [Progressed(80), Notification("Almost done...")],
        [Progressed(100), Notification("Done!"), Done()],
    ]

    yield Progressed(0)
    for index, events in enumerate(script):
        await asyncio.sleep(step)
        if cancel.is_set():
            yield Failed("Cancelled")
            return
        if index == 2:
            if rng.random() < 0.5:
                yield Failed("The process encountered bad luck and failed.")
                return
            events = [Notification("No failure! We got lucky."), Progressed(60)]
        for event in events:
            yield event


@dataclass
class BackgroundTasksScreen(FocusManager):
    """Start and cancel a background job, showing its progress."""
    managed_models: ClassVar[tuple[str, ...]] = ("start_button", "cancel_button")

    start_button: Button = field(default_factory=lambda: Button(
        label="Start", command=StartJob()))
    cancel_button: Button = field(default_factory=lambda: Button(
        label="Cancel", command=CancelJob()))
    feedback: list[str] = field(default_factory=list)
    status: str = "Not started"
    cancel_token: Optional[asyncio.Event] = field(default=None, compare=False)
    step: float = 1.0

    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        new = replace(self)
        command = new.update_focused(event)

        if isinstance(command, StartJob):
            if new.cancel_token is not None:
                return new, None
            new.cancel_token = asyncio.Event()
            new.status = "In progress... (0%)"
            new.feedback = []
            return new, SubscribeTo(run_job(new.cancel_token, step=self.step))
        if isinstance(command, CancelJob):
            new._cancel()
            return new, None

        if isinstance(event, JobEvent):
            if isinstance(event, Notification):
                new.feedback = new.feedback + [event.message]
            elif isinstance(event, Progressed):
                new.status = f"In progress... ({event.percent:g}%)"
            elif isinstance(event, Done):
                new.status = "Done"
                new.cancel_token = None
            elif isinstance(event, Failed):
                new.status = f"Failed. Reason: {event.reason}"
                new.cancel_token = None
            return new, None

        if isinstance(event, KeyPress):
            if event.key is Key.UP:
                new.focus_prev()
            elif event.key is Key.DOWN:
                new.focus_next()
            elif event.key is Key.ESCAPE:
                new._cancel()
                from teaterm.cli.demo.menu import MainMenu
                return MainMenu(cursor=2), None
        return new, command

    def _cancel(self) -> None:
        if self.cancel_token is not None:
            self.cancel_token.set()

    def body(self) -> str:
        return str(Container(
            width=80,
            title="Background Work Demo",
            contents=[
                Line(),
                Line(f"Status: {self.status}"),
                Line(),
                Section("Feedback"),
                Line(),
                [Line(message) for message in self.feedback],
                Line(),
                Section(),
                Line(),
                Line(self.start_button.body()),
                Line(self.cancel_button.body()),
                Line(),
            ],
            footer=f"[{colored('↑', AnsiColor.CYAN)}][{colored('↓', AnsiColor.CYAN)}] "
                   f"{colored('navigate', AnsiColor.CYAN)} │ "
                   f"[{colored('esc', AnsiColor.YELLOW)}] "
                   f"{colored('return to main menu', AnsiColor.YELLOW)}",
        ))
