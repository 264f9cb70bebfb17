"""Model, Event and Command contracts shared by the runtime and its consumers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterable, Optional


class Event:
    """
    Something that happened and that the current Model should react to.

    Key presses are the built-in variant. Subclass this for events sent by
    your own background producers.
    """


class Command:
    """A side-effect request returned from Model.update()."""


class Model(ABC):
    """
    A value holding UI state.

    Each frame of the run loop calls update() with an event, replaces the
    current model with the returned one (which may be a different class
    entirely), renders body(), then handles the returned command.

    update() must not mutate self. Models are usually dataclasses and return
    a modified copy made with dataclasses.replace().
    """

    @abstractmethod
    def update(self, event: Event) -> tuple[Model, Optional[Command]]:
        """React to an event. Returns the next model and an optional command."""

    @abstractmethod
    def body(self) -> str:
        """Text to display. Bare newlines are fine."""

    def __str__(self) -> str:
        return self.body()


class TUICommand(Command):
    """Commands interpreted by the run loop itself."""


@dataclass(frozen=True)
class Exit(TUICommand):
    """Stop the run loop and restore the terminal."""


@dataclass(frozen=True)
class ExitWith(TUICommand):
    """Stop the run loop and print a message once the terminal is restored."""
    message: str


@dataclass(frozen=True, eq=False)
class SubscribeTo(TUICommand):
    """Merge an async stream of events into the run loop's event feed."""
    producer: AsyncIterable[Event]


class FocusCommand(Command, Enum):
    """Requests from a focusable child to the FocusManager that owns it."""
    NEXT = "next"
    PREVIOUS = "previous"
    BLUR_ME = "blur_me"
