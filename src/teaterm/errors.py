"""Exception hierarchy for the runtime."""

from __future__ import annotations


class TeatermError(Exception):
    """Base class for all runtime errors."""


class TerminalError(TeatermError):
    """The terminal could not be prepared for a TUI session."""


class NotATerminal(TerminalError):
    """Standard input is not attached to an interactive terminal."""

    def __init__(self, fd: int) -> None:
        super().__init__(f"file descriptor {fd} is not a terminal")
        self.fd = fd


class AttributeReadFailed(TerminalError):
    """tcgetattr failed."""


class AttributeWriteFailed(TerminalError):
    """tcsetattr failed."""


class FocusError(TeatermError):
    """Misuse of a FocusManager."""


class IllegalMemberError(FocusError):
    """A managed field does not hold a FocusableModel."""

    def __init__(self, owner: str, name: str, actual: type) -> None:
        super().__init__(
            f"Illegal member - {owner}.{name} is managed for focus but holds "
            f"{actual.__name__}, which is not a FocusableModel"
        )
        self.owner = owner
        self.name = name
        self.actual = actual


class MetamorphosisViolation(FocusError):
    """A managed child returned a model of a different class from update()."""

    def __init__(self, name: str, before: type, after: type) -> None:
        super().__init__(
            f"Metamorphosis prohibited - managed field {name!r} turned from "
            f"{before.__name__} into {after.__name__}"
        )
        self.name = name
        self.before = before
        self.after = after
