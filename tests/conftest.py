"""Shared fixtures: pipes, pseudo-terminals and process-wide state isolation."""

import os
from typing import Iterator, Optional

import pytest

from teaterm.config import set_settings
from teaterm.core import terminal
from teaterm.core.input import InputReader, KeyPress


@pytest.fixture(autouse=True)
def reset_settings() -> Iterator[None]:
    """Every test starts from environment-derived settings."""
    set_settings(None)
    yield
    set_settings(None)


@pytest.fixture
def pipe() -> Iterator[tuple[int, int]]:
    """A (read_fd, write_fd) pipe, closed afterwards."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def reader_with_input(pipe: tuple[int, int]):
    """Factory: an InputReader whose pending input is the given bytes."""
    read_fd, write_fd = pipe

    def make(data: bytes = b"", **kwargs) -> InputReader:
        if data:
            os.write(write_fd, data)
        return InputReader(read_fd, **kwargs)

    make.write_fd = write_fd
    return make


@pytest.fixture
def pty() -> Iterator[tuple[int, int]]:
    """A (master_fd, slave_fd) pseudo-terminal pair."""
    master, slave = os.openpty()
    yield master, slave
    for fd in (master, slave):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def fresh_terminal(monkeypatch: pytest.MonkeyPatch) -> list:
    """
    Isolate the process-wide terminal snapshot and signal registration.

    Returns the list of (signum, handler) pairs prepare() tried to install.
    """
    installed: list = []
    monkeypatch.setattr(terminal, "_original_attrs", None)
    monkeypatch.setattr(terminal, "_terminal_fd", None)
    monkeypatch.setattr(terminal, "_output_fd", 1)
    monkeypatch.setattr(terminal, "_raw_active", False)
    monkeypatch.setattr(terminal, "_previous_handlers", {})
    monkeypatch.setattr(terminal, "_enabled_faulthandler", False)
    monkeypatch.setattr(terminal.signal, "signal",
                        lambda signum, handler: installed.append((signum, handler)))
    monkeypatch.setattr(terminal.faulthandler, "is_enabled", lambda: True)
    return installed


class ScriptedKeys:
    """Key source that hands out a fixed script, then nothing forever."""

    def __init__(self, *keys: Optional[KeyPress]) -> None:
        self._keys = list(keys)
        self.calls = 0

    def next_key(self) -> Optional[KeyPress]:
        self.calls += 1
        if self._keys:
            return self._keys.pop(0)
        return None


class FakeTerminal:
    """Stands in for TerminalController and records transitions."""

    def __init__(self) -> None:
        self.fd = -1
        self.calls: list[str] = []

    def prepare(self) -> None:
        self.calls.append("prepare")

    def restore(self) -> None:
        self.calls.append("restore")


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def scripted_keys() -> type[ScriptedKeys]:
    return ScriptedKeys
