"""The update -> render -> command run loop."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional, TextIO

from teaterm.config import Settings, configure_logging, get_settings
from teaterm.core.ansi_text import to_raw_lines
from teaterm.core.input import InputReader
from teaterm.core.terminal import CLEAR_FRAME, TerminalController
from teaterm.events import EventMultiplexer, KeySource
from teaterm.model import Command, Exit, ExitWith, Model, SubscribeTo

logger = logging.getLogger(__name__)


class TUI:
    """
    Runs a Model against the terminal.

    Every frame consists of three steps: the current model's update() is
    called with the next event and replaced by the model it returns, the new
    model is rendered as a full repaint, and the returned command (if any)
    is handled. The loop ends on Exit or ExitWith.
    """

    def __init__(
        self,
        initial_model: Model,
        *,
        terminal: Optional[TerminalController] = None,
        reader: Optional[KeySource] = None,
        out: Optional[TextIO] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._out = out if out is not None else sys.stdout
        self.terminal = terminal or TerminalController(out=self._out)
        self.reader = reader or InputReader(
            self.terminal.fd,
            escape_timeout=self.settings.escape_timeout,
            sequence_timeout=self.settings.sequence_timeout,
        )
        self.model = initial_model
        self.exit_message = ""

    async def run(self) -> str:
        """
        Prepare the terminal and run until the model asks to exit.

        Returns the exit message (empty for a plain Exit). Terminal
        preparation errors propagate before anything is rendered. If the
        keyboard source fails, its exception is re-raised once the terminal
        has been restored.
        """
        self.terminal.prepare()

        events = EventMultiplexer(self.reader, self.settings.poll_interval)
        events.start()
        try:
            self.render(self.model)
            async for event in events:
                self.model, command = self.model.update(event)
                self.render(self.model)
                if command is not None and self._handle_command(command, events):
                    break
        finally:
            # Producers are stopped before the terminal is handed back so
            # none of them can fire into a restored terminal.
            await events.aclose()
            self.terminal.restore()

        if events.keyboard_error is not None:
            raise events.keyboard_error

        self._out.write(self.exit_message + "\n")
        self._out.flush()
        return self.exit_message

    def render(self, model: Model) -> None:
        """Repaint the whole screen with the model's body."""
        self._out.write(CLEAR_FRAME + to_raw_lines(model.body()) + "\r\n")
        self._out.flush()

    def _handle_command(self, command: Command, events: EventMultiplexer) -> bool:
        """Interpret a command. Returns True when the loop should stop."""
        if isinstance(command, Exit):
            return True
        if isinstance(command, ExitWith):
            self.exit_message = command.message
            return True
        if isinstance(command, SubscribeTo):
            events.subscribe(command.producer)
            return False
        logger.debug("Ignoring command %r returned to the run loop", command)
        return False


def run(model: Model, settings: Optional[Settings] = None) -> str:
    """Blocking convenience wrapper: run a model until it exits."""
    settings = settings or get_settings()
    configure_logging(settings)
    return asyncio.run(TUI(model, settings=settings).run())
