"""Raw-mode terminal control with crash-safe restoration (Unix only)."""

from __future__ import annotations

import faulthandler
import io
import logging
import os
import signal
import sys
import termios
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from teaterm.errors import AttributeReadFailed, AttributeWriteFailed, NotATerminal

logger = logging.getLogger(__name__)

ENTER_ALT_BUFFER = '\x1b[?1049h'
EXIT_ALT_BUFFER = '\x1b[?1049l'
HIDE_CURSOR = '\x1b[?25l'
SHOW_CURSOR = '\x1b[?25h'
CLEAR_FRAME = '\x1b[2J\x1b[H\x1b[0m'

# termios attribute list indices
IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

CRASH_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGHUP", "SIGABRT", "SIGTRAP", "SIGQUIT")
    if hasattr(signal, name)
)

# Encoded up front so the crash handler does not build strings.
_CRASH_TERMINAL_BYTES = (EXIT_ALT_BUFFER + SHOW_CURSOR).encode()
_CRASH_MESSAGE = b"\n\rPROGRAM PANIC.\n\r(terminal restored)\n\r"

# Process-wide state. The snapshot is written once by prepare(), before any
# producer starts, and read by the crash handler without locking. Running
# several TUI sessions in one process is not supported.
_original_attrs: Optional[list] = None
_terminal_fd: Optional[int] = None
_output_fd: int = 1
_raw_active = False
# Dispositions replaced by prepare(), put back by restore()
_previous_handlers: dict = {}
_enabled_faulthandler = False


def raw_attributes(original: list) -> list:
    """Derive raw-mode attributes from a tcgetattr() result."""
    attrs = [list(v) if isinstance(v, list) else v for v in original]
    attrs[IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                      | termios.ISTRIP | termios.IXON)
    attrs[OFLAG] &= ~termios.OPOST
    attrs[CFLAG] |= termios.CS8
    attrs[LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    attrs[CC][termios.VMIN] = 0
    attrs[CC][termios.VTIME] = 1  # deciseconds
    return attrs


def original_attributes() -> Optional[list]:
    """The terminal attributes captured by the first prepare(), if any."""
    return _original_attrs


def crash_handler(signum: int, frame: object = None) -> None:
    """
    Restore the terminal and re-raise a fatal signal.

    Reads the module-level snapshot, writes pre-encoded bytes straight to the
    file descriptors, resets the disposition to SIG_DFL and re-raises so the
    default termination (and core dump) still happens. The terminal steps only
    run while raw mode is active.
    """
    if _raw_active and _original_attrs is not None and _terminal_fd is not None:
        try:
            os.write(_output_fd, _CRASH_TERMINAL_BYTES)
            termios.tcsetattr(_terminal_fd, termios.TCSAFLUSH, _original_attrs)
            os.write(2, _CRASH_MESSAGE)
        except (OSError, termios.error):
            pass
    signal.signal(signum, signal.SIG_DFL)
    os.kill(os.getpid(), signum)


class TerminalController:
    """Enters and leaves the TUI terminal state."""

    def __init__(self, fd: Optional[int] = None, out: Optional[TextIO] = None) -> None:
        if fd is None:
            try:
                fd = sys.stdin.fileno()
            except (AttributeError, io.UnsupportedOperation, ValueError):
                fd = -1  # prepare() reports NotATerminal
        self._fd = fd
        self._out = out if out is not None else sys.stdout

    @property
    def fd(self) -> int:
        return self._fd

    def prepare(self) -> None:
        """
        Switch to raw mode, the alternate screen buffer and a hidden cursor.

        Does nothing if a snapshot was already taken in this process.

        Raises:
            NotATerminal: the input descriptor is not a tty.
            AttributeReadFailed: tcgetattr failed.
            AttributeWriteFailed: tcsetattr failed. The snapshot stays captured
                but the alternate buffer is not entered.
        """
        global _original_attrs, _terminal_fd, _output_fd, _raw_active

        if _original_attrs is not None:
            return

        if not os.isatty(self._fd):
            raise NotATerminal(self._fd)

        try:
            original = termios.tcgetattr(self._fd)
        except termios.error as e:
            raise AttributeReadFailed(f"could not read terminal attributes: {e}") from e

        _original_attrs = original
        _terminal_fd = self._fd
        _output_fd = self._output_fileno()

        try:
            termios.tcsetattr(self._fd, termios.TCSAFLUSH, raw_attributes(original))
        except termios.error as e:
            raise AttributeWriteFailed(f"could not set raw mode: {e}") from e
        _raw_active = True

        self._install_crash_handlers()
        self.write(ENTER_ALT_BUFFER + HIDE_CURSOR)
        logger.debug("Terminal prepared on fd %d", self._fd)

    def restore(self) -> None:
        """Leave the alternate buffer, show the cursor and reapply the snapshot."""
        global _raw_active

        if not _raw_active:
            return
        self.write(EXIT_ALT_BUFFER + SHOW_CURSOR)
        if _original_attrs is not None and _terminal_fd is not None:
            termios.tcsetattr(_terminal_fd, termios.TCSAFLUSH, _original_attrs)
        _raw_active = False
        self._remove_crash_handlers()
        logger.debug("Terminal restored")

    @staticmethod
    def is_raw() -> bool:
        """Whether this process currently holds the terminal in raw mode."""
        return _raw_active

    def write(self, text: str) -> None:
        """Write text to the terminal and flush."""
        self._out.write(text)
        self._out.flush()

    @contextmanager
    def managed(self) -> Iterator[TerminalController]:
        """prepare() on entry, restore() on exit."""
        self.prepare()
        try:
            yield self
        finally:
            self.restore()

    def _output_fileno(self) -> int:
        try:
            return self._out.fileno()
        except (AttributeError, io.UnsupportedOperation, ValueError):
            return 1

    @staticmethod
    def _install_crash_handlers() -> None:
        global _enabled_faulthandler

        for sig in CRASH_SIGNALS:
            _previous_handlers[sig] = signal.getsignal(sig)
            signal.signal(sig, crash_handler)
        # A Python-level SIGSEGV handler would spin on the faulting
        # instruction; faulthandler reports and re-raises instead.
        if not faulthandler.is_enabled() and sys.__stderr__ is not None:
            try:
                faulthandler.enable(file=sys.__stderr__)
                _enabled_faulthandler = True
            except (ValueError, io.UnsupportedOperation, RuntimeError):
                logger.debug("faulthandler unavailable, SIGSEGV not covered")

    @staticmethod
    def _remove_crash_handlers() -> None:
        global _enabled_faulthandler

        for sig, previous in _previous_handlers.items():
            # None means the handler was not installed from Python
            signal.signal(sig, signal.SIG_DFL if previous is None else previous)
        _previous_handlers.clear()
        if _enabled_faulthandler:
            faulthandler.disable()
            _enabled_faulthandler = False
