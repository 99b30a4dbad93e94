"""Platform capability boundary.

The runtime only talks to the outside world through two small interfaces:

- TerminalAdapter: input bytes, resize events, output, size and raw mode
- SignalAdapter: interrupt and terminate notifications

PosixTerminal and PosixSignals implement them on top of the running asyncio
loop (add_reader / add_signal_handler). Tests supply in-memory fakes.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import signal
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, TextIO

# Only import termios/tty on Unix systems
try:
    import termios
    import tty

    HAS_TERMIOS = True
except ImportError:
    HAS_TERMIOS = False

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions in cells."""

    columns: int
    rows: int


class Disposable(Protocol):
    def dispose(self) -> None: ...


class Subscription:
    """Handle returned by on_* methods; dispose() unsubscribes (once)."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Callable[[], None] | None = unsubscribe

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def dispose(self) -> None:
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        unsubscribe()


class TerminalAdapter(Protocol):
    def on_input(self, handler: Callable[[bytes], None]) -> Disposable: ...

    def on_resize(self, handler: Callable[[TerminalSize], None]) -> Disposable: ...

    def write(self, data: str) -> None: ...

    def get_size(self) -> TerminalSize: ...

    def enable_raw_mode(self) -> None: ...

    def disable_raw_mode(self) -> None: ...

    def is_tty(self) -> bool: ...

    def dispose(self) -> None: ...


class SignalAdapter(Protocol):
    def on_interrupt(self, handler: Callable[[], None]) -> Disposable: ...

    def on_terminate(self, handler: Callable[[], None]) -> Disposable: ...

    def dispose(self) -> None: ...


class PosixTerminal:
    """Terminal adapter for a POSIX tty.

    Input is read with loop.add_reader() on the input fd, so no thread is
    needed; resize events come from SIGWINCH.
    """

    def __init__(self, input: TextIO | None = None, output: TextIO | None = None) -> None:
        self._input = input or sys.stdin
        self._output = output or sys.stdout
        self._original_termios: list[Any] | None = None
        self._subscriptions: list[Subscription] = []

    @property
    def fd(self) -> int:
        return self._input.fileno()

    def is_tty(self) -> bool:
        """Check if input is a real terminal."""
        try:
            return self._input.isatty()
        except (AttributeError, ValueError, OSError):
            return False

    def enable_raw_mode(self) -> None:
        """Enter raw mode, keeping output post-processing.

        Idempotent; a no-op when input is not a tty.
        """
        if not HAS_TERMIOS or not self.is_tty() or self._original_termios is not None:
            return
        self._original_termios = termios.tcgetattr(self.fd)
        tty.setraw(self.fd)
        # Re-enable output post-processing so '\n' moves to column 1.
        attrs = termios.tcgetattr(self.fd)
        attrs[1] |= termios.OPOST | termios.ONLCR
        termios.tcsetattr(self.fd, termios.TCSADRAIN, attrs)

    def disable_raw_mode(self) -> None:
        """Restore the settings saved by enable_raw_mode()."""
        if not HAS_TERMIOS or self._original_termios is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._original_termios)
        except (termios.error, OSError):
            logger.warning("Could not restore terminal settings", exc_info=True)
        finally:
            self._original_termios = None

    def write(self, data: str) -> None:
        self._output.write(data)
        self._output.flush()

    def get_size(self) -> TerminalSize:
        try:
            size = os.get_terminal_size(self._output.fileno())
        except (AttributeError, ValueError, OSError):
            size = shutil.get_terminal_size()
        return TerminalSize(columns=size.columns, rows=size.lines)

    def on_input(self, handler: Callable[[bytes], None]) -> Subscription:
        loop = asyncio.get_running_loop()
        fd = self.fd

        def on_readable() -> None:
            try:
                data = os.read(fd, READ_CHUNK_SIZE)
            except (BlockingIOError, InterruptedError):
                return
            if not data:
                # EOF; stop polling a closed fd
                loop.remove_reader(fd)
                return
            handler(data)

        loop.add_reader(fd, on_readable)
        return self._track(Subscription(lambda: loop.remove_reader(fd)))

    def on_resize(self, handler: Callable[[TerminalSize], None]) -> Subscription:
        if not hasattr(signal, "SIGWINCH"):
            return Subscription(lambda: None)
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGWINCH, lambda: handler(self.get_size()))
        return self._track(Subscription(lambda: loop.remove_signal_handler(signal.SIGWINCH)))

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
        self.disable_raw_mode()

    def _track(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription


class PosixSignals:
    """SIGINT/SIGTERM delivered through the running asyncio loop."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def on_interrupt(self, handler: Callable[[], None]) -> Subscription:
        return self._subscribe(signal.SIGINT, handler)

    def on_terminate(self, handler: Callable[[], None]) -> Subscription:
        return self._subscribe(signal.SIGTERM, handler)

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()

    def _subscribe(self, signum: int, handler: Callable[[], None]) -> Subscription:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signum, handler)
        subscription = Subscription(lambda: loop.remove_signal_handler(signum))
        self._subscriptions.append(subscription)
        return subscription


@dataclass
class Platform:
    """A terminal and signal adapter pair, disposed together."""

    terminal: TerminalAdapter
    signals: SignalAdapter
    _disposed: bool = field(default=False, init=False, repr=False)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.terminal.dispose()
        self.signals.dispose()


def create_platform(input: TextIO | None = None, output: TextIO | None = None) -> Platform:
    """Create the POSIX platform for stdin/stdout (or the given streams)."""
    return Platform(terminal=PosixTerminal(input, output), signals=PosixSignals())
