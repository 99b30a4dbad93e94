"""Shared fakes for runtime tests: an in-memory platform and a recording model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from teacup.model import Cmd
from teacup.platform import Platform, Subscription, TerminalSize


class FakeTerminal:
    """In-memory terminal adapter.

    events records every mode change and write in call order, e.g.
    ("raw", True), ("write", "\\x1b[?25l"), ("dispose", None).
    """

    def __init__(self, columns: int = 80, rows: int = 24) -> None:
        self.size = TerminalSize(columns, rows)
        self.events: list[tuple[str, Any]] = []
        self.raw = False
        self.disposed = False
        self._input_handlers: list[Callable[[bytes], None]] = []
        self._resize_handlers: list[Callable[[TerminalSize], None]] = []

    @property
    def output(self) -> str:
        return "".join(data for kind, data in self.events if kind == "write")

    def writes(self) -> list[str]:
        return [data for kind, data in self.events if kind == "write"]

    def on_input(self, handler: Callable[[bytes], None]) -> Subscription:
        self._input_handlers.append(handler)
        return Subscription(lambda: self._input_handlers.remove(handler))

    def on_resize(self, handler: Callable[[TerminalSize], None]) -> Subscription:
        self._resize_handlers.append(handler)
        return Subscription(lambda: self._resize_handlers.remove(handler))

    def feed(self, data: bytes | str) -> None:
        """Simulate bytes arriving from the keyboard."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        for handler in list(self._input_handlers):
            handler(data)

    def resize(self, columns: int, rows: int) -> None:
        self.size = TerminalSize(columns, rows)
        for handler in list(self._resize_handlers):
            handler(self.size)

    def write(self, data: str) -> None:
        self.events.append(("write", data))

    def get_size(self) -> TerminalSize:
        return self.size

    def enable_raw_mode(self) -> None:
        self.raw = True
        self.events.append(("raw", True))

    def disable_raw_mode(self) -> None:
        self.raw = False
        self.events.append(("raw", False))

    def is_tty(self) -> bool:
        return True

    def dispose(self) -> None:
        self.disposed = True
        self.events.append(("dispose", None))

    @property
    def listening(self) -> bool:
        return bool(self._input_handlers)


class FakeSignals:
    def __init__(self) -> None:
        self._interrupt: list[Callable[[], None]] = []
        self._terminate: list[Callable[[], None]] = []

    def on_interrupt(self, handler: Callable[[], None]) -> Subscription:
        self._interrupt.append(handler)
        return Subscription(lambda: self._interrupt.remove(handler))

    def on_terminate(self, handler: Callable[[], None]) -> Subscription:
        self._terminate.append(handler)
        return Subscription(lambda: self._terminate.remove(handler))

    def interrupt(self) -> None:
        for handler in list(self._interrupt):
            handler()

    def terminate(self) -> None:
        for handler in list(self._terminate):
            handler()

    def dispose(self) -> None:
        pass


@dataclass
class RecordingModel:
    """Records every message it sees; behaviour is injected per test.

    Returns itself from update() so tests can inspect one shared list.
    """

    messages: list[Any] = field(default_factory=list)
    init_cmd: Cmd = None
    on_update: Callable[[Any], Cmd] | None = None
    frame: str = "recording"

    def init(self) -> Cmd:
        return self.init_cmd

    def update(self, msg: Any) -> tuple[RecordingModel, Cmd]:
        self.messages.append(msg)
        cmd = self.on_update(msg) if self.on_update else None
        return self, cmd

    def view(self) -> str:
        return self.frame

    def of_type(self, *types: type) -> list[Any]:
        return [m for m in self.messages if isinstance(m, types)]


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def signals() -> FakeSignals:
    return FakeSignals()


@pytest.fixture
def platform(terminal: FakeTerminal, signals: FakeSignals) -> Platform:
    return Platform(terminal=terminal, signals=signals)
