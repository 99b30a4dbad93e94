"""Program: wires the platform to the decoder, dispatcher and renderer.

Lifecycle:
    run()
    ├── terminal setup (raw mode, hidden cursor, optional alt screen,
    │   mouse, bracketed paste, focus reporting)
    ├── renderer start, init(), first paint
    ├── input / resize / signal subscriptions, initial WindowSizeMsg
    ├── await the dispatcher (quit, interrupt, kill, or an error)
    └── teardown: always runs, exactly once

Example:
    result = asyncio.run(Program(CounterModel(), ProgramOptions(alt_screen=True)).run())
    if result.error:
        raise result.error
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .config import ProgramOptions
from .dispatch import Dispatcher
from .errors import ProgramAlreadyRunning, ProgramKilled
from .input import InputDecoder
from .messages import (
    ClearScreenMsg,
    DisableBracketedPasteMsg,
    DisableMouseMsg,
    DisableReportFocusMsg,
    EnableBracketedPasteMsg,
    EnableMouseAllMotionMsg,
    EnableMouseCellMotionMsg,
    EnableReportFocusMsg,
    EnterAltScreenMsg,
    ExitAltScreenMsg,
    HideCursorMsg,
    InterruptMsg,
    QuitMsg,
    SetWindowTitleMsg,
    ShowCursorMsg,
    WindowSizeMsg,
)
from .model import Model, Msg
from .platform import Disposable, Platform, TerminalSize
from .renderer import StandardRenderer
from .terminal import TerminalController

logger = logging.getLogger(__name__)

# Time to wait after a lone ESC (or other ambiguous prefix) before deciding
# no more bytes of the sequence are coming.
ESCAPE_SEQUENCE_TIMEOUT = 0.025  # 25ms

M = TypeVar("M", bound=Model)


@dataclass
class ProgramResult(Generic[M]):
    """Outcome of Program.run().

    Attributes:
        model: The last installed model
        error: The exception that ended the program, None on a clean quit
    """

    model: M
    error: BaseException | None = None


class Program(Generic[M]):
    """Runs a model against a terminal until it quits."""

    def __init__(
        self,
        model: M,
        options: ProgramOptions | None = None,
        platform: Platform | None = None,
    ) -> None:
        self.options = options or ProgramOptions()
        self.platform = platform
        terminal = platform.terminal if platform is not None else None
        self.terminal = TerminalController(terminal)
        self.renderer = StandardRenderer(
            write=self.terminal.write if terminal is not None else None,
            fps=self.options.fps,
        )
        self.decoder = InputDecoder()
        self._dispatcher = Dispatcher(model, render=self.renderer.write, intercept=self._handle_internal)
        self._subscriptions: list[Disposable] = []
        self._escape_timer: asyncio.TimerHandle | None = None
        self._running = False

    @property
    def model(self) -> M:
        return self._dispatcher.model

    async def run(self) -> ProgramResult[M]:
        """Run until quit; the terminal is restored on every exit path."""
        if self._running:
            raise ProgramAlreadyRunning("Program is already running")
        self._running = True
        result: ProgramResult[M]
        try:
            self._setup_terminal()
            self.renderer.start()
            self._dispatcher.start()
            self.renderer.flush()
            self._start_input()
            self._setup_signals()
            await self._dispatcher.wait()
            result = ProgramResult(model=self.model)
        except Exception as exc:
            logger.debug("Program ended with an error", exc_info=exc)
            result = ProgramResult(model=self.model, error=exc)
        finally:
            await self._shutdown()
            self._running = False
        return result

    def send(self, msg: Msg) -> None:
        """Send a message to the program from outside the model."""
        self._dispatcher.send(msg)

    def quit(self) -> None:
        self.send(QuitMsg())

    def kill(self) -> None:
        """Stop immediately; run() returns with error=ProgramKilled()."""
        self._dispatcher.stop(ProgramKilled())

    # Setup

    def _setup_terminal(self) -> None:
        opts = self.options
        self.terminal.enable_raw_mode()
        self.terminal.hide_cursor()

        if opts.alt_screen:
            self.terminal.enter_alt_screen()
            self.terminal.clear_screen()

        if opts.mouse_mode == "cell":
            self.terminal.enable_mouse_cell_motion()
        elif opts.mouse_mode == "all":
            self.terminal.enable_mouse_all_motion()

        if opts.bracketed_paste:
            self.terminal.enable_bracketed_paste()

        if opts.report_focus:
            self.terminal.enable_report_focus()

    def _start_input(self) -> None:
        if self.platform is None:
            return
        self._subscriptions.append(self.platform.terminal.on_input(self._on_input))

    def _setup_signals(self) -> None:
        if self.platform is None:
            return
        signals = self.platform.signals
        self._subscriptions.append(signals.on_interrupt(lambda: self.send(InterruptMsg())))
        self._subscriptions.append(signals.on_terminate(lambda: self.send(QuitMsg())))
        self._subscriptions.append(self.platform.terminal.on_resize(self._on_resize))

        size = self.platform.terminal.get_size()
        self.send(WindowSizeMsg(size.columns, size.rows))

    # Input

    def _on_input(self, data: bytes) -> None:
        self._cancel_escape_timer()
        for msg in self.decoder.feed(data):
            self.send(msg)
        if self.decoder.pending:
            loop = asyncio.get_running_loop()
            self._escape_timer = loop.call_later(ESCAPE_SEQUENCE_TIMEOUT, self._flush_input)

    def _flush_input(self) -> None:
        self._escape_timer = None
        for msg in self.decoder.flush():
            self.send(msg)

    def _cancel_escape_timer(self) -> None:
        if self._escape_timer is not None:
            self._escape_timer.cancel()
            self._escape_timer = None

    def _on_resize(self, size: TerminalSize) -> None:
        self.send(WindowSizeMsg(size.columns, size.rows))

    # Reserved messages

    def _handle_internal(self, msg: Any) -> bool:
        """Apply the terminal side effects of reserved messages.

        Returns True to consume the message. Everything reaches the model
        after its side effect; quit/interrupt are handled by the dispatcher.
        """
        if isinstance(msg, WindowSizeMsg):
            self.renderer.repaint()
        elif isinstance(msg, ClearScreenMsg):
            self.terminal.clear_screen()
            self.renderer.repaint()
        elif isinstance(msg, EnterAltScreenMsg):
            self.terminal.enter_alt_screen()
            self.renderer.repaint()
        elif isinstance(msg, ExitAltScreenMsg):
            self.terminal.exit_alt_screen()
            self.renderer.repaint()
        elif isinstance(msg, EnableMouseCellMotionMsg):
            self.terminal.enable_mouse_cell_motion()
        elif isinstance(msg, EnableMouseAllMotionMsg):
            self.terminal.enable_mouse_all_motion()
        elif isinstance(msg, DisableMouseMsg):
            self.terminal.disable_mouse()
        elif isinstance(msg, ShowCursorMsg):
            self.terminal.show_cursor()
        elif isinstance(msg, HideCursorMsg):
            self.terminal.hide_cursor()
        elif isinstance(msg, EnableReportFocusMsg):
            self.terminal.enable_report_focus()
        elif isinstance(msg, DisableReportFocusMsg):
            self.terminal.disable_report_focus()
        elif isinstance(msg, EnableBracketedPasteMsg):
            self.terminal.enable_bracketed_paste()
        elif isinstance(msg, DisableBracketedPasteMsg):
            self.terminal.disable_bracketed_paste()
        elif isinstance(msg, SetWindowTitleMsg):
            self.terminal.set_window_title(msg.title)
        return False

    # Teardown

    async def _shutdown(self) -> None:
        self._cancel_escape_timer()
        self._dispatcher.scheduler.cancel()
        try:
            await self.renderer.stop()
        except Exception:
            logger.exception("Failed to paint final frame")
        for subscription in self._subscriptions:
            try:
                subscription.dispose()
            except Exception:
                logger.exception("Failed to dispose subscription %r", subscription)
        self._subscriptions.clear()
        try:
            self.terminal.cleanup()
        finally:
            if self.platform is not None:
                self.platform.dispose()
