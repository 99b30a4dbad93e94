"""Command constructors and combinators.

Commands are plain zero-argument callables; nothing runs until the
scheduler invokes them. All combinators here are pure: they build new
commands and never touch the program.

Usage:
    def update(self, msg):
        if isinstance(msg, KeyMsg) and str(msg) == "q":
            return self, quit()
        return self, batch(
            tick(1.0, lambda t: TickMsg(t)),
            set_window_title("working..."),
        )
"""

from __future__ import annotations

import asyncio
import inspect
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

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
    SuspendMsg,
    WindowSizeMsg,
)
from .model import Cmd, Effect, Msg

if TYPE_CHECKING:
    from .platform import TerminalAdapter


async def resolve(cmd: Cmd) -> Effect:
    """Invoke a command and await its effect if it is asynchronous."""
    if cmd is None:
        return None
    result = cmd()
    if inspect.isawaitable(result):
        result = await result
    return result


def flatten(effects: list[Effect]) -> Effect:
    """Concatenate effects in order, collapsing to None or a single message."""
    messages: list[Msg] = []
    for effect in effects:
        if effect is None:
            continue
        if isinstance(effect, list):
            messages.extend(m for m in effect if m is not None)
        else:
            messages.append(effect)
    if not messages:
        return None
    if len(messages) == 1:
        return messages[0]
    return messages


def batch(*cmds: Cmd) -> Cmd:
    """Run commands concurrently.

    The combined result is ordered by argument position, not by which
    effect finished first.
    """
    valid = [cmd for cmd in cmds if cmd is not None]
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]

    async def run_batch() -> Effect:
        results = await asyncio.gather(*(resolve(cmd) for cmd in valid))
        return flatten(list(results))

    return run_batch


def sequence(*cmds: Cmd) -> Cmd:
    """Run commands one at a time; each starts after the previous resolves."""
    valid = [cmd for cmd in cmds if cmd is not None]
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]

    async def run_sequence() -> Effect:
        results: list[Effect] = []
        for cmd in valid:
            results.append(await resolve(cmd))
        return flatten(results)

    return run_sequence


def tick(delay: float, fn: Callable[[datetime], Msg]) -> Cmd:
    """Resolve to fn(now) after delay seconds."""

    async def run_tick() -> Effect:
        await asyncio.sleep(delay)
        return fn(datetime.now())

    return run_tick


def next_interval_delay(interval: float, now: float | None = None) -> float:
    """Seconds until the next wall-clock multiple of interval."""
    current = time.time() if now is None else now
    remainder = current % interval
    return interval if remainder == 0 else interval - remainder


def every(interval: float, fn: Callable[[datetime], Msg]) -> Cmd:
    """Resolve to fn(now) at the next wall-clock boundary of interval.

    every(1.0, ...) fires on the next whole second. It fires once; return it
    again from update() to keep a repeating cadence.
    """

    async def run_every() -> Effect:
        await asyncio.sleep(next_interval_delay(interval))
        return fn(datetime.now())

    return run_every


def to_thread(fn: Callable[..., Msg], *args: Any) -> Cmd:
    """Run a blocking function in a worker thread and deliver its result."""

    async def run_blocking() -> Effect:
        return await asyncio.to_thread(fn, *args)

    return run_blocking


def msg(value: Msg) -> Cmd:
    """A command that yields value immediately."""
    return lambda: value


def quit() -> Cmd:
    """Request graceful termination."""
    return msg(QuitMsg())


def interrupt() -> Cmd:
    """Stop the program as if it received SIGINT."""
    return msg(InterruptMsg())


def suspend() -> Cmd:
    return msg(SuspendMsg())


# Screen control


def clear_screen() -> Cmd:
    return msg(ClearScreenMsg())


def enter_alt_screen() -> Cmd:
    return msg(EnterAltScreenMsg())


def exit_alt_screen() -> Cmd:
    return msg(ExitAltScreenMsg())


def enable_mouse_cell_motion() -> Cmd:
    return msg(EnableMouseCellMotionMsg())


def enable_mouse_all_motion() -> Cmd:
    return msg(EnableMouseAllMotionMsg())


def disable_mouse() -> Cmd:
    return msg(DisableMouseMsg())


def show_cursor() -> Cmd:
    return msg(ShowCursorMsg())


def hide_cursor() -> Cmd:
    return msg(HideCursorMsg())


def enable_report_focus() -> Cmd:
    return msg(EnableReportFocusMsg())


def disable_report_focus() -> Cmd:
    return msg(DisableReportFocusMsg())


def enable_bracketed_paste() -> Cmd:
    return msg(EnableBracketedPasteMsg())


def disable_bracketed_paste() -> Cmd:
    return msg(DisableBracketedPasteMsg())


def set_window_title(title: str) -> Cmd:
    return msg(SetWindowTitleMsg(title))


def window_size(terminal: TerminalAdapter | None = None) -> Cmd:
    """Emit the current terminal size (0x0 without a terminal)."""

    def run_window_size() -> Effect:
        if terminal is None:
            return WindowSizeMsg(0, 0)
        size = terminal.get_size()
        return WindowSizeMsg(size.columns, size.rows)

    return run_window_size
