"""Tests for command constructors and combinators."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime
from unittest.mock import AsyncMock, Mock, patch

import pytest

from teacup import commands
from teacup.commands import (
    batch,
    every,
    flatten,
    msg,
    next_interval_delay,
    resolve,
    sequence,
    tick,
    to_thread,
    window_size,
)
from teacup.messages import (
    ClearScreenMsg,
    EnterAltScreenMsg,
    InterruptMsg,
    QuitMsg,
    SetWindowTitleMsg,
    SuspendMsg,
    WindowSizeMsg,
)
from teacup.platform import TerminalSize


@dataclass(frozen=True)
class Tagged:
    tag: str
    at: datetime | None = None


def delayed(value: object, delay: float):
    async def run():
        await asyncio.sleep(delay)
        return value

    return run


class TestFlatten:
    """Tests for flatten()."""

    def test_empty(self) -> None:
        assert flatten([]) is None
        assert flatten([None, None]) is None

    def test_single_message(self) -> None:
        assert flatten([None, "a"]) == "a"

    def test_lists_are_spliced_in_order(self) -> None:
        assert flatten(["a", ["b", None, "c"], None, "d"]) == ["a", "b", "c", "d"]


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.asyncio
    async def test_none(self) -> None:
        assert await resolve(None) is None

    @pytest.mark.asyncio
    async def test_sync_command(self) -> None:
        assert await resolve(msg("x")) == "x"

    @pytest.mark.asyncio
    async def test_async_command(self) -> None:
        assert await resolve(delayed("y", 0)) == "y"


class TestBatch:
    """Tests for batch()."""

    def test_no_commands(self) -> None:
        assert batch() is None
        assert batch(None, None) is None

    def test_single_command_returned_as_is(self) -> None:
        cmd = msg("a")
        assert batch(None, cmd, None) is cmd

    @pytest.mark.asyncio
    async def test_results_follow_argument_order(self) -> None:
        cmd = batch(delayed("slow", 0.05), delayed("fast", 0.0), msg("sync"))
        assert await resolve(cmd) == ["slow", "fast", "sync"]

    @pytest.mark.asyncio
    async def test_runs_concurrently(self) -> None:
        loop = asyncio.get_running_loop()
        start = loop.time()
        await resolve(batch(delayed("a", 0.1), delayed("b", 0.1), delayed("c", 0.1)))
        assert loop.time() - start < 0.25

    @pytest.mark.asyncio
    async def test_nested_batches_flatten(self) -> None:
        cmd = batch(msg("a"), batch(msg("b"), msg("c")), lambda: None)
        assert await resolve(cmd) == ["a", "b", "c"]


class TestSequence:
    """Tests for sequence()."""

    def test_no_commands(self) -> None:
        assert sequence() is None

    @pytest.mark.asyncio
    async def test_runs_one_after_another(self) -> None:
        started: list[str] = []

        def step(name: str, delay: float):
            async def run():
                started.append(name)
                await asyncio.sleep(delay)
                return name

            return run

        result = await resolve(sequence(step("a", 0.05), step("b", 0.0)))
        assert result == ["a", "b"]
        assert started == ["a", "b"]

    @pytest.mark.asyncio
    async def test_slow_tick_still_comes_first(self) -> None:
        cmd = sequence(tick(0.05, lambda t: Tagged("A", t)), tick(0.01, lambda t: Tagged("B", t)))
        first, second = await resolve(cmd)
        assert (first.tag, second.tag) == ("A", "B")
        assert first.at <= second.at


class TestTimers:
    """Tests for tick(), every() and next_interval_delay()."""

    @pytest.mark.asyncio
    async def test_tick_waits_then_maps_time(self) -> None:
        loop = asyncio.get_running_loop()
        start = loop.time()
        result = await resolve(tick(0.02, lambda t: Tagged("tick", t)))
        assert loop.time() - start >= 0.015
        assert result.tag == "tick"
        assert isinstance(result.at, datetime)

    def test_tick_is_lazy(self) -> None:
        calls: list[datetime] = []
        tick(0.0, calls.append)
        assert calls == []

    def test_next_interval_delay(self) -> None:
        assert next_interval_delay(1.0, now=100.25) == pytest.approx(0.75)
        assert next_interval_delay(5.0, now=12.0) == pytest.approx(3.0)

    def test_next_interval_delay_on_boundary_waits_full_interval(self) -> None:
        assert next_interval_delay(1.0, now=100.0) == 1.0

    @pytest.mark.asyncio
    async def test_every_fires_on_boundary(self) -> None:
        sleep = AsyncMock()
        with patch("teacup.commands.time.time", return_value=41.5), patch("teacup.commands.asyncio.sleep", sleep):
            result = await resolve(every(2.0, lambda t: Tagged("every", t)))
        sleep.assert_awaited_once_with(pytest.approx(0.5))
        assert result.tag == "every"


class TestToThread:
    """Tests for to_thread()."""

    @pytest.mark.asyncio
    async def test_runs_off_the_event_loop_thread(self) -> None:
        main = threading.get_ident()
        result = await resolve(to_thread(lambda a, b: (a + b, threading.get_ident()), 2, 3))
        total, ident = result
        assert total == 5
        assert ident != main


class TestMessageCommands:
    """Tests for commands that yield a fixed message."""

    @pytest.mark.parametrize(
        "factory,expected",
        [
            (commands.quit, QuitMsg()),
            (commands.interrupt, InterruptMsg()),
            (commands.suspend, SuspendMsg()),
            (commands.clear_screen, ClearScreenMsg()),
            (commands.enter_alt_screen, EnterAltScreenMsg()),
        ],
    )
    def test_fixed_messages(self, factory, expected) -> None:
        assert factory()() == expected

    def test_set_window_title(self) -> None:
        assert commands.set_window_title("hi")() == SetWindowTitleMsg("hi")

    def test_window_size_without_terminal(self) -> None:
        assert window_size()() == WindowSizeMsg(0, 0)

    def test_window_size_reads_terminal(self) -> None:
        terminal = Mock()
        terminal.get_size.return_value = TerminalSize(120, 40)
        assert window_size(terminal)() == WindowSizeMsg(120, 40)
        terminal.get_size.assert_called_once_with()
