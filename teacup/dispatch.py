"""Command scheduling and the single-writer message loop.

This module provides:
- CommandScheduler: Runs commands and funnels their results into send()
- Dispatcher: Owns the model, drains the message queue, calls update()

Concurrency model:
    Effects may run concurrently as asyncio tasks, but every result comes
    back through Dispatcher.send(), which only appends to a FIFO queue.
    update() is called from the drain loop alone, one message at a time,
    so it is never re-entered no matter how many effects are in flight.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from typing import Any, Callable

from .messages import InterruptMsg, QuitMsg
from .model import Cmd, Effect, Model, Msg

logger = logging.getLogger(__name__)


class CommandScheduler:
    """Executes commands and delivers their results.

    Effect errors are logged and dropped so one failing command cannot take
    down the message loop.
    """

    def __init__(self, deliver: Callable[[Msg], None]) -> None:
        self._deliver_one = deliver
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def pending(self) -> int:
        """Number of asynchronous effects still in flight."""
        return len(self._tasks)

    def run(self, cmd: Cmd) -> None:
        """Invoke cmd exactly once."""
        if cmd is None:
            return
        try:
            result = cmd()
        except Exception:
            logger.exception("Command %r raised", cmd)
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_done)
        else:
            self.deliver(result)

    def cancel(self) -> None:
        """Cancel every effect still in flight."""
        for task in list(self._tasks):
            task.cancel()

    def deliver(self, result: Effect) -> None:
        """Push a command result into the message queue."""
        if result is None:
            return
        if isinstance(result, list):
            for msg in result:
                self._deliver_one(msg)
        else:
            self._deliver_one(result)

    def _on_done(self, task: asyncio.Future[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Command task %r was cancelled", task)
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Command task failed", exc_info=exc)
            return
        self.deliver(task.result())


class Dispatcher:
    """The message loop.

    States:
        idle ──send()──► draining ──queue empty──► idle

    Quit and interrupt messages stop the loop; the interceptor sees every
    other message before the model does and may consume it by returning
    True. Errors raised by update(), view() or the interceptor end the loop
    and are re-raised from wait().
    """

    def __init__(
        self,
        model: Model,
        render: Callable[[str], None],
        intercept: Callable[[Msg], bool] | None = None,
    ) -> None:
        self.model = model
        self._render = render
        self._intercept = intercept
        self._queue: deque[Msg] = deque()
        self._draining = False
        self._started = False
        self._running = False
        self._finished: asyncio.Future[None] | None = None
        self.scheduler = CommandScheduler(self.send)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Run init(), paint the first view and drain anything already queued."""
        self._finished = asyncio.get_running_loop().create_future()
        self._started = True
        self._running = True
        # Hold messages produced by init() until the first frame is painted
        self._draining = True
        try:
            self.scheduler.run(self.model.init())
            self._render(self.model.view())
        finally:
            self._draining = False
        self._drain()

    def send(self, msg: Msg) -> None:
        """Queue a message; start draining if the loop is idle."""
        if msg is None:
            return
        if self._started and not self._running:
            logger.debug("Dropping %r: program has stopped", msg)
            return
        self._queue.append(msg)
        if self._started and not self._draining:
            self._drain()

    def stop(self, error: BaseException | None = None) -> None:
        """Stop processing messages and wake up wait()."""
        self._running = False
        self._queue.clear()
        if self._finished is not None and not self._finished.done():
            if error is None:
                self._finished.set_result(None)
            else:
                self._finished.set_exception(error)

    async def wait(self) -> None:
        """Block until the loop stops; re-raises the error that stopped it."""
        if self._finished is None:
            raise RuntimeError("Dispatcher has not been started")
        await self._finished

    def _drain(self) -> None:
        if self._draining:
            return
        self._draining = True
        try:
            while self._running and self._queue:
                self._handle(self._queue.popleft())
        except Exception as exc:
            self.stop(exc)
        finally:
            self._draining = False

    def _handle(self, msg: Msg) -> None:
        if isinstance(msg, (QuitMsg, InterruptMsg)):
            logger.debug("Received %s, stopping", type(msg).__name__)
            self.stop()
            return
        if self._intercept is not None and self._intercept(msg):
            return

        model, cmd = self.model.update(msg)
        self.model = model
        self.scheduler.run(cmd)
        self._render(self.model.view())
