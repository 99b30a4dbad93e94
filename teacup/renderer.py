"""Frame renderer.

The dispatcher hands over a new view after every update; the renderer only
remembers the latest one and paints it on the next tick, so bursts of
updates cost one write per frame at most.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from .terminal import ANSI

logger = logging.getLogger(__name__)

DEFAULT_FPS = 60
MIN_FPS = 1
MAX_FPS = 120


def clamp_fps(fps: float | None) -> float:
    if fps is None:
        return DEFAULT_FPS
    return min(max(fps, MIN_FPS), MAX_FPS)


class StandardRenderer:
    """Repaints the whole screen when the view string changes.

    Attributes:
        frame_interval: Seconds between ticks
    """

    def __init__(self, write: Callable[[str], None] | None = None, fps: float | None = None) -> None:
        self._write = write
        self.frame_interval = 1.0 / clamp_fps(fps)
        self._next_frame: str | None = None
        # None means nothing is on screen yet; "" is a valid frame
        self._last_frame: str | None = None
        self._task: asyncio.Task[None] | None = None
        self._running = False

    @property
    def last_frame(self) -> str | None:
        return self._last_frame

    def start(self) -> None:
        """Start the frame ticker. Idempotent."""
        if self._task is not None:
            return
        self._running = True
        self._task = asyncio.create_task(self._ticker())

    async def stop(self) -> None:
        """Paint the final frame and stop the ticker."""
        self._running = False
        try:
            self.flush()
        finally:
            if self._task is not None:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass
                self._task = None

    def write(self, view: str) -> None:
        """Record the frame to paint on the next tick."""
        self._next_frame = view or ""

    def repaint(self) -> None:
        """Force the next tick to redraw even if the view is unchanged."""
        self._last_frame = None

    def flush(self) -> None:
        """Paint the pending frame if it differs from what is on screen."""
        if self._next_frame is None:
            return
        frame = self._next_frame
        if frame == self._last_frame:
            return
        self._last_frame = frame
        if self._write is not None:
            # Clear first so a shorter frame leaves no stale characters
            self._write(ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME + frame)

    async def _ticker(self) -> None:
        while self._running:
            await asyncio.sleep(self.frame_interval)
            try:
                self.flush()
            except Exception:
                logger.exception("Failed to paint frame")
