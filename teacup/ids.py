"""Caller-owned identifier generator.

Components that schedule their own tick messages (spinners, timers,
stopwatches) stamp each message with their id so that update() can route it
to the right instance. The generator is passed in by whoever creates the
components; nothing in teacup keeps a global counter.
"""

from __future__ import annotations

import itertools


class IdGenerator:
    """Monotonic integer ids, starting at 1."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)

    __call__ = next_id
