"""Stopwatches: several timers, each driving itself with tick commands.

Every stopwatch stamps its TickMsg with an id from a shared IdGenerator so
update() only advances the one that scheduled the tick. Uses the alternate
screen and a Rich table for the view.

Keys: space starts/stops the selected stopwatch, tab selects the next one,
r resets, q quits.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from datetime import datetime

from rich.table import Table

from teacup import (
    Cmd,
    IdGenerator,
    KeyMsg,
    KeyType,
    Program,
    ProgramOptions,
    WindowSizeMsg,
    batch,
    create_platform,
    quit,
    set_window_title,
    tick,
)
from teacup.style import fit_lines, render

INTERVAL = 0.1


@dataclass(frozen=True)
class TickMsg:
    id: int
    time: datetime


@dataclass(frozen=True)
class Stopwatch:
    id: int
    elapsed: float = 0.0
    running: bool = False

    def tick(self) -> Cmd:
        return tick(INTERVAL, lambda t: TickMsg(self.id, t))

    def update(self, msg: TickMsg) -> tuple[Stopwatch, Cmd]:
        if msg.id != self.id or not self.running:
            return self, None
        return replace(self, elapsed=self.elapsed + INTERVAL), self.tick()


@dataclass(frozen=True)
class App:
    watches: tuple[Stopwatch, ...]
    selected: int = 0
    width: int = 80

    def init(self) -> Cmd:
        return set_window_title("stopwatches")

    def update(self, msg: object) -> tuple[App, Cmd]:
        if isinstance(msg, WindowSizeMsg):
            return replace(self, width=msg.width), None
        if isinstance(msg, TickMsg):
            results = [watch.update(msg) for watch in self.watches]
            watches = tuple(watch for watch, _ in results)
            return replace(self, watches=watches), batch(*(cmd for _, cmd in results))
        if not isinstance(msg, KeyMsg):
            return self, None

        name = str(msg)
        if name in ("q", "ctrl+c"):
            return self, quit()
        if msg.key.type is KeyType.TAB:
            return replace(self, selected=(self.selected + 1) % len(self.watches)), None

        watch = self.watches[self.selected]
        cmd: Cmd = None
        if msg.key.type is KeyType.SPACE:
            watch = replace(watch, running=not watch.running)
            cmd = watch.tick() if watch.running else None
        elif name == "r":
            watch = replace(watch, elapsed=0.0)
        watches = self.watches[: self.selected] + (watch,) + self.watches[self.selected + 1 :]
        return replace(self, watches=watches), cmd

    def view(self) -> str:
        table = Table(title="Stopwatches")
        table.add_column("#", justify="right")
        table.add_column("Elapsed", justify="right")
        table.add_column("State")
        for i, watch in enumerate(self.watches):
            marker = ">" if i == self.selected else " "
            state = "[green]running[/green]" if watch.running else "[dim]stopped[/dim]"
            table.add_row(f"{marker}{watch.id}", f"{watch.elapsed:6.1f}s", state)
        help_line = "space start/stop  tab next  r reset  q quit"
        return fit_lines(render(table, width=self.width) + "\n" + help_line, self.width)


async def main() -> None:
    ids = IdGenerator()
    app = App(watches=tuple(Stopwatch(ids()) for _ in range(3)))
    options = ProgramOptions(alt_screen=True)
    await Program(app, options, platform=create_platform()).run()


if __name__ == "__main__":
    asyncio.run(main())
