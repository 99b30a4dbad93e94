"""Input inspector: shows every event the runtime decodes.

Usage:
    python -m teacup [--alt-screen] [--mouse cell|all] [--report-focus]

Press q or ctrl+c to quit.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .commands import every, quit
from .config import DEFAULT_CONFIG_PATH, load_options
from .keys import KeyMsg, KeyType
from .log import setup_logging
from .messages import BlurMsg, FocusMsg, WindowSizeMsg
from .model import Cmd
from .mouse import MouseMsg
from .platform import create_platform
from .program import Program
from .style import fit_lines, render

MAX_EVENTS = 12


@dataclass(frozen=True)
class ClockMsg:
    time: datetime


def _describe(msg: Any) -> tuple[str, str] | None:
    """Category and label for an input event, None for other messages."""
    if isinstance(msg, KeyMsg):
        return "key", repr(str(msg)) if msg.key.type is KeyType.RUNES else str(msg)
    if isinstance(msg, MouseMsg):
        return "mouse", str(msg)
    if isinstance(msg, FocusMsg):
        return "focus", "gained"
    if isinstance(msg, BlurMsg):
        return "focus", "lost"
    if isinstance(msg, WindowSizeMsg):
        return "resize", f"{msg.width}x{msg.height}"
    return None


@dataclass(frozen=True)
class InspectorModel:
    """Keeps the most recent input events."""

    events: tuple[tuple[str, str], ...] = ()
    width: int = 80
    now: datetime = field(default_factory=datetime.now)

    def init(self) -> Cmd:
        return every(1.0, ClockMsg)

    def update(self, msg: Any) -> tuple[InspectorModel, Cmd]:
        if isinstance(msg, ClockMsg):
            return replace(self, now=msg.time), every(1.0, ClockMsg)
        if isinstance(msg, KeyMsg) and msg.key.type is KeyType.BREAK:
            return self, quit()
        if isinstance(msg, KeyMsg) and str(msg) == "q":
            return self, quit()

        event = _describe(msg)
        if event is None:
            return self, None
        model = replace(self, events=(self.events + (event,))[-MAX_EVENTS:])
        if isinstance(msg, WindowSizeMsg):
            model = replace(model, width=msg.width)
        return model, None

    def view(self) -> str:
        lines = Text()
        if not self.events:
            lines.append("Waiting for input...", style="dim")
        for i, (kind, label) in enumerate(self.events):
            if i:
                lines.append("\n")
            lines.append(f"{kind:>6}  ", style="bold cyan")
            lines.append(label)
        footer = Text(f"{self.now:%H:%M:%S}  q / ctrl+c to quit", style="dim")
        panel = Panel(Group(lines, footer), title="teacup input inspector", expand=False)
        return fit_lines(render(panel, width=self.width), self.width)


def main() -> None:
    """Entry point for the input inspector."""
    parser = argparse.ArgumentParser(description="teacup input inspector")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="JSON options file")
    parser.add_argument("--alt-screen", action="store_true", default=None, help="Use the alternate screen")
    parser.add_argument("--mouse", dest="mouse_mode", choices=["cell", "all"], help="Enable mouse reporting")
    parser.add_argument("--report-focus", action="store_true", default=None, help="Report focus changes")
    parser.add_argument(
        "--no-bracketed-paste",
        dest="bracketed_paste",
        action="store_false",
        default=None,
        help="Disable bracketed paste",
    )
    parser.add_argument("--fps", type=float, help="Frame rate (1-120)")
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()

    setup_logging(level="DEBUG" if args.debug else None, log_file=args.log_file)
    options = load_options(
        args.config,
        alt_screen=args.alt_screen,
        mouse_mode=args.mouse_mode,
        report_focus=args.report_focus,
        bracketed_paste=args.bracketed_paste,
        fps=args.fps,
    )

    program = Program(InspectorModel(), options, platform=create_platform())
    result = asyncio.run(program.run())
    if result.error is not None:
        print(f"teacup: {result.error!r}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
