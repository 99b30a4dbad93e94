"""Bridge from Rich renderables to view strings.

Views are plain strings with embedded ANSI codes. Rich does the styling and
layout; these helpers capture its output and measure the result.
"""

from __future__ import annotations

import io

import wcwidth
from rich.cells import cell_len
from rich.console import Console, RenderableType
from rich.text import Text


def render(renderable: RenderableType, width: int = 80, color_system: str | None = "truecolor") -> str:
    """Render a Rich renderable (or markup string) to an ANSI string.

    The trailing newline Rich adds is dropped so views compose cleanly.
    """
    console = Console(
        file=io.StringIO(),
        width=width,
        force_terminal=color_system is not None,
        color_system=color_system,
        legacy_windows=False,
    )
    console.print(renderable, end="")
    return console.file.getvalue()


def strip_ansi(s: str) -> str:
    """Text of s with escape codes removed."""
    return Text.from_ansi(s).plain


def visual_len(s: str) -> int:
    """Cells s occupies on screen, ignoring escape codes."""
    plain = strip_ansi(s)
    width = wcwidth.wcswidth(plain)
    # wcswidth gives up on control characters
    return width if width >= 0 else cell_len(plain)


def truncate_to_width(s: str, max_width: int, ellipsis: bool = True) -> str:
    """Cut a styled line down to max_width cells.

    Lines that already fit come back untouched. Longer ones are re-rendered
    through Rich, which keeps their styles and never splits a wide character.
    """
    if max_width <= 0:
        return ""
    if visual_len(s) <= max_width:
        return s
    text = Text.from_ansi(s, no_wrap=True)
    text.truncate(max_width, overflow="ellipsis" if ellipsis else "crop")
    return render(text, width=max_width)


def fit_lines(view: str, width: int) -> str:
    """Truncate every line of view to width cells."""
    return "\n".join(truncate_to_width(line, width) for line in view.split("\n"))
