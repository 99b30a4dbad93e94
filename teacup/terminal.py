"""Terminal control sequences and mode tracking.

This module provides:
- ANSI: The escape sequences the runtime writes to the terminal
- TerminalController: Tracks which terminal modes are on so that teardown
  restores exactly what setup changed
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .platform import TerminalAdapter

logger = logging.getLogger(__name__)


class ANSI:
    """Centralized ANSI escape sequences.

    Usage:
        from .terminal import ANSI

        terminal.write(ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME)
        terminal.write(ANSI.window_title("teacup"))
    """

    ESC = "\033"
    BEL = "\007"

    # Cursor visibility
    HIDE_CURSOR = "\033[?25l"
    SHOW_CURSOR = "\033[?25h"

    # Screen control
    CLEAR_SCREEN = "\033[2J"  # Clear entire screen
    MOVE_HOME = "\033[H"  # Move cursor to home position (1,1)

    # Alternate screen buffer
    ENABLE_ALT_SCREEN = "\033[?1049h"
    DISABLE_ALT_SCREEN = "\033[?1049l"

    # Mouse reporting
    ENABLE_MOUSE_CELL_MOTION = "\033[?1002h"  # Press, release, drag
    DISABLE_MOUSE_CELL_MOTION = "\033[?1002l"
    ENABLE_MOUSE_ALL_MOTION = "\033[?1003h"  # Also motion with no button held
    DISABLE_MOUSE_ALL_MOTION = "\033[?1003l"
    ENABLE_MOUSE_SGR = "\033[?1006h"  # Extended coordinates
    DISABLE_MOUSE_SGR = "\033[?1006l"

    # Input reporting
    ENABLE_BRACKETED_PASTE = "\033[?2004h"
    DISABLE_BRACKETED_PASTE = "\033[?2004l"
    ENABLE_REPORT_FOCUS = "\033[?1004h"
    DISABLE_REPORT_FOCUS = "\033[?1004l"

    @classmethod
    def window_title(cls, title: str) -> str:
        """OSC 0 sequence setting the icon name and window title."""
        return f"{cls.ESC}]0;{title}{cls.BEL}"


class TerminalController:
    """Writes control sequences and remembers which modes are enabled.

    Without a terminal adapter every call is a no-op, which lets programs run
    headless (tests, piped output).
    """

    def __init__(self, terminal: TerminalAdapter | None = None) -> None:
        self._terminal = terminal
        self.raw_mode = False
        self.alt_screen = False
        self.bracketed_paste = False
        self.report_focus = False

    def write(self, data: str) -> None:
        if not data or self._terminal is None:
            return
        self._terminal.write(data)

    def enable_raw_mode(self) -> None:
        if self._terminal is not None and not self.raw_mode:
            self._terminal.enable_raw_mode()
            self.raw_mode = True

    def disable_raw_mode(self) -> None:
        if self._terminal is not None and self.raw_mode:
            self._terminal.disable_raw_mode()
            self.raw_mode = False

    def enter_alt_screen(self) -> None:
        self.write(ANSI.ENABLE_ALT_SCREEN)
        self.alt_screen = True

    def exit_alt_screen(self) -> None:
        self.write(ANSI.DISABLE_ALT_SCREEN)
        self.alt_screen = False

    def clear_screen(self) -> None:
        self.write(ANSI.CLEAR_SCREEN + ANSI.MOVE_HOME)

    def show_cursor(self) -> None:
        self.write(ANSI.SHOW_CURSOR)

    def hide_cursor(self) -> None:
        self.write(ANSI.HIDE_CURSOR)

    def enable_mouse_cell_motion(self) -> None:
        self.write(ANSI.ENABLE_MOUSE_CELL_MOTION)
        self.write(ANSI.ENABLE_MOUSE_SGR)

    def enable_mouse_all_motion(self) -> None:
        self.write(ANSI.ENABLE_MOUSE_ALL_MOTION)
        self.write(ANSI.ENABLE_MOUSE_SGR)

    def disable_mouse(self) -> None:
        self.write(ANSI.DISABLE_MOUSE_CELL_MOTION)
        self.write(ANSI.DISABLE_MOUSE_ALL_MOTION)
        self.write(ANSI.DISABLE_MOUSE_SGR)

    def enable_bracketed_paste(self) -> None:
        self.write(ANSI.ENABLE_BRACKETED_PASTE)
        self.bracketed_paste = True

    def disable_bracketed_paste(self) -> None:
        self.write(ANSI.DISABLE_BRACKETED_PASTE)
        self.bracketed_paste = False

    def enable_report_focus(self) -> None:
        self.write(ANSI.ENABLE_REPORT_FOCUS)
        self.report_focus = True

    def disable_report_focus(self) -> None:
        self.write(ANSI.DISABLE_REPORT_FOCUS)
        self.report_focus = False

    def set_window_title(self, title: str) -> None:
        self.write(ANSI.window_title(title))

    def cleanup(self) -> None:
        """Restore every mode the program changed.

        Order: mouse off, focus/paste reporting off, cursor on, primary
        screen, cooked mode.
        """
        self.disable_mouse()
        if self.report_focus:
            self.disable_report_focus()
        if self.bracketed_paste:
            self.disable_bracketed_paste()
        self.show_cursor()
        if self.alt_screen:
            self.exit_alt_screen()
        self.disable_raw_mode()
        logger.debug("Terminal modes restored")
