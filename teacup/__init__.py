"""teacup: an Elm-architecture runtime for full-screen terminal programs.

Application code supplies a model with init(), update() and view(); the
runtime owns the terminal, decodes input into messages, runs commands and
repaints the screen.

Usage:
    import asyncio
    from teacup import KeyMsg, Program, create_platform, quit

    class Counter:
        def __init__(self, n=0):
            self.n = n

        def init(self):
            return None

        def update(self, msg):
            if isinstance(msg, KeyMsg):
                if str(msg) == "q":
                    return self, quit()
                return Counter(self.n + 1), None
            return self, None

        def view(self):
            return f"{self.n} keys pressed (q to quit)"

    asyncio.run(Program(Counter(), platform=create_platform()).run())
"""

import logging

from .commands import (
    batch,
    clear_screen,
    disable_bracketed_paste,
    disable_mouse,
    disable_report_focus,
    enable_bracketed_paste,
    enable_mouse_all_motion,
    enable_mouse_cell_motion,
    enable_report_focus,
    enter_alt_screen,
    every,
    exit_alt_screen,
    hide_cursor,
    interrupt,
    msg,
    quit,
    sequence,
    set_window_title,
    show_cursor,
    suspend,
    tick,
    to_thread,
    window_size,
)
from .config import ProgramOptions, load_options
from .dispatch import CommandScheduler, Dispatcher
from .errors import ProgramAlreadyRunning, ProgramKilled, TeacupError
from .ids import IdGenerator
from .input import NEED_MORE, NO_MATCH, Decoded, InputDecoder, decode_one
from .keys import Key, KeyMsg, KeyType
from .messages import (
    BlurMsg,
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
    FocusMsg,
    HideCursorMsg,
    InterruptMsg,
    QuitMsg,
    ResumeMsg,
    SetWindowTitleMsg,
    ShowCursorMsg,
    SuspendMsg,
    WindowSizeMsg,
)
from .model import Cmd, Model
from .mouse import MouseAction, MouseButton, MouseEvent, MouseMsg
from .platform import Platform, TerminalSize, create_platform
from .program import Program, ProgramResult
from .renderer import StandardRenderer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Program
    "Program",
    "ProgramOptions",
    "ProgramResult",
    "load_options",
    "Model",
    "Cmd",
    # Platform
    "Platform",
    "TerminalSize",
    "create_platform",
    # Runtime internals
    "CommandScheduler",
    "Dispatcher",
    "StandardRenderer",
    "InputDecoder",
    "decode_one",
    "Decoded",
    "NEED_MORE",
    "NO_MATCH",
    "IdGenerator",
    # Errors
    "TeacupError",
    "ProgramKilled",
    "ProgramAlreadyRunning",
    # Input messages
    "Key",
    "KeyMsg",
    "KeyType",
    "MouseAction",
    "MouseButton",
    "MouseEvent",
    "MouseMsg",
    # Lifecycle messages
    "QuitMsg",
    "InterruptMsg",
    "SuspendMsg",
    "ResumeMsg",
    "WindowSizeMsg",
    "FocusMsg",
    "BlurMsg",
    # Screen control messages
    "ClearScreenMsg",
    "EnterAltScreenMsg",
    "ExitAltScreenMsg",
    "EnableMouseCellMotionMsg",
    "EnableMouseAllMotionMsg",
    "DisableMouseMsg",
    "ShowCursorMsg",
    "HideCursorMsg",
    "EnableReportFocusMsg",
    "DisableReportFocusMsg",
    "EnableBracketedPasteMsg",
    "DisableBracketedPasteMsg",
    "SetWindowTitleMsg",
    # Commands
    "batch",
    "sequence",
    "tick",
    "every",
    "to_thread",
    "msg",
    "quit",
    "interrupt",
    "suspend",
    "clear_screen",
    "enter_alt_screen",
    "exit_alt_screen",
    "enable_mouse_cell_motion",
    "enable_mouse_all_motion",
    "disable_mouse",
    "show_cursor",
    "hide_cursor",
    "enable_report_focus",
    "disable_report_focus",
    "enable_bracketed_paste",
    "disable_bracketed_paste",
    "set_window_title",
    "window_size",
]
