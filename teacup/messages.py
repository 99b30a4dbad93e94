"""Runtime message types.

The runtime reserves these classes; every other object sent through a
Program is an application message and goes straight to Model.update().
"""

from __future__ import annotations

from dataclasses import dataclass


# Lifecycle


@dataclass(frozen=True)
class QuitMsg:
    """Request graceful program termination."""


@dataclass(frozen=True)
class InterruptMsg:
    """Interrupt the program (SIGINT)."""


@dataclass(frozen=True)
class SuspendMsg:
    """Suspend the program (Ctrl+Z). Reserved; no-op in the runtime."""


@dataclass(frozen=True)
class ResumeMsg:
    """Resume the program after suspension. Reserved; no-op in the runtime."""


@dataclass(frozen=True)
class WindowSizeMsg:
    """Report the current terminal width and height."""

    width: int
    height: int


@dataclass(frozen=True)
class FocusMsg:
    """Terminal focus gained."""


@dataclass(frozen=True)
class BlurMsg:
    """Terminal focus lost."""


# Screen control


@dataclass(frozen=True)
class ClearScreenMsg:
    """Clear the terminal screen."""


@dataclass(frozen=True)
class EnterAltScreenMsg:
    """Enter the alternate screen buffer."""


@dataclass(frozen=True)
class ExitAltScreenMsg:
    """Exit the alternate screen buffer."""


@dataclass(frozen=True)
class EnableMouseCellMotionMsg:
    """Enable cell-based mouse reporting."""


@dataclass(frozen=True)
class EnableMouseAllMotionMsg:
    """Enable all-motion mouse reporting."""


@dataclass(frozen=True)
class DisableMouseMsg:
    """Disable mouse reporting."""


@dataclass(frozen=True)
class ShowCursorMsg:
    """Show the cursor."""


@dataclass(frozen=True)
class HideCursorMsg:
    """Hide the cursor."""


@dataclass(frozen=True)
class EnableReportFocusMsg:
    """Enable focus in/out reporting."""


@dataclass(frozen=True)
class DisableReportFocusMsg:
    """Disable focus in/out reporting."""


@dataclass(frozen=True)
class EnableBracketedPasteMsg:
    """Enable bracketed paste."""


@dataclass(frozen=True)
class DisableBracketedPasteMsg:
    """Disable bracketed paste."""


@dataclass(frozen=True)
class SetWindowTitleMsg:
    """Set the terminal window title."""

    title: str


SCREEN_CONTROL_MESSAGES = (
    ClearScreenMsg,
    EnterAltScreenMsg,
    ExitAltScreenMsg,
    EnableMouseCellMotionMsg,
    EnableMouseAllMotionMsg,
    DisableMouseMsg,
    ShowCursorMsg,
    HideCursorMsg,
    EnableReportFocusMsg,
    DisableReportFocusMsg,
    EnableBracketedPasteMsg,
    DisableBracketedPasteMsg,
    SetWindowTitleMsg,
)
