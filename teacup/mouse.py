"""Mouse event parsing (X10 and SGR encodings)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class MouseAction(Enum):
    """Mouse action type."""

    PRESS = "press"
    RELEASE = "release"
    MOTION = "motion"


class MouseButton(Enum):
    """Mouse button identifiers, including wheels."""

    NONE = "none"
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel-up"
    WHEEL_DOWN = "wheel-down"
    WHEEL_LEFT = "wheel-left"
    WHEEL_RIGHT = "wheel-right"
    BACKWARD = "backward"
    FORWARD = "forward"
    BUTTON_10 = "button-10"
    BUTTON_11 = "button-11"


WHEEL_BUTTONS = frozenset(
    {
        MouseButton.WHEEL_UP,
        MouseButton.WHEEL_DOWN,
        MouseButton.WHEEL_LEFT,
        MouseButton.WHEEL_RIGHT,
    }
)


@dataclass
class MouseEvent:
    """Parsed mouse event. Coordinates are zero-based cells."""

    x: int = 0
    y: int = 0
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    action: MouseAction = MouseAction.PRESS
    button: MouseButton = MouseButton.NONE

    @property
    def is_wheel(self) -> bool:
        return self.button in WHEEL_BUTTONS


@dataclass(frozen=True)
class MouseMsg:
    """Message representing a parsed mouse event."""

    event: MouseEvent = field(default_factory=MouseEvent)

    def __str__(self) -> str:
        e = self.event
        mods = [name for name, on in (("ctrl", e.ctrl), ("alt", e.alt), ("shift", e.shift)) if on]
        prefix = "+".join(mods) + "+" if mods else ""
        return f"{prefix}{e.button.value} {e.action.value} @{e.x},{e.y}"


X10_PREFIX = b"\x1b[M"
SGR_PREFIX = b"\x1b[<"
X10_EVENT_LEN = 6
X10_BYTE_OFFSET = 32

# Fields are bounded so a runaway report falls through to the CSI drop path
_SGR_PATTERN = re.compile(rb"(\d{1,10});(\d{1,10});(\d{1,10})([Mm])")
_SGR_PARTIAL = re.compile(rb"[\d;]*")

# Button code bits
_BIT_SHIFT = 0b0000_0100
_BIT_ALT = 0b0000_1000
_BIT_CTRL = 0b0001_0000
_BIT_MOTION = 0b0010_0000
_BIT_WHEEL = 0b0100_0000
_BIT_ADD = 0b1000_0000
_BITS_MASK = 0b0000_0011

_EXTRA_BUTTONS = (
    MouseButton.BACKWARD,
    MouseButton.FORWARD,
    MouseButton.BUTTON_10,
    MouseButton.BUTTON_11,
)
_WHEEL_BUTTONS = (
    MouseButton.WHEEL_UP,
    MouseButton.WHEEL_DOWN,
    MouseButton.WHEEL_LEFT,
    MouseButton.WHEEL_RIGHT,
)
_BASE_BUTTONS = (
    MouseButton.LEFT,
    MouseButton.MIDDLE,
    MouseButton.RIGHT,
    MouseButton.NONE,
)


def parse_button(code: int, is_sgr: bool) -> MouseEvent:
    """Decode the button byte into button, action and modifiers."""
    e = code if is_sgr else code - X10_BYTE_OFFSET
    event = MouseEvent()

    if e & _BIT_ADD:
        event.button = _EXTRA_BUTTONS[e & _BITS_MASK]
    elif e & _BIT_WHEEL:
        event.button = _WHEEL_BUTTONS[e & _BITS_MASK]
    else:
        event.button = _BASE_BUTTONS[e & _BITS_MASK]
        if e & _BITS_MASK == _BITS_MASK:
            # X10 reports every release as button 3
            event.action = MouseAction.RELEASE

    if e & _BIT_MOTION and not event.is_wheel:
        event.action = MouseAction.MOTION

    event.alt = bool(e & _BIT_ALT)
    event.ctrl = bool(e & _BIT_CTRL)
    event.shift = bool(e & _BIT_SHIFT)
    return event


def _parse_x10(buffer: bytes) -> MouseEvent:
    event = parse_button(buffer[3], is_sgr=False)
    event.x = buffer[4] - X10_BYTE_OFFSET - 1
    event.y = buffer[5] - X10_BYTE_OFFSET - 1
    return event


def _parse_sgr(match: re.Match[bytes]) -> MouseEvent:
    event = parse_button(int(match.group(1)), is_sgr=True)
    release = match.group(4) == b"m"
    if event.action is not MouseAction.MOTION and not event.is_wheel and release:
        event.action = MouseAction.RELEASE
    event.x = int(match.group(2)) - 1
    event.y = int(match.group(3)) - 1
    return event


def parse_mouse(buffer: bytes, end_of_stream: bool) -> tuple[MouseMsg, int] | bool | None:
    """Parse a mouse report from the start of buffer.

    Returns (msg, length) on a match, True when the buffer holds an
    unfinished mouse report and more data may arrive, None if the buffer
    does not start with a mouse report.
    """
    if len(buffer) < 3 or not buffer.startswith(b"\x1b["):
        return None

    if buffer.startswith(X10_PREFIX):
        if len(buffer) < X10_EVENT_LEN:
            return None if end_of_stream else True
        return MouseMsg(_parse_x10(buffer)), X10_EVENT_LEN

    if buffer.startswith(SGR_PREFIX):
        body = bytes(buffer[len(SGR_PREFIX) :])
        match = _SGR_PATTERN.match(body)
        if match:
            return MouseMsg(_parse_sgr(match)), len(SGR_PREFIX) + match.end()
        if not end_of_stream and _SGR_PARTIAL.fullmatch(body):
            return True
        return None

    return None
