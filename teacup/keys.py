"""Key types and the fixed escape-sequence table.

This module provides:
- KeyType: Symbolic keys reported by the input decoder
- Key / KeyMsg: A parsed key and the message that carries it
- parse_key(): Decode one key from the start of a byte buffer
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Known key types parsed from terminal input."""

    NULL = "null"
    BREAK = "break"
    ENTER = "enter"
    BACKSPACE = "backspace"
    TAB = "tab"
    ESC = "esc"
    SPACE = "space"
    RUNES = "runes"
    UP = "up"
    DOWN = "down"
    RIGHT = "right"
    LEFT = "left"
    SHIFT_TAB = "shift+tab"
    HOME = "home"
    END = "end"
    PGUP = "pgup"
    PGDOWN = "pgdown"
    CTRL_PGUP = "ctrl+pgup"
    CTRL_PGDOWN = "ctrl+pgdown"
    DELETE = "delete"
    INSERT = "insert"
    CTRL_UP = "ctrl+up"
    CTRL_DOWN = "ctrl+down"
    CTRL_RIGHT = "ctrl+right"
    CTRL_LEFT = "ctrl+left"
    CTRL_HOME = "ctrl+home"
    CTRL_END = "ctrl+end"
    SHIFT_UP = "shift+up"
    SHIFT_DOWN = "shift+down"
    SHIFT_RIGHT = "shift+right"
    SHIFT_LEFT = "shift+left"
    SHIFT_HOME = "shift+home"
    SHIFT_END = "shift+end"
    CTRL_SHIFT_UP = "ctrl+shift+up"
    CTRL_SHIFT_DOWN = "ctrl+shift+down"
    CTRL_SHIFT_LEFT = "ctrl+shift+left"
    CTRL_SHIFT_RIGHT = "ctrl+shift+right"
    CTRL_SHIFT_HOME = "ctrl+shift+home"
    CTRL_SHIFT_END = "ctrl+shift+end"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    F13 = "f13"
    F14 = "f14"
    F15 = "f15"
    F16 = "f16"
    F17 = "f17"
    F18 = "f18"
    F19 = "f19"
    F20 = "f20"


# Display names that differ from the enum value
_KEY_NAMES: dict[KeyType, str] = {
    KeyType.NULL: "ctrl+@",
    KeyType.BREAK: "ctrl+c",
    KeyType.SPACE: " ",
}


@dataclass(frozen=True)
class Key:
    """A parsed key.

    Attributes:
        type: Symbolic key kind (RUNES for printable text)
        runes: The decoded text; empty for every kind except RUNES
        alt: True if the key was prefixed with ESC (Alt/Meta held)
        paste: True if the text arrived through bracketed paste
    """

    type: KeyType
    runes: str = ""
    alt: bool = False
    paste: bool = False

    def __str__(self) -> str:
        if self.type is KeyType.RUNES:
            value = f"[{self.runes}]" if self.paste else self.runes
        else:
            value = _KEY_NAMES.get(self.type, self.type.value)
        return f"alt+{value}" if self.alt else value


@dataclass(frozen=True)
class KeyMsg:
    """Message representing a parsed key event."""

    key: Key

    def __str__(self) -> str:
        return str(self.key)


def _key(kind: KeyType, alt: bool = False) -> Key:
    return Key(type=kind, alt=alt)


# Single control bytes
CONTROL_KEYS: dict[int, KeyType] = {
    0x00: KeyType.NULL,
    0x03: KeyType.BREAK,
    0x09: KeyType.TAB,
    0x0A: KeyType.ENTER,
    0x0D: KeyType.ENTER,
    0x1B: KeyType.ESC,
    0x7F: KeyType.BACKSPACE,
}

# Fixed escape sequences, matched byte-exact against the start of the buffer
SEQUENCES: tuple[tuple[bytes, Key], ...] = (
    (b"\x1b[A", _key(KeyType.UP)),
    (b"\x1b[B", _key(KeyType.DOWN)),
    (b"\x1b[C", _key(KeyType.RIGHT)),
    (b"\x1b[D", _key(KeyType.LEFT)),
    (b"\x1b[Z", _key(KeyType.SHIFT_TAB)),
    (b"\x1b[2~", _key(KeyType.INSERT)),
    (b"\x1b[3~", _key(KeyType.DELETE)),
    (b"\x1b[5~", _key(KeyType.PGUP)),
    (b"\x1b[6~", _key(KeyType.PGDOWN)),
    (b"\x1b[1~", _key(KeyType.HOME)),
    (b"\x1b[4~", _key(KeyType.END)),
    (b"\x1b[H", _key(KeyType.HOME)),
    (b"\x1b[F", _key(KeyType.END)),
    # Function keys (SS3 form for F1-F4, VT form for the rest)
    (b"\x1bOP", _key(KeyType.F1)),
    (b"\x1bOQ", _key(KeyType.F2)),
    (b"\x1bOR", _key(KeyType.F3)),
    (b"\x1bOS", _key(KeyType.F4)),
    (b"\x1b[15~", _key(KeyType.F5)),
    (b"\x1b[17~", _key(KeyType.F6)),
    (b"\x1b[18~", _key(KeyType.F7)),
    (b"\x1b[19~", _key(KeyType.F8)),
    (b"\x1b[20~", _key(KeyType.F9)),
    (b"\x1b[21~", _key(KeyType.F10)),
    (b"\x1b[23~", _key(KeyType.F11)),
    (b"\x1b[24~", _key(KeyType.F12)),
    (b"\x1b[25~", _key(KeyType.F13)),
    (b"\x1b[26~", _key(KeyType.F14)),
    (b"\x1b[28~", _key(KeyType.F15)),
    (b"\x1b[29~", _key(KeyType.F16)),
    (b"\x1b[31~", _key(KeyType.F17)),
    (b"\x1b[32~", _key(KeyType.F18)),
    (b"\x1b[33~", _key(KeyType.F19)),
    (b"\x1b[34~", _key(KeyType.F20)),
    # Modified arrows
    (b"\x1b[1;2A", _key(KeyType.SHIFT_UP)),
    (b"\x1b[1;2B", _key(KeyType.SHIFT_DOWN)),
    (b"\x1b[1;2C", _key(KeyType.SHIFT_RIGHT)),
    (b"\x1b[1;2D", _key(KeyType.SHIFT_LEFT)),
    (b"\x1b[1;5A", _key(KeyType.CTRL_UP)),
    (b"\x1b[1;5B", _key(KeyType.CTRL_DOWN)),
    (b"\x1b[1;5C", _key(KeyType.CTRL_RIGHT)),
    (b"\x1b[1;5D", _key(KeyType.CTRL_LEFT)),
    (b"\x1b[1;6A", _key(KeyType.CTRL_SHIFT_UP)),
    (b"\x1b[1;6B", _key(KeyType.CTRL_SHIFT_DOWN)),
    (b"\x1b[1;6C", _key(KeyType.CTRL_SHIFT_RIGHT)),
    (b"\x1b[1;6D", _key(KeyType.CTRL_SHIFT_LEFT)),
    (b"\x1b[1;3A", _key(KeyType.UP, alt=True)),
    (b"\x1b[1;3B", _key(KeyType.DOWN, alt=True)),
    (b"\x1b[1;3C", _key(KeyType.RIGHT, alt=True)),
    (b"\x1b[1;3D", _key(KeyType.LEFT, alt=True)),
    # Modified Home/End
    (b"\x1b[1;2H", _key(KeyType.SHIFT_HOME)),
    (b"\x1b[1;2F", _key(KeyType.SHIFT_END)),
    (b"\x1b[1;5H", _key(KeyType.CTRL_HOME)),
    (b"\x1b[1;5F", _key(KeyType.CTRL_END)),
    (b"\x1b[1;6H", _key(KeyType.CTRL_SHIFT_HOME)),
    (b"\x1b[1;6F", _key(KeyType.CTRL_SHIFT_END)),
    # Modified PgUp/PgDn, Insert/Delete
    (b"\x1b[5;5~", _key(KeyType.CTRL_PGUP)),
    (b"\x1b[6;5~", _key(KeyType.CTRL_PGDOWN)),
    (b"\x1b[5;3~", _key(KeyType.PGUP, alt=True)),
    (b"\x1b[6;3~", _key(KeyType.PGDOWN, alt=True)),
    (b"\x1b[2;3~", _key(KeyType.INSERT, alt=True)),
    (b"\x1b[3;3~", _key(KeyType.DELETE, alt=True)),
    # Linux console function keys
    (b"\x1b[[A", _key(KeyType.F1)),
    (b"\x1b[[B", _key(KeyType.F2)),
    (b"\x1b[[C", _key(KeyType.F3)),
    (b"\x1b[[D", _key(KeyType.F4)),
    (b"\x1b[[E", _key(KeyType.F5)),
)


def decode_rune(buffer: bytes, start: int = 0) -> tuple[str | None, int]:
    """Decode one UTF-8 scalar from buffer[start:].

    Returns:
        (rune, length) on success, (None, 0) if the bytes are an incomplete
        but still valid encoding, (None, -1) if they can never decode.
    """
    if start >= len(buffer):
        return None, 0
    lead = buffer[start]
    if lead < 0x80:
        return chr(lead), 1
    if 0xC2 <= lead <= 0xDF:
        size = 2
    elif 0xE0 <= lead <= 0xEF:
        size = 3
    elif 0xF0 <= lead <= 0xF4:
        size = 4
    else:
        return None, -1

    available = buffer[start + 1 : start + size]
    for byte in available:
        if byte & 0xC0 != 0x80:
            return None, -1
    if len(available) < size - 1:
        return None, 0
    try:
        rune = bytes(buffer[start : start + size]).decode("utf-8")
    except UnicodeDecodeError:
        # Overlongs and surrogates pass the lead/continuation check
        return None, -1
    return rune, size


def _rune_key(rune: str, alt: bool = False) -> Key:
    code = ord(rune)
    if code in CONTROL_KEYS:
        return Key(type=CONTROL_KEYS[code], alt=alt)
    if rune == " ":
        return Key(type=KeyType.SPACE, alt=alt)
    return Key(type=KeyType.RUNES, runes=rune, alt=alt)


def match_sequence(buffer: bytes, end_of_stream: bool) -> tuple[Key, int] | bool | None:
    """Match the fixed sequence table.

    Returns (key, length) on a match, True if the buffer is a strict prefix of
    an entry and more data may arrive, None otherwise.
    """
    for seq, key in SEQUENCES:
        if buffer.startswith(seq):
            return key, len(seq)
    if not end_of_stream:
        for seq, _ in SEQUENCES:
            if seq.startswith(buffer):
                return True
    return None


def parse_key(buffer: bytes, end_of_stream: bool) -> tuple[Key, int] | bool | None:
    """Decode a single key from the start of buffer.

    Covers the alt-prefixed scalar, single control byte and generic rune
    rules. The fixed sequence table is matched separately by the decoder.

    Returns (key, length), True when more data is needed, or None when the
    leading bytes can never form a key.
    """
    if not buffer:
        return None if end_of_stream else True

    if buffer[0] == 0x1B and len(buffer) > 1:
        rune, size = decode_rune(buffer, 1)
        if rune is not None:
            return _rune_key(rune, alt=True), 1 + size
        if size == 0 and not end_of_stream:
            return True

    mapped = CONTROL_KEYS.get(buffer[0])
    if mapped is not None:
        return Key(type=mapped), 1

    rune, size = decode_rune(buffer)
    if rune is None:
        if size == 0 and not end_of_stream:
            return True
        return None
    return _rune_key(rune), size
