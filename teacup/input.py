"""Streaming decoder for terminal input bytes.

Input arrives in arbitrary chunks: an escape sequence may be split across
two reads, and a single read may hold several events back to back. The
decoder keeps the unconsumed suffix between calls and only reports an event
once its bytes are complete.

Example:
    decoder = InputDecoder()
    decoder.feed(b"\\x1b[")     # -> []   (could still become an arrow key)
    decoder.feed(b"Aq")        # -> [KeyMsg(up), KeyMsg(q)]
    decoder.feed(b"\\x1b")      # -> []   (lone ESC is ambiguous)
    decoder.flush()            # -> [KeyMsg(esc)]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .keys import Key, KeyMsg, KeyType, match_sequence, parse_key
from .messages import BlurMsg, FocusMsg
from .mouse import parse_mouse

logger = logging.getLogger(__name__)

BRACKETED_PASTE_START = b"\x1b[200~"
BRACKETED_PASTE_END = b"\x1b[201~"

FOCUS_IN = b"\x1b[I"
FOCUS_OUT = b"\x1b[O"


class DecodeStatus(Enum):
    """Outcomes of decode_one() that carry no event."""

    NEED_MORE = "need_more"
    NO_MATCH = "no_match"


NEED_MORE = DecodeStatus.NEED_MORE
NO_MATCH = DecodeStatus.NO_MATCH


@dataclass(frozen=True)
class Decoded:
    """One decoded event and the number of bytes it consumed.

    msg is None when the bytes were consumed without producing an event
    (an unrecognized CSI sequence or an empty paste).
    """

    msg: Any
    length: int


def _detect_focus(buffer: bytes) -> Decoded | None:
    if buffer.startswith(FOCUS_IN):
        return Decoded(FocusMsg(), len(FOCUS_IN))
    if buffer.startswith(FOCUS_OUT):
        return Decoded(BlurMsg(), len(FOCUS_OUT))
    return None


def _detect_paste(buffer: bytes, end_of_stream: bool) -> Decoded | DecodeStatus | None:
    if not buffer.startswith(BRACKETED_PASTE_START):
        if not end_of_stream and BRACKETED_PASTE_START.startswith(buffer):
            return NEED_MORE
        return None
    end = buffer.find(BRACKETED_PASTE_END, len(BRACKETED_PASTE_START))
    if end == -1:
        # Never emit a partial paste, even at end of stream
        return NEED_MORE
    length = end + len(BRACKETED_PASTE_END)
    content = bytes(buffer[len(BRACKETED_PASTE_START) : end]).decode("utf-8", errors="replace")
    if not content:
        return Decoded(None, length)
    key = Key(type=KeyType.RUNES, runes=content, paste=True)
    return Decoded(KeyMsg(key), length)


def _csi_length(buffer: bytes) -> int | None:
    """Length of a complete CSI sequence at the start of buffer.

    Returns 0 if the sequence is well-formed so far but unfinished, None if
    the buffer does not hold a CSI sequence.
    """
    if not buffer.startswith(b"\x1b["):
        return None
    i = 2
    while i < len(buffer) and 0x30 <= buffer[i] <= 0x3F:  # parameter bytes
        i += 1
    while i < len(buffer) and 0x20 <= buffer[i] <= 0x2F:  # intermediate bytes
        i += 1
    if i == len(buffer):
        return 0
    if 0x40 <= buffer[i] <= 0x7E:  # final byte
        return i + 1
    return None


def decode_one(buffer: bytes, end_of_stream: bool = False) -> Decoded | DecodeStatus:
    """Decode a single event from the start of buffer.

    Args:
        buffer: Pending input bytes
        end_of_stream: True if no more bytes will follow this buffer, so
            partial sequences must be resolved with what is available

    Returns:
        Decoded on success, NEED_MORE if the leading bytes are a viable
        prefix of a longer event, NO_MATCH if they can never decode.
    """
    if not buffer:
        return NO_MATCH if end_of_stream else NEED_MORE

    mouse = parse_mouse(buffer, end_of_stream)
    if mouse is True:
        return NEED_MORE
    if mouse:
        msg, length = mouse
        return Decoded(msg, length)

    focus = _detect_focus(buffer)
    if focus is not None:
        return focus

    paste = _detect_paste(buffer, end_of_stream)
    if paste is not None:
        return paste

    seq = match_sequence(buffer, end_of_stream)
    if seq is True:
        return NEED_MORE
    if seq:
        key, length = seq
        return Decoded(KeyMsg(key), length)

    csi = _csi_length(buffer)
    if csi == 0 and not end_of_stream:
        return NEED_MORE
    if csi:
        logger.debug("Dropping unknown escape sequence: %r", bytes(buffer[:csi]))
        return Decoded(None, csi)

    key = parse_key(buffer, end_of_stream)
    if key is True:
        return NEED_MORE
    if key:
        parsed, length = key
        return Decoded(KeyMsg(parsed), length)
    return NO_MATCH


class InputDecoder:
    """Accumulates input chunks and decodes them into messages.

    The buffer is owned by this instance; feed() and flush() are the only
    writers. Bytes that can never decode are dropped one at a time so the
    stream resynchronizes on the next valid event.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """Bytes waiting for the rest of their sequence."""
        return bytes(self._buffer)

    def feed(self, data: bytes) -> list[Any]:
        """Append a chunk and decode every complete event in the buffer."""
        self._buffer.extend(data)
        return self._consume(end_of_stream=False)

    def flush(self) -> list[Any]:
        """Decode what is buffered as if no more input will follow.

        Used after an input lull to resolve a lone ESC (or ESC-prefixed
        partial) into the keys it stands for.
        """
        return self._consume(end_of_stream=True)

    def _consume(self, end_of_stream: bool) -> list[Any]:
        messages: list[Any] = []
        offset = 0
        view = bytes(self._buffer)

        while offset < len(view):
            result = decode_one(view[offset:], end_of_stream)
            if result is NEED_MORE:
                break
            if result is NO_MATCH:
                logger.debug("Dropping undecodable input byte: %r", view[offset : offset + 1])
                offset += 1
                continue
            offset += result.length
            if result.msg is not None:
                messages.append(result.msg)

        del self._buffer[:offset]
        return messages
