"""Tests for the streaming input decoder.

Covers:
- decode_one() outcomes: Decoded, NEED_MORE, NO_MATCH
- Chunk boundaries never change the decoded events
- Bracketed paste is delivered whole or not at all
- Resynchronization after undecodable bytes
"""

from __future__ import annotations

import logging

import pytest

from teacup.input import NEED_MORE, NO_MATCH, Decoded, InputDecoder, decode_one
from teacup.keys import Key, KeyMsg, KeyType
from teacup.messages import BlurMsg, FocusMsg
from teacup.mouse import MouseAction, MouseButton, MouseMsg

STREAM = (
    b"a"
    + b"\x1b[A"
    + b"\x1b[<0;10;5M"
    + b"\x1b[200~p a\tste\x1b[201~"
    + b"\x1bOP"
    + b"\x1b[I"
    + "é".encode()
    + b"\x1b[1;5C"
    + b" "
    + b"\x1bx"
    + b"\x1b[O"
    + "日本".encode()
    + b"\r"
)


def keys(*msgs: object) -> list[str]:
    return [str(m) for m in msgs]


class TestDecodeOne:
    """Tests for decode_one()."""

    def test_empty_buffer(self) -> None:
        assert decode_one(b"") is NEED_MORE
        assert decode_one(b"", end_of_stream=True) is NO_MATCH

    def test_single_rune(self) -> None:
        assert decode_one(b"q") == Decoded(KeyMsg(Key(KeyType.RUNES, runes="q")), 1)

    def test_arrow(self) -> None:
        assert decode_one(b"\x1b[B") == Decoded(KeyMsg(Key(KeyType.DOWN)), 3)

    def test_focus_and_blur(self) -> None:
        assert decode_one(b"\x1b[I") == Decoded(FocusMsg(), 3)
        assert decode_one(b"\x1b[O") == Decoded(BlurMsg(), 3)

    def test_focus_followed_by_more_input(self) -> None:
        assert decode_one(b"\x1b[Iabc") == Decoded(FocusMsg(), 3)

    def test_lone_escape_is_ambiguous(self) -> None:
        assert decode_one(b"\x1b") is NEED_MORE

    def test_lone_escape_at_end_of_stream(self) -> None:
        assert decode_one(b"\x1b", end_of_stream=True) == Decoded(KeyMsg(Key(KeyType.ESC)), 1)

    def test_unknown_csi_is_consumed_silently(self) -> None:
        assert decode_one(b"\x1b[99xq") == Decoded(None, 5)

    def test_unfinished_csi_needs_more(self) -> None:
        assert decode_one(b"\x1b[12;") is NEED_MORE

    def test_invalid_byte(self) -> None:
        assert decode_one(b"\xff") is NO_MATCH

    def test_mouse_report(self) -> None:
        result = decode_one(b"\x1b[<2;1;1M")
        assert isinstance(result.msg, MouseMsg)
        assert result.msg.event.button is MouseButton.RIGHT

    def test_paste(self) -> None:
        data = b"\x1b[200~hi there\x1b[201~"
        result = decode_one(data)
        assert result == Decoded(KeyMsg(Key(KeyType.RUNES, runes="hi there", paste=True)), len(data))

    def test_paste_keeps_control_characters(self) -> None:
        result = decode_one(b"\x1b[200~a\r\nb\x1b[201~")
        assert result.msg.key.runes == "a\r\nb"

    def test_paste_start_prefix_needs_more(self) -> None:
        assert decode_one(b"\x1b[200") is NEED_MORE

    def test_unterminated_paste_waits_even_at_end_of_stream(self) -> None:
        assert decode_one(b"\x1b[200~abc", end_of_stream=True) is NEED_MORE

    def test_empty_paste_consumed_without_event(self) -> None:
        data = b"\x1b[200~\x1b[201~"
        assert decode_one(data) == Decoded(None, len(data))


class TestInputDecoder:
    """Tests for InputDecoder buffering."""

    def test_several_events_in_one_chunk(self) -> None:
        decoder = InputDecoder()
        assert keys(*decoder.feed(b"ab\x1b[Cc")) == ["a", "b", "right", "c"]
        assert decoder.pending == b""

    def test_split_arrow(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed(b"\x1b[") == []
        assert decoder.pending == b"\x1b["
        assert keys(*decoder.feed(b"A")) == ["up"]

    def test_function_key_then_focus(self) -> None:
        decoder = InputDecoder()
        msgs = decoder.feed(b"\x1bOP\x1b[I")
        assert msgs == [KeyMsg(Key(KeyType.F1)), FocusMsg()]

    def test_lone_escape_resolved_by_flush(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed(b"\x1b") == []
        assert decoder.flush() == [KeyMsg(Key(KeyType.ESC))]
        assert decoder.pending == b""

    def test_flush_of_escape_bracket_is_alt_bracket(self) -> None:
        decoder = InputDecoder()
        decoder.feed(b"\x1b[")
        assert decoder.flush() == [KeyMsg(Key(KeyType.RUNES, runes="[", alt=True))]

    def test_flush_does_not_split_paste(self) -> None:
        decoder = InputDecoder()
        decoder.feed(b"\x1b[200~partial")
        assert decoder.flush() == []
        assert decoder.pending == b"\x1b[200~partial"

    def test_paste_with_split_end_marker(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed(b"\x1b[200~hel") == []
        assert decoder.feed(b"lo\x1b[20") == []
        msgs = decoder.feed(b"1~x")
        assert msgs == [
            KeyMsg(Key(KeyType.RUNES, runes="hello", paste=True)),
            KeyMsg(Key(KeyType.RUNES, runes="x")),
        ]

    def test_paste_containing_escape_sequences_is_literal(self) -> None:
        decoder = InputDecoder()
        msgs = decoder.feed(b"\x1b[200~\x1b[A\x1b[201~")
        assert msgs == [KeyMsg(Key(KeyType.RUNES, runes="\x1b[A", paste=True))]

    def test_resync_after_invalid_byte(self, caplog: pytest.LogCaptureFixture) -> None:
        decoder = InputDecoder()
        with caplog.at_level(logging.DEBUG, logger="teacup.input"):
            msgs = decoder.feed(b"\xff\xfea")
        assert keys(*msgs) == ["a"]
        assert "undecodable" in caplog.text

    def test_empty_paste_produces_no_key(self) -> None:
        decoder = InputDecoder()
        assert keys(*decoder.feed(b"x\x1b[200~\x1b[201~y")) == ["x", "y"]
        assert decoder.pending == b""

    def test_oversized_mouse_report_dropped(self) -> None:
        decoder = InputDecoder()
        report = b"\x1b[<" + b"1" * 5000 + b";1;1M"
        assert decoder.feed(report) == []
        assert decoder.pending == b""
        assert keys(*decoder.feed(b"q")) == ["q"]

    def test_oversized_mouse_report_split_across_reads(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed(b"\x1b[<" + b"1" * 3000) == []
        assert decoder.feed(b"1" * 3000 + b";1;1Mq") == [KeyMsg(Key(KeyType.RUNES, runes="q"))]

    def test_unknown_csi_dropped(self) -> None:
        decoder = InputDecoder()
        assert keys(*decoder.feed(b"\x1b[?62;c\x1b[99xq")) == ["q"]

    def test_split_utf8(self) -> None:
        decoder = InputDecoder()
        data = "🍵".encode()
        assert decoder.feed(data[:1]) == []
        assert decoder.feed(data[1:3]) == []
        assert keys(*decoder.feed(data[3:])) == ["🍵"]

    def test_split_x10_mouse(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed(b"\x1b[M") == []
        msgs = decoder.feed(bytes([32, 33, 34]))
        assert len(msgs) == 1
        assert msgs[0].event.action is MouseAction.PRESS
        assert (msgs[0].event.x, msgs[0].event.y) == (0, 1)


class TestChunkingInvariance:
    """The decoded events do not depend on how input is split."""

    @staticmethod
    def decode_in_chunks(data: bytes, size: int) -> list[object]:
        decoder = InputDecoder()
        msgs: list[object] = []
        for i in range(0, len(data), size):
            msgs.extend(decoder.feed(data[i : i + size]))
        msgs.extend(decoder.flush())
        return msgs

    def test_expected_events(self) -> None:
        msgs = self.decode_in_chunks(STREAM, len(STREAM))
        assert keys(*msgs) == [
            "a",
            "up",
            "left press @9,4",
            "[p a\tste]",
            "f1",
            str(FocusMsg()),
            "é",
            "ctrl+right",
            " ",
            "alt+x",
            str(BlurMsg()),
            "日",
            "本",
            "enter",
        ]

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 11])
    def test_same_events_for_any_chunk_size(self, size: int) -> None:
        whole = self.decode_in_chunks(STREAM, len(STREAM))
        assert self.decode_in_chunks(STREAM, size) == whole

    def test_split_at_every_offset(self) -> None:
        whole = self.decode_in_chunks(STREAM, len(STREAM))
        for cut in range(1, len(STREAM)):
            decoder = InputDecoder()
            msgs = decoder.feed(STREAM[:cut]) + decoder.feed(STREAM[cut:]) + decoder.flush()
            assert msgs == whole, cut
