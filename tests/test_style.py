"""Tests for the Rich bridge and width helpers in teacup/style.py."""

from __future__ import annotations

from rich.text import Text

from teacup.style import fit_lines, render, strip_ansi, truncate_to_width, visual_len


class TestRender:
    """Tests for render()."""

    def test_plain_text(self) -> None:
        assert render("hello", color_system=None) == "hello"

    def test_markup_is_styled(self) -> None:
        out = render("[bold]hi[/bold]")
        assert "\x1b[" in out
        assert strip_ansi(out) == "hi"

    def test_no_trailing_newline(self) -> None:
        assert not render(Text("x")).endswith("\n")


class TestWidth:
    """Tests for visual_len() and strip_ansi()."""

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[1;31mred\x1b[0m") == "red"

    def test_ascii(self) -> None:
        assert visual_len("abc") == 3

    def test_wide_characters(self) -> None:
        assert visual_len("日本") == 4

    def test_ignores_escape_codes(self) -> None:
        assert visual_len("\x1b[32mok\x1b[0m") == 2

    def test_combining_mark(self) -> None:
        assert visual_len("é") == 1


class TestTruncate:
    """Tests for truncate_to_width() and fit_lines()."""

    def test_fits(self) -> None:
        assert truncate_to_width("short", 10) == "short"

    def test_truncates_with_ellipsis(self) -> None:
        assert truncate_to_width("abcdefgh", 5) == "abcd…"

    def test_crop_without_ellipsis(self) -> None:
        assert truncate_to_width("abcdefgh", 3, ellipsis=False) == "abc"

    def test_keeps_escape_codes(self) -> None:
        out = truncate_to_width("\x1b[31mabcdefgh\x1b[0m", 4)
        assert out.startswith("\x1b[31m")
        assert strip_ansi(out) == "abc…"

    def test_wide_character_not_split(self) -> None:
        out = truncate_to_width("日本語", 4)
        assert visual_len(out) == 4
        assert strip_ansi(out).startswith("日")
        assert "本" not in out

    def test_zero_width(self) -> None:
        assert truncate_to_width("abc", 0) == ""

    def test_fit_lines(self) -> None:
        out = fit_lines("ok\nthis line is long", 6)
        first, second = out.split("\n")
        assert first == "ok"
        assert visual_len(second) == 6

    def test_styled_line_that_fits_is_untouched(self) -> None:
        line = "\x1b[1mbold\x1b[0m"
        assert truncate_to_width(line, 10) is line

    def test_control_characters_have_no_width(self) -> None:
        assert visual_len("a\x07b") == 2
