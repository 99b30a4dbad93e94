"""Tests for IdGenerator."""

from __future__ import annotations

from teacup.ids import IdGenerator


class TestIdGenerator:
    def test_starts_at_one(self) -> None:
        ids = IdGenerator()
        assert [ids.next_id(), ids.next_id(), ids.next_id()] == [1, 2, 3]

    def test_callable(self) -> None:
        ids = IdGenerator(start=10)
        assert (ids(), ids()) == (10, 11)

    def test_generators_are_independent(self) -> None:
        a, b = IdGenerator(), IdGenerator()
        a()
        a()
        assert b() == 1
