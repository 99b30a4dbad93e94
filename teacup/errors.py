"""Exceptions raised by the teacup runtime."""

from __future__ import annotations


class TeacupError(Exception):
    """Base class for runtime errors."""


class ProgramKilled(TeacupError):
    """The program was stopped with Program.kill() instead of a quit message."""

    def __init__(self, message: str = "program was killed") -> None:
        super().__init__(message)


class ProgramAlreadyRunning(TeacupError):
    """Program.run() was called while the same program was still running."""
