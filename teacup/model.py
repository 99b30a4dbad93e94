"""Elm-style model contract and command types."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar, Union

# A message is any object; the runtime reserves the classes in teacup.messages.
Msg = Any

# What an effect yields: nothing, one message, or several in order.
Effect = Union[Msg, "list[Msg]", None]

EffectFn = Callable[[], Union[Effect, Awaitable[Effect]]]

# A command is a deferred effect, or None for no-op.
Cmd = Union[EffectFn, None]

M = TypeVar("M", bound="Model")


class Model(Protocol):
    """Application state plus its init/update/view contract.

    Models are immutable by convention: update() returns a new model (for
    dataclasses, dataclasses.replace) instead of mutating self.
    """

    def init(self) -> Cmd: ...

    def update(self: M, msg: Msg) -> tuple[M, Cmd]: ...

    def view(self) -> str: ...
