"""Counter: the smallest interactive program.

up/k and down/j change the number, q or ctrl+c quits.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace

from teacup import Cmd, KeyMsg, KeyType, Program, create_platform, quit


@dataclass(frozen=True)
class Counter:
    count: int = 0

    def init(self) -> Cmd:
        return None

    def update(self, msg: object) -> tuple[Counter, Cmd]:
        if not isinstance(msg, KeyMsg):
            return self, None
        name = str(msg)
        if name in ("q", "ctrl+c"):
            return self, quit()
        if name in ("up", "k"):
            return replace(self, count=self.count + 1), None
        if name in ("down", "j") or msg.key.type is KeyType.BACKSPACE:
            return replace(self, count=self.count - 1), None
        return self, None

    def view(self) -> str:
        return f"Count: {self.count}\n\nup/down to change, q to quit"


async def main() -> None:
    result = await Program(Counter(), platform=create_platform()).run()
    print(f"Final count: {result.model.count}")


if __name__ == "__main__":
    asyncio.run(main())
