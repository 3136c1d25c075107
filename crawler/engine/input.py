"""Input source contract: action tokens and the interactive prompt controller."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Protocol, Sequence

from crawler.core.enums import ActionToken, StatChoice
from crawler.core.models import Entity, Vector2

logger = logging.getLogger(__name__)


class Controller(Protocol):
    """Blocking prompts raised while a single player action resolves.

    Every method returns ``None`` for a cancel signal.
    """

    def pick_tile(self) -> Vector2 | None: ...

    def choose_item(self, prompt: str, inventory: Sequence[Entity]) -> int | None: ...

    def choose_stat(self, options: Sequence[StatChoice]) -> StatChoice | None: ...


class ScriptedController:
    """Controller fed from pre-recorded answers.

    Used by tests and the HTTP adapter. An exhausted tile or item queue
    cancels. The level-up prompt has no cancel path, so a scripted
    ``None`` means "ask again" and an exhausted stat queue is an error.
    """

    __slots__ = ("_tiles", "_items", "_stats", "prompts")

    def __init__(
        self,
        tiles: Iterable[Vector2 | None] = (),
        items: Iterable[int | None] = (),
        stats: Iterable[StatChoice | None] = (),
    ) -> None:
        self._tiles: deque[Vector2 | None] = deque(tiles)
        self._items: deque[int | None] = deque(items)
        self._stats: deque[StatChoice | None] = deque(stats)
        self.prompts: list[str] = []

    def pick_tile(self) -> Vector2 | None:
        self.prompts.append("tile")
        return self._tiles.popleft() if self._tiles else None

    def choose_item(self, prompt: str, inventory: Sequence[Entity]) -> int | None:
        self.prompts.append(prompt)
        return self._items.popleft() if self._items else None

    def choose_stat(self, options: Sequence[StatChoice]) -> StatChoice | None:
        self.prompts.append("level up")
        if not self._stats:
            raise LookupError("level-up prompt reached with no scripted answer")
        return self._stats.popleft()


_TEXT_TOKENS: dict[str, ActionToken] = {
    "k": ActionToken.MOVE_N, "up": ActionToken.MOVE_N, "n": ActionToken.MOVE_N,
    "j": ActionToken.MOVE_S, "down": ActionToken.MOVE_S, "s": ActionToken.MOVE_S,
    "h": ActionToken.MOVE_W, "left": ActionToken.MOVE_W, "w": ActionToken.MOVE_W,
    "l": ActionToken.MOVE_E, "right": ActionToken.MOVE_E, "e": ActionToken.MOVE_E,
    "y": ActionToken.MOVE_NW, "nw": ActionToken.MOVE_NW,
    "u": ActionToken.MOVE_NE, "ne": ActionToken.MOVE_NE,
    "b": ActionToken.MOVE_SW, "sw": ActionToken.MOVE_SW,
    "m": ActionToken.MOVE_SE, "se": ActionToken.MOVE_SE,
    ".": ActionToken.WAIT, "wait": ActionToken.WAIT,
    "g": ActionToken.PICKUP, "pickup": ActionToken.PICKUP,
    "i": ActionToken.INVENTORY, "use": ActionToken.INVENTORY,
    "d": ActionToken.DROP, "drop": ActionToken.DROP,
    ">": ActionToken.DESCEND, "descend": ActionToken.DESCEND,
    "c": ActionToken.CHARACTER, "character": ActionToken.CHARACTER,
    "f": ActionToken.FULLSCREEN, "fullscreen": ActionToken.FULLSCREEN,
    "q": ActionToken.QUIT, "quit": ActionToken.QUIT, "escape": ActionToken.QUIT,
}


def parse_token(text: str) -> ActionToken | None:
    """Map a text command (or a token name such as ``MOVE_N``) to a token.

    Unrecognized input yields ``None``; the engine treats that as a tick
    that did not take a turn.
    """
    key = text.strip()
    if key.upper() in ActionToken.__members__:
        return ActionToken[key.upper()]
    token = _TEXT_TOKENS.get(key.lower())
    if token is None:
        logger.debug("Unrecognized input %r", text)
    return token
