"""In-game message feed shown to the player and persisted with the world."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from crawler.core.colors import Color, WHITE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Message:
    """A single line of the message feed."""

    text: str
    color: Color = WHITE


class MessageLog:
    """Ordered, unbounded message feed. Writers append; readers take a tail."""

    __slots__ = ("_messages",)

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = list(messages) if messages else []

    def add(self, text: str, color: Color = WHITE) -> None:
        logger.debug("message: %s", text)
        self._messages.append(Message(text, color))

    def latest(self, count: int = 10) -> list[Message]:
        """Return the *count* most recent messages."""
        return self._messages[-count:]

    def texts(self) -> list[str]:
        return [m.text for m in self._messages]

    def __iter__(self):
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageLog):
            return NotImplemented
        return self._messages == other._messages

    def __repr__(self) -> str:
        return f"MessageLog({len(self._messages)} messages)"
