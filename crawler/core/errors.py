"""Exception hierarchy for the simulation core."""

from __future__ import annotations


class CrawlerError(Exception):
    """Base class for every error raised by the core."""


class EmptyDungeonError(CrawlerError):
    """The generator accepted zero rooms, so there is nowhere to start."""

    def __init__(self, depth: int, attempts: int) -> None:
        super().__init__(f"No room accepted at depth {depth} after {attempts} candidates")
        self.depth = depth
        self.attempts = attempts


class NoSavedGameError(CrawlerError):
    """A saved game is missing or cannot be decoded."""


class AliasingError(CrawlerError):
    """Two mutable views of the same entity were requested."""


class ActionRejectedError(CrawlerError):
    """The request cannot be applied in the current game state."""
