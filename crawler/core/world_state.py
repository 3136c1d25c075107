"""Mutable authoritative world state, the unit of persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from crawler.core.errors import AliasingError
from crawler.core.grid import Grid
from crawler.core.models import Entity, Vector2
from crawler.utils.message_log import MessageLog

if TYPE_CHECKING:
    from crawler.systems.rng import DeterministicRNG

PLAYER = 0  # the player is always the first entity


class World:
    """The single source of truth for one game.

    ``entities[0]`` is the player for the whole lifetime of a level; every
    index-based lookup in the engine relies on that, so insertion and
    removal helpers never touch position 0.
    """

    __slots__ = ("grid", "entities", "inventory", "log", "depth", "rng")

    def __init__(
        self,
        grid: Grid,
        entities: list[Entity],
        rng: DeterministicRNG,
        inventory: list[Entity] | None = None,
        log: MessageLog | None = None,
        depth: int = 1,
    ) -> None:
        if not entities:
            raise ValueError("World needs the player at entity index 0")
        self.grid: Grid = grid
        self.entities: list[Entity] = entities
        self.inventory: list[Entity] = inventory if inventory is not None else []
        self.log: MessageLog = log if log is not None else MessageLog()
        self.depth: int = depth
        self.rng: DeterministicRNG = rng

    @property
    def player(self) -> Entity:
        return self.entities[PLAYER]

    # -- entity list --

    def add_entity(self, entity: Entity) -> int:
        """Append *entity* and return its index (never 0)."""
        self.entities.append(entity)
        return len(self.entities) - 1

    def remove_entity(self, index: int) -> Entity:
        if index == PLAYER:
            raise AliasingError("the player cannot be removed from the entity list")
        return self.entities.pop(index)

    def pair_mut(self, first: int, second: int) -> tuple[Entity, Entity]:
        """Return two distinct entities for simultaneous mutation.

        Asking for the same index twice is a programming error.
        """
        if first == second:
            raise AliasingError(f"entity {first} requested twice")
        return self.entities[first], self.entities[second]

    # -- spatial queries --

    def is_blocked(self, x: int, y: int) -> bool:
        """A wall, the map edge, or a blocking entity."""
        if self.grid.is_blocked(x, y):
            return True
        return any(e.blocks and e.pos.x == x and e.pos.y == y for e in self.entities)

    def living_combatant_at(self, x: int, y: int) -> int | None:
        """Index of the first living entity with a combatant at (x, y)."""
        for i, e in enumerate(self.entities):
            if e.pos.x == x and e.pos.y == y and e.alive and e.combatant is not None:
                return i
        return None

    def item_at(self, pos: Vector2) -> int | None:
        for i, e in enumerate(self.entities):
            if e.pos == pos and e.item is not None:
                return i
        return None

    def stairs_index(self) -> int | None:
        for i, e in enumerate(self.entities):
            if e.name == "stairs":
                return i
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, World):
            return NotImplemented
        return (
            self.grid == other.grid
            and self.entities == other.entities
            and self.inventory == other.inventory
            and self.log == other.log
            and self.depth == other.depth
            and self.rng == other.rng
        )

    def __repr__(self) -> str:
        return (
            f"World(depth={self.depth}, entities={len(self.entities)}, "
            f"inventory={len(self.inventory)}, grid={self.grid!r})"
        )
