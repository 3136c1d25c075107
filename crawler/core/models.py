"""Core data models: Vector2, components, Entity."""

from __future__ import annotations

import math
from dataclasses import dataclass

from crawler.core.colors import Color, WHITE
from crawler.core.enums import DeathKind, ItemKind, Slot


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def distance(self, other: Vector2) -> float:
        """Euclidean distance."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets for the eight movement tokens
DIRECTION_OFFSETS: dict[str, Vector2] = {
    "N": Vector2(0, -1),
    "S": Vector2(0, 1),
    "W": Vector2(-1, 0),
    "E": Vector2(1, 0),
    "NW": Vector2(-1, -1),
    "NE": Vector2(1, -1),
    "SW": Vector2(-1, 1),
    "SE": Vector2(1, 1),
}


@dataclass(slots=True)
class Combatant:
    """Mutable combat statistics."""

    max_hp: int
    hp: int
    defense: int
    base_power: int
    xp: int = 0
    on_death: DeathKind = DeathKind.MONSTER


@dataclass(frozen=True, slots=True)
class BasicAi:
    """Greedy approach-and-attack behaviour."""


@dataclass(frozen=True, slots=True)
class ConfusedAi:
    """Random walk for a number of turns, then restore ``previous_ai``."""

    previous_ai: AiState
    turns_remaining: int


AiState = BasicAi | ConfusedAi


@dataclass(slots=True)
class Equipment:
    """Slot-bound stat bonuses. Only the player's equipped items count."""

    slot: Slot
    equipped: bool = False
    power_bonus: int = 0
    defense_bonus: int = 0
    max_hp_bonus: int = 0


@dataclass(slots=True)
class Entity:
    """Any placed thing: creature, item, or stairs."""

    pos: Vector2
    glyph: str
    color: Color
    name: str
    blocks: bool = False
    alive: bool = False
    level: int = 1
    always_visible: bool = False
    combatant: Combatant | None = None
    ai: AiState | None = None
    item: ItemKind | None = None
    equipment: Equipment | None = None

    def distance_to(self, other: Entity) -> float:
        return self.pos.distance(other.pos)

    def distance(self, x: int, y: int) -> float:
        return self.pos.distance(Vector2(x, y))


def make_player(pos: Vector2, hp: int, defense: int, power: int) -> Entity:
    """The player entity; always stored at index 0 of the entity list."""
    return Entity(
        pos=pos, glyph="@", color=WHITE, name="player",
        blocks=True, alive=True,
        combatant=Combatant(
            max_hp=hp, hp=hp, defense=defense, base_power=power,
            xp=0, on_death=DeathKind.PLAYER,
        ),
    )
