"""Population and loot tables: depth-scaled monsters and items per room."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from crawler.core import colors
from crawler.core.enums import DeathKind, Domain, ItemKind, Slot
from crawler.core.models import BasicAi, Combatant, Entity, Equipment, Vector2

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.core.geometry import Rect
    from crawler.core.grid import Grid
    from crawler.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


# Monster stat blocks: kind -> (glyph, color, hp, defense, power, xp)
MONSTER_STATS: dict[str, tuple[str, colors.Color, int, int, int, int]] = {
    "orc":   ("o", colors.DESATURATED_GREEN, 20, 0, 4, 35),
    "troll": ("T", colors.DARKER_GREEN,      30, 2, 8, 100),
}

# Item blueprints: kind -> (glyph, color, display name, ItemKind, equipment or None)
# Equipment tuples are (slot, power_bonus, defense_bonus, max_hp_bonus).
ITEM_BLUEPRINTS: dict[str, tuple[str, colors.Color, str, ItemKind, tuple | None]] = {
    "heal":      ("!", colors.VIOLET,        "healing potion",           ItemKind.HEAL,      None),
    "lightning": ("#", colors.LIGHT_YELLOW,  "scroll of lightning bolt", ItemKind.LIGHTNING, None),
    "fireball":  ("#", colors.LIGHT_RED,     "scroll of fireball",       ItemKind.FIREBALL,  None),
    "confuse":   ("#", colors.LIGHT_VIOLET,  "scroll of confusion",      ItemKind.CONFUSE,   None),
    "sword":     ("/", colors.SKY,           "sword",                    ItemKind.EQUIPMENT, (Slot.RIGHT_HAND, 3, 0, 0)),
    "shield":    ("[", colors.DARKER_ORANGE, "shield",                   ItemKind.EQUIPMENT, (Slot.LEFT_HAND, 0, 1, 0)),
    "helmet":    ("^", colors.LIGHT_GREY,    "helmet",                   ItemKind.EQUIPMENT, (Slot.HEAD, 0, 0, 10)),
    "dagger":    ("-", colors.SKY,           "dagger",                   ItemKind.EQUIPMENT, (Slot.RIGHT_HAND, 2, 0, 0)),
}

# Weighted tables. Monster weights are (weight, min_depth) step tables;
# item weights do not depend on depth. The dagger is starting gear only.
MONSTER_WEIGHTS: dict[str, tuple[tuple[int, int], ...]] = {
    "orc":   ((80, 1),),
    "troll": ((15, 3), (30, 5), (60, 7)),
}
ITEM_WEIGHTS: dict[str, int] = {
    "heal": 35,
    "lightning": 25,
    "fireball": 25,
    "confuse": 25,
    "sword": 5,
    "shield": 15,
    "helmet": 10,
}


def from_dungeon_level(table: Sequence[tuple[int, int]], depth: int) -> int:
    """Value of the last ``(value, min_depth)`` step reached at *depth*, else 0."""
    for value, min_depth in reversed(table):
        if depth >= min_depth:
            return value
    return 0


def make_monster(kind: str, pos: Vector2) -> Entity:
    """Create a fully initialized monster of *kind* at *pos*."""
    glyph, color, hp, defense, power, xp = MONSTER_STATS[kind]
    return Entity(
        pos=pos, glyph=glyph, color=color, name=kind,
        blocks=True, alive=True,
        combatant=Combatant(
            max_hp=hp, hp=hp, defense=defense, base_power=power,
            xp=xp, on_death=DeathKind.MONSTER,
        ),
        ai=BasicAi(),
    )


def make_item(kind: str, pos: Vector2) -> Entity:
    """Create a pickable item entity of *kind* at *pos*."""
    glyph, color, name, item_kind, gear = ITEM_BLUEPRINTS[kind]
    equipment = None
    if gear is not None:
        slot, power_bonus, defense_bonus, max_hp_bonus = gear
        equipment = Equipment(
            slot=slot, equipped=False, power_bonus=power_bonus,
            defense_bonus=defense_bonus, max_hp_bonus=max_hp_bonus,
        )
    return Entity(
        pos=pos, glyph=glyph, color=color, name=name,
        blocks=False, alive=False,
        item=item_kind, equipment=equipment,
    )


class RoomPopulator:
    """Places depth-scaled monsters and items into freshly carved rooms."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def populate(
        self,
        room: Rect,
        grid: Grid,
        placements: list[Entity],
        depth: int,
        reserved: tuple[Vector2, ...] = (),
    ) -> None:
        """Append monsters and items for *room* to *placements*.

        A draw that lands on a wall, an occupied cell or a *reserved* cell
        (the player start) is skipped silently.
        """
        max_monsters = from_dungeon_level(self._config.max_monsters_by_depth, depth)
        num_monsters = self._rng.next_int(Domain.SPAWN, 0, max_monsters)
        for _ in range(num_monsters):
            pos = self._random_interior(room)
            if pos in reserved or self._occupied(pos, grid, placements):
                continue
            placements.append(make_monster(self._roll_monster(depth), pos))

        max_items = from_dungeon_level(self._config.max_items_by_depth, depth)
        num_items = self._rng.next_int(Domain.LOOT, 0, max_items)
        for _ in range(num_items):
            pos = self._random_interior(room)
            if pos in reserved or self._occupied(pos, grid, placements):
                continue
            placements.append(make_item(self._roll_item(), pos))

        logger.debug(
            "Depth %d room %s: drew %d monsters (max %d), %d items (max %d)",
            depth, room.center, num_monsters, max_monsters, num_items, max_items,
        )

    def _random_interior(self, room: Rect) -> Vector2:
        x = self._rng.next_int(Domain.SPAWN, room.x1 + 1, room.x2 - 1)
        y = self._rng.next_int(Domain.SPAWN, room.y1 + 1, room.y2 - 1)
        return Vector2(x, y)

    @staticmethod
    def _occupied(pos: Vector2, grid: Grid, placements: list[Entity]) -> bool:
        if grid.is_blocked(pos.x, pos.y):
            return True
        return any(e.pos == pos for e in placements)

    def _roll_monster(self, depth: int) -> str:
        # The table is rebuilt on every call; weights depend on depth.
        kinds = list(MONSTER_WEIGHTS)
        weights = [from_dungeon_level(MONSTER_WEIGHTS[k], depth) for k in kinds]
        return kinds[self._rng.weighted_index(Domain.SPAWN, weights)]

    def _roll_item(self) -> str:
        kinds = list(ITEM_WEIGHTS)
        weights = [ITEM_WEIGHTS[k] for k in kinds]
        return kinds[self._rng.weighted_index(Domain.LOOT, weights)]
