"""Dungeon generator: rooms, L-shaped tunnels, start and stairs placement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from crawler.core import colors
from crawler.core.enums import Domain
from crawler.core.errors import EmptyDungeonError
from crawler.core.geometry import Rect
from crawler.core.grid import Grid
from crawler.core.models import Entity, Vector2
from crawler.systems.spawn_tables import RoomPopulator

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeneratedLevel:
    """Everything a fresh level needs before the player is placed."""

    grid: Grid
    placements: list[Entity]
    start: Vector2
    stairs: Vector2
    rooms: list[Rect] = field(default_factory=list)


def make_stairs(pos: Vector2) -> Entity:
    return Entity(
        pos=pos, glyph=">", color=colors.WHITE, name="stairs",
        blocks=False, alive=False, always_visible=True,
    )


def carve_room(room: Rect, grid: Grid) -> None:
    """Floor the interior; the border stays wall."""
    for pos in room.interior():
        grid.carve(pos.x, pos.y)


def carve_h_tunnel(x1: int, x2: int, y: int, grid: Grid) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        grid.carve(x, y)


def carve_v_tunnel(y1: int, y2: int, x: int, grid: Grid) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        grid.carve(x, y)


def generate(depth: int, config: GameConfig, rng: DeterministicRNG) -> GeneratedLevel:
    """Carve a new level for *depth*.

    Raises EmptyDungeonError if no candidate room was accepted, so callers
    never receive an unset start or stairs position.
    """
    grid = Grid(config.map_width, config.map_height)
    populator = RoomPopulator(config, rng)
    rooms: list[Rect] = []
    placements: list[Entity] = []

    for _ in range(config.max_rooms):
        w = rng.next_int(Domain.MAP_GEN, config.room_min_size, config.room_max_size)
        h = rng.next_int(Domain.MAP_GEN, config.room_min_size, config.room_max_size)
        x = rng.next_int(Domain.MAP_GEN, 0, config.map_width - w - 1)
        y = rng.next_int(Domain.MAP_GEN, 0, config.map_height - h - 1)
        new_room = Rect.from_size(x, y, w, h)

        if any(new_room.intersects(other) for other in rooms):
            continue

        carve_room(new_room, grid)
        center = new_room.center
        reserved = (center,) if not rooms else ()
        populator.populate(new_room, grid, placements, depth, reserved=reserved)

        if rooms:
            prev = rooms[-1].center
            if rng.next_bool(Domain.MAP_GEN):
                carve_h_tunnel(prev.x, center.x, prev.y, grid)
                carve_v_tunnel(prev.y, center.y, center.x, grid)
            else:
                carve_v_tunnel(prev.y, center.y, prev.x, grid)
                carve_h_tunnel(prev.x, center.x, center.y, grid)

        rooms.append(new_room)

    if not rooms:
        raise EmptyDungeonError(depth, config.max_rooms)

    start = rooms[0].center
    stairs = rooms[-1].center
    placements.append(make_stairs(stairs))

    logger.info(
        "Generated depth %d: %d rooms, %d placements, start=%s stairs=%s",
        depth, len(rooms), len(placements), start, stairs,
    )
    return GeneratedLevel(grid=grid, placements=placements, start=start, stairs=stairs, rooms=rooms)
