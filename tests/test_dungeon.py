"""Tests for dungeon generation and room population."""

from collections import deque

import pytest

from crawler.config import GameConfig
from crawler.core.enums import Domain
from crawler.core.errors import EmptyDungeonError
from crawler.core.models import Vector2
from crawler.systems.dungeon import generate
from crawler.systems.rng import DeterministicRNG
from crawler.systems.spawn_tables import MONSTER_WEIGHTS, from_dungeon_level


def _reachable(grid, start: Vector2) -> set[tuple[int, int]]:
    seen = {(start.x, start.y)}
    queue = deque([(start.x, start.y)])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if (nx, ny) not in seen and not grid.is_blocked(nx, ny):
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


@pytest.fixture(params=[(42, 1), (7, 1), (1234, 2), (99, 4), (2024, 6)], ids=lambda p: f"seed{p[0]}-depth{p[1]}")
def level(request):
    seed, depth = request.param
    return generate(depth, GameConfig(), DeterministicRNG(seed))


class TestLayout:

    def test_rooms_do_not_overlap(self, level):
        rooms = level.rooms
        for i, a in enumerate(rooms):
            for b in rooms[i + 1:]:
                assert not a.intersects(b)

    def test_start_and_stairs_are_room_centers(self, level):
        assert level.start == level.rooms[0].center
        assert level.stairs == level.rooms[-1].center
        assert not level.grid.is_blocked(level.start.x, level.start.y)

    def test_every_room_connected_to_start(self, level):
        reachable = _reachable(level.grid, level.start)
        for room in level.rooms:
            c = room.center
            assert (c.x, c.y) in reachable
        assert (level.stairs.x, level.stairs.y) in reachable

    def test_map_border_stays_wall(self, level):
        grid = level.grid
        for x in range(grid.width):
            assert grid.tile(x, 0).blocked
            assert grid.tile(x, grid.height - 1).blocked
        for y in range(grid.height):
            assert grid.tile(0, y).blocked
            assert grid.tile(grid.width - 1, y).blocked

    def test_same_seed_same_level(self):
        first = generate(2, GameConfig(), DeterministicRNG(42))
        again = generate(2, GameConfig(), DeterministicRNG(42))
        assert again.grid == first.grid
        assert again.placements == first.placements

    def test_zero_rooms_raises(self):
        with pytest.raises(EmptyDungeonError) as err:
            generate(3, GameConfig(max_rooms=0), DeterministicRNG(1))
        assert err.value.depth == 3


class TestPlacements:

    def test_stairs_placed_last(self, level):
        stairs = level.placements[-1]
        assert stairs.name == "stairs"
        assert stairs.pos == level.stairs
        assert stairs.always_visible and not stairs.blocks

    def test_nothing_spawns_on_start(self, level):
        assert all(e.pos != level.start for e in level.placements if e.name != "stairs")

    def test_placements_on_floor_and_unique(self, level):
        spots = [(e.pos.x, e.pos.y) for e in level.placements if e.name != "stairs"]
        assert len(spots) == len(set(spots))
        assert all(not level.grid.is_blocked(x, y) for x, y in spots)

    def test_monsters_are_alive_blockers(self, level):
        monsters = [e for e in level.placements if e.ai is not None]
        assert all(m.alive and m.blocks and m.combatant is not None for m in monsters)

    def test_generation_uses_only_its_domains(self):
        rng = DeterministicRNG(42)
        generate(1, GameConfig(), rng)
        state = rng.state()
        assert state[int(Domain.AI_DECISION)] == 0


class TestDepthTables:

    def test_step_table_lookup(self):
        table = ((2, 1), (3, 4), (5, 6))
        assert from_dungeon_level(table, 1) == 2
        assert from_dungeon_level(table, 3) == 2
        assert from_dungeon_level(table, 4) == 3
        assert from_dungeon_level(table, 9) == 5

    def test_below_first_step_is_zero(self):
        assert from_dungeon_level(MONSTER_WEIGHTS["troll"], 1) == 0
        assert from_dungeon_level(MONSTER_WEIGHTS["troll"], 3) == 15
