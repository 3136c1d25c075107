"""Tests for monster AI: basic approach/attack and confusion."""

from crawler.actions.move import step_toward
from crawler.ai.states import take_turn
from crawler.core.models import BasicAi, ConfusedAi, Vector2
from tests.helpers.dungeon_arena import DungeonArena


class TestStepToward:

    def test_diagonal_step(self):
        assert step_toward(Vector2(0, 0), Vector2(5, 5)) == Vector2(1, 1)

    def test_shallow_angle_rounds_to_straight(self):
        # 4/sqrt(17) rounds to 1, 1/sqrt(17) rounds to 0
        assert step_toward(Vector2(0, 0), Vector2(4, 1)) == Vector2(1, 0)

    def test_negative_axes(self):
        assert step_toward(Vector2(5, 5), Vector2(0, 5)) == Vector2(-1, 0)
        assert step_toward(Vector2(5, 5), Vector2(2, 2)) == Vector2(-1, -1)

    def test_same_cell_is_zero(self):
        assert step_toward(Vector2(3, 3), Vector2(3, 3)) == Vector2(0, 0)


class TestBasicAi:

    def test_visible_monster_approaches(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(9, 5))
        arena.look()
        take_turn(orc, arena.world, arena.engine.oracle)
        assert arena.entity(orc).pos == Vector2(8, 5)
        assert arena.entity(orc).ai == BasicAi()

    def test_unseen_monster_stays_put(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(9, 5))
        arena.wall(7, 5)
        arena.wall(7, 4)
        arena.wall(7, 6)
        arena.look()
        assert not arena.engine.oracle.is_visible(9, 5)
        take_turn(orc, arena.world, arena.engine.oracle)
        assert arena.entity(orc).pos == Vector2(9, 5)

    def test_adjacent_monster_attacks(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 6))
        arena.look()
        take_turn(orc, arena.world, arena.engine.oracle)
        # orc power 4 vs player defense 1
        assert arena.player.combatant.hp == 97
        assert arena.entity(orc).pos == Vector2(6, 6)

    def test_monster_kill_credits_the_monster(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        arena.player.combatant.hp = 2
        arena.player.combatant.xp = 10
        arena.look()
        take_turn(orc, arena.world, arena.engine.oracle)
        assert not arena.player.alive
        assert arena.entity(orc).combatant.xp == 35 + 10

    def test_blocked_step_is_dropped(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(8, 5))
        arena.add_monster("troll", pos=(7, 5))
        arena.look()
        take_turn(orc, arena.world, arena.engine.oracle)
        assert arena.entity(orc).pos == Vector2(8, 5)

    def test_dead_monster_is_skipped(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        arena.entity(orc).alive = False
        arena.look()
        take_turn(orc, arena.world, arena.engine.oracle)
        assert arena.player.combatant.hp == 100


class TestConfusion:

    def test_confused_monster_never_attacks(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        arena.entity(orc).ai = ConfusedAi(previous_ai=BasicAi(), turns_remaining=10)
        arena.look()
        for _ in range(11):
            take_turn(orc, arena.world, arena.engine.oracle)
        assert arena.player.combatant.hp == 100

    def test_counts_down_then_reverts_once(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 10))
        arena.entity(orc).ai = ConfusedAi(previous_ai=BasicAi(), turns_remaining=2)
        arena.look()
        oracle = arena.engine.oracle

        take_turn(orc, arena.world, oracle)
        assert arena.entity(orc).ai == ConfusedAi(previous_ai=BasicAi(), turns_remaining=1)
        take_turn(orc, arena.world, oracle)
        take_turn(orc, arena.world, oracle)
        assert arena.entity(orc).ai == ConfusedAi(previous_ai=BasicAi(), turns_remaining=-1)

        take_turn(orc, arena.world, oracle)
        assert arena.entity(orc).ai == BasicAi()
        assert arena.messages().count("The orc is no longer confused!") == 1

    def test_ten_turn_confusion_walks_eleven_times(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 10))
        arena.entity(orc).ai = ConfusedAi(previous_ai=BasicAi(), turns_remaining=10)
        arena.look()
        walks = 0
        while True:
            take_turn(orc, arena.world, arena.engine.oracle)
            if not isinstance(arena.entity(orc).ai, ConfusedAi):
                break
            walks += 1
            assert "The orc is no longer confused!" not in arena.messages()
        assert walks == 11
        assert arena.entity(orc).ai == BasicAi()
        assert arena.messages().count("The orc is no longer confused!") == 1

    def test_random_walk_stays_on_floor(self):
        arena = DungeonArena(width=5, height=5, player_pos=(1, 1))
        orc = arena.add_monster("orc", pos=(3, 3))
        arena.entity(orc).ai = ConfusedAi(previous_ai=BasicAi(), turns_remaining=30)
        arena.look()
        for _ in range(30):
            take_turn(orc, arena.world, arena.engine.oracle)
            pos = arena.entity(orc).pos
            assert not arena.world.grid.is_blocked(pos.x, pos.y)
            assert pos != arena.player.pos
