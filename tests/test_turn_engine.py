"""E2E tests for the turn engine: classification, AI ordering, descent, frames."""

from crawler.actions import combat
from crawler.config import GameConfig
from crawler.core.enums import ActionToken, PlayerAction, Slot, StatChoice
from crawler.core.models import Vector2
from crawler.core.world_state import PLAYER
from crawler.engine.input import ScriptedController
from crawler.engine.turn_engine import TurnEngine
from crawler.persistence import load_game
from tests.helpers.dungeon_arena import DungeonArena


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

class TestClassification:

    def test_move_takes_a_turn_and_monsters_act(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 5))
        assert arena.play("MOVE_E") == [PlayerAction.TOOK_TURN]
        assert arena.player.pos == Vector2(6, 5)
        assert arena.entity(orc).pos == Vector2(9, 5)

    def test_pickup_does_not_take_a_turn(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 5))
        arena.add_item("heal", pos=(5, 5))
        assert arena.play("g") == [PlayerAction.DID_NOT_TAKE_TURN]
        assert len(arena.world.inventory) == 1
        assert arena.entity(orc).pos == Vector2(10, 5)

    def test_unknown_input_is_ignored(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 5))
        assert arena.play("xyzzy") == [PlayerAction.DID_NOT_TAKE_TURN]
        assert arena.entity(orc).pos == Vector2(10, 5)

    def test_wait_takes_a_turn(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 5))
        assert arena.play(".") == [PlayerAction.TOOK_TURN]
        assert arena.player.pos == Vector2(5, 5)
        assert arena.entity(orc).pos == Vector2(9, 5)

    def test_bumping_a_wall_still_takes_a_turn(self):
        arena = DungeonArena(player_pos=(1, 1))
        assert arena.play("MOVE_N") == [PlayerAction.TOOK_TURN]
        assert arena.player.pos == Vector2(1, 1)

    def test_inventory_use_does_not_take_a_turn(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(10, 5))
        arena.player.combatant.hp = 50
        arena.give("heal")
        result = arena.play("i", controller=ScriptedController(items=[0]))
        assert result == [PlayerAction.DID_NOT_TAKE_TURN]
        assert arena.player.combatant.hp == 90
        assert arena.entity(orc).pos == Vector2(10, 5)

    def test_character_and_fullscreen_are_free(self):
        arena = DungeonArena()
        assert arena.play("c", "f") == [PlayerAction.DID_NOT_TAKE_TURN] * 2
        assert arena.engine.fullscreen

    def test_quit_saves_and_exits(self, tmp_path):
        path = tmp_path / "save.json"
        arena = DungeonArena(save_path=path)
        assert arena.play("q") == [PlayerAction.EXIT]
        assert load_game(path) == arena.world


# ---------------------------------------------------------------------------
# Move-or-attack and AI ordering
# ---------------------------------------------------------------------------

class TestTurnOrder:

    def test_move_into_monster_attacks(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        arena.play("l")
        assert arena.player.pos == Vector2(5, 5)
        assert arena.entity(orc).combatant.hp == 18
        # the orc answers in the same tick
        assert arena.player.combatant.hp == 97

    def test_monsters_act_in_index_order(self):
        arena = DungeonArena()
        first = arena.add_monster("orc", pos=(8, 5))
        second = arena.add_monster("orc", pos=(9, 5))
        arena.play(".")
        # the first orc moves out of the way before the second one acts
        assert arena.entity(first).pos == Vector2(7, 5)
        assert arena.entity(second).pos == Vector2(8, 5)

    def test_dead_player_only_quits(self, tmp_path):
        arena = DungeonArena(save_path=tmp_path / "s.json")
        orc = arena.add_monster("orc", pos=(10, 5))
        arena.player.alive = False
        assert arena.play("MOVE_E", "g") == [PlayerAction.DID_NOT_TAKE_TURN] * 2
        assert arena.entity(orc).pos == Vector2(10, 5)
        assert arena.play("c", "q") == [PlayerAction.DID_NOT_TAKE_TURN, PlayerAction.EXIT]

    def test_level_up_checked_after_the_turn(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        arena.player.combatant.base_power = 30
        arena.player.combatant.xp = 330
        ctrl = ScriptedController(stats=[StatChoice.AGILITY])
        arena.play("l", controller=ctrl)
        assert not arena.entity(orc).alive
        assert arena.player.level == 2
        assert arena.player.combatant.xp == 15


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------

class TestVisibility:

    def test_recompute_only_after_moving(self):
        arena = DungeonArena()
        assert arena.engine.refresh_visibility()
        assert not arena.engine.refresh_visibility()
        arena.play("l")
        assert arena.engine.refresh_visibility()

    def test_visible_tiles_become_explored(self):
        arena = DungeonArena()
        arena.look()
        assert arena.world.grid.tile(8, 5).explored
        assert not arena.world.grid.tile(18, 18).explored


# ---------------------------------------------------------------------------
# New game and descent
# ---------------------------------------------------------------------------

class TestLevels:

    def test_new_game_puts_player_first(self):
        engine = TurnEngine(GameConfig(seed=7))
        world = engine.new_game()
        assert world.entities[PLAYER].name == "player"
        assert world.depth == 1
        assert world.stairs_index() is not None
        assert world.log.texts()[0].startswith("Welcome stranger!")

    def test_new_game_starts_with_equipped_dagger(self):
        cfg = GameConfig(seed=7)
        world = TurnEngine(cfg).new_game()
        assert [(i.name, i.equipment.equipped) for i in world.inventory] == [("dagger", True)]
        assert world.inventory[0].equipment.slot is Slot.RIGHT_HAND
        assert combat.power(world.player, world) == cfg.player_power + 2

    def test_new_game_is_deterministic(self):
        a = TurnEngine(GameConfig(seed=7)).new_game()
        b = TurnEngine(GameConfig(seed=7)).new_game()
        assert a == b

    def test_descend_requires_stairs(self):
        arena = DungeonArena()
        arena.add_stairs((8, 8))
        assert arena.play(">") == [PlayerAction.DID_NOT_TAKE_TURN]
        assert arena.world.depth == 1
        assert "There are no stairs here." in arena.messages()

    def test_descend_heals_and_regenerates(self):
        arena = DungeonArena(width=80, height=45)
        arena.add_stairs((5, 5))
        arena.give("heal")
        arena.player.combatant.hp = 30
        old_grid = arena.world.grid
        assert arena.engine.descend() == PlayerAction.TOOK_TURN
        world = arena.world
        assert world.depth == 2
        assert world.grid is not old_grid
        assert world.player.combatant.hp == 80
        assert len(world.inventory) == 1
        assert world.entities[PLAYER] is arena.player
        assert not world.grid.is_blocked(world.player.pos.x, world.player.pos.y)
        assert world.stairs_index() is not None
        assert "You take a moment to rest, and recover your strength." in arena.messages()

    def test_descend_heal_is_capped(self):
        arena = DungeonArena(width=80, height=45)
        arena.add_stairs((5, 5))
        arena.player.combatant.hp = 90
        arena.engine.descend()
        assert arena.player.combatant.hp == 100


# ---------------------------------------------------------------------------
# Render frame
# ---------------------------------------------------------------------------

class TestFrame:

    def test_non_blocking_entities_draw_first(self):
        arena = DungeonArena()
        arena.add_monster("orc", pos=(7, 5))
        arena.add_item("heal", pos=(6, 5))
        frame = arena.engine.render_frame()
        names = [e.name for e in frame.entities]
        assert names.index("healing potion") < names.index("orc")
        assert names.index("healing potion") < names.index("player")

    def test_hidden_entities_are_not_drawn(self):
        arena = DungeonArena()
        arena.add_monster("orc", pos=(18, 18))
        frame = arena.engine.render_frame()
        assert [e.name for e in frame.entities] == ["player"]

    def test_frame_status_and_log(self):
        arena = DungeonArena()
        arena.world.log.add("hello")
        frame = arena.engine.render_frame()
        assert frame.status["hp"] == 100
        assert frame.messages[-1].text == "hello"
        assert (5, 5) in frame.visible
        assert not frame.game_over

    def test_token_enum_accepted_directly(self):
        arena = DungeonArena()
        assert arena.engine.play_tick(ActionToken.MOVE_S, ScriptedController()) == PlayerAction.TOOK_TURN
        assert arena.player.pos == Vector2(5, 6)
