"""Tests for the save format: round trips, corrupt data, missing saves."""

import json

import pytest

from crawler.actions.combat import die
from crawler.config import GameConfig
from crawler.core.enums import Domain
from crawler.core.errors import NoSavedGameError
from crawler.core.models import BasicAi, ConfusedAi
from crawler.engine.turn_engine import TurnEngine
from crawler.persistence import decode, encode, load_game, save_game
from crawler.systems.spawn_tables import make_item
from tests.helpers.dungeon_arena import DungeonArena


@pytest.fixture
def played_world():
    engine = TurnEngine(GameConfig(seed=3), save_path="unused.json")
    world = engine.new_game()
    engine.refresh_visibility()
    world.inventory.append(make_item("sword", world.player.pos))
    return world


class TestRoundTrip:

    def test_encode_decode_is_lossless(self, played_world):
        assert decode(encode(played_world)) == played_world

    def test_nested_confusion_survives(self):
        arena = DungeonArena()
        orc = arena.add_monster("orc", pos=(6, 5))
        state = ConfusedAi(previous_ai=ConfusedAi(previous_ai=BasicAi(), turns_remaining=2), turns_remaining=7)
        arena.entity(orc).ai = state
        assert decode(encode(arena.world)).entities[orc].ai == state

    def test_equipment_state_survives(self):
        arena = DungeonArena()
        arena.world.inventory[arena.give("shield")].equipment.equipped = True
        restored = decode(encode(arena.world))
        assert restored.inventory[0].equipment.equipped
        assert restored.inventory[0].equipment.defense_bonus == 1

    def test_rng_stream_continues_after_load(self, played_world):
        restored = decode(encode(played_world))
        assert restored.rng.next_float(Domain.AI_DECISION) == played_world.rng.next_float(Domain.AI_DECISION)

    def test_explored_flags_survive(self, played_world):
        restored = decode(encode(played_world))
        explored = [t.explored for t in restored.grid.tiles()]
        assert any(explored)
        assert explored == [t.explored for t in played_world.grid.tiles()]

    def test_payload_is_readable_json(self, played_world):
        data = json.loads(encode(played_world))
        assert data["version"] == 1
        assert data["entities"][0]["name"] == "player"
        assert data["entities"][0]["combatant"]["on_death"] == "PLAYER"


class TestFiles:

    def test_save_then_load(self, tmp_path, played_world):
        path = tmp_path / "nested" / "save.json"
        save_game(played_world, path)
        assert load_game(path) == played_world
        assert [p.name for p in path.parent.iterdir()] == ["save.json"]

    def test_missing_save(self, tmp_path):
        with pytest.raises(NoSavedGameError):
            load_game(tmp_path / "nope.json")

    def test_corrupt_save(self, tmp_path):
        path = tmp_path / "save.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(NoSavedGameError):
            load_game(path)

    def test_unknown_enum_name_is_corrupt(self, played_world):
        data = json.loads(encode(played_world))
        data["entities"][0]["combatant"]["on_death"] = "DRAGON"
        with pytest.raises(NoSavedGameError):
            decode(json.dumps(data))

    def test_save_without_entities_is_corrupt(self, played_world):
        data = json.loads(encode(played_world))
        data["entities"] = []
        with pytest.raises(NoSavedGameError):
            decode(json.dumps(data))

    def test_save_with_monster_first_is_corrupt(self):
        arena = DungeonArena()
        arena.add_monster("orc", pos=(6, 5))
        data = json.loads(encode(arena.world))
        data["entities"] = data["entities"][1:]
        assert data["entities"][0]["combatant"]["on_death"] == "MONSTER"
        with pytest.raises(NoSavedGameError):
            decode(json.dumps(data))

    def test_dead_player_remains_still_load(self):
        arena = DungeonArena()
        arena.add_monster("orc", pos=(6, 5))
        die(arena.player, arena.world)
        restored = decode(encode(arena.world))
        assert restored.player.name == "Remains of player"
        assert not restored.player.alive

    def test_continue_through_engine(self, tmp_path):
        path = tmp_path / "save.json"
        engine = TurnEngine(GameConfig(seed=5), save_path=path)
        world = engine.new_game()
        engine.save()
        other = TurnEngine(GameConfig(seed=99), save_path=path)
        other.attach_world(load_game(path))
        assert other.world == world
        assert other.refresh_visibility()
