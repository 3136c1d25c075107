"""World <-> JSON codec and the single-slot save file."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from crawler.core.enums import DeathKind, ItemKind, Slot
from crawler.core.errors import NoSavedGameError
from crawler.core.grid import Grid, Tile
from crawler.core.models import AiState, BasicAi, Combatant, ConfusedAi, Entity, Equipment, Vector2
from crawler.core.world_state import World
from crawler.persistence.schemas import (
    SAVE_VERSION,
    BasicAiModel,
    CombatantModel,
    ConfusedAiModel,
    EntityModel,
    EquipmentModel,
    GridModel,
    MessageModel,
    RngModel,
    SaveGame,
)
from crawler.systems.rng import DeterministicRNG
from crawler.utils.message_log import Message, MessageLog

logger = logging.getLogger(__name__)


# =====================================================================
# World -> models
# =====================================================================

def _ai_to_model(ai: AiState) -> BasicAiModel | ConfusedAiModel:
    match ai:
        case ConfusedAi(previous_ai=previous, turns_remaining=turns):
            return ConfusedAiModel(previous=_ai_to_model(previous), turns_remaining=turns)
        case BasicAi():
            return BasicAiModel()
    raise TypeError(f"unknown AI state {ai!r}")


def _entity_to_model(entity: Entity) -> EntityModel:
    fighter = entity.combatant
    gear = entity.equipment
    return EntityModel(
        x=entity.pos.x,
        y=entity.pos.y,
        glyph=entity.glyph,
        color=entity.color,
        name=entity.name,
        blocks=entity.blocks,
        alive=entity.alive,
        level=entity.level,
        always_visible=entity.always_visible,
        combatant=None if fighter is None else CombatantModel(
            max_hp=fighter.max_hp, hp=fighter.hp, defense=fighter.defense,
            base_power=fighter.base_power, xp=fighter.xp, on_death=fighter.on_death.name,
        ),
        ai=None if entity.ai is None else _ai_to_model(entity.ai),
        item=None if entity.item is None else entity.item.name,
        equipment=None if gear is None else EquipmentModel(
            slot=gear.slot.name, equipped=gear.equipped, power_bonus=gear.power_bonus,
            defense_bonus=gear.defense_bonus, max_hp_bonus=gear.max_hp_bonus,
        ),
    )


def to_model(world: World) -> SaveGame:
    grid = world.grid
    return SaveGame(
        version=SAVE_VERSION,
        depth=world.depth,
        grid=GridModel(
            width=grid.width,
            height=grid.height,
            tiles=[(t.blocked, t.block_sight, t.explored) for t in grid.tiles()],
        ),
        entities=[_entity_to_model(e) for e in world.entities],
        inventory=[_entity_to_model(e) for e in world.inventory],
        log=[MessageModel(text=m.text, color=m.color) for m in world.log],
        rng=RngModel(seed=world.rng.seed, cursors=world.rng.state()),
    )


# =====================================================================
# Models -> World
# =====================================================================

def _ai_from_model(model: BasicAiModel | ConfusedAiModel) -> AiState:
    if isinstance(model, ConfusedAiModel):
        return ConfusedAi(previous_ai=_ai_from_model(model.previous), turns_remaining=model.turns_remaining)
    return BasicAi()


def _entity_from_model(model: EntityModel) -> Entity:
    fighter = model.combatant
    gear = model.equipment
    return Entity(
        pos=Vector2(model.x, model.y),
        glyph=model.glyph,
        color=tuple(model.color),
        name=model.name,
        blocks=model.blocks,
        alive=model.alive,
        level=model.level,
        always_visible=model.always_visible,
        combatant=None if fighter is None else Combatant(
            max_hp=fighter.max_hp, hp=fighter.hp, defense=fighter.defense,
            base_power=fighter.base_power, xp=fighter.xp, on_death=DeathKind[fighter.on_death],
        ),
        ai=None if model.ai is None else _ai_from_model(model.ai),
        item=None if model.item is None else ItemKind[model.item],
        equipment=None if gear is None else Equipment(
            slot=Slot[gear.slot], equipped=gear.equipped, power_bonus=gear.power_bonus,
            defense_bonus=gear.defense_bonus, max_hp_bonus=gear.max_hp_bonus,
        ),
    )


def _is_player(model: EntityModel) -> bool:
    """True for the living player or the remains it leaves behind."""
    if model.combatant is not None:
        return model.combatant.on_death == DeathKind.PLAYER.name
    return model.name == "Remains of player"


def from_model(save: SaveGame) -> World:
    grid = Grid.from_tiles(
        save.grid.width,
        save.grid.height,
        [Tile(blocked=b, block_sight=s, explored=e) for b, s, e in save.grid.tiles],
    )
    return World(
        grid=grid,
        entities=[_entity_from_model(e) for e in save.entities],
        rng=DeterministicRNG(save.rng.seed, save.rng.cursors),
        inventory=[_entity_from_model(e) for e in save.inventory],
        log=MessageLog([Message(m.text, tuple(m.color)) for m in save.log]),
        depth=save.depth,
    )


# =====================================================================
# Bytes and files
# =====================================================================

def encode(world: World) -> bytes:
    """Serialize *world* to UTF-8 JSON."""
    return to_model(world).model_dump_json().encode("utf-8")


def decode(data: bytes | str) -> World:
    """Rebuild a World. Raises NoSavedGameError if *data* is not a valid save."""
    try:
        save = SaveGame.model_validate_json(data)
        if save.version != SAVE_VERSION:
            raise NoSavedGameError(f"unsupported save version {save.version}")
        if not save.entities or not _is_player(save.entities[0]):
            raise NoSavedGameError("entity 0 is not the player")
        return from_model(save)
    except (ValidationError, KeyError, ValueError) as exc:
        raise NoSavedGameError(f"corrupt save data: {exc}") from exc


def save_game(world: World, path: str | Path) -> None:
    """Write the save through a temp file and an atomic rename."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = encode(world)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Saved depth %d (%d bytes) to %s", world.depth, len(payload), path)


def load_game(path: str | Path) -> World:
    """Load the save at *path*. Missing or unreadable saves raise NoSavedGameError."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise NoSavedGameError(f"no saved game at {path}") from exc
    world = decode(data)
    logger.info("Loaded depth %d from %s", world.depth, path)
    return world
