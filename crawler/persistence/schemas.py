"""Pydantic models for the on-disk save format.

They mirror the in-memory World one-to-one; enum members are stored by
name so a save stays readable and survives reordering of the enums.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

SAVE_VERSION = 1


class GridModel(BaseModel):
    width: int
    height: int
    # row-major [blocked, block_sight, explored]
    tiles: list[tuple[bool, bool, bool]]


class CombatantModel(BaseModel):
    max_hp: int
    hp: int
    defense: int
    base_power: int
    xp: int = 0
    on_death: str = "MONSTER"


class BasicAiModel(BaseModel):
    kind: Literal["basic"] = "basic"


class ConfusedAiModel(BaseModel):
    kind: Literal["confused"] = "confused"
    previous: AiModel
    turns_remaining: int


AiModel = Annotated[Union[BasicAiModel, ConfusedAiModel], Field(discriminator="kind")]

ConfusedAiModel.model_rebuild()


class EquipmentModel(BaseModel):
    slot: str
    equipped: bool = False
    power_bonus: int = 0
    defense_bonus: int = 0
    max_hp_bonus: int = 0


class EntityModel(BaseModel):
    x: int
    y: int
    glyph: str
    color: tuple[int, int, int]
    name: str
    blocks: bool = False
    alive: bool = False
    level: int = 1
    always_visible: bool = False
    combatant: CombatantModel | None = None
    ai: AiModel | None = None
    item: str | None = None
    equipment: EquipmentModel | None = None


class MessageModel(BaseModel):
    text: str
    color: tuple[int, int, int]


class RngModel(BaseModel):
    seed: int
    cursors: dict[int, int] = Field(default_factory=dict)


class SaveGame(BaseModel):
    version: int = SAVE_VERSION
    depth: int
    grid: GridModel
    entities: list[EntityModel]
    inventory: list[EntityModel] = Field(default_factory=list)
    log: list[MessageModel] = Field(default_factory=list)
    rng: RngModel
