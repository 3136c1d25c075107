"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Entity ---

class EntitySchema(BaseModel):
    x: int
    y: int
    glyph: str
    color: tuple[int, int, int]
    name: str
    blocks: bool = False
    alive: bool = False
    hp: int | None = None
    max_hp: int | None = None


class MessageSchema(BaseModel):
    text: str
    color: tuple[int, int, int]


# --- Character ---

class CharacterResponse(BaseModel):
    level: int
    xp: int
    xp_to_next: int
    hp: int
    max_hp: int
    power: int
    defense: int
    depth: int


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    grid: list[int] = Field(
        description="RLE pairs [value, count, ...] of tile codes (0=unexplored, 1=wall, 2=floor)",
    )


# --- Frame ---

class FrameResponse(BaseModel):
    depth: int
    game_over: bool
    level_up_pending: bool
    fullscreen: bool
    visible: list[tuple[int, int]]
    entities: list[EntitySchema]
    messages: list[MessageSchema]
    status: CharacterResponse
    inventory: list[str] = Field(default_factory=list)


# --- Action ---

class ActionRequest(BaseModel):
    token: str = Field(description="Token name (MOVE_N, PICKUP, ...) or key command (k, g, >, ...)")
    item: int | None = Field(None, description="Inventory index for use/drop prompts")
    target: tuple[int, int] | None = Field(None, description="Tile answer for targeting prompts")


class ActionResponse(BaseModel):
    result: str
    frame: FrameResponse


class LevelUpRequest(BaseModel):
    stat: str = Field(description="CONSTITUTION, STRENGTH or AGILITY")


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    depth: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    seed: int
    map_width: int
    map_height: int
    torch_radius: int
    inventory_capacity: int
    save_file: str
