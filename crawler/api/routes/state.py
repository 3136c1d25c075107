"""GET /api/v1/state, /map, /character: read-only views of the current game."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crawler.api.dependencies import get_game_manager
from crawler.api.manager import GameManager
from crawler.api.schemas import (
    CharacterResponse,
    EntitySchema,
    FrameResponse,
    MapResponse,
    MessageSchema,
)
from crawler.core.grid import Grid
from crawler.engine.turn_engine import Frame

router = APIRouter()


def serialize_frame(frame: Frame) -> FrameResponse:
    entities = []
    for e in frame.entities:
        fighter = e.combatant
        entities.append(EntitySchema(
            x=e.pos.x, y=e.pos.y, glyph=e.glyph, color=e.color, name=e.name,
            blocks=e.blocks, alive=e.alive,
            hp=fighter.hp if fighter else None,
            max_hp=fighter.max_hp if fighter else None,
        ))
    return FrameResponse(
        depth=frame.depth,
        game_over=frame.game_over,
        level_up_pending=frame.level_up_pending,
        fullscreen=frame.fullscreen,
        visible=sorted(frame.visible),
        entities=entities,
        messages=[MessageSchema(text=m.text, color=m.color) for m in frame.messages],
        status=CharacterResponse(**frame.status),
        inventory=frame.inventory,
    )


def _tile_code(grid: Grid, index: int) -> int:
    tile = grid.tiles()[index]
    if not tile.explored:
        return 0
    return 1 if tile.block_sight else 2


@router.get("/state", response_model=FrameResponse)
def get_state(manager: GameManager = Depends(get_game_manager)) -> FrameResponse:
    return serialize_frame(manager.frame())


@router.get("/map", response_model=MapResponse)
def get_map(manager: GameManager = Depends(get_game_manager)) -> MapResponse:
    grid = manager.frame().grid

    # RLE encode: [value, count, value, count, ...]
    total = grid.width * grid.height
    rle: list[int] = []
    if total > 0:
        cur_val = _tile_code(grid, 0)
        cur_count = 1
        for i in range(1, total):
            v = _tile_code(grid, i)
            if v == cur_val:
                cur_count += 1
            else:
                rle.append(cur_val)
                rle.append(cur_count)
                cur_val = v
                cur_count = 1
        rle.append(cur_val)
        rle.append(cur_count)

    return MapResponse(width=grid.width, height=grid.height, grid=rle)


@router.get("/character", response_model=CharacterResponse)
def get_character(manager: GameManager = Depends(get_game_manager)) -> CharacterResponse:
    return CharacterResponse(**manager.character())
