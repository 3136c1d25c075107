"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from crawler.api.dependencies import get_game_manager
from crawler.api.manager import GameManager
from crawler.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        seed=cfg.seed,
        map_width=cfg.map_width,
        map_height=cfg.map_height,
        torch_radius=cfg.torch_radius,
        inventory_capacity=cfg.inventory_capacity,
        save_file=str(manager.engine.save_path),
    )
