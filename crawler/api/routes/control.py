"""POST /api/v1/game/{action}: new game, save, continue."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from crawler.api.dependencies import get_game_manager
from crawler.api.manager import GameManager
from crawler.api.schemas import ControlResponse
from crawler.core.errors import NoSavedGameError

router = APIRouter()


class GameAction(str, Enum):
    new = "new"
    save = "save"
    continue_ = "continue"


@router.post("/game/{action}", response_model=ControlResponse)
def control(
    action: GameAction,
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    match action:
        case GameAction.new:
            depth = manager.new_game()
            return ControlResponse(status="ok", message="New game started.", depth=depth)

        case GameAction.save:
            depth = manager.save()
            return ControlResponse(status="ok", message="Game saved.", depth=depth)

        case GameAction.continue_:
            try:
                depth = manager.continue_game()
            except NoSavedGameError as exc:
                raise HTTPException(status_code=404, detail="No saved game") from exc
            return ControlResponse(status="ok", message="Saved game loaded.", depth=depth)
