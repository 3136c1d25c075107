"""POST /api/v1/action and /level-up: push one input into the turn engine."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from crawler.api.dependencies import get_game_manager
from crawler.api.manager import GameManager
from crawler.api.routes.state import serialize_frame
from crawler.api.schemas import ActionRequest, ActionResponse, FrameResponse, LevelUpRequest
from crawler.core.errors import ActionRejectedError

router = APIRouter()


@router.post("/action", response_model=ActionResponse)
def post_action(
    request: ActionRequest,
    manager: GameManager = Depends(get_game_manager),
) -> ActionResponse:
    try:
        result, frame = manager.act(request.token, item=request.item, target=request.target)
    except ActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ActionResponse(result=result.name, frame=serialize_frame(frame))


@router.post("/level-up", response_model=FrameResponse)
def post_level_up(
    request: LevelUpRequest,
    manager: GameManager = Depends(get_game_manager),
) -> FrameResponse:
    try:
        frame = manager.level_up(request.stat)
    except ActionRejectedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return serialize_frame(frame)
