"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crawler.api.dependencies import set_game_manager
from crawler.api.manager import GameManager
from crawler.api.routes import api_router
from crawler.config import GameConfig
from crawler.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, save_path: str | Path | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config, save_path=save_path)
        manager.new_game()
        set_game_manager(manager)
        logger.info("API server started: depth %d ready.", manager.engine.world.depth)
        yield
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Dungeon Crawler Core",
        description=(
            "Turn-based dungeon crawler driven over HTTP.\n\n"
            "## API Groups\n\n"
            "- **State** - Current frame, explored map, character sheet\n"
            "- **Action** - One input token per request, plus level-up choices\n"
            "- **Game** - New game, save, continue\n"
            "- **Config** - Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Render frame, explored map and character sheet of the running game."},
            {"name": "Action", "description": "Push one action token; prompt answers (item index, target tile) ride along in the body."},
            {"name": "Game", "description": "Session lifecycle: start a new game, save it, or continue the saved one."},
            {"name": "Config", "description": "Read-only game configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
