"""GameManager: lock-guarded owner of the TurnEngine for the HTTP adapter.

Every request that touches the world takes the lock, so ticks from
concurrent requests are applied one at a time (single writer).
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from crawler.core.enums import PlayerAction, StatChoice
from crawler.core.errors import ActionRejectedError
from crawler.core.models import Vector2
from crawler.engine.input import ScriptedController, parse_token
from crawler.engine.turn_engine import Frame, TurnEngine
from crawler.persistence import load_game
from crawler.systems.progression import character_sheet

if TYPE_CHECKING:
    from pathlib import Path

    from crawler.config import GameConfig

logger = logging.getLogger(__name__)


class GameManager:
    """One game session shared by all API requests."""

    def __init__(self, config: GameConfig, save_path: str | Path | None = None) -> None:
        self.config = config
        self._lock = threading.Lock()
        self._engine = TurnEngine(config, save_path=save_path)

    @property
    def engine(self) -> TurnEngine:
        return self._engine

    # -- lifecycle --

    def new_game(self) -> int:
        with self._lock:
            world = self._engine.new_game()
            logger.info("New game requested via API")
            return world.depth

    def continue_game(self) -> int:
        """Replace the current game with the save file. Raises NoSavedGameError."""
        with self._lock:
            world = load_game(self._engine.save_path)
            self._engine.attach_world(world)
            return world.depth

    def save(self) -> int:
        with self._lock:
            self._engine.save()
            return self._engine.world.depth

    # -- play --

    def act(
        self,
        token_text: str,
        item: int | None = None,
        target: tuple[int, int] | None = None,
    ) -> tuple[PlayerAction, Frame]:
        """Run one tick. Prompt answers come from the request; a missing answer cancels."""
        with self._lock:
            engine = self._engine
            if engine.level_up_pending:
                raise ActionRejectedError("Level up pending: choose a stat first")
            controller = ScriptedController(
                tiles=[Vector2(*target)] if target is not None else [],
                items=[item] if item is not None else [],
            )
            result = engine.play_tick(parse_token(token_text), controller, check_progression=False)
            return result, engine.render_frame()

    def level_up(self, stat_name: str) -> Frame:
        try:
            stat = StatChoice[stat_name.strip().upper()]
        except KeyError as exc:
            raise ActionRejectedError(f"Unknown stat {stat_name!r}") from exc
        with self._lock:
            engine = self._engine
            if not engine.level_up_pending:
                raise ActionRejectedError("No level up pending")
            engine.level_up(ScriptedController(stats=[stat]))
            return engine.render_frame()

    # -- reads --

    def frame(self) -> Frame:
        with self._lock:
            return self._engine.render_frame()

    def character(self) -> dict[str, int]:
        with self._lock:
            return character_sheet(self._engine.world, self.config)
