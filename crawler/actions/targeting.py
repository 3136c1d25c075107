"""Interactive targeting, resolved inside a single player action.

Both prompts block on the controller until they resolve and never mutate
the world; a cancel returns ``None`` with everything untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.core.world_state import PLAYER

if TYPE_CHECKING:
    from crawler.core.models import Vector2
    from crawler.core.world_state import World
    from crawler.engine.input import Controller
    from crawler.systems.visibility import VisibilityOracle

logger = logging.getLogger(__name__)


def target_tile(
    world: World,
    oracle: VisibilityOracle,
    controller: Controller,
    max_range: float | None = None,
) -> Vector2 | None:
    """Ask for tiles until one is visible and within *max_range* of the player."""
    while True:
        pos = controller.pick_tile()
        if pos is None:
            return None
        if not oracle.is_visible(pos.x, pos.y):
            logger.debug("Rejected target %s: not visible", pos)
            continue
        if max_range is not None and world.player.distance(pos.x, pos.y) > max_range:
            logger.debug("Rejected target %s: out of range %.1f", pos, max_range)
            continue
        return pos


def target_monster(
    world: World,
    oracle: VisibilityOracle,
    controller: Controller,
    max_range: float | None = None,
) -> int | None:
    """Ask for tiles until one holds a non-player entity with a combatant."""
    while True:
        pos = target_tile(world, oracle, controller, max_range)
        if pos is None:
            return None
        for index, entity in enumerate(world.entities):
            if index != PLAYER and entity.pos == pos and entity.combatant is not None:
                return index
        logger.debug("No monster at %s, asking again", pos)
