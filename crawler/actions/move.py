"""Movement: blocked-cell checks, greedy approach, player move-or-attack."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from crawler.actions import combat
from crawler.core.models import Vector2
from crawler.core.world_state import PLAYER

if TYPE_CHECKING:
    from crawler.core.world_state import World

logger = logging.getLogger(__name__)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def step_toward(origin: Vector2, target: Vector2) -> Vector2:
    """Unit step from *origin* toward *target*.

    The vector is divided by its Euclidean length and each axis rounded
    on its own, giving 8-directional movement.
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    distance = math.hypot(dx, dy)
    if distance == 0:
        return Vector2(0, 0)
    return Vector2(_round_half_away(dx / distance), _round_half_away(dy / distance))


def move_by(world: World, index: int, dx: int, dy: int) -> bool:
    """Move entity *index* by (dx, dy) unless the destination is blocked."""
    entity = world.entities[index]
    dest = entity.pos + Vector2(dx, dy)
    if world.is_blocked(dest.x, dest.y):
        logger.debug("Entity %d (%s) blocked at %s", index, entity.name, dest)
        return False
    entity.pos = dest
    return True


def move_towards(world: World, index: int, target: Vector2) -> bool:
    step = step_toward(world.entities[index].pos, target)
    return move_by(world, index, step.x, step.y)


def player_move_or_attack(world: World, dx: int, dy: int) -> None:
    """Attack a living combatant in the destination cell, otherwise move."""
    dest = world.player.pos + Vector2(dx, dy)
    target = world.living_combatant_at(dest.x, dest.y)
    if target is not None and target != PLAYER:
        xp = combat.attack(world, PLAYER, target)
        combat.award_xp(world.player, xp)
        return
    move_by(world, PLAYER, dx, dy)
