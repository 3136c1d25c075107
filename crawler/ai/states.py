"""AI state handlers: ``BasicAi`` and ``ConfusedAi``.

State machine:
  BASIC    -> BASIC (approach when noticed, attack when adjacent)
  CONFUSED -> CONFUSED (random step, turns_remaining - 1) while turns_remaining >= 0
  CONFUSED -> previous_ai (with a log message) once turns_remaining < 0

Each activation returns the next state; ``take_turn`` stores it back on the
entity. A blocked step is silently dropped and still consumes the turn.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.actions import combat
from crawler.actions.move import move_by, move_towards
from crawler.core import colors
from crawler.core.enums import Domain
from crawler.core.models import AiState, BasicAi, ConfusedAi
from crawler.core.world_state import PLAYER

if TYPE_CHECKING:
    from crawler.core.world_state import World
    from crawler.systems.visibility import VisibilityOracle

logger = logging.getLogger(__name__)


# =====================================================================
# Handlers
# =====================================================================

def _basic_turn(index: int, world: World, oracle: VisibilityOracle) -> AiState:
    """Notice the player when standing in the visible set, then close in or strike."""
    monster = world.entities[index]
    player = world.player
    if not oracle.is_visible(monster.pos.x, monster.pos.y):
        return BasicAi()

    if monster.distance_to(player) >= 2.0:
        move_towards(world, index, player.pos)
    elif player.alive and player.combatant is not None:
        xp = combat.attack(world, index, PLAYER)
        combat.award_xp(monster, xp)
    return BasicAi()


def _confused_turn(index: int, world: World, state: ConfusedAi) -> AiState:
    monster = world.entities[index]
    if state.turns_remaining >= 0:
        dx = world.rng.next_int(Domain.AI_DECISION, -1, 1)
        dy = world.rng.next_int(Domain.AI_DECISION, -1, 1)
        if dx or dy:
            move_by(world, index, dx, dy)
        return ConfusedAi(previous_ai=state.previous_ai, turns_remaining=state.turns_remaining - 1)

    world.log.add(f"The {monster.name} is no longer confused!", colors.RED)
    logger.debug("Entity %d (%s) recovers from confusion", index, monster.name)
    return state.previous_ai


# =====================================================================
# Dispatch
# =====================================================================

def take_turn(index: int, world: World, oracle: VisibilityOracle) -> None:
    """Run one activation for entity *index*. Dead or AI-less entities are skipped."""
    monster = world.entities[index]
    if not monster.alive or monster.ai is None:
        return

    state = monster.ai
    match state:
        case ConfusedAi():
            next_state = _confused_turn(index, world, state)
        case BasicAi():
            next_state = _basic_turn(index, world, oracle)
        case _:
            raise TypeError(f"unknown AI state {state!r}")

    # death clears ai for good
    if monster.alive:
        monster.ai = next_state
