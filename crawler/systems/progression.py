"""XP-threshold leveling with a player-chosen stat increase."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.actions import combat
from crawler.core import colors
from crawler.core.enums import StatChoice

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.core.world_state import World
    from crawler.engine.input import Controller

logger = logging.getLogger(__name__)

LEVEL_UP_OPTIONS: tuple[StatChoice, ...] = (
    StatChoice.CONSTITUTION,
    StatChoice.STRENGTH,
    StatChoice.AGILITY,
)


def level_up_xp(level: int, config: GameConfig) -> int:
    """XP needed to advance from *level*."""
    return config.level_up_base + level * config.level_up_factor


def apply_stat(world: World, choice: StatChoice, config: GameConfig) -> None:
    fighter = world.player.combatant
    if fighter is None:
        return
    match choice:
        case StatChoice.CONSTITUTION:
            fighter.max_hp += config.level_up_hp_gain
            fighter.hp += config.level_up_hp_gain
        case StatChoice.STRENGTH:
            fighter.base_power += config.level_up_power_gain
        case StatChoice.AGILITY:
            fighter.defense += config.level_up_defense_gain


def check_level_up(world: World, config: GameConfig, controller: Controller) -> bool:
    """Level the player up at most once if they have enough XP.

    The stat prompt has no cancel path: it repeats until the controller
    answers with one of the offered choices. Nothing changes until then,
    so an interrupted prompt leaves the level-up pending.
    """
    player = world.player
    fighter = player.combatant
    if fighter is None or not player.alive:
        return False
    required = level_up_xp(player.level, config)
    if fighter.xp < required:
        return False

    choice = None
    while choice not in LEVEL_UP_OPTIONS:
        choice = controller.choose_stat(LEVEL_UP_OPTIONS)
    player.level += 1
    world.log.add(
        f"Your battle skills grow stronger! You reached level {player.level}!",
        colors.YELLOW,
    )
    apply_stat(world, choice, config)
    fighter.xp -= required
    logger.info(
        "Level up: level %d, chose %s [xp left %d, power %d, defense %d, max hp %d]",
        player.level, choice.name, fighter.xp,
        combat.power(player, world), combat.defense(player, world), combat.max_hp(player, world),
    )
    return True


def character_sheet(world: World, config: GameConfig) -> dict[str, int]:
    """Zero-turn character screen payload."""
    player = world.player
    fighter = player.combatant
    return {
        "level": player.level,
        "xp": fighter.xp if fighter else 0,
        "xp_to_next": level_up_xp(player.level, config),
        "hp": fighter.hp if fighter else 0,
        "max_hp": combat.max_hp(player, world),
        "power": combat.power(player, world),
        "defense": combat.defense(player, world),
        "depth": world.depth,
    }
