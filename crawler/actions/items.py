"""Item-effect resolver: one closed match over ``ItemKind``.

Every effect returns a ``UseResult``. ``USED_UP`` removes the item from the
inventory, ``USED_AND_KEPT`` leaves it, and ``CANCELLED`` means nothing in
the world changed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.actions import combat
from crawler.actions.inventory import toggle_equipment
from crawler.actions.targeting import target_monster, target_tile
from crawler.core import colors
from crawler.core.enums import ItemKind, UseResult
from crawler.core.models import BasicAi, ConfusedAi
from crawler.core.world_state import PLAYER

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.core.world_state import World
    from crawler.engine.input import Controller
    from crawler.systems.visibility import VisibilityOracle

logger = logging.getLogger(__name__)


def closest_monster(world: World, oracle: VisibilityOracle, max_range: float) -> int | None:
    """Nearest living, visible, AI-driven entity within *max_range* of the player."""
    player = world.player
    closest: int | None = None
    closest_dist = float("inf")
    for index, entity in enumerate(world.entities):
        if index == PLAYER or entity.ai is None or entity.combatant is None or not entity.alive:
            continue
        if not oracle.is_visible(entity.pos.x, entity.pos.y):
            continue
        dist = player.distance_to(entity)
        if dist <= max_range and dist < closest_dist:
            closest = index
            closest_dist = dist
    return closest


def use_item(
    world: World,
    inventory_index: int,
    config: GameConfig,
    oracle: VisibilityOracle,
    controller: Controller,
) -> UseResult:
    """Apply the effect of inventory item *inventory_index*."""
    if not 0 <= inventory_index < len(world.inventory):
        world.log.add("That is not an item.", colors.RED)
        return UseResult.CANCELLED

    item = world.inventory[inventory_index]
    kind = item.item
    match kind:
        case ItemKind.HEAL:
            result = _cast_heal(world, config)
        case ItemKind.LIGHTNING:
            result = _cast_lightning(world, config, oracle)
        case ItemKind.CONFUSE:
            result = _cast_confuse(world, config, oracle, controller)
        case ItemKind.FIREBALL:
            result = _cast_fireball(world, config, oracle, controller)
        case ItemKind.EQUIPMENT:
            toggle_equipment(world, inventory_index)
            result = UseResult.USED_AND_KEPT
        case _:
            world.log.add(f"The {item.name} cannot be used.", colors.WHITE)
            result = UseResult.CANCELLED

    if result == UseResult.USED_UP:
        world.inventory.pop(inventory_index)
    elif result == UseResult.CANCELLED:
        world.log.add("Cancelled", colors.WHITE)
    logger.debug("Used %s -> %s", item.name, result.name)
    return result


def _cast_heal(world: World, config: GameConfig) -> UseResult:
    player = world.player
    fighter = player.combatant
    if fighter is None:
        return UseResult.CANCELLED
    ceiling = combat.max_hp(player, world)
    if fighter.hp >= ceiling:
        world.log.add("You are already at full health.", colors.RED)
        return UseResult.CANCELLED
    world.log.add("Your wounds start to feel better!", colors.LIGHT_VIOLET)
    fighter.hp = min(fighter.hp + config.heal_amount, ceiling)
    return UseResult.USED_UP


def _cast_lightning(world: World, config: GameConfig, oracle: VisibilityOracle) -> UseResult:
    target = closest_monster(world, oracle, config.lightning_range)
    if target is None:
        world.log.add("No enemy is close enough to strike.", colors.RED)
        return UseResult.CANCELLED
    monster = world.entities[target]
    world.log.add(
        f"A lightning bolt strikes the {monster.name} with a loud thunder! "
        f"The damage is {config.lightning_damage} hit points.",
        colors.LIGHT_BLUE,
    )
    xp = combat.take_damage(monster, config.lightning_damage, world)
    combat.award_xp(world.player, xp)
    return UseResult.USED_UP


def _cast_confuse(
    world: World,
    config: GameConfig,
    oracle: VisibilityOracle,
    controller: Controller,
) -> UseResult:
    world.log.add(
        "Pick an enemy to confuse it, or cancel.", colors.LIGHT_CYAN,
    )
    target = target_monster(world, oracle, controller, config.confuse_range)
    if target is None:
        return UseResult.CANCELLED
    monster = world.entities[target]
    previous = monster.ai if monster.ai is not None else BasicAi()
    monster.ai = ConfusedAi(previous_ai=previous, turns_remaining=config.confuse_num_turns)
    world.log.add(
        f"The eyes of {monster.name} look vacant, as he starts to stumble around!",
        colors.LIGHT_GREEN,
    )
    return UseResult.USED_UP


def _cast_fireball(
    world: World,
    config: GameConfig,
    oracle: VisibilityOracle,
    controller: Controller,
) -> UseResult:
    world.log.add(
        "Pick a target tile for the fireball, or cancel.", colors.LIGHT_CYAN,
    )
    pos = target_tile(world, oracle, controller)
    if pos is None:
        return UseResult.CANCELLED
    world.log.add(
        f"The fireball explodes, burning everything within {config.fireball_radius} tiles!",
        colors.ORANGE,
    )
    burned_xp = 0
    for index, entity in enumerate(world.entities):
        if entity.combatant is None or not entity.alive:
            continue
        if entity.distance(pos.x, pos.y) > config.fireball_radius:
            continue
        world.log.add(
            f"The {entity.name} gets burned for {config.fireball_damage} hit points.",
            colors.ORANGE,
        )
        xp = combat.take_damage(entity, config.fireball_damage, world)
        if index != PLAYER:
            burned_xp += xp
    combat.award_xp(world.player, burned_xp)
    return UseResult.USED_UP
