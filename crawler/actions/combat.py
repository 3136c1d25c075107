"""Combat resolver: effective stats, damage, death transitions, XP.

Damage is the attacker's effective power minus the defender's effective
defense. There is no minimum damage: anything at or below zero simply has
no effect. Equipment bonuses only apply to the player (entity index 0);
monsters fight with their base stats.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.core import colors
from crawler.core.enums import DeathKind

if TYPE_CHECKING:
    from crawler.core.models import Entity
    from crawler.core.world_state import World

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Effective stats
# ---------------------------------------------------------------------------

def equipped_bonus(world: World, attr: str) -> int:
    """Sum of *attr* over every equipped item in the inventory."""
    return sum(
        getattr(item.equipment, attr)
        for item in world.inventory
        if item.equipment is not None and item.equipment.equipped
    )


def _is_player(entity: Entity, world: World) -> bool:
    return entity is world.player


def power(entity: Entity, world: World) -> int:
    if entity.combatant is None:
        return 0
    bonus = equipped_bonus(world, "power_bonus") if _is_player(entity, world) else 0
    return entity.combatant.base_power + bonus


def defense(entity: Entity, world: World) -> int:
    if entity.combatant is None:
        return 0
    bonus = equipped_bonus(world, "defense_bonus") if _is_player(entity, world) else 0
    return entity.combatant.defense + bonus


def max_hp(entity: Entity, world: World) -> int:
    if entity.combatant is None:
        return 0
    bonus = equipped_bonus(world, "max_hp_bonus") if _is_player(entity, world) else 0
    return entity.combatant.max_hp + bonus


# ---------------------------------------------------------------------------
# Damage & death
# ---------------------------------------------------------------------------

def take_damage(entity: Entity, damage: int, world: World) -> int:
    """Apply *damage* to *entity*; return the XP it was worth if it died, else 0."""
    combatant = entity.combatant
    if combatant is None or not entity.alive:
        return 0
    if damage > 0:
        combatant.hp -= damage
    if combatant.hp <= 0:
        xp = combatant.xp
        die(entity, world)
        return xp
    return 0


def die(entity: Entity, world: World) -> None:
    """Run the death transition for *entity*'s ``on_death`` kind."""
    combatant = entity.combatant
    if combatant is None:
        return
    kind = combatant.on_death
    original_name = entity.name

    match kind:
        case DeathKind.PLAYER:
            world.log.add("You died!", colors.RED)
        case DeathKind.MONSTER:
            world.log.add(
                f"{original_name.capitalize()} is dead! You gain {combatant.xp} experience points.",
                colors.ORANGE,
            )

    entity.glyph = "%"
    entity.color = colors.DARK_RED
    entity.blocks = False
    entity.alive = False
    entity.combatant = None
    entity.ai = None
    entity.name = f"Remains of {original_name}"
    logger.info("Death: %s (%s) at %s", original_name, kind.name, entity.pos)


def attack(world: World, attacker_index: int, defender_index: int) -> int:
    """Resolve one melee attack.

    Returns the XP the defender was worth if this attack killed it; the
    caller credits it to the attacker.
    """
    attacker, defender = world.pair_mut(attacker_index, defender_index)
    if attacker.combatant is None or defender.combatant is None or not defender.alive:
        return 0

    damage = power(attacker, world) - defense(defender, world)
    if damage > 0:
        world.log.add(
            f"{attacker.name.capitalize()} attacks {defender.name} for {damage} hit points.",
            colors.WHITE,
        )
        logger.debug(
            "Entity %d (%s) hits entity %d (%s) for %d [HP: %d]",
            attacker_index, attacker.name, defender_index, defender.name,
            damage, defender.combatant.hp - damage,
        )
        return take_damage(defender, damage, world)

    world.log.add(
        f"{attacker.name.capitalize()} attacks {defender.name} but it has no effect!",
        colors.WHITE,
    )
    return 0


def award_xp(entity: Entity, xp: int) -> None:
    """Credit *xp* to *entity* if it can accumulate experience."""
    if xp and entity.combatant is not None:
        entity.combatant.xp += xp
