"""Inventory & equipment: pickup, drop, slot-exclusive equip/unequip.

None of these actions cost a turn. Slot exclusivity is enforced when an
item is equipped: whatever already occupies the slot is unequipped first.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from crawler.core import colors
from crawler.core.world_state import PLAYER

if TYPE_CHECKING:
    from crawler.config import GameConfig
    from crawler.core.enums import Slot
    from crawler.core.world_state import World

logger = logging.getLogger(__name__)


def equipped_in_slot(world: World, slot: Slot) -> int | None:
    """Inventory index of the item equipped in *slot*, if any."""
    for i, item in enumerate(world.inventory):
        if item.equipment is not None and item.equipment.equipped and item.equipment.slot == slot:
            return i
    return None


def equip(world: World, inventory_index: int) -> None:
    item = world.inventory[inventory_index]
    equipment = item.equipment
    if equipment is None:
        world.log.add(f"Can't equip {item.name} because it's not an Equipment.", colors.RED)
        return
    if equipment.equipped:
        return
    occupant = equipped_in_slot(world, equipment.slot)
    if occupant is not None:
        unequip(world, occupant)
    equipment.equipped = True
    world.log.add(f"Equipped {item.name} on {equipment.slot.label}.", colors.LIGHT_GREEN)


def unequip(world: World, inventory_index: int) -> None:
    item = world.inventory[inventory_index]
    equipment = item.equipment
    if equipment is None:
        world.log.add(f"Can't unequip {item.name} because it's not an Equipment.", colors.RED)
        return
    if not equipment.equipped:
        return
    equipment.equipped = False
    world.log.add(f"Unequipped {item.name} from {equipment.slot.label}.", colors.LIGHT_YELLOW)


def toggle_equipment(world: World, inventory_index: int) -> None:
    item = world.inventory[inventory_index]
    if item.equipment is None:
        world.log.add(f"Can't equip {item.name} because it's not an Equipment.", colors.RED)
        return
    if item.equipment.equipped:
        unequip(world, inventory_index)
    else:
        equip(world, inventory_index)


def pick_up(world: World, index: int, config: GameConfig) -> bool:
    """Move entity *index* from the map into the inventory.

    Fails (message logged, item left on the ground) when the inventory is
    full or the entity is not an item. Equipment is auto-equipped when its
    slot is free.
    """
    if index == PLAYER:
        return False
    entity = world.entities[index]
    if entity.item is None:
        world.log.add(f"The {entity.name} cannot be picked up.", colors.RED)
        return False
    if len(world.inventory) >= config.inventory_capacity:
        world.log.add(f"Your inventory is full, cannot pick up {entity.name}.", colors.RED)
        return False

    item = world.remove_entity(index)
    world.inventory.append(item)
    world.log.add(f"You picked up a {item.name}!", colors.LIGHT_GREEN)
    logger.debug("Picked up %s (%d/%d)", item.name, len(world.inventory), config.inventory_capacity)

    if item.equipment is not None and equipped_in_slot(world, item.equipment.slot) is None:
        equip(world, len(world.inventory) - 1)
    return True


def pick_up_here(world: World, config: GameConfig) -> bool:
    """Pick up the first item lying under the player."""
    index = world.item_at(world.player.pos)
    if index is None:
        world.log.add("There is nothing here to pick up.", colors.LIGHT_GREY)
        return False
    return pick_up(world, index, config)


def drop(world: World, inventory_index: int) -> None:
    """Unequip if needed and place the item at the player's position."""
    if not 0 <= inventory_index < len(world.inventory):
        world.log.add("That is not an item.", colors.RED)
        return
    if world.inventory[inventory_index].equipment is not None:
        unequip(world, inventory_index)
    item = world.inventory.pop(inventory_index)
    item.pos = world.player.pos
    world.add_entity(item)
    world.log.add(f"You dropped a {item.name}.", colors.YELLOW)
