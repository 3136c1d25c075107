"""Core data models and world representation."""

from crawler.core.enums import ActionToken, Domain, ItemKind, PlayerAction, Slot, StatChoice
from crawler.core.grid import Grid, Tile
from crawler.core.models import BasicAi, Combatant, ConfusedAi, Entity, Equipment, Vector2
from crawler.core.world_state import PLAYER, World

__all__ = [
    "ActionToken",
    "BasicAi",
    "Combatant",
    "ConfusedAi",
    "Domain",
    "Entity",
    "Equipment",
    "Grid",
    "ItemKind",
    "PLAYER",
    "PlayerAction",
    "Slot",
    "StatChoice",
    "Tile",
    "Vector2",
    "World",
]
