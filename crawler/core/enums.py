"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class ActionToken(IntEnum):
    """Discrete action tokens yielded by the input source."""

    MOVE_N = 0
    MOVE_S = 1
    MOVE_W = 2
    MOVE_E = 3
    MOVE_NW = 4
    MOVE_NE = 5
    MOVE_SW = 6
    MOVE_SE = 7
    WAIT = 8
    PICKUP = 9
    INVENTORY = 10      # choose an item and use it
    DROP = 11
    DESCEND = 12
    CHARACTER = 13
    FULLSCREEN = 14
    QUIT = 15


@unique
class PlayerAction(IntEnum):
    """Classification of one tick."""

    TOOK_TURN = 0
    DID_NOT_TAKE_TURN = 1
    EXIT = 2


@unique
class DeathKind(IntEnum):
    """Which death transition a combatant undergoes."""

    PLAYER = 0
    MONSTER = 1


@unique
class ItemKind(IntEnum):
    """Item behaviours. Presence on an entity marks it as pickable."""

    HEAL = 0
    LIGHTNING = 1
    CONFUSE = 2
    FIREBALL = 3
    EQUIPMENT = 4


@unique
class Slot(IntEnum):
    """Equipment attachment points."""

    LEFT_HAND = 0
    RIGHT_HAND = 1
    HEAD = 2

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")


@unique
class UseResult(IntEnum):
    """Outcome of using an inventory item."""

    USED_UP = 0
    USED_AND_KEPT = 1
    CANCELLED = 2


@unique
class StatChoice(IntEnum):
    """Level-up stat increases."""

    CONSTITUTION = 0    # max HP
    STRENGTH = 1        # power
    AGILITY = 2         # defense


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    SPAWN = 1
    LOOT = 2
    AI_DECISION = 3
