"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for one game session."""

    # World
    seed: int = 42
    map_width: int = 80
    map_height: int = 45

    # Rooms
    room_min_size: int = 6
    room_max_size: int = 10
    max_rooms: int = 30
    max_generation_attempts: int = 10   # full regenerations before giving up

    # Field of view
    torch_radius: int = 10

    # Population: (value, min_depth) step tables
    max_monsters_by_depth: tuple = ((2, 1), (3, 4), (5, 6))
    max_items_by_depth: tuple = ((1, 1), (2, 4))

    # Inventory
    inventory_capacity: int = 26

    # Items
    heal_amount: int = 40
    lightning_damage: int = 40
    lightning_range: int = 5
    confuse_range: int = 8
    confuse_num_turns: int = 10
    fireball_radius: int = 3
    fireball_damage: int = 25

    # Leveling
    level_up_base: int = 200
    level_up_factor: int = 150
    level_up_hp_gain: int = 20
    level_up_power_gain: int = 1
    level_up_defense_gain: int = 1

    # Player
    player_hp: int = 100
    player_defense: int = 1
    player_power: int = 2

    # Logging
    log_level: str = "INFO"

    # Persistence
    save_file: str = "savegame.json"
