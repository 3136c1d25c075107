"""Engine systems: RNG, dungeon generation, spawning, visibility, progression."""

from crawler.systems.rng import DeterministicRNG
from crawler.systems.dungeon import generate
from crawler.systems.visibility import LineOfSightOracle, VisibilityOracle

__all__ = ["DeterministicRNG", "LineOfSightOracle", "VisibilityOracle", "generate"]
