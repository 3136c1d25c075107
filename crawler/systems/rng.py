"""Domain-separated deterministic RNG using xxhash.

Formula: RNG_Value = Hash(Seed, Domain, DrawIndex)

Each domain keeps its own draw cursor, so map generation, spawning, loot
and AI never shift each other's streams. The cursors are saved with the
world, which lets a loaded game continue exactly where it stopped.
"""

from __future__ import annotations

import struct
from typing import Mapping, Sequence

import xxhash

from crawler.core.enums import Domain


class DeterministicRNG:
    """Counter-based pseudo-random number generator.

    Each draw is a pure function of (seed, domain, cursor); the only
    mutable state is one integer cursor per domain.
    """

    __slots__ = ("_seed", "_cursors")

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int, cursors: Mapping[int, int] | None = None) -> None:
        self._seed = seed
        self._cursors: dict[int, int] = {int(d): 0 for d in Domain}
        if cursors:
            for domain, cursor in cursors.items():
                self._cursors[int(domain)] = cursor

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, index: int) -> int:
        payload = struct.pack("<qiq", self._seed, int(domain), index)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        index = self._cursors[int(domain)]
        self._cursors[int(domain)] = index + 1
        return self._hash(domain, index) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain) < probability

    def weighted_index(self, domain: Domain, weights: Sequence[int]) -> int:
        """Pick an index with probability proportional to its weight."""
        total = sum(weights)
        if total <= 0:
            raise ValueError("weighted_index needs at least one positive weight")
        roll = self.next_int(domain, 1, total)
        running = 0
        for i, w in enumerate(weights):
            running += w
            if roll <= running:
                return i
        return len(weights) - 1

    # -- persistence --

    def state(self) -> dict[int, int]:
        """Snapshot of the per-domain cursors."""
        return dict(self._cursors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeterministicRNG):
            return NotImplemented
        return self._seed == other._seed and self._cursors == other._cursors

    def __repr__(self) -> str:
        return f"DeterministicRNG(seed={self._seed}, cursors={self._cursors})"
