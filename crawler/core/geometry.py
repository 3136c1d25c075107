"""Axis-aligned room rectangles used during generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from crawler.core.models import Vector2


@dataclass(frozen=True, slots=True)
class Rect:
    """Room bounds. The border cells stay wall; only the interior is carved."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> Vector2:
        return Vector2((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: Rect) -> bool:
        """Inclusive-bounds overlap test; rooms that merely touch intersect."""
        return (
            self.x1 <= other.x2 and self.x2 >= other.x1
            and self.y1 <= other.y2 and self.y2 >= other.y1
        )

    def interior(self) -> Iterator[Vector2]:
        for y in range(self.y1 + 1, self.y2):
            for x in range(self.x1 + 1, self.x2):
                yield Vector2(x, y)
