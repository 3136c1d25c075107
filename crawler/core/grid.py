"""Tile grid for one dungeon level."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Tile:
    """One map cell. ``explored`` only ever flips from False to True."""

    blocked: bool
    block_sight: bool
    explored: bool = False

    @classmethod
    def wall(cls) -> Tile:
        return cls(blocked=True, block_sight=True)


class Grid:
    """2D tile grid backed by a flat list for cache-friendly access."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._tiles: list[Tile] = [Tile.wall() for _ in range(width * height)]

    @classmethod
    def from_tiles(cls, width: int, height: int, tiles: list[Tile]) -> Grid:
        """Rebuild a grid from a row-major tile list (used when loading)."""
        if len(tiles) != width * height:
            raise ValueError(f"expected {width * height} tiles, got {len(tiles)}")
        grid = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._tiles = list(tiles)
        return grid

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds_xy(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self._tiles[self._idx(x, y)]

    def tiles(self) -> list[Tile]:
        """Row-major view of every tile."""
        return self._tiles

    def is_blocked(self, x: int, y: int) -> bool:
        """Out-of-bounds cells count as blocked."""
        if not self.in_bounds_xy(x, y):
            return True
        return self._tiles[self._idx(x, y)].blocked

    def blocks_sight(self, x: int, y: int) -> bool:
        if not self.in_bounds_xy(x, y):
            return True
        return self._tiles[self._idx(x, y)].block_sight

    # -- mutation --

    def carve(self, x: int, y: int) -> None:
        """Turn a cell into floor, keeping its explored flag."""
        tile = self._tiles[self._idx(x, y)]
        tile.blocked = False
        tile.block_sight = False

    def mark_explored(self, x: int, y: int) -> None:
        self._tiles[self._idx(x, y)].explored = True

    # -- line-of-sight (Bresenham) --

    def has_line_of_sight(self, x0: int, y0: int, x1: int, y1: int) -> bool:
        """Check if there is a clear line of sight between two positions.

        Uses Bresenham's line algorithm. Returns False if any sight-blocking
        tile lies on the line between (x0,y0) and (x1,y1), exclusive of endpoints.
        """
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        cx, cy = x0, y0
        while True:
            if cx == x1 and cy == y1:
                return True
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                cx += sx
            if e2 < dx:
                err += dx
                cy += sy
            if (cx != x1 or cy != y1) and self.blocks_sight(cx, cy):
                return False

    # -- comparison --

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._tiles == other._tiles
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
