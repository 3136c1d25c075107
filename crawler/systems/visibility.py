"""Visibility oracle interface and the default line-of-sight implementation.

The engine only ever talks to the ``VisibilityOracle`` protocol. Any field
of view algorithm can be plugged in; ``LineOfSightOracle`` is the simple
default the core ships with so it can run headless.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from crawler.core.grid import Grid


class VisibilityOracle(Protocol):
    """Answers point-visibility queries for the last computed origin."""

    def recompute(self, origin_x: int, origin_y: int, radius: int) -> None: ...

    def is_visible(self, x: int, y: int) -> bool: ...


class LineOfSightOracle:
    """Cells within a Euclidean radius that have a clear Bresenham line.

    Sight-blocking cells on the boundary are themselves visible, so walls
    around a lit room are drawn.
    """

    __slots__ = ("_grid", "_visible")

    def __init__(self, grid: Grid) -> None:
        self._grid = grid
        self._visible: set[tuple[int, int]] = set()

    def recompute(self, origin_x: int, origin_y: int, radius: int) -> None:
        grid = self._grid
        visible: set[tuple[int, int]] = set()
        r2 = radius * radius
        for y in range(max(0, origin_y - radius), min(grid.height, origin_y + radius + 1)):
            for x in range(max(0, origin_x - radius), min(grid.width, origin_x + radius + 1)):
                dx = x - origin_x
                dy = y - origin_y
                if dx * dx + dy * dy > r2:
                    continue
                if grid.has_line_of_sight(origin_x, origin_y, x, y):
                    visible.add((x, y))
        self._visible = visible

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible
