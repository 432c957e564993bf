"""Default field-of-view service based on Bresenham rays.

Rays are cast from the viewer to every tile inside a circular radius.
A ray stops at the first tile that blocks sight; that tile itself is
visible, so walls bordering a lit room are shown.
"""

from __future__ import annotations

from collections.abc import Iterator

from tombcrawl.core.logging import get_logger
from tombcrawl.models.game_state import GameMap


logger = get_logger(__name__)


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    """Yield each integer (x, y) on the line from (x0, y0) to (x1, y1)."""
    dx, dy = abs(x1 - x0), abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


class RaycastVisibility:
    """VisibilityService implementation over a GameMap."""

    def __init__(self) -> None:
        self._map: GameMap | None = None
        self._visible: set[tuple[int, int]] = set()

    @property
    def visible_tiles(self) -> frozenset[tuple[int, int]]:
        return frozenset(self._visible)

    def reset(self, game_map: GameMap) -> None:
        self._map = game_map
        self._visible.clear()

    def recompute(self, x: int, y: int, radius: int) -> None:
        self._visible.clear()
        game_map = self._map
        if game_map is None or not game_map.in_bounds(x, y):
            return

        for ty in range(y - radius, y + radius + 1):
            for tx in range(x - radius, x + radius + 1):
                if (tx - x) ** 2 + (ty - y) ** 2 > radius * radius:
                    continue
                if not game_map.in_bounds(tx, ty):
                    continue
                for rx, ry in bresenham(x, y, tx, ty):
                    self._visible.add((rx, ry))
                    if game_map.tile(rx, ry).block_sight and (rx, ry) != (x, y):
                        break

        logger.debug("FOV recomputed", origin=(x, y), radius=radius, visible=len(self._visible))

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) in self._visible


__all__ = ["RaycastVisibility", "bresenham"]
