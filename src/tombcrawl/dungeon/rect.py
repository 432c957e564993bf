"""Axis-aligned rectangles used while laying out rooms."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """A room footprint with ``x2 = x1 + w`` and ``y2 = y1 + h``.

    The outer ring of a rect is wall; only ``(x1, x2)`` x ``(y1, y2)``
    exclusive is carved to floor.
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(x, y, x + w, y + h)

    @property
    def center(self) -> tuple[int, int]:
        return ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    def intersects(self, other: Rect) -> bool:
        """Inclusive overlap test, so rooms that share an edge intersect."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )

    def interior(self) -> list[tuple[int, int]]:
        """Every tile carved to floor for this room."""
        return [
            (x, y)
            for x in range(self.x1 + 1, self.x2)
            for y in range(self.y1 + 1, self.y2)
        ]


__all__ = ["Rect"]
