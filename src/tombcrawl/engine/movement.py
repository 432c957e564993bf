"""Grid movement under the shared collision rule.

A step lands only when the destination is not a wall and no blocking
entity stands there. Otherwise it is dropped without retry.
"""

from __future__ import annotations

import math

from tombcrawl.models.ecs import Entity
from tombcrawl.models.game_state import GameState


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def move_by(state: GameState, entity: Entity, dx: int, dy: int) -> bool:
    """Move ``entity`` one step by (dx, dy) if the destination is free.

    Returns:
        True if the entity moved.
    """
    x, y = entity.x + dx, entity.y + dy
    if state.is_blocked(x, y):
        return False
    entity.set_pos(x, y)
    return True


def move_towards(state: GameState, entity: Entity, target_x: int, target_y: int) -> bool:
    """Take one step toward a tile.

    The direction vector is normalized and rounded to a unit grid step,
    so diagonal approaches move diagonally.
    """
    dx = target_x - entity.x
    dy = target_y - entity.y
    distance = math.hypot(dx, dy)
    if distance == 0:
        return False
    return move_by(
        state,
        entity,
        _round_half_away(dx / distance),
        _round_half_away(dy / distance),
    )


__all__ = ["move_by", "move_towards"]
