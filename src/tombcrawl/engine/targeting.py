"""Interactive target selection and target queries.

Tile and monster selection block the turn: they keep rendering and polling
the input service until the player left-clicks a valid tile or cancels
with a right click or the cancel intent. There is no timeout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tombcrawl.core.logging import get_logger
from tombcrawl.engine.interfaces import IntentKind, MouseButton
from tombcrawl.models.ecs import Entity


if TYPE_CHECKING:
    from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)

_CANCEL_KINDS = frozenset({IntentKind.CANCEL, IntentKind.EXIT})


def target_tile(session: GameSession, max_range: float | None = None) -> tuple[int, int] | None:
    """Wait for a left click on a visible tile.

    Args:
        session: The running session.
        max_range: Maximum distance from the player, or None for no limit.

    Returns:
        The chosen (x, y), or None if the player cancelled.
    """
    while True:
        session.refresh_fov()
        session.render()
        intent = session.input_service.next_intent()
        if intent is None:
            continue
        if intent.kind in _CANCEL_KINDS:
            logger.debug("Targeting cancelled")
            return None
        if intent.kind != IntentKind.CLICK:
            continue
        if intent.button == MouseButton.RIGHT:
            logger.debug("Targeting cancelled")
            return None

        in_fov = session.visibility.is_visible(intent.x, intent.y)
        in_range = max_range is None or session.state.player.distance(intent.x, intent.y) <= max_range
        if in_fov and in_range:
            return (intent.x, intent.y)


def target_monster(session: GameSession, max_range: float | None = None) -> Entity | None:
    """Wait for a left click on a fighter other than the player.

    Clicks on tiles without such a fighter are ignored and polling
    continues.
    """
    state = session.state
    while True:
        position = target_tile(session, max_range)
        if position is None:
            return None
        for entity in state.entities:
            if entity.pos == position and entity.fighter is not None and not state.is_player(entity):
                return entity


def closest_monster(session: GameSession, max_range: int) -> Entity | None:
    """Nearest visible fighter (not the player) closer than ``max_range + 1``.

    Ties keep the entity with the lowest index.
    """
    state = session.state
    player = state.player
    closest: Entity | None = None
    closest_distance = float(max_range + 1)
    for entity in state.entities:
        if state.is_player(entity) or entity.fighter is None:
            continue
        if not session.visibility.is_visible(entity.x, entity.y):
            continue
        distance = player.distance_to(entity)
        if distance < closest_distance:
            closest = entity
            closest_distance = distance
    return closest


def names_at(session: GameSession, x: int, y: int) -> str:
    """Comma-separated names of the entities on a visible tile."""
    if not session.visibility.is_visible(x, y):
        return ""
    return ", ".join(entity.name for entity in session.state.entities_at(x, y))


__all__ = ["target_tile", "target_monster", "closest_monster", "names_at"]
