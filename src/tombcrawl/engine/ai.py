"""Monster AI state machine.

Each AI-bearing entity is stepped once per world turn. A step never mutates
the AI value in place: it returns the state the entity should hold next,
and the session stores it. Confusion wraps the AI it replaces and hands it
back, exactly once, when it wears off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tombcrawl.core import constants
from tombcrawl.core.logging import get_logger
from tombcrawl.engine.combat import attack
from tombcrawl.engine.movement import move_by, move_towards
from tombcrawl.models.ecs import AIState, BasicAI, ConfusedAI, Entity


if TYPE_CHECKING:
    from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)

MELEE_DISTANCE = 2.0
"""Monsters at least this far from the player walk instead of attacking."""


def take_turn(session: GameSession, monster: Entity) -> AIState | None:
    """Run one AI step for ``monster``.

    Returns:
        The AI state the monster holds after this step (None when a
        confusion with nothing to restore wears off).
    """
    match monster.ai:
        case BasicAI() as ai:
            return _basic_turn(session, monster, ai)
        case ConfusedAI() as ai:
            return _confused_turn(session, monster, ai)
        case _:
            return None


def _basic_turn(session: GameSession, monster: Entity, ai: BasicAI) -> AIState:
    state = session.state
    if not session.visibility.is_visible(monster.x, monster.y):
        return ai

    player = state.player
    if monster.distance_to(player) >= MELEE_DISTANCE:
        move_towards(state, monster, player.x, player.y)
    elif player.fighter is not None and player.fighter.hp > 0:
        attack(state, monster, player)
    return ai


def _confused_turn(session: GameSession, monster: Entity, ai: ConfusedAI) -> AIState | None:
    if ai.turns_remaining > 0:
        rng = session.rng
        move_by(session.state, monster, rng.randint(-1, 1), rng.randint(-1, 1))
        return ConfusedAI(turns_remaining=ai.turns_remaining - 1, previous=ai.previous)

    session.state.log.add(f"The {monster.name} is no longer confused!", constants.RED)
    logger.debug("Confusion wore off", name=monster.name, restored=getattr(ai.previous, "kind", None))
    return ai.previous


__all__ = ["take_turn", "MELEE_DISTANCE"]
