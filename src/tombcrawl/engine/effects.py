"""Item and spell effects.

Every consumable ``ItemKind`` maps to one effect function returning
``UseResult.USED`` (consume the item) or ``UseResult.CANCELLED`` (keep it).
A cancelled effect always leaves a message in the log explaining why.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tombcrawl.core import constants
from tombcrawl.core.logging import get_logger
from tombcrawl.engine.combat import award_xp, heal, max_hp, take_damage
from tombcrawl.engine.targeting import closest_monster, target_monster, target_tile
from tombcrawl.models.ecs import ConfusedAI
from tombcrawl.models.enums import ItemKind, UseResult


if TYPE_CHECKING:
    from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)


def cast_heal(session: GameSession) -> UseResult:
    """Heal the player by a fixed amount, up to the effective maximum."""
    state = session.state
    player = state.player
    if player.fighter is None:
        return UseResult.CANCELLED

    if player.fighter.hp >= max_hp(state, player):
        state.log.add("You are already at full health.", constants.RED)
        return UseResult.CANCELLED

    state.log.add("Your wounds start to feel better!", constants.LIGHT_VIOLET)
    heal(state, player, session.settings.spells.heal_amount)
    return UseResult.USED


def cast_lightning(session: GameSession) -> UseResult:
    """Strike the nearest visible enemy in range, ignoring its defense."""
    state = session.state
    spells = session.settings.spells
    monster = closest_monster(session, spells.lightning_range)
    if monster is None:
        state.log.add("No enemy is close enough to strike.", constants.RED)
        return UseResult.CANCELLED

    state.log.add(
        f"A lightning bolt strikes the {monster.name} with a loud thunder! "
        f"The damage is {spells.lightning_damage} hit points.",
        constants.LIGHT_BLUE,
    )
    xp = take_damage(state, monster, spells.lightning_damage)
    if xp is not None:
        award_xp(state, xp)
    logger.debug("Lightning cast", target=monster.name, damage=spells.lightning_damage)
    return UseResult.USED


def cast_fireball(session: GameSession) -> UseResult:
    """Burn every fighter within the blast radius of a chosen tile.

    The player is not spared when standing inside the blast.
    """
    state = session.state
    spells = session.settings.spells
    state.log.add(
        "Left-click a target tile for the fireball, or right-click to cancel.",
        constants.LIGHT_CYAN,
    )
    target = target_tile(session)
    if target is None:
        return UseResult.CANCELLED

    x, y = target
    state.log.add(
        f"The fireball explodes, burning everything within {spells.fireball_radius} tiles!",
        constants.ORANGE,
    )

    xp_to_gain = 0
    for entity in list(state.entities):
        if entity.fighter is None or entity.distance(x, y) > spells.fireball_radius:
            continue
        state.log.add(
            f"The {entity.name} gets burned for {spells.fireball_damage} hit points.",
            constants.ORANGE,
        )
        xp = take_damage(state, entity, spells.fireball_damage)
        if xp is not None and not state.is_player(entity):
            xp_to_gain += xp

    if xp_to_gain:
        award_xp(state, xp_to_gain)
    logger.debug("Fireball cast", target=target, xp=xp_to_gain)
    return UseResult.USED


def cast_confuse(session: GameSession) -> UseResult:
    """Replace a chosen monster's AI with a temporary confusion."""
    state = session.state
    spells = session.settings.spells
    state.log.add(
        "Left-click an enemy to confuse it, or right-click to cancel.",
        constants.LIGHT_CYAN,
    )
    monster = target_monster(session, spells.confuse_range)
    if monster is None:
        return UseResult.CANCELLED

    monster.ai = ConfusedAI(turns_remaining=spells.confuse_num_turns, previous=monster.ai)
    state.log.add(
        f"The eyes of the {monster.name} look vacant, as he starts to stumble around!",
        constants.LIGHT_GREEN,
    )
    logger.debug("Confusion cast", target=monster.name, turns=spells.confuse_num_turns)
    return UseResult.USED


def apply_item_effect(session: GameSession, kind: ItemKind) -> UseResult:
    """Dispatch an item kind to its effect."""
    match kind:
        case ItemKind.HEAL:
            return cast_heal(session)
        case ItemKind.LIGHTNING:
            return cast_lightning(session)
        case ItemKind.FIREBALL:
            return cast_fireball(session)
        case ItemKind.CONFUSE:
            return cast_confuse(session)
        case _:
            return UseResult.CANCELLED


__all__ = [
    "cast_heal",
    "cast_lightning",
    "cast_fireball",
    "cast_confuse",
    "apply_item_effect",
]
