"""Experience thresholds, level-up choices and the character sheet."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tombcrawl.core import constants
from tombcrawl.core.config import ProgressionSettings
from tombcrawl.core.logging import get_logger
from tombcrawl.engine.combat import defense, max_hp, power


if TYPE_CHECKING:
    from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)

LEVEL_UP_HEADER = "Level up! Choose a stat to raise:\n"


def level_up_xp(settings: ProgressionSettings, level: int) -> int:
    """Xp needed to advance past ``level``."""
    return settings.level_up_base + level * settings.level_up_factor


def level_up_options(session: GameSession) -> list[str]:
    progression = session.settings.progression
    fighter = session.state.player.fighter
    return [
        f"Constitution (+{progression.hp_per_level} HP, from {fighter.base_max_hp})",
        f"Strength (+{progression.power_per_level} attack, from {fighter.base_power})",
        f"Agility (+{progression.defense_per_level} defense, from {fighter.base_defense})",
    ]


def check_level_up(session: GameSession) -> int:
    """Level the player up as long as their xp meets the threshold.

    Each level-up subtracts the threshold (carrying the remainder over),
    then blocks on a three-way stat choice. The question is asked again
    until one of the three options is picked.

    Returns:
        The number of levels gained.
    """
    state = session.state
    progression = session.settings.progression
    player = state.player
    fighter = player.fighter
    if fighter is None:
        return 0

    gained = 0
    while fighter.xp >= (threshold := level_up_xp(progression, player.level)):
        player.level += 1
        fighter.xp -= threshold
        gained += 1
        state.log.add(
            f"Your battle skills grow stronger! You reached level {player.level}!",
            constants.YELLOW,
        )

        choice: int | None = None
        while choice is None:
            options = level_up_options(session)
            choice = session.presenter.menu(LEVEL_UP_HEADER, options)
            if choice is not None and not 0 <= choice < len(options):
                choice = None

        match choice:
            case 0:
                fighter.base_max_hp += progression.hp_per_level
                fighter.hp += progression.hp_per_level
            case 1:
                fighter.base_power += progression.power_per_level
            case 2:
                fighter.base_defense += progression.defense_per_level

        logger.info("Player levelled up", level=player.level, choice=choice, xp=fighter.xp)
    return gained


def character_sheet(session: GameSession) -> str:
    """Text of the character information box."""
    state = session.state
    player = state.player
    xp = player.fighter.xp if player.fighter is not None else 0
    return (
        "Character information\n\n"
        f"Level: {player.level}\n"
        f"Experience: {xp}\n"
        f"Experience to level up: {level_up_xp(session.settings.progression, player.level)}\n\n"
        f"Maximum HP: {max_hp(state, player)}\n"
        f"Attack: {power(state, player)}\n"
        f"Defense: {defense(state, player)}"
    )


__all__ = [
    "LEVEL_UP_HEADER",
    "level_up_xp",
    "level_up_options",
    "check_level_up",
    "character_sheet",
]
