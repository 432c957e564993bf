"""Enumerations shared by the Tombcrawl models.

Every variant that the simulation dispatches on (death behavior, item
effect, session status) is a StrEnum so it serializes to a readable value
in save files and can be matched directly by the engine.
"""

from __future__ import annotations

from enum import StrEnum


class DeathBehavior(StrEnum):
    """What happens when a fighter's hit points drop to zero or below."""

    PLAYER = "player"
    """End the game and turn the player into a corpse."""

    MONSTER = "monster"
    """Turn the monster into inert remains."""

    NONE = "none"
    """Nothing happens; the fighter lingers with non-positive hp."""


class ItemKind(StrEnum):
    """Effect triggered when an item is used from the inventory."""

    HEAL = "heal"
    LIGHTNING = "lightning"
    FIREBALL = "fireball"
    CONFUSE = "confuse"
    NONE = "none"
    """No effect of its own; equipment uses this and toggles instead."""


class AIKind(StrEnum):
    """Discriminator for the AI state variants."""

    BASIC = "basic"
    CONFUSED = "confused"


class GameStatus(StrEnum):
    """Lifecycle status of a play session."""

    PLAYING = "playing"
    DEAD = "dead"


class UseResult(StrEnum):
    """Outcome of using an item."""

    USED = "used"
    """The effect happened; consumables are removed from the inventory."""

    CANCELLED = "cancelled"
    """Nothing happened; the item stays in the inventory."""


__all__ = [
    "DeathBehavior",
    "ItemKind",
    "AIKind",
    "GameStatus",
    "UseResult",
]
