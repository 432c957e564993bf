"""Spawn tables: what appears in a room, and how often, per dungeon level.

Each table is a sequence of ``(value, min_level)`` pairs. The value that
applies is the one with the highest ``min_level`` not above the current
dungeon level; below every threshold the value is 0.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import TypeVar

from tombcrawl.models.ecs import (
    Entity,
    create_confusion_scroll,
    create_fireball_scroll,
    create_healing_potion,
    create_lightning_scroll,
    create_orc,
    create_shield,
    create_sword,
    create_troll,
)


LevelTable = Sequence[tuple[int, int]]


class MonsterType(StrEnum):
    ORC = "orc"
    TROLL = "troll"


class ItemType(StrEnum):
    HEAL = "heal"
    LIGHTNING = "lightning"
    FIREBALL = "fireball"
    CONFUSE = "confuse"
    SWORD = "sword"
    SHIELD = "shield"


SpawnKind = TypeVar("SpawnKind", MonsterType, ItemType)


MAX_MONSTERS_PER_ROOM: LevelTable = ((2, 1), (3, 4), (5, 6))
MAX_ITEMS_PER_ROOM: LevelTable = ((1, 1), (2, 4))

MONSTER_CHANCES: dict[MonsterType, LevelTable] = {
    MonsterType.ORC: ((80, 1),),
    MonsterType.TROLL: ((15, 3), (30, 5), (60, 7)),
}

ITEM_CHANCES: dict[ItemType, LevelTable] = {
    ItemType.HEAL: ((35, 1),),
    ItemType.LIGHTNING: ((25, 4),),
    ItemType.FIREBALL: ((25, 6),),
    ItemType.CONFUSE: ((10, 2),),
    ItemType.SWORD: ((5, 4),),
    ItemType.SHIELD: ((15, 8),),
}

MONSTER_FACTORIES: dict[MonsterType, Callable[[int, int], Entity]] = {
    MonsterType.ORC: create_orc,
    MonsterType.TROLL: create_troll,
}

ITEM_FACTORIES: dict[ItemType, Callable[[int, int], Entity]] = {
    ItemType.HEAL: create_healing_potion,
    ItemType.LIGHTNING: create_lightning_scroll,
    ItemType.FIREBALL: create_fireball_scroll,
    ItemType.CONFUSE: create_confusion_scroll,
    ItemType.SWORD: create_sword,
    ItemType.SHIELD: create_shield,
}


def from_dungeon_level(table: LevelTable, level: int) -> int:
    """Return the table value in effect at ``level`` (0 below every threshold)."""
    for value, min_level in sorted(table, key=lambda entry: entry[1], reverse=True):
        if level >= min_level:
            return value
    return 0


def weights_for(chances: dict[SpawnKind, LevelTable], level: int) -> dict[SpawnKind, int]:
    """Resolve a chance table to concrete weights for ``level``."""
    return {kind: from_dungeon_level(table, level) for kind, table in chances.items()}


__all__ = [
    "LevelTable",
    "MonsterType",
    "ItemType",
    "SpawnKind",
    "MAX_MONSTERS_PER_ROOM",
    "MAX_ITEMS_PER_ROOM",
    "MONSTER_CHANCES",
    "ITEM_CHANCES",
    "MONSTER_FACTORIES",
    "ITEM_FACTORIES",
    "from_dungeon_level",
    "weights_for",
]
