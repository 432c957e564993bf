"""Procedural dungeon generation.

Submodules:
    rect: Room rectangles with center and overlap helpers.
    tables: Per-level spawn tables for monsters and items.
    generator: Room placement, tunnel carving and content placement.
"""

from __future__ import annotations

from tombcrawl.dungeon.generator import DungeonGenerator, GeneratedLevel
from tombcrawl.dungeon.rect import Rect
from tombcrawl.dungeon.tables import (
    ITEM_CHANCES,
    MONSTER_CHANCES,
    ItemType,
    MonsterType,
    from_dungeon_level,
)


__all__ = [
    "DungeonGenerator",
    "GeneratedLevel",
    "Rect",
    "ItemType",
    "MonsterType",
    "ITEM_CHANCES",
    "MONSTER_CHANCES",
    "from_dungeon_level",
]
