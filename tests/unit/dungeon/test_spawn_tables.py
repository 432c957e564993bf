"""Tests for per-level spawn tables."""

from __future__ import annotations

import pytest

from tombcrawl.dungeon.tables import (
    ITEM_CHANCES,
    ITEM_FACTORIES,
    MAX_ITEMS_PER_ROOM,
    MAX_MONSTERS_PER_ROOM,
    MONSTER_CHANCES,
    MONSTER_FACTORIES,
    ItemType,
    MonsterType,
    from_dungeon_level,
    weights_for,
)


class TestFromDungeonLevel:
    """Tests for threshold lookups."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [(1, 2), (3, 2), (4, 3), (5, 3), (6, 5), (20, 5)],
    )
    def test_max_monsters(self, level: int, expected: int) -> None:
        assert from_dungeon_level(MAX_MONSTERS_PER_ROOM, level) == expected

    def test_below_every_threshold_is_zero(self) -> None:
        assert from_dungeon_level(((25, 4),), 3) == 0

    def test_unsorted_table(self) -> None:
        assert from_dungeon_level(((60, 7), (15, 3), (30, 5)), 6) == 30

    def test_max_items(self) -> None:
        assert from_dungeon_level(MAX_ITEMS_PER_ROOM, 1) == 1
        assert from_dungeon_level(MAX_ITEMS_PER_ROOM, 4) == 2


class TestWeights:
    """Tests for weight resolution."""

    def test_monster_weights_by_depth(self) -> None:
        assert weights_for(MONSTER_CHANCES, 1) == {MonsterType.ORC: 80, MonsterType.TROLL: 0}
        assert weights_for(MONSTER_CHANCES, 7) == {MonsterType.ORC: 80, MonsterType.TROLL: 60}

    def test_item_weights_first_level(self) -> None:
        weights = weights_for(ITEM_CHANCES, 1)

        assert weights[ItemType.HEAL] == 35
        assert all(weight == 0 for kind, weight in weights.items() if kind != ItemType.HEAL)

    def test_weights_keyed_by_own_kind(self) -> None:
        """Test that each table resolves to weights keyed by its own type."""
        monster_weights = weights_for(MONSTER_CHANCES, 8)
        item_weights = weights_for(ITEM_CHANCES, 8)

        assert set(monster_weights) == set(MonsterType)
        assert set(item_weights) == set(ItemType)
        assert all(isinstance(weight, int) for weight in item_weights.values())

    def test_every_type_has_a_factory(self) -> None:
        assert set(MONSTER_FACTORIES) == set(MonsterType)
        assert set(ITEM_FACTORIES) == set(ItemType)
