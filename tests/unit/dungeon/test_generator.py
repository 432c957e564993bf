"""Tests for dungeon generation."""

from __future__ import annotations

import random
from collections import deque

import pytest

from tombcrawl.core import constants
from tombcrawl.core.config import DungeonSettings, Settings
from tombcrawl.dungeon.generator import DungeonGenerator, GeneratedLevel
from tombcrawl.dungeon.rect import Rect
from tombcrawl.models.game_state import GameMap


def _reachable(game_map: GameMap, start: tuple[int, int]) -> set[tuple[int, int]]:
    """Floor tiles 4-connected to ``start``."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) not in seen and not game_map.is_wall(nx, ny):
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


class TestRect:
    """Tests for room rectangles."""

    def test_from_size(self) -> None:
        assert Rect.from_size(2, 3, 4, 5) == Rect(2, 3, 6, 8)

    def test_center(self) -> None:
        assert Rect(0, 0, 7, 5).center == (3, 2)

    def test_shared_edge_intersects(self) -> None:
        """Test that rooms touching at the border count as overlapping."""
        assert Rect(0, 0, 5, 5).intersects(Rect(5, 0, 10, 5))
        assert not Rect(0, 0, 5, 5).intersects(Rect(6, 0, 10, 5))

    def test_interior_excludes_border(self) -> None:
        interior = Rect(0, 0, 3, 3).interior()
        assert interior == [(1, 1), (1, 2), (2, 1), (2, 2)]


class TestDungeonGenerator:
    """Tests for DungeonGenerator."""

    @pytest.fixture
    def levels(self, settings: Settings) -> list[GeneratedLevel]:
        """Levels generated from a handful of seeds and depths."""
        return [
            DungeonGenerator(settings.dungeon, seed=seed).generate(level)
            for seed in range(8)
            for level in (1, 4, 8)
        ]

    def test_room_interiors_are_floor(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            for room in level.rooms:
                assert all(not level.game_map.is_wall(x, y) for x, y in room.interior())

    def test_accepted_rooms_do_not_overlap(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            for index, room in enumerate(level.rooms):
                assert not any(room.intersects(other) for other in level.rooms[index + 1 :])

    def test_rooms_inside_map(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            for room in level.rooms:
                assert room.x1 >= 0 and room.y1 >= 0
                assert room.x2 < level.game_map.width
                assert room.y2 < level.game_map.height

    def test_spawn_is_first_room_center(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            assert level.player_start == level.rooms[0].center
            assert not level.game_map.is_wall(*level.player_start)

    def test_every_floor_tile_reachable_from_spawn(self, levels: list[GeneratedLevel]) -> None:
        """Test that tunnels connect all rooms into one region."""
        for level in levels:
            reachable = _reachable(level.game_map, level.player_start)
            assert reachable == set(level.game_map.floor_tiles())

    def test_stairs_in_last_room(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            stairs = level.stairs
            assert stairs.name == constants.STAIRS_NAME
            assert stairs.always_visible is True
            assert stairs.pos == level.rooms[-1].center

    def test_nothing_spawns_on_player_start(self, levels: list[GeneratedLevel]) -> None:
        """Test that room contents never land on the reserved start tile."""
        for level in levels:
            occupants = [e for e in level.entities[:-1] if e.pos == level.player_start]
            assert occupants == []

    def test_entities_on_floor_and_not_stacked(self, levels: list[GeneratedLevel]) -> None:
        for level in levels:
            blocking = [e.pos for e in level.entities if e.blocks]
            assert len(blocking) == len(set(blocking))
            assert all(not level.game_map.is_wall(*e.pos) for e in level.entities)

    def test_same_seed_same_level(self, settings: Settings) -> None:
        first = DungeonGenerator(settings.dungeon, seed=99).generate(3)
        second = DungeonGenerator(settings.dungeon, seed=99).generate(3)

        assert first.game_map == second.game_map
        assert [e.name for e in first.entities] == [e.name for e in second.entities]

    def test_shared_rng(self, settings: Settings) -> None:
        rng = random.Random(5)
        generator = DungeonGenerator(settings.dungeon, rng=rng)

        assert generator.rng is rng

    def test_no_trolls_on_first_level(self, levels: list[GeneratedLevel]) -> None:
        for level in levels[::3]:
            assert all(e.name != "troll" for e in level.entities)

    def test_default_map_size(self) -> None:
        level = DungeonGenerator(DungeonSettings(), seed=1).generate(1)

        assert (level.game_map.width, level.game_map.height) == (80, 43)
        assert 1 <= len(level.rooms) <= 30
