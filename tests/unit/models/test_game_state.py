"""Tests for map, message log and GameState models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tombcrawl.core import constants
from tombcrawl.core.exceptions import InvalidGameStateError
from tombcrawl.models.ecs import create_orc, create_player, create_shield, create_sword
from tombcrawl.models.enums import GameStatus
from tombcrawl.models.game_state import GameMap, GameState, MessageLog, Tile


class TestGameMap:
    """Tests for the tile grid."""

    def test_starts_as_walls(self) -> None:
        game_map = GameMap(width=4, height=3)

        assert len(game_map.tiles) == 4
        assert all(len(column) == 3 for column in game_map.tiles)
        assert all(game_map.is_wall(x, y) for x in range(4) for y in range(3))
        assert not any(tile.explored for column in game_map.tiles for tile in column)

    def test_carve(self) -> None:
        game_map = GameMap(width=4, height=3)
        game_map.carve(1, 2)

        assert game_map.tile(1, 2) == Tile.floor()
        assert list(game_map.floor_tiles()) == [(1, 2)]

    def test_out_of_bounds_is_wall(self) -> None:
        game_map = GameMap(width=4, height=3)
        game_map.carve(0, 0)

        assert game_map.is_wall(-1, 0)
        assert game_map.is_wall(4, 0)
        assert not game_map.in_bounds(0, 3)

    def test_mismatched_grid_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GameMap(width=2, height=2, tiles=[[Tile.wall()]])


class TestMessageLog:
    """Tests for the bounded message log."""

    def test_evicts_oldest(self) -> None:
        log = MessageLog(capacity=3)
        for index in range(5):
            log.add(f"line {index}")

        assert log.texts == ["line 2", "line 3", "line 4"]
        assert len(log) == 3

    def test_keeps_color(self) -> None:
        log = MessageLog()
        log.add("ouch", constants.RED)

        assert log.messages[0].color == constants.RED


class TestGameState:
    """Tests for the GameState aggregate root."""

    def test_player_is_index_zero(self, arena_state: GameState) -> None:
        player = arena_state.entities[0]

        assert arena_state.player is player
        assert arena_state.is_player(player)
        assert not arena_state.is_player(create_player(5, 5))

    def test_missing_player(self) -> None:
        state = GameState(game_map=GameMap(width=3, height=3))

        with pytest.raises(InvalidGameStateError):
            _ = state.player

    def test_is_blocked(self, arena_state: GameState) -> None:
        orc = create_orc(7, 7)
        arena_state.entities.append(orc)

        assert arena_state.is_blocked(0, 0)
        assert arena_state.is_blocked(7, 7)
        assert not arena_state.is_blocked(8, 8)

        orc.blocks = False
        assert not arena_state.is_blocked(7, 7)

    def test_index_of_uses_identity(self, arena_state: GameState) -> None:
        orc = create_orc(7, 7)
        twin = create_orc(7, 7)
        arena_state.entities.extend([orc, twin])

        assert arena_state.index_of(twin) == 2
        with pytest.raises(InvalidGameStateError):
            arena_state.index_of(create_orc(7, 7))

    def test_inventory_item_out_of_range(self, arena_state: GameState) -> None:
        with pytest.raises(InvalidGameStateError) as exc_info:
            arena_state.inventory_item(0)

        assert exc_info.value.details["inventory_size"] == 0

    def test_equipped_queries(self, arena_state: GameState) -> None:
        sword = create_sword(0, 0)
        shield = create_shield(0, 0)
        sword.equipment.is_equipped = True
        arena_state.inventory.extend([shield, sword])

        assert arena_state.get_equipped_in_slot(constants.RIGHT_HAND) == 1
        assert arena_state.get_equipped_in_slot(constants.LEFT_HAND) is None
        assert arena_state.equipped_for(arena_state.player) == [sword.equipment]
        assert arena_state.equipped_for(create_orc(1, 1)) == []

    def test_defaults(self, arena_state: GameState) -> None:
        assert arena_state.status == GameStatus.PLAYING
        assert arena_state.is_playing
        assert arena_state.dungeon_level == 1
        assert arena_state.fov_recompute is True

    def test_json_round_trip_preserves_structure(self, arena_state: GameState) -> None:
        arena_state.entities.append(create_orc(6, 6))
        arena_state.inventory.append(create_sword(0, 0))
        arena_state.log.add("hello", constants.GREEN)

        restored = GameState.model_validate_json(arena_state.model_dump_json())

        assert restored == arena_state
        assert restored.player.name == constants.PLAYER_NAME
