"""Tests for the SQLite save database."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from tombcrawl.core.exceptions import CorruptSaveError, PersistenceError, SaveNotFoundError
from tombcrawl.engine.interfaces import SaveStore
from tombcrawl.models.ecs import BasicAI, ConfusedAI, create_dagger, create_orc
from tombcrawl.models.enums import GameStatus
from tombcrawl.models.game_state import GameState
from tombcrawl.storage.database import DEFAULT_SLOT, SaveDatabase


@pytest.fixture
def db(tmp_path: Path) -> SaveDatabase:
    return SaveDatabase(tmp_path / "saves" / "test.db")


class TestSaveDatabase:
    """Tests for SaveDatabase."""

    def test_satisfies_protocol(self, db: SaveDatabase) -> None:
        assert isinstance(db, SaveStore)

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "deep" / "er" / "saves.db"

        SaveDatabase(path)

        assert path.exists()

    def test_round_trip(self, db: SaveDatabase, arena_state: GameState) -> None:
        """Test that a saved game loads back with its AI stack and equipment."""
        state = arena_state
        orc = create_orc(8, 8)
        orc.ai = ConfusedAI(turns_remaining=4, previous=BasicAI())
        state.entities.append(orc)
        dagger = create_dagger()
        dagger.equipment.is_equipped = True
        state.inventory.append(dagger)
        state.dungeon_level = 3
        state.log.add("Hello")

        db.save(state)
        loaded = db.load()

        assert loaded == state
        assert isinstance(loaded.entities[1].ai, ConfusedAI)
        assert loaded.entities[1].ai.previous == BasicAI()
        assert loaded.inventory[0].equipment.is_equipped is True

    def test_empty_slot(self, db: SaveDatabase) -> None:
        with pytest.raises(SaveNotFoundError):
            db.load()

    def test_not_found_is_persistence_error(self, db: SaveDatabase) -> None:
        with pytest.raises(PersistenceError):
            db.load_slot("nothing-here")

    def test_corrupt_save(self, db: SaveDatabase) -> None:
        with sqlite3.connect(str(db.db_path)) as conn:
            conn.execute(
                "INSERT INTO saves VALUES (?, ?, ?, ?, ?, ?)",
                (DEFAULT_SLOT, 1, "playing", "{not json", "2024-01-01T00:00:00", "2024-01-01T00:00:00"),
            )
        conn.close()

        with pytest.raises(CorruptSaveError):
            db.load()

    def test_overwrite_keeps_created_at(self, db: SaveDatabase, arena_state: GameState) -> None:
        first = db.save_slot(arena_state, "a")
        arena_state.dungeon_level = 2
        second = db.save_slot(arena_state, "a")

        assert second.created_at == first.created_at
        assert db.load_slot("a").dungeon_level == 2

    def test_record_metadata(self, db: SaveDatabase, arena_state: GameState) -> None:
        arena_state.status = GameStatus.DEAD
        db.save_slot(arena_state, "a")

        record = db.get_save("a")

        assert record is not None
        assert record.status == "dead"
        assert record.dungeon_level == 1

    def test_list_and_delete(self, db: SaveDatabase, arena_state: GameState) -> None:
        db.save_slot(arena_state, "a")
        db.save_slot(arena_state, "b")

        assert {record.slot for record in db.get_all_saves()} == {"a", "b"}
        assert db.delete_save("a") is True
        assert db.delete_save("a") is False
        assert [record.slot for record in db.get_all_saves()] == ["b"]

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(PersistenceError):
            SaveDatabase(blocker / "saves.db")
