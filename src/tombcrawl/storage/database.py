"""SQLite persistence layer for Tombcrawl.

Provides persistent storage for saved games: the whole GameState is
serialized to JSON with pydantic and kept in one row per save slot.

Storage location: ~/.tombcrawl/tombcrawl.db (see ``SessionSettings.save_path``)
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

import pydantic

from tombcrawl.core.config import get_settings
from tombcrawl.core.exceptions import CorruptSaveError, PersistenceError, SaveNotFoundError
from tombcrawl.core.logging import get_logger
from tombcrawl.models.game_state import GameState

logger = get_logger(__name__)

DEFAULT_SLOT = "savegame"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class SaveRecord:
    """Record of a saved game.

    Attributes:
        slot: Save slot name.
        dungeon_level: Dungeon depth at the time of saving.
        status: Session status ("playing" or "dead").
        state_json: Serialized GameState.
        created_at: When the slot was first written.
        updated_at: When the slot was last written.
    """

    slot: str
    dungeon_level: int
    status: str
    state_json: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> SaveRecord:
        """Create from database row."""
        return cls(
            slot=row[0],
            dungeon_level=row[1],
            status=row[2],
            state_json=row[3],
            created_at=datetime.fromisoformat(row[4]),
            updated_at=datetime.fromisoformat(row[5]),
        )

    def to_state(self) -> GameState:
        """Deserialize the stored GameState.

        Raises:
            CorruptSaveError: If the JSON does not describe a valid state.
        """
        try:
            return GameState.model_validate_json(self.state_json)
        except pydantic.ValidationError as exc:
            raise CorruptSaveError(
                f"Save slot {self.slot!r} does not contain a valid game",
                slot=self.slot,
                errors=exc.error_count(),
            ) from exc


# =============================================================================
# Database Class
# =============================================================================


class SaveDatabase:
    """SQLite database of saved games.

    Implements the SaveStore protocol for a single slot, and offers slot
    listing and deletion for the main menu.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None, *, slot: str = DEFAULT_SLOT) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses the configured location.
            slot: Slot used by ``save`` and ``load``.

        Raises:
            PersistenceError: If the database cannot be created.
        """
        if db_path is None:
            self.db_path = get_settings().session.save_path
        else:
            self.db_path = Path(db_path)
        self.slot = slot

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"Cannot create save directory: {exc}",
                path=str(self.db_path),
            ) from exc

        self._init_schema()

        logger.info("Save database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup.

        Raises:
            PersistenceError: On any SQLite failure.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot open save database: {exc}", path=str(self.db_path)) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise PersistenceError(f"Save database error: {exc}", path=str(self.db_path)) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS saves (
                    slot TEXT PRIMARY KEY,
                    dungeon_level INTEGER NOT NULL,
                    status TEXT NOT NULL,
                    state_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_saves_updated
                ON saves(updated_at DESC)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # SaveStore
    # =========================================================================

    def save(self, state: GameState) -> None:
        """Write ``state`` to the configured slot."""
        self.save_slot(state, self.slot)

    def load(self) -> GameState:
        """Read the game in the configured slot.

        Raises:
            SaveNotFoundError: If the slot is empty.
            CorruptSaveError: If the stored data is unreadable.
        """
        return self.load_slot(self.slot)

    # =========================================================================
    # Slot Operations
    # =========================================================================

    def save_slot(self, state: GameState, slot: str) -> SaveRecord:
        """Save a game into ``slot``, replacing what was there.

        Returns:
            Saved record.
        """
        now = datetime.now()
        state_json = state.model_dump_json()

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT created_at FROM saves WHERE slot = ?", (slot,))
            row = cursor.fetchone()
            created_at = datetime.fromisoformat(row[0]) if row else now

            cursor.execute("""
                INSERT OR REPLACE INTO saves
                (slot, dungeon_level, status, state_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (slot, state.dungeon_level, str(state.status), state_json,
                  created_at.isoformat(), now.isoformat()))

        logger.info("Saved game", slot=slot, dungeon_level=state.dungeon_level)

        return SaveRecord(
            slot=slot,
            dungeon_level=state.dungeon_level,
            status=str(state.status),
            state_json=state_json,
            created_at=created_at,
            updated_at=now,
        )

    def get_save(self, slot: str) -> SaveRecord | None:
        """Get a save record by slot.

        Returns:
            Save record if found, None otherwise.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT slot, dungeon_level, status, state_json, created_at, updated_at
                FROM saves WHERE slot = ?
            """, (slot,))
            row = cursor.fetchone()

            if row:
                return SaveRecord.from_row(tuple(row))
            return None

    def load_slot(self, slot: str) -> GameState:
        """Load the game stored in ``slot``.

        Raises:
            SaveNotFoundError: If the slot is empty.
            CorruptSaveError: If the stored data is unreadable.
        """
        record = self.get_save(slot)
        if record is None:
            raise SaveNotFoundError(f"No saved game in slot {slot!r}", path=str(self.db_path), slot=slot)

        state = record.to_state()
        logger.info("Loaded game", slot=slot, dungeon_level=state.dungeon_level)
        return state

    def get_all_saves(self) -> list[SaveRecord]:
        """Get all saves, most recently updated first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT slot, dungeon_level, status, state_json, created_at, updated_at
                FROM saves ORDER BY updated_at DESC
            """)

            return [SaveRecord.from_row(tuple(row)) for row in cursor.fetchall()]

    def delete_save(self, slot: str) -> bool:
        """Delete a save.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM saves WHERE slot = ?", (slot,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted save", slot=slot)

        return deleted


__all__ = [
    "DEFAULT_SLOT",
    "SaveRecord",
    "SaveDatabase",
]
