"""Storage module for Tombcrawl persistence.

Provides SQLite-based storage for saved games.
"""

from tombcrawl.storage.database import (
    DEFAULT_SLOT,
    SaveDatabase,
    SaveRecord,
)

__all__ = [
    "DEFAULT_SLOT",
    "SaveDatabase",
    "SaveRecord",
]
