"""Exception hierarchy for Tombcrawl.

Every error raised by the package derives from TombcrawlError, which
carries a message plus a ``details`` dict of context. Keyword context
passed to any subclass (``path=...``, ``level=...``) is folded into
``details``; ``None`` values are dropped.

Gameplay outcomes are not errors. A blocked move, a cancelled spell or a
full inventory is a return value plus a line in the in-game message log.
Exceptions here mean misconfiguration, a broken invariant or a failed save.

Example:
    >>> raise SaveNotFoundError("No saved game", path="~/.tombcrawl/tombcrawl.db")
"""

from __future__ import annotations

from typing import Any


class TombcrawlError(Exception):
    """Base exception for all Tombcrawl errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.details = dict(details or {})
        self.details.update({key: value for key, value in context.items() if value is not None})
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} [{detail_str}]"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(TombcrawlError):
    """Settings that cannot be used, e.g. rooms larger than the map.

    Context: ``config_key``.
    """


# =============================================================================
# Game Engine
# =============================================================================


class GameEngineError(TombcrawlError):
    """Base exception for simulation errors."""


class InvalidGameStateError(GameEngineError):
    """An operation would break a structural invariant.

    Raised for programming errors such as an inventory index that does not
    exist, a state without a player, or equipping something that is not
    equipment.

    Context: ``entity``, ``index``.
    """


class GenerationError(GameEngineError):
    """The dungeon generator could not produce a level.

    Context: ``level``.
    """


class CombatError(GameEngineError):
    """Combat requested between entities that cannot fight.

    Context: ``attacker``, ``defender``.
    """


# =============================================================================
# Persistence
# =============================================================================


class PersistenceError(TombcrawlError):
    """Save or load failed.

    The main menu recovers from these by treating the save as unavailable.

    Context: ``path``, ``slot``.
    """


class SaveNotFoundError(PersistenceError):
    """No saved game exists in the requested slot."""


class CorruptSaveError(PersistenceError):
    """A saved game exists but cannot be decoded."""


__all__ = [
    "TombcrawlError",
    "ConfigurationError",
    "GameEngineError",
    "InvalidGameStateError",
    "GenerationError",
    "CombatError",
    "PersistenceError",
    "SaveNotFoundError",
    "CorruptSaveError",
]
