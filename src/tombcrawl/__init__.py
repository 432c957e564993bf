"""Tombcrawl - simulation core of a turn-based roguelike.

Python owns the whole simulation: dungeon generation, entities and their
components, combat, monster AI, item effects and progression. Drawing,
input devices and field-of-view computation are collaborators plugged in
through the protocols in ``tombcrawl.engine.interfaces``.

Example:
    >>> from tombcrawl import GameSession, RaycastVisibility
    >>>
    >>> session = GameSession.new_game(
    ...     visibility=RaycastVisibility(),
    ...     input_service=my_input,
    ...     presenter=my_presenter,
    ... )
    >>> session.run()

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas and ECS components.
    dungeon: Room-and-corridor level generation and spawn tables.
    engine: Turn loop, combat, AI, effects, inventory and progression.
    storage: SQLite save store.
    app: Main menu wiring.
"""

from __future__ import annotations

# Core
from tombcrawl.core.config import Settings, get_settings
from tombcrawl.core.exceptions import TombcrawlError
from tombcrawl.core.logging import configure_logging, get_logger

# Dungeon
from tombcrawl.dungeon.generator import DungeonGenerator, GeneratedLevel

# Engine
from tombcrawl.engine.fov import RaycastVisibility
from tombcrawl.engine.interfaces import IntentKind, PlayerAction, PlayerIntent
from tombcrawl.engine.loop import GameSession

# ECS Models
from tombcrawl.models.ecs import Entity, create_player
from tombcrawl.models.game_state import GameMap, GameState


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TombcrawlError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Entity",
    "GameMap",
    "GameState",
    "create_player",
    # Dungeon
    "DungeonGenerator",
    "GeneratedLevel",
    # Engine
    "GameSession",
    "RaycastVisibility",
    "IntentKind",
    "PlayerAction",
    "PlayerIntent",
]
