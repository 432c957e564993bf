"""Pydantic models for Tombcrawl.

Modules:
    enums: Tagged variants the engine dispatches on.
    ecs: Components, the Entity model and entity factories.
    game_state: Tiles, map, message log and the GameState aggregate root.
"""

from __future__ import annotations

from tombcrawl.models.ecs import (
    AIState,
    BasicAI,
    Component,
    ConfusedAI,
    Entity,
    Equipment,
    Fighter,
    create_confusion_scroll,
    create_dagger,
    create_fireball_scroll,
    create_healing_potion,
    create_lightning_scroll,
    create_orc,
    create_player,
    create_shield,
    create_stairs,
    create_sword,
    create_troll,
)
from tombcrawl.models.enums import (
    AIKind,
    DeathBehavior,
    GameStatus,
    ItemKind,
    UseResult,
)
from tombcrawl.models.game_state import (
    GameMap,
    GameState,
    Message,
    MessageLog,
    Tile,
)


__all__ = [
    # Enums
    "AIKind",
    "DeathBehavior",
    "GameStatus",
    "ItemKind",
    "UseResult",
    # Components
    "Component",
    "Fighter",
    "BasicAI",
    "ConfusedAI",
    "AIState",
    "Equipment",
    # Entities
    "Entity",
    # State
    "Tile",
    "GameMap",
    "Message",
    "MessageLog",
    "GameState",
    # Factories
    "create_player",
    "create_orc",
    "create_troll",
    "create_healing_potion",
    "create_lightning_scroll",
    "create_fireball_scroll",
    "create_confusion_scroll",
    "create_sword",
    "create_shield",
    "create_dagger",
    "create_stairs",
]
