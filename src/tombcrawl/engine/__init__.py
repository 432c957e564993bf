"""Simulation engine for Tombcrawl.

Submodules:
    interfaces: Collaborator protocols and player intents.
    fov: Default ray-cast visibility service.
    movement: Collision-checked grid movement.
    combat: Derived stats, damage, death and xp.
    ai: Monster AI state machine.
    targeting: Interactive tile/monster selection.
    effects: Consumable item effects.
    inventory: Pickup, use, drop and equipment.
    progression: Level-up thresholds and choices.
    loop: The GameSession turn orchestrator.
"""

from __future__ import annotations

from tombcrawl.engine.combat import attack, defense, heal, max_hp, power, take_damage
from tombcrawl.engine.fov import RaycastVisibility
from tombcrawl.engine.interfaces import (
    InputService,
    IntentKind,
    MouseButton,
    PlayerAction,
    PlayerIntent,
    PresentationService,
    SaveStore,
    VisibilityService,
)
from tombcrawl.engine.loop import GameSession
from tombcrawl.engine.movement import move_by, move_towards


__all__ = [
    # Session
    "GameSession",
    # Interfaces
    "InputService",
    "IntentKind",
    "MouseButton",
    "PlayerAction",
    "PlayerIntent",
    "PresentationService",
    "SaveStore",
    "VisibilityService",
    # Services
    "RaycastVisibility",
    # Systems
    "attack",
    "defense",
    "heal",
    "max_hp",
    "power",
    "take_damage",
    "move_by",
    "move_towards",
]
