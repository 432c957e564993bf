"""Entity Component System (ECS) models for Tombcrawl.

This module implements a Pydantic V2-based ECS where:
- Entities are positioned game objects (player, monsters, items, stairs)
- Components are optional capability records attached to an entity
  (Fighter, AI, Item, Equipment)
- Systems in ``tombcrawl.engine`` operate on entities that carry the
  components they need

Death handling, item effects and AI are tagged variants (enums and a
discriminated union for AI) rather than callables, so the whole state
serializes to JSON.
"""

from __future__ import annotations

import math
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from tombcrawl.core import constants
from tombcrawl.core.constants import Color
from tombcrawl.models.enums import AIKind, DeathBehavior, ItemKind


# =============================================================================
# Base Component
# =============================================================================


class Component(BaseModel):
    """Base class for all mutable ECS components.

    Components are pure data containers with no behavior. They attach to
    entities to provide specific capabilities.
    """

    model_config = ConfigDict(
        frozen=False,  # Components are mutated by the engine
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# Fighter
# =============================================================================


class Fighter(Component):
    """Hit points, combat stats and death behavior.

    ``hp`` is clamped only when healing. Damage may push it below zero,
    which is what triggers the death behavior.
    """

    base_max_hp: int = Field(ge=1, description="Max HP before equipment bonuses")
    hp: int = Field(description="Current hit points (may be negative)")
    base_defense: int = Field(default=0, description="Defense before equipment bonuses")
    base_power: int = Field(default=0, description="Power before equipment bonuses")
    xp: int = Field(default=0, ge=0, description="XP held (player) or awarded on death (monster)")
    death: DeathBehavior = Field(default=DeathBehavior.NONE)


# =============================================================================
# AI (discriminated union)
# =============================================================================


class BasicAI(BaseModel):
    """Chase the player while visible, attack when adjacent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = AIKind.BASIC.value


class ConfusedAI(BaseModel):
    """Stumble around randomly, then restore the AI it replaced.

    ``previous`` holds the AI that was active when the confusion started.
    It may itself be any AI variant, including another confusion.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["confused"] = AIKind.CONFUSED.value
    turns_remaining: int = Field(description="Random steps left before recovering")
    previous: AIState | None = Field(default=None, description="AI restored on recovery")


AIState = Annotated[BasicAI | ConfusedAI, Field(discriminator="kind")]
"""Any AI variant; transitions produce new values rather than mutating."""

ConfusedAI.model_rebuild()


# =============================================================================
# Equipment
# =============================================================================


class Equipment(Component):
    """Stat bonuses granted while equipped in a named slot.

    Slots are free-form strings so new ones need no code change; two items
    with the same slot string conflict.
    """

    slot: str = Field(min_length=1, description="Slot name, e.g. 'right hand'")
    is_equipped: bool = Field(default=False)
    power_bonus: int = Field(default=0)
    defense_bonus: int = Field(default=0)
    max_hp_bonus: int = Field(default=0)


# =============================================================================
# Entity
# =============================================================================


class Entity(BaseModel):
    """A positioned game object with optional capability components.

    An entity's identity is its index in the owning collection; index 0
    of the world collection is always the player.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
        extra="ignore",
    )

    x: int = Field(default=0)
    y: int = Field(default=0)
    glyph: str = Field(min_length=1, max_length=1, description="Character drawn for this entity")
    name: str
    color: Color = Field(default=constants.WHITE)
    blocks: bool = Field(default=False, description="Whether it blocks movement")
    always_visible: bool = Field(default=False, description="Drawn on explored tiles out of view")
    level: int = Field(default=0, ge=0, description="Character level (player only)")

    # Optional components
    fighter: Fighter | None = Field(default=None)
    ai: AIState | None = Field(default=None)
    item: ItemKind | None = Field(default=None)
    equipment: Equipment | None = Field(default=None)

    @property
    def pos(self) -> tuple[int, int]:
        return (self.x, self.y)

    def set_pos(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def distance(self, x: int, y: int) -> float:
        """Euclidean distance to a tile."""
        return math.hypot(x - self.x, y - self.y)

    def distance_to(self, other: Entity) -> float:
        """Euclidean distance to another entity."""
        return self.distance(other.x, other.y)


# =============================================================================
# Factory Functions
# =============================================================================


def create_player(x: int = 0, y: int = 0) -> Entity:
    """Create the player character at level 1."""
    return Entity(
        x=x,
        y=y,
        glyph="@",
        name=constants.PLAYER_NAME,
        color=constants.WHITE,
        blocks=True,
        level=1,
        fighter=Fighter(
            base_max_hp=100,
            hp=100,
            base_defense=1,
            base_power=2,
            xp=0,
            death=DeathBehavior.PLAYER,
        ),
    )


def create_orc(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="o",
        name="orc",
        color=constants.DESATURATED_GREEN,
        blocks=True,
        fighter=Fighter(
            base_max_hp=20,
            hp=20,
            base_defense=0,
            base_power=4,
            xp=35,
            death=DeathBehavior.MONSTER,
        ),
        ai=BasicAI(),
    )


def create_troll(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="T",
        name="troll",
        color=constants.DARKER_GREEN,
        blocks=True,
        fighter=Fighter(
            base_max_hp=30,
            hp=30,
            base_defense=2,
            base_power=8,
            xp=100,
            death=DeathBehavior.MONSTER,
        ),
        ai=BasicAI(),
    )


def create_healing_potion(x: int, y: int) -> Entity:
    return Entity(x=x, y=y, glyph="!", name="healing potion", color=constants.VIOLET, item=ItemKind.HEAL)


def create_lightning_scroll(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="#",
        name="scroll of lightning bolt",
        color=constants.LIGHT_YELLOW,
        item=ItemKind.LIGHTNING,
    )


def create_fireball_scroll(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="#",
        name="scroll of fireball",
        color=constants.LIGHT_YELLOW,
        item=ItemKind.FIREBALL,
    )


def create_confusion_scroll(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="#",
        name="scroll of confusion",
        color=constants.LIGHT_YELLOW,
        item=ItemKind.CONFUSE,
    )


def create_sword(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="/",
        name="sword",
        color=constants.SKY,
        item=ItemKind.NONE,
        equipment=Equipment(slot=constants.RIGHT_HAND, power_bonus=3),
    )


def create_shield(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="[",
        name="shield",
        color=constants.DARKER_ORANGE,
        item=ItemKind.NONE,
        equipment=Equipment(slot=constants.LEFT_HAND, defense_bonus=1),
    )


def create_dagger(x: int = 0, y: int = 0) -> Entity:
    """Create the dagger every new character starts with."""
    return Entity(
        x=x,
        y=y,
        glyph="-",
        name="dagger",
        color=constants.SKY,
        item=ItemKind.NONE,
        equipment=Equipment(slot=constants.RIGHT_HAND, power_bonus=2),
    )


def create_stairs(x: int, y: int) -> Entity:
    return Entity(
        x=x,
        y=y,
        glyph="<",
        name=constants.STAIRS_NAME,
        color=constants.WHITE,
        always_visible=True,
    )


__all__ = [
    # Components
    "Component",
    "Fighter",
    "BasicAI",
    "ConfusedAI",
    "AIState",
    "Equipment",
    # Entities
    "Entity",
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
