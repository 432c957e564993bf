"""Session-level state models for Tombcrawl.

This module holds the map, the message log and the ``GameState`` aggregate
root. ``GameState`` is the single serializable source of truth for a play
session: the persistence service round-trips it whole, and every engine
system mutates it in place while it holds the turn.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tombcrawl.core import constants
from tombcrawl.core.constants import Color
from tombcrawl.core.exceptions import InvalidGameStateError
from tombcrawl.models.ecs import Entity, Equipment
from tombcrawl.models.enums import GameStatus


# =============================================================================
# Map
# =============================================================================


class Tile(BaseModel):
    """A single map cell.

    Tiles start as walls; generation carves floors. ``explored`` flips to
    True the first time the tile is in view and never resets.
    """

    model_config = ConfigDict(extra="ignore")

    blocked: bool = True
    explored: bool = False
    block_sight: bool = True

    @classmethod
    def wall(cls) -> Tile:
        return cls(blocked=True, block_sight=True)

    @classmethod
    def floor(cls) -> Tile:
        return cls(blocked=False, block_sight=False)


class GameMap(BaseModel):
    """A 2-D tile grid indexed as ``tiles[x][y]``."""

    model_config = ConfigDict(extra="ignore")

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    tiles: list[list[Tile]] = Field(default_factory=list)

    @model_validator(mode="after")
    def fill_walls(self) -> GameMap:
        """Create an all-wall grid when no tiles are given."""
        if not self.tiles:
            self.tiles = [[Tile.wall() for _ in range(self.height)] for _ in range(self.width)]
        elif len(self.tiles) != self.width or any(len(col) != self.height for col in self.tiles):
            raise ValueError(f"tile grid does not match {self.width}x{self.height}")
        return self

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        return self.tiles[x][y]

    def is_wall(self, x: int, y: int) -> bool:
        """True for blocked tiles; everything outside the map counts as wall."""
        if not self.in_bounds(x, y):
            return True
        return self.tiles[x][y].blocked

    def carve(self, x: int, y: int) -> None:
        """Turn a tile into floor."""
        tile = self.tiles[x][y]
        tile.blocked = False
        tile.block_sight = False

    def floor_tiles(self) -> Iterator[tuple[int, int]]:
        for x in range(self.width):
            for y in range(self.height):
                if not self.tiles[x][y].blocked:
                    yield (x, y)


# =============================================================================
# Message Log
# =============================================================================


class Message(BaseModel):
    """One line of the player-facing message log."""

    model_config = ConfigDict(frozen=True)

    text: str
    color: Color = Field(default=constants.WHITE)


class MessageLog(BaseModel):
    """Bounded FIFO of messages; the oldest line is evicted on overflow."""

    capacity: int = Field(default=6, ge=1)
    messages: list[Message] = Field(default_factory=list)

    def add(self, text: str, color: Color = constants.WHITE) -> None:
        if len(self.messages) >= self.capacity:
            del self.messages[: len(self.messages) - self.capacity + 1]
        self.messages.append(Message(text=text, color=color))

    @property
    def texts(self) -> list[str]:
        return [message.text for message in self.messages]

    def __len__(self) -> int:
        return len(self.messages)


# =============================================================================
# Game State Container
# =============================================================================


class GameState(BaseModel):
    """The complete simulation state of one play session.

    ``entities`` is the world collection with the player at index 0 for
    the lifetime of a dungeon level. ``inventory`` holds the entities the
    player carries.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    status: GameStatus = Field(default=GameStatus.PLAYING)
    dungeon_level: int = Field(default=1, ge=1)
    game_map: GameMap
    fov_recompute: bool = Field(default=True)
    log: MessageLog = Field(default_factory=MessageLog)
    entities: list[Entity] = Field(default_factory=list)
    inventory: list[Entity] = Field(default_factory=list)

    @property
    def player(self) -> Entity:
        if not self.entities:
            raise InvalidGameStateError("Game state has no player entity")
        return self.entities[0]

    def is_player(self, entity: Entity) -> bool:
        return bool(self.entities) and entity is self.entities[0]

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    # -------------------------------------------------------------------------
    # World queries
    # -------------------------------------------------------------------------

    def entities_at(self, x: int, y: int) -> list[Entity]:
        return [entity for entity in self.entities if entity.pos == (x, y)]

    def is_blocked(self, x: int, y: int) -> bool:
        """True if the tile is a wall or a blocking entity stands on it."""
        if self.game_map.is_wall(x, y):
            return True
        return any(entity.blocks and entity.pos == (x, y) for entity in self.entities)

    def index_of(self, entity: Entity) -> int:
        for index, candidate in enumerate(self.entities):
            if candidate is entity:
                return index
        raise InvalidGameStateError(f"{entity.name} is not in the world collection", entity=entity.name)

    # -------------------------------------------------------------------------
    # Inventory queries
    # -------------------------------------------------------------------------

    def inventory_item(self, index: int) -> Entity:
        if not 0 <= index < len(self.inventory):
            raise InvalidGameStateError(
                f"Inventory index {index} out of range",
                index=index,
                inventory_size=len(self.inventory),
            )
        return self.inventory[index]

    def get_equipped_in_slot(self, slot: str) -> int | None:
        """Inventory index of the item equipped in ``slot``, if any."""
        for index, item in enumerate(self.inventory):
            if item.equipment is not None and item.equipment.is_equipped and item.equipment.slot == slot:
                return index
        return None

    def equipped_for(self, entity: Entity) -> list[Equipment]:
        """Equipment currently worn by ``entity``.

        Only the player carries an inventory; every other entity wears nothing.
        """
        if not self.is_player(entity):
            return []
        return [
            item.equipment
            for item in self.inventory
            if item.equipment is not None and item.equipment.is_equipped
        ]


__all__ = [
    "Tile",
    "GameMap",
    "Message",
    "MessageLog",
    "GameState",
]
