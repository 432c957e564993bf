"""Random room-and-corridor dungeon generation.

The generator makes a fixed number of attempts to drop a randomly sized
room somewhere on an all-wall map. Rooms that overlap an accepted room are
discarded. Every accepted room after the first is joined to the previous
one with an L-shaped tunnel, which guarantees that all floor tiles are
connected. The last room receives the stairs down.

Example:
    >>> gen = DungeonGenerator(get_settings().dungeon, seed=42)
    >>> level = gen.generate(1)
    >>> level.game_map.is_wall(*level.player_start)
    False
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from tombcrawl.core.config import DungeonSettings
from tombcrawl.core.exceptions import GenerationError
from tombcrawl.core.logging import get_logger
from tombcrawl.dungeon.rect import Rect
from tombcrawl.dungeon.tables import (
    ITEM_CHANCES,
    ITEM_FACTORIES,
    MAX_ITEMS_PER_ROOM,
    MAX_MONSTERS_PER_ROOM,
    MONSTER_CHANCES,
    MONSTER_FACTORIES,
    SpawnKind,
    from_dungeon_level,
    weights_for,
)
from tombcrawl.models.ecs import Entity, create_stairs
from tombcrawl.models.game_state import GameMap


logger = get_logger(__name__)


@dataclass
class GeneratedLevel:
    """Result of generating one dungeon level.

    Attributes:
        game_map: The carved tile grid.
        player_start: Center of the first accepted room.
        entities: Monsters, items and the stairs, in placement order.
        rooms: Accepted rooms in acceptance order.
    """

    game_map: GameMap
    player_start: tuple[int, int]
    entities: list[Entity] = field(default_factory=list)
    rooms: list[Rect] = field(default_factory=list)

    @property
    def stairs(self) -> Entity:
        return self.entities[-1]


class DungeonGenerator:
    """Builds dungeon levels from DungeonSettings and a random source.

    Attributes:
        settings: Map dimensions and room sizing.
        rng: Random source; pass a seeded one for reproducible levels.
    """

    def __init__(
        self,
        settings: DungeonSettings,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Dungeon generation settings.
            seed: Seed for a private random source (ignored when rng is given).
            rng: Shared random source, typically the session's.
        """
        self.settings = settings
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, level: int) -> GeneratedLevel:
        """Generate a fresh level.

        Args:
            level: Dungeon depth, which drives the spawn tables.

        Returns:
            The map, the player's start position and the placed entities.

        Raises:
            GenerationError: If no room could be placed.
        """
        cfg = self.settings
        game_map = GameMap(width=cfg.map_width, height=cfg.map_height)
        rooms: list[Rect] = []
        entities: list[Entity] = []
        player_start: tuple[int, int] | None = None

        for _ in range(cfg.max_rooms):
            w = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
            h = self.rng.randint(cfg.room_min_size, cfg.room_max_size)
            x = self.rng.randint(0, cfg.map_width - w - 1)
            y = self.rng.randint(0, cfg.map_height - h - 1)
            new_room = Rect.from_size(x, y, w, h)

            if any(new_room.intersects(other) for other in rooms):
                continue

            self._carve_room(game_map, new_room)
            new_x, new_y = new_room.center

            if not rooms:
                # The start tile is reserved before any contents are placed
                player_start = (new_x, new_y)
            else:
                prev_x, prev_y = rooms[-1].center
                if self.rng.random() < 0.5:
                    self._carve_h_tunnel(game_map, prev_x, new_x, prev_y)
                    self._carve_v_tunnel(game_map, prev_y, new_y, new_x)
                else:
                    self._carve_v_tunnel(game_map, prev_y, new_y, prev_x)
                    self._carve_h_tunnel(game_map, prev_x, new_x, new_y)

            self._place_objects(new_room, game_map, entities, level, player_start)
            rooms.append(new_room)

        if not rooms or player_start is None:
            raise GenerationError("No room could be placed", level=level)

        stairs_x, stairs_y = rooms[-1].center
        entities.append(create_stairs(stairs_x, stairs_y))

        logger.info(
            "Dungeon generated",
            level=level,
            rooms=len(rooms),
            entities=len(entities),
            player_start=player_start,
        )
        return GeneratedLevel(
            game_map=game_map,
            player_start=player_start,
            entities=entities,
            rooms=rooms,
        )

    # -------------------------------------------------------------------------
    # Carving
    # -------------------------------------------------------------------------

    @staticmethod
    def _carve_room(game_map: GameMap, room: Rect) -> None:
        for x, y in room.interior():
            game_map.carve(x, y)

    @staticmethod
    def _carve_h_tunnel(game_map: GameMap, x1: int, x2: int, y: int) -> None:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            game_map.carve(x, y)

    @staticmethod
    def _carve_v_tunnel(game_map: GameMap, y1: int, y2: int, x: int) -> None:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            game_map.carve(x, y)

    # -------------------------------------------------------------------------
    # Room contents
    # -------------------------------------------------------------------------

    def _place_objects(
        self,
        room: Rect,
        game_map: GameMap,
        entities: list[Entity],
        level: int,
        reserved: tuple[int, int] | None,
    ) -> None:
        """Drop monsters and items into a room.

        A placement whose tile is blocked (wall, blocking entity, or the
        reserved player start) is skipped, so a room may end up with fewer
        entities than rolled.
        """

        def is_blocked(x: int, y: int) -> bool:
            if game_map.is_wall(x, y) or (x, y) == reserved:
                return True
            return any(entity.blocks and entity.pos == (x, y) for entity in entities)

        num_monsters = self.rng.randint(0, from_dungeon_level(MAX_MONSTERS_PER_ROOM, level))
        monster_weights = weights_for(MONSTER_CHANCES, level)
        for _ in range(num_monsters):
            x = self.rng.randint(room.x1 + 1, room.x2 - 1)
            y = self.rng.randint(room.y1 + 1, room.y2 - 1)
            if is_blocked(x, y):
                logger.debug("Monster placement rejected", x=x, y=y)
                continue
            kind = self._weighted_choice(monster_weights)
            entities.append(MONSTER_FACTORIES[kind](x, y))

        num_items = self.rng.randint(0, from_dungeon_level(MAX_ITEMS_PER_ROOM, level))
        item_weights = weights_for(ITEM_CHANCES, level)
        for _ in range(num_items):
            x = self.rng.randint(room.x1 + 1, room.x2 - 1)
            y = self.rng.randint(room.y1 + 1, room.y2 - 1)
            if is_blocked(x, y):
                logger.debug("Item placement rejected", x=x, y=y)
                continue
            kind = self._weighted_choice(item_weights)
            entities.append(ITEM_FACTORIES[kind](x, y))

    def _weighted_choice(self, weights: dict[SpawnKind, int]) -> SpawnKind:
        kinds = list(weights)
        return self.rng.choices(kinds, weights=[weights[kind] for kind in kinds], k=1)[0]


__all__ = ["DungeonGenerator", "GeneratedLevel"]
