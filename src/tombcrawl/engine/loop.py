"""Game session orchestrator.

This module implements the turn loop that ties the simulation together.
One player intent is resolved per turn; if it consumed a turn, every
AI-bearing entity then acts once, in descending index order.

The GameSession is the central coordinator for:
- Session lifecycle (new game, load, save, level transitions)
- Intent resolution (move/attack, pickup, inventory, drop, stairs)
- Level-up checks at every turn boundary
- Monster turns and FOV bookkeeping

It owns no drawing, input or storage code of its own: those arrive as
collaborators satisfying the protocols in ``tombcrawl.engine.interfaces``.
"""

from __future__ import annotations

import random

from tombcrawl.core import constants
from tombcrawl.core.config import Settings, get_settings
from tombcrawl.core.logging import bind_context, get_logger
from tombcrawl.dungeon.generator import DungeonGenerator
from tombcrawl.engine.ai import take_turn
from tombcrawl.engine.combat import attack, heal, max_hp
from tombcrawl.engine.interfaces import (
    InputService,
    IntentKind,
    PlayerAction,
    PlayerIntent,
    PresentationService,
    SaveStore,
    VisibilityService,
)
from tombcrawl.engine.inventory import (
    DROP_HEADER,
    USE_HEADER,
    drop_item,
    inventory_menu,
    pick_up,
    use_item,
)
from tombcrawl.engine.movement import move_by
from tombcrawl.engine.progression import character_sheet, check_level_up
from tombcrawl.models.ecs import create_dagger, create_player
from tombcrawl.models.game_state import GameState, MessageLog


logger = get_logger(__name__)

WELCOME_MESSAGE = "Welcome stranger! Prepare to perish in the Tombs of the Ancient Kings."


class GameSession:
    """One play session: state plus the collaborators it is driven by.

    Attributes:
        state: The serializable session state.
        settings: Gameplay settings.
        visibility: Field-of-view service.
        input_service: Source of player intents.
        presenter: Rendering and menu service.
        save_store: Persistence service, if saving is enabled.
        rng: Random source shared by generation and AI.
    """

    def __init__(
        self,
        state: GameState,
        *,
        visibility: VisibilityService,
        input_service: InputService,
        presenter: PresentationService,
        save_store: SaveStore | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the session around an existing state.

        Args:
            state: State to drive (fresh or loaded).
            visibility: Field-of-view service; it is reset to the state's map.
            input_service: Source of player intents.
            presenter: Rendering and menu service.
            save_store: Persistence service used on exit.
            settings: Gameplay settings (defaults to the global settings).
            rng: Random source (defaults to one seeded from the settings).
        """
        self.state = state
        self.settings = settings or get_settings()
        self.visibility = visibility
        self.input_service = input_service
        self.presenter = presenter
        self.save_store = save_store
        self.rng = rng if rng is not None else random.Random(self.settings.session.seed)
        self._generator = DungeonGenerator(self.settings.dungeon, rng=self.rng)

        self.visibility.reset(state.game_map)
        self.state.fov_recompute = True
        bind_context(dungeon_level=state.dungeon_level)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    def new_game(
        cls,
        *,
        visibility: VisibilityService,
        input_service: InputService,
        presenter: PresentationService,
        save_store: SaveStore | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> GameSession:
        """Start a fresh game on dungeon level 1.

        The player starts with an equipped dagger and a welcome message.
        """
        settings = settings or get_settings()
        rng = rng if rng is not None else random.Random(settings.session.seed)

        level = DungeonGenerator(settings.dungeon, rng=rng).generate(1)
        player = create_player(*level.player_start)
        state = GameState(
            dungeon_level=1,
            game_map=level.game_map,
            log=MessageLog(capacity=settings.session.message_log_capacity),
            entities=[player, *level.entities],
        )

        dagger = create_dagger()
        dagger.equipment.is_equipped = True
        state.inventory.append(dagger)
        state.log.add(WELCOME_MESSAGE, constants.RED)

        logger.info("New game started", entities=len(state.entities), start=level.player_start)
        return cls(
            state,
            visibility=visibility,
            input_service=input_service,
            presenter=presenter,
            save_store=save_store,
            settings=settings,
            rng=rng,
        )

    @classmethod
    def load(
        cls,
        save_store: SaveStore,
        *,
        visibility: VisibilityService,
        input_service: InputService,
        presenter: PresentationService,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> GameSession:
        """Resume the stored game.

        Raises:
            PersistenceError: If the store has no usable save.
        """
        state = save_store.load()
        logger.info("Game loaded", dungeon_level=state.dungeon_level, status=state.status)
        return cls(
            state,
            visibility=visibility,
            input_service=input_service,
            presenter=presenter,
            save_store=save_store,
            settings=settings,
            rng=rng,
        )

    def save(self) -> None:
        if self.save_store is None:
            return
        self.save_store.save(self.state)
        logger.info("Game saved", dungeon_level=self.state.dungeon_level)

    # -------------------------------------------------------------------------
    # View
    # -------------------------------------------------------------------------

    def refresh_fov(self) -> None:
        """Recompute the field of view if flagged and mark visible tiles explored."""
        state = self.state
        if not state.fov_recompute:
            return

        player = state.player
        radius = self.settings.session.torch_radius
        self.visibility.recompute(player.x, player.y, radius)

        game_map = state.game_map
        for x in range(max(0, player.x - radius), min(game_map.width, player.x + radius + 1)):
            for y in range(max(0, player.y - radius), min(game_map.height, player.y + radius + 1)):
                if self.visibility.is_visible(x, y):
                    game_map.tile(x, y).explored = True
        state.fov_recompute = False

    def render(self) -> None:
        self.presenter.render(self.state)

    # -------------------------------------------------------------------------
    # Turn Processing
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Drive the session until the player exits, then save."""
        logger.info("Session loop started", dungeon_level=self.state.dungeon_level)
        while True:
            self.refresh_fov()
            self.render()
            intent = self.input_service.next_intent()
            if intent is None:
                continue
            if self.play_turn(intent) == PlayerAction.EXIT:
                self.save()
                break
        logger.info("Session loop ended", status=self.state.status)

    def play_turn(self, intent: PlayerIntent) -> PlayerAction:
        """Resolve one intent, check for level-ups and let monsters act.

        Returns:
            What the intent amounted to.
        """
        action = self.handle_intent(intent)
        if action == PlayerAction.EXIT:
            return action

        check_level_up(self)

        if self.state.is_playing and action == PlayerAction.TOOK_TURN:
            self.take_monster_turns()
        return action

    def handle_intent(self, intent: PlayerIntent) -> PlayerAction:
        """Resolve a single player intent against the state.

        Only moving, attacking and waiting consume a turn.
        """
        if intent.kind == IntentKind.EXIT:
            return PlayerAction.EXIT
        if not self.state.is_playing:
            return PlayerAction.DIDNT_TAKE_TURN

        match intent.kind:
            case IntentKind.MOVE:
                self.player_move_or_attack(intent.dx, intent.dy)
                return PlayerAction.TOOK_TURN
            case IntentKind.WAIT:
                return PlayerAction.TOOK_TURN
            case IntentKind.PICKUP:
                self._pick_up_here()
            case IntentKind.INVENTORY:
                index = inventory_menu(self, USE_HEADER)
                if index is not None:
                    use_item(self, index)
            case IntentKind.DROP:
                index = inventory_menu(self, DROP_HEADER)
                if index is not None:
                    drop_item(self, index)
            case IntentKind.CHARACTER:
                self.presenter.message_box(character_sheet(self))
            case IntentKind.DESCEND:
                if self.player_on_stairs():
                    self.next_level()
                else:
                    self.state.log.add("There are no stairs here.", constants.WHITE)
        return PlayerAction.DIDNT_TAKE_TURN

    def player_move_or_attack(self, dx: int, dy: int) -> None:
        """Attack a fighter in the target tile, otherwise try to step there."""
        state = self.state
        player = state.player
        x, y = player.x + dx, player.y + dy

        target = next(
            (
                entity
                for entity in state.entities
                if entity.fighter is not None and entity.pos == (x, y) and not state.is_player(entity)
            ),
            None,
        )
        if target is not None:
            attack(state, player, target)
        elif move_by(state, player, dx, dy):
            state.fov_recompute = True

    def take_monster_turns(self) -> None:
        """Step every AI-bearing entity once, highest index first."""
        entities = self.state.entities
        for index in range(len(entities) - 1, 0, -1):
            entity = entities[index]
            if entity.ai is None:
                continue
            next_ai = take_turn(self, entity)
            if entity.ai is not None:
                entity.ai = next_ai

    def _pick_up_here(self) -> None:
        state = self.state
        player = state.player
        item = next(
            (
                entity
                for entity in state.entities
                if entity.pos == player.pos and entity.item is not None
            ),
            None,
        )
        if item is not None:
            pick_up(self, item)

    # -------------------------------------------------------------------------
    # Level Transitions
    # -------------------------------------------------------------------------

    def player_on_stairs(self) -> bool:
        state = self.state
        player = state.player
        return any(
            entity.pos == player.pos and entity.name == constants.STAIRS_NAME
            for entity in state.entities
        )

    def next_level(self) -> None:
        """Heal the player by half, descend and regenerate the dungeon.

        Every non-player entity of the old level is discarded.
        """
        state = self.state
        player = state.player

        state.log.add("You take a moment to rest, and recover your strength.", constants.VIOLET)
        heal(state, player, max_hp(state, player) // 2)
        state.log.add(
            "After a rare moment of peace, you descend deeper into the heart of the dungeon...",
            constants.RED,
        )

        state.dungeon_level += 1
        level = self._generator.generate(state.dungeon_level)
        del state.entities[1:]
        player.set_pos(*level.player_start)
        state.entities.extend(level.entities)
        state.game_map = level.game_map

        self.visibility.reset(state.game_map)
        state.fov_recompute = True
        bind_context(dungeon_level=state.dungeon_level)
        logger.info("Descended", dungeon_level=state.dungeon_level, entities=len(state.entities))


__all__ = ["GameSession", "WELCOME_MESSAGE"]
