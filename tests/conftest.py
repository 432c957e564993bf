"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Tombcrawl test suite: small deterministic settings, scripted
collaborators standing in for input/presentation/visibility, and an open
arena map for engine tests.
"""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tombcrawl.core.config import DungeonSettings, SessionSettings, Settings
from tombcrawl.engine.interfaces import PlayerIntent
from tombcrawl.engine.loop import GameSession
from tombcrawl.models.ecs import create_player
from tombcrawl.models.game_state import GameMap, GameState, MessageLog


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Collaborator Fakes
# =============================================================================


class ScriptedInput:
    """Input service that replays a fixed list of intents.

    Running out of intents fails the test instead of blocking forever.
    """

    def __init__(self, intents: Iterable[PlayerIntent | None] = ()) -> None:
        self.intents: deque[PlayerIntent | None] = deque(intents)

    def push(self, *intents: PlayerIntent | None) -> None:
        self.intents.extend(intents)

    def next_intent(self) -> PlayerIntent | None:
        if not self.intents:
            raise AssertionError("Input script exhausted")
        return self.intents.popleft()


class RecordingPresenter:
    """Presentation service that records frames and answers menus from a script."""

    def __init__(self, choices: Iterable[int | None] = ()) -> None:
        self.choices: deque[int | None] = deque(choices)
        self.menus: list[tuple[str, list[str]]] = []
        self.message_boxes: list[str] = []
        self.frames = 0

    def render(self, state: GameState) -> None:
        self.frames += 1

    def menu(self, header: str, options: Sequence[str]) -> int | None:
        self.menus.append((header, list(options)))
        if not self.choices:
            raise AssertionError(f"Unexpected menu: {header!r}")
        return self.choices.popleft()

    def message_box(self, text: str) -> None:
        self.message_boxes.append(text)


class AllVisible:
    """Visibility service that sees every tile except the ones listed in ``hidden``."""

    def __init__(self) -> None:
        self.hidden: set[tuple[int, int]] = set()
        self.recomputes: list[tuple[int, int, int]] = []
        self.resets = 0

    def reset(self, game_map: GameMap) -> None:
        self.resets += 1

    def recompute(self, x: int, y: int, radius: int) -> None:
        self.recomputes.append((x, y, radius))

    def is_visible(self, x: int, y: int) -> bool:
        return (x, y) not in self.hidden


class MemoryStore:
    """Save store keeping the serialized state in memory."""

    def __init__(self) -> None:
        self.data: str | None = None

    def save(self, state: GameState) -> None:
        self.data = state.model_dump_json()

    def load(self) -> GameState:
        from tombcrawl.core.exceptions import SaveNotFoundError

        if self.data is None:
            raise SaveNotFoundError("Nothing saved")
        return GameState.model_validate_json(self.data)


def make_arena(width: int = 20, height: int = 20) -> GameMap:
    """An all-floor room surrounded by a one-tile wall ring."""
    game_map = GameMap(width=width, height=height)
    for x in range(1, width - 1):
        for y in range(1, height - 1):
            game_map.carve(x, y)
    return game_map


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from tombcrawl.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Provide small, seeded settings with the save file under tmp_path."""
    return Settings(
        dungeon=DungeonSettings(
            map_width=40,
            map_height=30,
            room_min_size=4,
            room_max_size=8,
            max_rooms=15,
        ),
        session=SessionSettings(
            seed=1234,
            save_path=tmp_path / "saves" / "tombcrawl.db",
        ),
    )


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def input_service() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def visibility() -> AllVisible:
    return AllVisible()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


# =============================================================================
# State Fixtures
# =============================================================================


@pytest.fixture
def arena_state() -> GameState:
    """A 20x20 open arena with the player standing at (5, 5).

    The message log is large so tests can inspect every line.
    """
    return GameState(
        game_map=make_arena(),
        entities=[create_player(5, 5)],
        log=MessageLog(capacity=100),
    )


@pytest.fixture
def session(
    arena_state: GameState,
    settings: Settings,
    visibility: AllVisible,
    input_service: ScriptedInput,
    presenter: RecordingPresenter,
    memory_store: MemoryStore,
) -> GameSession:
    """A session over the arena with scripted collaborators and a seeded RNG."""
    return GameSession(
        arena_state,
        visibility=visibility,
        input_service=input_service,
        presenter=presenter,
        save_store=memory_store,
        settings=settings,
        rng=random.Random(7),
    )
