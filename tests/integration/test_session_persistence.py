"""Integration tests for session persistence.

Tests that a session saved on exit resumes with its state intact.
"""

from __future__ import annotations

import pytest

from tombcrawl.core.config import Settings
from tombcrawl.core.exceptions import SaveNotFoundError
from tombcrawl.engine.interfaces import IntentKind, PlayerIntent
from tombcrawl.engine.loop import GameSession
from tombcrawl.models.ecs import create_stairs
from tombcrawl.models.enums import GameStatus
from tombcrawl.storage.database import SaveDatabase


@pytest.fixture
def store(settings: Settings) -> SaveDatabase:
    return SaveDatabase(settings.session.save_path)


def _new_session(store, settings, visibility, input_service, presenter) -> GameSession:
    return GameSession.new_game(
        visibility=visibility,
        input_service=input_service,
        presenter=presenter,
        save_store=store,
        settings=settings,
    )


def _load(store, settings, visibility, input_service, presenter) -> GameSession:
    return GameSession.load(
        store,
        visibility=visibility,
        input_service=input_service,
        presenter=presenter,
        settings=settings,
    )


class TestSessionPersistence:
    """Test session state persistence."""

    def test_exit_saves_session(self, store, settings, visibility, input_service, presenter) -> None:
        session = _new_session(store, settings, visibility, input_service, presenter)
        input_service.push(PlayerIntent.of(IntentKind.WAIT), PlayerIntent.of(IntentKind.EXIT))

        session.run()
        saved = store.load()
        resumed = _load(store, settings, visibility, input_service, presenter)

        assert saved == session.state
        assert resumed.state.fov_recompute is True
        assert resumed.state.model_dump(exclude={"fov_recompute"}) == session.state.model_dump(
            exclude={"fov_recompute"}
        )
        assert resumed.state.player.name == "player"
        assert resumed.state.inventory[0].equipment.is_equipped is True

    def test_resume_after_descent(self, store, settings, visibility, input_service, presenter) -> None:
        session = _new_session(store, settings, visibility, input_service, presenter)
        state = session.state
        state.entities.append(create_stairs(*state.player.pos))
        input_service.push(PlayerIntent.of(IntentKind.DESCEND), PlayerIntent.of(IntentKind.EXIT))

        session.run()
        resumed = _load(store, settings, visibility, input_service, presenter)

        assert resumed.state.dungeon_level == 2
        assert resumed.state.game_map == state.game_map
        assert [entity.pos for entity in resumed.state.entities] == [
            entity.pos for entity in state.entities
        ]

    def test_explored_tiles_persist(self, store, settings, visibility, input_service, presenter) -> None:
        session = _new_session(store, settings, visibility, input_service, presenter)
        input_service.push(PlayerIntent.of(IntentKind.EXIT))

        session.run()
        resumed = _load(store, settings, visibility, input_service, presenter)

        x, y = resumed.state.player.pos
        assert resumed.state.game_map.tile(x, y).explored

    def test_dead_session_resumes_dead(self, store, settings, visibility, input_service, presenter) -> None:
        session = _new_session(store, settings, visibility, input_service, presenter)
        session.state.status = GameStatus.DEAD
        start = session.state.player.pos
        input_service.push(PlayerIntent.of(IntentKind.EXIT))
        session.run()

        resumed = _load(store, settings, visibility, input_service, presenter)
        input_service.push(PlayerIntent.move(1, 0), PlayerIntent.of(IntentKind.EXIT))
        resumed.run()

        assert resumed.state.status == GameStatus.DEAD
        assert resumed.state.player.pos == start

    def test_load_without_save(self, store, settings, visibility, input_service, presenter) -> None:
        with pytest.raises(SaveNotFoundError):
            _load(store, settings, visibility, input_service, presenter)
