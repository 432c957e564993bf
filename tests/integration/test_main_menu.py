"""Integration tests for the main menu."""

from __future__ import annotations

from pathlib import Path

import pytest

from tombcrawl.app import MAIN_MENU_OPTIONS, MAIN_MENU_TITLE, NO_SAVE_MESSAGE, main_menu, run_app
from tombcrawl.core.config import Settings
from tombcrawl.engine.interfaces import IntentKind, PlayerIntent
from tombcrawl.storage.database import SaveDatabase


@pytest.fixture
def store(settings: Settings) -> SaveDatabase:
    return SaveDatabase(settings.session.save_path)


def _run_menu(store, settings, visibility, input_service, presenter) -> None:
    main_menu(
        presenter=presenter,
        input_service=input_service,
        visibility=visibility,
        save_store=store,
        settings=settings,
    )


class TestMainMenu:
    """Test the new game / continue / quit menu."""

    def test_quit(self, store, settings, visibility, input_service, presenter) -> None:
        presenter.choices.append(2)

        _run_menu(store, settings, visibility, input_service, presenter)

        assert presenter.menus == [(MAIN_MENU_TITLE, list(MAIN_MENU_OPTIONS))]

    def test_continue_without_save(self, store, settings, visibility, input_service, presenter) -> None:
        presenter.choices.extend([1, 2])

        _run_menu(store, settings, visibility, input_service, presenter)

        assert presenter.message_boxes == [NO_SAVE_MESSAGE]
        assert len(presenter.menus) == 2

    def test_new_game_then_continue(self, store, settings, visibility, input_service, presenter) -> None:
        presenter.choices.extend([0, 1, 2])
        input_service.push(PlayerIntent.of(IntentKind.EXIT), PlayerIntent.of(IntentKind.EXIT))

        _run_menu(store, settings, visibility, input_service, presenter)

        assert presenter.message_boxes == []
        assert store.get_save(store.slot) is not None
        assert len(input_service.intents) == 0

    def test_unknown_choice_reshows_menu(self, store, settings, visibility, input_service, presenter) -> None:
        presenter.choices.extend([None, 5, 2])

        _run_menu(store, settings, visibility, input_service, presenter)

        assert len(presenter.menus) == 3


class TestRunApp:
    """Test the application entry."""

    def test_uses_configured_save_path(self, settings: Settings, input_service, presenter) -> None:
        presenter.choices.extend([0, 2])
        input_service.push(PlayerIntent.of(IntentKind.EXIT))

        run_app(presenter, input_service, settings=settings)

        assert Path(settings.session.save_path).exists()
        assert SaveDatabase(settings.session.save_path).load().dungeon_level == 1
