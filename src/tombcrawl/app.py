"""Application entry: the main menu.

The front end (terminal, tileset window, test harness) supplies the
presentation and input services; this module wires them to a session and
a save store and runs the "new game / continue / quit" menu.
"""

from __future__ import annotations

from tombcrawl.core.config import Settings, get_settings
from tombcrawl.core.exceptions import PersistenceError
from tombcrawl.core.logging import configure_logging, get_logger
from tombcrawl.engine.fov import RaycastVisibility
from tombcrawl.engine.interfaces import (
    InputService,
    PresentationService,
    SaveStore,
    VisibilityService,
)
from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)

MAIN_MENU_TITLE = "TOMBS OF THE ANCIENT KINGS"
MAIN_MENU_OPTIONS = ("Play a new game", "Continue last game", "Quit")
NO_SAVE_MESSAGE = "\n No saved game to load.\n"


def main_menu(
    *,
    presenter: PresentationService,
    input_service: InputService,
    visibility: VisibilityService,
    save_store: SaveStore,
    settings: Settings | None = None,
) -> None:
    """Show the main menu until the player quits.

    A missing or unreadable save never ends the program: the player is
    told there is nothing to continue and returns to the menu.
    """
    settings = settings or get_settings()
    while True:
        choice = presenter.menu(MAIN_MENU_TITLE, list(MAIN_MENU_OPTIONS))
        match choice:
            case 0:
                session = GameSession.new_game(
                    visibility=visibility,
                    input_service=input_service,
                    presenter=presenter,
                    save_store=save_store,
                    settings=settings,
                )
                session.run()
            case 1:
                try:
                    session = GameSession.load(
                        save_store,
                        visibility=visibility,
                        input_service=input_service,
                        presenter=presenter,
                        settings=settings,
                    )
                except PersistenceError as exc:
                    logger.warning("No saved game available", error=str(exc))
                    presenter.message_box(NO_SAVE_MESSAGE)
                    continue
                session.run()
            case 2:
                logger.info("Quit from main menu")
                return


def run_app(
    presenter: PresentationService,
    input_service: InputService,
    *,
    save_store: SaveStore | None = None,
    visibility: VisibilityService | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure logging and run the main menu with default services."""
    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )
    logger.info("Starting", name=settings.app_name, version=settings.app_version)

    if save_store is None:
        from tombcrawl.storage.database import SaveDatabase

        save_store = SaveDatabase(settings.session.save_path)

    main_menu(
        presenter=presenter,
        input_service=input_service,
        visibility=visibility or RaycastVisibility(),
        save_store=save_store,
        settings=settings,
    )


__all__ = [
    "MAIN_MENU_TITLE",
    "MAIN_MENU_OPTIONS",
    "NO_SAVE_MESSAGE",
    "main_menu",
    "run_app",
]
