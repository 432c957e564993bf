"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        TombcrawlError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        PersistenceError: Save/load failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from tombcrawl.core.config import (
    DungeonSettings,
    ProgressionSettings,
    SessionSettings,
    Settings,
    SpellSettings,
    clear_settings_cache,
    get_settings,
)
from tombcrawl.core.exceptions import (
    CombatError,
    ConfigurationError,
    CorruptSaveError,
    GameEngineError,
    GenerationError,
    InvalidGameStateError,
    PersistenceError,
    SaveNotFoundError,
    TombcrawlError,
)
from tombcrawl.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "TombcrawlError",
    # Configuration exceptions
    "ConfigurationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "GenerationError",
    "CombatError",
    # Persistence exceptions
    "PersistenceError",
    "SaveNotFoundError",
    "CorruptSaveError",
    # Configuration
    "Settings",
    "DungeonSettings",
    "SpellSettings",
    "ProgressionSettings",
    "SessionSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
