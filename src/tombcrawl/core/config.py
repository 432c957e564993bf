"""Configuration management for Tombcrawl.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides. Every gameplay constant
(map size, spell strength, level-up curve) lives here so the simulation
core never reads hidden globals.

Example:
    >>> from tombcrawl.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.spells.fireball_radius
    3

Environment Variables:
    TOMBCRAWL_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TOMBCRAWL_DUNGEON_MAP_WIDTH: Map width in tiles
    TOMBCRAWL_SPELL_HEAL_AMOUNT: Hit points restored by a healing potion
    TOMBCRAWL_SESSION_SEED: Fixed RNG seed for reproducible dungeons
    TOMBCRAWL_SESSION_SAVE_PATH: Path to the save database
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tombcrawl.core.exceptions import ConfigurationError


class DungeonSettings(BaseSettings):
    """Configuration for dungeon generation.

    Attributes:
        map_width: Width of the map in tiles.
        map_height: Height of the map in tiles.
        room_min_size: Smallest room edge (including walls).
        room_max_size: Largest room edge (including walls).
        max_rooms: Number of room placement attempts per level.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOMBCRAWL_DUNGEON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    map_width: int = Field(default=80, ge=8, le=500, description="Map width in tiles")
    map_height: int = Field(default=43, ge=8, le=500, description="Map height in tiles")
    room_min_size: int = Field(default=6, ge=3, description="Minimum room size")
    room_max_size: int = Field(default=10, ge=3, description="Maximum room size")
    max_rooms: int = Field(default=30, ge=1, le=1000, description="Room placement attempts")

    @model_validator(mode="after")
    def validate_room_sizes(self) -> "DungeonSettings":
        """Ensure rooms fit the map and the size range is not inverted.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If rooms cannot be placed on the map.
        """
        if self.room_min_size > self.room_max_size:
            raise ConfigurationError(
                f"room_min_size ({self.room_min_size}) must not exceed "
                f"room_max_size ({self.room_max_size})",
                config_key="room_min_size",
            )
        if self.room_max_size + 2 > min(self.map_width, self.map_height):
            raise ConfigurationError(
                f"room_max_size ({self.room_max_size}) does not fit a "
                f"{self.map_width}x{self.map_height} map",
                config_key="room_max_size",
            )
        return self


class SpellSettings(BaseSettings):
    """Strength and range of consumable item effects."""

    model_config = SettingsConfigDict(
        env_prefix="TOMBCRAWL_SPELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    heal_amount: int = Field(default=40, ge=1, description="HP restored by a potion")
    lightning_damage: int = Field(default=40, ge=0, description="Lightning bolt damage")
    lightning_range: int = Field(default=5, ge=0, description="Lightning bolt range")
    confuse_range: int = Field(default=8, ge=0, description="Confusion targeting range")
    confuse_num_turns: int = Field(default=10, ge=0, description="Turns a confusion lasts")
    fireball_radius: int = Field(default=3, ge=0, description="Fireball blast radius")
    fireball_damage: int = Field(default=25, ge=0, description="Fireball damage")


class ProgressionSettings(BaseSettings):
    """Experience curve and level-up rewards.

    The xp needed to leave level ``n`` is ``level_up_base + n * level_up_factor``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOMBCRAWL_PROGRESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level_up_base: int = Field(default=200, ge=1, description="Base xp threshold")
    level_up_factor: int = Field(default=150, ge=0, description="Extra xp per level")
    hp_per_level: int = Field(default=20, ge=1, description="Max HP gained on a Constitution pick")
    power_per_level: int = Field(default=1, ge=1, description="Power gained on a Strength pick")
    defense_per_level: int = Field(default=1, ge=1, description="Defense gained on an Agility pick")


class SessionSettings(BaseSettings):
    """Configuration for a play session.

    Attributes:
        torch_radius: Sight radius used when recomputing the field of view.
        message_log_capacity: Lines kept in the message log.
        inventory_capacity: Maximum carried items (one per letter).
        seed: Optional RNG seed for reproducible runs.
        save_path: Location of the save database.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOMBCRAWL_SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    torch_radius: int = Field(default=10, ge=1, description="Field of view radius")
    message_log_capacity: int = Field(default=6, ge=1, description="Message log lines")
    inventory_capacity: int = Field(default=26, ge=1, le=26, description="Inventory slots")
    seed: int | None = Field(default=None, description="RNG seed for reproducible runs")
    save_path: Path = Field(
        default=Path.home() / ".tombcrawl" / "tombcrawl.db",
        description="Path to the save database",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit logs as JSON instead of console output.
        log_file: Optional file receiving a copy of the diagnostic logs.
        dungeon: Dungeon generation settings.
        spells: Item effect settings.
        progression: Experience and level-up settings.
        session: Play session settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOMBCRAWL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Tombcrawl", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")
    log_file: Path | None = Field(default=None, description="Also write diagnostic logs here")

    dungeon: DungeonSettings = Field(default_factory=DungeonSettings)
    spells: SpellSettings = Field(default_factory=SpellSettings)
    progression: ProgressionSettings = Field(default_factory=ProgressionSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid application settings: {exc.error_count()} error(s)",
            errors=[error["loc"] for error in exc.errors()],
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "DungeonSettings",
    "SpellSettings",
    "ProgressionSettings",
    "SessionSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
