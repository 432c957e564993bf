"""Collaborator contracts and player intents.

The simulation core never draws, polls devices or touches files directly.
It talks to four collaborators through the protocols below:

- VisibilityService: field-of-view queries ("is this tile visible?")
- InputService: the next discrete player intent
- PresentationService: frame rendering and blocking choice menus
- SaveStore: round-trips the whole GameState

Any object with matching methods satisfies a protocol; no inheritance is
required.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from tombcrawl.models.game_state import GameMap, GameState


# =============================================================================
# Player Intents
# =============================================================================


class IntentKind(StrEnum):
    """Discrete actions the input collaborator can report."""

    MOVE = "move"
    """Step (or attack) in direction (dx, dy)."""

    WAIT = "wait"
    PICKUP = "pickup"
    INVENTORY = "inventory"
    """Open the inventory and use the chosen item."""

    DROP = "drop"
    CHARACTER = "character"
    """Show the character sheet."""

    DESCEND = "descend"
    CLICK = "click"
    """Mouse click on map tile (x, y)."""

    CANCEL = "cancel"
    """Escape-equivalent; aborts targeting."""

    EXIT = "exit"
    """Save and leave the session."""


class MouseButton(StrEnum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class PlayerIntent:
    """One player intent as produced by the input collaborator.

    Attributes:
        kind: What the player wants to do.
        dx: Horizontal step for MOVE.
        dy: Vertical step for MOVE.
        x: Clicked tile column for CLICK.
        y: Clicked tile row for CLICK.
        button: Mouse button for CLICK.
    """

    kind: IntentKind
    dx: int = 0
    dy: int = 0
    x: int = 0
    y: int = 0
    button: MouseButton | None = None

    @classmethod
    def move(cls, dx: int, dy: int) -> PlayerIntent:
        return cls(IntentKind.MOVE, dx=dx, dy=dy)

    @classmethod
    def click(cls, x: int, y: int, button: MouseButton = MouseButton.LEFT) -> PlayerIntent:
        return cls(IntentKind.CLICK, x=x, y=y, button=button)

    @classmethod
    def of(cls, kind: IntentKind) -> PlayerIntent:
        return cls(kind)


class PlayerAction(StrEnum):
    """How the session loop should proceed after resolving an intent."""

    TOOK_TURN = "took_turn"
    """Monsters get to act."""

    DIDNT_TAKE_TURN = "didnt_take_turn"
    EXIT = "exit"


# =============================================================================
# Collaborator Protocols
# =============================================================================


@runtime_checkable
class VisibilityService(Protocol):
    """Field-of-view capability queried by the core."""

    def reset(self, game_map: GameMap) -> None:
        """Adopt a (new) map; called on session start and level change."""
        ...

    def recompute(self, x: int, y: int, radius: int) -> None:
        """Recompute what is visible from (x, y)."""
        ...

    def is_visible(self, x: int, y: int) -> bool:
        ...


@runtime_checkable
class InputService(Protocol):
    """Source of player intents."""

    def next_intent(self) -> PlayerIntent | None:
        """Return the next intent, or None when nothing happened this poll."""
        ...


@runtime_checkable
class PresentationService(Protocol):
    """Rendering and blocking choice dialogs."""

    def render(self, state: GameState) -> None:
        ...

    def menu(self, header: str, options: Sequence[str]) -> int | None:
        """Block until an option index is chosen, or None for no choice."""
        ...

    def message_box(self, text: str) -> None:
        ...


@runtime_checkable
class SaveStore(Protocol):
    """Persistence service for whole sessions.

    ``load`` raises ``PersistenceError`` (or a subclass) when nothing
    usable is stored.
    """

    def save(self, state: GameState) -> None:
        ...

    def load(self) -> GameState:
        ...


__all__ = [
    "IntentKind",
    "MouseButton",
    "PlayerIntent",
    "PlayerAction",
    "VisibilityService",
    "InputService",
    "PresentationService",
    "SaveStore",
]
