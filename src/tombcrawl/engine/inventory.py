"""Inventory handling: pickup, use, drop and equipment toggling.

Equipment is never consumed. Using an equipment-bearing item toggles it
instead of running an effect, and equipping into an occupied slot first
takes off whatever is there, so each slot holds at most one equipped item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tombcrawl.core import constants
from tombcrawl.core.exceptions import InvalidGameStateError
from tombcrawl.core.logging import get_logger
from tombcrawl.engine.effects import apply_item_effect
from tombcrawl.models.ecs import Entity, Equipment
from tombcrawl.models.enums import ItemKind, UseResult
from tombcrawl.models.game_state import GameState


if TYPE_CHECKING:
    from tombcrawl.engine.loop import GameSession


logger = get_logger(__name__)

USE_HEADER = "Press the key next to an item to use it, or any other to cancel.\n"
DROP_HEADER = "Press the key next to an item to drop it, or any other to cancel.\n"
EMPTY_INVENTORY = "Inventory is empty."


# =============================================================================
# Equipment
# =============================================================================


def _equipment(item: Entity) -> Equipment:
    if item.equipment is None:
        raise InvalidGameStateError(f"{item.name} is not equipment", entity=item.name)
    return item.equipment


def equip(state: GameState, item: Entity) -> None:
    """Wear an item, first taking off whatever is worn in the same slot."""
    equipment = _equipment(item)
    if equipment.is_equipped:
        return

    current = state.get_equipped_in_slot(equipment.slot)
    if current is not None:
        dequip(state, state.inventory[current])
    equipment.is_equipped = True
    state.log.add(f"Equipped {item.name} on {equipment.slot}.", constants.LIGHT_GREEN)


def dequip(state: GameState, item: Entity) -> None:
    """Take an item off; does nothing (and logs nothing) if it is not worn."""
    equipment = _equipment(item)
    if not equipment.is_equipped:
        return
    equipment.is_equipped = False
    state.log.add(f"Dequipped {item.name} from {equipment.slot}.", constants.LIGHT_YELLOW)


def toggle_equip(state: GameState, index: int) -> None:
    """Equip or dequip the inventory item at ``index``.

    Equipping displaces the item currently worn in the same slot.
    """
    item = state.inventory_item(index)
    equipment = _equipment(item)
    if equipment.is_equipped:
        dequip(state, item)
    else:
        equip(state, item)


# =============================================================================
# Pickup / Use / Drop
# =============================================================================


def pick_up(session: GameSession, item: Entity) -> bool:
    """Move an item from the world into the inventory.

    Equipment is worn immediately when its slot is free.

    Returns:
        False if the inventory was full and the item stayed on the floor.
    """
    state = session.state
    if state.is_player(item):
        raise InvalidGameStateError("The player cannot be picked up")

    if len(state.inventory) >= session.settings.session.inventory_capacity:
        state.log.add(f"Your inventory is full, cannot pick up {item.name}.", constants.RED)
        return False

    del state.entities[state.index_of(item)]
    state.log.add(f"You picked up a {item.name}!", constants.GREEN)
    state.inventory.append(item)
    logger.debug("Item picked up", name=item.name, inventory_size=len(state.inventory))

    if item.equipment is not None and state.get_equipped_in_slot(item.equipment.slot) is None:
        equip(state, item)
    return True


def use_item(session: GameSession, index: int) -> UseResult | None:
    """Use the inventory item at ``index``.

    Returns:
        The effect outcome, or None when the item was equipment (toggled)
        or has no use at all.
    """
    state = session.state
    item = state.inventory_item(index)

    if item.equipment is not None:
        toggle_equip(state, index)
        return None

    if item.item is None or item.item == ItemKind.NONE:
        state.log.add(f"The {item.name} cannot be used.", constants.WHITE)
        return None

    result = apply_item_effect(session, item.item)
    if result == UseResult.USED:
        del state.inventory[index]
        logger.debug("Item used", name=item.name)
    else:
        state.log.add("Cancelled", constants.WHITE)
    return result


def drop_item(session: GameSession, index: int) -> None:
    """Put the inventory item at ``index`` down at the player's feet."""
    state = session.state
    item = state.inventory_item(index)
    if item.equipment is not None:
        dequip(state, item)
    del state.inventory[index]

    player = state.player
    item.set_pos(player.x, player.y)
    state.entities.append(item)
    state.log.add(f"You dropped a {item.name}.", constants.YELLOW)


# =============================================================================
# Menu
# =============================================================================


def inventory_options(state: GameState) -> list[str]:
    """Menu labels for the inventory; worn items show their slot."""
    if not state.inventory:
        return [EMPTY_INVENTORY]
    options = []
    for item in state.inventory:
        if item.equipment is not None and item.equipment.is_equipped:
            options.append(f"{item.name} (on {item.equipment.slot})")
        else:
            options.append(item.name)
    return options


def inventory_menu(session: GameSession, header: str) -> int | None:
    """Ask the player to pick an inventory item.

    Returns:
        A valid inventory index, or None for no choice or an empty inventory.
    """
    state = session.state
    choice = session.presenter.menu(header, inventory_options(state))
    if not state.inventory or choice is None:
        return None
    if not 0 <= choice < len(state.inventory):
        return None
    return choice


__all__ = [
    "USE_HEADER",
    "DROP_HEADER",
    "EMPTY_INVENTORY",
    "equip",
    "dequip",
    "toggle_equip",
    "pick_up",
    "use_item",
    "drop_item",
    "inventory_options",
    "inventory_menu",
]
