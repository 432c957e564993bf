"""Combat resolution: derived stats, damage, death and experience.

Effective stats are computed on every query as the base stat plus the
bonuses of everything the entity currently has equipped. Nothing is cached,
so equipping or removing an item changes the next attack immediately.

Death is dispatched on the fighter's ``DeathBehavior`` tag:

- PLAYER: the session ends in the DEAD state and the player becomes a
  corpse, keeping its Fighter so the final stats stay readable.
- MONSTER: the entity becomes inert remains with no Fighter and no AI.
- NONE: nothing happens.
"""

from __future__ import annotations

from tombcrawl.core import constants
from tombcrawl.core.exceptions import CombatError
from tombcrawl.core.logging import get_logger
from tombcrawl.models.ecs import Entity, Fighter
from tombcrawl.models.enums import DeathBehavior, GameStatus
from tombcrawl.models.game_state import GameState


logger = get_logger(__name__)


# =============================================================================
# Derived Stats
# =============================================================================


def _fighter(entity: Entity) -> Fighter:
    if entity.fighter is None:
        raise CombatError(f"{entity.name} has no fighter component", attacker=entity.name)
    return entity.fighter


def power(state: GameState, entity: Entity) -> int:
    """Effective power: base power plus equipped power bonuses."""
    bonus = sum(equipment.power_bonus for equipment in state.equipped_for(entity))
    return _fighter(entity).base_power + bonus


def defense(state: GameState, entity: Entity) -> int:
    """Effective defense: base defense plus equipped defense bonuses."""
    bonus = sum(equipment.defense_bonus for equipment in state.equipped_for(entity))
    return _fighter(entity).base_defense + bonus


def max_hp(state: GameState, entity: Entity) -> int:
    """Effective max HP: base max HP plus equipped max HP bonuses."""
    bonus = sum(equipment.max_hp_bonus for equipment in state.equipped_for(entity))
    return _fighter(entity).base_max_hp + bonus


# =============================================================================
# Damage & Healing
# =============================================================================


def heal(state: GameState, entity: Entity, amount: int) -> None:
    """Restore hit points, never beyond the effective maximum."""
    fighter = _fighter(entity)
    fighter.hp = min(fighter.hp + amount, max_hp(state, entity))


def take_damage(state: GameState, entity: Entity, amount: int) -> int | None:
    """Apply damage and run the death behavior if hit points reach zero.

    Damage is never clamped, so hit points may go negative. The death check
    runs even when ``amount`` is not positive. An entity whose Fighter was
    cleared by an earlier death ignores further damage.

    Args:
        state: The session state.
        entity: The entity being damaged.
        amount: Hit points to subtract; ignored unless positive.

    Returns:
        The xp the entity is worth if this call killed it, otherwise None.
    """
    fighter = entity.fighter
    if fighter is None:
        return None

    if amount > 0:
        fighter.hp -= amount

    if fighter.hp > 0:
        return None

    xp = fighter.xp
    match fighter.death:
        case DeathBehavior.PLAYER:
            if not state.is_playing:
                return None
            player_death(state, entity)
        case DeathBehavior.MONSTER:
            monster_death(state, entity)
        case DeathBehavior.NONE:
            return None
    return xp


def player_death(state: GameState, player: Entity) -> None:
    """End the game: the player turns into a corpse."""
    state.log.add("You died!", constants.RED)
    state.status = GameStatus.DEAD
    player.glyph = constants.CORPSE_GLYPH
    player.color = constants.CORPSE_COLOR
    logger.info("Player died", dungeon_level=state.dungeon_level, level=player.level)


def monster_death(state: GameState, monster: Entity) -> None:
    """Turn a monster into inert remains that no longer block or act."""
    xp = monster.fighter.xp if monster.fighter is not None else 0
    state.log.add(
        f"{monster.name} is dead! You gain {xp} experience points.",
        constants.ORANGE,
    )
    logger.debug("Monster died", name=monster.name, xp=xp)
    monster.glyph = constants.CORPSE_GLYPH
    monster.color = constants.CORPSE_COLOR
    monster.blocks = False
    monster.fighter = None
    monster.ai = None
    monster.name = f"remains of {monster.name}"


def award_xp(state: GameState, xp: int) -> None:
    """Credit experience to the player."""
    fighter = _fighter(state.player)
    fighter.xp += xp


# =============================================================================
# Melee
# =============================================================================


def attack(state: GameState, attacker: Entity, defender: Entity) -> None:
    """Resolve one melee attack.

    Damage is the attacker's effective power minus the defender's effective
    defense. A killing blow by the player credits the defender's xp.

    Raises:
        CombatError: If either side has no Fighter.
    """
    if attacker.fighter is None or defender.fighter is None:
        raise CombatError(
            "Both combatants need a fighter component",
            attacker=attacker.name,
            defender=defender.name,
        )

    damage = power(state, attacker) - defense(state, defender)
    if damage <= 0:
        state.log.add(
            f"{attacker.name} attacks {defender.name} but it has no effect!",
            constants.WHITE,
        )
        return

    state.log.add(
        f"{attacker.name} attacks {defender.name} for {damage} hit points.",
        constants.WHITE,
    )
    logger.debug("Attack", attacker=attacker.name, defender=defender.name, damage=damage)
    xp = take_damage(state, defender, damage)
    if xp is not None and state.is_player(attacker):
        award_xp(state, xp)


__all__ = [
    "power",
    "defense",
    "max_hp",
    "heal",
    "take_damage",
    "player_death",
    "monster_death",
    "award_xp",
    "attack",
]
