"""
Ability catalog.

A closed, hand-authored table of abilities. Each entry couples a resource
cost and a target shape with an effect procedure built on the damage resolver
and the status effect engine. Abilities are global, read-only definitions:
actors only hold the keys of the abilities they know.
"""

import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from core.constants import (
    ActionFailure,
    Archetype,
    NiceEnum,
    Resource,
    Stat,
    StatusKind,
    TargetShape,
)
from core.logging import log_debug
from effects.effect_manager import add_status_effect, apply_buff
from entities.actor import Actor
from world.geometry import chebyshev, sign
from world.los import has_line_of_sight

from .attacks import aoe_attack, resolve_hit
from .damage import calc_base_damage

if TYPE_CHECKING:
    from core.context import SimulationContext


class AbilityKey(NiceEnum):
    """Keys of every ability in the catalog."""

    POWER_STRIKE = "power_strike"
    SHIELD_BASH = "shield_bash"
    WAR_CRY = "war_cry"
    FIREBALL = "fireball"
    ICE_SHARD = "ice_shard"
    ARCANE_SHIELD = "arcane_shield"
    BACKSTAB = "backstab"
    EVADE = "evade"
    POISON_BLADE = "poison_blade"
    HEAL = "heal"
    SMITE = "smite"
    DIVINE_SHIELD = "divine_shield"
    VENOM_SPIT = "venom_spit"
    HEX = "hex"
    DRAGON_BREATH = "dragon_breath"


# (ctx, ability, user, target) -> resolved
AbilityEffect = Callable[..., bool]


class Ability(BaseModel):
    """
    An immutable catalog entry.

    Range, line of sight and target presence are checked by ``use_ability``
    before any cost is paid, so an effect procedure only runs once the action
    is known to be legal.
    """

    model_config = {"frozen": True}

    key: AbilityKey = Field(description="The catalog key.")
    name: str = Field(description="Display name.")
    archetype: Archetype = Field(description="The archetype the ability belongs to.")
    cost: dict[Resource, int] = Field(
        default_factory=dict,
        description="Resources paid on use, all of them affordable at once.",
    )
    shape: TargetShape = Field(description="What the ability targets.")
    range: int | None = Field(
        None,
        description="Maximum Chebyshev distance to the target, None for unlimited.",
    )
    requires_los: bool = Field(False, description="Whether the target must be in sight.")
    radius: int = Field(0, ge=0, description="Blast radius of area abilities.")
    multiplier: float = Field(1.0, ge=0.0, description="Damage multiplier.")
    effect: AbilityEffect = Field(description="The effect procedure.")

    @property
    def needs_target(self) -> bool:
        return self.shape in (TargetShape.MELEE, TargetShape.RANGED, TargetShape.AOE)

    def cost_text(self) -> str:
        return ", ".join(f"{amount} {res.value}" for res, amount in self.cost.items())


# =============================================================================
# Helpers
# =============================================================================


def is_attacker_behind(ctx: "SimulationContext", attacker: Actor, target: Actor) -> bool:
    """
    Whether ``attacker`` stands behind ``target``.

    A monster is taken to face the player; the attacker is behind when its
    direction from the target is opposite that facing on either axis. Players
    have no facing and are never attacked from behind.
    """
    player = ctx.player
    if player is None or target.is_player:
        return False
    face_dx = sign(player.x - target.x)
    face_dy = sign(player.y - target.y)
    atk_dx = sign(attacker.x - target.x)
    atk_dy = sign(attacker.y - target.y)
    return (face_dx != 0 and atk_dx == -face_dx) or (face_dy != 0 and atk_dy == -face_dy)


def _strike(
    ctx: "SimulationContext",
    ability: Ability,
    user: Actor,
    target: Actor,
    message: str,
    multiplier: float | None = None,
) -> int:
    factor = ability.multiplier if multiplier is None else multiplier
    raw = math.floor(calc_base_damage(ctx, user, target) * factor)
    return resolve_hit(ctx, user, target, raw, message, report_misses=True)


# =============================================================================
# Effect procedures
# =============================================================================


def _power_strike(ctx, ability, user, target) -> bool:
    _strike(ctx, ability, user, target, "{attacker} uses Power Strike on {defender} for {dealt} damage!")
    return True


def _shield_bash(ctx, ability, user, target) -> bool:
    _strike(
        ctx, ability, user, target, "{attacker} bashes {defender} for {dealt} damage and stuns them!"
    )
    if target.alive:
        add_status_effect(ctx, target, StatusKind.STUNNED, duration=1)
    return True


def _war_cry(ctx, ability, user, target) -> bool:
    amount, duration = 7, 3
    apply_buff(ctx, user, Stat.ATTACK, amount, duration)
    ctx.message(f"{user.name} lets out a War Cry! Attack +{amount} for {duration} turns.")
    return True


def _fireball(ctx, ability, user, target) -> bool:
    hits = aoe_attack(ctx, user, target.x, target.y, ability.radius, ability.multiplier, user.floor)
    ctx.message(f"{user.name} casts Fireball! {hits} targets hit.")
    return True


def _ice_shard(ctx, ability, user, target) -> bool:
    _strike(
        ctx,
        ability,
        user,
        target,
        "{attacker} hurls an Ice Shard at {defender} for {dealt} damage! Target slowed",
    )
    if target.alive:
        add_status_effect(ctx, target, StatusKind.SLOWED, duration=3)
    return True


def _arcane_shield(ctx, ability, user, target) -> bool:
    absorb = 30
    add_status_effect(ctx, user, StatusKind.SHIELDED, absorb=absorb, duration=99)
    ctx.message(f"{user.name} conjures an Arcane Shield (absorbs {absorb} damage).")
    return True


def _backstab(ctx, ability, user, target) -> bool:
    behind = is_attacker_behind(ctx, user, target)
    label = "Backstab (from behind)" if behind else "Backstab"
    _strike(
        ctx,
        ability,
        user,
        target,
        f"{{attacker}} uses {label} on {{defender}} for {{dealt}} damage!",
        3.0 if behind else 1.5,
    )
    return True


def _evade(ctx, ability, user, target) -> bool:
    add_status_effect(ctx, user, StatusKind.EVADING, duration=1)
    ctx.message(f"{user.name} prepares to evade the next attack.")
    return True


def _poison_blade(ctx, ability, user, target) -> bool:
    _strike(
        ctx,
        ability,
        user,
        target,
        "{attacker} poisons {defender} for {dealt} damage! Poisoned for 5 turns",
    )
    if target.alive:
        add_status_effect(
            ctx, target, StatusKind.POISONED, duration=5, damage=3, source_id=user.id
        )
    return True


def _heal(ctx, ability, user, target) -> bool:
    amount = user.heal(25)
    ctx.message(f"{user.name} heals for {amount} HP.")
    return True


def _smite(ctx, ability, user, target) -> bool:
    undead = target.has_tag("undead")
    extra = " (holy damage vs undead!)" if undead else ""
    _strike(
        ctx,
        ability,
        user,
        target,
        f"{{attacker}} smites {{defender}} for {{dealt}} damage!{extra}",
        2.0 if undead else 1.0,
    )
    return True


def _divine_shield(ctx, ability, user, target) -> bool:
    for ally in ctx.actors_on_floor(user.floor):
        if not ally.is_monster:
            add_status_effect(ctx, ally, StatusKind.DIVINE_SHIELD, duration=2, reduction=0.5)
    ctx.message(
        f"{user.name} invokes Divine Shield! Party takes 50% less damage for 2 turns."
    )
    return True


def _venom_spit(ctx, ability, user, target) -> bool:
    _strike(ctx, ability, user, target, "{attacker} spits venom at {defender} for {dealt} damage!")
    if target.alive:
        add_status_effect(
            ctx, target, StatusKind.POISONED, duration=3, damage=2, source_id=user.id
        )
    return True


def _hex(ctx, ability, user, target) -> bool:
    add_status_effect(ctx, target, StatusKind.VULNERABLE, duration=3, source_id=user.id)
    ctx.message(f"{user.name} hexes {target.name}! {target.name} is vulnerable.")
    return True


def _dragon_breath(ctx, ability, user, target) -> bool:
    hits = aoe_attack(ctx, user, target.x, target.y, ability.radius, ability.multiplier, user.floor)
    ctx.message(f"{user.name} breathes fire! {hits} targets hit.")
    return True


# =============================================================================
# Catalog
# =============================================================================

ABILITIES: dict[AbilityKey, Ability] = {
    ability.key: ability
    for ability in (
        # Warrior.
        Ability(
            key=AbilityKey.POWER_STRIKE,
            name="Power Strike",
            archetype=Archetype.WARRIOR,
            cost={Resource.STAMINA: 20},
            shape=TargetShape.MELEE,
            range=1,
            multiplier=2.0,
            effect=_power_strike,
        ),
        Ability(
            key=AbilityKey.SHIELD_BASH,
            name="Shield Bash",
            archetype=Archetype.WARRIOR,
            cost={Resource.STAMINA: 15},
            shape=TargetShape.MELEE,
            range=1,
            effect=_shield_bash,
        ),
        Ability(
            key=AbilityKey.WAR_CRY,
            name="War Cry",
            archetype=Archetype.WARRIOR,
            cost={Resource.STAMINA: 25},
            shape=TargetShape.SELF,
            effect=_war_cry,
        ),
        # Mage.
        Ability(
            key=AbilityKey.FIREBALL,
            name="Fireball",
            archetype=Archetype.MAGE,
            cost={Resource.MANA: 30},
            shape=TargetShape.AOE,
            requires_los=True,
            radius=2,
            multiplier=2.0,
            effect=_fireball,
        ),
        Ability(
            key=AbilityKey.ICE_SHARD,
            name="Ice Shard",
            archetype=Archetype.MAGE,
            cost={Resource.MANA: 15},
            shape=TargetShape.RANGED,
            range=6,
            requires_los=True,
            effect=_ice_shard,
        ),
        Ability(
            key=AbilityKey.ARCANE_SHIELD,
            name="Arcane Shield",
            archetype=Archetype.MAGE,
            cost={Resource.MANA: 25},
            shape=TargetShape.SELF,
            effect=_arcane_shield,
        ),
        # Rogue.
        Ability(
            key=AbilityKey.BACKSTAB,
            name="Backstab",
            archetype=Archetype.ROGUE,
            cost={Resource.STAMINA: 20},
            shape=TargetShape.MELEE,
            range=1,
            effect=_backstab,
        ),
        Ability(
            key=AbilityKey.EVADE,
            name="Evade",
            archetype=Archetype.ROGUE,
            cost={Resource.STAMINA: 15},
            shape=TargetShape.SELF,
            effect=_evade,
        ),
        Ability(
            key=AbilityKey.POISON_BLADE,
            name="Poison Blade",
            archetype=Archetype.ROGUE,
            cost={Resource.STAMINA: 25},
            shape=TargetShape.MELEE,
            range=1,
            effect=_poison_blade,
        ),
        # Cleric.
        Ability(
            key=AbilityKey.HEAL,
            name="Heal",
            archetype=Archetype.CLERIC,
            cost={Resource.MANA: 30},
            shape=TargetShape.SELF,
            effect=_heal,
        ),
        Ability(
            key=AbilityKey.SMITE,
            name="Smite",
            archetype=Archetype.CLERIC,
            cost={Resource.MANA: 15},
            shape=TargetShape.MELEE,
            range=1,
            effect=_smite,
        ),
        Ability(
            key=AbilityKey.DIVINE_SHIELD,
            name="Divine Shield",
            archetype=Archetype.CLERIC,
            cost={Resource.MANA: 30},
            shape=TargetShape.PARTY,
            effect=_divine_shield,
        ),
        # Monsters.
        Ability(
            key=AbilityKey.VENOM_SPIT,
            name="Venom Spit",
            archetype=Archetype.MONSTER,
            cost={Resource.STAMINA: 10},
            shape=TargetShape.RANGED,
            range=4,
            requires_los=True,
            effect=_venom_spit,
        ),
        Ability(
            key=AbilityKey.HEX,
            name="Hex",
            archetype=Archetype.MONSTER,
            cost={Resource.MANA: 10},
            shape=TargetShape.RANGED,
            range=5,
            requires_los=True,
            effect=_hex,
        ),
        Ability(
            key=AbilityKey.DRAGON_BREATH,
            name="Dragon Breath",
            archetype=Archetype.MONSTER,
            cost={Resource.MANA: 20, Resource.STAMINA: 10},
            shape=TargetShape.AOE,
            requires_los=True,
            radius=1,
            multiplier=1.5,
            effect=_dragon_breath,
        ),
    )
}


def _to_key(key: "AbilityKey | str") -> AbilityKey | None:
    if isinstance(key, AbilityKey):
        return key
    try:
        return AbilityKey(key)
    except ValueError:
        return None


def get_ability_info(key: "AbilityKey | str") -> Ability | None:
    """Returns the catalog entry for ``key``, or None if there is none."""
    ability_key = _to_key(key)
    return ABILITIES.get(ability_key) if ability_key is not None else None


def _check_target(
    ctx: "SimulationContext", ability: Ability, user: Actor, target: Actor | None
) -> bool:
    if not ability.needs_target:
        return True
    if target is None or not target.alive:
        return ctx.fail(ActionFailure.OUT_OF_RANGE, f"{ability.name} needs a living target.")
    if ability.range is not None and chebyshev(user.x, user.y, target.x, target.y) > ability.range:
        if ability.shape == TargetShape.MELEE:
            return ctx.fail(ActionFailure.OUT_OF_RANGE, f"Too far for {ability.name}.")
        return ctx.fail(ActionFailure.OUT_OF_RANGE, f"Out of range for {ability.name}.")
    if ability.requires_los:
        if ctx.grid is None:
            return ctx.fail(ActionFailure.NO_MAP, "No map data.")
        if not has_line_of_sight(user.x, user.y, target.x, target.y, ctx.grid):
            return ctx.fail(
                ActionFailure.NO_LINE_OF_SIGHT, f"No line of sight for {ability.name}."
            )
    return True


def use_ability(
    ctx: "SimulationContext",
    key: "AbilityKey | str",
    user: Actor,
    target: Actor | None = None,
) -> bool:
    """
    Invokes an ability.

    Args:
        ctx (SimulationContext):
            The running simulation.
        key (AbilityKey | str):
            The ability to use.
        user (Actor):
            The actor using the ability.
        target (Actor | None):
            The target, required by melee, ranged and area abilities.

    Returns:
        bool:
            True if the ability resolved. False if it was refused, in which
            case no cost was paid and nothing changed.

    """
    ctx.last_failure = None
    ability = get_ability_info(key)
    if ability is None:
        return ctx.fail(ActionFailure.UNKNOWN_ABILITY, f"Unknown ability: {key}")

    if user.status_effects.has(StatusKind.STUNNED):
        return ctx.fail(ActionFailure.INCAPACITATED, f"{user.name} is stunned and cannot act!")

    for resource, amount in ability.cost.items():
        if user.resource(resource) < amount:
            return ctx.fail(
                ActionFailure.INSUFFICIENT_RESOURCE,
                f"{user.name} doesn't have enough {resource.value} for {ability.name}.",
            )

    if not _check_target(ctx, ability, user, target):
        return False

    for resource, amount in ability.cost.items():
        user.adjust_resource(resource, -amount)
    log_debug(
        f"{user.name} uses {ability.name}",
        {"cost": ability.cost_text() or "free", "target": target.name if target else None},
    )
    return ability.effect(ctx, ability, user, target)
