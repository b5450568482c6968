"""
Damage resolver.

Computes raw damage, runs it through the target's mitigation and reports the
outcome. Mitigation always runs in the same order: evasion, vulnerability,
divine reduction, absorb shield, and finally hit points.
"""

import math
from typing import TYPE_CHECKING

from core.constants import StatusKind
from core.logging import log_debug
from core.utils import round_half_up
from effects.effect_manager import add_status_effect
from entities.actor import Actor

if TYPE_CHECKING:
    from core.context import SimulationContext


def calc_reference_damage(attacker: Actor, defender: Actor) -> int:
    """Base damage without variance, never below 1."""
    return max(1, attacker.attack - defender.defense // 2)


def calc_base_damage(ctx: "SimulationContext", attacker: Actor, defender: Actor) -> int:
    """
    Rolls the raw damage of one hit.

    Args:
        ctx (SimulationContext):
            Provides the random stream and the variance range.
        attacker (Actor):
            The actor dealing damage.
        defender (Actor):
            The actor receiving damage.

    Returns:
        int:
            ``attack - defense // 2 + variance``, never below 1.

    """
    cfg = ctx.config
    variance = ctx.rng.rand_int(cfg.variance_min, cfg.variance_max)
    return max(1, attacker.attack - defender.defense // 2 + variance)


def apply_damage(ctx: "SimulationContext", target: Actor, raw_damage: int) -> int:
    """
    Applies ``raw_damage`` to ``target`` through its mitigation.

    Args:
        ctx (SimulationContext):
            The running simulation.
        target (Actor):
            The actor being hit.
        raw_damage (int):
            The incoming damage. Negative values count as 0.

    Returns:
        int:
            The damage that reached hit points.

    """
    damage = max(0, raw_damage)
    effects = target.status_effects

    if effects.remove(StatusKind.EVADING) is not None:
        ctx.message(f"{target.name} evades the attack!")
        return 0

    if effects.has(StatusKind.VULNERABLE):
        damage = math.floor(damage * ctx.config.vulnerable_multiplier)

    divine = effects.get(StatusKind.DIVINE_SHIELD)
    if divine is not None:
        damage = math.floor(damage * (1 - divine.reduction))

    shield = effects.get(StatusKind.SHIELDED)
    if shield is not None and shield.absorb > 0:
        absorbed = min(shield.absorb, damage)
        shield.absorb -= absorbed
        damage -= absorbed
        ctx.message(f"{target.name}'s shield absorbs {absorbed} damage.")
        if shield.absorb <= 0:
            effects.remove(StatusKind.SHIELDED)

    target.hp -= damage
    if target.hp <= 0:
        target.hp = 0
        target.alive = False
    log_debug(
        f"{target.name} takes {damage} damage",
        {"raw": raw_damage, "hp": target.hp, "turn": ctx.turn},
    )
    return damage


def hp_percent(actor: Actor) -> int:
    """Remaining hp as a rounded percentage of max hp."""
    if actor.max_hp <= 0:
        return 0
    return max(0, round_half_up(actor.hp / actor.max_hp * 100))


def post_attack_message(
    ctx: "SimulationContext",
    attacker: Actor,
    defender: Actor,
    dealt: int,
    message: str | None = None,
) -> bool:
    """
    Reports a hit, judging whether it was critical.

    A hit is critical when it dealt more than the configured multiple of the
    reference damage. A critical hit also makes a living defender bleed.

    Returns:
        bool:
            Whether the hit was critical.

    """
    cfg = ctx.config
    text = message or f"{attacker.name} hits {defender.name} for {dealt} damage"
    hp_tag = f" [{hp_percent(defender)}% HP]"
    critical = dealt > calc_reference_damage(attacker, defender) * cfg.crit_threshold
    if not critical:
        ctx.message(f"{text}{hp_tag}")
        return False

    ctx.message(f"CRITICAL! {text}{hp_tag}")
    if defender.alive:
        add_status_effect(
            ctx,
            defender,
            StatusKind.BLEED,
            duration=cfg.crit_bleed_duration,
            damage=cfg.crit_bleed_damage,
            source_id=attacker.id,
        )
        ctx.message(f"{defender.name} is bleeding!")
    return True
