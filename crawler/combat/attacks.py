"""
Action primitives: basic melee, ranged and area attacks.

Each primitive either resolves completely or refuses without touching any
state. A refusal returns False and records the reason on the context.
"""

import math
from typing import TYPE_CHECKING

from core.constants import ActionFailure
from entities.actor import Actor
from world.geometry import chebyshev
from world.los import has_line_of_sight

from .damage import apply_damage, calc_base_damage, hp_percent, post_attack_message
from .progression import on_kill

if TYPE_CHECKING:
    from core.context import SimulationContext


def resolve_hit(
    ctx: "SimulationContext",
    attacker: Actor,
    defender: Actor,
    raw_damage: int,
    message: str | None = None,
    report_misses: bool = False,
) -> int:
    """
    Applies one hit and handles its aftermath: reporting, critical check and
    kill resolution.

    Args:
        ctx (SimulationContext):
            The running simulation.
        attacker (Actor):
            The actor dealing damage.
        defender (Actor):
            The actor receiving damage.
        raw_damage (int):
            Damage before mitigation.
        message (str | None):
            Builds the report from the dealt damage when given, e.g.
            ``"{attacker} uses Power Strike on {defender} for {dealt} damage!"``.
        report_misses (bool):
            Whether a hit fully absorbed by mitigation is still reported.

    Returns:
        int:
            The damage dealt.

    """
    dealt = apply_damage(ctx, defender, raw_damage)
    if dealt > 0 or report_misses:
        text = None
        if message is not None:
            text = message.format(attacker=attacker.name, defender=defender.name, dealt=dealt)
        post_attack_message(ctx, attacker, defender, dealt, text)
    if not defender.alive:
        on_kill(ctx, attacker, defender)
    return dealt


def melee_attack(ctx: "SimulationContext", attacker: Actor, defender: Actor) -> bool:
    """
    Performs a basic melee attack against an adjacent defender.

    Returns:
        bool:
            True if the attack was made, False if the defender is out of reach.

    """
    ctx.last_failure = None
    if chebyshev(attacker.x, attacker.y, defender.x, defender.y) > 1:
        return ctx.fail(ActionFailure.OUT_OF_RANGE, f"{defender.name} is too far for melee.")
    resolve_hit(ctx, attacker, defender, calc_base_damage(ctx, attacker, defender))
    return True


def ranged_attack(
    ctx: "SimulationContext",
    attacker: Actor,
    defender: Actor,
    attack_range: int,
) -> bool:
    """
    Performs a basic ranged attack.

    Args:
        ctx (SimulationContext):
            The running simulation.
        attacker (Actor):
            The shooter.
        defender (Actor):
            The target.
        attack_range (int):
            The maximum Chebyshev distance.

    Returns:
        bool:
            True if the shot was made, False when out of range, without line
            of sight or without a map.

    """
    ctx.last_failure = None
    if chebyshev(attacker.x, attacker.y, defender.x, defender.y) > attack_range:
        return ctx.fail(ActionFailure.OUT_OF_RANGE, f"{defender.name} is out of range.")
    if ctx.grid is None:
        return ctx.fail(ActionFailure.NO_MAP, "No map data.")
    if not has_line_of_sight(attacker.x, attacker.y, defender.x, defender.y, ctx.grid):
        return ctx.fail(ActionFailure.NO_LINE_OF_SIGHT, f"No line of sight to {defender.name}.")
    resolve_hit(
        ctx,
        attacker,
        defender,
        calc_base_damage(ctx, attacker, defender),
        "{attacker} shoots {defender} for {dealt} damage",
    )
    return True


def aoe_attack(
    ctx: "SimulationContext",
    attacker: Actor,
    target_x: int,
    target_y: int,
    radius: int,
    multiplier: float,
    floor: int | None = None,
) -> int:
    """
    Hits every living actor around a point, the attacker excepted.

    Args:
        ctx (SimulationContext):
            The running simulation.
        attacker (Actor):
            The actor dealing damage.
        target_x (int), target_y (int):
            The centre of the blast.
        radius (int):
            The Chebyshev radius of the blast.
        multiplier (float):
            Applied to each victim's base damage, rounded down.
        floor (int | None):
            The floor hit. Defaults to the attacker's floor.

    Returns:
        int:
            The number of actors hit.

    """
    if floor is None:
        floor = attacker.floor
    hits = 0
    for victim in ctx.actors_on_floor(floor):
        if victim.id == attacker.id:
            continue
        if chebyshev(target_x, target_y, victim.x, victim.y) > radius:
            continue
        raw = math.floor(calc_base_damage(ctx, attacker, victim) * multiplier)
        dealt = apply_damage(ctx, victim, raw)
        if dealt > 0:
            ctx.message(f"{victim.name} takes {dealt} AoE damage [{hp_percent(victim)}% HP]")
        if not victim.alive:
            on_kill(ctx, attacker, victim)
        hits += 1
    return hits
