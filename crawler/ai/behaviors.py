"""
Decision procedures of the regular monster behaviors.

Each procedure chooses and performs one action for ``actor`` against the
player. Nothing persists between turns: the situation is re-evaluated from
scratch every time.
"""

from typing import TYPE_CHECKING

from combat.abilities import ABILITIES, AbilityKey, use_ability
from combat.attacks import melee_attack
from core.logging import log_debug
from entities.actor import Actor
from world.geometry import chebyshev
from world.los import has_line_of_sight
from world.pathfinding import move_toward

from .positioning import find_flank_position, find_retreat_position

if TYPE_CHECKING:
    from core.context import SimulationContext


def try_random_ability(ctx: "SimulationContext", actor: Actor, target: Actor) -> bool:
    """Uses one of the actor's abilities at random, returns whether it resolved."""
    if not actor.abilities:
        return False
    return use_ability(ctx, ctx.rng.pick(actor.abilities), actor, target)


def retreat(ctx: "SimulationContext", actor: Actor, threat: Actor) -> bool:
    """Steps away from ``threat``, returns whether the actor moved."""
    position = find_retreat_position(ctx, actor, threat)
    if position is None:
        return False
    actor.move_to(*position)
    log_debug(f"{actor.name} retreats", {"to": position, "turn": ctx.turn})
    return True


def _attack_adjacent(
    ctx: "SimulationContext", actor: Actor, player: Actor, ability_chance: float
) -> None:
    if actor.abilities and ctx.rng.chance(ability_chance):
        if try_random_ability(ctx, actor, player):
            return
    melee_attack(ctx, actor, player)


def behavior_aggressive(ctx: "SimulationContext", actor: Actor, player: Actor) -> None:
    """Attacks when adjacent, otherwise closes in."""
    if chebyshev(actor.x, actor.y, player.x, player.y) <= 1:
        _attack_adjacent(ctx, actor, player, ctx.config.aggressive_ability_chance)
        return
    move_toward(ctx, actor, player.x, player.y)


def behavior_flanking(ctx: "SimulationContext", actor: Actor, player: Actor) -> None:
    """Attacks when adjacent, otherwise circles toward the player's back."""
    if chebyshev(actor.x, actor.y, player.x, player.y) <= 1:
        _attack_adjacent(ctx, actor, player, ctx.config.flanking_ability_chance)
        return
    flank = find_flank_position(ctx, actor, player)
    if flank is not None:
        move_toward(ctx, actor, *flank)
    else:
        move_toward(ctx, actor, player.x, player.y)


def behavior_cautious(ctx: "SimulationContext", actor: Actor, player: Actor) -> None:
    """
    Fights like an aggressive monster until badly hurt, then heals if it can
    and retreats otherwise. A cornered monster keeps fighting.
    """
    if actor.hp_ratio < ctx.config.cautious_hp_ratio:
        heal = ABILITIES[AbilityKey.HEAL]
        if actor.knows(heal.key.value) and actor.can_afford(heal.cost):
            use_ability(ctx, heal.key, actor, actor)
            return
        if retreat(ctx, actor, player):
            return
    behavior_aggressive(ctx, actor, player)


def behavior_ranged(ctx: "SimulationContext", actor: Actor, player: Actor) -> None:
    """
    Keeps the player inside a distance band with line of sight and casts
    from there.
    """
    cfg = ctx.config
    distance = chebyshev(actor.x, actor.y, player.x, player.y)
    in_sight = ctx.grid is not None and has_line_of_sight(
        actor.x, actor.y, player.x, player.y, ctx.grid
    )
    too_close = distance < cfg.ranged_min_distance
    too_far = distance > cfg.ranged_max_distance

    if too_close:
        if in_sight:
            try_random_ability(ctx, actor, player)
        retreat(ctx, actor, player)
        return

    if not too_far and in_sight and try_random_ability(ctx, actor, player):
        return

    if distance <= 1:
        melee_attack(ctx, actor, player)
        return

    if too_far or not in_sight:
        move_toward(ctx, actor, player.x, player.y)
