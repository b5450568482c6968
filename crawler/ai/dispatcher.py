"""
AI behavior dispatcher.

Drives the monster phase: every living monster on the player's floor, in
initiative order, runs its start-of-turn bookkeeping and then the decision
procedure registered for its behavior tag.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from catchery import log_warning
from combat.turns import get_initiative_order, is_slowed_skip, process_turn_start
from core.constants import BehaviorTag
from core.logging import log_debug
from entities.actor import Actor
from world.geometry import chebyshev

from .behaviors import (
    behavior_aggressive,
    behavior_cautious,
    behavior_flanking,
    behavior_ranged,
)
from .boss import behavior_boss

if TYPE_CHECKING:
    from core.context import SimulationContext

Behavior = Callable[["SimulationContext", Actor, Actor], None]

BEHAVIORS: dict[BehaviorTag, Behavior] = {
    BehaviorTag.AGGRESSIVE: behavior_aggressive,
    BehaviorTag.FLANKING: behavior_flanking,
    BehaviorTag.CAUTIOUS: behavior_cautious,
    BehaviorTag.RANGED: behavior_ranged,
    BehaviorTag.BOSS: behavior_boss,
}


def get_behavior(actor: Actor) -> Behavior:
    """The decision procedure of ``actor``, aggressive when it has none."""
    if actor.behavior is None:
        return behavior_aggressive
    behavior = BEHAVIORS.get(actor.behavior)
    if behavior is None:
        log_warning(
            f"No decision procedure for behavior {actor.behavior}, falling back to aggressive",
            {"actor": actor.name, "behavior": str(actor.behavior)},
        )
        return behavior_aggressive
    return behavior


def process_monster_turn(ctx: "SimulationContext", monster: Actor) -> bool:
    """
    Runs one monster's turn.

    Args:
        ctx (SimulationContext):
            The running simulation; ``ctx.player`` is the monster's target.
        monster (Actor):
            The monster whose turn it is.

    Returns:
        bool:
            True if the monster reached its decision procedure.

    """
    player = ctx.player
    if player is None or not monster.alive or not monster.is_monster:
        return False
    if not process_turn_start(ctx, monster):
        return False
    if is_slowed_skip(ctx, monster):
        ctx.message(f"{monster.name} is slowed and moves sluggishly.")
        return False
    if chebyshev(monster.x, monster.y, player.x, player.y) > ctx.config.detection_radius:
        return False

    behavior = get_behavior(monster)
    log_debug(
        f"{monster.name} acts",
        {"behavior": monster.behavior.value if monster.behavior else None, "turn": ctx.turn},
    )
    behavior(ctx, monster, player)
    return True


def process_all_monsters(ctx: "SimulationContext") -> int:
    """
    Runs the monster phase on the player's floor.

    The phase stops as soon as the player dies.

    Returns:
        int:
            The number of monsters that acted.

    """
    player = ctx.player
    if player is None or not player.alive:
        return 0
    if ctx.grid is None:
        log_warning("Monster phase skipped: no map loaded", {"floor": player.floor})
        return 0

    monsters = [a for a in ctx.actors_on_floor(player.floor) if a.is_monster]
    acted = 0
    for monster in get_initiative_order(monsters):
        if not player.alive:
            break
        if process_monster_turn(ctx, monster):
            acted += 1
    return acted
