"""
Turn and initiative scheduling.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from core.constants import StatusKind
from effects.effect_manager import tick_status_effects
from entities.actor import Actor

if TYPE_CHECKING:
    from core.context import SimulationContext


def get_initiative_order(actors: Iterable[Actor]) -> list[Actor]:
    """
    Orders living actors by speed, fastest first.

    Equal speeds are ordered by ascending id, so identical inputs always give
    the same order.
    """
    return sorted((a for a in actors if a.alive), key=lambda a: (-a.speed, a.id))


def process_turn_start(ctx: "SimulationContext", actor: Actor) -> bool:
    """
    Runs the start-of-turn bookkeeping of ``actor``.

    Status effects tick even for a stunned actor, so the stun can wear off.

    Returns:
        bool:
            Whether the actor can act this turn.

    """
    if not actor.alive:
        return False
    if actor.status_effects.has(StatusKind.STUNNED):
        ctx.message(f"{actor.name} is stunned and skips their turn.")
        tick_status_effects(ctx, actor)
        return False
    tick_status_effects(ctx, actor)
    return actor.alive


def is_slowed_skip(ctx: "SimulationContext", actor: Actor) -> bool:
    """Slowed actors lose every turn with an even global turn counter."""
    return actor.status_effects.has(StatusKind.SLOWED) and ctx.turn % 2 == 0
