"""
Positioning helpers shared by the AI behaviors.
"""

from typing import TYPE_CHECKING

from entities.actor import Actor
from world.geometry import Point, all_neighbours, chebyshev, sign

if TYPE_CHECKING:
    from core.context import SimulationContext


def find_flank_position(ctx: "SimulationContext", actor: Actor, target: Actor) -> Point | None:
    """
    Picks the free tile next to ``target`` farthest from ``actor``.

    The farthest neighbour approximates the target's back, away from the
    direction ``actor`` is approaching from. Ties keep neighbour order.

    Returns:
        Point | None:
            The flank tile, or None when every neighbour is blocked.

    """
    if ctx.grid is None:
        return None
    best: Point | None = None
    best_score = -1
    for nx, ny in all_neighbours(target.x, target.y):
        if not ctx.grid.is_walkable(nx, ny):
            continue
        occupant = ctx.get_actor_at(nx, ny, actor.floor)
        if occupant is not None and occupant.id != actor.id:
            continue
        score = chebyshev(nx, ny, actor.x, actor.y)
        if score > best_score:
            best, best_score = (nx, ny), score
    return best


def find_retreat_position(ctx: "SimulationContext", actor: Actor, threat: Actor) -> Point | None:
    """
    Picks one step directly away from ``threat``.

    The diagonal step away is tried first, then the horizontal and the
    vertical component alone.

    Returns:
        Point | None:
            The free tile to step to, or None when cornered.

    """
    dx = sign(actor.x - threat.x)
    dy = sign(actor.y - threat.y)
    candidates = [
        (actor.x + dx, actor.y + dy),
        (actor.x + dx, actor.y),
        (actor.x, actor.y + dy),
    ]
    for cx, cy in candidates:
        if (cx, cy) == actor.position:
            continue
        if ctx.is_free(cx, cy, actor.floor):
            return (cx, cy)
    return None
