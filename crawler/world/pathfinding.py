"""
A* pathfinding over the tile grid.

Search is 8-directional. Cardinal steps cost 1 and diagonal steps cost 1.41;
the Chebyshev heuristic never overestimates under this cost model, so the
returned paths are optimal. Cells occupied by living actors block the search,
except the goal, which stays reachable so a path can end on an occupied
target.
"""

import heapq
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from core.constants import DIRECTIONS
from core.logging import log_debug

from .geometry import Point, chebyshev

if TYPE_CHECKING:
    from core.context import SimulationContext
    from entities.actor import Actor

CARDINAL_COST = 1.0
DIAGONAL_COST = 1.41


class PathNode(BaseModel):
    """A search node, alive only for the duration of one ``astar`` call."""

    x: int
    y: int
    g: float = Field(0.0, description="Cost of the best known route from the start.")
    h: float = Field(0.0, description="Heuristic estimate of the cost to the goal.")
    parent: Optional["PathNode"] = None

    @property
    def f(self) -> float:
        return self.g + self.h

    @property
    def position(self) -> Point:
        return (self.x, self.y)


def _reconstruct(node: PathNode) -> list[Point]:
    path: list[Point] = []
    current: PathNode | None = node
    while current is not None and current.parent is not None:
        path.append(current.position)
        current = current.parent
    path.reverse()
    return path


def astar(
    ctx: "SimulationContext",
    start_x: int,
    start_y: int,
    goal_x: int,
    goal_y: int,
    floor: int | None = None,
) -> list[Point] | None:
    """
    Finds the cheapest 8-directional path between two cells.

    Args:
        ctx (SimulationContext):
            Provides the tile grid and the actor occupancy.
        start_x (int), start_y (int):
            The starting cell, excluded from the returned path.
        goal_x (int), goal_y (int):
            The destination cell, included in the returned path.
        floor (int | None):
            The floor whose actors block movement. Defaults to the context floor.

    Returns:
        list[Point] | None:
            The steps from the start (exclusive) to the goal (inclusive), an
            empty list when start equals goal, or None when the goal cannot be
            reached.

    """
    if start_x == goal_x and start_y == goal_y:
        return []
    grid = ctx.grid
    if grid is None:
        return None
    if floor is None:
        floor = ctx.floor

    goal = (goal_x, goal_y)
    start = PathNode(x=start_x, y=start_y, h=chebyshev(start_x, start_y, goal_x, goal_y))

    # Entries are (f, insertion order, node): equal totals pop first-inserted first.
    counter = 0
    open_heap: list[tuple[float, int, PathNode]] = [(start.f, counter, start)]
    best_g: dict[Point, float] = {start.position: 0.0}
    closed: set[Point] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current.position in closed:
            continue
        if current.position == goal:
            return _reconstruct(current)
        closed.add(current.position)

        for dx, dy in DIRECTIONS.values():
            nx, ny = current.x + dx, current.y + dy
            neighbour = (nx, ny)
            if neighbour in closed:
                continue
            if not grid.is_walkable(nx, ny):
                continue
            # The goal may be occupied, typically by the actor being chased.
            if neighbour != goal and ctx.get_actor_at(nx, ny, floor) is not None:
                continue

            step = DIAGONAL_COST if dx != 0 and dy != 0 else CARDINAL_COST
            g = current.g + step
            if g >= best_g.get(neighbour, float("inf")):
                continue
            best_g[neighbour] = g
            node = PathNode(
                x=nx,
                y=ny,
                g=g,
                h=chebyshev(nx, ny, goal_x, goal_y),
                parent=current,
            )
            counter += 1
            heapq.heappush(open_heap, (node.f, counter, node))

    log_debug(
        "No path found",
        {"start": (start_x, start_y), "goal": goal, "floor": floor},
    )
    return None


def move_toward(ctx: "SimulationContext", actor: "Actor", target_x: int, target_y: int) -> bool:
    """
    Moves ``actor`` one step along the A* path toward (target_x, target_y).

    Returns:
        bool:
            True if the actor moved. False when there is no path or the next
            step is occupied, typically by the target itself.

    """
    path = astar(ctx, actor.x, actor.y, target_x, target_y, actor.floor)
    if not path:
        return False
    nx, ny = path[0]
    if not ctx.is_free(nx, ny, actor.floor):
        return False
    actor.move_to(nx, ny)
    return True
