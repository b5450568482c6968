"""
Integer-grid geometry helpers: distance metrics, neighbours and bounds.
"""

import math

from core.constants import CARDINAL_DIRECTIONS, DIRECTIONS, MAP_HEIGHT, MAP_WIDTH

Point = tuple[int, int]


def manhattan(x1: int, y1: int, x2: int, y2: int) -> int:
    return abs(x2 - x1) + abs(y2 - y1)


def euclidean(x1: int, y1: int, x2: int, y2: int) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def chebyshev(x1: int, y1: int, x2: int, y2: int) -> int:
    """Movement-cost metric of an 8-directional grid."""
    return max(abs(x2 - x1), abs(y2 - y1))


def cardinal_neighbours(x: int, y: int) -> list[Point]:
    """The 4 orthogonal neighbours of (x, y): N, E, S, W."""
    return [(x + dx, y + dy) for dx, dy in CARDINAL_DIRECTIONS.values()]


def all_neighbours(x: int, y: int) -> list[Point]:
    """The 8 neighbours of (x, y), clockwise from north."""
    return [(x + dx, y + dy) for dx, dy in DIRECTIONS.values()]


def in_bounds(x: int, y: int, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> bool:
    return 0 <= x < width and 0 <= y < height


def sign(value: int) -> int:
    return (value > 0) - (value < 0)
