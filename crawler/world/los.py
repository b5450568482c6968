"""
Line-of-sight module.

Rasterizes a Bresenham line between two cells and checks that none of the
interior cells is opaque. The endpoints themselves never block: an archer
standing in a doorway can still shoot out of it.
"""

from .geometry import Point
from .grid import TileGrid


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> list[Point]:
    """
    Returns every cell on the line from (x0, y0) to (x1, y1), both included.
    """
    points: list[Point] = []
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    while True:
        points.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy
    return points


def has_line_of_sight(x0: int, y0: int, x1: int, y1: int, grid: TileGrid) -> bool:
    """
    Checks whether the straight line between two cells is unobstructed.

    Args:
        x0 (int), y0 (int):
            The origin cell.
        x1 (int), y1 (int):
            The destination cell.
        grid (TileGrid):
            The terrain to test against.

    Returns:
        bool:
            True if no interior cell is opaque or out of bounds.

    """
    line = bresenham_line(x0, y0, x1, y1)
    for x, y in line[1:-1]:
        if grid.is_opaque(x, y):
            return False
    return True
