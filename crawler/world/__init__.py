"""
World module: grid geometry, the tile grid and line of sight.
"""

from .geometry import (
    Point,
    all_neighbours,
    cardinal_neighbours,
    chebyshev,
    euclidean,
    in_bounds,
    manhattan,
)
from .grid import TileGrid
from .los import bresenham_line, has_line_of_sight

__all__ = [
    "Point",
    "TileGrid",
    "all_neighbours",
    "bresenham_line",
    "cardinal_neighbours",
    "chebyshev",
    "euclidean",
    "has_line_of_sight",
    "in_bounds",
    "manhattan",
]
