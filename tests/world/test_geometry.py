"""
Tests for the grid geometry helpers and the tile grid.
"""

import pytest
from core.constants import TileType
from world.geometry import (
    all_neighbours,
    cardinal_neighbours,
    chebyshev,
    euclidean,
    in_bounds,
    manhattan,
    sign,
)
from world.grid import TileGrid


def test_distance_metrics():
    assert manhattan(0, 0, 3, 4) == 7
    assert euclidean(0, 0, 3, 4) == pytest.approx(5.0)
    assert chebyshev(0, 0, 3, 4) == 4
    assert chebyshev(5, 5, 5, 5) == 0


def test_neighbours_order():
    assert cardinal_neighbours(5, 5) == [(5, 4), (6, 5), (5, 6), (4, 5)]
    neighbours = all_neighbours(5, 5)
    assert len(neighbours) == 8
    assert neighbours[0] == (5, 4)
    assert neighbours[1] == (6, 4)
    assert neighbours[-1] == (4, 4)


def test_in_bounds():
    assert in_bounds(0, 0)
    assert in_bounds(49, 49)
    assert not in_bounds(50, 0)
    assert not in_bounds(-1, 3)
    assert in_bounds(2, 2, 3, 3)
    assert not in_bounds(3, 2, 3, 3)


def test_sign():
    assert (sign(-4), sign(0), sign(9)) == (-1, 0, 1)


def test_grid_from_strings_round_trips_glyphs():
    rows = ["#.+", "><,", "~^."]
    grid = TileGrid.from_strings(rows)
    assert grid.width == 3 and grid.height == 3
    assert grid.tile_at(2, 0) == TileType.DOOR
    assert grid.render() == rows


def test_grid_rejects_unknown_glyphs_and_ragged_rows():
    with pytest.raises(ValueError):
        TileGrid.from_strings(["#?#"])
    with pytest.raises(ValueError):
        TileGrid.from_strings(["###", "##"])


def test_grid_predicates():
    grid = TileGrid.from_strings(["#.+~"])
    assert not grid.is_walkable(0, 0)
    assert grid.is_walkable(1, 0)
    assert grid.is_walkable(2, 0)
    assert not grid.is_walkable(3, 0)
    assert grid.is_opaque(0, 0)
    assert grid.is_opaque(2, 0)
    assert not grid.is_opaque(3, 0)
    # Out of bounds is neither walkable nor transparent.
    assert not grid.is_walkable(10, 0)
    assert grid.is_opaque(10, 0)
