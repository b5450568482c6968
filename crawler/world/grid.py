"""
Tile grid module.

The tile grid is produced by the dungeon generator and consumed read-only by
the engine. It answers the two questions the engine asks of terrain: can an
actor stand here, and does this tile block sight.
"""

from collections.abc import Iterable

from core.constants import TileType

from .geometry import in_bounds


class TileGrid:
    """
    A rectangular grid of tile types, indexed as ``tiles[y][x]``.

    Attributes:
        width (int):
            Number of columns.
        height (int):
            Number of rows.

    """

    def __init__(self, tiles: list[list[TileType]]) -> None:
        if not tiles or not tiles[0]:
            raise ValueError("A tile grid needs at least one row and one column.")
        width = len(tiles[0])
        if any(len(row) != width for row in tiles):
            raise ValueError("All tile grid rows must have the same width.")
        self._tiles = [list(row) for row in tiles]
        self.width = width
        self.height = len(tiles)

    @classmethod
    def filled(cls, width: int, height: int, tile: TileType = TileType.FLOOR) -> "TileGrid":
        """Creates a grid where every cell is ``tile``."""
        return cls([[tile] * width for _ in range(height)])

    @classmethod
    def from_strings(cls, rows: Iterable[str]) -> "TileGrid":
        """
        Builds a grid from ASCII rows using the tile glyphs.

        Args:
            rows (Iterable[str]):
                One string per row, e.g. ``"#..#"``.

        Returns:
            TileGrid:
                The parsed grid.

        """
        by_glyph = {tile.glyph: tile for tile in TileType}
        parsed: list[list[TileType]] = []
        for row in rows:
            try:
                parsed.append([by_glyph[ch] for ch in row])
            except KeyError as e:
                raise ValueError(f"Unknown tile glyph {e.args[0]!r} in row {row!r}") from e
        return cls(parsed)

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.width, self.height)

    def tile_at(self, x: int, y: int) -> TileType | None:
        """Returns the tile at (x, y), or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self._tiles[y][x]

    def set_tile(self, x: int, y: int, tile: TileType) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")
        self._tiles[y][x] = tile

    def is_walkable(self, x: int, y: int) -> bool:
        tile = self.tile_at(x, y)
        return tile is not None and tile.walkable

    def is_opaque(self, x: int, y: int) -> bool:
        """Out-of-bounds cells count as opaque."""
        tile = self.tile_at(x, y)
        return tile is None or tile.opaque

    def render(self) -> list[str]:
        return ["".join(tile.glyph for tile in row) for row in self._tiles]
