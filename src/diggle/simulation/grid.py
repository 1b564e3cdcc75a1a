"""Tile grid - the mutable world and its read-only view."""

from __future__ import annotations

import logging

import numpy as np

from ..config import WorldConfig
from .generator import generate
from .outcomes import OutOfBounds
from .tiles import TileKind

logger = logging.getLogger(__name__)


class GridView:
    """
    Read-only access to a tile grid.

    Collaborators that only display or score the world hold a GridView; the
    underlying array is shared with the owning TileGrid, never copied, and
    is exposed with its write flag cleared.
    """

    def __init__(self, tiles: np.ndarray, config: WorldConfig):
        self._tiles = tiles
        self.config = config
        self.width = config.width
        self.height = config.height
        self.surface_rows = config.surface_rows

    @property
    def tiles(self) -> np.ndarray:
        """The raw [x, y] array of tile values (read-only)."""
        view = self._tiles.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> TileKind:
        """
        Get the tile kind at a cell.

        Raises:
            OutOfBounds: if the cell is outside the grid
        """
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return TileKind(int(self._tiles[x, y]))

    def is_solid(self, x: int, y: int) -> bool:
        """Whether a cell blocks movement. Cells outside the grid are solid."""
        if not self.in_bounds(x, y):
            return True
        return self.tile_at(x, y).is_solid

    def is_passable(self, x: int, y: int) -> bool:
        return not self.is_solid(x, y)

    def is_at_surface(self, y: int) -> bool:
        return y <= self.surface_rows

    def spawn_position(self) -> tuple[int, int]:
        """Cell the vehicle starts in: mid-width, resting on the first dirt row."""
        return (self.width // 2, self.surface_rows - 1)

    def count(self, kind: TileKind) -> int:
        """Number of cells of a given kind."""
        return int(np.count_nonzero(self._tiles == kind))


class TileGrid(GridView):
    """
    Owner of the world tiles.

    The grid is generated once from its WorldConfig and only mutated by
    dig() and explode(); reset() regenerates it from the same config.
    """

    def __init__(self, config: WorldConfig):
        tiles = generate(
            config.seed,
            config.width,
            config.height,
            config.surface_rows,
            bedrock_start=config.bedrock_start,
        )
        super().__init__(tiles, config)

    def view(self) -> GridView:
        """Read-only view sharing this grid's storage."""
        return GridView(self._tiles, self.config)

    def dig(self, x: int, y: int) -> TileKind:
        """
        Dig out a single cell.

        Returns:
            The kind that was dug. TileKind.EMPTY means there was nothing to
            dig (already open, bedrock, or outside the grid) and nothing changed.
        """
        if not self.in_bounds(x, y):
            return TileKind.EMPTY

        kind = self.tile_at(x, y)
        if not kind.is_diggable:
            return TileKind.EMPTY

        self._tiles[x, y] = TileKind.EMPTY
        return kind

    def explode(self, cx: int, cy: int, radius: int) -> list[TileKind]:
        """
        Clear every diggable cell within a Euclidean radius of a center.

        Bedrock survives, cells outside the grid are ignored, and any ore
        caught in the blast is destroyed rather than collected.

        Returns:
            Ore kinds destroyed by the blast
        """
        destroyed: list[TileKind] = []
        radius_sq = radius * radius

        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx * dx + dy * dy > radius_sq:
                    continue
                x, y = cx + dx, cy + dy
                if not self.in_bounds(x, y):
                    continue

                kind = self.tile_at(x, y)
                if not kind.is_diggable:
                    continue
                if kind.is_ore:
                    destroyed.append(kind)
                self._tiles[x, y] = TileKind.EMPTY

        logger.debug(
            "Explosion at (%d, %d) r=%d destroyed %d ore", cx, cy, radius, len(destroyed)
        )
        return destroyed

    def reset(self) -> None:
        """Regenerate the tiles in place from the stored seed and config."""
        self._tiles[...] = generate(
            self.config.seed,
            self.config.width,
            self.config.height,
            self.config.surface_rows,
            bedrock_start=self.config.bedrock_start,
        )
