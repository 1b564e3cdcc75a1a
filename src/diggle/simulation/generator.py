"""Procedural world generation - seeded, deterministic tile grids."""

from __future__ import annotations

import random

import numpy as np
from noise import snoise2

from .tiles import HAZARD_KINDS, ORE_KINDS, TileKind

# Rows of solid bedrock at the very bottom of the world
BEDROCK_FLOOR_ROWS = 3

# Rock ratio grows from BASE to BASE + RAMP over the first RAMP_DEPTH rows
ROCK_CHANCE_BASE = 0.10
ROCK_CHANCE_RAMP = 0.45
ROCK_RAMP_DEPTH = 120.0

# Simplex noise frequency and strength for rock veins
VEIN_SCALE = 0.09
VEIN_STRENGTH = 0.15


def default_bedrock_start(height: int) -> int:
    """First row of the bedrock band for a world of the given height."""
    return height - max(BEDROCK_FLOOR_ROWS, height // 16)


def generate(
    seed: int,
    width: int,
    height: int,
    surface_rows: int,
    *,
    bedrock_start: int | None = None,
) -> np.ndarray:
    """
    Generate the initial tile grid for a world.

    Identical arguments always produce an identical grid. The returned array
    has shape (width, height) and is indexed [x, y], with y growing downward.

    Args:
        seed: World seed
        width: Number of columns
        height: Number of rows
        surface_rows: Rows of open surface at the top of the world
        bedrock_start: First row of the bedrock band (None = derived)

    Returns:
        uint8 array of TileKind values
    """
    return WorldGenerator(seed, width, height, surface_rows, bedrock_start=bedrock_start).generate()


class WorldGenerator:
    """
    Generates dig worlds from a seed.

    Layout from top to bottom:
    - Surface band: open sky, never ore or hazard
    - One row of guaranteed dirt the vehicle rests on at spawn
    - Terrain: dirt/rock with depth-gated ore and hazard pockets
    - Bedrock band: mixed bedrock/rock, then a solid bedrock floor
    """

    def __init__(
        self,
        seed: int,
        width: int,
        height: int,
        surface_rows: int,
        bedrock_start: int | None = None,
    ):
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        if surface_rows < 1:
            raise ValueError(f"surface_rows must be at least 1, got {surface_rows}")
        if height <= surface_rows:
            raise ValueError(
                f"height ({height}) must exceed surface_rows ({surface_rows})"
            )

        self.seed = seed
        self.width = width
        self.height = height
        self.surface_rows = surface_rows

        if bedrock_start is None:
            bedrock_start = default_bedrock_start(height)
        # The band may never swallow the surface or the spawn dirt row
        if bedrock_start <= surface_rows + 1:
            bedrock_start = height
        self.bedrock_start = bedrock_start

        self.rng = random.Random(seed)
        # Seed-derived noise origin so different seeds sample different veins
        self._noise_x = self.rng.uniform(0.0, 4096.0)
        self._noise_y = self.rng.uniform(0.0, 4096.0)

    def generate(self) -> np.ndarray:
        """Generate the complete tile grid."""
        grid = np.empty((self.width, self.height), dtype=np.uint8)

        for x in range(self.width):
            for y in range(self.height):
                grid[x, y] = self._tile_at(x, y)

        return grid

    def _tile_at(self, x: int, y: int) -> TileKind:
        """Determine the tile kind at a cell."""
        if y < self.surface_rows:
            return TileKind.SURFACE

        # First row below the surface is always dirt
        if y == self.surface_rows:
            return TileKind.DIRT

        if y >= self.bedrock_start:
            if y >= self.height - BEDROCK_FLOOR_ROWS:
                return TileKind.BEDROCK
            if self.rng.random() < 0.5:
                return TileKind.BEDROCK
            return TileKind.ROCK

        depth = y - self.surface_rows
        return self._terrain_tile(x, y, depth)

    def _terrain_tile(self, x: int, y: int, depth: int) -> TileKind:
        """Generate a terrain tile based on depth."""
        roll = self.rng.random()

        special = self._try_spawn_special(depth, roll)
        if special is not None:
            return special

        # Rock ratio grows with depth; noise clumps rock into veins
        rock_chance = ROCK_CHANCE_BASE + min(1.0, depth / ROCK_RAMP_DEPTH) * ROCK_CHANCE_RAMP
        vein = snoise2(x * VEIN_SCALE + self._noise_x, y * VEIN_SCALE + self._noise_y)
        rock_chance = max(0.0, min(1.0, rock_chance + vein * VEIN_STRENGTH))

        if self.rng.random() < rock_chance:
            return TileKind.ROCK
        return TileKind.DIRT

    def _try_spawn_special(self, depth: int, roll: float) -> TileKind | None:
        """
        Try to spawn an ore or hazard tile.

        Every kind whose minimum depth is reached contributes its spawn weight,
        plus a small bonus for each row past that depth. A single roll picks
        at most one kind by cumulative weight.
        """
        spawnables: list[tuple[TileKind, float]] = []

        for ore in ORE_KINDS:
            if depth >= ore.min_depth:
                depth_bonus = (depth - ore.min_depth) / 100.0
                spawnables.append((ore, ore.spawn_weight + depth_bonus * 0.01))

        for hazard in HAZARD_KINDS:
            if depth >= hazard.min_depth:
                depth_bonus = (depth - hazard.min_depth) / 100.0
                spawnables.append((hazard, hazard.spawn_weight + depth_bonus * 0.005))

        if not spawnables:
            return None

        total_weight = sum(weight for _, weight in spawnables)
        if roll > total_weight:
            return None

        cumulative = 0.0
        for kind, weight in spawnables:
            cumulative += weight
            if roll < cumulative:
                return kind

        return None
