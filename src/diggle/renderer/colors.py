"""Color definitions for the renderer."""

from __future__ import annotations

from ..simulation.tiles import TileKind

# Background
BG_DARK = (26, 26, 46)
BG_SIDEBAR = (38, 38, 45)
SKY = (135, 206, 235)

# Vehicle
VEHICLE_BODY = (230, 180, 40)
VEHICLE_DRILL = (200, 200, 210)
VEHICLE_DESTROYED = (120, 40, 30)

# Gauges
FUEL_OK = (255, 165, 0)
FUEL_LOW = (220, 20, 60)
HULL_OK = (64, 224, 208)
HULL_LOW = (220, 20, 60)
GAUGE_BG = (60, 60, 70)

# UI
TEXT_PRIMARY = (240, 240, 245)
TEXT_SECONDARY = (160, 160, 170)
TEXT_ACCENT = (100, 200, 255)
TEXT_WARNING = (255, 120, 90)
DIVIDER = (60, 60, 70)

TILE_COLORS: dict[TileKind, tuple[int, int, int]] = {
    TileKind.EMPTY: (26, 26, 46),
    TileKind.SURFACE: SKY,
    TileKind.DIRT: (139, 69, 19),
    TileKind.ROCK: (105, 105, 105),
    TileKind.COAL: (47, 47, 47),
    TileKind.COPPER: (184, 115, 51),
    TileKind.SILVER: (192, 192, 192),
    TileKind.GOLD: (255, 215, 0),
    TileKind.SAPPHIRE: (15, 82, 186),
    TileKind.EMERALD: (80, 200, 120),
    TileKind.RUBY: (224, 17, 95),
    TileKind.DIAMOND: (185, 242, 255),
    TileKind.GAS: (154, 205, 50),
    TileKind.LAVA: (207, 16, 32),
    TileKind.BEDROCK: (28, 28, 28),
}

# Lighter accent drawn inside ore and hazard tiles
TILE_HIGHLIGHTS: dict[TileKind, tuple[int, int, int]] = {
    TileKind.COAL: (74, 74, 74),
    TileKind.COPPER: (205, 133, 63),
    TileKind.SILVER: (230, 230, 235),
    TileKind.GOLD: (255, 225, 53),
    TileKind.SAPPHIRE: (70, 130, 230),
    TileKind.EMERALD: (140, 240, 170),
    TileKind.RUBY: (255, 90, 140),
    TileKind.DIAMOND: (240, 255, 255),
    TileKind.GAS: (200, 240, 120),
    TileKind.LAVA: (255, 140, 0),
}


def lerp_color(
    color1: tuple[int, int, int],
    color2: tuple[int, int, int],
    t: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


def get_tile_color(kind: TileKind, depth: int) -> tuple[int, int, int]:
    """Get the fill color for a tile, darkening plain earth with depth."""
    base = TILE_COLORS[kind]
    if kind in (TileKind.DIRT, TileKind.ROCK):
        return lerp_color(base, BG_DARK, min(0.6, depth / 400.0))
    return base


def get_gauge_color(fraction: float, ok: tuple[int, int, int], low: tuple[int, int, int]) -> tuple[int, int, int]:
    """Blend a gauge from its low color to its ok color as it fills."""
    if fraction > 0.5:
        return ok
    return lerp_color(low, ok, fraction / 0.5)
