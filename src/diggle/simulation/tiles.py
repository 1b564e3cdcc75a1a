"""Tile kinds and their per-kind properties."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TileKind(IntEnum):
    """
    Kinds of tile in the world grid.

    Values are stable small integers so a whole grid fits in a uint8 array.
    """

    EMPTY = 0
    SURFACE = 1
    DIRT = 2
    ROCK = 3
    COAL = 4
    COPPER = 5
    SILVER = 6
    GOLD = 7
    SAPPHIRE = 8
    EMERALD = 9
    RUBY = 10
    DIAMOND = 11
    GAS = 12
    LAVA = 13
    BEDROCK = 14

    @property
    def info(self) -> TileInfo:
        return _TILE_INFO[self]

    @property
    def is_passable(self) -> bool:
        """Whether the vehicle can move through this tile without digging."""
        return self in (TileKind.EMPTY, TileKind.SURFACE)

    @property
    def is_solid(self) -> bool:
        return not self.is_passable

    @property
    def is_diggable(self) -> bool:
        """Solid tiles can be dug, except the permanent bedrock boundary."""
        return self.is_solid and self is not TileKind.BEDROCK

    @property
    def is_ore(self) -> bool:
        return self in ORE_KINDS

    @property
    def is_hazard(self) -> bool:
        return self in HAZARD_KINDS

    @property
    def unit_price(self) -> int:
        """Unit sale price at the surface (0 for non-ore)."""
        return self.info.unit_price

    @property
    def fuel_cost(self) -> float:
        """Base fuel to dig this tile, or to move through it if passable."""
        return self.info.fuel_cost

    @property
    def min_depth(self) -> int:
        return self.info.min_depth

    @property
    def spawn_weight(self) -> float:
        return self.info.spawn_weight

    @property
    def hazard_damage(self) -> float:
        return self.info.hazard_damage

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class TileInfo:
    """Static properties of a tile kind."""

    unit_price: int = 0
    fuel_cost: float = 1.0
    # Ores and hazards only start appearing this many rows below the surface
    min_depth: int = 0
    spawn_weight: float = 0.0
    hazard_damage: float = 0.0


_TILE_INFO: dict[TileKind, TileInfo] = {
    TileKind.EMPTY: TileInfo(fuel_cost=0.5),
    TileKind.SURFACE: TileInfo(fuel_cost=0.5),
    TileKind.DIRT: TileInfo(fuel_cost=1.0),
    TileKind.ROCK: TileInfo(fuel_cost=2.0),
    TileKind.COAL: TileInfo(unit_price=10, fuel_cost=1.5, min_depth=0, spawn_weight=0.08),
    TileKind.COPPER: TileInfo(unit_price=25, fuel_cost=1.5, min_depth=10, spawn_weight=0.05),
    TileKind.SILVER: TileInfo(unit_price=50, fuel_cost=1.5, min_depth=25, spawn_weight=0.035),
    TileKind.GOLD: TileInfo(unit_price=100, fuel_cost=1.5, min_depth=45, spawn_weight=0.02),
    TileKind.SAPPHIRE: TileInfo(unit_price=200, fuel_cost=1.5, min_depth=70, spawn_weight=0.012),
    TileKind.EMERALD: TileInfo(unit_price=350, fuel_cost=1.5, min_depth=100, spawn_weight=0.008),
    TileKind.RUBY: TileInfo(unit_price=500, fuel_cost=1.5, min_depth=140, spawn_weight=0.005),
    TileKind.DIAMOND: TileInfo(unit_price=1000, fuel_cost=1.5, min_depth=190, spawn_weight=0.003),
    TileKind.GAS: TileInfo(fuel_cost=1.0, min_depth=20, spawn_weight=0.012, hazard_damage=15.0),
    TileKind.LAVA: TileInfo(fuel_cost=1.0, min_depth=40, spawn_weight=0.01, hazard_damage=30.0),
    TileKind.BEDROCK: TileInfo(fuel_cost=0.0),
}

ORE_KINDS: tuple[TileKind, ...] = (
    TileKind.COAL,
    TileKind.COPPER,
    TileKind.SILVER,
    TileKind.GOLD,
    TileKind.SAPPHIRE,
    TileKind.EMERALD,
    TileKind.RUBY,
    TileKind.DIAMOND,
)

HAZARD_KINDS: tuple[TileKind, ...] = (TileKind.LAVA, TileKind.GAS)
