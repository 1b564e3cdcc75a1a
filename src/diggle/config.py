"""Centralized configuration for the simulation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorldConfig:
    """
    Configuration for world generation.

    Immutable for the lifetime of a world; a different world needs a new
    config object and a full session reset.
    """

    seed: int = 42
    width: int = 64
    height: int = 512
    # Rows [0, surface_rows) are open sky where the shop lives
    surface_rows: int = 3
    # First row of the bedrock band (None = derived from height)
    bedrock_start: int | None = None


@dataclass
class VehicleConfig:
    """Configuration for the drill vehicle."""

    # Scales applied to the per-tile base fuel costs
    dig_cost: float = 1.0
    move_cost: float = 1.0

    # Falls up to this many tiles are free
    safe_fall_distance: int = 3
    fall_damage_per_tile: float = 10.0

    # Fuel below this fraction of capacity is reported as low
    low_fuel_fraction: float = 0.2


@dataclass
class EconomyConfig:
    """Starting balances."""

    initial_cash: int = 50


@dataclass
class ClockConfig:
    """Configuration for the fixed-step simulation clock."""

    tick_seconds: float = 0.125
    # Upper bound on ticks run by a single advance() call
    max_ticks_per_advance: int = 8


@dataclass
class RendererConfig:
    """Configuration for the Pygame debug viewer."""

    window_width: int = 960
    window_height: int = 720
    sidebar_width: int = 240
    tile_size: int = 24
    target_fps: int = 60


@dataclass
class Config:
    """Main configuration container."""

    world: WorldConfig
    vehicle: VehicleConfig
    economy: EconomyConfig
    clock: ClockConfig
    renderer: RendererConfig = field(default_factory=RendererConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            world=WorldConfig(),
            vehicle=VehicleConfig(),
            economy=EconomyConfig(),
            clock=ClockConfig(),
            renderer=RendererConfig(),
        )
