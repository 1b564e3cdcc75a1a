"""Drill bit, engine and cooling upgrades - the modifiers on fuel costs."""

from __future__ import annotations

from dataclasses import dataclass, field

from .upgrades import Tier, TierTrack

# Effect: dig speed multiplier (divides dig fuel cost)
DRILLBIT_TIERS = (
    Tier("Basic Bit", 1.0),
    Tier("Reinforced Bit", 1.3, cost=250),
    Tier("Titanium Bit", 1.6, cost=600),
    Tier("Diamond Bit", 2.0, cost=1200),
)

# Effect: movement speed multiplier (divides move fuel cost)
ENGINE_TIERS = (
    Tier("Basic Engine", 1.0),
    Tier("Improved Engine", 1.25, cost=200),
    Tier("Turbo Engine", 1.5, cost=500),
    Tier("Quantum Engine", 2.0, cost=1000),
)

# Effect: fuel efficiency (multiplies every fuel cost, lower is better)
COOLING_TIERS = (
    Tier("Basic Cooling", 1.0),
    Tier("Improved Cooling", 0.85, cost=3000),
    Tier("Advanced Cooling", 0.70, cost=70000),
    Tier("Cryo Cooling", 0.50, cost=150000),
)


@dataclass
class Equipment:
    """The vehicle's installed drill bit, engine and cooling system."""

    drillbit: TierTrack = field(default_factory=lambda: TierTrack(DRILLBIT_TIERS))
    engine: TierTrack = field(default_factory=lambda: TierTrack(ENGINE_TIERS))
    cooling: TierTrack = field(default_factory=lambda: TierTrack(COOLING_TIERS))

    def dig_fuel_cost(self, base_cost: float) -> float:
        """Fuel to dig a tile with the given base cost."""
        return base_cost * self.cooling.effect / self.drillbit.effect

    def move_fuel_cost(self, base_cost: float) -> float:
        """Fuel to move one tile through open space."""
        return base_cost * self.cooling.effect / self.engine.effect

    @property
    def savings_percent(self) -> int:
        return round((1.0 - self.cooling.effect) * 100)

    def reset(self) -> None:
        self.drillbit.reset()
        self.engine.reset()
        self.cooling.reset()
