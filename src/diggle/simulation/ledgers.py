"""Resource ledgers - fuel, hull integrity and the ore/cash economy."""

from __future__ import annotations

import math

from .tiles import TileKind
from .upgrades import Tier, TierTrack

FUEL_TANK_TIERS = (
    Tier("Basic Tank", 100.0),
    Tier("Reinforced Tank", 150.0, cost=200),
    Tier("Advanced Tank", 250.0, cost=500),
)

HULL_TIERS = (
    Tier("Basic Hull", 100.0),
    Tier("Reinforced Hull", 150.0, cost=300),
    Tier("Titanium Hull", 200.0, cost=600),
)

CARGO_TIERS = (
    Tier("Basic Cargo", 10),
    Tier("Extended Cargo", 20, cost=150),
    Tier("Heavy Cargo", 40, cost=400),
)

# Fuel and hull are bought back at one cash per two units
REFILL_UNITS_PER_CASH = 2.0


class FuelLedger:
    """
    Fuel tank contents and capacity tier.

    Invariant: 0 <= current <= capacity after every operation.
    Debits clamp at zero instead of failing; an empty tank blocks the *next*
    action rather than the one that drained it.
    """

    def __init__(self, current: float | None = None, level: int = 0):
        self.tank = TierTrack(FUEL_TANK_TIERS, level)
        self.current = self.capacity if current is None else _clamp(current, self.capacity)
        self.paused = False

    @property
    def capacity(self) -> float:
        return self.tank.effect

    @property
    def fraction(self) -> float:
        return self.current / self.capacity

    @property
    def is_empty(self) -> bool:
        return self.current <= 0

    @property
    def is_full(self) -> bool:
        return self.current >= self.capacity

    def debit(self, amount: float) -> None:
        """Burn fuel, stopping at zero. Ignored while paused."""
        if self.paused or amount <= 0:
            return
        self.current = max(0.0, self.current - amount)

    def add(self, amount: float) -> None:
        """Add fuel, capped at capacity."""
        if amount <= 0:
            return
        self.current = min(self.capacity, self.current + amount)

    def refill(self) -> None:
        self.current = self.capacity

    def refill_cost(self) -> int:
        """Cash needed to fill the tank from its current level."""
        return math.ceil((self.capacity - self.current) / REFILL_UNITS_PER_CASH)

    def pause(self) -> None:
        """Suspend consumption accounting (menus, shop)."""
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def upgrade_cost(self) -> int:
        return self.tank.upgrade_cost()

    def upgrade(self) -> bool:
        """Install the next tank. Current fuel is kept."""
        return self.tank.advance()

    def reset(self) -> None:
        self.tank.reset()
        self.current = self.capacity
        self.paused = False

    def restore(self, level: int, current: float) -> None:
        self.tank.restore(level)
        self.current = _clamp(current, self.capacity)
        self.paused = False

    def __repr__(self) -> str:
        return f"FuelLedger({self.current:.1f}/{self.capacity:.0f} - {self.tank.current.name})"


class HullLedger:
    """
    Hull integrity and hull tier.

    Invariant: 0 <= current <= max_hp. Reaching zero is terminal for the run.
    """

    def __init__(self, current: float | None = None, level: int = 0):
        self.hull = TierTrack(HULL_TIERS, level)
        self.current = self.max_hp if current is None else _clamp(current, self.max_hp)

    @property
    def max_hp(self) -> float:
        return self.hull.effect

    @property
    def fraction(self) -> float:
        return self.current / self.max_hp

    @property
    def is_destroyed(self) -> bool:
        return self.current <= 0

    @property
    def is_damaged(self) -> bool:
        return self.current < self.max_hp

    def debit(self, amount: float) -> bool:
        """
        Take damage, stopping at zero.

        Returns:
            True if the hull is still intact afterwards
        """
        if amount > 0:
            self.current = max(0.0, self.current - amount)
        return self.current > 0

    def repair(self, amount: float) -> None:
        if amount <= 0:
            return
        self.current = min(self.max_hp, self.current + amount)

    def full_repair(self) -> None:
        self.current = self.max_hp

    def repair_cost(self) -> int:
        return math.ceil((self.max_hp - self.current) / REFILL_UNITS_PER_CASH)

    def upgrade_cost(self) -> int:
        return self.hull.upgrade_cost()

    def upgrade(self) -> bool:
        """Install the next hull. Current integrity is kept."""
        return self.hull.advance()

    def reset(self) -> None:
        self.hull.reset()
        self.current = self.max_hp

    def restore(self, level: int, current: float) -> None:
        self.hull.restore(level)
        self.current = _clamp(current, self.max_hp)

    def __repr__(self) -> str:
        return f"HullLedger({self.current:.1f}/{self.max_hp:.0f} - {self.hull.current.name})"


class EconomyLedger:
    """
    Cash, ore cargo and lifetime statistics.

    Cargo is bounded in aggregate by the cargo tier's capacity; ore that does
    not fit is rejected unit by unit and lost. Cash never goes negative.
    """

    def __init__(self, cash: int = 50, cargo_level: int = 0):
        self.initial_cash = cash
        self.cash = cash
        self.cargo = TierTrack(CARGO_TIERS, cargo_level)
        self.inventory: dict[TileKind, int] = {}

        # Lifetime statistics
        self.total_ore_collected = 0
        self.total_cash_earned = 0
        self.max_depth_reached = 0

    @property
    def cargo_capacity(self) -> int:
        return int(self.cargo.effect)

    @property
    def cargo_count(self) -> int:
        return sum(self.inventory.values())

    @property
    def cargo_space(self) -> int:
        return self.cargo_capacity - self.cargo_count

    @property
    def is_cargo_full(self) -> bool:
        return self.cargo_count >= self.cargo_capacity

    @property
    def cargo_value(self) -> int:
        return sum(kind.unit_price * count for kind, count in self.inventory.items())

    def ore_count(self, kind: TileKind) -> int:
        return self.inventory.get(kind, 0)

    def collect_ore(self, kind: TileKind) -> bool:
        """Add one unit of ore to cargo. Returns False if not ore or cargo is full."""
        if not kind.is_ore or self.is_cargo_full:
            return False
        self.inventory[kind] = self.inventory.get(kind, 0) + 1
        self.total_ore_collected += 1
        return True

    def sell_all_ore(self) -> int:
        """
        Sell the whole cargo.

        Returns:
            Cash earned; 0 when the cargo was already empty
        """
        value = self.cargo_value
        self.inventory.clear()
        if value > 0:
            self.cash += value
            self.total_cash_earned += value
        return value

    def can_afford(self, amount: int) -> bool:
        return self.cash >= amount

    def spend(self, amount: int) -> bool:
        """Spend cash. Returns False, leaving cash untouched, if insufficient."""
        if amount <= 0:
            return True
        if self.cash < amount:
            return False
        self.cash -= amount
        return True

    def add_cash(self, amount: int) -> None:
        if amount <= 0:
            return
        self.cash += amount

    def cargo_upgrade_cost(self) -> int:
        return self.cargo.upgrade_cost()

    def upgrade_cargo(self) -> bool:
        """Buy the next cargo tier. False if maxed or unaffordable."""
        if not self.cargo.can_upgrade():
            return False
        if not self.spend(self.cargo.upgrade_cost()):
            return False
        return self.cargo.advance()

    def update_max_depth(self, depth: int) -> bool:
        """Record a depth. Returns True if it is a new maximum."""
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth
            return True
        return False

    def reset(self) -> None:
        self.cash = self.initial_cash
        self.cargo.reset()
        self.inventory.clear()
        self.total_ore_collected = 0
        self.total_cash_earned = 0
        self.max_depth_reached = 0

    def restore(
        self,
        cash: int,
        cargo_level: int,
        inventory: dict[TileKind, int],
        max_depth_reached: int = 0,
        total_ore_collected: int = 0,
        total_cash_earned: int = 0,
    ) -> None:
        self.cash = max(0, cash)
        self.cargo.restore(cargo_level)
        self.inventory = {kind: count for kind, count in inventory.items() if kind.is_ore and count > 0}
        self.max_depth_reached = max(0, max_depth_reached)
        self.total_ore_collected = max(0, total_ore_collected)
        self.total_cash_earned = max(0, total_cash_earned)

    def __repr__(self) -> str:
        return f"EconomyLedger(${self.cash}, cargo: {self.cargo_count}/{self.cargo_capacity})"


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))
