"""Mining session - wires the core together and serves the shop boundary."""

from __future__ import annotations

import logging
from dataclasses import asdict
from enum import Enum, auto
from typing import Any, Callable

from ..config import Config, WorldConfig
from .clock import SimulationClock
from .equipment import Equipment
from .events import Event, EventHub, EventKind
from .grid import GridView, TileGrid
from .items import ItemInventory, ItemKind
from .ledgers import EconomyLedger, FuelLedger, HullLedger
from .outcomes import Outcome
from .progression import LocalProgression, ProgressionSink
from .tiles import TileKind
from .upgrades import TierTrack
from .vehicle import Direction, Vehicle

logger = logging.getLogger(__name__)


class GameState(Enum):
    """High-level state of a run."""

    PLAYING = auto()
    SHOPPING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class MiningSession:
    """
    One world, one vehicle and everything they share.

    Manages:
    - The tile grid, the three ledgers, equipment and items
    - The vehicle and the clock that drives it
    - Shop requests, each checked and applied atomically
    - Pause/shop state and the full reset
    """

    def __init__(self, config: Config | None = None, progression: ProgressionSink | None = None):
        """
        Initialize the session.

        Args:
            config: Simulation configuration (defaults if omitted)
            progression: Receiver for XP/points facts (local calculator if omitted)
        """
        self.config = config if config is not None else Config.default()
        self.events = EventHub()

        self.grid = TileGrid(self.config.world)
        self.fuel = FuelLedger()
        self.hull = HullLedger()
        self.economy = EconomyLedger(cash=self.config.economy.initial_cash)
        self.equipment = Equipment()
        self.items = ItemInventory()
        self.progression: ProgressionSink = progression if progression is not None else LocalProgression()

        self.vehicle = Vehicle(
            self.grid,
            self.fuel,
            self.hull,
            self.economy,
            equipment=self.equipment,
            config=self.config.vehicle,
            progression=self.progression,
            events=self.events,
        )
        self.clock = SimulationClock(self.vehicle, self.config.clock, self.events)
        self.state = GameState.PLAYING
        self.last_sale = 0

        self.events.subscribe(EventKind.GAME_OVER, self._on_game_over)

    @property
    def world_config(self) -> WorldConfig:
        return self.grid.config

    @property
    def view(self) -> GridView:
        """Read-only view of the world for display and scoring."""
        return self.grid.view()

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    @property
    def is_fuel_low(self) -> bool:
        return self.fuel.fraction < self.config.vehicle.low_fuel_fraction

    def subscribe(self, kind: EventKind, listener: Callable[[Event], None]) -> None:
        self.events.subscribe(kind, listener)

    # ============================================================
    # INPUT & TIME
    # ============================================================

    def hold(self, direction: Direction) -> None:
        """Set the held direction. Ignored unless playing."""
        if not self.is_playing:
            return
        self.vehicle.held_direction = direction

    def release(self) -> None:
        self.vehicle.held_direction = Direction.NONE

    def step(self) -> Outcome:
        """Run a single tick if the session is playing."""
        if self.state is GameState.GAME_OVER:
            return Outcome.GAME_OVER
        if not self.is_playing:
            return Outcome.NOTHING_TO_DO
        return self.clock.step()

    def update(self, dt: float) -> int:
        """Advance by elapsed frame time. Returns the number of ticks run."""
        if not self.is_playing:
            return 0
        return self.clock.advance(dt)

    def pause(self) -> None:
        if self.state is not GameState.PLAYING:
            return
        self.state = GameState.PAUSED
        self._suspend()

    def resume(self) -> None:
        if self.state is not GameState.PAUSED:
            return
        self.state = GameState.PLAYING
        self._unsuspend()

    def open_shop(self) -> Outcome:
        """Enter the shop. Only allowed at the surface while playing."""
        if self.state is GameState.GAME_OVER:
            return Outcome.GAME_OVER
        if not self.vehicle.is_at_surface:
            return Outcome.NOT_AT_SURFACE
        if self.state is not GameState.PLAYING:
            return Outcome.NOTHING_TO_DO
        self.state = GameState.SHOPPING
        self.release()
        self._suspend()
        return Outcome.OK

    def close_shop(self) -> None:
        if self.state is not GameState.SHOPPING:
            return
        self.state = GameState.PLAYING
        self._unsuspend()

    def _suspend(self) -> None:
        self.fuel.pause()
        self.clock.pause()

    def _unsuspend(self) -> None:
        self.fuel.resume()
        self.clock.resume()

    def _on_game_over(self, event: Event) -> None:
        self.state = GameState.GAME_OVER
        self.fuel.pause()
        logger.info("Game over after %d ticks (depth %s)", event.tick, event.data.get("depth"))

    # ============================================================
    # SHOP
    # ============================================================

    def _shop_gate(self) -> Outcome:
        if self.state is GameState.GAME_OVER:
            return Outcome.GAME_OVER
        if not self.vehicle.is_at_surface:
            return Outcome.NOT_AT_SURFACE
        return Outcome.OK

    def sell_ore(self) -> Outcome:
        """
        Sell the whole cargo at the surface.

        The cash earned is kept in ``last_sale``.
        """
        gate = self._shop_gate()
        if not gate:
            return gate

        ore_count = self.economy.cargo_count
        self.last_sale = self.economy.sell_all_ore()
        if self.last_sale <= 0:
            return Outcome.NOTHING_TO_DO

        self.progression.award_for_sale(self.last_sale, ore_count)
        logger.info("Sold %d ore for $%d", ore_count, self.last_sale)
        return Outcome.OK

    def refuel(self) -> Outcome:
        gate = self._shop_gate()
        if not gate:
            return gate
        if self.fuel.is_full:
            return Outcome.NOTHING_TO_DO
        if not self.economy.spend(self.fuel.refill_cost()):
            return Outcome.INSUFFICIENT_FUNDS
        self.fuel.refill()
        return Outcome.OK

    def repair_hull(self) -> Outcome:
        gate = self._shop_gate()
        if not gate:
            return gate
        if not self.hull.is_damaged:
            return Outcome.NOTHING_TO_DO
        if not self.economy.spend(self.hull.repair_cost()):
            return Outcome.INSUFFICIENT_FUNDS
        self.hull.full_repair()
        return Outcome.OK

    def upgrade_fuel_tank(self) -> Outcome:
        return self._buy_upgrade("fuel tank", self.fuel.tank, self.fuel.upgrade)

    def upgrade_hull(self) -> Outcome:
        return self._buy_upgrade("hull", self.hull.hull, self.hull.upgrade)

    def upgrade_drillbit(self) -> Outcome:
        return self._buy_upgrade("drill bit", self.equipment.drillbit, self.equipment.drillbit.advance)

    def upgrade_engine(self) -> Outcome:
        return self._buy_upgrade("engine", self.equipment.engine, self.equipment.engine.advance)

    def upgrade_cooling(self) -> Outcome:
        return self._buy_upgrade("cooling", self.equipment.cooling, self.equipment.cooling.advance)

    def upgrade_cargo(self) -> Outcome:
        gate = self._shop_gate()
        if not gate:
            return gate
        if not self.economy.cargo.can_upgrade():
            return Outcome.ALREADY_MAX_TIER
        if not self.economy.can_afford(self.economy.cargo_upgrade_cost()):
            return Outcome.INSUFFICIENT_FUNDS
        self.economy.upgrade_cargo()
        logger.info("Upgraded cargo to %s", self.economy.cargo.current.name)
        return Outcome.OK

    def _buy_upgrade(self, label: str, track: TierTrack, apply: Callable[[], bool]) -> Outcome:
        """Check, pay for and install the next tier of a track."""
        gate = self._shop_gate()
        if not gate:
            return gate
        if not track.can_upgrade():
            return Outcome.ALREADY_MAX_TIER
        if not self.economy.spend(track.upgrade_cost()):
            return Outcome.INSUFFICIENT_FUNDS
        apply()
        logger.info("Upgraded %s to %s", label, track.current.name)
        return Outcome.OK

    # ============================================================
    # ITEMS
    # ============================================================

    def buy_item(self, kind: ItemKind) -> Outcome:
        gate = self._shop_gate()
        if not gate:
            return gate
        if not self.items.can_add(kind):
            return Outcome.INVENTORY_FULL
        if not self.economy.spend(kind.price):
            return Outcome.INSUFFICIENT_FUNDS
        self.items.add(kind)
        return Outcome.OK

    def use_item(self, kind: ItemKind) -> Outcome:
        """Use one carried item. Items work anywhere, but only while playing."""
        if self.state is GameState.GAME_OVER:
            return Outcome.GAME_OVER
        if not self.is_playing:
            return Outcome.NOTHING_TO_DO
        if not self.items.has(kind):
            return Outcome.NO_ITEM

        spec = kind.spec
        if spec.fuel_amount:
            self.fuel.add(spec.fuel_amount)
        if spec.repair_amount:
            self.hull.repair(spec.repair_amount)
        if spec.explosion_radius:
            self.vehicle.explode_at(self.vehicle.grid_x, self.vehicle.grid_y, spec.explosion_radius)
        if spec.teleports:
            self.vehicle.teleport_to_surface()

        self.items.take(kind)
        return Outcome.OK

    # ============================================================
    # RESET & PERSISTENCE
    # ============================================================

    def reset(self, world_config: WorldConfig | None = None) -> None:
        """
        Restart the run: world, vehicle and every ledger return to their
        initial state together. Passing a new WorldConfig swaps the world.
        """
        if world_config is not None and world_config != self.grid.config:
            # Build first so a bad config leaves the session untouched
            grid = TileGrid(world_config)
            self.config.world = world_config
            self.grid = grid
            self.vehicle.grid = grid
        else:
            self.grid.reset()

        self.fuel.reset()
        self.hull.reset()
        self.economy.reset()
        self.equipment.reset()
        self.items.reset()
        self.progression.start_session()
        self.vehicle.reset()
        self.clock.reset()
        self.state = GameState.PLAYING
        self.last_sale = 0
        logger.info("Session reset (seed %d)", self.grid.config.seed)

    def snapshot(self) -> dict[str, Any]:
        """Scalar state worth persisting between runs."""
        return {
            "world": asdict(self.grid.config),
            "fuel": {"level": self.fuel.tank.level, "current": self.fuel.current},
            "hull": {"level": self.hull.hull.level, "current": self.hull.current},
            "economy": {
                "cash": self.economy.cash,
                "cargo_level": self.economy.cargo.level,
                "inventory": {kind.name: count for kind, count in self.economy.inventory.items()},
                "max_depth_reached": self.economy.max_depth_reached,
                "total_ore_collected": self.economy.total_ore_collected,
                "total_cash_earned": self.economy.total_cash_earned,
            },
            "equipment": {
                "drillbit": self.equipment.drillbit.level,
                "engine": self.equipment.engine.level,
                "cooling": self.equipment.cooling.level,
            },
            "items": {kind.name: count for kind, count in self.items.items.items()},
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Rebuild a session from snapshot(). Grid contents are regenerated from the seed."""
        self.reset(WorldConfig(**snapshot["world"]))

        self.fuel.restore(snapshot["fuel"]["level"], snapshot["fuel"]["current"])
        self.hull.restore(snapshot["hull"]["level"], snapshot["hull"]["current"])

        economy = snapshot["economy"]
        self.economy.restore(
            cash=economy["cash"],
            cargo_level=economy["cargo_level"],
            inventory={TileKind[name]: count for name, count in economy["inventory"].items()},
            max_depth_reached=economy.get("max_depth_reached", 0),
            total_ore_collected=economy.get("total_ore_collected", 0),
            total_cash_earned=economy.get("total_cash_earned", 0),
        )

        equipment = snapshot["equipment"]
        self.equipment.drillbit.restore(equipment["drillbit"])
        self.equipment.engine.restore(equipment["engine"])
        self.equipment.cooling.restore(equipment["cooling"])

        # Re-add one at a time so stack and slot limits still apply
        for name, count in snapshot.get("items", {}).items():
            for _ in range(max(0, count)):
                if not self.items.add(ItemKind[name]):
                    break
