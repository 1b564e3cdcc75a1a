"""Tests for the mining session and its shop boundary."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import EventRecorder, make_session
from diggle.config import WorldConfig
from diggle.simulation.events import EventKind
from diggle.simulation.items import ItemKind
from diggle.simulation.outcomes import Outcome
from diggle.simulation.session import GameState, MiningSession
from diggle.simulation.tiles import TileKind
from diggle.simulation.vehicle import Direction


def go_underground(session: MiningSession) -> None:
    session.vehicle.grid_y = 20


def kill(session: MiningSession) -> None:
    """Drill into lava with a nearly broken hull."""
    session.hull.current = 10.0
    session.grid._tiles[32, 3] = TileKind.LAVA
    session.hold(Direction.DOWN)
    session.step()


def test_new_session(session: MiningSession) -> None:
    assert session.state is GameState.PLAYING
    assert session.economy.cash == 50
    assert session.vehicle.position == (32, 2)
    assert session.fuel.is_full


def test_hold_and_update_drive_the_vehicle(session: MiningSession) -> None:
    session.hold(Direction.DOWN)
    assert session.update(0.125) == 1
    assert session.grid.tile_at(32, 3) is TileKind.EMPTY
    session.release()
    assert session.vehicle.held_direction is Direction.NONE


class TestShop:
    def test_refuel(self, session: MiningSession) -> None:
        assert session.refuel() is Outcome.NOTHING_TO_DO
        session.fuel.current = 80.0
        assert session.refuel()
        assert session.fuel.is_full
        assert session.economy.cash == 40

    def test_refuel_without_cash_changes_nothing(self, session: MiningSession) -> None:
        session.fuel.current = 10.0
        session.economy.cash = 0
        assert session.refuel() is Outcome.INSUFFICIENT_FUNDS
        assert session.fuel.current == 10.0
        assert session.economy.cash == 0

    def test_repair_hull(self, session: MiningSession) -> None:
        assert session.repair_hull() is Outcome.NOTHING_TO_DO
        session.hull.current = 41.0
        session.economy.cash = 29
        assert session.repair_hull() is Outcome.INSUFFICIENT_FUNDS
        assert session.hull.current == 41.0
        session.economy.cash = 30
        assert session.repair_hull()
        assert session.hull.current == 100.0
        assert session.economy.cash == 0

    def test_sell_ore(self, session: MiningSession) -> None:
        session.economy.inventory = {TileKind.GOLD: 2}
        assert session.sell_ore()
        assert session.last_sale == 200
        assert session.economy.cash == 250
        assert session.progression.total_xp == 100
        assert session.sell_ore() is Outcome.NOTHING_TO_DO
        assert session.economy.cash == 250

    def test_upgrade_without_cash_changes_nothing(self, session: MiningSession) -> None:
        assert session.upgrade_fuel_tank() is Outcome.INSUFFICIENT_FUNDS
        assert session.fuel.tank.level == 0
        assert session.economy.cash == 50

    def test_upgrade_fuel_tank(self, session: MiningSession) -> None:
        session.economy.cash = 1000
        assert session.upgrade_fuel_tank()
        assert session.fuel.capacity == 150.0
        assert session.economy.cash == 800

    def test_upgrade_past_max_tier(self, session: MiningSession) -> None:
        session.economy.cash = 10_000
        assert session.upgrade_hull()
        assert session.upgrade_hull()
        cash = session.economy.cash
        assert session.upgrade_hull() is Outcome.ALREADY_MAX_TIER
        assert session.economy.cash == cash
        assert session.hull.max_hp == 200.0

    @pytest.mark.parametrize(
        "operation, track, cost",
        [
            ("upgrade_drillbit", "drillbit", 250),
            ("upgrade_engine", "engine", 200),
            ("upgrade_cooling", "cooling", 3000),
        ],
    )
    def test_equipment_upgrades(self, session: MiningSession, operation: str, track: str, cost: int) -> None:
        session.economy.cash = cost - 1
        assert getattr(session, operation)() is Outcome.INSUFFICIENT_FUNDS
        session.economy.cash = cost
        assert getattr(session, operation)()
        assert getattr(session.equipment, track).level == 1
        assert session.economy.cash == 0

    def test_upgrade_cargo(self, session: MiningSession) -> None:
        assert session.upgrade_cargo() is Outcome.INSUFFICIENT_FUNDS
        session.economy.cash = 550
        assert session.upgrade_cargo()
        assert session.upgrade_cargo()
        assert session.economy.cargo_capacity == 40
        assert session.upgrade_cargo() is Outcome.ALREADY_MAX_TIER
        assert session.economy.cash == 0

    def test_shop_requires_surface(self, session: MiningSession) -> None:
        go_underground(session)
        session.fuel.current = 10.0
        session.economy.cash = 10_000
        session.economy.inventory = {TileKind.COAL: 1}

        assert session.refuel() is Outcome.NOT_AT_SURFACE
        assert session.sell_ore() is Outcome.NOT_AT_SURFACE
        assert session.upgrade_engine() is Outcome.NOT_AT_SURFACE
        assert session.buy_item(ItemKind.DYNAMITE) is Outcome.NOT_AT_SURFACE
        assert session.open_shop() is Outcome.NOT_AT_SURFACE
        assert session.economy.cash == 10_000
        assert session.fuel.current == 10.0


class TestItems:
    def test_buy_until_stack_full(self, session: MiningSession) -> None:
        session.economy.cash = 1000
        for _ in range(5):
            assert session.buy_item(ItemKind.DYNAMITE)
        assert session.buy_item(ItemKind.DYNAMITE) is Outcome.INVENTORY_FULL
        assert session.economy.cash == 1000 - 5 * 75

    def test_buy_without_cash(self, session: MiningSession) -> None:
        assert session.buy_item(ItemKind.SPACE_RIFT) is Outcome.INSUFFICIENT_FUNDS
        assert session.items.total == 0

    def test_use_missing_item(self, session: MiningSession) -> None:
        assert session.use_item(ItemKind.REPAIR_BOT) is Outcome.NO_ITEM

    def test_backup_fuel_works_underground(self, session: MiningSession) -> None:
        session.items.add(ItemKind.BACKUP_FUEL)
        go_underground(session)
        session.fuel.current = 10.0
        assert session.use_item(ItemKind.BACKUP_FUEL)
        assert session.fuel.current == 60.0
        assert not session.items.has(ItemKind.BACKUP_FUEL)

    def test_repair_bot(self, session: MiningSession) -> None:
        session.items.add(ItemKind.REPAIR_BOT)
        session.hull.current = 80.0
        assert session.use_item(ItemKind.REPAIR_BOT)
        assert session.hull.current == 100.0

    def test_dynamite_blasts_around_vehicle(self, session: MiningSession) -> None:
        session.items.add(ItemKind.DYNAMITE)
        assert session.use_item(ItemKind.DYNAMITE)
        assert session.grid.tile_at(32, 3) is TileKind.EMPTY
        assert session.grid.tile_at(31, 3) is TileKind.DIRT
        assert session.grid.tile_at(31, 2) is TileKind.SURFACE

    def test_space_rift_returns_to_surface(self, session: MiningSession) -> None:
        session.items.add(ItemKind.SPACE_RIFT)
        go_underground(session)
        assert session.use_item(ItemKind.SPACE_RIFT)
        assert session.vehicle.position == (32, 2)
        assert session.vehicle.is_at_surface


class TestGameOver:
    def test_game_over_stops_everything(self, session: MiningSession) -> None:
        recorder = EventRecorder(session.events)
        session.items.add(ItemKind.REPAIR_BOT)
        kill(session)

        assert session.state is GameState.GAME_OVER
        assert len(recorder.of(EventKind.GAME_OVER)) == 1
        assert session.step() is Outcome.GAME_OVER
        assert session.update(1.0) == 0
        assert session.refuel() is Outcome.GAME_OVER
        assert session.use_item(ItemKind.REPAIR_BOT) is Outcome.GAME_OVER
        assert session.items.has(ItemKind.REPAIR_BOT)

    def test_reset_after_game_over(self, session: MiningSession) -> None:
        kill(session)
        session.reset()
        assert session.state is GameState.PLAYING
        assert session.hull.current == 100.0
        assert not session.vehicle.is_destroyed
        assert session.grid.tile_at(32, 3) is TileKind.DIRT


class TestPauseAndShopState:
    def test_pause_freezes_time_and_fuel(self, session: MiningSession) -> None:
        session.pause()
        assert session.state is GameState.PAUSED
        assert session.fuel.paused
        session.hold(Direction.DOWN)
        assert session.update(1.0) == 0
        session.resume()
        assert session.state is GameState.PLAYING
        assert not session.fuel.paused

    def test_open_and_close_shop(self, session: MiningSession) -> None:
        assert session.open_shop()
        assert session.state is GameState.SHOPPING
        assert session.update(1.0) == 0
        session.economy.cash = 1000
        assert session.upgrade_engine()
        session.close_shop()
        assert session.state is GameState.PLAYING


class TestResetAndSnapshot:
    def test_reset_restores_every_system(self, session: MiningSession) -> None:
        original = session.grid.tiles.copy()
        session.economy.cash = 5000
        session.upgrade_drillbit()
        session.upgrade_fuel_tank()
        session.buy_item(ItemKind.C4)
        session.hold(Direction.RIGHT)
        for _ in range(3):
            session.step()
        session.grid.dig(5, 10)

        session.reset()

        assert np.array_equal(original, session.grid.tiles)
        assert session.economy.cash == 50
        assert session.fuel.tank.level == 0
        assert session.fuel.is_full
        assert session.equipment.drillbit.level == 0
        assert session.items.total == 0
        assert session.vehicle.position == (32, 2)
        assert session.clock.tick == 0

    def test_reset_with_new_world(self, session: MiningSession) -> None:
        session.reset(WorldConfig(seed=7, width=32, height=64, surface_rows=2))
        assert session.world_config.seed == 7
        assert session.grid.width == 32
        assert session.vehicle.position == (16, 1)
        assert session.vehicle.grid is session.grid
        assert session.view.width == 32

    def test_invalid_world_leaves_session_untouched(self, session: MiningSession) -> None:
        session.economy.cash = 321
        with pytest.raises(ValueError):
            session.reset(WorldConfig(seed=1, width=0, height=64))
        assert session.world_config.width == 64
        assert session.economy.cash == 321

    def test_snapshot_round_trip(self, session: MiningSession) -> None:
        session.economy.cash = 2000
        session.upgrade_cargo()
        session.upgrade_engine()
        session.buy_item(ItemKind.BACKUP_FUEL)
        session.buy_item(ItemKind.BACKUP_FUEL)
        session.fuel.current = 42.5
        session.hull.current = 77.0
        session.economy.inventory = {TileKind.RUBY: 3}
        session.economy.update_max_depth(40)

        snapshot = session.snapshot()
        restored = make_session(WorldConfig(seed=99, width=16, height=48))
        restored.restore(snapshot)

        assert restored.snapshot() == snapshot
        assert restored.world_config == session.world_config
        assert np.array_equal(restored.grid.tiles, MiningSession(session.config).grid.tiles)
        assert restored.items.quantity(ItemKind.BACKUP_FUEL) == 2
        assert restored.economy.ore_count(TileKind.RUBY) == 3


class TestItemsOutsidePlay:
    @pytest.mark.parametrize("kind", [ItemKind.DYNAMITE, ItemKind.SPACE_RIFT])
    def test_items_rejected_while_paused(self, session: MiningSession, kind: ItemKind) -> None:
        session.items.add(kind)
        go_underground(session)
        before = session.grid.tiles.copy()
        session.pause()

        assert session.use_item(kind) is Outcome.NOTHING_TO_DO
        assert session.items.quantity(kind) == 1
        assert session.vehicle.position == (32, 20)
        assert np.array_equal(before, session.grid.tiles)

    def test_items_rejected_while_shopping(self, session: MiningSession) -> None:
        session.items.add(ItemKind.DYNAMITE)
        assert session.open_shop()

        assert session.use_item(ItemKind.DYNAMITE) is Outcome.NOTHING_TO_DO
        assert session.items.quantity(ItemKind.DYNAMITE) == 1
        assert session.grid.tile_at(32, 3) is TileKind.DIRT

        session.close_shop()
        assert session.use_item(ItemKind.DYNAMITE)


class TestRestoreDetails:
    def test_lifetime_statistics_survive_restore(self, session: MiningSession) -> None:
        session.economy.collect_ore(TileKind.GOLD)
        session.economy.collect_ore(TileKind.COAL)
        assert session.sell_ore()

        restored = make_session()
        restored.restore(session.snapshot())

        assert restored.economy.total_ore_collected == 2
        assert restored.economy.total_cash_earned == 110

    def test_item_counts_respect_inventory_limits(self, session: MiningSession) -> None:
        snapshot = session.snapshot()
        snapshot["items"] = {"DYNAMITE": 9, "C4": 0, "REPAIR_BOT": -2, "BACKUP_FUEL": 1}

        session.restore(snapshot)

        assert session.items.quantity(ItemKind.DYNAMITE) == 5
        assert not session.items.has(ItemKind.C4)
        assert not session.items.has(ItemKind.REPAIR_BOT)
        assert session.items.used_slots == 2
