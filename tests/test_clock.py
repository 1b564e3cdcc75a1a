"""Tests for the fixed-step simulation clock."""

from __future__ import annotations

import pytest

from conftest import make_vehicle
from diggle.config import ClockConfig
from diggle.simulation.clock import SimulationClock
from diggle.simulation.ledgers import HullLedger
from diggle.simulation.outcomes import Outcome
from diggle.simulation.tiles import TileKind
from diggle.simulation.vehicle import Direction


def make_clock(**overrides) -> SimulationClock:
    return SimulationClock(make_vehicle(), ClockConfig(**overrides))


def test_step_runs_one_tick() -> None:
    clock = make_clock()
    clock.vehicle.held_direction = Direction.RIGHT
    assert clock.step() is Outcome.OK
    assert clock.tick == 1
    assert clock.vehicle.position == (33, 2)
    assert clock.events.tick == 1


def test_advance_runs_whole_ticks_and_banks_remainder() -> None:
    clock = make_clock(tick_seconds=0.125)
    assert clock.advance(0.3) == 2
    assert clock.tick == 2
    assert clock.alpha == pytest.approx(0.4)

    assert clock.advance(0.08) == 1
    assert clock.alpha == pytest.approx(0.04)


def test_short_frames_accumulate() -> None:
    clock = make_clock(tick_seconds=0.1)
    assert clock.advance(0.06) == 0
    assert clock.advance(0.06) == 1


def test_advance_is_capped() -> None:
    clock = make_clock(tick_seconds=0.1, max_ticks_per_advance=4)
    assert clock.advance(10.0) == 4
    assert clock.alpha == 0.0


def test_paused_clock_does_not_tick() -> None:
    clock = make_clock()
    clock.pause()
    assert clock.advance(1.0) == 0
    clock.resume()
    assert clock.advance(0.125) == 1


def test_ignores_non_positive_time() -> None:
    clock = make_clock()
    assert clock.advance(0.0) == 0
    assert clock.advance(-1.0) == 0


def test_clock_halts_when_vehicle_destroyed() -> None:
    vehicle = make_vehicle(hull=HullLedger(current=10.0))
    vehicle.grid._tiles[32, 3] = TileKind.LAVA
    vehicle.held_direction = Direction.DOWN
    clock = SimulationClock(vehicle, ClockConfig(tick_seconds=0.1))

    assert clock.advance(1.0) == 1
    assert clock.is_halted
    assert clock.step() is Outcome.GAME_OVER
    assert clock.advance(1.0) == 0
    assert clock.tick == 1


def test_reset() -> None:
    clock = make_clock()
    clock.advance(0.3)
    clock.pause()
    clock.reset()
    assert clock.tick == 0
    assert clock.alpha == 0.0
    assert not clock.paused
