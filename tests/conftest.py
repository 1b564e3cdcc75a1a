"""Shared fixtures for the simulation tests."""

from __future__ import annotations

import pytest

from diggle.config import Config, VehicleConfig, WorldConfig
from diggle.simulation.events import EventHub, EventKind
from diggle.simulation.grid import TileGrid
from diggle.simulation.ledgers import EconomyLedger, FuelLedger, HullLedger
from diggle.simulation.session import MiningSession
from diggle.simulation.vehicle import Vehicle

# Small enough to generate quickly, deep enough to clear every ore gate but diamond
SMALL_WORLD = WorldConfig(seed=42, width=64, height=128, surface_rows=3)


class EventRecorder:
    """Collects every event emitted on a hub, by kind."""

    def __init__(self, hub: EventHub):
        self.events = []
        for kind in EventKind:
            hub.subscribe(kind, self.events.append)

    def of(self, kind: EventKind) -> list:
        return [event for event in self.events if event.kind is kind]


def make_vehicle(
    fuel: FuelLedger | None = None,
    hull: HullLedger | None = None,
    config: VehicleConfig | None = None,
    world: WorldConfig = SMALL_WORLD,
    cash: int = 50,
) -> Vehicle:
    grid = TileGrid(world)
    return Vehicle(
        grid,
        fuel if fuel is not None else FuelLedger(),
        hull if hull is not None else HullLedger(),
        EconomyLedger(cash=cash),
        config=config,
        events=EventHub(),
    )


def make_session(world: WorldConfig = SMALL_WORLD) -> MiningSession:
    config = Config.default()
    config.world = world
    return MiningSession(config)


@pytest.fixture
def vehicle() -> Vehicle:
    return make_vehicle()


@pytest.fixture
def session() -> MiningSession:
    return make_session()
