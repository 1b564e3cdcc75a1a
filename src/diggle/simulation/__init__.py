"""Simulation module - pure logic, no rendering."""

from .clock import SimulationClock
from .equipment import Equipment
from .events import Event, EventHub, EventKind
from .generator import WorldGenerator, generate
from .grid import GridView, TileGrid
from .items import ItemInventory, ItemKind
from .ledgers import EconomyLedger, FuelLedger, HullLedger
from .outcomes import Outcome, OutOfBounds
from .progression import LocalProgression, ProgressionSink
from .session import GameState, MiningSession
from .tiles import TileKind
from .upgrades import Tier, TierTrack
from .vehicle import Direction, Vehicle, VehicleState

__all__ = [
    "Direction",
    "EconomyLedger",
    "Equipment",
    "Event",
    "EventHub",
    "EventKind",
    "FuelLedger",
    "GameState",
    "GridView",
    "HullLedger",
    "ItemInventory",
    "ItemKind",
    "LocalProgression",
    "MiningSession",
    "OutOfBounds",
    "Outcome",
    "ProgressionSink",
    "SimulationClock",
    "Tier",
    "TierTrack",
    "TileGrid",
    "TileKind",
    "Vehicle",
    "VehicleState",
    "WorldGenerator",
    "generate",
]
