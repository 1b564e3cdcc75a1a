"""Result codes and errors shared by the simulation core."""

from __future__ import annotations

from enum import Enum, auto


class OutOfBounds(IndexError):
    """A grid cell outside the world dimensions was accessed directly."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"cell ({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class Outcome(Enum):
    """
    Result of a vehicle action or a shop request.

    Only OK is truthy, so callers can write ``if session.refuel(): ...``
    and still inspect the specific reason on failure.
    """

    OK = auto()
    # Not enough cash for a purchase, upgrade or repair
    INSUFFICIENT_FUNDS = auto()
    # Upgrade requested with no further tier
    ALREADY_MAX_TIER = auto()
    # Fuel tank empty, dig/move refused
    RESOURCE_DEPLETED = auto()
    # Hull reached zero
    STRUCTURAL_FAILURE = auto()
    # Target cell is bedrock or outside the world
    BLOCKED = auto()
    NOT_AT_SURFACE = auto()
    # Nothing to buy, sell, refuel or repair
    NOTHING_TO_DO = auto()
    INVENTORY_FULL = auto()
    NO_ITEM = auto()
    GAME_OVER = auto()

    def __bool__(self) -> bool:
        return self is Outcome.OK
