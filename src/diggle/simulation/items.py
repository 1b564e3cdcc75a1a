"""Usable items and the item inventory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ItemSpec:
    display_name: str
    price: int
    fuel_amount: float = 0.0
    repair_amount: float = 0.0
    explosion_radius: int = 0
    teleports: bool = False


class ItemKind(Enum):
    """Items sold at the surface shop."""

    BACKUP_FUEL = ItemSpec("Backup Fuel", 30, fuel_amount=50.0)
    REPAIR_BOT = ItemSpec("Repair Bot", 50, repair_amount=40.0)
    DYNAMITE = ItemSpec("Dynamite", 75, explosion_radius=1)
    C4 = ItemSpec("C4", 150, explosion_radius=2)
    SPACE_RIFT = ItemSpec("Space Rift", 200, teleports=True)

    @property
    def spec(self) -> ItemSpec:
        return self.value

    @property
    def price(self) -> int:
        return self.value.price


class ItemInventory:
    """
    Items carried by the vehicle.

    At most MAX_SLOTS distinct kinds, each stacked up to MAX_STACK.
    """

    MAX_STACK = 5
    MAX_SLOTS = 5

    def __init__(self) -> None:
        self.items: dict[ItemKind, int] = {}

    def quantity(self, kind: ItemKind) -> int:
        return self.items.get(kind, 0)

    def has(self, kind: ItemKind) -> bool:
        return self.quantity(kind) > 0

    @property
    def used_slots(self) -> int:
        return len(self.items)

    @property
    def total(self) -> int:
        return sum(self.items.values())

    def can_add(self, kind: ItemKind) -> bool:
        current = self.quantity(kind)
        if current > 0:
            return current < self.MAX_STACK
        return self.used_slots < self.MAX_SLOTS

    def add(self, kind: ItemKind) -> bool:
        if not self.can_add(kind):
            return False
        self.items[kind] = self.quantity(kind) + 1
        return True

    def take(self, kind: ItemKind) -> bool:
        """Remove one item of a kind. Returns False if none are held."""
        current = self.quantity(kind)
        if current <= 0:
            return False
        if current == 1:
            del self.items[kind]
        else:
            self.items[kind] = current - 1
        return True

    def reset(self) -> None:
        self.items.clear()
