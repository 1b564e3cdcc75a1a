"""Tests for the item inventory."""

from __future__ import annotations

from diggle.simulation.items import ItemInventory, ItemKind


def test_prices() -> None:
    assert ItemKind.BACKUP_FUEL.price == 30
    assert ItemKind.SPACE_RIFT.price == 200
    assert ItemKind.C4.spec.explosion_radius == 2


def test_stack_limit() -> None:
    items = ItemInventory()
    for _ in range(ItemInventory.MAX_STACK):
        assert items.add(ItemKind.DYNAMITE)
    assert not items.can_add(ItemKind.DYNAMITE)
    assert not items.add(ItemKind.DYNAMITE)
    assert items.quantity(ItemKind.DYNAMITE) == 5


def test_take_removes_one() -> None:
    items = ItemInventory()
    items.add(ItemKind.REPAIR_BOT)
    items.add(ItemKind.REPAIR_BOT)
    assert items.take(ItemKind.REPAIR_BOT)
    assert items.quantity(ItemKind.REPAIR_BOT) == 1
    assert items.take(ItemKind.REPAIR_BOT)
    assert not items.has(ItemKind.REPAIR_BOT)
    assert items.used_slots == 0
    assert not items.take(ItemKind.REPAIR_BOT)


def test_every_kind_fits() -> None:
    items = ItemInventory()
    for kind in ItemKind:
        assert items.add(kind)
    assert items.used_slots == 5
    assert items.total == 5


def test_reset() -> None:
    items = ItemInventory()
    items.add(ItemKind.C4)
    items.reset()
    assert items.total == 0
