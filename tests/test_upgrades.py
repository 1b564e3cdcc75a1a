"""Tests for tier tracks and equipment modifiers."""

from __future__ import annotations

import pytest

from diggle.simulation.equipment import Equipment
from diggle.simulation.upgrades import Tier, TierTrack

TIERS = (Tier("Small", 10.0), Tier("Medium", 20.0, cost=100), Tier("Large", 40.0, cost=300))


def test_track_starts_at_first_tier() -> None:
    track = TierTrack(TIERS)
    assert track.level == 0
    assert track.effect == 10.0
    assert track.next_tier == TIERS[1]
    assert track.upgrade_cost() == 100


def test_advance_to_max() -> None:
    track = TierTrack(TIERS)
    assert track.advance()
    assert track.advance()
    assert track.current.name == "Large"
    assert track.next_tier is None
    assert not track.can_upgrade()
    assert track.upgrade_cost() == 0
    assert not track.advance()
    assert track.level == track.max_level == 2


@pytest.mark.parametrize("level, expected", [(0, 0), (2, 2), (3, 0), (-1, 0)])
def test_restore_falls_back_on_invalid_level(level: int, expected: int) -> None:
    track = TierTrack(TIERS)
    track.restore(level)
    assert track.level == expected


def test_reset() -> None:
    track = TierTrack(TIERS, level=2)
    track.reset()
    assert track.level == 0


def test_empty_track_rejected() -> None:
    with pytest.raises(ValueError):
        TierTrack(())


def test_base_equipment_costs_are_unmodified() -> None:
    equipment = Equipment()
    assert equipment.dig_fuel_cost(2.0) == pytest.approx(2.0)
    assert equipment.move_fuel_cost(0.5) == pytest.approx(0.5)
    assert equipment.savings_percent == 0


def test_drillbit_and_engine_divide_costs() -> None:
    equipment = Equipment()
    equipment.drillbit.advance()
    equipment.engine.advance()
    assert equipment.dig_fuel_cost(1.3) == pytest.approx(1.0)
    assert equipment.move_fuel_cost(1.25) == pytest.approx(1.0)


def test_cooling_scales_every_cost() -> None:
    equipment = Equipment()
    equipment.cooling.advance()
    assert equipment.dig_fuel_cost(1.0) == pytest.approx(0.85)
    assert equipment.move_fuel_cost(1.0) == pytest.approx(0.85)
    assert equipment.savings_percent == 15


def test_equipment_reset() -> None:
    equipment = Equipment()
    equipment.drillbit.advance()
    equipment.cooling.advance()
    equipment.reset()
    assert equipment.drillbit.level == 0
    assert equipment.cooling.level == 0
