"""Tiered upgrades shared by every upgradeable system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Tier:
    """
    One upgrade level.

    ``effect`` is the level's capacity or multiplier (tank size, hull HP,
    cargo slots, speed multiplier, fuel efficiency). ``cost`` is the cash
    paid to reach this level; the first tier is free.
    """

    name: str
    effect: float
    cost: int = 0


class TierTrack:
    """
    Current position along a fixed list of tiers.

    Only the tier index changes; paying for an upgrade is the caller's job
    so tracks stay independent of the economy.
    """

    def __init__(self, tiers: Sequence[Tier], level: int = 0):
        if not tiers:
            raise ValueError("a tier track needs at least one tier")
        self.tiers: tuple[Tier, ...] = tuple(tiers)
        self.level = 0
        self.restore(level)

    @property
    def current(self) -> Tier:
        return self.tiers[self.level]

    @property
    def effect(self) -> float:
        return self.current.effect

    @property
    def next_tier(self) -> Tier | None:
        """The next tier, or None when already at the top."""
        if self.level + 1 >= len(self.tiers):
            return None
        return self.tiers[self.level + 1]

    @property
    def max_level(self) -> int:
        return len(self.tiers) - 1

    def can_upgrade(self) -> bool:
        return self.next_tier is not None

    def upgrade_cost(self) -> int:
        """Cost of the next tier; 0 means already maxed."""
        next_tier = self.next_tier
        return next_tier.cost if next_tier is not None else 0

    def advance(self) -> bool:
        """Move to the next tier. Returns False if already maxed."""
        if not self.can_upgrade():
            return False
        self.level += 1
        return True

    def reset(self) -> None:
        self.level = 0

    def restore(self, level: int) -> None:
        """Set the level from saved state, falling back to the first tier."""
        self.level = level if 0 <= level < len(self.tiers) else 0

    def __repr__(self) -> str:
        return f"TierTrack({self.current.name}, level {self.level}/{self.max_level})"
