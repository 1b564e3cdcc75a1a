"""Progression - XP, levels and points earned from mining."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Protocol

from .tiles import TileKind

# Cumulative XP needed to reach each level (index 0 = level 1)
LEVEL_THRESHOLDS = (
    0, 100, 300, 600, 1000, 1500, 2200, 3000, 4000, 5200,
    6600, 8200, 10000, 12000, 14500, 17500, 21000, 25000, 30000, 36000,
    43000, 51000, 60000, 70000, 82000,
)

MAX_LEVEL = len(LEVEL_THRESHOLDS)

# Depth milestones are awarded every this many rows
MILESTONE_INTERVAL = 25

# (xp, points) per ore kind
ORE_REWARDS: dict[TileKind, tuple[int, int]] = {
    TileKind.COAL: (5, 1),
    TileKind.COPPER: (10, 2),
    TileKind.SILVER: (18, 3),
    TileKind.GOLD: (30, 5),
    TileKind.SAPPHIRE: (50, 8),
    TileKind.EMERALD: (75, 12),
    TileKind.RUBY: (100, 18),
    TileKind.DIAMOND: (150, 25),
}


def level_from_xp(total_xp: int) -> int:
    """Calculate the level for an XP total."""
    for index in range(len(LEVEL_THRESHOLDS) - 1, -1, -1):
        if total_xp >= LEVEL_THRESHOLDS[index]:
            return index + 1
    return 1


@dataclass(frozen=True)
class RewardEvent:
    """What triggered an XP/points award."""

    description: str
    xp: int
    points: int
    xp_multiplier: float = 1.0
    points_multiplier: float = 1.0

    @property
    def final_xp(self) -> int:
        return round(self.xp * self.xp_multiplier)

    @property
    def final_points(self) -> int:
        return round(self.points * self.points_multiplier)


class ProgressionSink(Protocol):
    """
    Receiver for progression-relevant gameplay facts.

    The vehicle and session call these unconditionally. Whether the
    implementation computes rewards locally or forwards them to a remote
    service is decided by whoever builds the session.
    """

    def award_for_mining(self, kind: TileKind, depth: int) -> RewardEvent | None: ...

    def check_depth_milestone(self, depth: int) -> RewardEvent | None: ...

    def award_for_sale(self, value: int, ore_count: int) -> RewardEvent | None: ...

    def award_for_hazard_survival(self, kind: TileKind) -> RewardEvent | None: ...

    def start_session(self) -> None: ...


class LocalProgression:
    """
    In-process XP and points calculator.

    XP drives the level; points are a spendable balance earned alongside.
    Boost multipliers scale every award.
    """

    MAX_RECENT_EVENTS = 20

    def __init__(self) -> None:
        self.total_xp = 0
        self.points = 0
        self.lifetime_points = 0
        self.session_xp = 0
        self.session_points = 0
        self.xp_multiplier = 1.0
        self.points_multiplier = 1.0
        self.recent_events: deque[RewardEvent] = deque(maxlen=self.MAX_RECENT_EVENTS)
        self._milestones_awarded: set[int] = set()

    @property
    def level(self) -> int:
        return level_from_xp(self.total_xp)

    @property
    def is_max_level(self) -> bool:
        return self.level >= MAX_LEVEL

    @property
    def level_progress(self) -> float:
        """Progress within the current level (0-1)."""
        if self.is_max_level:
            return 1.0
        floor = LEVEL_THRESHOLDS[self.level - 1]
        ceiling = LEVEL_THRESHOLDS[self.level]
        return (self.total_xp - floor) / (ceiling - floor)

    def award_for_mining(self, kind: TileKind, depth: int) -> RewardEvent:
        """Award XP (and points for ore) for digging a tile."""
        if kind in ORE_REWARDS:
            xp, points = ORE_REWARDS[kind]
        else:
            xp, points = (2 if kind is TileKind.ROCK else 1), 0

        # +1% XP per 5 rows of depth
        xp = round(xp * (1.0 + depth / 500.0))
        return self._award(xp, points, f"Mined {kind.display_name}")

    def check_depth_milestone(self, depth: int) -> RewardEvent | None:
        """Award a milestone the first time each multiple of 25 rows is reached."""
        milestone = (depth // MILESTONE_INTERVAL) * MILESTONE_INTERVAL
        if milestone <= 0 or milestone in self._milestones_awarded:
            return None

        self._milestones_awarded.add(milestone)
        return self._award(milestone * 2, milestone // 5, f"Reached {milestone}m depth")

    def award_for_sale(self, value: int, ore_count: int) -> RewardEvent | None:
        if value <= 0:
            return None
        return self._award(round(value * 0.5), round(value * 0.1), f"Sold {ore_count} ore for ${value}")

    def award_for_hazard_survival(self, kind: TileKind) -> RewardEvent:
        return self._award(25, 5, f"Survived {kind.display_name}")

    def set_boost(self, xp_multiplier: float = 1.0, points_multiplier: float = 1.0) -> None:
        self.xp_multiplier = max(1.0, min(10.0, xp_multiplier))
        self.points_multiplier = max(1.0, min(10.0, points_multiplier))

    def spend_points(self, amount: int) -> bool:
        if amount <= 0:
            return True
        if self.points < amount:
            return False
        self.points -= amount
        return True

    def start_session(self) -> None:
        """Clear per-run counters. Lifetime XP and points are kept."""
        self.session_xp = 0
        self.session_points = 0
        self._milestones_awarded.clear()
        self.recent_events.clear()

    def _award(self, xp: int, points: int, description: str) -> RewardEvent:
        event = RewardEvent(
            description=description,
            xp=xp,
            points=points,
            xp_multiplier=self.xp_multiplier,
            points_multiplier=self.points_multiplier,
        )

        previous_level = self.level
        self.total_xp += event.final_xp
        self.session_xp += event.final_xp
        self._add_points(event.final_points)
        self.recent_events.appendleft(event)

        if self.level > previous_level:
            # Level-up bonus
            bonus = self.level * 10
            self._add_points(bonus)
            self.recent_events.appendleft(
                RewardEvent(f"Level up! Reached level {self.level}", xp=0, points=bonus)
            )

        return event

    def _add_points(self, amount: int) -> None:
        if amount <= 0:
            return
        self.points += amount
        self.lifetime_points += amount
        self.session_points += amount
