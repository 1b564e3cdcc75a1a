"""Fixed-step simulation clock."""

from __future__ import annotations

from ..config import ClockConfig
from .events import EventHub
from .outcomes import Outcome
from .vehicle import Vehicle


class SimulationClock:
    """
    Drives the vehicle one whole tick at a time.

    advance() takes variable frame time, banks it, and runs as many fixed
    ticks as have elapsed. The leftover fraction is exposed as ``alpha`` for
    smooth display. The clock halts for good once the vehicle is destroyed.
    """

    def __init__(self, vehicle: Vehicle, config: ClockConfig | None = None, events: EventHub | None = None):
        self.vehicle = vehicle
        self.config = config if config is not None else ClockConfig()
        self.events = events if events is not None else vehicle.events
        self.tick = 0
        self.paused = False
        self._accumulator = 0.0

    @property
    def alpha(self) -> float:
        """Fraction of the next tick already banked (0-1)."""
        return self._accumulator / self.config.tick_seconds

    @property
    def is_halted(self) -> bool:
        return self.vehicle.is_destroyed

    def step(self) -> Outcome:
        """Run exactly one tick."""
        if self.is_halted:
            return Outcome.GAME_OVER

        self.tick += 1
        self.events.tick = self.tick
        return self.vehicle.step()

    def advance(self, dt: float) -> int:
        """
        Bank elapsed time and run every whole tick it covers.

        Args:
            dt: Seconds since the previous call

        Returns:
            Number of ticks run
        """
        if self.paused or self.is_halted or dt <= 0:
            return 0

        self._accumulator += dt
        ticks = 0
        while self._accumulator >= self.config.tick_seconds:
            if ticks >= self.config.max_ticks_per_advance:
                # Drop the backlog rather than spiral after a long stall
                self._accumulator = 0.0
                break
            self._accumulator -= self.config.tick_seconds
            self.step()
            ticks += 1
            if self.is_halted:
                self._accumulator = 0.0
                break

        self.vehicle.interpolate(self.alpha)
        return ticks

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def reset(self) -> None:
        self.tick = 0
        self.paused = False
        self._accumulator = 0.0
        self.events.tick = 0
