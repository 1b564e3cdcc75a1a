"""Drill vehicle - movement, digging and falling, one tile per tick."""

from __future__ import annotations

import logging
from enum import Enum, auto

from ..config import VehicleConfig
from .equipment import Equipment
from .events import EventHub, EventKind
from .grid import TileGrid
from .ledgers import EconomyLedger, FuelLedger, HullLedger
from .outcomes import Outcome
from .progression import LocalProgression, ProgressionSink
from .tiles import TileKind

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Held input direction, as a (dx, dy) grid step. y grows downward."""

    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class VehicleState(Enum):
    """States of the vehicle state machine."""

    IDLE = auto()
    MOVING = auto()
    DIGGING = auto()
    FALLING = auto()
    DESTROYED = auto()


class Vehicle:
    """
    The player's drill.

    Owns only its position and state machine. The grid, the three ledgers,
    the equipment and the progression sink are shared references; every
    cross-system effect of an action happens inside step(), in this order:

    1. Unsupported and unable to thrust up (tank empty, or nothing above to
       move into or dig): fall one tile, land if supported
    2. No held direction: idle
    3. Target outside the world or bedrock: blocked
    4. Target solid: needs fuel; debit, dig, credit ore, apply hazard damage
    5. Target open: needs fuel; debit and move
    6. Hull at zero at any point: destroyed, game over, nothing else this tick
    """

    def __init__(
        self,
        grid: TileGrid,
        fuel: FuelLedger,
        hull: HullLedger,
        economy: EconomyLedger,
        equipment: Equipment | None = None,
        config: VehicleConfig | None = None,
        progression: ProgressionSink | None = None,
        events: EventHub | None = None,
    ):
        self.grid = grid
        self.fuel = fuel
        self.hull = hull
        self.economy = economy
        self.equipment = equipment if equipment is not None else Equipment()
        self.config = config if config is not None else VehicleConfig()
        self.progression: ProgressionSink = progression if progression is not None else LocalProgression()
        self.events = events if events is not None else EventHub()

        self.grid_x = 0
        self.grid_y = 0
        self.held_direction = Direction.NONE
        self.reset()

    # ============================================================
    # STATE
    # ============================================================

    @property
    def position(self) -> tuple[int, int]:
        return (self.grid_x, self.grid_y)

    @property
    def depth(self) -> int:
        """Rows below the surface band (0 while at the surface)."""
        return max(0, self.grid_y - self.grid.surface_rows)

    @property
    def is_at_surface(self) -> bool:
        return self.grid.is_at_surface(self.grid_y)

    @property
    def is_destroyed(self) -> bool:
        return self.state is VehicleState.DESTROYED

    @property
    def is_busy(self) -> bool:
        return self.state in (VehicleState.MOVING, VehicleState.DIGGING, VehicleState.FALLING)

    def reset(self) -> None:
        """Return to the spawn cell with a clean state machine."""
        self.grid_x, self.grid_y = self.grid.spawn_position()
        self.prev_x, self.prev_y = self.grid_x, self.grid_y
        self.offset = (0.0, 0.0)
        self.held_direction = Direction.NONE
        self.state = VehicleState.IDLE
        self.action_direction = Direction.NONE
        self.fall_distance = 0
        self.last_outcome = Outcome.OK
        self._was_at_surface = self.is_at_surface
        self._game_over_emitted = False

    def interpolate(self, alpha: float) -> tuple[float, float]:
        """
        Smoothed position between the previous and the current cell.

        Args:
            alpha: Fraction of the next tick already elapsed (0-1)

        Returns:
            Fractional (x, y) grid position
        """
        alpha = max(0.0, min(1.0, alpha))
        self.offset = (
            (self.prev_x - self.grid_x) * (1.0 - alpha),
            (self.prev_y - self.grid_y) * (1.0 - alpha),
        )
        return (self.grid_x + self.offset[0], self.grid_y + self.offset[1])

    # ============================================================
    # SIMULATION STEP
    # ============================================================

    def step(self) -> Outcome:
        """Advance the vehicle by one tick."""
        if self.is_destroyed:
            self.last_outcome = Outcome.STRUCTURAL_FAILURE
            return self.last_outcome

        self.prev_x, self.prev_y = self.grid_x, self.grid_y
        self.offset = (0.0, 0.0)
        direction = self.held_direction

        if self._is_unsupported() and not self._can_thrust(direction):
            outcome = self._fall()
        elif direction is Direction.NONE:
            self._idle()
            outcome = Outcome.OK
        else:
            outcome = self._act(direction)

        if not self.is_destroyed and self.position != (self.prev_x, self.prev_y):
            self._after_move()

        self.last_outcome = outcome
        return outcome

    def _act(self, direction: Direction) -> Outcome:
        """Dig or move toward the held direction."""
        target_x = self.grid_x + direction.dx
        target_y = self.grid_y + direction.dy

        if not self.grid.in_bounds(target_x, target_y):
            self._idle()
            return Outcome.BLOCKED

        kind = self.grid.tile_at(target_x, target_y)
        if kind.is_solid:
            if not kind.is_diggable:
                self._idle()
                return Outcome.BLOCKED
            outcome = self._dig(direction, target_x, target_y, kind)
        else:
            outcome = self._move(direction, target_x, target_y)

        if direction is Direction.UP and outcome and not self.is_destroyed:
            # Thrusting arrests any fall in progress
            self.fall_distance = 0
        return outcome

    def _dig(self, direction: Direction, x: int, y: int, kind: TileKind) -> Outcome:
        """Dig the target cell. The vehicle moves into it on a later tick."""
        if self.fuel.is_empty:
            logger.debug("Dig at (%d, %d) refused: tank empty", x, y)
            self._idle()
            return Outcome.RESOURCE_DEPLETED

        self.fuel.debit(self.equipment.dig_fuel_cost(kind.fuel_cost * self.config.dig_cost))
        dug = self.grid.dig(x, y)

        self.state = VehicleState.DIGGING
        self.action_direction = direction
        depth = max(0, y - self.grid.surface_rows)

        if dug.is_ore:
            if self.economy.collect_ore(dug):
                self.events.emit(EventKind.ORE_COLLECTED, kind=dug, depth=depth)
            else:
                self.events.emit(EventKind.CARGO_FULL, kind=dug)

        self.progression.award_for_mining(dug, depth)

        if dug.is_hazard:
            return self._hit_hazard(dug, x, y)
        return Outcome.OK

    def _hit_hazard(self, kind: TileKind, x: int, y: int) -> Outcome:
        """Apply the damage of a breached hazard pocket."""
        if kind is TileKind.GAS:
            # Gas pockets ignite and blow out the surrounding rock
            self.grid.explode(x, y, 1)

        damage = kind.hazard_damage
        self.events.emit(EventKind.HAZARD, kind=kind, damage=damage, x=x, y=y)

        if not self.hull.debit(damage):
            self._destroy(f"hull breached by {kind.display_name}")
            return Outcome.STRUCTURAL_FAILURE

        self.progression.award_for_hazard_survival(kind)
        return Outcome.OK

    def _move(self, direction: Direction, x: int, y: int) -> Outcome:
        """Drive into an open cell."""
        if self.fuel.is_empty:
            logger.debug("Move to (%d, %d) refused: tank empty", x, y)
            self._idle()
            return Outcome.RESOURCE_DEPLETED

        base = TileKind.EMPTY.fuel_cost * self.config.move_cost
        self.fuel.debit(self.equipment.move_fuel_cost(base))

        self.grid_x, self.grid_y = x, y
        self.state = VehicleState.MOVING
        self.action_direction = direction
        return Outcome.OK

    def _fall(self) -> Outcome:
        """Drop one tile under gravity. Falling burns no fuel."""
        self.grid_y += 1
        self.fall_distance += 1
        self.state = VehicleState.FALLING
        self.action_direction = Direction.DOWN

        if self._is_unsupported():
            return Outcome.OK
        return self._land()

    def _land(self) -> Outcome:
        """Apply fall damage for the distance beyond the safe threshold."""
        distance = self.fall_distance
        excess = max(0, distance - self.config.safe_fall_distance)
        damage = excess * self.config.fall_damage_per_tile

        self.fall_distance = 0
        self.state = VehicleState.IDLE
        self.action_direction = Direction.NONE
        self.events.emit(EventKind.LANDED, distance=distance, damage=damage)

        if not self.hull.debit(damage):
            self._destroy(f"fell {distance} tiles")
            return Outcome.STRUCTURAL_FAILURE
        return Outcome.OK

    def _after_move(self) -> None:
        """Depth records, milestones and the surface edge after a position change."""
        depth = self.depth
        if self.economy.update_max_depth(depth):
            self.events.emit(EventKind.DEPTH_RECORD, depth=depth)
            self.progression.check_depth_milestone(depth)

        at_surface = self.is_at_surface
        if at_surface and not self._was_at_surface:
            self.events.emit(EventKind.REACH_SURFACE, position=self.position)
        self._was_at_surface = at_surface

    def _is_unsupported(self) -> bool:
        """Whether the cell below is open. The bottom edge of the world supports."""
        below = self.grid_y + 1
        return self.grid.in_bounds(self.grid_x, below) and self.grid.is_passable(self.grid_x, below)

    def _can_thrust(self, direction: Direction) -> bool:
        """Whether holding a direction can hold the vehicle up this tick."""
        if direction is not Direction.UP or self.fuel.is_empty:
            return False
        target_y = self.grid_y - 1
        if not self.grid.in_bounds(self.grid_x, target_y):
            return False
        kind = self.grid.tile_at(self.grid_x, target_y)
        return kind.is_passable or kind.is_diggable

    def _idle(self) -> None:
        self.state = VehicleState.IDLE
        self.action_direction = Direction.NONE

    def _destroy(self, reason: str) -> None:
        self.state = VehicleState.DESTROYED
        self.action_direction = Direction.NONE
        self.held_direction = Direction.NONE
        if not self._game_over_emitted:
            self._game_over_emitted = True
            logger.info("Vehicle destroyed at %s: %s", self.position, reason)
            self.events.emit(EventKind.GAME_OVER, reason=reason, depth=self.depth)

    # ============================================================
    # SPECIAL ACTIONS
    # ============================================================

    def explode_at(self, x: int, y: int, radius: int) -> list[TileKind]:
        """Blast the terrain around a cell. Ore in the blast is lost."""
        return self.grid.explode(x, y, radius)

    def teleport_to_surface(self) -> bool:
        """Jump straight to the spawn cell, skipping fall damage."""
        if self.is_destroyed:
            return False

        self.grid_x, self.grid_y = self.grid.spawn_position()
        self.prev_x, self.prev_y = self.grid_x, self.grid_y
        self.offset = (0.0, 0.0)
        self.fall_distance = 0
        self._idle()
        self._after_move()
        return True

    def __repr__(self) -> str:
        return f"Vehicle({self.grid_x}, {self.grid_y}, {self.state.name})"
