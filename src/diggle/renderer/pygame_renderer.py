"""Pygame-CE debug viewer for a mining session."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pygame

from ..config import RendererConfig
from ..simulation.items import ItemKind
from ..simulation.outcomes import Outcome
from ..simulation.session import GameState
from ..simulation.tiles import TileKind
from ..simulation.vehicle import Direction
from . import colors

if TYPE_CHECKING:
    from ..simulation.session import MiningSession


DIRECTION_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

# Number keys use an item while digging and buy it while in the shop
ITEM_KEYS = {
    pygame.K_1: ItemKind.BACKUP_FUEL,
    pygame.K_2: ItemKind.REPAIR_BOT,
    pygame.K_3: ItemKind.DYNAMITE,
    pygame.K_4: ItemKind.C4,
    pygame.K_5: ItemKind.SPACE_RIFT,
}

SHOP_HINTS = [
    "G sell ore   F refuel   R repair",
    "T tank  C cargo  H hull",
    "B bit  N engine  K cooling",
    "1-5 buy item   E leave",
]

PLAY_HINTS = [
    "Arrows/WASD drive & dig",
    "E shop (surface)   1-5 use item",
    "SPACE pause   BACKSPACE reset",
    "ESC quit",
]


class PygameRenderer:
    """
    Pygame-based viewer for the mining simulation.

    Renders:
    - The tiles around the vehicle, scrolled to follow it
    - The vehicle at its interpolated position
    - Sidebar with fuel, hull, cash, cargo, depth, equipment and items

    It only reads session state and forwards key presses to the session's
    input and shop methods.
    """

    def __init__(self, config: RendererConfig):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
        """
        self.config = config
        self.window_width = config.window_width
        self.window_height = config.window_height
        self.sidebar_width = config.sidebar_width
        self.tile_size = config.tile_size
        self.world_width = config.window_width - config.sidebar_width
        self.world_height = config.window_height

        pygame.init()
        pygame.display.set_caption("Diggle")

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()

        self.font_large = pygame.font.Font(None, 28)
        self.font_medium = pygame.font.Font(None, 22)
        self.font_small = pygame.font.Font(None, 18)

        self._world_surface = pygame.Surface((self.world_width, self.world_height))
        self._sidebar_surface = pygame.Surface((self.sidebar_width, self.window_height))

        self._fps_history: list[float] = []
        self.message = ""

    # ============================================================
    # INPUT
    # ============================================================

    def handle_events(self, session: MiningSession) -> bool:
        """
        Handle Pygame events.

        Args:
            session: The session receiving input and shop requests

        Returns:
            False if the window should close, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            if event.type == pygame.KEYUP:
                if DIRECTION_KEYS.get(event.key) is session.vehicle.held_direction:
                    session.release()
                continue

            if event.type != pygame.KEYDOWN:
                continue

            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_SPACE:
                if session.state is GameState.PAUSED:
                    session.resume()
                else:
                    session.pause()
            elif event.key == pygame.K_BACKSPACE:
                session.reset()
                self.message = "New run"
            elif event.key == pygame.K_e:
                if session.state is GameState.SHOPPING:
                    session.close_shop()
                else:
                    self._report("Shop", session.open_shop())
            elif session.state is GameState.SHOPPING:
                self._handle_shop_key(session, event.key)
            elif event.key in DIRECTION_KEYS:
                session.hold(DIRECTION_KEYS[event.key])
            elif event.key in ITEM_KEYS:
                kind = ITEM_KEYS[event.key]
                self._report(kind.spec.display_name, session.use_item(kind))

        return True

    def _handle_shop_key(self, session: MiningSession, key: int) -> None:
        """Map a key press in the shop to a purchase."""
        actions = {
            pygame.K_g: ("Sell ore", session.sell_ore),
            pygame.K_f: ("Refuel", session.refuel),
            pygame.K_r: ("Repair", session.repair_hull),
            pygame.K_t: ("Fuel tank", session.upgrade_fuel_tank),
            pygame.K_c: ("Cargo", session.upgrade_cargo),
            pygame.K_h: ("Hull", session.upgrade_hull),
            pygame.K_b: ("Drill bit", session.upgrade_drillbit),
            pygame.K_n: ("Engine", session.upgrade_engine),
            pygame.K_k: ("Cooling", session.upgrade_cooling),
        }
        if key in actions:
            label, action = actions[key]
            self._report(label, action())
        elif key in ITEM_KEYS:
            kind = ITEM_KEYS[key]
            self._report(f"Buy {kind.spec.display_name}", session.buy_item(kind))

    def _report(self, label: str, outcome: Outcome) -> None:
        if outcome:
            self.message = f"{label}: done"
        else:
            self.message = f"{label}: {outcome.name.replace('_', ' ').lower()}"

    # ============================================================
    # RENDERING
    # ============================================================

    def render(self, session: MiningSession, alpha: float = 0.0) -> None:
        """
        Render the current state of the session.

        Args:
            session: The session to render
            alpha: Fraction of the next tick already elapsed
        """
        self.screen.fill(colors.BG_DARK)

        self._render_world(session, alpha)
        self._render_sidebar(session)

        self.screen.blit(self._world_surface, (self.sidebar_width, 0))
        self.screen.blit(self._sidebar_surface, (0, 0))

        pygame.display.flip()

    def _render_world(self, session: MiningSession, alpha: float) -> None:
        """Render the visible window of tiles, centered on the vehicle."""
        self._world_surface.fill(colors.BG_DARK)

        view = session.view
        tiles = view.tiles
        size = self.tile_size
        vx, vy = session.vehicle.interpolate(alpha)

        # Camera top-left in fractional tile coordinates
        cols = self.world_width / size
        rows = self.world_height / size
        cam_x = max(0.0, min(view.width - cols, vx + 0.5 - cols / 2))
        cam_y = max(0.0, min(view.height - rows, vy + 0.5 - rows / 2))

        first_x = max(0, int(math.floor(cam_x)))
        first_y = max(0, int(math.floor(cam_y)))
        last_x = min(view.width, int(math.ceil(cam_x + cols)) + 1)
        last_y = min(view.height, int(math.ceil(cam_y + rows)) + 1)

        for x in range(first_x, last_x):
            px = int((x - cam_x) * size)
            for y in range(first_y, last_y):
                py = int((y - cam_y) * size)
                kind = TileKind(int(tiles[x, y]))
                depth = max(0, y - view.surface_rows)
                rect = pygame.Rect(px, py, size, size)
                pygame.draw.rect(self._world_surface, colors.get_tile_color(kind, depth), rect)

                highlight = colors.TILE_HIGHLIGHTS.get(kind)
                if highlight is not None:
                    pygame.draw.circle(self._world_surface, highlight, rect.center, size // 4)

        self._render_vehicle(session, (vx - cam_x) * size, (vy - cam_y) * size)

    def _render_vehicle(self, session: MiningSession, px: float, py: float) -> None:
        """Draw the vehicle body and a drill tip pointing the way it acts."""
        size = self.tile_size
        vehicle = session.vehicle
        body = pygame.Rect(int(px) + 2, int(py) + 4, size - 4, size - 8)

        color = colors.VEHICLE_DESTROYED if vehicle.is_destroyed else colors.VEHICLE_BODY
        pygame.draw.rect(self._world_surface, color, body, border_radius=4)

        direction = vehicle.action_direction
        if direction is Direction.NONE:
            direction = Direction.DOWN
        cx, cy = body.center
        tip = (cx + direction.dx * size // 2, cy + direction.dy * size // 2)
        pygame.draw.line(self._world_surface, colors.VEHICLE_DRILL, (cx, cy), tip, 3)

    def _render_sidebar(self, session: MiningSession) -> None:
        """Render the sidebar with gauges, inventory and controls."""
        self._sidebar_surface.fill(colors.BG_SIDEBAR)

        pygame.draw.line(
            self._sidebar_surface,
            colors.DIVIDER,
            (self.sidebar_width - 1, 0),
            (self.sidebar_width - 1, self.window_height),
            2,
        )

        padding = 12
        y = 10

        title = self.font_large.render(self._state_label(session), True, colors.TEXT_ACCENT)
        self._sidebar_surface.blit(title, (padding, y))
        y += 30

        avg_fps = sum(self._fps_history) / len(self._fps_history) if self._fps_history else 0
        y = self._render_line(f"Tick: {session.clock.tick:,}   FPS: {avg_fps:.0f}", y, padding)
        y = self._render_line(f"Seed: {session.world_config.seed}", y, padding)
        y = self._render_divider(y, padding)

        fuel, hull, economy = session.fuel, session.hull, session.economy
        fuel_label = f"Fuel {fuel.current:.0f}/{fuel.capacity:.0f}"
        if session.is_fuel_low:
            fuel_label += "  LOW"
        y = self._render_gauge(fuel_label, fuel.fraction, colors.FUEL_OK, colors.FUEL_LOW, y, padding)
        y = self._render_gauge(
            f"Hull {hull.current:.0f}/{hull.max_hp:.0f}", hull.fraction, colors.HULL_OK, colors.HULL_LOW, y, padding
        )

        y = self._render_line(f"Cash: ${economy.cash:,}", y, padding, colors.TEXT_PRIMARY)
        y = self._render_line(
            f"Cargo: {economy.cargo_count}/{economy.cargo_capacity} (${economy.cargo_value:,})",
            y, padding, colors.TEXT_PRIMARY,
        )
        y = self._render_line(
            f"Depth: {session.vehicle.depth}m  (best {economy.max_depth_reached}m)", y, padding, colors.TEXT_PRIMARY
        )

        progression = session.progression
        level = getattr(progression, "level", None)
        if level is not None:
            y = self._render_line(f"Level {level}   Points: {progression.points:,}", y, padding)
        y = self._render_divider(y, padding)

        equipment = session.equipment
        for label, track in (
            ("Tank", fuel.tank),
            ("Cargo", economy.cargo),
            ("Hull", hull.hull),
            ("Bit", equipment.drillbit),
            ("Engine", equipment.engine),
            ("Cooling", equipment.cooling),
        ):
            cost = track.upgrade_cost()
            suffix = f"  next ${cost:,}" if cost else "  max"
            y = self._render_line(f"{label}: {track.current.name}{suffix}", y, padding)
        y = self._render_divider(y, padding)

        for index, kind in enumerate(ItemKind, start=1):
            count = session.items.quantity(kind)
            y = self._render_line(f"{index}. {kind.spec.display_name} x{count}  (${kind.price})", y, padding)
        y = self._render_divider(y, padding)

        if self.message:
            y = self._render_line(self.message, y, padding, colors.TEXT_WARNING)
            y += 4

        hints = SHOP_HINTS if session.state is GameState.SHOPPING else PLAY_HINTS
        for hint in hints:
            y = self._render_line(hint, y, padding)

    @staticmethod
    def _state_label(session: MiningSession) -> str:
        if session.state is GameState.GAME_OVER:
            return "GAME OVER"
        if session.state is GameState.SHOPPING:
            return "SHOP"
        if session.state is GameState.PAUSED:
            return "PAUSED"
        return "DIGGLE"

    def _render_line(self, text: str, y: int, padding: int, color: tuple[int, int, int] = colors.TEXT_SECONDARY) -> int:
        surface = self.font_small.render(text, True, color)
        self._sidebar_surface.blit(surface, (padding, y))
        return y + 18

    def _render_divider(self, y: int, padding: int) -> int:
        pygame.draw.line(
            self._sidebar_surface, colors.DIVIDER,
            (padding, y), (self.sidebar_width - padding, y)
        )
        return y + 8

    def _render_gauge(
        self,
        label: str,
        fraction: float,
        ok: tuple[int, int, int],
        low: tuple[int, int, int],
        y: int,
        padding: int,
    ) -> int:
        """Render a labelled horizontal bar and return the new y position."""
        y = self._render_line(label, y, padding, colors.TEXT_PRIMARY)
        width = self.sidebar_width - padding * 2
        pygame.draw.rect(self._sidebar_surface, colors.GAUGE_BG, (padding, y, width, 8))
        filled = int(width * max(0.0, min(1.0, fraction)))
        if filled > 0:
            pygame.draw.rect(self._sidebar_surface, colors.get_gauge_color(fraction, ok, low), (padding, y, filled, 8))
        return y + 14

    def tick(self) -> float:
        """
        Advance the renderer clock and return delta time.

        Returns:
            Time elapsed since last tick in seconds.
        """
        dt = self.clock.tick(self.config.target_fps) / 1000.0
        self._fps_history.append(self.clock.get_fps())
        if len(self._fps_history) > 30:
            self._fps_history.pop(0)
        return dt

    def cleanup(self) -> None:
        """Clean up Pygame resources."""
        pygame.quit()
