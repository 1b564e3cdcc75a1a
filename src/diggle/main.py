"""Main entry point for the Diggle debug viewer."""

import logging

from .config import Config
from .renderer import PygameRenderer
from .simulation import EventKind, MiningSession


def main() -> None:
    """Run a mining session in the pygame viewer."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # Load configuration
    config = Config.default()

    # Create session
    session = MiningSession(config)

    # Create renderer
    renderer = PygameRenderer(config.renderer)

    session.subscribe(
        EventKind.REACH_SURFACE,
        lambda event: setattr(renderer, "message", "Back at the surface - E to shop"),
    )
    session.subscribe(
        EventKind.CARGO_FULL,
        lambda event: setattr(renderer, "message", "Cargo full!"),
    )

    print("Starting Diggle...")
    print(f"  Seed: {config.world.seed}")
    print(f"  World size: {config.world.width}x{config.world.height}")
    print(f"  Tick: {config.clock.tick_seconds * 1000:.0f} ms")
    print()
    print("Controls:")
    print("  - Arrows or WASD to drive and dig")
    print("  - E at the surface to open the shop")
    print("  - 1-5 to use items (buy them in the shop)")
    print("  - SPACE to pause, BACKSPACE to start over")
    print("  - ESC to quit")
    print()

    # Main loop
    running = True
    dt = 0.0
    while running:
        # Handle input
        running = renderer.handle_events(session)

        # Update simulation
        session.update(dt)

        # Render
        renderer.render(session, session.clock.alpha)

        # Tick
        dt = renderer.tick()

    # Cleanup
    renderer.cleanup()
    economy = session.economy
    print(f"Run ended at {session.clock.tick} ticks.")
    print(f"  Deepest: {economy.max_depth_reached}m   Ore collected: {economy.total_ore_collected}")
    print(f"  Cash earned: ${economy.total_cash_earned:,}")


if __name__ == "__main__":
    main()
