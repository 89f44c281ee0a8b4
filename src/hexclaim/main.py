"""Territory demo entry point.

Initializes all components and runs the frame loop:
1. Load configuration (claim radius, layout, seed script)
2. Create services (drawables, territory, construction, frame loop)
3. Wire event handlers and the border animation
4. Initialize the territory from the seed script
5. Run the frame loop for a number of frames

Usage:
    python -m hexclaim.main --frames 120
    # or via entry point:
    hexclaim
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Optional

from hexclaim.engine.construction_service import ConstructionService
from hexclaim.engine.drawables import DrawableRegistry
from hexclaim.engine.frame_loop import FrameLoop
from hexclaim.engine.territory_service import TerritoryService
from hexclaim.loaders.territory_config_loader import (
    DEFAULT_TERRITORY_CONFIG_PATH,
    TerritoryConfig,
    load_territory_config,
)
from hexclaim.models.resources import ResourceLedger
from hexclaim.models.territory import TerritoryState
from hexclaim.util.events import BuildingEvicted, ClaimantAdded, ClaimantRemoved, EventBus

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Container for all services (makes passing around easier)
# ---------------------------------------------------------------------------


@dataclass
class Services:
    """Holds references to all services of a session."""

    config: Optional[TerritoryConfig] = None
    event_bus: Optional[EventBus] = None
    state: Optional[TerritoryState] = None
    drawables: Optional[DrawableRegistry] = None
    territory: Optional[TerritoryService] = None
    construction: Optional[ConstructionService] = None
    frame_loop: Optional[FrameLoop] = None


# ===================================================================
# 1. Create services
# ===================================================================


def create_services(config: TerritoryConfig) -> Services:
    """Instantiate all services with proper dependency injection.

    Args:
        config: Loaded territory configuration.

    Returns:
        Populated :class:`Services` container.
    """
    log.info("Creating services …")

    event_bus = EventBus()
    state = TerritoryState()
    drawables = DrawableRegistry()
    territory = TerritoryService(state, drawables, event_bus, config)
    construction = ConstructionService(ResourceLedger(dict(config.starting_resources)))
    frame_loop = FrameLoop(config.fps)

    log.info("  all services created (claim radius %d)", config.claim_radius)

    return Services(
        config=config,
        event_bus=event_bus,
        state=state,
        drawables=drawables,
        territory=territory,
        construction=construction,
        frame_loop=frame_loop,
    )


# ===================================================================
# 2. Wire up event handlers
# ===================================================================


def wire_events(services: Services) -> None:
    """Register event handlers on the bus.

    Called before ``initialize()`` so the seed replay is logged too.
    """
    log.info("Wiring event handlers …")
    bus = services.event_bus

    bus.on(ClaimantAdded, lambda evt: log.info(
        "  + %s at %r (border %d)", evt.kind.value, evt.position, evt.border_size))
    bus.on(ClaimantRemoved, lambda evt: log.info(
        "  - claimant at %r (%d evicted, border %d)", evt.position, evt.evicted, evt.border_size))
    bus.on(BuildingEvicted, lambda evt: log.debug("  evicted %r", evt.position))

    log.info("  event handlers registered")


def wire_frame_loop(services: Services) -> None:
    """Hook the border animation to the frame loop.

    The overlay only exists once ``initialize()`` has run.
    """
    overlay = services.territory.border_overlay
    if overlay is not None:
        services.frame_loop.register(overlay.on_frame)


# ===================================================================
# 3. Run
# ===================================================================


async def run(services: Services, frames: int) -> None:
    """Run the frame loop for `frames` frames, then drain the destruction queue."""
    if frames > 0:
        log.info("Running frame loop for %d frames …", frames)
        await services.frame_loop.run(max_frames=frames)

    destroyed = services.state.drain_pending_destruction()
    overlay = services.territory.border_overlay
    log.info("Territory: %d hexes, %d border hexes, %d outline segments, %d destroyed",
             len(services.state.buildings), len(services.state.border),
             len(overlay.segments()) if overlay else 0, len(destroyed))


# ===================================================================
# Entry points
# ===================================================================


def main() -> None:
    """Entry point for the territory demo."""
    parser = argparse.ArgumentParser(description="Hex territory demo")
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_TERRITORY_CONFIG_PATH,
        help=f"Territory config YAML (default: {DEFAULT_TERRITORY_CONFIG_PATH})"
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Frames to animate before exiting (default: 0)"
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the final territory snapshot as JSON"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    log.info("=== Territory demo starting ===")

    config = load_territory_config(args.config)
    services = create_services(config)
    wire_events(services)
    services.territory.initialize()
    wire_frame_loop(services)
    asyncio.run(run(services, args.frames))

    if args.dump:
        print(json.dumps(services.state.snapshot(), indent=2))


if __name__ == "__main__":
    main()
