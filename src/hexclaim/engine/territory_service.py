"""Territory service: the building registry and incremental border upkeep.

Responsibilities:
- Building placement with overwrite / keep semantics
- Render handle bookkeeping (detach the old sprite, attach the new one)
- Claimant placement: fill the claim disk, extend the border
- Claimant removal: re-classify the claim disk, evict uncovered hexes
- Session (re-)initialization from the configured seed script

Every update only looks at claimants within twice the claim radius of the
changed hex; claim disks further apart cannot overlap. No full map scans.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from hexclaim.engine.drawables import DrawableRegistry
    from hexclaim.util.events import EventBus

from hexclaim.engine.border_overlay import BorderOverlay
from hexclaim.engine.drawables import BuildingSprite
from hexclaim.loaders.territory_config_loader import TerritoryConfig
from hexclaim.models.building import Building, BuildingKind
from hexclaim.models.hex import HexCoord
from hexclaim.models.territory import TerritoryState
from hexclaim.util.errors import ClaimantExistsError, NoBuildingError, NotAClaimantError
from hexclaim.util.events import BuildingEvicted, BuildingPlaced, ClaimantAdded, ClaimantRemoved

log = logging.getLogger(__name__)


class TerritoryService:
    """Service for all territory state management.

    Args:
        state: The territory state this service owns and mutates.
        drawables: Render-attachment service (``attach`` / ``detach``).
        event_bus: Event bus for change notifications.
        config: Territory config (claim radius, layout, seed script);
            defaults apply when omitted.
    """

    def __init__(self, state: TerritoryState, drawables: DrawableRegistry,
                 event_bus: EventBus, config: TerritoryConfig | None = None) -> None:
        self._state = state
        self._drawables = drawables
        self._events = event_bus
        self._config = config if config is not None else TerritoryConfig()
        self._radius = self._config.claim_radius
        self._layout = self._config.layout
        self._border_overlay: Optional[BorderOverlay] = None

    @property
    def state(self) -> TerritoryState:
        return self._state

    @property
    def claim_radius(self) -> int:
        return self._radius

    @property
    def border_overlay(self) -> Optional[BorderOverlay]:
        """The attached outline drawable (None before ``initialize()``)."""
        return self._border_overlay

    # -- Session ---------------------------------------------------------

    def initialize(self) -> None:
        """Reset the territory and replay the seed script.

        The border overlay is attached on the first call only.
        """
        if self._border_overlay is None:
            self._border_overlay = BorderOverlay.from_config(self._state, self._config)
            self._drawables.attach(self._border_overlay)

        for building in self._state.buildings.values():
            if building.handle is not None:
                self._drawables.detach(building.handle)
        self._state.reset()

        seed = self._config.seed
        for step in seed:
            if step.action == "place":
                self.place_claimant(step.position, step.kind)
            else:
                self.remove_claimant(step.position)
        log.info("Territory initialized: %d hexes, %d border hexes (%d seed steps)",
                 len(self._state.buildings), len(self._state.border), len(seed))

    # -- Registry --------------------------------------------------------

    def place(self, position: HexCoord, kind: BuildingKind, overwrite: bool) -> None:
        """Store a building on a hex.

        An occupied hex is left alone unless `overwrite` is set, in which
        case the previous occupant's sprite is detached first.
        """
        previous = self._state.buildings.get(position)
        if previous is not None:
            if not overwrite:
                return
            if previous.handle is not None:
                self._drawables.detach(previous.handle)

        sprite = BuildingSprite(kind.label, position, position.to_pixel(self._layout))
        handle = self._drawables.attach(sprite, position)
        self._state.buildings[position] = Building(kind, position, handle)
        log.debug("Placed %s at %r (replaced %s)", kind.value, position,
                  previous.kind.value if previous else None)
        self._events.emit(BuildingPlaced(
            position=position,
            kind=kind,
            replaced=previous.kind if previous else None,
        ))

    # -- Claimants -------------------------------------------------------

    def place_claimant(self, position: HexCoord, kind: BuildingKind) -> None:
        """Place a territory-claiming building and extend the border.

        Raises:
            NotAClaimantError: `kind` does not claim territory.
            ClaimantExistsError: A claimant already stands on `position`.
        """
        if not kind.is_claimant:
            raise NotAClaimantError(position, kind)
        existing = self._state.buildings.get(position)
        if existing is not None and existing.is_claimant:
            raise ClaimantExistsError(position, existing.kind)

        radius = self._radius
        border = self._state.border
        self.place(position, kind, overwrite=True)

        # Inner disks of every claimant that can overlap, the new one included
        inner: set[HexCoord] = set()
        for claimant in self._state.claimants_within(position, radius * 2):
            inner |= claimant.position.disk(radius - 1)

        for hex_ in position.disk(radius):
            self.place(hex_, BuildingKind.BLANK, overwrite=False)

        for hex_ in position.ring(radius):
            if hex_ not in inner:
                border.add(hex_)

        border -= position.disk(radius - 1)

        log.info("Claimant %s placed at %r: %d hexes, %d border hexes",
                 kind.value, position, len(self._state.buildings), len(border))
        self._events.emit(ClaimantAdded(position=position, kind=kind, border_size=len(border)))

    def remove_claimant(self, position: HexCoord) -> None:
        """Replace a claimant with a blank and shrink the territory.

        Hexes of the removed claim disk that remain on another claimant's
        edge stay on the border, hexes inside another claimant's inner
        disk are untouched, everything else is evicted and queued in
        ``pending_destruction``.

        Raises:
            NoBuildingError: Nothing is registered at `position`.
            NotAClaimantError: The building there does not claim territory.
        """
        building = self._state.buildings.get(position)
        if building is None:
            raise NoBuildingError(position)
        if not building.is_claimant:
            raise NotAClaimantError(position, building.kind)

        radius = self._radius
        border = self._state.border
        self.place(position, BuildingKind.BLANK, overwrite=True)

        edge: set[HexCoord] = set()
        inner: set[HexCoord] = set()
        for claimant in self._state.claimants_within(position, radius * 2):
            edge.update(claimant.position.ring(radius))
            inner |= claimant.position.disk(radius - 1)
        # Interior always wins over another claimant's edge
        edge -= inner

        evicted = 0
        for hex_ in position.disk(radius):
            if hex_ in edge:
                border.add(hex_)
            elif hex_ not in inner:
                self._evict(hex_)
                evicted += 1

        log.info("Claimant %s removed at %r: %d hexes evicted, %d border hexes",
                 building.kind.value, position, evicted, len(border))
        self._events.emit(ClaimantRemoved(position=position, evicted=evicted,
                                          border_size=len(border)))

    # -- Internal --------------------------------------------------------

    def _evict(self, position: HexCoord) -> None:
        """Drop a hex that left the territory."""
        building = self._state.buildings.pop(position, None)
        assert building is not None, f"{position!r} is inside a removed claim disk and must be registered"
        if building.handle is not None:
            self._drawables.detach(building.handle)
        self._state.pending_destruction.add(position)
        self._state.border.discard(position)
        log.debug("Evicted %s at %r", building.kind.value, position)
        self._events.emit(BuildingEvicted(position=position, kind=building.kind))
