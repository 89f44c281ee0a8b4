"""Territory state: the registry of occupied hexes and the border set.

A single owned value holds everything the border algorithm mutates, so
each session (or test) can work on an isolated instance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from hexclaim.models.building import Building
from hexclaim.models.hex import HexCoord


@dataclass
class TerritoryState:
    """Complete territory state of a session.

    Attributes:
        buildings: Every registered hex → the building occupying it.
            Holds placed buildings plus blank placeholders for each hex
            inside a claimant's claim disk.
        border: Registered hexes on the outer edge of the territory,
            i.e. not inside the inner disk of any claimant.
        pending_destruction: Hexes evicted by the last claimant removals,
            waiting for the renderer to consume them.
    """

    buildings: dict[HexCoord, Building] = field(default_factory=dict)
    border: set[HexCoord] = field(default_factory=set)
    pending_destruction: set[HexCoord] = field(default_factory=set)

    # -- Queries ---------------------------------------------------------

    def is_occupied(self, position: HexCoord) -> bool:
        return position in self.buildings

    def get(self, position: HexCoord) -> Optional[Building]:
        """Look up the building at a hex."""
        return self.buildings.get(position)

    def claimants(self) -> Iterator[Building]:
        """All registered territory-claiming buildings."""
        return (b for b in self.buildings.values() if b.is_claimant)

    def claimants_within(self, center: HexCoord, radius: int) -> list[Building]:
        """Claimants registered within `radius` steps of `center`."""
        found: list[Building] = []
        for position in center.disk(radius):
            building = self.buildings.get(position)
            if building is not None and building.is_claimant:
                found.append(building)
        return found

    # -- Lifecycle -------------------------------------------------------

    def reset(self) -> None:
        """Forget all buildings, border hexes, and pending destructions."""
        self.buildings.clear()
        self.border.clear()
        self.pending_destruction.clear()

    def drain_pending_destruction(self) -> set[HexCoord]:
        """Return and clear the hexes evicted since the last drain."""
        drained = set(self.pending_destruction)
        self.pending_destruction.clear()
        return drained

    # -- Serialization ---------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view keyed by canonical hex keys (sorted for stable output)."""
        return {
            "buildings": {
                pos.to_key(): self.buildings[pos].kind.value
                for pos in sorted(self.buildings)
            },
            "border": [pos.to_key() for pos in sorted(self.border)],
            "pending_destruction": [pos.to_key() for pos in sorted(self.pending_destruction)],
        }
