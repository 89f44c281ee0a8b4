"""Building models: what can occupy a hex of the territory.

Every building occupies exactly one hex. Claimants (town center, tower)
additionally project a disk of controlled territory around themselves;
blank placeholders fill that disk wherever nothing else stands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from hexclaim.models.hex import HexCoord


class BuildingKind(Enum):
    """The closed set of building kinds."""

    BLANK = "blank"
    TOWN_CENTER = "townCenter"
    LUMBERJACK_HUT = "lumberjackHut"
    TOWER = "tower"

    @property
    def definition(self) -> BuildingDef:
        return BUILDING_DEFS[self]

    @property
    def is_claimant(self) -> bool:
        """True if this kind expands the territory."""
        return BUILDING_DEFS[self].claims_territory

    @property
    def label(self) -> str:
        return BUILDING_DEFS[self].label


@dataclass(frozen=True)
class BuildingDef:
    """Static definition of a building kind.

    Attributes:
        label: Display name drawn on the hex.
        requirements: Resource costs to construct. {resource_key: amount}
        claims_territory: Whether the building projects a claim disk.
    """

    label: str
    requirements: dict[str, int] = field(default_factory=dict)
    claims_territory: bool = False


BUILDING_DEFS: dict[BuildingKind, BuildingDef] = {
    BuildingKind.BLANK: BuildingDef(label="-"),
    BuildingKind.TOWN_CENTER: BuildingDef(label="town center", claims_territory=True),
    BuildingKind.LUMBERJACK_HUT: BuildingDef(
        label="lumberjack's hut",
        requirements={"wood": 2, "stone": 2},
    ),
    BuildingKind.TOWER: BuildingDef(
        label="tower",
        requirements={"wood": 2, "stone": 3},
        claims_territory=True,
    ),
}

CLAIMANT_KINDS: frozenset[BuildingKind] = frozenset(
    kind for kind, definition in BUILDING_DEFS.items() if definition.claims_territory
)


@dataclass
class Building:
    """A building registered on a hex.

    Attributes:
        kind: What stands on the hex.
        position: The occupied hex.
        handle: Render handle returned when the building was attached.
    """

    kind: BuildingKind
    position: HexCoord
    handle: Optional[int] = field(default=None, compare=False)

    @property
    def is_claimant(self) -> bool:
        return self.kind.is_claimant
