"""Territory configuration: loads tunable constants from config/territory.yaml.

Provides a single ``TerritoryConfig`` dataclass that is loaded once at
startup and then passed (or injected) wherever constants are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from hexclaim.models.building import BuildingKind
from hexclaim.models.hex import HexCoord
from hexclaim.util import constants
from hexclaim.util.hex_math import HexLayout

log = logging.getLogger(__name__)

DEFAULT_TERRITORY_CONFIG_PATH = "config/territory.yaml"

SEED_ACTIONS = ("place", "remove")


@dataclass(frozen=True)
class SeedStep:
    """One scripted territory action replayed by ``initialize()``.

    Attributes:
        action: ``"place"`` (claimant placement) or ``"remove"``.
        position: Target hex.
        kind: Claimant kind for ``"place"`` steps.
    """

    action: str
    position: HexCoord
    kind: Optional[BuildingKind] = None


def _default_seed() -> List[SeedStep]:
    return [
        SeedStep("place", HexCoord(0, 0), BuildingKind.TOWN_CENTER),
        SeedStep("place", HexCoord(2, -2), BuildingKind.TOWER),
        SeedStep("place", HexCoord(3, -1), BuildingKind.TOWER),
        SeedStep("remove", HexCoord(2, -2)),
    ]


@dataclass
class TerritoryConfig:
    """All tunable territory constants.

    Loaded from ``config/territory.yaml``.  Every field has a sensible
    default so the package works even without the file.
    """

    # -- Territory ---------------------------------------------------
    claim_radius: int = constants.CLAIM_RADIUS

    # -- Layout ------------------------------------------------------
    hex_size: float = constants.HEX_SIZE

    # -- Border animation --------------------------------------------
    fps: int = constants.FPS
    dash_length: float = constants.DASH_LENGTH
    dash_space: float = constants.DASH_SPACE
    dash_cycle_seconds: float = constants.DASH_CYCLE_SECONDS
    line_width: float = constants.LINE_WIDTH

    # -- Session defaults --------------------------------------------
    starting_resources: Dict[str, float] = field(default_factory=lambda: {
        "wood": 0.0, "stone": 0.0,
    })
    seed: List[SeedStep] = field(default_factory=_default_seed)

    def __post_init__(self) -> None:
        if self.claim_radius < 1:
            raise ValueError(f"claim_radius must be >= 1, got {self.claim_radius}")

    @property
    def layout(self) -> HexLayout:
        return HexLayout.from_size(self.hex_size)


def parse_seed(raw: List[Dict[str, Any]]) -> List[SeedStep]:
    """Parse seed entries like ``{action: place, at: "0,0", kind: townCenter}``."""
    steps: List[SeedStep] = []
    for entry in raw:
        action = entry.get("action", "place")
        if action not in SEED_ACTIONS:
            raise ValueError(f"Unknown seed action {action!r} (expected one of {SEED_ACTIONS})")
        if "at" not in entry:
            raise ValueError(f"Seed entry {entry!r} has no 'at' position")
        position = HexCoord.from_key(str(entry["at"]))
        kind = None
        if action == "place":
            if "kind" not in entry:
                raise ValueError(f"Seed place entry {entry!r} has no 'kind'")
            kind = BuildingKind(entry["kind"])
        steps.append(SeedStep(action, position, kind))
    return steps


def load_territory_config(path: str | Path = DEFAULT_TERRITORY_CONFIG_PATH) -> TerritoryConfig:
    """Load territory configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Territory config not found at %s, using defaults", p)
        return TerritoryConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded territory config from %s (%d keys)", p, len(raw))

    # Seed steps are nested; everything else is a flat key
    seed_raw = raw.pop("seed", None)
    kwargs = {k: v for k, v in raw.items() if k in TerritoryConfig.__dataclass_fields__}
    if isinstance(seed_raw, list):
        kwargs["seed"] = parse_seed(seed_raw)
    return TerritoryConfig(**kwargs)
