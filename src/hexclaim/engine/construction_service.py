"""Construction service: pays for new buildings from the resource ledger.

Validates that the ledger covers a building kind's requirements and
deducts them. Placement on the map is up to the caller (see
TerritoryService); this service only settles the bill.
"""

from __future__ import annotations

import logging
from typing import Optional

from hexclaim.models.building import BuildingKind
from hexclaim.models.resources import ResourceLedger

log = logging.getLogger(__name__)


class ConstructionService:
    """Cost checks for building construction.

    Args:
        ledger: Resource stock the costs are paid from.
    """

    def __init__(self, ledger: ResourceLedger) -> None:
        self._ledger = ledger

    @property
    def ledger(self) -> ResourceLedger:
        return self._ledger

    def missing_for(self, kind: BuildingKind) -> list[str]:
        """Human-readable shortfalls for building `kind` (empty if affordable)."""
        return self._ledger.missing(kind.definition.requirements)

    def build(self, kind: BuildingKind) -> Optional[str]:
        """Pay for a building. Returns error message or None."""
        if kind is BuildingKind.BLANK:
            return "Cannot build a blank hex"
        missing = self.missing_for(kind)
        if missing:
            log.info("Cannot build %s: %s", kind.value, "; ".join(missing))
            return "\n".join(missing)
        self._ledger.deduct(kind.definition.requirements)
        log.info("Paid for %s: %s", kind.value, kind.definition.requirements)
        return None
