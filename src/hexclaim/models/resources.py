"""Resource ledger: the player's stock of construction materials."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ResourceLedger:
    """Current resource amounts.

    Attributes:
        amounts: Resource key → amount in stock.
    """

    amounts: dict[str, float] = field(default_factory=dict)

    def get(self, resource: str) -> float:
        return self.amounts.get(resource, 0.0)

    def add(self, resource: str, amount: float) -> None:
        self.amounts[resource] = self.get(resource) + amount

    def missing(self, requirements: dict[str, float]) -> list[str]:
        """One line per resource that is short of its requirement."""
        lines: list[str] = []
        for resource, needed in requirements.items():
            have = self.get(resource)
            if have < needed:
                lines.append(f"Not enough {resource} (need {needed}, have {have:.1f})")
        return lines

    def can_afford(self, requirements: dict[str, float]) -> bool:
        return not self.missing(requirements)

    def deduct(self, requirements: dict[str, float]) -> None:
        """Subtract the requirements from stock. Check ``can_afford`` first."""
        for resource, needed in requirements.items():
            self.amounts[resource] = self.get(resource) - needed
