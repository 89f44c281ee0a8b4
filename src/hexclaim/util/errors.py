"""Error types for territory operations.

Every error here signals a programming mistake in the caller (a broken
precondition), so nothing inside the package catches them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexclaim.models.building import BuildingKind
    from hexclaim.models.hex import HexCoord


class InvalidHexKeyError(ValueError):
    """A hex key string is not of the form ``"<int>,<int>"``."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid hex key {key!r}: {reason}")


class TerritoryError(Exception):
    """Base class for territory precondition violations."""

    def __init__(self, message: str, position: HexCoord | None = None):
        self.message = message
        self.position = position
        super().__init__(message)


class NoBuildingError(TerritoryError):
    """No building is registered at the given hex."""

    def __init__(self, position: HexCoord):
        super().__init__(f"No building exists at {position!r}", position)


class NotAClaimantError(TerritoryError):
    """The building kind does not expand the territory."""

    def __init__(self, position: HexCoord, kind: BuildingKind):
        self.kind = kind
        super().__init__(
            f"Building {kind.value!r} at {position!r} does not claim territory", position,
        )


class ClaimantExistsError(TerritoryError):
    """A territory-claiming building already occupies the hex."""

    def __init__(self, position: HexCoord, kind: BuildingKind):
        self.kind = kind
        super().__init__(
            f"Hex {position!r} is already held by claimant {kind.value!r}", position,
        )
