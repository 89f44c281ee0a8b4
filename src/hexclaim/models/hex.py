"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs towards the lower right of the canvas
- r axis runs towards the upper right of the canvas
- s = -q - r is the implicit third cube coordinate

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexclaim.util.errors import InvalidHexKeyError

if TYPE_CHECKING:
    from hexclaim.util.hex_math import HexLayout, PixelPoint

_KEY_PATTERN = re.compile(r"(-?[0-9]+),(-?[0-9]+)")


@dataclass(frozen=True, order=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: First axial coordinate.
        r: Second axial coordinate.
    """

    q: int
    r: int

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Arithmetic ------------------------------------------------------

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def scale(self, factor: int) -> HexCoord:
        """Multiply both coordinates by an integer factor."""
        return HexCoord(self.q * factor, self.r * factor)

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: HexCoord) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates in ``DIRECTIONS`` order."""
        return [self + direction for direction in DIRECTIONS]

    def ring(self, radius: int) -> list[HexCoord]:
        """Return all hexes at exactly `radius` steps away.

        Radius 0 is the hex itself. For radius > 0 the ring is walked
        corner to corner, one contiguous run of `radius` hexes per direction.
        """
        if radius < 0:
            raise ValueError(f"Ring radius must be >= 0, got {radius}")
        if radius == 0:
            return [self]
        results: list[HexCoord] = []
        h = self + DIRECTIONS[4].scale(radius)
        for direction in DIRECTIONS:
            for _ in range(radius):
                results.append(h)
                h = h + direction
        return results

    def disk(self, radius: int, min_radius: int = 0) -> set[HexCoord]:
        """Return all hexes between `min_radius` and `radius` steps (inclusive)."""
        if min_radius < 0:
            raise ValueError(f"Minimum radius must be >= 0, got {min_radius}")
        results: set[HexCoord] = set()
        for step in range(radius, min_radius - 1, -1):
            results.update(self.ring(step))
        return results

    def to_pixel(self, layout: HexLayout) -> PixelPoint:
        """Canvas position of the hex centre."""
        from hexclaim.util.hex_math import hex_to_pixel

        return hex_to_pixel(self, layout)

    # -- Serialization ---------------------------------------------------

    def to_key(self) -> str:
        """Canonical string key ``"q,r"``."""
        return f"{self.q},{self.r}"

    @classmethod
    def from_key(cls, key: str) -> HexCoord:
        """Parse a key produced by :meth:`to_key`.

        Raises:
            InvalidHexKeyError: The key has no comma or a non-integer part.
        """
        match = _KEY_PATTERN.fullmatch(key)
        if match is None:
            if "," not in key:
                raise InvalidHexKeyError(key, "key should contain a comma")
            raise InvalidHexKeyError(key, "both parts of the key must be integers")
        return cls(int(match.group(1)), int(match.group(2)))

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


ORIGIN = HexCoord(0, 0)

# The 6 axial direction vectors. Direction i is the neighbor across the
# edge between hex vertex i and vertex i + 1 (see hex_math.hex_vertices).
DIRECTIONS: tuple[HexCoord, ...] = (
    HexCoord(-1, 1),  # N
    HexCoord(0, 1),   # NE
    HexCoord(1, 0),   # SE
    HexCoord(1, -1),  # S
    HexCoord(0, -1),  # SW
    HexCoord(-1, 0),  # NW
)
