"""Hex math utilities: geometry functions for hexagonal grids.

Lattice functions operate on HexCoord (axial coordinates); the pixel
projection maps them onto a flat-top canvas layout and back.
Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from hexclaim.models.hex import HexCoord


@dataclass(frozen=True)
class PixelPoint:
    """A point in canvas space (floats, y grows downwards)."""

    x: float
    y: float

    def __add__(self, other: PixelPoint) -> PixelPoint:
        return PixelPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: PixelPoint) -> PixelPoint:
        return PixelPoint(self.x - other.x, self.y - other.y)

    def scale(self, factor: float) -> PixelPoint:
        return PixelPoint(self.x * factor, self.y * factor)

    def round(self) -> PixelPoint:
        """Round both components to the nearest integer."""
        return PixelPoint(float(round(self.x)), float(round(self.y)))

    def distance(self, other: PixelPoint) -> float:
        """Euclidean distance, for hit-testing only."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class HexLayout:
    """Pixel dimensions of a flat-top hex.

    Attributes:
        base_width: Length of the flat top / bottom edge.
        width: Distance between the left and right corners.
        height: Distance between the top and bottom edges.
    """

    base_width: float
    width: float
    height: float

    @classmethod
    def from_size(cls, size: float) -> HexLayout:
        """Regular hexagon with the given corner radius."""
        return cls(base_width=size, width=2 * size, height=math.sqrt(3) * size)

    @property
    def column_step(self) -> float:
        return self.base_width + self.width


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """Compute the hex grid distance between two coordinates."""
    return a.distance_to(b)


def hex_ring(center: HexCoord, radius: int) -> list[HexCoord]:
    """Return all hexes at exactly `radius` distance from center."""
    return center.ring(radius)


def hex_disk(center: HexCoord, radius: int, min_radius: int = 0) -> set[HexCoord]:
    """Return all hexes within `radius` distance from center (inclusive)."""
    return center.disk(radius, min_radius)


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """Return the 6 neighbors of a hex coordinate."""
    return coord.neighbors()


def hex_round(fq: float, fr: float) -> HexCoord:
    """Round fractional axial coordinates to the nearest hex."""
    fs = -fq - fr
    q = round(fq)
    r = round(fr)
    s = round(fs)

    q_diff = abs(q - fq)
    r_diff = abs(r - fr)
    s_diff = abs(s - fs)

    if q_diff > r_diff and q_diff > s_diff:
        q = -r - s
    elif r_diff > s_diff:
        r = -q - s
    # else: s = -q - r (implicit, not stored)

    return HexCoord(q, r)


# -- Pixel projection ----------------------------------------------------

def hex_to_pixel(coord: HexCoord, layout: HexLayout) -> PixelPoint:
    """Canvas position of a hex centre."""
    return PixelPoint(
        (coord.q + coord.r) * layout.column_step / 2,
        (coord.q - coord.r) * layout.height / 2,
    )


def pixel_to_axial(point: PixelPoint, layout: HexLayout) -> tuple[float, float]:
    """Fractional axial coordinates of a canvas point (inverse of hex_to_pixel)."""
    across = point.x / layout.column_step
    down = point.y / layout.height
    return across + down, across - down


def pixel_to_hex(point: PixelPoint, layout: HexLayout) -> HexCoord:
    """The hex whose area contains a canvas point, e.g. for pointer input."""
    fq, fr = pixel_to_axial(point, layout)
    return hex_round(fq, fr)


def hex_vertices(layout: HexLayout) -> list[PixelPoint]:
    """Corner offsets from the hex centre, clockwise from the top-left corner."""
    half_base = layout.base_width / 2
    half_width = layout.width / 2
    half_height = layout.height / 2
    return [
        PixelPoint(-half_base, -half_height),
        PixelPoint(half_base, -half_height),
        PixelPoint(half_width, 0.0),
        PixelPoint(half_base, half_height),
        PixelPoint(-half_base, half_height),
        PixelPoint(-half_width, 0.0),
    ]
