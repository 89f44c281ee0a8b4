"""Drawable registry: the render-attachment service.

Keeps every drawable the canvas renderer should paint, in attach order,
behind integer handles. The territory service attaches one sprite per
registered hex and detaches it when the hex is overwritten or evicted.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from hexclaim.models.hex import HexCoord
from hexclaim.util.hex_math import HexLayout, PixelPoint, hex_vertices

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildingSprite:
    """What the renderer needs to paint one building.

    Attributes:
        label: Text drawn in the middle of the hex.
        position: The hex the building occupies.
        center: Canvas position of the hex centre.
    """

    label: str
    position: HexCoord
    center: PixelPoint

    def outline(self, layout: HexLayout) -> list[PixelPoint]:
        """Hex corners in canvas space, used for the hover highlight."""
        return [self.center + vertex for vertex in hex_vertices(layout)]


class DrawableRegistry:
    """Ordered handle → drawable mapping.

    Any object may be attached; the registry never inspects it.
    """

    def __init__(self) -> None:
        self._drawables: dict[int, tuple[Any, Optional[HexCoord]]] = {}
        self._next_handle = itertools.count(1)

    def attach(self, drawable: Any, position: Optional[HexCoord] = None) -> int:
        """Register a drawable, optionally anchored to a hex. Returns its handle."""
        handle = next(self._next_handle)
        self._drawables[handle] = (drawable, position)
        return handle

    def detach(self, handle: int) -> None:
        """Unregister a drawable.

        Raises:
            KeyError: The handle is not attached.
        """
        if handle not in self._drawables:
            raise KeyError(f"Drawable handle {handle} is not attached")
        del self._drawables[handle]

    def get(self, handle: int) -> Any:
        """Look up a drawable by handle (None if detached)."""
        entry = self._drawables.get(handle)
        return entry[0] if entry else None

    def at(self, position: HexCoord) -> list[Any]:
        """Drawables anchored to a hex, in attach order."""
        return [d for d, pos in self._drawables.values() if pos == position]

    def __iter__(self) -> Iterator[Any]:
        return (d for d, _ in self._drawables.values())

    def __len__(self) -> int:
        return len(self._drawables)

    def __contains__(self, handle: object) -> bool:
        return handle in self._drawables
