"""Border overlay: the dashed outline around the claimed territory.

Only the hex edges of border hexes that face unregistered space are
stroked. The dash offset is advanced by the frame loop; it is purely
cosmetic and never touches the territory state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hexclaim.models.hex import DIRECTIONS
from hexclaim.util import constants
from hexclaim.util.hex_math import HexLayout, PixelPoint, hex_vertices

if TYPE_CHECKING:
    from hexclaim.loaders.territory_config_loader import TerritoryConfig
    from hexclaim.models.territory import TerritoryState

Segment = tuple[PixelPoint, PixelPoint]


def border_edges(state: TerritoryState, layout: HexLayout) -> list[Segment]:
    """Canvas segments outlining the territory.

    For each border hex, edge i (vertex i → vertex i + 1) is included when
    the neighbor in direction i is not registered.
    """
    vertices = hex_vertices(layout)
    segments: list[Segment] = []
    for position in sorted(state.border):
        center = position.to_pixel(layout)
        for index, direction in enumerate(DIRECTIONS):
            if not state.is_occupied(position + direction):
                segments.append((
                    center + vertices[index],
                    center + vertices[(index + 1) % len(vertices)],
                ))
    return segments


class BorderOverlay:
    """Drawable for the territory outline plus its dash animation.

    Args:
        state: Territory state read at draw time.
        layout: Hex pixel dimensions.
        fps: Frames per second of the driving frame loop.
    """

    def __init__(
        self,
        state: TerritoryState,
        layout: HexLayout,
        fps: int = constants.FPS,
        dash_length: float = constants.DASH_LENGTH,
        dash_space: float = constants.DASH_SPACE,
        dash_cycle_seconds: float = constants.DASH_CYCLE_SECONDS,
        line_width: float = constants.LINE_WIDTH,
    ) -> None:
        self._state = state
        self._layout = layout
        self.dash_length = dash_length
        self.dash_space = dash_space
        self.line_width = line_width
        self.dash_speed = (dash_length + dash_space) / fps / dash_cycle_seconds
        self.dash_offset: float = 0.0

    @classmethod
    def from_config(cls, state: TerritoryState, config: TerritoryConfig) -> BorderOverlay:
        return cls(
            state,
            config.layout,
            fps=config.fps,
            dash_length=config.dash_length,
            dash_space=config.dash_space,
            dash_cycle_seconds=config.dash_cycle_seconds,
            line_width=config.line_width,
        )

    @property
    def dash_pattern(self) -> tuple[float, float]:
        return (self.dash_length, self.dash_space)

    def on_frame(self, frame: int) -> None:
        """Frame-loop callback: move the dashes along the outline."""
        self.dash_offset = (frame * self.dash_speed) % (self.dash_length + self.dash_space)

    def segments(self) -> list[Segment]:
        """Current outline segments."""
        return border_edges(self._state, self._layout)
