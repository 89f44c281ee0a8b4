"""Territory constants: claim radius, layout, border animation.

Defaults for every tunable in config/territory.yaml, centralized here.
"""

# -- Territory -----------------------------------------------------------

CLAIM_RADIUS: int = 2
"""Radius of the disk a claimant holds; its inner disk has radius CLAIM_RADIUS - 1."""

# -- Layout --------------------------------------------------------------

HEX_SIZE: float = 24.0
"""Corner radius of a regular hex in canvas pixels."""

# -- Frame timing --------------------------------------------------------

FPS: int = 60
"""Frames per second driven by the frame loop."""

# -- Border stroke -------------------------------------------------------

DASH_LENGTH: float = 6.0
DASH_SPACE: float = 4.0
LINE_WIDTH: float = 4.0

DASH_CYCLE_SECONDS: float = 0.8
"""Time for the dash pattern to travel one full dash + gap."""
