"""Frame loop: asyncio-based fixed-rate frame tick.

Responsibilities:
- Advance a monotonically increasing frame counter
- Call every registered frame callback with the new frame number

The frame loop drives cosmetic animation only (the border dash offset).
It never mutates territory state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from hexclaim.util import constants

log = logging.getLogger(__name__)

FrameCallback = Callable[[int], None]


class FrameLoop:
    """Fixed-rate frame tick loop.

    Args:
        fps: Target frames per second.
    """

    def __init__(self, fps: int = constants.FPS) -> None:
        self._callbacks: list[FrameCallback] = []
        self._running = False
        self._frame_interval = 1.0 / fps
        self.frame: int = 0

        # --- Monitoring counters ---
        self.started_at: float = 0.0
        self.last_frame_duration_ms: float = 0.0
        self.avg_frame_duration_ms: float = 0.0
        self._frame_duration_sum: float = 0.0
        self._frames_run: int = 0

    def register(self, callback: FrameCallback) -> None:
        """Call `callback(frame)` on every frame."""
        self._callbacks.append(callback)

    def unregister(self, callback: FrameCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def run(self, max_frames: int | None = None) -> None:
        """Start the frame loop. Runs until stop() is called or `max_frames` ran."""
        self._running = True
        self.started_at = time.monotonic()
        run_frames = 0
        while self._running:
            t0 = time.monotonic()
            self.step()
            elapsed_ms = (time.monotonic() - t0) * 1000

            self._frames_run += 1
            self.last_frame_duration_ms = elapsed_ms
            self._frame_duration_sum += elapsed_ms
            self.avg_frame_duration_ms = self._frame_duration_sum / self._frames_run

            run_frames += 1
            if max_frames is not None and run_frames >= max_frames:
                break
            await asyncio.sleep(self._frame_interval)
        self._running = False
        log.debug("Frame loop stopped at frame %d", self.frame)

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the loop started."""
        if self.started_at == 0.0:
            return 0.0
        return time.monotonic() - self.started_at

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Signal the frame loop to stop."""
        self._running = False

    def step(self) -> None:
        """Advance one frame and notify all callbacks."""
        self.frame += 1
        for callback in list(self._callbacks):
            callback(self.frame)
