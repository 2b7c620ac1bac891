"""Per-frame numeric interpolation for card values."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

log = logging.getLogger(__name__)


class ValueAnimator:
    """
    Drives a value from `start` to `end` over a fixed duration.

    Each frame computes progress = min(elapsed / duration, 1) and hands the
    interpolated value to a callback, then sleeps one frame interval. The
    final frame always delivers exactly `end`.

    Args:
        duration_ms: Total animation time in milliseconds (0 = single final frame)
        frame_rate: Frames per second
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(
        self,
        duration_ms: float = 1500,
        frame_rate: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {duration_ms}")
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {frame_rate}")
        self.duration = duration_ms / 1000.0
        self.frame_interval = 1.0 / frame_rate
        self.clock = clock

    async def animate(
        self,
        start: float,
        end: float,
        on_frame: Callable[[float], None],
        is_current: Optional[Callable[[], bool]] = None,
    ) -> int:
        """
        Run the animation.

        Args:
            start: Value shown on the first frame
            end: Target value
            on_frame: Called with the interpolated value on every frame
            is_current: Checked before each frame; returning False stops the
                animation without writing again

        Returns:
            Number of frames written
        """
        frames = 0
        started = None

        while True:
            if is_current is not None and not is_current():
                log.debug(f"Animation to {end} superseded after {frames} frames")
                return frames

            # The clock starts on the first frame, so that frame is exactly `start`
            now = self.clock()
            if started is None:
                started = now
            progress = self._progress(now - started)
            value = end if progress >= 1 else start + progress * (end - start)
            on_frame(value)
            frames += 1

            if progress >= 1:
                return frames
            await asyncio.sleep(self.frame_interval)

    def _progress(self, elapsed: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(elapsed / self.duration, 1.0)
