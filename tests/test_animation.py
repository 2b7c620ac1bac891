"""Tests for per-frame value interpolation."""
import pytest

from livedash.dashboard.animation import ValueAnimator


class FakeClock:
    """Returns the queued timestamps in order, then sticks on the last one."""

    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        if len(self.times) > 1:
            return self.times.pop(0)
        return self.times[0]


class TestValueAnimator:
    @pytest.mark.asyncio
    async def test_interpolates_per_frame(self):
        # one clock reading per frame; the first one starts the animation
        animator = ValueAnimator(duration_ms=1000, frame_rate=1000, clock=FakeClock(0, 0.25, 0.5, 1.2))
        frames = []

        written = await animator.animate(0, 100, frames.append)

        assert frames == [0, 25, 50, 100]
        assert written == 4

    @pytest.mark.asyncio
    async def test_last_frame_is_exact_target(self):
        animator = ValueAnimator(duration_ms=1000, frame_rate=1000, clock=FakeClock(0, 0.3, 0.999, 1.0))
        frames = []

        await animator.animate(0, 0.1, frames.append)

        assert frames[-1] == 0.1
        assert all(a <= b for a, b in zip(frames, frames[1:]))

    @pytest.mark.asyncio
    async def test_first_frame_is_exact_start_on_a_running_clock(self):
        # The clock is already far along when animate() is called
        animator = ValueAnimator(duration_ms=1000, frame_rate=1000, clock=FakeClock(7.0, 7.5, 8.0))
        frames = []

        await animator.animate(0, 50000, frames.append)

        assert frames == [0, 25000, 50000]

    @pytest.mark.asyncio
    async def test_zero_duration_is_single_frame(self):
        frames = []
        await ValueAnimator(duration_ms=0).animate(0, 42, frames.append)
        assert frames == [42]

    @pytest.mark.asyncio
    async def test_negative_target(self):
        animator = ValueAnimator(duration_ms=1000, frame_rate=1000, clock=FakeClock(0, 0.5, 1.0))
        frames = []

        await animator.animate(0, -3.5, frames.append)

        assert frames == [0, -1.75, -3.5]

    @pytest.mark.asyncio
    async def test_stops_when_superseded(self):
        animator = ValueAnimator(duration_ms=1000, frame_rate=1000, clock=FakeClock(0, 0.1, 0.2, 0.3))
        frames = []
        checks = iter([True, True, False])

        written = await animator.animate(0, 100, frames.append, lambda: next(checks))

        assert written == 2
        assert len(frames) == 2
        assert 100 not in frames

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            ValueAnimator(duration_ms=-1)
        with pytest.raises(ValueError):
            ValueAnimator(frame_rate=0)
