"""
FrameTimer — Redraw pacing for the read-render loop.

The loop blocks on input, so a fast producer can push thousands of lines
per second. Redrawing the whole chart for each of them is wasted work: the
terminal cannot show more than a few dozen frames per second anyway.

Two strategies:
  EVERY_LINE — redraw after every input line (default, like a pipe-fed plot)
  THROTTLED  — redraw only if ``min_interval`` seconds have passed since
               the previous frame; samples in between are still buffered,
               they just do not trigger a frame

The end-of-stream frame is always drawn by the caller regardless of pacing.
"""

from __future__ import annotations

import time
from collections import deque
from enum import Enum, auto
from typing import Callable, Optional


class TimingStrategy(Enum):
    """Redraw pacing strategy."""
    EVERY_LINE = auto()
    THROTTLED = auto()


class FrameTimer:
    """
    Decides when to redraw and measures the achieved redraw rate.

    Usage:
        timer = FrameTimer(min_interval=1 / 30)

        for line in stream:
            push(line)
            if timer.due():
                draw()
                timer.tick()
    """

    def __init__(
        self,
        min_interval: float = 0.0,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._clock = clock
        self._min_interval = max(0.0, min_interval)
        self._last_tick: Optional[float] = None
        self._frame_times: deque[float] = deque(maxlen=120)
        self._fps = 0.0

    @property
    def strategy(self) -> TimingStrategy:
        if self._min_interval > 0:
            return TimingStrategy.THROTTLED
        return TimingStrategy.EVERY_LINE

    def due(self) -> bool:
        """True if a frame drawn now would respect the pacing."""
        if self.strategy == TimingStrategy.EVERY_LINE or self._last_tick is None:
            return True
        return self._clock() - self._last_tick >= self._min_interval

    def tick(self) -> None:
        """Record that a frame was just drawn."""
        now = self._clock()
        self._last_tick = now
        self._frame_times.append(now)

        if len(self._frame_times) >= 2:
            elapsed = now - self._frame_times[0]
            if elapsed > 0:
                self._fps = (len(self._frame_times) - 1) / elapsed

    @property
    def fps(self) -> float:
        """Current measured redraw rate (sliding window average)."""
        return self._fps

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @min_interval.setter
    def min_interval(self, value: float) -> None:
        self._min_interval = max(0.0, value)
