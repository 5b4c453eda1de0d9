"""
Series — Fixed-capacity ring buffer with O(1) push and running statistics.

Ring Buffer Mechanism:
======================
Fixed-size numpy array plus a parallel liveness mask. ``front`` points at
the oldest live slot and ``back`` at the next slot to write. When the
buffer is full the slot under ``back`` is live, so it is evicted first.

    values: [ d  e  f  g  a  b  c ]
    live:   [ 1  1  1  1  1  1  1 ]
                          ↑ front = back = 4
    Logical order: a b c d e f g

Tombstones:
    A slot is empty when its mask bit is False, regardless of what the
    value array holds there. NaN is never used to detect emptiness.

Dropped samples:
    None, NaN, ±inf and anything float() rejects never occupy a slot.
    They bump ``dropped_count`` and leave the window untouched, so the
    chart always shows the last ``capacity`` real samples.

Statistics:
    Sum and sum of squares are maintained on every enqueue/dequeue, so
    avg / variance / std are O(1). min / max scan the live window.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional

import numpy as np

from .errors import EmptyBuffer, InvalidCapacity


def clean_sample(value) -> Optional[float]:
    """Convert a raw sample to a finite float, or None if it is a sentinel."""
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        clean = float(value)
    except (ValueError, TypeError):
        return None
    if math.isnan(clean) or math.isinf(clean):
        return None
    return clean


class StatsRingBuffer:
    """A FIFO window of real samples with incremental statistics."""

    __slots__ = ('_buffer', '_live', '_size', '_fill', '_front', '_back',
                 '_count', '_running_sum', '_running_sq_sum', '_dropped')

    def __init__(self, capacity: int, fill_value: float = 0.0):
        if (isinstance(capacity, bool)
                or not isinstance(capacity, (int, np.integer))
                or capacity <= 0):
            raise InvalidCapacity(
                f"buffer capacity must be a strictly positive integer, got {capacity!r}"
            )
        self._size = int(capacity)
        self._fill = float(fill_value)
        self._buffer = np.full(self._size, self._fill, dtype=np.float64)
        self._live = np.zeros(self._size, dtype=bool)
        self._front = 0
        self._back = 0
        self._count = 0

        self._running_sum = 0.0
        self._running_sq_sum = 0.0
        self._dropped = 0

    @classmethod
    def create(cls, capacity: int, fill_value: float = 0.0) -> 'StatsRingBuffer':
        return cls(capacity, fill_value)

    # ──────────────────────────────────────────────────────
    # Queue operations
    # ──────────────────────────────────────────────────────
    def enqueue(self, value) -> bool:
        """
        Push a sample. Returns True if it was stored, False if dropped.

        A full buffer evicts its oldest value first. Sentinels only bump
        the dropped counter.
        """
        clean = clean_sample(value)
        if clean is None:
            self._dropped += 1
            return False

        if self._live[self._back]:
            self.dequeue()

        self._buffer[self._back] = clean
        self._live[self._back] = True
        self._back = (self._back + 1) % self._size
        self._count += 1
        self._running_sum += clean
        self._running_sq_sum += clean * clean
        return True

    push = enqueue

    def dequeue(self) -> float:
        """Remove and return the oldest live value."""
        if self._count == 0:
            raise EmptyBuffer("cannot dequeue from an empty buffer")

        x = float(self._buffer[self._front])
        self._buffer[self._front] = self._fill
        self._live[self._front] = False
        self._front = (self._front + 1) % self._size
        self._count -= 1

        if self._count == 0:
            # Nothing left to sum, so drop any accumulated rounding error
            self._running_sum = 0.0
            self._running_sq_sum = 0.0
        else:
            self._running_sum -= x
            self._running_sq_sum -= x * x
        return x

    def clear(self, reset_dropped: bool = False) -> None:
        """Reset all data. The dropped counter survives unless asked."""
        self._buffer[:] = self._fill
        self._live[:] = False
        self._front = 0
        self._back = 0
        self._count = 0
        self._running_sum = 0.0
        self._running_sq_sum = 0.0
        if reset_dropped:
            self._dropped = 0

    # ──────────────────────────────────────────────────────
    # Views
    # ──────────────────────────────────────────────────────
    def __len__(self) -> int:
        return self._count

    def length(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[float]:
        """Live values, oldest first. Each call starts a fresh pass."""
        for i in range(self._count):
            yield float(self._buffer[(self._front + i) % self._size])

    def to_array(self) -> np.ndarray:
        """Return live data in chronological order (oldest → newest)."""
        idx = (self._front + np.arange(self._count)) % self._size
        return self._buffer[idx]

    def __repr__(self) -> str:
        body = "; ".join(f"{x:g}" for x in self)
        return f"StatsRingBuffer([{body}], capacity={self._size})"

    @property
    def capacity(self) -> int:
        return self._size

    @property
    def latest(self) -> float:
        """Most recently stored value."""
        if self._count == 0:
            raise EmptyBuffer("buffer holds no values")
        return float(self._buffer[(self._back - 1) % self._size])

    @property
    def dropped_count(self) -> int:
        """Number of sentinel samples seen since creation."""
        return self._dropped

    @property
    def sum(self) -> float:
        return self._running_sum

    # ──────────────────────────────────────────────────────
    # Statistics
    # ──────────────────────────────────────────────────────
    def _require_data(self) -> None:
        if self._count == 0:
            raise EmptyBuffer("statistics requested on an empty buffer")

    def min(self) -> float:
        self._require_data()
        return float(self.to_array().min())

    def max(self) -> float:
        self._require_data()
        return float(self.to_array().max())

    def min_max(self) -> tuple[float, float]:
        self._require_data()
        data = self.to_array()
        return float(data.min()), float(data.max())

    def avg(self) -> float:
        self._require_data()
        return self._running_sum / self._count

    def variance(self) -> float:
        """Sample variance. NaN when only one value is live."""
        self._require_data()
        n = self._count
        if n < 2:
            return math.nan
        var = (self._running_sq_sum - self._running_sum * self._running_sum / n) / (n - 1)
        return max(0.0, var)

    def std_dev(self) -> float:
        return math.sqrt(self.variance())

    std = std_dev
