"""
Quantizer — Linear maps between value ranges and chart rows.

Data values go through ``lerp((lo, hi), (0, rows - 1), y)`` and are rounded
to a row index. Axis labels use the same formula in the other direction.
Every function here accepts scalars or numpy arrays.
"""

from __future__ import annotations

import numpy as np


def lerp(in_range: tuple[float, float], out_range: tuple[float, float], x):
    """
    Linearly interpolate ``x`` from ``in_range`` onto ``out_range``.

    Produces inf/NaN when ``in_range`` is degenerate; run the range through
    widen_range() first.
    """
    in_min, in_max = in_range
    out_min, out_max = out_range
    return (x - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def widen_range(lo: float, hi: float) -> tuple[float, float]:
    """Widen a zero-width range by ±1 so it can be interpolated."""
    if lo == hi:
        return lo - 1.0, hi + 1.0
    return lo, hi


def data_range(*series) -> tuple[float, float]:
    """
    Global (min, max) over the finite values of every series, widened if
    degenerate. All-gap input gives (-1, 1).
    """
    finite = [np.asarray(s, dtype=np.float64) for s in series]
    finite = [s[np.isfinite(s)] for s in finite]
    finite = [s for s in finite if s.size]
    if not finite:
        return widen_range(0.0, 0.0)
    lo = min(float(s.min()) for s in finite)
    hi = max(float(s.max()) for s in finite)
    return widen_range(lo, hi)


def quantize(values, value_range: tuple[float, float], rows: int) -> np.ndarray:
    """
    Map each value to its nearest row index (ties to even).

    Values beyond the range land one row outside the grid, at -1 or
    ``rows``. Non-finite values (gaps) inherit the previous row, or the
    middle row when they come first.
    """
    data = np.asarray(values, dtype=np.float64)
    lo, hi = widen_range(*value_range)
    finite = np.isfinite(data)
    with np.errstate(over='ignore', invalid='ignore'):
        scaled = lerp((lo, hi), (0.0, rows - 1.0), np.where(finite, data, lo))
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=float(rows), neginf=-1.0)
    rounded = np.rint(np.clip(scaled, -1.0, float(rows))).astype(np.int64)

    # Forward-fill gaps with the index of the last real sample
    last = np.where(finite, np.arange(data.shape[0]), -1)
    last = np.maximum.accumulate(last)
    return np.where(last >= 0, rounded[np.maximum(last, 0)], rows // 2)


def row_values(rows: int, value_range: tuple[float, float]) -> np.ndarray:
    """Data value shown at each row, bottom (row 0) to top."""
    lo, hi = widen_range(*value_range)
    return lerp((0.0, rows - 1.0), (lo, hi), np.arange(rows, dtype=np.float64))
