"""
Chart — Rasterizes series into a grid of box-drawing cells.

Architecture:
=============
    ChartLine(data, color, bounds)
        │  quantize()                 one row index per column
        ▼
    heights[col], prev[col]  ──► segment masks (rows × cols, numpy)
        │                           RIGHT at the point itself
        │                           LEFT/UP/DOWN connectors to the
        │                           previous column's height
        ▼
    _segments |= mask         _colors = overlap(_colors, line.color)
        │
        ▼
    render()  ──► rows top → bottom, glyph lookup, ANSI color runs

Grid layout: row 0 is the bottom of the chart, column 0 is the Y-axis
column unless the chart was created with AxisMode.NONE.

Example (descending then rising):

    ┤──┐   ┌─
    ┤  │   │
    ┤  └───┘
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Sequence, Union

import numpy as np

from .colors import AnsiColor, colorize, overlap_color, overlap_colors
from .config import AxisMode
from .errors import PlotTooSmall
from .quantize import data_range, quantize, widen_range
from .segments import ALL_SEGMENTS, AXIS, GLYPH_TABLE, Segment, combine_segments, glyph


class ChartPoint(NamedTuple):
    """Contents of one chart cell."""
    segments: Segment = Segment.EMPTY
    color: AnsiColor = AnsiColor.DEFAULT

    def __str__(self) -> str:
        return colorize(self.color, glyph(self.segments))


def combine_points(lhs: ChartPoint, rhs: ChartPoint) -> ChartPoint:
    """Overlay two cells: union of segments, colors mixed so crossings stay visible."""
    return ChartPoint(
        combine_segments(lhs.segments, rhs.segments),
        overlap_color(lhs.color, rhs.color),
    )


@dataclass(frozen=True, eq=False)
class ChartLine:
    """A series to be drawn: values, color and optional fixed bounds."""
    data: np.ndarray = field(default_factory=lambda: np.empty(0))
    color: AnsiColor = AnsiColor.DEFAULT
    y_min: float = -math.inf
    y_max: float = math.inf

    def __post_init__(self):
        object.__setattr__(self, 'data', np.asarray(self.data, dtype=np.float64).ravel())

    @classmethod
    def of_seq(cls, data) -> 'ChartLine':
        """Build a line from any iterable of numbers; None marks a gap."""
        if isinstance(data, np.ndarray):
            return cls(data)
        return cls(np.array([math.nan if y is None else y for y in data], dtype=np.float64))

    def with_color(self, color: AnsiColor) -> 'ChartLine':
        return replace(self, color=color)

    def with_bounds(self, bounds: tuple[float, float]) -> 'ChartLine':
        lo, hi = bounds
        return replace(self, y_min=lo, y_max=hi)

    def __len__(self) -> int:
        return self.data.shape[0]


class Chart:
    """A mutable rows × cols grid of segments and colors."""

    __slots__ = ('_rows', '_cols', '_axis', '_axis_color', '_segments', '_colors')

    def __init__(self, rows: int, cols: int, axis: AxisMode = AxisMode.OVERLAY,
                 axis_color: AnsiColor = AnsiColor.DEFAULT):
        min_cols = 2 if axis == AxisMode.RESERVED else 1
        if rows < 1 or cols < min_cols:
            raise PlotTooSmall(f"cannot create a {rows} x {cols} chart")
        self._rows = int(rows)
        self._cols = int(cols)
        self._axis = axis
        self._axis_color = axis_color
        self._segments = np.zeros((self._rows, self._cols), dtype=np.uint8)
        self._colors = np.full((self._rows, self._cols), int(AnsiColor.DEFAULT), dtype=np.uint8)
        self.clear()

    @classmethod
    def create(cls, rows: int, cols: int, axis: AxisMode = AxisMode.OVERLAY,
               axis_color: AnsiColor = AnsiColor.DEFAULT) -> 'Chart':
        """Create an empty chart with fixed dimensions."""
        return cls(rows, cols, axis, axis_color)

    # ──────────────────────────────────────────────────────
    # Grid access
    # ──────────────────────────────────────────────────────
    @property
    def size(self) -> tuple[int, int]:
        return self._rows, self._cols

    @property
    def axis(self) -> AxisMode:
        return self._axis

    @property
    def data_offset(self) -> int:
        """First column that holds data."""
        return 1 if self._axis == AxisMode.RESERVED else 0

    @property
    def data_cols(self) -> int:
        """How many values of a series fit in the chart."""
        return self._cols - self.data_offset

    @property
    def segments(self) -> np.ndarray:
        view = self._segments.view()
        view.flags.writeable = False
        return view

    @property
    def colors(self) -> np.ndarray:
        view = self._colors.view()
        view.flags.writeable = False
        return view

    def get(self, row: int, col: int) -> ChartPoint:
        return ChartPoint(Segment(int(self._segments[row, col])),
                          AnsiColor(int(self._colors[row, col])))

    def set(self, row: int, col: int, point: ChartPoint) -> None:
        self._segments[row, col] = int(point.segments) & int(ALL_SEGMENTS)
        self._colors[row, col] = int(point.color)

    def clear(self) -> None:
        """Blank every cell, then redraw the axis column."""
        self._segments[:] = 0
        self._colors[:] = int(AnsiColor.DEFAULT)
        if self._axis != AxisMode.NONE:
            self._segments[:, 0] = int(AXIS)
            self._colors[:, 0] = int(self._axis_color)

    # ──────────────────────────────────────────────────────
    # Rasterization
    # ──────────────────────────────────────────────────────
    def draw(self, lines: Union[ChartLine, Sequence[ChartLine]],
             y_range: Optional[tuple[float, float]] = None) -> None:
        """
        Paint lines over the chart in order, all against one shared range.

        The shared range is ``y_range`` if given, else the min/max of every
        line's visible finite values. A line's own finite bounds override
        the shared ones.
        """
        if isinstance(lines, ChartLine):
            lines = [lines]
        n = self.data_cols
        lines = [line for line in lines if len(line) > 0]
        if not lines:
            return

        if y_range is None:
            shared = data_range(*(line.data[:n] for line in lines))
        else:
            shared = widen_range(*y_range)

        for line in lines:
            lo = line.y_min if math.isfinite(line.y_min) else shared[0]
            hi = line.y_max if math.isfinite(line.y_max) else shared[1]
            self._draw_line(line.data[:n], line.color, widen_range(lo, hi))

    def _draw_line(self, data: np.ndarray, color: AnsiColor,
                   value_range: tuple[float, float]) -> None:
        n = data.shape[0]
        gaps = ~np.isfinite(data)
        heights = quantize(data, value_range, self._rows)
        prev = np.concatenate((heights[:1], heights[:-1]))

        r = np.arange(self._rows)[:, None]
        h = heights[None, :]
        p = prev[None, :]

        # The data point itself: RIGHT, or a lone LEFT for gaps
        here = r == h
        mask = np.where(here & ~gaps, int(Segment.RIGHT), 0)
        mask |= np.where(here & gaps, int(Segment.LEFT), 0)

        # Without an overlaid axis the first column needs its own lead-in,
        # otherwise it would be a bare RIGHT with no glyph (so ─ rather than
        # RIGHT alone when column 0 is reserved or absent)
        first = int(heights[0])
        if self._axis != AxisMode.OVERLAY and not gaps[0] and 0 <= first < self._rows:
            mask[first, 0] |= int(Segment.LEFT)

        # Connectors back to the previous column
        connect = ~gaps
        connect[0] = False
        connect = connect[None, :]
        desc = connect & (p > h)
        asc = connect & (p < h)
        mask |= np.where(connect & (r == p), int(Segment.LEFT), 0)
        mask |= np.where(desc & (p >= r) & (r > h), int(Segment.DOWN), 0)
        mask |= np.where(desc & (p > r) & (r >= h), int(Segment.UP), 0)
        mask |= np.where(asc & (p <= r) & (r < h), int(Segment.UP), 0)
        mask |= np.where(asc & (p < r) & (r <= h), int(Segment.DOWN), 0)

        off = self.data_offset
        drawn = mask != 0
        seg_region = self._segments[:, off:off + n]
        col_region = self._colors[:, off:off + n]
        mixed = overlap_colors(col_region, color)
        col_region[drawn] = mixed[drawn]
        seg_region |= mask.astype(np.uint8)

    # ──────────────────────────────────────────────────────
    # Text output
    # ──────────────────────────────────────────────────────
    def render(self, prefixes: Optional[Sequence[str]] = None,
               suffixes: Optional[Sequence[str]] = None,
               color: bool = True) -> str:
        """
        Plot the chart to text, top row first.

        ``prefixes`` and ``suffixes`` are per-row strings indexed from the
        bottom row (index 0) up. Missing entries are empty.
        """
        out = []
        for row in range(self._rows - 1, -1, -1):
            glyphs = GLYPH_TABLE[self._segments[row] & int(ALL_SEGMENTS)]
            if color:
                runs = itertools.groupby(zip(self._colors[row], glyphs), key=lambda cell: cell[0])
                body = ''.join(colorize(int(c), ''.join(g for _, g in cells)) for c, cells in runs)
            else:
                body = ''.join(glyphs)
            out.append(_row_text(prefixes, row) + body + _row_text(suffixes, row))
        return '\n'.join(out)

    def __str__(self) -> str:
        return self.render()


def _row_text(texts: Optional[Sequence[str]], row: int) -> str:
    if texts is None or row >= len(texts):
        return ''
    return texts[row]


def plot(rows: int, cols: int, data, color: AnsiColor = AnsiColor.DEFAULT,
         axis: AxisMode = AxisMode.OVERLAY) -> Chart:
    """One-shot helper: a fresh chart with a single series drawn on it."""
    chart = Chart(rows, cols, axis)
    chart.draw(ChartLine.of_seq(data).with_color(color))
    return chart
