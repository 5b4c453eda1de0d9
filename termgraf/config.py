"""
Configuration — Dataclasses for plot and series settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .colors import AnsiColor

# sign + dot + 'e' + exponent sign + 3 exponent digits
LABEL_OVERHEAD = 7


class AutoScaleMode(Enum):
    """Y-axis scaling behavior."""
    FIXED = "fixed"          # Use user-defined y_min/y_max
    AUTO = "auto"            # Fit to visible data each frame
    AUTO_EXPAND = "expand"   # Only expand range, never shrink


class AxisMode(Enum):
    """What happens to chart column 0."""
    RESERVED = "reserved"    # Column 0 is the axis, data starts at column 1
    OVERLAY = "overlay"      # Axis drawn first, data drawn over it from column 0
    NONE = "none"            # No axis column, every column holds data


@dataclass
class SeriesConfig:
    """Visual configuration for a single data series."""
    label: str = ""
    color: AnsiColor = AnsiColor.DEFAULT
    # Per-series bounds override the shared chart range
    y_min: Optional[float] = None
    y_max: Optional[float] = None

    @property
    def bounds(self) -> Optional[tuple[float, float]]:
        if self.y_min is None or self.y_max is None:
            return None
        return (self.y_min, self.y_max)


@dataclass
class PlotConfig:
    """
    Master configuration for the terminal plot.

    Layout diagram:
    ┌────────────────────────── width ──────────────────────────┐
    │    title                                    (2 lines)     │
    │ <-- labels --> ┤                                          │
    │   digits + 8   ┤         CHART AREA                       │
    │                ┤      (plot_rows × plot_cols)             │
    │                ┼                                          │
    │    now=... avg=... std=... nans=...         (2 lines)     │
    └───────────────────────────────────────────────────────────┘
    """

    # ── Dimensions (terminal cells) ──
    width: int = 80
    height: int = 24

    # ── Y-axis ──
    y_min: float = 0.0
    y_max: float = 100.0
    auto_scale: AutoScaleMode = AutoScaleMode.AUTO
    axis: AxisMode = AxisMode.OVERLAY

    # ── Labels ──
    digits: int = 6

    # ── Visual ──
    title: str = ""
    theme: str = "default"           # "default", "bright", "mono", or custom
    show_stats: bool = False
    color: bool = True

    # ── Loop ──
    batch: bool = False               # render once, at end of input
    min_update_interval: float = 0.0  # seconds between redraws, 0 = every line

    # ── Computed properties ──
    @property
    def header_lines(self) -> int:
        return 2 if self.title else 0

    @property
    def footer_lines(self) -> int:
        return 2 if self.show_stats else 0

    @property
    def label_width(self) -> int:
        return self.digits + LABEL_OVERHEAD

    @property
    def plot_rows(self) -> int:
        return self.height - self.header_lines - self.footer_lines

    @property
    def plot_cols(self) -> int:
        # 1 = space between label and chart
        return self.width - self.label_width - 1

    @property
    def buffer_size(self) -> int:
        """Samples kept per series: one per data column."""
        if self.axis == AxisMode.RESERVED:
            return self.plot_cols - 1
        return self.plot_cols
