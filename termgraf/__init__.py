"""
termgraf — Streaming terminal line charts
=========================================

Quick Start:
    seq 0 100 | awk '{print sin($1/5)}' | termgraf --stats

    from termgraf import TermPlot, PlotConfig, SeriesConfig, AnsiColor

    plot = TermPlot(PlotConfig(width=80, height=20, title="Sensor"))
    plot.add_series("temp", SeriesConfig(label="Temperature", color=AnsiColor.RED))
    plot.run(sensor_lines(), sys.stdout)

Lower level:
    from termgraf import Chart, ChartLine

    chart = Chart.create(rows=10, cols=40)
    chart.draw(ChartLine.of_seq(values).with_color(AnsiColor.BLUE))
    print(chart.render())
"""

__version__ = "0.2.0"

# Core class
from .core import TermPlot, parse_fields

# Configuration
from .config import PlotConfig, SeriesConfig, AutoScaleMode, AxisMode

# Data
from .series import StatsRingBuffer

# Rasterization
from .chart import Chart, ChartLine, ChartPoint, combine_points, plot
from .segments import Segment, combine_segments, glyph
from .quantize import lerp, quantize, widen_range

# Colors & themes
from .colors import (
    AnsiColor, Theme, DEFAULT_THEME, BRIGHT_THEME, MONO_THEME,
    additive_mix, subtractive_mix, overlap_color,
    get_theme, register_theme,
)

# Errors
from .errors import TermGrafError, InvalidCapacity, EmptyBuffer, PlotTooSmall

# Frame timing
from .frame_timer import FrameTimer, TimingStrategy

# Terminal
from .terminal import Terminal, PlatformInfo, terminal_size

__all__ = [
    # Core
    "TermPlot", "parse_fields",
    # Config
    "PlotConfig", "SeriesConfig", "AutoScaleMode", "AxisMode",
    # Data
    "StatsRingBuffer",
    # Rasterization
    "Chart", "ChartLine", "ChartPoint", "combine_points", "plot",
    "Segment", "combine_segments", "glyph",
    "lerp", "quantize", "widen_range",
    # Colors
    "AnsiColor", "Theme", "DEFAULT_THEME", "BRIGHT_THEME", "MONO_THEME",
    "additive_mix", "subtractive_mix", "overlap_color",
    "get_theme", "register_theme",
    # Errors
    "TermGrafError", "InvalidCapacity", "EmptyBuffer", "PlotTooSmall",
    # Frame timing
    "FrameTimer", "TimingStrategy",
    # Terminal
    "Terminal", "PlatformInfo", "terminal_size",
]
