"""
TermPlot Core — Main class that orchestrates all modules.

This is the primary public interface. It coordinates:
  - Series management (one StatsRingBuffer per series)
  - Range tracking (fixed, auto, auto-expand)
  - Chart (rasterization + text rendering)
  - Labels (Y axis, title, statistics)
  - FrameTimer (redraw pacing)
  - Terminal (cursor and screen control)

Per input line:
    parse → enqueue into each buffer → recompute range → clear chart →
    draw every series → render with labels → write frame at cursor home
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence, TextIO

from .chart import Chart, ChartLine
from .colors import AnsiColor, Theme, get_theme
from .config import AutoScaleMode, PlotConfig, SeriesConfig
from .errors import PlotTooSmall
from .frame_timer import FrameTimer
from .labels import axis_labels, footer, header
from .quantize import widen_range
from .series import StatsRingBuffer, clean_sample
from .terminal import Terminal

logger = logging.getLogger(__name__)

_FIELD_SEPARATORS = re.compile(r"\s*[,;]\s*|\s+")


def parse_fields(line: str) -> list[Optional[float]]:
    """
    Split a line into numbers. Unparseable or empty fields become None, so
    ``1,,3`` keeps the middle field in place. A blank line has no fields.
    """
    line = line.strip()
    if not line:
        return []
    return [clean_sample(f) for f in _FIELD_SEPARATORS.split(line)]


class TermPlot:
    """
    Streaming terminal line chart.

    Quick Start:
        from termgraf import TermPlot, PlotConfig

        plot = TermPlot(PlotConfig(width=80, height=24, show_stats=True))
        dropped = plot.run(sys.stdin, sys.stdout)

    Manual Control:
        plot = TermPlot(config)
        plot.add_series("temp", SeriesConfig(label="Temperature"))

        for value in readings():
            plot.push("temp", value)
            print(plot.render_frame())
    """

    def __init__(self, config: Optional[PlotConfig] = None):
        self._config = config or PlotConfig()
        cfg = self._config

        if cfg.plot_rows < 2:
            raise PlotTooSmall(f"{cfg.width} x {cfg.height} plot region is not tall enough")
        if cfg.plot_cols < 2:
            raise PlotTooSmall(f"{cfg.width} x {cfg.height} plot region is not wide enough")

        self._theme = get_theme(cfg.theme)

        # Series storage
        self._series: dict[str, StatsRingBuffer] = {}
        self._series_config: dict[str, SeriesConfig] = {}
        self._series_order: list[str] = []

        # Sub-systems
        self._chart = Chart(cfg.plot_rows, cfg.plot_cols, cfg.axis, self._color(self._theme.axis))
        self._timer = FrameTimer(cfg.min_update_interval)

        # State
        self._y_range: Optional[tuple[float, float]] = None
        self._extent: Optional[tuple[float, float]] = None  # unwidened data bounds
        self._frames = 0

    # ──────────────────────────────────────────────────────
    # Series Management
    # ──────────────────────────────────────────────────────
    def add_series(self, name: str,
                   config: Optional[SeriesConfig] = None) -> 'TermPlot':
        """Add a data series. Returns self for chaining."""
        if name in self._series:
            raise KeyError(f"Series '{name}' already exists.")
        if config is None:
            colors = self._theme.series_colors
            idx = len(self._series) % len(colors)
            config = SeriesConfig(label=name, color=colors[idx])
        self._series[name] = StatsRingBuffer(self._config.buffer_size)
        self._series_config[name] = config
        self._series_order.append(name)
        return self

    def remove_series(self, name: str) -> 'TermPlot':
        """Remove a data series."""
        if name in self._series:
            del self._series[name]
            del self._series_config[name]
            self._series_order.remove(name)
        return self

    def series(self, name: str) -> StatsRingBuffer:
        if name not in self._series:
            raise KeyError(f"Series '{name}' not found. Use add_series() first.")
        return self._series[name]

    @property
    def series_names(self) -> list[str]:
        return list(self._series_order)

    def _ensure_series(self, count: int) -> None:
        """Create ``count`` default series when none were declared."""
        if self._series:
            return
        count = max(1, count)
        for i in range(count):
            self.add_series("y" if count == 1 else f"y{i + 1}")
        logger.info("Auto-created %d series: %s", count, ", ".join(self._series_order))

    # ──────────────────────────────────────────────────────
    # Data Update
    # ──────────────────────────────────────────────────────
    def push(self, name: str, value) -> bool:
        """Push one sample into a named series. False if it was dropped."""
        stored = self.series(name).enqueue(value)
        if not stored:
            logger.debug("Dropped sample %r for series '%s'", value, name)
        return stored

    def push_all(self, data: Mapping[str, object]) -> int:
        """Push samples for several series. Returns how many were dropped."""
        return sum(not self.push(name, value) for name, value in data.items())

    def push_row(self, values: Sequence[object]) -> int:
        """
        Push one value per series, in series order. Missing values count as
        dropped. Returns how many were dropped.

        A row with no fields before any series exists is ignored, so the
        first real line still decides the series count.
        """
        if not values and not self._series:
            logger.debug("Ignoring empty line before the first series")
            return 0
        self._ensure_series(len(values))
        if len(values) > len(self._series_order):
            logger.debug("Ignoring %d extra field(s)", len(values) - len(self._series_order))
        dropped = 0
        for i, name in enumerate(self._series_order):
            value = values[i] if i < len(values) else None
            dropped += not self.push(name, value)
        return dropped

    def push_line(self, line: str) -> int:
        """Parse an input line and push it. Returns how many fields were dropped."""
        return self.push_row(parse_fields(line))

    # ──────────────────────────────────────────────────────
    # Rendering
    # ──────────────────────────────────────────────────────
    @property
    def has_data(self) -> bool:
        return any(len(buf) > 0 for buf in self._series.values())

    def update_range(self) -> Optional[tuple[float, float]]:
        """Recompute the shared Y range. Auto modes give None until data arrives."""
        cfg = self._config
        if cfg.auto_scale == AutoScaleMode.FIXED:
            new_range = widen_range(cfg.y_min, cfg.y_max)
        else:
            bounds = [buf.min_max() for buf in self._series.values() if len(buf) > 0]
            if not bounds:
                return self._y_range
            lo = min(b[0] for b in bounds)
            hi = max(b[1] for b in bounds)
            if cfg.auto_scale == AutoScaleMode.AUTO_EXPAND and self._extent is not None:
                lo = min(lo, self._extent[0])
                hi = max(hi, self._extent[1])
            self._extent = (lo, hi)
            new_range = widen_range(lo, hi)

        if new_range != self._y_range:
            logger.debug("Y range changed to [%g, %g]", *new_range)
            self._y_range = new_range
        return self._y_range

    def render_chart(self) -> Chart:
        """Redraw every series onto the (cleared) chart and return it."""
        y_range = self.update_range()
        self._chart.clear()
        lines = []
        for name in self._series_order:
            buf = self._series[name]
            if len(buf) == 0:
                continue
            scfg = self._series_config[name]
            line = ChartLine(buf.to_array(), self._color(scfg.color))
            if scfg.bounds is not None:
                line = line.with_bounds(scfg.bounds)
            lines.append(line)
        self._chart.draw(lines, y_range=y_range)
        return self._chart

    def render_frame(self, now: Optional[datetime] = None) -> str:
        """Full frame: header, labelled chart and optional statistics."""
        cfg = self._config
        t = self._theme
        chart = self.render_chart()
        y_range = self._y_range or widen_range(0.0, 0.0)

        labels = axis_labels(cfg.plot_rows, y_range, cfg.digits, self._color(t.label))
        body = chart.render(prefixes=labels, color=cfg.color)

        parts = header(cfg.title, cfg.width, self._color(t.title))
        parts.append(body)
        if cfg.show_stats:
            named = {self._series_config[n].label or n: self._series[n] for n in self._series_order}
            parts.extend(footer(named, cfg.digits, cfg.width, self._color(t.stats), now))
        self._frames += 1
        return "\n".join(parts)

    def _color(self, color: AnsiColor) -> AnsiColor:
        return color if self._config.color else AnsiColor.DEFAULT

    # ──────────────────────────────────────────────────────
    # Read-render loop
    # ──────────────────────────────────────────────────────
    def step(self, line: str, terminal: Terminal) -> bool:
        """
        Consume one input line and redraw if pacing allows.
        Returns True if a frame was drawn.
        """
        self.push_line(line)
        if self._config.batch or not self.has_data or not self._timer.due():
            return False
        self._draw(terminal)
        return True

    def run(self, stream: Iterable[str], out: TextIO,
            interactive: Optional[bool] = None) -> int:
        """
        Read lines until the stream ends, redrawing as they arrive.

        ``interactive`` controls cursor/screen escapes; by default they are
        used only when ``out`` is a TTY. Returns the total dropped count.
        """
        if interactive is None:
            interactive = out.isatty()
        terminal = Terminal(out, enabled=interactive)

        with terminal:
            stale = False
            for raw in stream:
                drawn = self.step(raw.rstrip("\r\n"), terminal)
                stale = self.has_data and not drawn
            if stale:
                self._draw(terminal)

        logger.info("End of input: %d frame(s), %d dropped sample(s)",
                    self._frames, self.dropped_count)
        return self.dropped_count

    def _draw(self, terminal: Terminal) -> None:
        frame = self.render_frame()
        terminal.home()
        terminal.write(frame if terminal.enabled else frame + "\n")
        self._timer.tick()

    # ──────────────────────────────────────────────────────
    # Utility methods
    # ──────────────────────────────────────────────────────
    def clear(self, name: Optional[str] = None) -> None:
        """Clear data from one or all series."""
        if name:
            if name in self._series:
                self._series[name].clear()
        else:
            for s in self._series.values():
                s.clear()
        self._y_range = None
        self._extent = None

    def set_y_limits(self, y_min: float, y_max: float) -> None:
        """Pin the Y axis to fixed limits."""
        if not (math.isfinite(y_min) and math.isfinite(y_max)):
            raise ValueError(f"Y limits must be finite, got [{y_min}, {y_max}]")
        self._config.y_min = y_min
        self._config.y_max = y_max
        self._config.auto_scale = AutoScaleMode.FIXED

    def set_theme(self, theme_name: str) -> None:
        """Switch theme by name. Applies to series added afterwards and to labels."""
        self._theme = get_theme(theme_name)
        self._config.theme = theme_name

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def y_range(self) -> Optional[tuple[float, float]]:
        return self._y_range

    @property
    def dropped_count(self) -> int:
        return sum(buf.dropped_count for buf in self._series.values())

    @property
    def frames(self) -> int:
        return self._frames

    @property
    def fps(self) -> float:
        return self._timer.fps

    @property
    def chart(self) -> Chart:
        return self._chart

    @property
    def config(self) -> PlotConfig:
        return self._config
