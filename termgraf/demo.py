"""
termgraf — Demo Scripts
=======================

Usage:
    python -m termgraf.demo                # default: multi-series
    python -m termgraf.demo single         # single sine wave
    python -m termgraf.demo multi          # 3 waveforms
    python -m termgraf.demo auto           # auto-scaling amplitude
    python -m termgraf.demo stress         # 6 series with noise

Ctrl+C quits.
"""

from __future__ import annotations

import math
import sys
import time
from typing import Callable, Iterator

import numpy as np

from .colors import AnsiColor
from .config import AutoScaleMode, PlotConfig, SeriesConfig
from .core import TermPlot
from .terminal import Terminal, terminal_size


def _run(plot: TermPlot, rows: Iterator[str], fps: float = 30.0) -> None:
    """Feed generated lines into the plot at roughly ``fps`` lines per second."""
    with Terminal(sys.stdout, enabled=sys.stdout.isatty()) as term:
        try:
            for line in rows:
                plot.step(line, term)
                time.sleep(1.0 / fps)
        except KeyboardInterrupt:
            pass


def _config(**kwargs) -> PlotConfig:
    width, height = terminal_size()
    return PlotConfig(width=width, height=height, **kwargs)


def _lines(sample: Callable[[int], list[float]]) -> Iterator[str]:
    x = 0
    while True:
        x += 1
        yield " ".join(f"{v:.6g}" for v in sample(x))


def demo_single():
    """Single sine wave — simplest usage."""
    plot = TermPlot(_config(
        title="Single Series — Sine Wave",
        y_min=-100, y_max=100,
        auto_scale=AutoScaleMode.FIXED,
    ))
    plot.add_series("sin", SeriesConfig(label="sin(x)", color=AnsiColor.CYAN))
    _run(plot, _lines(lambda x: [math.sin(math.radians(x * 6)) * 100]))


def demo_multi():
    """Multiple waveforms sharing one range, crossings color-mixed."""
    plot = TermPlot(_config(
        title="Multi-Series — Signal Monitor",
        y_min=-120, y_max=120,
        auto_scale=AutoScaleMode.FIXED,
        show_stats=True,
    ))
    plot.add_series("sin", SeriesConfig(label="sin", color=AnsiColor.RED))
    plot.add_series("cos", SeriesConfig(label="cos", color=AnsiColor.GREEN))
    plot.add_series("saw", SeriesConfig(label="saw", color=AnsiColor.BLUE))

    _run(plot, _lines(lambda x: [
        math.sin(math.radians(x * 6)) * 100,
        math.cos(math.radians(x * 6)) * 80,
        ((x % 60) / 60.0) * 200 - 100,
    ]))


def demo_auto_scale():
    """Auto-scaling Y-axis with growing amplitude + noise."""
    plot = TermPlot(_config(
        title="Auto-Scale — Growing Signal",
        auto_scale=AutoScaleMode.AUTO,
        show_stats=True,
    ))
    plot.add_series("signal", SeriesConfig(label="signal", color=AnsiColor.YELLOW))

    def sample(x: int) -> list[float]:
        amplitude = 10 + (x / 5)
        noise = np.random.normal(0, amplitude * 0.1)
        return [math.sin(math.radians(x * 9)) * amplitude + noise]

    _run(plot, _lines(sample))


def demo_stress():
    """6 series at once with noise, redraws capped at 20 per second."""
    plot = TermPlot(_config(
        title="Stress Test — 6 Series",
        y_min=-150, y_max=150,
        auto_scale=AutoScaleMode.FIXED,
        min_update_interval=1 / 20,
    ))
    for i in range(6):
        plot.add_series(f"ch{i}")

    def sample(x: int) -> list[float]:
        return [
            math.sin(math.radians(x * (1 + i * 0.3) * 4 + i * 45)) * (50 + i * 12)
            + np.random.normal(0, 3)
            for i in range(6)
        ]

    _run(plot, _lines(sample), fps=200.0)


# ────────────────────────────────────────────────────────────
# Entry point
# ────────────────────────────────────────────────────────────
DEMOS = {
    "single": demo_single,
    "multi": demo_multi,
    "auto": demo_auto_scale,
    "stress": demo_stress,
}


def main():
    if len(sys.argv) > 1 and sys.argv[1] in DEMOS:
        DEMOS[sys.argv[1]]()
    else:
        print("termgraf — Available demos:")
        print()
        for name, fn in DEMOS.items():
            doc = fn.__doc__.strip().split('\n')[0] if fn.__doc__ else ""
            print(f"  python -m termgraf.demo {name:8s}  →  {doc}")
        print()
        print("Running default: multi-series demo... (Ctrl+C to quit)")
        time.sleep(1.0)
        demo_multi()


if __name__ == "__main__":
    main()
