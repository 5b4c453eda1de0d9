"""
Labels — Y-axis numbers, title header and statistics footer.

Every label occupies exactly ``digits + 7`` characters plus one space, so
the chart never shifts horizontally between redraws. Seven characters is
the worst case a ``g``-formatted number adds on top of its digits: sign,
dot, ``e``, exponent sign and three exponent digits.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional

from .colors import AnsiColor, colorize
from .config import LABEL_OVERHEAD
from .quantize import row_values
from .series import StatsRingBuffer


def _number(x: float, width: int, significant: int) -> str:
    return f"{x:>{width}.{max(1, significant)}g}"


def _leading_zeros(x: float) -> int:
    """Zeros before the first significant digit, e.g. 3 for 0.00123."""
    count = 0
    for c in f"{x:g}":
        if c.isdigit() and c != '0':
            break
        if c == '0':
            count += 1
    return count


def format_label(x: float, digits: int) -> str:
    """
    Right-aligned label using as much precision as the label width allows,
    falling back to ``digits`` significant digits when that overflows.
    """
    width = digits + LABEL_OVERHEAD
    sign = 1 if x < 0 else 0
    dot = 1 if round(x) != x else 0
    non_significant = sign + dot + _leading_zeros(x)
    text = _number(x, width, width - non_significant)
    if len(text) > width:
        text = _number(x, width, digits)
    return text + " "


def axis_labels(rows: int, value_range: tuple[float, float], digits: int,
                color: AnsiColor = AnsiColor.DEFAULT) -> list[str]:
    """One label per chart row, bottom row first."""
    return [colorize(color, format_label(float(y), digits))
            for y in row_values(rows, value_range)]


def header(title: str, width: int, color: AnsiColor = AnsiColor.DEFAULT) -> list[str]:
    """Title line followed by a blank spacer, both padded to clear old output."""
    if not title:
        return []
    line = f"    {title}"[:width].ljust(width)
    return [colorize(color, line), " " * width]


def format_stats(buffers: Mapping[str, StatsRingBuffer], digits: int,
                 now: Optional[datetime] = None) -> str:
    """
    ``now=12:00:00 avg=1.5 std=0.5 nans=0`` for one series; with several
    series each gets its own ``name: avg=.. std=.. nans=..`` block.
    """
    now = now or datetime.now()
    p = max(3, digits)
    parts = [f"now={now:%H:%M:%S}"]
    for name, buf in buffers.items():
        if len(buf) > 0:
            avg, std = buf.avg(), buf.std_dev()
        else:
            avg = std = float('nan')
        entry = f"avg={avg:.{p}g} std={std:.{p}g} nans={buf.dropped_count:d}"
        parts.append(f"{name}: {entry}" if len(buffers) > 1 else entry)
    return " ".join(parts)


def footer(buffers: Mapping[str, StatsRingBuffer], digits: int, width: int,
           color: AnsiColor = AnsiColor.DEFAULT,
           now: Optional[datetime] = None) -> list[str]:
    """Blank spacer followed by the statistics line."""
    line = f"    {format_stats(buffers, digits, now)}"[:width].ljust(width)
    return [" " * width, colorize(color, line)]
