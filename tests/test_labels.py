from __future__ import annotations

from datetime import datetime

import pytest

from termgraf.colors import AnsiColor
from termgraf.labels import axis_labels, footer, format_label, format_stats, header
from termgraf.series import StatsRingBuffer

NOON = datetime(2024, 1, 1, 12, 34, 56)


def _buffer(*values) -> StatsRingBuffer:
    buf = StatsRingBuffer(8)
    for v in values:
        buf.enqueue(v)
    return buf


@pytest.mark.parametrize("x", [0.0, 1.0, -0.5, 1 / 3, 123456.789, -2.5e-7, 1.23456789e123])
def test_labels_have_fixed_width(x) -> None:
    label = format_label(x, 6)
    assert len(label) == 6 + 7 + 1
    assert label.endswith(" ")
    assert float(label) == pytest.approx(x, rel=1e-5)


def test_label_uses_available_precision() -> None:
    assert format_label(1.0, 6) == "1".rjust(13) + " "
    assert format_label(-0.5, 6) == "-0.5".rjust(13) + " "
    assert format_label(1 / 3, 6).strip() == "0.33333333333"


def test_label_falls_back_to_configured_digits() -> None:
    assert format_label(1.23456789e123, 6) == "1.23457e+123".rjust(13) + " "


def test_axis_labels_bottom_to_top() -> None:
    labels = axis_labels(3, (0.0, 2.0), 2)
    assert [label.strip() for label in labels] == ["0", "1", "2"]


def test_axis_labels_colorized() -> None:
    labels = axis_labels(2, (0.0, 1.0), 2, AnsiColor.CYAN)
    assert labels[0].startswith("\x1b[36m")
    assert labels[0].endswith("\x1b[0m")


def test_header() -> None:
    assert header("", 10) == []
    assert header("T", 10) == ["    T     ", " " * 10]
    assert header("a very long title", 8) == ["    a ve", " " * 8]


def test_stats_single_series() -> None:
    buf = _buffer(1.0, 2.0, None, 3.0)
    assert format_stats({"y": buf}, 6, NOON) == "now=12:34:56 avg=2 std=1 nans=1"


def test_stats_several_series() -> None:
    text = format_stats({"a": _buffer(1.0, 2.0, 3.0), "b": _buffer()}, 6, NOON)
    assert text == "now=12:34:56 a: avg=2 std=1 nans=0 b: avg=nan std=nan nans=0"


def test_stats_precision_has_a_floor() -> None:
    text = format_stats({"y": _buffer(1.0, 1.23456)}, 1, NOON)
    assert "avg=1.12 " in text


def test_footer_is_padded() -> None:
    lines = footer({"y": _buffer(4.0)}, 6, 60, now=NOON)
    assert lines[0] == " " * 60
    assert len(lines[1]) == 60
    assert lines[1].startswith("    now=12:34:56 avg=4 std=nan nans=0")
