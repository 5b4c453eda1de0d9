from __future__ import annotations

import io
from datetime import datetime

import pytest

from termgraf.colors import AnsiColor
from termgraf.config import AutoScaleMode, AxisMode, PlotConfig, SeriesConfig
from termgraf.core import TermPlot, parse_fields
from termgraf.errors import PlotTooSmall
from termgraf.terminal import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR


def _config(**kwargs) -> PlotConfig:
    defaults = dict(width=20, height=5, digits=2, color=False)
    defaults.update(kwargs)
    return PlotConfig(**defaults)


def test_parse_fields() -> None:
    assert parse_fields("1, 2;3 4") == [1.0, 2.0, 3.0, 4.0]
    assert parse_fields("x 2") == [None, 2.0]
    assert parse_fields("  -1.5e3\n") == [-1500.0]
    assert parse_fields("") == []
    assert parse_fields("   ") == []
    assert parse_fields("1,,3") == [1.0, None, 3.0]
    assert parse_fields(",2;") == [None, 2.0, None]
    assert parse_fields("1 , 2") == [1.0, 2.0]


def test_layout_from_config() -> None:
    cfg = PlotConfig(width=80, height=24, digits=6, title="t", show_stats=True)
    assert cfg.label_width == 13
    assert cfg.plot_rows == 20
    assert cfg.plot_cols == 66
    assert cfg.buffer_size == 66
    cfg.axis = AxisMode.RESERVED
    assert cfg.buffer_size == 65


def test_too_small_regions_are_rejected() -> None:
    with pytest.raises(PlotTooSmall, match="not tall enough"):
        TermPlot(PlotConfig(width=80, height=3, show_stats=True))
    with pytest.raises(PlotTooSmall, match="not wide enough"):
        TermPlot(PlotConfig(width=14, height=24, digits=6))


def test_series_are_created_from_first_line() -> None:
    plot = TermPlot(_config())
    plot.push_line("1 2 3")
    assert plot.series_names == ["y1", "y2", "y3"]

    single = TermPlot(_config())
    single.push_line("7")
    assert single.series_names == ["y"]
    assert list(single.series("y")) == [7.0]


def test_empty_middle_field_stays_with_its_series() -> None:
    plot = TermPlot(_config())
    assert plot.push_line("1,,3") == 1
    assert plot.series_names == ["y1", "y2", "y3"]
    assert list(plot.series("y1")) == [1.0]
    assert list(plot.series("y2")) == []
    assert list(plot.series("y3")) == [3.0]


def test_blank_first_line_does_not_create_series() -> None:
    plot = TermPlot(_config())
    assert plot.push_line("") == 0
    assert plot.push_line("   ") == 0
    assert plot.series_names == []
    assert plot.dropped_count == 0
    plot.push_line("1 2 3")
    assert plot.series_names == ["y1", "y2", "y3"]


def test_run_skips_leading_blank_lines() -> None:
    plot = TermPlot(_config())
    assert plot.run(io.StringIO("\n\n4 5\n"), io.StringIO()) == 0
    assert plot.series_names == ["y1", "y2"]
    assert plot.frames == 1


def test_auto_series_take_theme_colors() -> None:
    plot = TermPlot(_config(color=True))
    plot.push_line("1 2")
    frame = plot.render_frame()
    assert "\x1b[34m" in frame  # blue
    assert "\x1b[31m" in frame  # red


def test_missing_and_bad_fields_are_dropped() -> None:
    plot = TermPlot(_config())
    plot.add_series("a").add_series("b")
    assert plot.push_line("5") == 1
    assert plot.push_line("x 6") == 1
    assert plot.push_line("") == 2
    assert plot.push_line("1 2 3") == 0
    assert plot.dropped_count == 4
    assert list(plot.series("a")) == [5.0, 1.0]
    assert list(plot.series("b")) == [6.0, 2.0]


def test_duplicate_and_unknown_series() -> None:
    plot = TermPlot(_config())
    plot.add_series("a")
    with pytest.raises(KeyError):
        plot.add_series("a")
    with pytest.raises(KeyError):
        plot.push("nope", 1.0)
    plot.remove_series("a")
    assert plot.series_names == []


def test_push_all() -> None:
    plot = TermPlot(_config())
    plot.add_series("a").add_series("b")
    assert plot.push_all({"a": 1.0, "b": "bad"}) == 1
    assert list(plot.series("a")) == [1.0]


def test_render_frame_draws_labels_and_chart() -> None:
    plot = TermPlot(_config(y_min=0, y_max=4, auto_scale=AutoScaleMode.FIXED))
    for v in range(5):
        plot.push_line(str(v))
    lines = plot.render_frame().split("\n")
    assert len(lines) == 5
    assert lines[0] == "4".rjust(9) + " " + "┤   ┌" + " " * 5
    assert lines[-1] == "0".rjust(9) + " " + "┼┘" + " " * 8


def test_render_frame_with_title_and_stats() -> None:
    plot = TermPlot(_config(width=40, height=9, title="demo", show_stats=True))
    plot.push_line("1")
    plot.push_line("3")
    lines = plot.render_frame(now=datetime(2024, 5, 6, 7, 8, 9)).split("\n")
    assert len(lines) == 9
    assert lines[0].startswith("    demo")
    assert lines[-1].startswith("    now=07:08:09 avg=2 std=1.41 nans=0")


def test_auto_range_follows_window() -> None:
    plot = TermPlot(_config(width=16))  # 6 samples per series
    for v in [0, 10, 5, 5, 5, 5, 5, 5]:
        plot.push_line(str(v))
        plot.update_range()
    assert plot.y_range == (4.0, 6.0)


def test_auto_expand_range_never_shrinks() -> None:
    plot = TermPlot(_config(width=16, auto_scale=AutoScaleMode.AUTO_EXPAND))
    for v in [0, 10, 5, 5, 5, 5, 5, 5]:
        plot.push_line(str(v))
        plot.update_range()
    assert plot.y_range == (0.0, 10.0)


def test_fixed_range_and_set_y_limits() -> None:
    plot = TermPlot(_config(auto_scale=AutoScaleMode.FIXED, y_min=-1, y_max=1))
    plot.push_line("100")
    assert plot.update_range() == (-1.0, 1.0)
    plot.set_y_limits(3.0, 3.0)
    assert plot.config.auto_scale == AutoScaleMode.FIXED
    assert plot.update_range() == (2.0, 4.0)
    with pytest.raises(ValueError):
        plot.set_y_limits(0.0, float("inf"))


def test_series_bounds_override_shared_range() -> None:
    plot = TermPlot(_config(axis=AxisMode.NONE))
    plot.add_series("pinned", SeriesConfig(label="pinned", y_min=0.0, y_max=100.0))
    plot.add_series("free")
    plot.push_line("50 1")
    plot.push_line("50 2")
    chart = plot.render_chart()
    # 50 of [0, 100] on 5 rows is the middle row
    assert chart.get(2, 0).segments != 0


def test_run_draws_every_line_and_returns_dropped() -> None:
    plot = TermPlot(_config(width=30, height=6))
    out = io.StringIO()
    dropped = plot.run(io.StringIO("1\n2\nfoo\n3\n"), out)
    assert dropped == 1
    assert plot.frames == 4
    assert "\x1b" not in out.getvalue()
    assert out.getvalue().count("\n") == 4 * 6


def test_run_batch_draws_once() -> None:
    plot = TermPlot(_config(batch=True))
    out = io.StringIO()
    assert plot.run(io.StringIO("1\n2\n3\n"), out) == 0
    assert plot.frames == 1


def test_run_throttled_still_draws_final_frame() -> None:
    plot = TermPlot(_config(min_update_interval=1000.0))
    plot.run(io.StringIO("1\n2\n3\n"), io.StringIO())
    assert plot.frames == 2


def test_run_on_empty_input_draws_nothing() -> None:
    plot = TermPlot(_config())
    out = io.StringIO()
    assert plot.run(io.StringIO(""), out) == 0
    assert plot.frames == 0
    assert out.getvalue() == ""


def test_run_only_garbage_never_draws() -> None:
    plot = TermPlot(_config())
    assert plot.run(io.StringIO("a\nb\n"), io.StringIO()) == 2
    assert plot.frames == 0


def test_run_interactive_controls_cursor() -> None:
    plot = TermPlot(_config())
    out = io.StringIO()
    plot.run(io.StringIO("1\n"), out, interactive=True)
    text = out.getvalue()
    assert text.startswith(CLEAR_SCREEN)
    assert HIDE_CURSOR in text
    assert text.endswith(SHOW_CURSOR)


def test_clear_resets_data_and_range() -> None:
    plot = TermPlot(_config())
    plot.push_line("1")
    plot.update_range()
    plot.clear()
    assert not plot.has_data
    assert plot.y_range is None


def test_color_disabled_uses_default_everywhere() -> None:
    plot = TermPlot(_config(theme="bright"))
    plot.add_series("a", SeriesConfig(color=AnsiColor.RED))
    plot.push_line("1")
    plot.push_line("2")
    assert "\x1b" not in plot.render_frame()
