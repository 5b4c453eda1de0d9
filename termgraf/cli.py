"""
Command line entry point.

Usage:
    seq 100 | termgraf --title "counter" --stats
    sensor-dump | termgraf -c red -c blue -l left -l right --min -1 --max 1
    termgraf --batch data.txt

Input is one line per tick, with one number per series separated by
commas, semicolons or whitespace. Fields that fail to parse are counted
as dropped. The exit status is the number of dropped samples (capped at
255), 2 on configuration errors and 130 on Ctrl+C.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .colors import THEMES, parse_color
from .config import AutoScaleMode, AxisMode, PlotConfig, SeriesConfig
from .core import TermPlot
from .errors import TermGrafError
from .terminal import terminal_size

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termgraf",
        description="Plot numbers from a line-oriented stream as a live terminal chart.",
    )
    parser.add_argument("input", nargs="?", default="-",
                        help="file to read, '-' for stdin (default)")
    parser.add_argument("-t", "--title", default="", help="title shown above the chart")
    parser.add_argument("-s", "--stats", action="store_true",
                        help="show time, average, std deviation and dropped count")
    parser.add_argument("-d", "--digits", type=int, default=6,
                        help="significant digits in labels (default: %(default)s)")
    parser.add_argument("-c", "--color", action="append", default=[],
                        help="series color, repeat once per series")
    parser.add_argument("-l", "--label", action="append", default=[],
                        help="series label, repeat once per series")
    parser.add_argument("--no-color", action="store_true", help="disable ANSI colors")
    parser.add_argument("--theme", default="default", choices=sorted(THEMES))
    parser.add_argument("-W", "--width", type=int, help="chart width (default: terminal)")
    parser.add_argument("-H", "--height", type=int, help="chart height (default: terminal)")
    parser.add_argument("--min", type=float, dest="y_min", help="fixed lower bound")
    parser.add_argument("--max", type=float, dest="y_max", help="fixed upper bound")
    parser.add_argument("--scale", choices=[m.value for m in AutoScaleMode],
                        default=AutoScaleMode.AUTO.value,
                        help="Y range behavior when no bounds are given")
    parser.add_argument("--axis", choices=[m.value for m in AxisMode],
                        default=AxisMode.OVERLAY.value,
                        help="how the Y axis column is drawn")
    parser.add_argument("-b", "--batch", action="store_true",
                        help="draw once, after the whole input was read")
    parser.add_argument("--fps", type=float, default=0.0,
                        help="maximum redraws per second, 0 = every line")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log to stderr (-v info, -vv debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> PlotConfig:
    if (args.y_min is None) != (args.y_max is None):
        raise TermGrafError("--min and --max must be given together")

    columns, lines = terminal_size()
    config = PlotConfig(
        width=args.width or columns,
        height=args.height or lines,
        title=args.title,
        show_stats=args.stats,
        digits=args.digits,
        color=not args.no_color,
        theme=args.theme,
        auto_scale=AutoScaleMode(args.scale),
        axis=AxisMode(args.axis),
        batch=args.batch,
        min_update_interval=1.0 / args.fps if args.fps > 0 else 0.0,
    )
    if args.y_min is not None:
        config.y_min = args.y_min
        config.y_max = args.y_max
        config.auto_scale = AutoScaleMode.FIXED
    return config


def series_from_args(args: argparse.Namespace) -> list[SeriesConfig]:
    count = max(len(args.color), len(args.label))
    series = []
    for i in range(count):
        cfg = SeriesConfig(label=args.label[i] if i < len(args.label) else f"y{i + 1}")
        if i < len(args.color):
            try:
                cfg.color = parse_color(args.color[i])
            except (KeyError, ValueError) as e:
                raise TermGrafError(str(e).strip("'\"")) from None
        series.append(cfg)
    return series


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = config_from_args(args)
        plot = TermPlot(config)
        for scfg in series_from_args(args):
            plot.add_series(scfg.label, scfg)
        logger.debug("Plot area %d x %d, %d sample(s) per series",
                     config.plot_rows, config.plot_cols, config.buffer_size)

        if args.input == "-":
            dropped = plot.run(sys.stdin, sys.stdout)
        else:
            with open(args.input, encoding="utf-8", errors="replace") as stream:
                dropped = plot.run(stream, sys.stdout)
    except TermGrafError as e:
        print(f"termgraf: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"termgraf: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130

    return min(dropped, 255)


if __name__ == "__main__":
    sys.exit(main())
