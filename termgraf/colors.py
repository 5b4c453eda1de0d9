"""
Color Palette & Theme System — 3-bit ANSI colors.

Design principles:
  - Colors are the 8 standard ANSI foreground colors, one bit per channel
    (bit0 = red, bit1 = green, bit2 = blue), so RGB light mixing is a
    bitwise OR and CMY pigment mixing is a bitwise AND
  - DEFAULT means "whatever the terminal uses" and never emits escapes
  - Themes only pick which colors series and axis labels get
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class AnsiColor(IntEnum):
    """Conceptual terminal color. ANSI code = 30 + value."""
    BLACK = 0b000
    RED = 0b001
    GREEN = 0b010
    YELLOW = 0b011
    BLUE = 0b100
    MAGENTA = 0b101
    CYAN = 0b110
    WHITE = 0b111
    # Outside the 3-bit space on purpose
    DEFAULT = 225


COLOR_BITS = int(AnsiColor.WHITE)
RESET = "\x1b[0m"


def code(color: int) -> int:
    """Convert a conceptual color into an actual ANSI SGR code."""
    if color == AnsiColor.DEFAULT:
        return 0
    return 30 + (COLOR_BITS & int(color))


def wrap(color: int, text) -> str:
    """Wrap text in a color, then switch back to the default style."""
    return f"\x1b[{code(color)}m{text}{RESET}"


def colorize(color: int, text) -> str:
    """Like wrap(), but DEFAULT leaves the text untouched."""
    if color == AnsiColor.DEFAULT:
        return f"{text}"
    return wrap(color, text)


def additive_mix(lhs: int, rhs: int) -> AnsiColor:
    """Mix two colors like light (RGB)."""
    if lhs == AnsiColor.DEFAULT:
        return AnsiColor(rhs)
    if rhs == AnsiColor.DEFAULT:
        return AnsiColor(lhs)
    return AnsiColor(int(lhs) | int(rhs))


def subtractive_mix(lhs: int, rhs: int) -> AnsiColor:
    """Mix two colors like pigment (CMY)."""
    if lhs == AnsiColor.DEFAULT:
        return AnsiColor(rhs)
    if rhs == AnsiColor.DEFAULT:
        return AnsiColor(lhs)
    return AnsiColor(int(lhs) & int(rhs))


def overlap_color(lhs: int, rhs: int) -> AnsiColor:
    """
    Color of a cell where two differently-colored series meet.

    Additive mixing, except when the mix just reproduces one of the inputs
    (e.g. RED over YELLOW), in which case the sum modulo 8 is used so the
    crossing stays visible.
    """
    mix = additive_mix(lhs, rhs)
    if (lhs != rhs
            and (mix == lhs or mix == rhs)
            and lhs != AnsiColor.DEFAULT
            and rhs != AnsiColor.DEFAULT):
        return AnsiColor((int(lhs) + int(rhs)) % (COLOR_BITS + 1))
    return mix


def overlap_colors(lhs: np.ndarray, rhs: int) -> np.ndarray:
    """Vectorized overlap_color() of a color grid against one color."""
    lhs = lhs.astype(np.int16)
    default = int(AnsiColor.DEFAULT)
    rhs = int(rhs)
    if rhs == default:
        return lhs.copy()
    mix = np.where(lhs == default, rhs, lhs | rhs)
    collide = (lhs != rhs) & ((mix == lhs) | (mix == rhs)) & (lhs != default)
    return np.where(collide, (lhs + rhs) % (COLOR_BITS + 1), mix)


def parse_color(name) -> AnsiColor:
    """Look up a color by name ('red', 'BLUE', 'default') or 3-bit value."""
    if isinstance(name, AnsiColor):
        return name
    if isinstance(name, int):
        return AnsiColor(name)
    key = str(name).strip().upper()
    if key.isdigit():
        return AnsiColor(int(key))
    try:
        return AnsiColor[key]
    except KeyError:
        available = ', '.join(c.name.lower() for c in AnsiColor)
        raise KeyError(f"Color '{name}' not found. Available: {available}") from None


@dataclass
class Theme:
    """Color choices for a plot."""

    name: str

    axis: AnsiColor = AnsiColor.DEFAULT
    label: AnsiColor = AnsiColor.DEFAULT
    title: AnsiColor = AnsiColor.DEFAULT
    stats: AnsiColor = AnsiColor.DEFAULT

    # Series palette, handed out in order as series are added
    series_colors: tuple[AnsiColor, ...] = (AnsiColor.DEFAULT,)


# ────────────────────────────────────────────────────────────
# Built-in Themes
# ────────────────────────────────────────────────────────────

DEFAULT_THEME = Theme(
    name="default",
    series_colors=(
        AnsiColor.BLUE,
        AnsiColor.RED,
        AnsiColor.GREEN,
        AnsiColor.MAGENTA,
        AnsiColor.CYAN,
        AnsiColor.YELLOW,
    ),
)

BRIGHT_THEME = Theme(
    name="bright",
    axis=AnsiColor.WHITE,
    label=AnsiColor.CYAN,
    title=AnsiColor.YELLOW,
    stats=AnsiColor.CYAN,
    series_colors=(
        AnsiColor.GREEN,
        AnsiColor.MAGENTA,
        AnsiColor.YELLOW,
        AnsiColor.RED,
        AnsiColor.BLUE,
        AnsiColor.WHITE,
    ),
)

MONO_THEME = Theme(name="mono")

# Registry of all themes
THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "bright": BRIGHT_THEME,
    "mono": MONO_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name. Raises KeyError if not found."""
    if name not in THEMES:
        available = ', '.join(THEMES.keys())
        raise KeyError(f"Theme '{name}' not found. Available: {available}")
    return THEMES[name]


def register_theme(theme: Theme) -> None:
    """Register a custom theme."""
    THEMES[theme.name] = theme
