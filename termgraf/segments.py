"""
Segments — Four-segment cell model and its box-drawing glyphs.

Every chart cell draws some subset of four half-edges leaving its centre:

           UP
           │
    LEFT ──┼── RIGHT
           │
          DOWN

A cell's glyph is the OR of every segment set while rasterizing. Twelve
of the sixteen combinations map to a box-drawing character. LEFT alone is
the gap marker. UP, RIGHT or DOWN alone can only come from a rasterizer
bug and render as a placeholder.
"""

from __future__ import annotations

from enum import IntFlag

import numpy as np


class Segment(IntFlag):
    """Bit flags for the four half-edges of a cell."""
    EMPTY = 0
    LEFT = 0b0001
    UP = 0b0010
    RIGHT = 0b0100
    DOWN = 0b1000


ALL_SEGMENTS = Segment.LEFT | Segment.UP | Segment.RIGHT | Segment.DOWN

# Permanent Y-axis marker: ┤
AXIS = Segment.LEFT | Segment.UP | Segment.DOWN

GAP_GLYPH = '╳'
PLACEHOLDER_GLYPH = '?'

# Indexed by the 4-bit segment value
GLYPHS: tuple[str, ...] = (
    ' ',                # EMPTY
    GAP_GLYPH,          # LEFT
    PLACEHOLDER_GLYPH,  # UP
    '┘',                # UP + LEFT
    PLACEHOLDER_GLYPH,  # RIGHT
    '─',                # RIGHT + LEFT
    '└',                # RIGHT + UP
    '┴',                # RIGHT + UP + LEFT
    PLACEHOLDER_GLYPH,  # DOWN
    '┐',                # DOWN + LEFT
    '│',                # DOWN + UP
    '┤',                # DOWN + UP + LEFT
    '┌',                # DOWN + RIGHT
    '┬',                # DOWN + RIGHT + LEFT
    '├',                # DOWN + RIGHT + UP
    '┼',                # DOWN + RIGHT + UP + LEFT
)

# Same table, usable for vectorized lookups over a whole grid
GLYPH_TABLE = np.array(GLYPHS, dtype='<U1')


def combine_segments(lhs: int, rhs: int) -> Segment:
    """Union of two segment sets (commutative and idempotent)."""
    return Segment((lhs | rhs) & ALL_SEGMENTS)


def glyph(segments: int) -> str:
    """Box-drawing character for a segment set. Extra bits are ignored."""
    return GLYPHS[int(segments) & ALL_SEGMENTS]


def is_renderable(segments: int) -> bool:
    """False for combinations without a defined glyph (bare UP/RIGHT/DOWN)."""
    return GLYPHS[int(segments) & ALL_SEGMENTS] != PLACEHOLDER_GLYPH
