"""
Errors — Exception taxonomy shared by the buffer, chart and plot layers.

All of these are precondition errors: callers are expected to prevent them
(check ``len(buffer) > 0`` before asking for statistics, size the terminal
properly, ...) rather than recover from them.
"""

from __future__ import annotations


class TermGrafError(Exception):
    """Base class for every error raised by termgraf."""


class InvalidCapacity(TermGrafError, ValueError):
    """A ring buffer was created with a non-positive capacity."""


class EmptyBuffer(TermGrafError, IndexError):
    """A statistic or dequeue was requested on a buffer with no live values."""


class PlotTooSmall(TermGrafError, ValueError):
    """The configured terminal region cannot hold a chart of at least 2x2 cells."""
