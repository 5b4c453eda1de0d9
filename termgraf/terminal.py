"""
Terminal Utilities — Cursor, screen and size handling across platforms.

Cross-Platform Issues Addressed:
=================================

┌──────────────────────┬───────────────────────────┬──────────────────────┐
│ Issue                │ Windows                   │ Linux / macOS        │
├──────────────────────┼───────────────────────────┼──────────────────────┤
│ ANSI escape codes    │ off by default (conhost)  │ always on            │
│ Box-drawing glyphs   │ need a UTF-8 stdout       │ usually UTF-8        │
│ Terminal size        │ console buffer size       │ TIOCGWINSZ           │
└──────────────────────┴───────────────────────────┴──────────────────────┘

Virtual Terminal Mode (Windows):
================================
The classic Windows console prints escape sequences literally unless the
ENABLE_VIRTUAL_TERMINAL_PROCESSING flag (0x0004) is set on the output
handle. We set it through kernel32 via ctypes, and restore the previous
mode on exit.
"""

from __future__ import annotations

import ctypes
import logging
import platform
import shutil
import warnings
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


class PlatformInfo:
    """Immutable platform detection — computed once at import time."""

    OS: str = platform.system()                  # 'Windows' | 'Linux' | 'Darwin'
    IS_WINDOWS: bool = (OS == 'Windows')
    IS_LINUX: bool = (OS == 'Linux')
    IS_MAC: bool = (OS == 'Darwin')

    @classmethod
    def summary(cls) -> str:
        return f"{cls.OS} {platform.machine()} | Python {platform.python_version()}"


# ────────────────────────────────────────────────────────────
# Windows Virtual Terminal Mode
# ────────────────────────────────────────────────────────────
class _VirtualTerminal:
    """
    Manages ENABLE_VIRTUAL_TERMINAL_PROCESSING on the Windows console.

    Technical mechanism:
      GetStdHandle(STD_OUTPUT_HANDLE = -11)
      GetConsoleMode(handle, &mode)
      SetConsoleMode(handle, mode | 0x0004)
    """

    _enabled: bool = False
    _handle: Optional[int] = None
    _previous_mode: int = 0

    @classmethod
    def enable(cls) -> bool:
        """Turn on escape processing. Safe to call multiple times."""
        if cls._enabled or not PlatformInfo.IS_WINDOWS:
            return True

        try:
            kernel32 = ctypes.windll.kernel32
            handle = kernel32.GetStdHandle(-11)
            mode = ctypes.c_ulong()
            if not kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
                warnings.warn(
                    "GetConsoleMode failed; output is probably not a console. "
                    "Colors and cursor control may print as raw escapes.",
                    RuntimeWarning, stacklevel=2
                )
                return False
            if not kernel32.SetConsoleMode(handle, mode.value | 0x0004):
                warnings.warn(
                    "SetConsoleMode failed. "
                    "Colors and cursor control may print as raw escapes.",
                    RuntimeWarning, stacklevel=2
                )
                return False
            cls._handle = handle
            cls._previous_mode = mode.value
            cls._enabled = True
            logger.debug("Enabled virtual terminal processing (mode=0x%04X)", mode.value)
            return True

        except (OSError, AttributeError) as e:
            warnings.warn(
                f"Cannot access kernel32: {e}. "
                f"Colors and cursor control may print as raw escapes.",
                RuntimeWarning, stacklevel=2
            )
            return False

    @classmethod
    def restore(cls) -> None:
        """Restore the original console mode. Call on shutdown."""
        if not cls._enabled or cls._handle is None:
            return
        try:
            ctypes.windll.kernel32.SetConsoleMode(cls._handle, cls._previous_mode)
        except (OSError, AttributeError) as e:
            logger.debug("Could not restore console mode: %s", e)
        finally:
            cls._enabled = False


def terminal_size(fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    """(columns, lines) of the attached terminal."""
    size = shutil.get_terminal_size(fallback)
    return size.columns, size.lines


class Terminal:
    """
    Screen control for the redraw loop.

    Usage:
        with Terminal(sys.stdout) as term:
            term.home()
            term.write(frame)

    Cursor is hidden on enter and restored on exit, even after Ctrl+C.
    With ``enabled=False`` (output is a pipe or a file) nothing but the
    frames themselves is written.
    """

    def __init__(self, stream: TextIO, enabled: bool = True):
        self._stream = stream
        self._enabled = enabled
        self._active = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def __enter__(self) -> 'Terminal':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        if not self._enabled:
            return
        apply_terminal_fixes()
        self._stream.write(CLEAR_SCREEN + CURSOR_HOME + HIDE_CURSOR)
        self._stream.flush()

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._enabled:
            self._stream.write("\n" + SHOW_CURSOR)
        self._stream.flush()
        cleanup_terminal()

    def home(self) -> None:
        if self._enabled:
            self._stream.write(CURSOR_HOME)

    def write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()


# ────────────────────────────────────────────────────────────
# Convenience: apply all terminal fixes at once
# ────────────────────────────────────────────────────────────
def apply_terminal_fixes() -> dict:
    """
    Apply platform-specific terminal setup. Call once at startup.

    Returns dict with results:
        {
            'os': 'Windows',
            'vt_enabled': True,
        }
    """
    result = {
        'os': PlatformInfo.OS,
        'vt_enabled': True,
    }

    if PlatformInfo.IS_WINDOWS:
        result['vt_enabled'] = _VirtualTerminal.enable()

    return result


def cleanup_terminal() -> None:
    """Restore terminal state. Call on exit."""
    _VirtualTerminal.restore()
