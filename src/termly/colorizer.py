"""ANSI colouring for the 16 console colours.

``colorize`` wraps text in SGR codes; ``ColorFormatter`` extends
``str.format`` so a field can carry its colour in the format spec::

    format_in_color("{0:,.2f:cyan} {1:white|green}", 12345.67, "ok")

Colour is disabled process-wide when ``NO_COLOR`` is set or when neither
stdout nor stderr is a terminal; disabled colouring returns text unchanged.
"""

from __future__ import annotations

import enum
import os
import string
import sys
from typing import Any, TextIO

_RESET = "\x1b[0m"


class Color(enum.IntEnum):
    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @classmethod
    def parse(cls, name: str) -> Color | None:
        """Look up a colour by name, ignoring case, ``-`` and ``_``."""
        key = name.strip().replace("-", "").replace("_", "").lower()
        return _COLOR_NAMES.get(key)


_COLOR_NAMES = {c.name.replace("_", "").lower(): c for c in Color}

# SGR base code for each colour, in ``Color`` order; bright colours add ;1.
_SGR_BASE = (0, 4, 2, 6, 1, 5, 3, 7)


def _fg_code(color: Color) -> str:
    bold = ";1" if color >= 8 else ""
    return f"\x1b[{30 + _SGR_BASE[color % 8]}{bold}m"


def _bg_code(color: Color) -> str:
    bold = ";1" if color >= 8 else ""
    return f"\x1b[{40 + _SGR_BASE[color % 8]}{bold}m"


# ---------------------------------------------------------------------------
# Capability (detected once per process)
# ---------------------------------------------------------------------------

_cached_enabled: dict[str, bool] | None = None


def _isatty(stream: TextIO | None) -> bool:
    try:
        return stream is not None and stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def _detect() -> dict[str, bool]:
    if os.environ.get("NO_COLOR") is not None:
        return {"out": False, "err": False, "any": False}
    out = _isatty(sys.stdout)
    err = _isatty(sys.stderr)
    return {"out": out, "err": err, "any": out or err}


def color_enabled(stream: TextIO | None = None) -> bool:
    """Whether colour codes should be emitted.

    With no *stream*, answers for the process; with ``sys.stdout`` or
    ``sys.stderr``, for that stream; any other stream never gets colour.
    """
    global _cached_enabled
    if _cached_enabled is None:
        _cached_enabled = _detect()
    if stream is None:
        return _cached_enabled["any"]
    if stream is sys.stdout:
        return _cached_enabled["out"]
    if stream is sys.stderr:
        return _cached_enabled["err"]
    return False


def reset_color_cache() -> None:
    """Forget the cached capability (for tests or after redirecting streams)."""
    global _cached_enabled
    _cached_enabled = None


def colorize(
    text: str,
    foreground: Color,
    background: Color | None = None,
    *,
    enabled: bool | None = None,
) -> str:
    """Wrap *text* in colour codes, or return it unchanged when colour is off."""
    if enabled is None:
        enabled = color_enabled()
    if not enabled or not text:
        return text
    if background is not None:
        return f"{_fg_code(foreground)}{_bg_code(background)}{text}{_RESET}"
    return f"{_fg_code(foreground)}{text}{_RESET}"


# ---------------------------------------------------------------------------
# Format-spec colouring
# ---------------------------------------------------------------------------


def _split_color_spec(spec: str) -> tuple[str, Color | None, Color | None]:
    """Split ``"<format>:<fg>[|<bg>]"`` into its parts.

    The colour part is the text after the last ``:`` and must name colours,
    otherwise the whole spec is treated as a plain format spec.
    """
    head, sep, tail = spec.rpartition(":")
    candidate = tail if sep else spec
    fg_name, bar, bg_name = candidate.partition("|")
    fg = Color.parse(fg_name) if fg_name else None
    bg = Color.parse(bg_name) if bar else None
    if fg is None or (bar and bg is None):
        return spec, None, None
    return (head if sep else ""), fg, bg


class ColorFormatter(string.Formatter):
    """``string.Formatter`` that honours a trailing colour in format specs."""

    def __init__(self, enabled: bool | None = None) -> None:
        super().__init__()
        self.enabled = enabled

    def format_field(self, value: Any, format_spec: str) -> str:
        spec, fg, bg = _split_color_spec(format_spec)
        text = super().format_field(value, spec)
        if fg is None:
            return text
        return colorize(text, fg, bg, enabled=self.enabled)


def format_in_color(fmt: str, *args: Any, **kwargs: Any) -> str:
    return ColorFormatter().format(fmt, *args, **kwargs)


def write_in_color(stream: TextIO, fmt: str, *args: Any, **kwargs: Any) -> None:
    """Format *fmt* with colours enabled only if *stream* supports them, and write it."""
    stream.write(ColorFormatter(color_enabled(stream)).format(fmt, *args, **kwargs))


def write_line_in_color(stream: TextIO, fmt: str, *args: Any, **kwargs: Any) -> None:
    write_in_color(stream, fmt + "\n", *args, **kwargs)
