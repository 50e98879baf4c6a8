"""Configuration for live regions."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


@dataclass
class LiveOptions:
    """Layout and I/O policy shared by a registry and its regions.

    ``indent``
        A region with no neighbour on its row starts at the literal cursor
        column. When false, it starts at column 0 if any other region is
        live ("leftmost" packing).
    ``erase_margins``
        Re-blank the margins on every repaint. When false, margins are only
        blanked on a clearing update, which avoids flicker for fixed-width
        widgets.
    ``blank_chunk``
        Number of spaces written per chunk when blanking a span.
    ``query_timeout``
        Seconds to wait for the terminal's cursor position report.
    ``write_log``
        When non-empty, every raw write is appended to this file.
    """

    indent: bool = True
    erase_margins: bool = True
    blank_chunk: int = 80
    query_timeout: float = 0.5
    write_log: str = ""

    @classmethod
    def from_env(cls) -> LiveOptions:
        """Build options from ``TERMLY_*`` environment variables."""
        return cls(
            indent=_env_flag("TERMLY_INDENT", True),
            erase_margins=_env_flag("TERMLY_ERASE_MARGINS", True),
            query_timeout=_env_float("TERMLY_QUERY_TIMEOUT", 0.5),
            write_log=os.environ.get("TERMLY_WRITE_LOG", ""),
        )
