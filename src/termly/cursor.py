"""Cursor controller: the only code that moves the physical cursor.

All methods assume the caller holds the owning registry's lock.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from termly.terminal import Terminal


_DEFAULT_CHUNK = 80


class CursorController:
    """Absolute positioning, span blanking and cursor visibility for one terminal."""

    def __init__(self, terminal: Terminal, blank_chunk: int = _DEFAULT_CHUNK) -> None:
        self._terminal = terminal
        self._whitespace = " " * max(blank_chunk, 1)
        self._hidden = 0

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    @property
    def cursor_hidden(self) -> bool:
        return self._hidden > 0

    def current_position(self) -> tuple[int, int] | None:
        """Read the physical cursor as 0-based ``(row, col)``, ``None`` if unknown."""
        return self._terminal.query_cursor_position()

    def move_to(self, row: int, col: int) -> None:
        self._terminal.move_to(row, max(col, 0))

    def blank(self, width: int) -> None:
        """Write *width* spaces at the cursor, in chunks of the whitespace buffer."""
        chunk = len(self._whitespace)
        while width >= chunk:
            self._terminal.write(self._whitespace)
            width -= chunk
        if width > 0:
            self._terminal.write(self._whitespace[:width])

    # -- visibility -----------------------------------------------------------

    def hide_cursor(self) -> None:
        """Hide the cursor; hides nest and each needs a matching ``show_cursor``."""
        self._hidden += 1
        if self._hidden == 1:
            self._terminal.hide_cursor()

    def show_cursor(self) -> None:
        if self._hidden == 0:
            return
        self._hidden -= 1
        if self._hidden == 0:
            self._terminal.show_cursor()

    def set_cursor_visible(self, visible: bool) -> None:
        if visible:
            self.show_cursor()
        else:
            self.hide_cursor()

    @contextmanager
    def hidden(self) -> Iterator[None]:
        """Keep the cursor hidden for the duration of the block."""
        self.hide_cursor()
        try:
            yield
        finally:
            self.show_cursor()
