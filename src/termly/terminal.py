"""Terminal abstraction for in-place region output.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation bound to one text stream (``sys.stderr`` by default). The
process terminal writes ANSI escape sequences for absolute cursor
positioning and visibility, and reads the cursor position back with a
device status report while the input side is briefly in cbreak mode.
"""

from __future__ import annotations

import logging
import os
import re
import select
import sys
import termios
import tty
from typing import Protocol, TextIO

from termly.config import LiveOptions

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_QUERY_CURSOR = "\x1b[6n"
_MOVE_TO_FMT = "\x1b[{};{}H"

_CURSOR_REPORT_RE = re.compile(r"\x1b\[(\d+);(\d+)R")


class TerminalLostError(OSError):
    """The output device went away while writing."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the cursor-addressable output stream of a registry."""

    @property
    def is_interactive(self) -> bool: ...

    def write(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def query_cursor_position(self) -> tuple[int, int] | None: ...

    def move_to(self, row: int, col: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by a process text stream.

    Coordinates are 0-based; the 1-based ANSI convention is confined to this
    class.
    """

    def __init__(self, stream: TextIO | None = None, options: LiveOptions | None = None) -> None:
        self._stream = stream if stream is not None else sys.stderr
        self._options = options or LiveOptions.from_env()
        self._write_log_path: str = self._options.write_log

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def is_interactive(self) -> bool:
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError, OSError):
            return False

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write *data* to the stream and optionally to the write log."""
        try:
            self._stream.write(data)
        except OSError as exc:
            raise TerminalLostError(exc.errno, f"terminal write failed: {exc.strerror}") from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise TerminalLostError(exc.errno, f"terminal flush failed: {exc.strerror}") from exc

    # -- cursor manipulation ------------------------------------------------

    def move_to(self, row: int, col: int) -> None:
        self.write(_MOVE_TO_FMT.format(row + 1, col + 1))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)
        self.flush()

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)
        self.flush()

    # -- cursor position report ----------------------------------------------

    def query_cursor_position(self) -> tuple[int, int] | None:
        """Ask the terminal where the cursor is.

        Returns ``(row, col)`` or ``None`` when there is no controlling
        terminal to read the report from, or it did not answer in time.
        """
        fd, owned = _open_input_fd()
        if fd is None:
            return None
        try:
            try:
                saved = termios.tcgetattr(fd)
            except termios.error:
                return None
            try:
                tty.setcbreak(fd, termios.TCSANOW)
                _flush_std_streams()
                self.write(_QUERY_CURSOR)
                self.flush()
                response = _read_cursor_report(fd, self._options.query_timeout)
            finally:
                termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        finally:
            if owned:
                os.close(fd)

        match = _CURSOR_REPORT_RE.search(response)
        if match is None:
            logger.debug("no cursor position report received: %r", response)
            return None
        return int(match.group(1)) - 1, int(match.group(2)) - 1


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _flush_std_streams() -> None:
    """Push buffered stdout/stderr text out so the cursor report counts it."""
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (ValueError, OSError):
            logger.debug("could not flush %r before the cursor query", stream, exc_info=True)


def _open_input_fd() -> tuple[int | None, bool]:
    """Return an fd the terminal answers on, and whether the caller must close it."""
    try:
        if sys.stdin is not None and sys.stdin.isatty():
            return sys.stdin.fileno(), False
    except (AttributeError, ValueError, OSError):
        pass
    try:
        return os.open("/dev/tty", os.O_RDWR | os.O_NOCTTY), True
    except OSError:
        return None, False


def _read_cursor_report(fd: int, timeout: float) -> str:
    """Read from *fd* until a ``CSI row;col R`` report arrives or *timeout* expires."""
    chunks: list[str] = []
    while True:
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            break
        data = os.read(fd, 32).decode("ascii", errors="replace")
        if not data:
            break
        chunks.append(data)
        if "R" in data:
            break
    return "".join(chunks)
