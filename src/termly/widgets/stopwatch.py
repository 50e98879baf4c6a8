"""Stopwatch: elapsed time repainted by a background thread."""

from __future__ import annotations

import logging
import threading
import time

from termly.geometry import Margin
from termly.region import LiveRegion, RegionWriter
from termly.registry import LiveRegistry

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "mm:ss"


def format_elapsed(seconds: float, template: str = DEFAULT_FORMAT) -> str:
    """Render *seconds* with a fixed-width time template.

    Tokens: ``hh`` hours (modulo 100), ``mm`` minutes, ``ss`` seconds and a
    run of ``f`` for that many fractional digits (truncated). A backslash
    makes the next character literal; anything else is copied as is. The
    output is always ``len(template)`` minus the backslashes wide.
    """
    seconds = max(seconds, 0.0)
    whole = int(seconds)
    hours, rem = divmod(whole, 3600)
    minutes, secs = divmod(rem, 60)
    fraction = seconds - whole

    out: list[str] = []
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch == "\\":
            if i + 1 < n:
                out.append(template[i + 1])
            i += 2
            continue
        pair = template[i:i + 2]
        if pair == "hh":
            out.append(f"{hours % 100:02d}")
            i += 2
        elif pair == "mm":
            out.append(f"{minutes:02d}")
            i += 2
        elif pair == "ss":
            out.append(f"{secs:02d}")
            i += 2
        elif ch == "f":
            j = i
            while j < n and template[j] == "f":
                j += 1
            digits = j - i
            out.append(f"{int(fraction * 10 ** digits):0{digits}d}")
            i = j
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class Stopwatch(LiveRegion):
    """Shows elapsed time, repainting every ``resolution`` seconds while running.

    The repaint thread is cancelled cooperatively: ``stop`` sets an event the
    thread waits on between ticks. The final time stays on screen after
    disposal.
    """

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        time_format: str = DEFAULT_FORMAT,
        resolution: float = 1.0,
        margin: Margin | tuple[int, int] | int = (1, 1),
        erase_margins: bool | None = None,
    ) -> None:
        self.time_format = time_format
        self.resolution = resolution
        self._accumulated = 0.0
        self._started_at: float | None = None
        self._cancel: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._clock_lock = threading.Lock()
        super().__init__(registry, margin=margin, erase_margins=erase_margins)

    @property
    def max_width(self) -> int:
        return len(self.time_format) - self.time_format.count("\\")

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Elapsed seconds, including the current run."""
        with self._clock_lock:
            started_at = self._started_at
            accumulated = self._accumulated
        if started_at is None:
            return accumulated
        return accumulated + (time.monotonic() - started_at)

    def start(self) -> None:
        """Start (or resume) the clock; does nothing once disposed."""
        with self._clock_lock:
            if self.disposed:
                return
            if self._started_at is None:
                self._started_at = time.monotonic()
            if self._cancel is not None:
                return
            self._cancel = threading.Event()
            if not self.enabled:
                return
            self._thread = threading.Thread(
                target=self._run, args=(self._cancel,), name="termly-stopwatch", daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        with self._clock_lock:
            if self._cancel is not None:
                self._cancel.set()
                self._cancel = None
            if self._started_at is not None:
                self._accumulated += time.monotonic() - self._started_at
                self._started_at = None

    def reset(self) -> None:
        self.stop()
        with self._clock_lock:
            self._accumulated = 0.0
        self.repaint()

    def restart(self) -> None:
        self.reset()
        self.start()

    def join(self, timeout: float | None = None) -> None:
        """Wait for a stopped repaint thread to finish its last tick."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def repaint(self) -> None:
        text = format_elapsed(self.elapsed, self.time_format)

        def paint(writer: RegionWriter) -> None:
            writer.write(text)

        self.update(paint)

    def _run(self, cancel: threading.Event) -> None:
        try:
            while not cancel.is_set():
                self.repaint()
                if cancel.wait(self.resolution):
                    break
        except OSError:
            logger.warning("stopwatch lost its terminal; repainting stopped", exc_info=True)

    def clear(self) -> None:
        self.stop()
