"""Live region registry: the shared lock and the packing of regions on a row.

One registry exists per output stream. It owns the stream's ``Terminal``,
the ``CursorController`` for it, the list of live regions and the single
re-entrant lock that serializes every cursor operation on that stream.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from termly.config import LiveOptions
from termly.cursor import CursorController
from termly.terminal import ProcessTerminal, Terminal

if TYPE_CHECKING:
    from termly.region import LiveRegion

logger = logging.getLogger(__name__)


class LiveRegistry:
    """Ordered collection of live regions sharing one terminal.

    Example::

        registry = LiveRegistry(ProcessTerminal(sys.stdout))
        with Status(registry) as status:
            status.write("working...")
    """

    def __init__(self, terminal: Terminal, options: LiveOptions | None = None) -> None:
        self.options = options or LiveOptions()
        self.terminal = terminal
        self.cursor = CursorController(terminal, self.options.blank_chunk)
        self.lock = threading.RLock()
        self._regions: list[LiveRegion] = []

    def __len__(self) -> int:
        with self.lock:
            return len(self._regions)

    def __contains__(self, region: object) -> bool:
        with self.lock:
            return any(r is region for r in self._regions)

    @property
    def regions(self) -> list[LiveRegion]:
        """Snapshot of the live regions in registration order."""
        with self.lock:
            return list(self._regions)

    # -- registration ---------------------------------------------------------

    def register(self, region: LiveRegion) -> tuple[int, int] | None:
        """Capture the cursor, pack a column for *region* and append it.

        Returns the region's ``(row, col)``, or ``None`` when the cursor
        position cannot be read, in which case nothing is registered.
        """
        with self.lock:
            position = self.cursor.current_position()
            if position is None:
                logger.debug("cursor position unavailable; %r stays disabled", region)
                return None
            row, col = position
            col = self.place(row, col)
            region._bind(row, col)
            self._regions.append(region)
            logger.debug("registered %r at row=%d col=%d (%d live)", region, row, col, len(self._regions))
            return row, col

    def place(self, row: int, col: int) -> int:
        """Column for a new region whose cursor was captured at ``(row, col)``.

        The region is packed after the same-row region with the greatest
        right edge. With no neighbour on *row*, the captured column is kept
        under the indent policy and column 0 is used otherwise, unless no
        region is live at all.

        Callers must hold ``lock``.
        """
        right_edge: int | None = None
        for other in self._regions:
            if other.row != row:
                continue
            edge = other.col + other.footprint
            if right_edge is None or edge > right_edge:
                right_edge = edge

        if right_edge is not None:
            return right_edge
        if self.options.indent or not self._regions:
            return col
        return 0

    def deregister(self, region: LiveRegion) -> None:
        """Remove *region*; removing an absent region does nothing."""
        with self.lock:
            for i, r in enumerate(self._regions):
                if r is region:
                    del self._regions[i]
                    logger.debug("deregistered %r (%d live)", region, len(self._regions))
                    return


# ---------------------------------------------------------------------------
# Process default registry
# ---------------------------------------------------------------------------

_default_registry: LiveRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> LiveRegistry:
    """Return the process-wide registry for ``sys.stderr``, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            options = LiveOptions.from_env()
            _default_registry = LiveRegistry(ProcessTerminal(options=options), options)
        return _default_registry


def set_default_registry(registry: LiveRegistry | None) -> None:
    """Replace the process-wide registry (``None`` resets it)."""
    global _default_registry
    with _default_lock:
        _default_registry = registry


def reset_default_registry() -> None:
    set_default_registry(None)
