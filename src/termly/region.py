"""Live region base class: registration, the update cycle and disposal.

A live region is a single-row span of the terminal owned by one widget.
Widgets subclass ``LiveRegion``, report their ``max_width`` and paint
through ``update``; the base class handles the registry, the shared lock,
cursor positioning and erasing.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Callable

from termly.geometry import Margin, erase_width, footprint
from termly.registry import LiveRegistry, default_registry
from termly.terminal import Terminal
from termly.utils import visible_width

logger = logging.getLogger(__name__)


class RegionState(enum.Enum):
    CREATED = "created"
    ACTIVE = "active"
    DISPOSED = "disposed"


class RegionWriter:
    """Text sink handed to paint callbacks; counts the cells written."""

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self.width = 0

    def write(self, text: str) -> None:
        if not text:
            return
        self._terminal.write(text)
        self.width += visible_width(text)


PaintFn = Callable[[RegionWriter], None]


def _paint_nothing(writer: RegionWriter) -> None:
    pass


class LiveRegion(ABC):
    """Base class for in-place widgets.

    Subclasses must set up whatever ``max_width`` depends on *before*
    calling ``super().__init__``: other regions may be packed against this
    one as soon as it is registered.

    Parameters
    ----------
    registry:
        Registry of the output stream. Defaults to the process registry
        for ``sys.stderr``.
    margin:
        ``Margin``, ``(left, right)`` pair or a single int for both sides.
    erase_margins:
        Override the registry's margin erase policy for this region.
    """

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        margin: Margin | tuple[int, int] | int = (0, 0),
        erase_margins: bool | None = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()
        self._margin = Margin.coerce(margin)
        self._erase_margins = (
            self._registry.options.erase_margins if erase_margins is None else erase_margins
        )
        self._widest = 0
        self._hid_cursor = False
        self._state = RegionState.CREATED
        self.row = -1
        self.col = -1

        # Capability is decided once for the region's whole lifetime.
        self.enabled = self._registry.terminal.is_interactive
        if self.enabled and self._registry.register(self) is None:
            self.enabled = False
        self._state = RegionState.ACTIVE

    def _bind(self, row: int, col: int) -> None:
        """Called by the registry, under its lock, with the packed coordinates."""
        self.row = row
        self.col = col

    def __repr__(self) -> str:
        return f"<{type(self).__name__} row={self.row} col={self.col} width={self.content_width}>"

    # -- geometry -------------------------------------------------------------

    @property
    @abstractmethod
    def max_width(self) -> int:
        """Maximum number of cells the content will paint."""

    @property
    def margin(self) -> Margin:
        return self._margin

    @property
    def content_width(self) -> int:
        """Content span to erase: the declared width or anything wider painted so far."""
        return max(self.max_width, self._widest)

    @property
    def footprint(self) -> int:
        return footprint(self._margin, self.content_width)

    @property
    def registry(self) -> LiveRegistry:
        return self._registry

    @property
    def state(self) -> RegionState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._state is RegionState.DISPOSED

    # -- update cycle ---------------------------------------------------------

    def update(self, paint: PaintFn, *, clear: bool = False) -> None:
        """Reposition, erase and repaint the region under the registry lock.

        With *clear* the content span is blanked before *paint* runs;
        otherwise the paint is expected to overwrite the whole content. The
        cursor is left where the paint leaves it.
        """
        if not self.enabled:
            return
        with self._registry.lock:
            if self._state is RegionState.DISPOSED:
                return
            cursor = self._registry.cursor
            row, col = self.row, self.col
            margin = self._margin
            width = self.content_width

            if clear:
                cursor.move_to(row, col)
                cursor.blank(erase_width(margin, width, whole=True))
            elif self._erase_margins:
                cursor.move_to(row, col)
                cursor.blank(margin.left)
                cursor.move_to(row, col + margin.left + erase_width(margin, width))
                cursor.blank(margin.right)
            cursor.move_to(row, col + margin.left)

            writer = RegionWriter(self._registry.terminal)
            paint(writer)
            self._widest = max(self._widest, writer.width)
            self._registry.terminal.flush()

    def clear(self) -> None:
        """Erase the whole footprint. Called once by ``dispose``."""
        self.update(_paint_nothing, clear=True)

    # -- cursor visibility ----------------------------------------------------

    def hide_cursor(self) -> None:
        """Hide the terminal cursor until this region shows it or is disposed."""
        if not self.enabled:
            return
        with self._registry.lock:
            if self._hid_cursor or self._state is RegionState.DISPOSED:
                return
            self._registry.cursor.hide_cursor()
            self._hid_cursor = True

    def show_cursor(self) -> None:
        if not self.enabled:
            return
        with self._registry.lock:
            if not self._hid_cursor:
                return
            self._hid_cursor = False
            self._registry.cursor.show_cursor()

    # -- disposal -------------------------------------------------------------

    def dispose(self) -> None:
        """Clear the region, restore the cursor and deregister.

        Safe to call repeatedly and from any thread. Device errors during
        teardown are logged, not raised.
        """
        if not self.enabled:
            self._state = RegionState.DISPOSED
            return
        with self._registry.lock:
            if self._state is RegionState.DISPOSED:
                return
            try:
                self.clear()
            except OSError:
                logger.debug("erase failed while disposing %r", self, exc_info=True)
            finally:
                self._state = RegionState.DISPOSED
                try:
                    self.show_cursor()
                except OSError:
                    logger.debug("could not restore cursor for %r", self, exc_info=True)
                self._registry.deregister(self)
            logger.debug("disposed %r", self)

    def __enter__(self) -> LiveRegion:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()
