"""Status line: free-form text repainted in place."""

from __future__ import annotations

from termly.colorizer import Color, colorize
from termly.geometry import Margin
from termly.region import LiveRegion, RegionWriter
from termly.registry import LiveRegistry
from termly.utils import visible_width


class Status(LiveRegion):
    """A region showing the most recent text written to it.

    The width grows to the longest text ever written so a shorter text
    always erases the tail of a longer one. The last text stays on screen
    after disposal.
    """

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        margin: Margin | tuple[int, int] | int = (1, 1),
        erase_margins: bool | None = None,
    ) -> None:
        self._max_width = 0
        self._text = ""
        super().__init__(registry, margin=margin, erase_margins=erase_margins)

    @property
    def max_width(self) -> int:
        return self._max_width

    @property
    def text(self) -> str:
        return self._text

    def write(self, text: str, color: Color | None = None) -> None:
        """Replace the status text, optionally in *color*."""
        if color is not None:
            text = colorize(text, color)
        self._text = text
        if not self.enabled:
            return
        with self.registry.lock:
            # Widen before the erase so the erase covers the new text too.
            self._max_width = max(self._max_width, visible_width(text))

            def paint(writer: RegionWriter) -> None:
                writer.write(text)

            self.update(paint, clear=True)

    def clear(self) -> None:
        # keep whatever we have
        pass
