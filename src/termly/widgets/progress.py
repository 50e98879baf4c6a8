"""Progress widgets: a fixed-width bar and a one-cell spinner.

Both accept any integer from ``report``; bars clamp it to a percentage and
spinners reduce it modulo the glyph count, so a progress callback never
raises on an odd value.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass

from termly.geometry import Margin
from termly.region import LiveRegion, RegionWriter
from termly.registry import LiveRegistry


class Progress(LiveRegion):
    """Base class for widgets driven by ``report(value)``.

    Hides the cursor while live and paints ``report(0)`` on construction.
    """

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        margin: Margin | tuple[int, int] | int = (0, 0),
        erase_margins: bool | None = None,
    ) -> None:
        self._value = 0
        super().__init__(registry, margin=margin, erase_margins=erase_margins)
        if self.enabled:
            try:
                self.hide_cursor()
                self.report(0)
            except BaseException:
                # No caller holds a half-built widget to dispose.
                self.dispose()
                raise

    @property
    def value(self) -> int:
        return self._value

    def report(self, value: int) -> None:
        self._value = value

        def paint(writer: RegionWriter) -> None:
            self.render(writer, value)

        self.update(paint)

    def __call__(self, value: int) -> None:
        self.report(value)

    @abstractmethod
    def render(self, writer: RegionWriter, value: int) -> None:
        """Write the representation of *value*, exactly ``max_width`` cells wide."""

    def clear(self) -> None:
        super().clear()
        self.show_cursor()


# ---------------------------------------------------------------------------
# Bar
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BlockStyle:
    filling: str
    padding: str = " "


@dataclass(frozen=True)
class BorderStyle:
    left: str = ""
    right: str = ""

    @property
    def width(self) -> int:
        return (1 if self.left else 0) + (1 if self.right else 0)


def filled_cells(width: int, percent: int) -> int:
    """Cells filled for *percent* of *width*, rounding up; *percent* is clamped to 0..100."""
    percent = min(max(percent, 0), 100)
    return -(-width * percent // 100)


class ProgressBar(Progress):
    """A bar such as ``[####------]`` filled in proportion to a percentage."""

    DEFAULT_BLOCK = BlockStyle("#", "-")
    DEFAULT_BORDER = BorderStyle("[", "]")
    SQUARE = BlockStyle("■")
    NO_BORDER = BorderStyle()

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        width: int = 10,
        block: BlockStyle = DEFAULT_BLOCK,
        border: BorderStyle = DEFAULT_BORDER,
        margin: Margin | tuple[int, int] | int = (0, 0),
        erase_margins: bool | None = None,
    ) -> None:
        self.width = max(width, 0)
        self.block = block
        self.border = border
        super().__init__(registry, margin=margin, erase_margins=erase_margins)

    @property
    def max_width(self) -> int:
        return self.border.width + self.width

    def render(self, writer: RegionWriter, value: int) -> None:
        filled = filled_cells(self.width, value)
        writer.write(
            self.border.left
            + self.block.filling * filled
            + self.block.padding * (self.width - filled)
            + self.border.right
        )


# ---------------------------------------------------------------------------
# Spinner
# ---------------------------------------------------------------------------


class ProgressSpinner(Progress):
    """A single cell cycling through the glyphs of ``style``.

    A non-blank ``done`` glyph is left behind on disposal instead of
    erasing the cell.
    """

    DEFAULT_STYLE = "-\\|/"
    BRAILLE = "⣾⣽⣻⢿⡿⣟⣯⣷"
    CLOCK = "╷┐╴┘╵└╶┌"

    def __init__(
        self,
        registry: LiveRegistry | None = None,
        *,
        style: str = DEFAULT_STYLE,
        done: str = " ",
        margin: Margin | tuple[int, int] | int = (0, 0),
        erase_margins: bool | None = None,
    ) -> None:
        self.style = style or self.DEFAULT_STYLE
        self.done = done
        super().__init__(registry, margin=margin, erase_margins=erase_margins)

    @property
    def max_width(self) -> int:
        return 1

    def glyph(self, value: int) -> str:
        return self.style[value % len(self.style)]

    def render(self, writer: RegionWriter, value: int) -> None:
        writer.write(self.glyph(value))

    def clear(self) -> None:
        if not self.done or self.done.isspace():
            super().clear()
            return

        def paint(writer: RegionWriter) -> None:
            writer.write(self.done)

        self.update(paint)
        self.show_cursor()
