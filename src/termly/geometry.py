"""Region geometry: footprint and erase-width arithmetic.

Pure functions, no terminal access.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Margin:
    """Blank cells kept on either side of a region's content."""

    left: int = 0
    right: int = 0

    def __post_init__(self) -> None:
        if self.left < 0 or self.right < 0:
            raise ValueError(f"margins must be non-negative, got ({self.left}, {self.right})")

    @classmethod
    def coerce(cls, value: Margin | tuple[int, int] | int) -> Margin:
        """Accept a ``Margin``, a ``(left, right)`` pair or a single int for both sides."""
        if isinstance(value, Margin):
            return value
        if isinstance(value, int):
            return cls(value, value)
        left, right = value
        return cls(left, right)

    @property
    def total(self) -> int:
        return self.left + self.right


def footprint(margin: Margin, max_width: int) -> int:
    """Total column span of a region, margins included."""
    return margin.left + max(max_width, 0) + margin.right


def erase_width(margin: Margin, max_width: int, *, whole: bool = False) -> int:
    """Cells to blank: the content span, or the whole footprint when *whole*."""
    if whole:
        return footprint(margin, max_width)
    return max(max_width, 0)
