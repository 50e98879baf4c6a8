"""Live widgets."""

from termly.widgets.progress import (
    BlockStyle,
    BorderStyle,
    Progress,
    ProgressBar,
    ProgressSpinner,
    filled_cells,
)
from termly.widgets.status import Status
from termly.widgets.stopwatch import Stopwatch, format_elapsed

__all__ = [
    "BlockStyle",
    "BorderStyle",
    "Progress",
    "ProgressBar",
    "ProgressSpinner",
    "Status",
    "Stopwatch",
    "filled_cells",
    "format_elapsed",
]
