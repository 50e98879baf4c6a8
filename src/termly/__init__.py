"""termly: in-place terminal widgets that share a row without clobbering each other."""

# Colour
from termly.colorizer import (
    Color,
    ColorFormatter,
    color_enabled,
    colorize,
    format_in_color,
    reset_color_cache,
    write_in_color,
    write_line_in_color,
)

# Configuration
from termly.config import LiveOptions

# Cursor control
from termly.cursor import CursorController

# Geometry
from termly.geometry import Margin, erase_width, footprint

# Regions and the registry
from termly.region import LiveRegion, RegionState, RegionWriter
from termly.registry import (
    LiveRegistry,
    default_registry,
    reset_default_registry,
    set_default_registry,
)

# Terminal interface and implementation
from termly.terminal import ProcessTerminal, Terminal, TerminalLostError

# Utilities
from termly.utils import strip_ansi, visible_width

# Widgets (re-exported from widgets package)
from termly.widgets import (
    BlockStyle,
    BorderStyle,
    Progress,
    ProgressBar,
    ProgressSpinner,
    Status,
    Stopwatch,
    filled_cells,
    format_elapsed,
)

__all__ = [
    # Colour
    "Color",
    "ColorFormatter",
    "color_enabled",
    "colorize",
    "format_in_color",
    "reset_color_cache",
    "write_in_color",
    "write_line_in_color",
    # Configuration
    "LiveOptions",
    # Cursor
    "CursorController",
    # Geometry
    "Margin",
    "erase_width",
    "footprint",
    # Regions
    "LiveRegion",
    "LiveRegistry",
    "RegionState",
    "RegionWriter",
    "default_registry",
    "reset_default_registry",
    "set_default_registry",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    "TerminalLostError",
    # Utilities
    "strip_ansi",
    "visible_width",
    # Widgets
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
