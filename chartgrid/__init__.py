from chartgrid.api import histogram, line, scatter, subplots
from chartgrid.chart import Chart
from chartgrid.errors import (
    ArityMismatchError,
    IncompatibleHistogramModeError,
    PlotDataError,
    SubplotIndexError,
    UnsupportedReferenceLineOrientationError,
)
from chartgrid.grid import SubplotCell, SubplotGrid
from chartgrid.layout import CANONICAL_SIZE, GridLayout, compute_grid_layout
from chartgrid.legend import LegendEntry, assemble_legend
from chartgrid.scales import Bounds, CellPlacement, Margins, PlotTransform, generate_nice_ticks
from chartgrid.series import Point
from chartgrid.styles import ChartTheme, Palette, PlotStyle, color_to_style
from chartgrid.surface import DrawingSurface, open_surface

__all__ = [
    "ArityMismatchError",
    "Bounds",
    "CANONICAL_SIZE",
    "CellPlacement",
    "Chart",
    "ChartTheme",
    "DrawingSurface",
    "GridLayout",
    "IncompatibleHistogramModeError",
    "LegendEntry",
    "Margins",
    "Palette",
    "PlotDataError",
    "PlotStyle",
    "PlotTransform",
    "Point",
    "SubplotCell",
    "SubplotGrid",
    "SubplotIndexError",
    "UnsupportedReferenceLineOrientationError",
    "assemble_legend",
    "color_to_style",
    "compute_grid_layout",
    "generate_nice_ticks",
    "histogram",
    "line",
    "open_surface",
    "scatter",
    "subplots",
]
