from __future__ import annotations


class PlotDataError(ValueError):
    """Invalid plotting input or chart configuration."""


class ArityMismatchError(PlotDataError):
    """Parallel inputs (x/y, points/labels, counts/names/colors) differ in length."""


class IncompatibleHistogramModeError(PlotDataError):
    """Continuous and discrete histogram data mixed on one chart."""


class UnsupportedReferenceLineOrientationError(PlotDataError):
    """Vertical reference line requested on a discrete histogram."""


class SubplotIndexError(PlotDataError, IndexError):
    """Subplot cell outside the declared grid."""
