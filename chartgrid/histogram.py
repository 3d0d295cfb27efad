from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import numpy as np

from chartgrid.adapters.normalize import coerce_1d_numeric, normalize_values
from chartgrid.errors import ArityMismatchError, IncompatibleHistogramModeError, PlotDataError
from chartgrid.series import HistogramMode, HistogramSeries
from chartgrid.styles import Palette, PlotStyle, color_to_style


LOGGER = logging.getLogger(__name__)

STURGES_CAP = 20
LAST_EDGE_NUDGE = 1e-10
DISCRETE_BAR_WIDTH = 0.8
DEFAULT_CATEGORY_PREFIX = "Category"


def sturges_bin_count(n: int, cap: int = STURGES_CAP) -> int:
    if n <= 1:
        return 1
    return min(cap, max(1, int(math.ceil(math.log2(n) + 1))))


def calculate_bins(values: np.ndarray, bin_count: int = 0, cap: int = STURGES_CAP) -> np.ndarray:
    """Equal-width bin edges spanning the data.

    ``bin_count <= 0`` picks the count with Sturges' rule. The last edge is
    nudged up so the maximum sample lands inside the final half-open bin.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise PlotDataError("cannot bin an empty sample")
    if bin_count <= 0:
        bin_count = sturges_bin_count(int(arr.size), cap=cap)

    lo = float(np.min(arr))
    hi = float(np.max(arr))
    if lo == hi:
        lo -= 0.5
        hi += 0.5
    edges = np.linspace(lo, hi, bin_count + 1, dtype=np.float64)
    edges[-1] = max(hi + LAST_EDGE_NUDGE, float(np.nextafter(hi, np.inf)))
    return edges


def validate_edges(edges: Any) -> np.ndarray:
    arr = coerce_1d_numeric(edges, label="edges")
    if arr.size < 2:
        raise PlotDataError("histogram needs at least two bin edges")
    if not np.all(np.isfinite(arr)):
        raise PlotDataError("bin edges must be finite")
    if np.any(np.diff(arr) <= 0):
        raise PlotDataError("bin edges must be strictly increasing")
    return arr


def calculate_counts(values: np.ndarray, edges: np.ndarray) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    edges = np.asarray(edges, dtype=np.float64)
    bins = edges.size - 1
    idx = np.searchsorted(edges, arr, side="right") - 1
    inside = (idx >= 0) & (idx < bins)
    return np.bincount(idx[inside], minlength=bins).astype(np.int64)


def calculate_cumulative(counts: np.ndarray) -> np.ndarray:
    return np.cumsum(np.asarray(counts), dtype=np.int64)


def displayed_counts(hist: HistogramSeries, *, cumulative: bool = False) -> np.ndarray:
    if cumulative and not hist.is_discrete:
        return calculate_cumulative(hist.counts)
    return np.asarray(hist.counts)


def series_statistics(values: np.ndarray) -> tuple[float, float]:
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return (0.0, 0.0)
    return (float(np.mean(arr)), float(np.std(arr)))


class HistogramModeGuard:
    """Tracks which histogram mode a chart has committed to."""

    def __init__(self) -> None:
        self._mode: HistogramMode | None = None

    @property
    def mode(self) -> HistogramMode | None:
        return self._mode

    @property
    def is_discrete(self) -> bool:
        return self._mode == "discrete"

    def check(self, mode: HistogramMode) -> None:
        if self._mode is not None and self._mode != mode:
            raise IncompatibleHistogramModeError(
                f"chart already holds {self._mode} histogram data; cannot add {mode} data"
            )

    def commit(self, mode: HistogramMode) -> None:
        self.check(mode)
        self._mode = mode

    def reset(self) -> None:
        self._mode = None


def build_continuous(
    name: str,
    values: Any,
    style: PlotStyle,
    *,
    bins: int | Sequence[float] | np.ndarray = 0,
    cap: int = STURGES_CAP,
) -> HistogramSeries | None:
    arr = normalize_values(values)
    if arr.size == 0:
        LOGGER.warning("ignoring empty histogram data for %r", name)
        return None
    if isinstance(bins, (int, np.integer)):
        edges = calculate_bins(arr, int(bins), cap=cap)
    else:
        edges = validate_edges(bins)
    counts = calculate_counts(arr, edges)
    return HistogramSeries(name=name, mode="continuous", counts=counts, style=style, values=arr, edges=edges)


def build_discrete(
    name: str,
    counts: Any,
    palette: Palette,
    *,
    categories: Sequence[str] | None = None,
    colors: Sequence[str] | None = None,
    prefix: str = DEFAULT_CATEGORY_PREFIX,
) -> HistogramSeries | None:
    arr = coerce_1d_numeric(counts, label="counts")
    if arr.size == 0:
        LOGGER.warning("ignoring empty discrete histogram data for %r", name)
        return None
    if not np.all(np.isfinite(arr)) or np.any(arr < 0):
        raise PlotDataError("discrete histogram counts must be finite and >= 0")
    n = int(arr.size)
    if categories is not None and len(categories) != n:
        raise ArityMismatchError(f"categories length {len(categories)} does not match counts length {n}")
    if colors is not None and len(colors) != n:
        raise ArityMismatchError(f"colors length {len(colors)} does not match counts length {n}")

    names = tuple(categories) if categories is not None else tuple(f"{prefix} {i + 1}" for i in range(n))
    color_names = tuple(colors) if colors is not None else tuple(palette.auto_color(i) for i in range(n))
    styles = tuple(color_to_style(c) for c in color_names)
    return HistogramSeries(
        name=name,
        mode="discrete",
        counts=arr,
        categories=names,
        styles=styles,
    )
