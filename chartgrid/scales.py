from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
from typing import Iterable, Sequence

import numpy as np

from chartgrid.errors import PlotDataError
from chartgrid.histogram import displayed_counts
from chartgrid.series import ClusterSeries, HistogramSeries, Series


POINT_PADDING_RATIO = 0.05
HISTOGRAM_X_PADDING_RATIO = 0.02
HISTOGRAM_Y_PADDING_RATIO = 0.05
DEFAULT_TICK_TARGET = 6
TICK_EPSILON_RATIO = 0.001


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


def _padded_range(span: float) -> float:
    return 1.0 if span == 0 else span


def compute_point_bounds(
    series: Iterable[Series],
    clusters: Iterable[ClusterSeries] = (),
    *,
    padding_ratio: float = POINT_PADDING_RATIO,
) -> Bounds | None:
    points = [pt for spec in series for pt in spec.points]
    points.extend(pt for cluster in clusters for pt in cluster.points)
    if not points:
        return None
    min_x = max_x = points[0].x
    min_y = max_y = points[0].y
    for pt in points[1:]:
        min_x = min(min_x, pt.x)
        max_x = max(max_x, pt.x)
        min_y = min(min_y, pt.y)
        max_y = max(max_y, pt.y)

    x_range = _padded_range(max_x - min_x)
    y_range = _padded_range(max_y - min_y)
    return Bounds(
        min_x=min_x - x_range * padding_ratio,
        max_x=max_x + x_range * padding_ratio,
        min_y=min_y - y_range * padding_ratio,
        max_y=max_y + y_range * padding_ratio,
    )


def compute_histogram_bounds(histograms: Sequence[HistogramSeries], *, cumulative: bool = False) -> Bounds | None:
    if not histograms:
        return None
    max_count = 0.0
    for hist in histograms:
        counts = displayed_counts(hist, cumulative=cumulative)
        if counts.size:
            max_count = max(max_count, float(np.max(counts)))
    y_range = _padded_range(max_count)
    max_y = max_count + y_range * HISTOGRAM_Y_PADDING_RATIO

    if histograms[0].is_discrete:
        # Categories sit at integer positions; data values never drive X.
        last_index = max(int(hist.counts.size) for hist in histograms) - 1
        return Bounds(min_x=-0.5, max_x=last_index + 0.5, min_y=0.0, max_y=max_y)

    min_x = min(float(hist.edges[0]) for hist in histograms if hist.edges is not None)
    max_x = max(float(hist.edges[-1]) for hist in histograms if hist.edges is not None)
    x_range = _padded_range(max_x - min_x)
    return Bounds(
        min_x=min_x - x_range * HISTOGRAM_X_PADDING_RATIO,
        max_x=max_x + x_range * HISTOGRAM_X_PADDING_RATIO,
        min_y=0.0,
        max_y=max_y,
    )


def generate_nice_ticks(vmin: float, vmax: float, target: int = DEFAULT_TICK_TARGET) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        raise ValueError("tick range must be finite")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)
    if vmin > vmax:
        return np.zeros(0, dtype=np.float64)

    step = nice_step(vmax - vmin, target)
    start = math.ceil(vmin / step) * step
    limit = vmax + step * TICK_EPSILON_RATIO
    count = int(math.floor((limit - start) / step)) + 1
    ticks = start + np.arange(max(0, count), dtype=np.float64) * step
    ticks = ticks[ticks <= limit]
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def nice_step(span: float, target: int) -> float:
    raw_step = span / target
    magnitude = 10.0 ** math.floor(math.log10(raw_step))
    normalized = raw_step / magnitude
    if normalized <= 1.0:
        snapped = 1.0
    elif normalized <= 2.0:
        snapped = 2.0
    elif normalized <= 5.0:
        snapped = 5.0
    else:
        snapped = 10.0
    return snapped * magnitude


def format_number(value: float, precision: int = 2) -> str:
    out = f"{value:.{precision}f}"
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.2e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)


@dataclass(frozen=True)
class Margins:
    left: float = 80.0
    right: float = 150.0
    top: float = 60.0
    bottom: float = 80.0


DEFAULT_MARGINS = Margins()


@dataclass(frozen=True)
class CellPlacement:
    row: int
    col: int
    x_offset: float
    y_offset: float
    scale: float

    def apply(self, px: float, py: float) -> tuple[float, float]:
        return (self.x_offset + px * self.scale, self.y_offset + py * self.scale)


@dataclass(frozen=True)
class PlotTransform:
    """Data space to a chart's local pixel space, Y pointing down."""

    bounds: Bounds
    width: float
    height: float
    margins: Margins = DEFAULT_MARGINS

    def __post_init__(self) -> None:
        if self.bounds.x_range <= 0 or self.bounds.y_range <= 0:
            raise PlotDataError("bounds must have a positive x and y range")
        if self.plot_width <= 0 or self.plot_height <= 0:
            raise PlotDataError("canvas too small for margins")

    @property
    def plot_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def plot_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom

    def plot_rect(self) -> tuple[float, float, float, float]:
        return (self.margins.left, self.margins.top, self.plot_width, self.plot_height)

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        b = self.bounds
        sx = self.margins.left + (x - b.min_x) / b.x_range * self.plot_width
        sy = self.height - self.margins.bottom - (y - b.min_y) / b.y_range * self.plot_height
        return (sx, sy)

    def map_points(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        b = self.bounds
        px = self.margins.left + (np.asarray(xs, dtype=np.float64) - b.min_x) / b.x_range * self.plot_width
        py = self.height - self.margins.bottom - (np.asarray(ys, dtype=np.float64) - b.min_y) / b.y_range * self.plot_height
        return px, py

    def contains_x(self, x: float) -> bool:
        return self.bounds.min_x <= x <= self.bounds.max_x

    def contains_y(self, y: float) -> bool:
        return self.bounds.min_y <= y <= self.bounds.max_y

    def compose(self, placement: CellPlacement | None) -> "ComposedTransform":
        return ComposedTransform(local=self, placement=placement)


@dataclass(frozen=True)
class ComposedTransform:
    local: PlotTransform
    placement: CellPlacement | None = None

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        px, py = self.local.map_point(x, y)
        if self.placement is None:
            return (px, py)
        return self.placement.apply(px, py)
