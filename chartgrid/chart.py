from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, Sequence

import numpy as np

from chartgrid.adapters.normalize import normalize_labels, normalize_points, normalize_xy, xy_to_points
from chartgrid.errors import (
    ArityMismatchError,
    PlotDataError,
    UnsupportedReferenceLineOrientationError,
)
from chartgrid.histogram import (
    DEFAULT_CATEGORY_PREFIX,
    DISCRETE_BAR_WIDTH,
    HistogramModeGuard,
    build_continuous,
    build_discrete,
    displayed_counts,
    series_statistics,
)
from chartgrid.layout import CANONICAL_SIZE
from chartgrid.legend import LegendEntry, assemble_legend, cluster_label_style, legend_box
from chartgrid.scales import (
    DEFAULT_MARGINS,
    Bounds,
    Margins,
    PlotTransform,
    compute_histogram_bounds,
    compute_point_bounds,
    format_number,
    format_ticks_for_axis,
    generate_nice_ticks,
)
from chartgrid.series import (
    DEFAULT_SERIES_NAME,
    LINE_DASHES,
    MARKER_TYPES,
    OUTLIER_LABEL,
    REFERENCE_DASH,
    ClusterSeries,
    HistogramSeries,
    LineStyle,
    MarkerType,
    Orientation,
    Point,
    ReferenceLine,
    Series,
)
from chartgrid.sink import write_png, write_svg
from chartgrid.styles import (
    DEFAULT_PALETTE,
    DEFAULT_THEME,
    ChartTheme,
    Palette,
    PlotStyle,
    color_to_style,
    resolve_color,
)
from chartgrid.surface import DrawingSurface, open_surface


LOGGER = logging.getLogger(__name__)

ChartKind = Literal["scatter", "line", "histogram"]
CHART_KINDS: tuple[str, ...] = ("scatter", "line", "histogram")

EMPTY_PLACEHOLDER = "Empty plot"
HISTOGRAM_Y_LABEL = "Frequency"
REFERENCE_LINE_WIDTH = 1.5
REFERENCE_ALPHA = 0.8
TICK_MARK_LEN = 5.0
X_TICK_LABEL_GAP = 10.0
Y_TICK_LABEL_GAP = 10.0
AXIS_LABEL_EDGE = 15.0
TITLE_BASELINE = 25.0
DEFAULT_CLUSTER_NAME = "Clusters"


def _orientation_label(orientation: Orientation, value: float) -> str:
    prefix = "X" if orientation == "vertical" else "Y"
    return f"{prefix} = {format_number(value)}"


class Chart:
    """One 2D chart: scatter, line or histogram.

    Every drawing coordinate is computed in the chart's own local pixel space
    (``width`` x ``height``). When a chart is embedded in a
    :class:`chartgrid.grid.SubplotGrid` the grid pushes a uniform
    scale + translate on the surface before calling :meth:`render`; nothing in
    here knows about it.

    Mutators return ``self`` so calls can be chained.
    """

    def __init__(
        self,
        kind: ChartKind = "scatter",
        width: int = CANONICAL_SIZE[0],
        height: int = CANONICAL_SIZE[1],
        *,
        margins: Margins = DEFAULT_MARGINS,
        theme: ChartTheme = DEFAULT_THEME,
        palette: Palette = DEFAULT_PALETTE,
    ) -> None:
        if kind not in CHART_KINDS:
            raise ValueError(f"unsupported chart kind: {kind!r}")
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if width - margins.left - margins.right <= 0 or height - margins.top - margins.bottom <= 0:
            raise ValueError("margins leave no room for the plot area")
        self.kind: ChartKind = kind
        self.width = int(width)
        self.height = int(height)
        self.margins = margins
        self.theme = theme
        self.palette = palette

        self.marker_type: MarkerType = "circle"
        self.line_style: LineStyle = "solid"
        self.line_width = 2.0
        self.show_markers = False

        self.title = ""
        self.x_label = ""
        self.y_label = ""
        self.series: list[Series] = []
        self.clusters: list[ClusterSeries] = []
        self.reference_lines: list[ReferenceLine] = []
        self.histograms: list[HistogramSeries] = []
        self.hidden_legend_items: set[str] = set()
        self.legend_enabled = True
        self.cumulative = False
        self._mode = HistogramModeGuard()
        self._bounds_override: Bounds | None = None
        self._bounds_cache: Bounds | None = None
        self._bounds_dirty = True
        self.clear()

    def __repr__(self) -> str:
        return f"Chart(kind={self.kind!r}, width={self.width}, height={self.height})"

    # -- guards ---------------------------------------------------------------

    def _require(self, *kinds: str) -> None:
        if self.kind not in kinds:
            raise PlotDataError(f"operation not supported on a {self.kind} chart")

    def _touch(self) -> None:
        self._bounds_dirty = True

    @property
    def histogram_mode(self) -> str | None:
        return self._mode.mode

    # -- point series ---------------------------------------------------------

    def add_series(self, name: str, points: Any, style: PlotStyle | None = None) -> "Chart":
        self._require("scatter", "line")
        pts = normalize_points(points)
        if style is None:
            style = self.palette.auto_style(len(self.series), line_width=self.line_width)
        self.series.append(Series(name=name, style=style, points=pts))
        self._touch()
        return self

    def add_series_point(self, series_name: str, x: float, y: float) -> "Chart":
        self._require("scatter", "line")
        for spec in self.series:
            if spec.name == series_name:
                spec.points.append(Point(float(x), float(y)))
                self._touch()
                return self
        return self.add_series(series_name, [(x, y)])

    def _placeholder_series(self, style: PlotStyle | None) -> Series:
        if not self.series:
            self.series.append(Series(name=DEFAULT_SERIES_NAME, style=style or PlotStyle()))
        return self.series[0]

    def add_point(self, x: float, y: float, style: PlotStyle | None = None) -> "Chart":
        self._require("scatter", "line")
        self._placeholder_series(style).points.append(Point(float(x), float(y)))
        self._touch()
        return self

    def add_points(self, points: Any, style: PlotStyle | None = None) -> "Chart":
        self._require("scatter", "line")
        pts = normalize_points(points)
        self._placeholder_series(style).points.extend(pts)
        self._touch()
        return self

    def _named_style(self, color: str) -> PlotStyle:
        if color == "auto":
            return self.palette.auto_style(len(self.series), line_width=self.line_width)
        return color_to_style(color, line_width=self.line_width)

    def add_scatter(self, name: str, x: Any, y: Any, color: str = "auto") -> "Chart":
        self._require("scatter")
        pts = xy_to_points(x, y)
        self.series.append(Series(name=name, style=self._named_style(color), points=pts))
        self._touch()
        return self

    def add_line(self, name: str, x: Any, y: Any, color: str = "auto") -> "Chart":
        self._require("line")
        pts = xy_to_points(x, y)
        self.series.append(Series(name=name, style=self._named_style(color), points=pts))
        self._touch()
        return self

    # -- clusters ---------------------------------------------------------------

    def add_clusters(
        self,
        x: Any,
        y: Any,
        labels: Any,
        *,
        name: str = DEFAULT_CLUSTER_NAME,
        point_size: float = 3.0,
        alpha: float = 0.8,
        names: Mapping[int, str] | None = None,
        colors: Mapping[int, str] | None = None,
    ) -> "Chart":
        self._require("scatter", "line")
        x_arr, y_arr, mask = normalize_xy(x, y)
        label_list = normalize_labels(labels)
        if len(label_list) != x_arr.size:
            raise ArityMismatchError(f"labels length {len(label_list)} does not match points length {x_arr.size}")
        keep = mask.tolist()
        pts = [Point(float(px), float(py)) for px, py, ok in zip(x_arr.tolist(), y_arr.tolist(), keep, strict=True) if ok]
        kept_labels = [lbl for lbl, ok in zip(label_list, keep, strict=True) if ok]
        self.clusters.append(
            ClusterSeries(
                name=name,
                points=pts,
                labels=kept_labels,
                point_size=point_size,
                alpha=alpha,
                names=dict(names or {}),
                colors=dict(colors or {}),
                auto_names=names is None,
                auto_colors=colors is None,
            )
        )
        self._touch()
        return self

    def add_cluster_point(self, series_name: str, x: float, y: float, label: int) -> "Chart":
        self._require("scatter", "line")
        if int(label) != label or label < OUTLIER_LABEL:
            raise PlotDataError("cluster labels must be integers >= -1")
        target = next((c for c in self.clusters if c.name == series_name), None)
        if target is None:
            target = ClusterSeries(name=series_name)
            self.clusters.append(target)
        target.points.append(Point(float(x), float(y)))
        target.labels.append(int(label))
        self._touch()
        return self

    # -- reference lines --------------------------------------------------------

    def add_reference_line(
        self,
        orientation: Orientation,
        value: float,
        label: str | None = None,
        style: PlotStyle | None = None,
    ) -> "Chart":
        if orientation not in ("vertical", "horizontal"):
            raise PlotDataError(f"unsupported reference line orientation: {orientation!r}")
        if orientation == "vertical" and self._mode.is_discrete:
            raise UnsupportedReferenceLineOrientationError(
                "vertical reference lines are not allowed on a discrete histogram; use a horizontal line"
            )
        value = float(value)
        if not np.isfinite(value):
            raise PlotDataError("reference line value must be finite")
        if style is None:
            color = self.palette.reference_color(len(self.series), len(self.reference_lines))
            style = PlotStyle(line_width=REFERENCE_LINE_WIDTH, alpha=REFERENCE_ALPHA).with_rgb(resolve_color(color))
        if not label:
            label = _orientation_label(orientation, value)
        self.reference_lines.append(ReferenceLine(orientation=orientation, value=value, style=style, label=label))
        return self

    def add_vertical_line(self, value: float, label: str | None = None, color: str | None = None) -> "Chart":
        style = color_to_style(color, 2.0, 2.0) if color else None
        return self.add_reference_line("vertical", value, label, style)

    def add_horizontal_line(self, value: float, label: str | None = None, color: str | None = None) -> "Chart":
        style = color_to_style(color, 2.0, 2.0) if color else None
        return self.add_reference_line("horizontal", value, label, style)

    def clear_reference_lines(self) -> "Chart":
        self.reference_lines.clear()
        return self

    # -- histograms -------------------------------------------------------------

    def add_histogram(
        self,
        name: str,
        values: Any,
        *,
        color: str = "auto",
        bins: int | Sequence[float] | np.ndarray = 0,
    ) -> "Chart":
        """Bin continuous samples; ``bins`` is a count (0 = Sturges) or explicit edges."""
        self._require("histogram")
        self._mode.check("continuous")
        if color == "auto":
            style = self.palette.auto_style(len(self.histograms))
        else:
            style = color_to_style(color)
        hist = build_continuous(name, values, style, bins=bins)
        if hist is None:
            return self
        self._mode.commit("continuous")
        self.histograms.append(hist)
        self._touch()
        return self

    def add_discrete_histogram(
        self,
        counts: Any,
        names: Sequence[str] | None = None,
        colors: Sequence[str] | None = None,
        *,
        name: str = "",
        prefix: str = DEFAULT_CATEGORY_PREFIX,
    ) -> "Chart":
        self._require("histogram")
        self._mode.check("discrete")
        if any(ref.is_vertical for ref in self.reference_lines):
            raise UnsupportedReferenceLineOrientationError(
                "chart already has vertical reference lines; discrete histograms cannot hold them"
            )
        hist = build_discrete(name, counts, self.palette, categories=names, colors=colors, prefix=prefix)
        if hist is None:
            return self
        self._mode.commit("discrete")
        self.histograms.append(hist)
        self._touch()
        return self

    def set_cumulative(self, enabled: bool) -> "Chart":
        self._require("histogram")
        self.cumulative = bool(enabled)
        self._touch()
        return self

    def histogram_statistics(self) -> dict[str, tuple[float, float]]:
        """(mean, population std) of the raw samples of every continuous series."""
        out: dict[str, tuple[float, float]] = {}
        for hist in self.histograms:
            if hist.values is not None:
                out[hist.name] = series_statistics(hist.values)
        return out

    # -- line / marker options -------------------------------------------------

    def set_marker_type(self, marker: MarkerType) -> "Chart":
        self._require("scatter", "line")
        if marker not in MARKER_TYPES:
            raise PlotDataError(f"unsupported marker type: {marker!r}")
        self.marker_type = marker
        return self

    def set_line_style(self, style: LineStyle) -> "Chart":
        self._require("line")
        if style not in LINE_DASHES:
            raise PlotDataError(f"unsupported line style: {style!r}")
        self.line_style = style
        return self

    def set_line_width(self, width: float) -> "Chart":
        self._require("line")
        if width <= 0:
            raise ValueError("line width must be > 0")
        self.line_width = float(width)
        return self

    def set_show_markers(self, enabled: bool) -> "Chart":
        self._require("line")
        self.show_markers = bool(enabled)
        return self

    # -- labels -----------------------------------------------------------------

    def set_title(self, title: str) -> "Chart":
        self.title = title
        return self

    def set_xlabel(self, label: str) -> "Chart":
        self.x_label = label
        return self

    def set_ylabel(self, label: str) -> "Chart":
        self.y_label = label
        return self

    def set_labels(self, title: str, x_label: str, y_label: str) -> "Chart":
        self.title = title
        self.x_label = x_label
        self.y_label = y_label
        return self

    # -- bounds / ticks -------------------------------------------------------

    def set_bounds(self, min_x: float, max_x: float, min_y: float, max_y: float) -> "Chart":
        if not min_x < max_x or not min_y < max_y:
            raise ValueError("bounds require min_x < max_x and min_y < max_y")
        self._bounds_override = Bounds(float(min_x), float(max_x), float(min_y), float(max_y))
        return self

    def clear_bounds(self) -> "Chart":
        self._bounds_override = None
        self._touch()
        return self

    @property
    def bounds_overridden(self) -> bool:
        return self._bounds_override is not None

    def bounds(self) -> Bounds | None:
        if self._bounds_override is not None:
            return self._bounds_override
        if self._bounds_dirty:
            if self.kind == "histogram":
                self._bounds_cache = compute_histogram_bounds(self.histograms, cumulative=self.cumulative)
            else:
                self._bounds_cache = compute_point_bounds(self.series, self.clusters)
            self._bounds_dirty = False
        return self._bounds_cache

    def ticks(self) -> tuple[np.ndarray, np.ndarray]:
        bounds = self.bounds()
        if bounds is None:
            return np.zeros(0), np.zeros(0)
        tx, ty = self.theme.tick_targets
        if self._mode.is_discrete:
            x_ticks = np.arange(self._category_count(), dtype=np.float64)
        else:
            x_ticks = generate_nice_ticks(bounds.min_x, bounds.max_x, tx)
        return x_ticks, generate_nice_ticks(bounds.min_y, bounds.max_y, ty)

    def transform(self) -> PlotTransform | None:
        bounds = self.bounds()
        if bounds is None:
            return None
        return PlotTransform(bounds=bounds, width=self.width, height=self.height, margins=self.margins)

    def _category_count(self) -> int:
        return max((int(h.counts.size) for h in self.histograms if h.is_discrete), default=0)

    def _category_labels(self) -> list[str]:
        longest: tuple[str, ...] = ()
        for hist in self.histograms:
            if hist.is_discrete and len(hist.categories) > len(longest):
                longest = hist.categories
        return list(longest)

    # -- legend -------------------------------------------------------------------

    def set_legend_enabled(self, enabled: bool) -> "Chart":
        self.legend_enabled = bool(enabled)
        return self

    def hide_legend_item(self, name: str) -> "Chart":
        self.hidden_legend_items.add(name)
        return self

    def show_legend_item(self, name: str) -> "Chart":
        self.hidden_legend_items.discard(name)
        return self

    def show_all_legend_items(self) -> "Chart":
        self.hidden_legend_items.clear()
        return self

    def legend_entries(self) -> list[LegendEntry]:
        return assemble_legend(self)

    # -- lifecycle ----------------------------------------------------------------

    def clear(self) -> "Chart":
        self.series.clear()
        self.clusters.clear()
        self.reference_lines.clear()
        self.histograms.clear()
        self.hidden_legend_items.clear()
        self.legend_enabled = True
        self.cumulative = False
        self._mode.reset()
        self._bounds_override = None
        self._bounds_cache = None
        self._bounds_dirty = True
        self.title = ""
        self.x_label = ""
        self.y_label = HISTOGRAM_Y_LABEL if self.kind == "histogram" else ""
        return self

    # -- rendering ------------------------------------------------------------------

    def render(self, surface: DrawingSurface) -> None:
        """Issue every drawing call for this chart in local coordinates."""
        transform = self.transform()
        LOGGER.debug("render %r bounds=%s", self, None if transform is None else transform.bounds)
        surface.fill_rect(0, 0, self.width, self.height, self.theme.background)
        if transform is None:
            self._draw_axes(surface)
            self._draw_axis_labels(surface)
            self._draw_title(surface)
            self._draw_placeholder(surface)
            self._draw_legend(surface)
            return

        x_ticks, y_ticks = self.ticks()
        self._draw_grid(surface, transform, x_ticks, y_ticks)
        self._draw_axes(surface)
        self._draw_ticks(surface, transform, x_ticks, y_ticks)
        self._draw_axis_labels(surface)
        self._draw_title(surface)
        if self.kind == "histogram":
            self._draw_histograms(surface, transform)
        else:
            self._draw_clusters(surface, transform)
            self._draw_series(surface, transform)
        self._draw_reference_lines(surface, transform)
        self._draw_legend(surface)

    def to_rgba(self) -> np.ndarray:
        with open_surface("raster", self.width, self.height, self.theme.background) as surface:
            self.render(surface)
            return surface.to_rgba()  # type: ignore[attr-defined]

    def save_png(self, path: str) -> bool:
        with open_surface("raster", self.width, self.height, self.theme.background) as surface:
            self.render(surface)
            return write_png(surface, path)

    def save_svg(self, path: str) -> bool:
        with open_surface("svg", self.width, self.height, self.theme.background) as surface:
            self.render(surface)
            return write_svg(surface, path)

    def _plot_edges(self) -> tuple[float, float, float, float]:
        m = self.margins
        return (m.left, m.top, self.width - m.right, self.height - m.bottom)

    def _draw_grid(self, surface: DrawingSurface, transform: PlotTransform, x_ticks: np.ndarray, y_ticks: np.ndarray) -> None:
        x0, y0, x1, y1 = self._plot_edges()
        color = self.theme.grid_color
        for tick in x_ticks.tolist():
            sx, _ = transform.map_point(tick, transform.bounds.min_y)
            surface.draw_polyline([sx, sx], [y0, y1], color, self.theme.grid_width)
        for tick in y_ticks.tolist():
            _, sy = transform.map_point(transform.bounds.min_x, tick)
            surface.draw_polyline([x0, x1], [sy, sy], color, self.theme.grid_width)

    def _draw_axes(self, surface: DrawingSurface) -> None:
        x0, y0, x1, y1 = self._plot_edges()
        surface.draw_polyline([x0, x1], [y1, y1], self.theme.axis_color, self.theme.axis_width)
        surface.draw_polyline([x0, x0], [y0, y1], self.theme.axis_color, self.theme.axis_width)

    def _draw_ticks(self, surface: DrawingSurface, transform: PlotTransform, x_ticks: np.ndarray, y_ticks: np.ndarray) -> None:
        x0, _, _, y1 = self._plot_edges()
        size = self.theme.tick_font_px
        color = self.theme.text_color
        if self._mode.is_discrete:
            x_labels = self._category_labels()
        else:
            x_labels = format_ticks_for_axis(x_ticks)
        for tick, label in zip(x_ticks.tolist(), x_labels, strict=False):
            sx, _ = transform.map_point(tick, transform.bounds.min_y)
            surface.draw_polyline([sx, sx], [y1, y1 + TICK_MARK_LEN], self.theme.axis_color, 1.0)
            w, _ = surface.text_extent(label, size)
            surface.draw_text(sx - w / 2.0, y1 + X_TICK_LABEL_GAP, label, color, size)
        for tick, label in zip(y_ticks.tolist(), format_ticks_for_axis(y_ticks), strict=True):
            _, sy = transform.map_point(transform.bounds.min_x, tick)
            surface.draw_polyline([x0, x0 - TICK_MARK_LEN], [sy, sy], self.theme.axis_color, 1.0)
            w, h = surface.text_extent(label, size)
            surface.draw_text(x0 - w - Y_TICK_LABEL_GAP, sy - h / 2.0, label, color, size)

    def _draw_axis_labels(self, surface: DrawingSurface) -> None:
        x0, y0, x1, y1 = self._plot_edges()
        size = self.theme.label_font_px
        if self.x_label:
            w, h = surface.text_extent(self.x_label, size, bold=True)
            surface.draw_text(
                (x0 + x1) / 2.0 - w / 2.0,
                self.height - AXIS_LABEL_EDGE - h,
                self.x_label,
                self.theme.text_color,
                size,
                bold=True,
            )
        if self.y_label:
            w, h = surface.text_extent(self.y_label, size, bold=True)
            # Rotated box is h wide and w tall.
            surface.draw_text(
                AXIS_LABEL_EDGE - h,
                (y0 + y1) / 2.0 - w / 2.0,
                self.y_label,
                self.theme.text_color,
                size,
                bold=True,
                rotate_deg=90,
            )

    def _draw_title(self, surface: DrawingSurface) -> None:
        if not self.title:
            return
        size = self.theme.title_font_px
        w, h = surface.text_extent(self.title, size, bold=True)
        surface.draw_text((self.width - w) / 2.0, TITLE_BASELINE - h, self.title, self.theme.text_color, size, bold=True)

    def _draw_placeholder(self, surface: DrawingSurface) -> None:
        x0, y0, x1, y1 = self._plot_edges()
        size = self.theme.placeholder_font_px
        w, h = surface.text_extent(EMPTY_PLACEHOLDER, size)
        surface.draw_text(
            (x0 + x1) / 2.0 - w / 2.0,
            (y0 + y1) / 2.0 - h / 2.0,
            EMPTY_PLACEHOLDER,
            self.theme.placeholder_color,
            size,
        )

    def _draw_series(self, surface: DrawingSurface, transform: PlotTransform) -> None:
        for spec in self.series:
            if not spec.points:
                continue
            xs, ys = transform.map_points(*spec.xy())
            color = spec.style.rgba()
            if self.kind == "line":
                if xs.size >= 2:
                    surface.draw_polyline(xs, ys, color, self.line_width, dash=LINE_DASHES[self.line_style])
                if not self.show_markers:
                    continue
            for px, py in zip(xs.tolist(), ys.tolist(), strict=True):
                surface.draw_marker(px, py, self.marker_type, spec.style.point_size, color)

    def _draw_clusters(self, surface: DrawingSurface, transform: PlotTransform) -> None:
        for cluster in self.clusters:
            labels = cluster.unique_labels()
            # Outliers underneath, clusters on top.
            ordered = ([OUTLIER_LABEL] if OUTLIER_LABEL in labels else []) + [lbl for lbl in labels if lbl != OUTLIER_LABEL]
            for label in ordered:
                pts = cluster.points_with_label(label)
                style = cluster_label_style(cluster, label, self.palette)
                color = style.rgba()
                if self.kind == "line":
                    if len(pts) < 2:
                        continue
                    pts = sorted(pts, key=lambda p: p.x)
                    xs, ys = transform.map_points([p.x for p in pts], [p.y for p in pts])
                    dash = LINE_DASHES["dashed"] if label == OUTLIER_LABEL else LINE_DASHES[self.line_style]
                    surface.draw_polyline(xs, ys, color, self.line_width, dash=dash)
                    continue
                kind = "cross" if label == OUTLIER_LABEL else "circle"
                xs, ys = transform.map_points([p.x for p in pts], [p.y for p in pts])
                for px, py in zip(xs.tolist(), ys.tolist(), strict=True):
                    surface.draw_marker(px, py, kind, cluster.point_size, color)

    def _draw_bar(self, surface: DrawingSurface, transform: PlotTransform, left: float, right: float, top: float, style: PlotStyle) -> None:
        sx0, sy0 = transform.map_point(left, 0.0)
        sx1, sy1 = transform.map_point(right, top)
        x, y = min(sx0, sx1), min(sy0, sy1)
        w, h = abs(sx1 - sx0), abs(sy1 - sy0)
        surface.fill_rect(x, y, w, h, style.rgba())
        surface.stroke_rect(x, y, w, h, style.darkened(0.7).rgba(), 1.0)

    def _draw_histograms(self, surface: DrawingSurface, transform: PlotTransform) -> None:
        discrete = [h for h in self.histograms if h.is_discrete]
        slot = DISCRETE_BAR_WIDTH / max(1, len(discrete))
        k = 0
        for hist in self.histograms:
            counts = displayed_counts(hist, cumulative=self.cumulative).tolist()
            if hist.is_discrete:
                for i, (count, style) in enumerate(zip(counts, hist.styles, strict=True)):
                    left = i - DISCRETE_BAR_WIDTH / 2.0 + k * slot
                    self._draw_bar(surface, transform, left, left + slot, float(count), style)
                k += 1
                continue
            if hist.edges is None or hist.style is None:
                continue
            edges = hist.edges.tolist()
            for i, count in enumerate(counts):
                self._draw_bar(surface, transform, edges[i], edges[i + 1], float(count), hist.style)

    def _draw_reference_lines(self, surface: DrawingSurface, transform: PlotTransform) -> None:
        x0, y0, x1, y1 = self._plot_edges()
        for ref in self.reference_lines:
            color = ref.style.rgba()
            if ref.is_vertical:
                if not transform.contains_x(ref.value):
                    continue
                sx, _ = transform.map_point(ref.value, transform.bounds.min_y)
                surface.draw_polyline([sx, sx], [y0, y1], color, ref.style.line_width, dash=REFERENCE_DASH)
            else:
                if not transform.contains_y(ref.value):
                    continue
                _, sy = transform.map_point(transform.bounds.min_x, ref.value)
                surface.draw_polyline([x0, x1], [sy, sy], color, ref.style.line_width, dash=REFERENCE_DASH)

    def _draw_legend(self, surface: DrawingSurface) -> None:
        if not self.legend_enabled:
            return
        entries = self.legend_entries()
        box = legend_box(entries, self.width, self.margins)
        if box is None:
            return
        surface.fill_rect(box.x - 5, box.y - 15, box.width, box.height, self.theme.legend_fill)
        surface.stroke_rect(box.x - 5, box.y - 15, box.width, box.height, self.theme.legend_border, 1.0)
        size = self.theme.legend_font_px
        for i, entry in enumerate(entries):
            y = box.row_y(i)
            self._draw_legend_symbol(surface, entry, box.x, y)
            _, h = surface.text_extent(entry.name, size)
            surface.draw_text(box.x + 20, y - h / 2.0, entry.name, self.theme.text_color, size)

    def _draw_legend_symbol(self, surface: DrawingSurface, entry: LegendEntry, x: float, y: float) -> None:
        color = entry.style.rgba()
        if entry.symbol in ("line", "dashed-line"):
            dash = REFERENCE_DASH if entry.symbol == "dashed-line" else LINE_DASHES[self.line_style]
            surface.draw_polyline([x + 2, x + 14], [y, y], color, entry.style.line_width, dash=dash)
        elif entry.symbol == "bar":
            surface.fill_rect(x + 3, y - 5, 10, 10, color)
            surface.stroke_rect(x + 3, y - 5, 10, 10, entry.style.darkened(0.7).rgba(), 1.0)
        else:
            surface.draw_marker(x + 8, y, entry.symbol, entry.style.point_size + 1, color)  # type: ignore[arg-type]
