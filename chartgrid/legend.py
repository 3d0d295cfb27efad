from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Literal, Protocol, Sequence

from chartgrid.scales import Margins
from chartgrid.series import (
    DEFAULT_SERIES_NAME,
    OUTLIER_LABEL,
    ClusterSeries,
    HistogramSeries,
    ReferenceLine,
    Series,
)
from chartgrid.styles import Palette, PlotStyle, resolve_color


SymbolKind = Literal["circle", "cross", "square", "triangle", "line", "dashed-line", "bar"]

OUTLIER_NAME = "Outliers"
CLUSTER_NAME_PREFIX = "Cluster"
LEGEND_X_GAP = 10.0
LEGEND_TOP_GAP = 20.0
LEGEND_ROW_HEIGHT = 20.0
LEGEND_BOX_WIDTH = 120.0
LEGEND_BOX_PADDING = 10.0


@dataclass(frozen=True)
class LegendEntry:
    name: str
    style: PlotStyle
    symbol: SymbolKind
    visible: bool = True


@dataclass(frozen=True)
class LegendBox:
    x: float
    y: float
    width: float
    height: float
    row_height: float = LEGEND_ROW_HEIGHT

    def row_y(self, index: int) -> float:
        return self.y + index * self.row_height


class LegendSource(Protocol):
    kind: str
    marker_type: str
    series: Sequence[Series]
    reference_lines: Sequence[ReferenceLine]
    clusters: Sequence[ClusterSeries]
    histograms: Sequence[HistogramSeries]
    palette: Palette
    hidden_legend_items: AbstractSet[str]


def cluster_label_style(cluster: ClusterSeries, label: int, palette: Palette) -> PlotStyle:
    """Style a cluster label is both drawn and listed with."""
    if not cluster.auto_colors and label in cluster.colors:
        rgb = resolve_color(cluster.colors[label])
    else:
        rgb = palette.cluster_color(label)
    return PlotStyle(point_size=cluster.point_size, alpha=cluster.alpha).with_rgb(rgb)


def cluster_label_names(cluster: ClusterSeries) -> dict[int, str]:
    out: dict[int, str] = {}
    position = 0
    for label in cluster.unique_labels():
        if label == OUTLIER_LABEL:
            default = OUTLIER_NAME
        else:
            position += 1
            default = f"{CLUSTER_NAME_PREFIX} {position}"
        if not cluster.auto_names and label in cluster.names:
            out[label] = cluster.names[label]
        else:
            out[label] = default
    return out


def _skip_placeholder(series: Sequence[Series]) -> bool:
    return len(series) == 1 and series[0].name == DEFAULT_SERIES_NAME


def collect_legend_entries(chart: LegendSource) -> list[LegendEntry]:
    """All legend rows in priority order, hidden ones included but flagged."""
    # Rows dedupe by name within their own group. Cluster rows are further
    # scoped to their series so repeated cluster calls keep their full set.
    rows: list[tuple[object, LegendEntry]] = []
    series_symbol: SymbolKind = "line" if chart.kind == "line" else chart.marker_type  # type: ignore[assignment]

    if not _skip_placeholder(chart.series):
        for spec in chart.series:
            if spec.name:
                rows.append((("series", spec.name), LegendEntry(spec.name, spec.style, series_symbol)))

    for ref in chart.reference_lines:
        rows.append((("reference", ref.label), LegendEntry(ref.label, ref.style, "dashed-line")))

    for index, cluster in enumerate(chart.clusters):
        names = cluster_label_names(cluster)
        labels = cluster.unique_labels()
        if OUTLIER_LABEL in labels:
            style = cluster_label_style(cluster, OUTLIER_LABEL, chart.palette)
            rows.append((("cluster", index, names[OUTLIER_LABEL]), LegendEntry(names[OUTLIER_LABEL], style, "cross")))
        for label in labels:
            if label == OUTLIER_LABEL:
                continue
            style = cluster_label_style(cluster, label, chart.palette)
            rows.append((("cluster", index, names[label]), LegendEntry(names[label], style, "circle")))

    for hist in chart.histograms:
        if not hist.is_discrete:
            continue
        for name, count, style in zip(hist.categories, hist.counts.tolist(), hist.styles, strict=True):
            if count > 0:
                rows.append((("category", name), LegendEntry(name, style, "bar")))

    seen: set[object] = set()
    out: list[LegendEntry] = []
    for key, row in rows:
        if key in seen:
            continue
        seen.add(key)
        out.append(
            LegendEntry(row.name, row.style, row.symbol, visible=row.name not in chart.hidden_legend_items)
        )
    return out


def assemble_legend(chart: LegendSource) -> list[LegendEntry]:
    return [entry for entry in collect_legend_entries(chart) if entry.visible]


def legend_box(entries: Sequence[LegendEntry], width: float, margins: Margins) -> LegendBox | None:
    if not entries:
        return None
    return LegendBox(
        x=width - margins.right + LEGEND_X_GAP,
        y=margins.top + LEGEND_TOP_GAP,
        width=LEGEND_BOX_WIDTH,
        height=len(entries) * LEGEND_ROW_HEIGHT + LEGEND_BOX_PADDING,
    )
