from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

import numpy as np

from chartgrid.styles import PlotStyle


MarkerType = Literal["circle", "cross", "square", "triangle"]
LineStyle = Literal["solid", "dashed", "dotted"]
Orientation = Literal["vertical", "horizontal"]
HistogramMode = Literal["continuous", "discrete"]

MARKER_TYPES: tuple[str, ...] = ("circle", "cross", "square", "triangle")
LINE_DASHES: dict[str, tuple[float, ...]] = {
    "solid": (),
    "dashed": (10.0, 5.0),
    "dotted": (2.0, 3.0),
}
REFERENCE_DASH: tuple[float, ...] = (4.0, 4.0)
DEFAULT_SERIES_NAME = "Default"
OUTLIER_LABEL = -1


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass
class Series:
    name: str
    style: PlotStyle
    points: list[Point] = field(default_factory=list)

    def xy(self) -> tuple[np.ndarray, np.ndarray]:
        xs = np.fromiter((p.x for p in self.points), dtype=np.float64, count=len(self.points))
        ys = np.fromiter((p.y for p in self.points), dtype=np.float64, count=len(self.points))
        return xs, ys


@dataclass
class ClusterSeries:
    name: str
    points: list[Point] = field(default_factory=list)
    labels: list[int] = field(default_factory=list)
    point_size: float = 3.0
    alpha: float = 0.8
    names: Mapping[int, str] = field(default_factory=dict)
    colors: Mapping[int, str] = field(default_factory=dict)
    auto_names: bool = True
    auto_colors: bool = True

    def unique_labels(self) -> list[int]:
        return sorted(set(self.labels))

    def points_with_label(self, label: int) -> list[Point]:
        return [pt for pt, lbl in zip(self.points, self.labels, strict=True) if lbl == label]


@dataclass(frozen=True)
class ReferenceLine:
    orientation: Orientation
    value: float
    style: PlotStyle
    label: str

    @property
    def is_vertical(self) -> bool:
        return self.orientation == "vertical"


@dataclass(eq=False)
class HistogramSeries:
    name: str
    mode: HistogramMode
    counts: np.ndarray
    style: PlotStyle | None = None
    values: np.ndarray | None = None
    edges: np.ndarray | None = None
    categories: tuple[str, ...] = ()
    styles: tuple[PlotStyle, ...] = ()

    @property
    def is_discrete(self) -> bool:
        return self.mode == "discrete"

    @property
    def sample_count(self) -> int:
        if self.values is None:
            return int(np.sum(self.counts))
        return int(self.values.size)
