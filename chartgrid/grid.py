from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Literal

import numpy as np

from chartgrid.chart import Chart, ChartKind
from chartgrid.errors import PlotDataError, SubplotIndexError
from chartgrid.layout import (
    CANONICAL_SIZE,
    DEFAULT_GRID_SIZE,
    DEFAULT_SPACING,
    GridLayout,
    compute_grid_layout,
    title_height_for,
)
from chartgrid.scales import CellPlacement
from chartgrid.sink import write_png, write_svg
from chartgrid.styles import DEFAULT_THEME, ChartTheme
from chartgrid.surface import DrawingSurface, open_surface


LOGGER = logging.getLogger(__name__)

CellState = Literal["unconfigured", "configured"]


@dataclass
class SubplotCell:
    row: int
    col: int
    chart: Chart | None = None
    placement: CellPlacement | None = None

    @property
    def state(self) -> CellState:
        return "unconfigured" if self.chart is None else "configured"


@dataclass
class SubplotGrid:
    """Fixed rows x cols arena of independently scaled charts sharing one canvas."""

    rows: int
    cols: int
    width: int = DEFAULT_GRID_SIZE[0]
    height: int = DEFAULT_GRID_SIZE[1]
    spacing: float = DEFAULT_SPACING
    theme: ChartTheme = DEFAULT_THEME
    title: str = ""
    _cells: dict[tuple[int, int], SubplotCell] = field(default_factory=dict)
    _last_layout: GridLayout | None = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError("rows and cols must be > 0")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if not 0.0 <= self.spacing < 0.5:
            raise ValueError("spacing must be in [0, 0.5)")
        self._cells = {(r, c): SubplotCell(row=r, col=c) for r in range(self.rows) for c in range(self.cols)}

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise SubplotIndexError(f"subplot ({row}, {col}) outside a {self.rows}x{self.cols} grid")

    def cell(self, row: int, col: int) -> SubplotCell:
        self._check_index(row, col)
        return self._cells[(row, col)]

    def cells(self) -> list[SubplotCell]:
        return [self._cells[(r, c)] for r in range(self.rows) for c in range(self.cols)]

    def chart(self, row: int, col: int, kind: ChartKind = "scatter") -> Chart:
        """Chart at (row, col), created on first access with the given kind."""
        target = self.cell(row, col)
        if target.chart is None:
            target.chart = Chart(kind, CANONICAL_SIZE[0], CANONICAL_SIZE[1], theme=self.theme)
        elif target.chart.kind != kind:
            raise PlotDataError(
                f"subplot ({row}, {col}) already holds a {target.chart.kind} chart, not {kind}"
            )
        return target.chart

    def set_chart(self, row: int, col: int, chart: Chart) -> "SubplotGrid":
        self.cell(row, col).chart = chart
        return self

    def set_title(self, title: str) -> "SubplotGrid":
        self.title = title
        return self

    def title_height(self, surface: DrawingSurface) -> float:
        if not self.title:
            return 0.0
        _, h = surface.text_extent(self.title, self.theme.grid_title_font_px, bold=True)
        return title_height_for(h)

    def layout(self, surface: DrawingSurface) -> GridLayout:
        """Recompute every cell placement, measuring the title on ``surface``."""
        result = compute_grid_layout(
            self.rows,
            self.cols,
            self.width,
            self.height,
            self.spacing,
            title_height=self.title_height(surface),
            local_size=CANONICAL_SIZE,
        )
        for placement in result.placements:
            cell = self._cells[(placement.row, placement.col)]
            if cell.chart is not None and (cell.chart.width, cell.chart.height) != CANONICAL_SIZE:
                placement = result.fit(cell.row, cell.col, (cell.chart.width, cell.chart.height))
            cell.placement = placement
        self._last_layout = result
        return result

    @property
    def last_layout(self) -> GridLayout | None:
        return self._last_layout

    def render(self, surface: DrawingSurface) -> None:
        result = self.layout(surface)
        surface.fill_rect(0, 0, self.width, self.height, self.theme.background)
        if self.title:
            size = self.theme.grid_title_font_px
            w, _ = surface.text_extent(self.title, size, bold=True)
            surface.draw_text((self.width - w) / 2.0, result.title_top, self.title, self.theme.text_color, size, bold=True)

        for cell in self.cells():
            if cell.chart is None or cell.placement is None:
                continue
            placement = cell.placement
            LOGGER.debug("render cell (%d, %d) at (%.1f, %.1f) x%.3f", cell.row, cell.col, placement.x_offset, placement.y_offset, placement.scale)
            surface.save()
            try:
                surface.translate(placement.x_offset, placement.y_offset)
                surface.scale(placement.scale)
                cell.chart.render(surface)
            finally:
                surface.restore()

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
