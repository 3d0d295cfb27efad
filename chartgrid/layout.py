from __future__ import annotations

from dataclasses import dataclass

from chartgrid.errors import PlotDataError
from chartgrid.scales import CellPlacement


CANONICAL_SIZE: tuple[int, int] = (800, 600)
DEFAULT_GRID_SIZE: tuple[int, int] = (1200, 900)
DEFAULT_SPACING = 0.05
TITLE_PADDING = 10.0


@dataclass(frozen=True)
class GridLayout:
    rows: int
    cols: int
    width: float
    height: float
    cell_width: float
    cell_height: float
    spacing_x: float
    spacing_y: float
    title_height: float
    vertical_offset: float
    placements: tuple[CellPlacement, ...]

    @property
    def grid_height(self) -> float:
        return self.rows * self.cell_height + (self.rows - 1) * self.spacing_y

    @property
    def title_top(self) -> float:
        return self.vertical_offset

    def placement(self, row: int, col: int) -> CellPlacement:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise PlotDataError(f"cell ({row}, {col}) outside a {self.rows}x{self.cols} grid")
        return self.placements[row * self.cols + col]

    def fit(self, row: int, col: int, local_size: tuple[float, float]) -> CellPlacement:
        """Placement of a chart of ``local_size`` centred in the (row, col) slot."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise PlotDataError(f"cell ({row}, {col}) outside a {self.rows}x{self.cols} grid")
        local_w, local_h = local_size
        scale = min(self.cell_width / local_w, self.cell_height / local_h)
        x, y = self.cell_origin(row, col)
        return CellPlacement(
            row=row,
            col=col,
            x_offset=x + (self.cell_width - local_w * scale) / 2.0,
            y_offset=y + (self.cell_height - local_h * scale) / 2.0,
            scale=scale,
        )

    def cell_origin(self, row: int, col: int) -> tuple[float, float]:
        """Top-left corner of the cell slot before centering."""
        return (
            self.spacing_x + col * (self.cell_width + self.spacing_x),
            self.vertical_offset + self.title_height + row * (self.cell_height + self.spacing_y),
        )


def compute_grid_layout(
    rows: int,
    cols: int,
    width: float,
    height: float,
    spacing: float = DEFAULT_SPACING,
    title_height: float = 0.0,
    local_size: tuple[float, float] = CANONICAL_SIZE,
) -> GridLayout:
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be > 0")
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    if not 0.0 <= spacing < 0.5:
        raise ValueError("spacing must be in [0, 0.5)")
    if title_height < 0:
        raise ValueError("title_height must be >= 0")
    local_w, local_h = local_size
    if local_w <= 0 or local_h <= 0:
        raise ValueError("local_size must be positive")

    sw = spacing * width
    sh = spacing * height
    cell_w = (width - sw * (cols + 1)) / cols
    cell_h = (height - sh * (rows + 1) - title_height) / rows
    if cell_w <= 0 or cell_h <= 0:
        raise PlotDataError(f"grid {rows}x{cols} does not fit in {width}x{height} with spacing {spacing}")

    grid_h = rows * cell_h + (rows - 1) * sh
    vertical_offset = (height - (grid_h + title_height)) / 2.0
    scale = min(cell_w / local_w, cell_h / local_h)
    inset_x = (cell_w - local_w * scale) / 2.0
    inset_y = (cell_h - local_h * scale) / 2.0

    placements: list[CellPlacement] = []
    for i in range(rows):
        for j in range(cols):
            raw_x = sw + j * (cell_w + sw)
            raw_y = vertical_offset + title_height + i * (cell_h + sh)
            placements.append(CellPlacement(row=i, col=j, x_offset=raw_x + inset_x, y_offset=raw_y + inset_y, scale=scale))

    return GridLayout(
        rows=rows,
        cols=cols,
        width=float(width),
        height=float(height),
        cell_width=cell_w,
        cell_height=cell_h,
        spacing_x=sw,
        spacing_y=sh,
        title_height=float(title_height),
        vertical_offset=vertical_offset,
        placements=tuple(placements),
    )


def title_height_for(text_height: float) -> float:
    return text_height + TITLE_PADDING if text_height > 0 else 0.0
