from __future__ import annotations

from chartgrid.chart import Chart
from chartgrid.grid import SubplotGrid
from chartgrid.layout import CANONICAL_SIZE, DEFAULT_GRID_SIZE, DEFAULT_SPACING


def scatter(width: int = CANONICAL_SIZE[0], height: int = CANONICAL_SIZE[1], *, title: str = "") -> Chart:
    return Chart("scatter", width, height).set_title(title)


def line(width: int = CANONICAL_SIZE[0], height: int = CANONICAL_SIZE[1], *, title: str = "") -> Chart:
    return Chart("line", width, height).set_title(title)


def histogram(width: int = CANONICAL_SIZE[0], height: int = CANONICAL_SIZE[1], *, title: str = "") -> Chart:
    return Chart("histogram", width, height).set_title(title)


def subplots(
    rows: int,
    cols: int,
    width: int | None = None,
    height: int | None = None,
    *,
    spacing: float = DEFAULT_SPACING,
    title: str = "",
) -> SubplotGrid:
    """Grid of ``rows`` x ``cols`` cells; a missing side follows the default 4:3 aspect."""
    aspect = DEFAULT_GRID_SIZE[0] / DEFAULT_GRID_SIZE[1]
    if width is None and height is None:
        width, height = DEFAULT_GRID_SIZE
    elif width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = max(1, int(round(height * aspect)))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = max(1, int(round(width / aspect)))
    assert width is not None and height is not None
    return SubplotGrid(rows, cols, width, height, spacing, title=title)
