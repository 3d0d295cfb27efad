from __future__ import annotations

from dataclasses import dataclass, replace
import logging


LOGGER = logging.getLogger(__name__)

RGB = tuple[float, float, float]
RGBA = tuple[int, int, int, int]

NAMED_COLORS: dict[str, RGB] = {
    "red": (1.0, 0.0, 0.0),
    "blue": (0.0, 0.0, 1.0),
    "green": (0.0, 0.7, 0.0),
    "orange": (1.0, 0.5, 0.0),
    "purple": (0.6, 0.2, 0.8),
    "cyan": (0.0, 0.8, 0.8),
    "magenta": (0.8, 0.0, 0.8),
    "yellow": (0.8, 0.8, 0.0),
    "black": (0.0, 0.0, 0.0),
    "gray": (0.5, 0.5, 0.5),
    "grey": (0.5, 0.5, 0.5),
    "darkred": (0.5, 0.0, 0.0),
    "darkblue": (0.0, 0.0, 0.5),
    "darkgreen": (0.0, 0.4, 0.0),
    "brown": (0.5, 0.3, 0.1),
    "teal": (0.0, 0.5, 0.5),
}
FALLBACK_COLOR = "blue"


def _unit(value: float, name: str) -> float:
    out = float(value)
    if not 0.0 <= out <= 1.0:
        raise ValueError(f"{name} must be in [0, 1]")
    return out


@dataclass(frozen=True)
class PlotStyle:
    point_size: float = 3.0
    line_width: float = 2.0
    r: float = 0.0
    g: float = 0.0
    b: float = 1.0
    alpha: float = 1.0
    label: str = ""

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "alpha"):
            object.__setattr__(self, name, _unit(getattr(self, name), name))
        if self.point_size < 0 or self.line_width < 0:
            raise ValueError("point_size/line_width must be >= 0")

    @property
    def rgb(self) -> RGB:
        return (self.r, self.g, self.b)

    def rgba(self, alpha_scale: float = 1.0) -> RGBA:
        a = max(0.0, min(1.0, self.alpha * alpha_scale))
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
            int(round(a * 255)),
        )

    def with_rgb(self, rgb: RGB) -> "PlotStyle":
        r, g, b = rgb
        return replace(self, r=r, g=g, b=b)

    def darkened(self, factor: float = 0.7) -> "PlotStyle":
        return replace(self, r=self.r * factor, g=self.g * factor, b=self.b * factor)


def resolve_color(name: str) -> RGB:
    key = name.strip().lower()
    rgb = NAMED_COLORS.get(key)
    if rgb is None:
        LOGGER.debug("unknown color %r, using %s", name, FALLBACK_COLOR)
        return NAMED_COLORS[FALLBACK_COLOR]
    return rgb


def color_to_style(color_name: str, point_size: float = 3.0, line_width: float = 2.0) -> PlotStyle:
    r, g, b = resolve_color(color_name)
    return PlotStyle(point_size=point_size, line_width=line_width, r=r, g=g, b=b, alpha=0.8)


@dataclass(frozen=True)
class Palette:
    """Colors a chart draws from when the caller does not name one."""

    series_colors: tuple[str, ...] = ("blue", "red", "green", "orange", "purple", "cyan", "magenta", "yellow")
    reference_colors: tuple[str, ...] = ("black", "gray", "darkred", "darkblue", "darkgreen")
    cluster_colors: tuple[RGB, ...] = (
        (0.0, 0.4, 0.8),
        (0.0, 0.7, 0.3),
        (0.6, 0.2, 0.8),
        (1.0, 0.5, 0.0),
        (0.8, 0.8, 0.0),
        (0.0, 0.8, 0.8),
        (0.8, 0.0, 0.8),
        (0.5, 0.3, 0.1),
        (0.7, 0.7, 0.7),
        (0.0, 0.5, 0.5),
        (0.5, 0.0, 0.5),
        (0.0, 0.3, 0.6),
        (0.3, 0.5, 0.0),
        (0.6, 0.3, 0.0),
        (0.4, 0.0, 0.4),
    )
    outlier_color: RGB = (1.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if not self.series_colors or not self.reference_colors or not self.cluster_colors:
            raise ValueError("palette color lists must be non-empty")

    def auto_color(self, index: int) -> str:
        return self.series_colors[index % len(self.series_colors)]

    def auto_style(self, index: int, point_size: float = 3.0, line_width: float = 2.0) -> PlotStyle:
        return color_to_style(self.auto_color(index), point_size=point_size, line_width=line_width)

    def cluster_color(self, label: int) -> RGB:
        if label == -1:
            return self.outlier_color
        return self.cluster_colors[label % len(self.cluster_colors)]

    def reference_color(self, series_count: int, line_count: int) -> str:
        # Skip colors already taken by auto-colored data series.
        used = {self.auto_color(i) for i in range(series_count)}
        for name in self.reference_colors:
            if name not in used:
                return name
        return self.reference_colors[line_count % len(self.reference_colors)]


DEFAULT_PALETTE = Palette()


@dataclass(frozen=True)
class ChartTheme:
    background: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (0, 0, 0, 255)
    grid_color: RGBA = (230, 230, 230, 204)
    text_color: RGBA = (0, 0, 0, 255)
    placeholder_color: RGBA = (128, 128, 128, 255)
    legend_fill: RGBA = (255, 255, 255, 230)
    legend_border: RGBA = (0, 0, 0, 77)
    axis_width: float = 1.5
    grid_width: float = 0.5
    tick_font_px: float = 10.0
    label_font_px: float = 12.0
    title_font_px: float = 16.0
    legend_font_px: float = 10.0
    placeholder_font_px: float = 18.0
    grid_title_font_px: float = 20.0
    tick_targets: tuple[int, int] = (6, 6)


DEFAULT_THEME = ChartTheme()
