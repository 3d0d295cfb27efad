from __future__ import annotations

from typing import Sequence

import numpy as np

from chartgrid.raster.canvas import draw_hline, draw_vline, fill_rect, new_canvas
from chartgrid.raster.draw_lines import draw_polyline
from chartgrid.raster.draw_markers import draw_markers
from chartgrid.raster.draw_text import draw_text, text_size
from chartgrid.styles import RGBA
from chartgrid.surface import AffineStack, MarkerKind


class RasterSurface:
    """RGBA numpy canvas; drawing calls are mapped through a uniform affine stack."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        self.width = int(width)
        self.height = int(height)
        self.canvas = new_canvas(self.width, self.height, background)
        self.affine = AffineStack()
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError("surface is closed")

    def save(self) -> None:
        self.affine.save()

    def restore(self) -> None:
        self.affine.restore()

    def translate(self, dx: float, dy: float) -> None:
        self.affine.translate(dx, dy)

    def scale(self, s: float) -> None:
        self.affine.scale(s)

    def _px(self, length: float) -> int:
        return max(1, int(round(length * self.affine.current.s)))

    def draw_marker(self, x: float, y: float, kind: MarkerKind, size: float, rgba: RGBA, filled: bool = True) -> None:
        self._check_open()
        px, py = self.affine.current.apply(x, y)
        draw_markers(
            self.canvas,
            np.asarray([px]),
            np.asarray([py]),
            rgba,
            size=size * self.affine.current.s,
            kind=kind,
            filled=filled,
        )

    def draw_markers(self, xs: np.ndarray, ys: np.ndarray, kind: MarkerKind, size: float, rgba: RGBA, filled: bool = True) -> None:
        self._check_open()
        px, py = self.affine.current.apply_many(xs, ys)
        draw_markers(self.canvas, px, py, rgba, size=size * self.affine.current.s, kind=kind, filled=filled)

    def draw_polyline(
        self,
        xs: Sequence[float] | np.ndarray,
        ys: Sequence[float] | np.ndarray,
        rgba: RGBA,
        width: float,
        dash: Sequence[float] = (),
    ) -> None:
        self._check_open()
        s = self.affine.current.s
        px, py = self.affine.current.apply_many(np.asarray(xs), np.asarray(ys))
        draw_polyline(self.canvas, px, py, rgba, width=self._px(width), dash=tuple(d * s for d in dash))

    def fill_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA) -> None:
        self._check_open()
        x0, y0 = self.affine.current.apply(x, y)
        x1, y1 = self.affine.current.apply(x + w, y + h)
        fill_rect(self.canvas, int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1)), rgba)

    def stroke_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA, width: float) -> None:
        self._check_open()
        x0, y0 = self.affine.current.apply(x, y)
        x1, y1 = self.affine.current.apply(x + w, y + h)
        xa, ya, xb, yb = (int(round(v)) for v in (x0, y0, x1, y1))
        lw = self._px(width)
        draw_hline(self.canvas, xa, xb, ya, rgba, width=lw)
        draw_hline(self.canvas, xa, xb, yb, rgba, width=lw)
        draw_vline(self.canvas, xa, ya, yb, rgba, width=lw)
        draw_vline(self.canvas, xb, ya, yb, rgba, width=lw)

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        rgba: RGBA,
        size: float,
        bold: bool = False,
        rotate_deg: int = 0,
    ) -> None:
        self._check_open()
        px, py = self.affine.current.apply(x, y)
        draw_text(
            self.canvas,
            int(round(px)),
            int(round(py)),
            text,
            rgba,
            font_size_px=size * self.affine.current.s,
            bold=bold,
            rotate_deg=rotate_deg,
        )

    def text_extent(self, text: str, size: float, bold: bool = False) -> tuple[float, float]:
        w, h = text_size(text, font_size_px=size, bold=bold)
        return (float(w), float(h))

    def to_rgba(self) -> np.ndarray:
        return self.canvas.copy()

    def close(self) -> None:
        self.closed = True
