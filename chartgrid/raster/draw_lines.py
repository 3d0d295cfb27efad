from __future__ import annotations

from typing import Sequence

import numpy as np

from chartgrid.raster.canvas import draw_pixel, fill_rect
from chartgrid.styles import RGBA


Segment = tuple[float, float, float, float]


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    dash: Sequence[float] = (),
) -> None:
    if xs.size < 2:
        return
    for x0, y0, x1, y1 in dash_segments(xs, ys, dash):
        _draw_line_segment(
            dst,
            int(round(x0)),
            int(round(y0)),
            int(round(x1)),
            int(round(y1)),
            color=color,
            width=width,
        )


def dash_segments(xs: np.ndarray, ys: np.ndarray, dash: Sequence[float] = ()) -> list[Segment]:
    """Split a polyline into the "on" pieces of a dash pattern.

    The pattern phase carries over from one vertex to the next, so a dashed
    path looks continuous around corners.
    """
    pairs = list(zip(xs.tolist(), ys.tolist(), strict=True))
    plain = [(x0, y0, x1, y1) for (x0, y0), (x1, y1) in zip(pairs, pairs[1:])]
    pattern = [float(v) for v in dash if v > 0]
    if len(pattern) < 2:
        return plain

    out: list[Segment] = []
    idx = 0
    left = pattern[0]
    for x0, y0, x1, y1 in plain:
        length = float(np.hypot(x1 - x0, y1 - y0))
        pos = 0.0
        while pos < length:
            step = min(left, length - pos)
            if idx % 2 == 0:
                t0 = pos / length
                t1 = (pos + step) / length
                out.append((x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0, x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1))
            pos += step
            left -= step
            if left <= 1e-9:
                idx = (idx + 1) % len(pattern)
                left = pattern[idx]
    return out


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    if width <= 1:
        draw_pixel(dst, x, y, color)
        return
    radius = width // 2
    fill_rect(dst, x - radius, y - radius, x + radius + 1, y + radius + 1, color)
