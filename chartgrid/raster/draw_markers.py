from __future__ import annotations

import numpy as np

from chartgrid.raster.canvas import blend_mask
from chartgrid.styles import RGBA


def draw_markers(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    size: float = 3.0,
    kind: str = "circle",
    filled: bool = True,
) -> None:
    mask = marker_mask(kind, size, filled=filled)
    half = mask.shape[0] // 2
    for x, y in zip(xs.tolist(), ys.tolist(), strict=True):
        blend_mask(dst, int(round(x)) - half, int(round(y)) - half, mask, color)


def marker_mask(kind: str, size: float, *, filled: bool = True) -> np.ndarray:
    """Square coverage mask of side 2 * radius + 1 centred on the marker."""
    radius = max(1, int(round(size)))
    yy, xx = np.mgrid[-radius : radius + 1, -radius : radius + 1]
    r = float(radius)
    if kind == "circle":
        d2 = xx * xx + yy * yy
        on = d2 <= r * r + 0.5
        if not filled:
            on &= d2 >= (r - 1.0) ** 2 - 0.5
    elif kind == "square":
        on = np.ones_like(xx, dtype=bool)
        if not filled:
            on = (np.abs(xx) == radius) | (np.abs(yy) == radius)
    elif kind == "triangle":
        # Apex up, base half a radius below the centre.
        base = int(round(r * 0.5))
        half_w = (yy + r) / (1.5 * r) * (0.866 * r)
        on = (yy <= base) & (np.abs(xx) <= half_w + 0.5)
        if not filled:
            on &= (np.abs(xx) >= half_w - 1.0) | (yy == base)
    elif kind == "cross":
        on = (xx == yy) | (xx == -yy)
        if radius >= 3:
            on |= (np.abs(xx - yy) <= 1) | (np.abs(xx + yy) <= 1)
    else:
        raise ValueError(f"unsupported marker kind: {kind!r}")
    return np.where(on, 255, 0).astype(np.uint8)
