from __future__ import annotations

import numpy as np

from chartgrid.styles import RGBA


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_patch(patch: np.ndarray, color: RGBA, coverage: np.ndarray | None = None) -> None:
    """Source-over blend ``color`` into an RGBA view, optionally weighted per pixel."""
    a = color[3] / 255.0
    if coverage is None:
        alpha = np.full(patch.shape[:2], a, dtype=np.float32)
    else:
        alpha = coverage.astype(np.float32) * a
    alpha = alpha[..., None]
    src = np.asarray(color[0:3], dtype=np.float32)
    patch[..., :3] = (src * alpha + patch[..., :3].astype(np.float32) * (1.0 - alpha)).astype(np.uint8)
    patch[..., 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend_patch(dst[y : y + 1, x : x + 1], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the half-open pixel box [x0, x1) x [y0, y1), clipped to the canvas."""
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    blend_patch(dst[ya:yb, xa:xb], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    top = y - max(0, width - 1) // 2
    fill_rect(dst, min(x0, x1), top, max(x0, x1) + 1, top + max(1, width), color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    left = x - max(0, width - 1) // 2
    fill_rect(dst, left, min(y0, y1), left + max(1, width), max(y0, y1) + 1, color)


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Blend an 8-bit coverage mask whose top-left pixel lands at (x, y)."""
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    blend_patch(dst[y0:y1, x0:x1], color, coverage=cov)
