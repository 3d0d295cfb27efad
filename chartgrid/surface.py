from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Literal, Protocol, Sequence, runtime_checkable

import numpy as np

from chartgrid.styles import RGBA


SurfaceKind = Literal["raster", "svg"]
MarkerKind = Literal["circle", "cross", "square", "triangle"]


@runtime_checkable
class DrawingSurface(Protocol):
    """Target a chart issues its drawing calls against.

    Coordinates are in the surface's current user space: the affine stack
    (``save``/``restore``/``translate``/``scale``) maps them to device pixels.
    Text boxes are anchored at their top-left corner.
    """

    width: int
    height: int

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def scale(self, s: float) -> None: ...

    def draw_marker(self, x: float, y: float, kind: MarkerKind, size: float, rgba: RGBA, filled: bool = True) -> None: ...

    def draw_polyline(
        self,
        xs: Sequence[float] | np.ndarray,
        ys: Sequence[float] | np.ndarray,
        rgba: RGBA,
        width: float,
        dash: Sequence[float] = (),
    ) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA, width: float) -> None: ...

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        rgba: RGBA,
        size: float,
        bold: bool = False,
        rotate_deg: int = 0,
    ) -> None: ...

    def text_extent(self, text: str, size: float, bold: bool = False) -> tuple[float, float]: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class Affine:
    tx: float = 0.0
    ty: float = 0.0
    s: float = 1.0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.tx + x * self.s, self.ty + y * self.s)

    def apply_many(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        return (self.tx + np.asarray(xs, dtype=np.float64) * self.s, self.ty + np.asarray(ys, dtype=np.float64) * self.s)


class AffineStack:
    """Uniform scale plus translation, pushed and popped around nested drawing."""

    def __init__(self) -> None:
        self.current = Affine()
        self._stack: list[Affine] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def save(self) -> None:
        self._stack.append(self.current)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() without matching save()")
        self.current = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        c = self.current
        self.current = Affine(tx=c.tx + dx * c.s, ty=c.ty + dy * c.s, s=c.s)

    def scale(self, s: float) -> None:
        if s <= 0:
            raise ValueError("scale must be > 0")
        c = self.current
        self.current = Affine(tx=c.tx, ty=c.ty, s=c.s * s)


def make_surface(kind: SurfaceKind, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> DrawingSurface:
    if kind == "raster":
        from chartgrid.raster import RasterSurface

        return RasterSurface(width, height, background=background)
    if kind == "svg":
        from chartgrid.svg import SvgSurface

        return SvgSurface(width, height, background=background)
    raise ValueError(f"unsupported surface kind: {kind!r}")


@contextmanager
def open_surface(
    kind: SurfaceKind,
    width: int,
    height: int,
    background: RGBA = (255, 255, 255, 255),
) -> Iterator[DrawingSurface]:
    surface = make_surface(kind, width, height, background=background)
    try:
        yield surface
    finally:
        surface.close()


def surface_kind_for_path(path: str) -> SurfaceKind:
    return "svg" if path.lower().endswith(".svg") else "raster"
