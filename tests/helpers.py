from __future__ import annotations

from typing import Any

from chartgrid.surface import AffineStack


class RecordingSurface:
    """Surface that keeps every drawing call instead of painting it."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self.width = width
        self.height = height
        self.affine = AffineStack()
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def _record(self, name: str, **kwargs: Any) -> None:
        self.calls.append((name, kwargs))

    def save(self) -> None:
        self.affine.save()
        self._record("save")

    def restore(self) -> None:
        self.affine.restore()
        self._record("restore")

    def translate(self, dx: float, dy: float) -> None:
        self.affine.translate(dx, dy)
        self._record("translate", dx=dx, dy=dy)

    def scale(self, s: float) -> None:
        self.affine.scale(s)
        self._record("scale", s=s)

    def draw_marker(self, x, y, kind, size, rgba, filled=True) -> None:
        self._record("marker", x=x, y=y, kind=kind, size=size, rgba=rgba)

    def draw_polyline(self, xs, ys, rgba, width, dash=()) -> None:
        self._record("polyline", xs=[float(v) for v in xs], ys=[float(v) for v in ys], rgba=rgba, width=width, dash=tuple(dash))

    def fill_rect(self, x, y, w, h, rgba) -> None:
        self._record("fill_rect", x=x, y=y, w=w, h=h, rgba=rgba)

    def stroke_rect(self, x, y, w, h, rgba, width) -> None:
        self._record("stroke_rect", x=x, y=y, w=w, h=h, rgba=rgba)

    def draw_text(self, x, y, text, rgba, size, bold=False, rotate_deg=0) -> None:
        self._record("text", x=x, y=y, text=text, size=size, bold=bold, rotate_deg=rotate_deg)

    def text_extent(self, text: str, size: float, bold: bool = False) -> tuple[float, float]:
        return (len(text) * size * 0.5, float(size))

    def close(self) -> None:
        self.closed = True

    def named(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for call, kwargs in self.calls if call == name]

    def texts(self) -> list[str]:
        return [kwargs["text"] for kwargs in self.named("text")]
