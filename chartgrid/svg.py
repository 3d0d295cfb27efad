from __future__ import annotations

from typing import Sequence
import xml.etree.ElementTree as ET

import numpy as np

from chartgrid.raster.draw_text import text_size
from chartgrid.styles import RGBA
from chartgrid.surface import AffineStack, MarkerKind


SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILY = "DejaVu Sans, Helvetica, Arial, sans-serif"


def _fmt(v: float) -> str:
    out = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if out in ("-0", "") else out


def _color(rgba: RGBA) -> str:
    return f"#{rgba[0]:02x}{rgba[1]:02x}{rgba[2]:02x}"


def _opacity(rgba: RGBA) -> str:
    return _fmt(rgba[3] / 255.0)


class SvgSurface:
    """Builds an SVG document; user coordinates are resolved through the affine stack."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        self.width = int(width)
        self.height = int(height)
        self.affine = AffineStack()
        self.closed = False
        self.root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(self.width),
                "height": str(self.height),
                "viewBox": f"0 0 {self.width} {self.height}",
            },
        )
        ET.SubElement(
            self.root,
            "rect",
            {
                "x": "0",
                "y": "0",
                "width": str(self.width),
                "height": str(self.height),
                "fill": _color(background),
                "fill-opacity": _opacity(background),
            },
        )

    def _check_open(self) -> None:
        if self.closed:
            raise RuntimeError("surface is closed")

    def _add(self, tag: str, attrib: dict[str, str]) -> ET.Element:
        self._check_open()
        return ET.SubElement(self.root, tag, attrib)

    def save(self) -> None:
        self.affine.save()

    def restore(self) -> None:
        self.affine.restore()

    def translate(self, dx: float, dy: float) -> None:
        self.affine.translate(dx, dy)

    def scale(self, s: float) -> None:
        self.affine.scale(s)

    def _fill(self, rgba: RGBA, filled: bool, stroke_width: float) -> dict[str, str]:
        if filled:
            return {"fill": _color(rgba), "fill-opacity": _opacity(rgba)}
        return {
            "fill": "none",
            "stroke": _color(rgba),
            "stroke-opacity": _opacity(rgba),
            "stroke-width": _fmt(stroke_width),
        }

    def draw_marker(self, x: float, y: float, kind: MarkerKind, size: float, rgba: RGBA, filled: bool = True) -> None:
        cx, cy = self.affine.current.apply(x, y)
        s = self.affine.current.s
        r = max(1.0, size * s)
        paint = self._fill(rgba, filled, s)
        if kind == "circle":
            self._add("circle", {"cx": _fmt(cx), "cy": _fmt(cy), "r": _fmt(r), **paint})
        elif kind == "square":
            self._add("rect", {"x": _fmt(cx - r), "y": _fmt(cy - r), "width": _fmt(2 * r), "height": _fmt(2 * r), **paint})
        elif kind == "triangle":
            pts = ((cx, cy - r), (cx + r * 0.866, cy + r * 0.5), (cx - r * 0.866, cy + r * 0.5))
            self._add("polygon", {"points": " ".join(f"{_fmt(px)},{_fmt(py)}" for px, py in pts), **paint})
        elif kind == "cross":
            d = (
                f"M{_fmt(cx - r)},{_fmt(cy - r)} L{_fmt(cx + r)},{_fmt(cy + r)} "
                f"M{_fmt(cx - r)},{_fmt(cy + r)} L{_fmt(cx + r)},{_fmt(cy - r)}"
            )
            self._add(
                "path",
                {
                    "d": d,
                    "fill": "none",
                    "stroke": _color(rgba),
                    "stroke-opacity": _opacity(rgba),
                    "stroke-width": _fmt(max(1.0, r * 0.4)),
                },
            )
        else:
            raise ValueError(f"unsupported marker kind: {kind!r}")

    def draw_polyline(
        self,
        xs: Sequence[float] | np.ndarray,
        ys: Sequence[float] | np.ndarray,
        rgba: RGBA,
        width: float,
        dash: Sequence[float] = (),
    ) -> None:
        px, py = self.affine.current.apply_many(np.asarray(xs), np.asarray(ys))
        if px.size < 2:
            return
        s = self.affine.current.s
        attrib = {
            "points": " ".join(f"{_fmt(a)},{_fmt(b)}" for a, b in zip(px.tolist(), py.tolist(), strict=True)),
            "fill": "none",
            "stroke": _color(rgba),
            "stroke-opacity": _opacity(rgba),
            "stroke-width": _fmt(width * s),
        }
        if dash:
            attrib["stroke-dasharray"] = " ".join(_fmt(d * s) for d in dash)
        self._add("polyline", attrib)

    def fill_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA) -> None:
        x0, y0 = self.affine.current.apply(x, y)
        s = self.affine.current.s
        self._add(
            "rect",
            {"x": _fmt(x0), "y": _fmt(y0), "width": _fmt(w * s), "height": _fmt(h * s), **self._fill(rgba, True, 0.0)},
        )

    def stroke_rect(self, x: float, y: float, w: float, h: float, rgba: RGBA, width: float) -> None:
        x0, y0 = self.affine.current.apply(x, y)
        s = self.affine.current.s
        self._add(
            "rect",
            {"x": _fmt(x0), "y": _fmt(y0), "width": _fmt(w * s), "height": _fmt(h * s), **self._fill(rgba, False, width * s)},
        )

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
        if not text:
            return
        if rotate_deg % 360 not in (0, 90):
            raise ValueError("rotate_deg must be 0 or 90")
        px, py = self.affine.current.apply(x, y)
        s = self.affine.current.s
        attrib = {
            "font-family": FONT_FAMILY,
            "font-size": _fmt(size * s),
            "fill": _color(rgba),
            "fill-opacity": _opacity(rgba),
            "dominant-baseline": "hanging",
        }
        if bold:
            attrib["font-weight"] = "bold"
        if rotate_deg % 360 == 90:
            # Reads bottom to top; anchor at the bottom-left of the rotated box.
            w, _ = self.text_extent(text, size, bold)
            py += w * s
            attrib["transform"] = f"rotate(-90 {_fmt(px)} {_fmt(py)})"
        attrib["x"] = _fmt(px)
        attrib["y"] = _fmt(py)
        elem = self._add("text", attrib)
        elem.text = text

    def text_extent(self, text: str, size: float, bold: bool = False) -> tuple[float, float]:
        w, h = text_size(text, font_size_px=size, bold=bold)
        return (float(w), float(h))

    def to_svg(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def close(self) -> None:
        self.closed = True
