from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from chartgrid import Chart, SubplotGrid
from chartgrid.raster import RasterSurface
from chartgrid.raster.canvas import new_canvas
from chartgrid.raster.draw_lines import dash_segments, draw_polyline
from chartgrid.raster.draw_markers import marker_mask
from chartgrid.raster.draw_text import draw_text as raster_draw_text
from chartgrid.raster.draw_text import text_size as raster_text_size
from chartgrid.sink import write_png, write_svg
from chartgrid.surface import AffineStack, DrawingSurface, open_surface, surface_kind_for_path
from chartgrid.svg import SvgSurface


RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)


class AffineStackTests(unittest.TestCase):
    def test_translate_then_scale(self) -> None:
        stack = AffineStack()
        stack.translate(10.0, 20.0)
        stack.scale(0.5)
        self.assertEqual(stack.current.apply(0.0, 0.0), (10.0, 20.0))
        self.assertEqual(stack.current.apply(100.0, 100.0), (60.0, 70.0))

    def test_save_restore_nesting(self) -> None:
        stack = AffineStack()
        stack.save()
        stack.scale(2.0)
        stack.save()
        stack.translate(5.0, 5.0)
        self.assertEqual(stack.current.apply(0.0, 0.0), (10.0, 10.0))
        stack.restore()
        self.assertEqual(stack.current.apply(1.0, 1.0), (2.0, 2.0))
        stack.restore()
        self.assertEqual(stack.depth, 0)
        with self.assertRaises(RuntimeError):
            stack.restore()

    def test_scale_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            AffineStack().scale(0.0)


class SurfaceTests(unittest.TestCase):
    def test_surfaces_satisfy_protocol(self) -> None:
        self.assertIsInstance(RasterSurface(10, 10), DrawingSurface)
        self.assertIsInstance(SvgSurface(10, 10), DrawingSurface)

    def test_open_surface_closes_on_error(self) -> None:
        captured: list[DrawingSurface] = []
        with self.assertRaises(KeyError):
            with open_surface("raster", 20, 20) as surface:
                captured.append(surface)
                raise KeyError("x")
        self.assertTrue(captured[0].closed)  # type: ignore[attr-defined]
        with self.assertRaises(RuntimeError):
            captured[0].fill_rect(0, 0, 1, 1, RED)

    def test_unknown_surface_kind(self) -> None:
        with self.assertRaises(ValueError):
            with open_surface("pdf", 10, 10):  # type: ignore[arg-type]
                pass

    def test_surface_kind_from_path(self) -> None:
        self.assertEqual(surface_kind_for_path("out.SVG"), "svg")
        self.assertEqual(surface_kind_for_path("out.png"), "raster")

    def test_raster_fill_rect_follows_affine(self) -> None:
        surface = RasterSurface(40, 40)
        surface.save()
        surface.translate(5.0, 5.0)
        surface.scale(2.0)
        surface.fill_rect(0.0, 0.0, 10.0, 10.0, RED)
        surface.restore()
        rgba = surface.to_rgba()
        self.assertEqual(tuple(rgba[6, 6]), RED)
        self.assertEqual(tuple(rgba[24, 24]), RED)
        self.assertEqual(tuple(rgba[26, 26]), WHITE)
        self.assertEqual(tuple(rgba[2, 2]), WHITE)

    def test_raster_polyline_and_dash(self) -> None:
        canvas = new_canvas(50, 10)
        draw_polyline(canvas, np.asarray([0.0, 49.0]), np.asarray([5.0, 5.0]), RED, width=1, dash=(4.0, 4.0))
        row = canvas[5, :, 1]
        self.assertEqual(int(row[1]), 0)
        self.assertEqual(int(row[6]), 255)
        segments = dash_segments(np.asarray([0.0, 10.0, 10.0]), np.asarray([0.0, 0.0, 10.0]), (4.0, 4.0))
        self.assertEqual(len(segments), 4)

    def test_marker_masks(self) -> None:
        for kind in ("circle", "square", "triangle", "cross"):
            mask = marker_mask(kind, 4.0)
            self.assertTrue(mask.any(), kind)
            self.assertEqual(mask.shape[0], mask.shape[1])
        with self.assertRaises(ValueError):
            marker_mask("star", 4.0)

    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        raster_draw_text(canvas, 10, 20, "Chart title", (255, 255, 255, 255), font_size_px=24.0)
        chan = canvas[:, :, 0]
        self.assertTrue(np.any((chan > 0) & (chan < 255)))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = raster_text_size("value", font_size_px=18.0, rotate_deg=0)
        w1, h1 = raster_text_size("value", font_size_px=18.0, rotate_deg=90)
        self.assertEqual((w1, h1), (h0, w0))

    def test_svg_document_structure(self) -> None:
        surface = SvgSurface(100, 50)
        surface.draw_polyline([0, 10], [0, 10], RED, 2.0, dash=(4.0, 4.0))
        surface.draw_marker(5, 5, "cross", 3.0, RED)
        surface.draw_text(1, 1, "hi", RED, 10.0, rotate_deg=90)
        root = ET.fromstring(surface.to_svg())
        tags = [child.tag.split("}")[-1] for child in root]
        self.assertEqual(tags, ["rect", "polyline", "path", "text"])
        polyline = root[1]
        self.assertEqual(polyline.get("stroke-dasharray"), "4 4")
        self.assertIn("rotate(-90", root[3].get("transform", ""))


class OutputTests(unittest.TestCase):
    def _chart(self) -> Chart:
        chart = Chart("line").add_line("a", [0.0, 1.0, 2.0], [1.0, 3.0, 2.0])
        chart.add_horizontal_line(2.0, "mid")
        chart.set_title("Output")
        return chart

    def test_save_png_round_trips_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.png"
            self.assertTrue(self._chart().save_png(str(path)))
            with Image.open(path) as img:
                self.assertEqual(img.size, (800, 600))
                self.assertEqual(img.mode, "RGBA")

    def test_save_svg_is_deterministic(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "a.svg"
            second = Path(tmp) / "b.svg"
            self.assertTrue(self._chart().save_svg(str(first)))
            self.assertTrue(self._chart().save_svg(str(second)))
            self.assertEqual(first.read_text(encoding="utf-8"), second.read_text(encoding="utf-8"))
            self.assertIn("<svg", first.read_text(encoding="utf-8"))

    def test_grid_svg_output(self) -> None:
        grid = SubplotGrid(1, 2, 900, 400, title="Two")
        grid.chart(0, 0).add_point(0.0, 0.0).add_point(1.0, 2.0)
        grid.chart(0, 1, "histogram").add_discrete_histogram([1, 2, 3])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "grid.svg"
            self.assertTrue(grid.save_svg(str(path)))
            root = ET.parse(path).getroot()
            self.assertEqual(root.get("width"), "900")

    def test_write_failures_return_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing" / "chart.png"
            with self.assertLogs("chartgrid.sink", level="WARNING"):
                self.assertFalse(write_png(RasterSurface(10, 10), missing))
            with self.assertLogs("chartgrid.sink", level="WARNING"):
                self.assertFalse(write_svg(RasterSurface(10, 10), Path(tmp) / "x.svg"))
            with self.assertLogs("chartgrid.sink", level="WARNING"):
                self.assertFalse(write_png(SvgSurface(10, 10), Path(tmp) / "x.png"))


if __name__ == "__main__":
    unittest.main()
