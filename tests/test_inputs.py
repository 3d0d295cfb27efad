from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from chartgrid import Chart
from chartgrid.adapters.normalize import (
    coerce_1d_numeric,
    normalize_labels,
    normalize_points,
    normalize_values,
    normalize_xy,
)
from chartgrid.errors import ArityMismatchError, PlotDataError
from chartgrid.series import Point
from chartgrid.styles import DEFAULT_PALETTE, NAMED_COLORS, Palette, PlotStyle, color_to_style, resolve_color


class NormalizeTests(unittest.TestCase):
    def test_normalize_decimal_and_mask(self) -> None:
        x, y, mask = normalize_xy([Decimal("1.5"), None, 3], [1, 2, float("inf")])
        self.assertEqual(x.dtype, np.float64)
        self.assertEqual(mask.tolist(), [True, False, False])
        self.assertEqual(float(x[0]), 1.5)

    def test_xy_length_mismatch(self) -> None:
        with self.assertRaises(ArityMismatchError):
            normalize_xy([1, 2], [1])

    def test_non_numeric_input_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_1d_numeric(["a", 1], label="x")
        with self.assertRaises(PlotDataError):
            coerce_1d_numeric("123", label="x")
        with self.assertRaises(PlotDataError):
            coerce_1d_numeric(np.zeros((2, 2)), label="x")

    def test_points_accept_pairs_arrays_and_points(self) -> None:
        self.assertEqual(normalize_points([(1, 2), Point(3.0, 4.0)]), [Point(1.0, 2.0), Point(3.0, 4.0)])
        self.assertEqual(normalize_points(np.asarray([[0.0, 1.0]])), [Point(0.0, 1.0)])
        self.assertEqual(normalize_points(np.zeros((0, 2))), [])
        with self.assertRaises(PlotDataError):
            normalize_points([(1, 2, 3)])
        with self.assertRaises(PlotDataError):
            normalize_points(np.zeros((3, 3)))

    def test_values_drop_non_finite(self) -> None:
        self.assertEqual(normalize_values([1.0, float("nan"), 2.0]).tolist(), [1.0, 2.0])
        self.assertEqual(normalize_values([]).size, 0)

    def test_labels_must_be_integers(self) -> None:
        self.assertEqual(normalize_labels(np.asarray([0, -1, 2])), [0, -1, 2])
        with self.assertRaises(PlotDataError):
            normalize_labels([0.5])
        with self.assertRaises(PlotDataError):
            normalize_labels([float("nan")])

    def test_normalize_torch_tensor(self) -> None:
        if importlib.util.find_spec("torch") is None:
            self.skipTest("torch not installed")
        import torch

        arr = coerce_1d_numeric(torch.tensor([1, 2, 3], dtype=torch.int32), label="x")
        self.assertEqual(arr.tolist(), [1.0, 2.0, 3.0])
        with self.assertRaises(PlotDataError):
            coerce_1d_numeric(torch.zeros((2, 2)), label="x")

    def test_normalize_pandas_series(self) -> None:
        if importlib.util.find_spec("pandas") is None:
            self.skipTest("pandas not installed")
        import pandas as pd

        chart = Chart("histogram").add_histogram("h", pd.Series([1.0, None, 3.0]))
        self.assertEqual(chart.histograms[0].sample_count, 2)


class StyleTests(unittest.TestCase):
    def test_named_colors_resolve_case_insensitively(self) -> None:
        self.assertEqual(resolve_color(" Red "), NAMED_COLORS["red"])

    def test_unknown_color_falls_back_to_blue(self) -> None:
        with self.assertLogs("chartgrid.styles", level="DEBUG"):
            self.assertEqual(resolve_color("chartreuse"), NAMED_COLORS["blue"])

    def test_color_to_style_defaults(self) -> None:
        style = color_to_style("blue")
        self.assertEqual((style.point_size, style.line_width, style.alpha), (3.0, 2.0, 0.8))
        self.assertEqual(style.rgba(), (0, 0, 255, 204))

    def test_style_validation(self) -> None:
        with self.assertRaises(ValueError):
            PlotStyle(r=1.5)
        with self.assertRaises(ValueError):
            PlotStyle(line_width=-1.0)

    def test_darkened_border(self) -> None:
        style = PlotStyle(r=1.0, g=0.5, b=0.0).darkened(0.7)
        self.assertAlmostEqual(style.r, 0.7)
        self.assertAlmostEqual(style.g, 0.35)

    def test_palette_cycles(self) -> None:
        self.assertEqual(DEFAULT_PALETTE.auto_color(0), "blue")
        self.assertEqual(DEFAULT_PALETTE.auto_color(8), "blue")
        self.assertEqual(DEFAULT_PALETTE.cluster_color(-1), (1.0, 0.0, 0.0))
        self.assertEqual(DEFAULT_PALETTE.cluster_color(15), DEFAULT_PALETTE.cluster_color(0))
        with self.assertRaises(ValueError):
            Palette(series_colors=())

    def test_reference_color_skips_series_colors(self) -> None:
        palette = Palette(series_colors=("black", "gray"))
        self.assertEqual(palette.reference_color(2, 0), "darkred")
        self.assertEqual(DEFAULT_PALETTE.reference_color(0, 0), "black")


if __name__ == "__main__":
    unittest.main()
