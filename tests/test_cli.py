from __future__ import annotations

from contextlib import redirect_stderr, redirect_stdout
import io
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from main import build_demo_grid, main


class CliTests(unittest.TestCase):
    def test_ticks_command_prints_labels(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["ticks", "0", "97"])
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue().strip(), "0 20 40 60 80")

    def test_ticks_command_rejects_bad_target(self) -> None:
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["ticks", "0", "1", "--target", "0"])

    def test_demo_writes_png_and_svg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            for name in ("demo.png", "demo.svg"):
                path = Path(tmp) / name
                with redirect_stdout(io.StringIO()):
                    code = main(["demo", str(path), "--width", "600", "--height", "450"])
                self.assertEqual(code, 0)
                self.assertTrue(path.exists())

    def test_demo_reports_write_failure(self) -> None:
        err = io.StringIO()
        with mock.patch("chartgrid.grid.write_png", return_value=False), redirect_stderr(err):
            code = main(["demo", "unused.png"])
        self.assertEqual(code, 1)
        self.assertIn("failed", err.getvalue())

    def test_demo_grid_fills_every_cell(self) -> None:
        grid = build_demo_grid(2, 3, 1200, 900, "demo")
        self.assertTrue(all(cell.state == "configured" for cell in grid.cells()))
        self.assertEqual(grid.chart(0, 1, "line").kind, "line")


if __name__ == "__main__":
    unittest.main()
