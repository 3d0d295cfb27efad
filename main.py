from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
import sys

import numpy as np

from chartgrid import SubplotGrid, generate_nice_ticks
from chartgrid.scales import format_ticks_for_axis


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="chartgrid")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    ticks = sub.add_parser("ticks", help="Print nice axis ticks for a value range.")
    ticks.add_argument("vmin", type=float)
    ticks.add_argument("vmax", type=float)
    ticks.add_argument("--target", type=int, default=6)

    demo = sub.add_parser("demo", help="Render a demonstration subplot grid (PNG or SVG by suffix).")
    demo.add_argument("output", type=Path)
    demo.add_argument("--rows", type=int, default=2)
    demo.add_argument("--cols", type=int, default=2)
    demo.add_argument("--width", type=int, default=1200)
    demo.add_argument("--height", type=int, default=900)
    demo.add_argument("--title", default="chartgrid demo")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "ticks":
        try:
            values = generate_nice_ticks(args.vmin, args.vmax, args.target)
        except ValueError as exc:
            parser.error(str(exc))
        print(" ".join(format_ticks_for_axis(values)))
        return 0

    if args.command == "demo":
        grid = build_demo_grid(args.rows, args.cols, args.width, args.height, args.title)
        if args.output.suffix.lower() == ".svg":
            ok = grid.save_svg(str(args.output))
        else:
            ok = grid.save_png(str(args.output))
        if not ok:
            print(f"failed to write {args.output}", file=sys.stderr)
            return 1
        print(f"wrote {args.output}")
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def build_demo_grid(rows: int, cols: int, width: int, height: int, title: str) -> SubplotGrid:
    grid = SubplotGrid(rows, cols, width, height)
    grid.set_title(title)
    rng = np.random.default_rng(7)
    builders = (_demo_scatter, _demo_line, _demo_histogram, _demo_discrete)
    for idx in range(rows * cols):
        builders[idx % len(builders)](grid, idx // cols, idx % cols, rng)
    return grid


def _demo_scatter(grid: SubplotGrid, row: int, col: int, rng: np.random.Generator) -> None:
    chart = grid.chart(row, col, "scatter")
    chart.set_labels("Clusters", "x", "y")
    centers = ((0.0, 0.0), (4.0, 4.0), (8.0, 0.0))
    xs: list[float] = []
    ys: list[float] = []
    labels: list[int] = []
    for label, (cx, cy) in enumerate(centers):
        xs.extend(rng.normal(cx, 0.8, 30).tolist())
        ys.extend(rng.normal(cy, 0.8, 30).tolist())
        labels.extend([label] * 30)
    xs.extend([-3.0, 11.0])
    ys.extend([7.0, -3.0])
    labels.extend([-1, -1])
    chart.add_clusters(xs, ys, labels)
    chart.add_horizontal_line(2.0)


def _demo_line(grid: SubplotGrid, row: int, col: int, rng: np.random.Generator) -> None:
    chart = grid.chart(row, col, "line")
    chart.set_labels("Waves", "t", "amplitude")
    t = np.linspace(0.0, 2.0 * math.pi, 60)
    chart.add_line("sin(t)", t, np.sin(t))
    chart.add_line("cos(t)", t, np.cos(t))
    chart.set_show_markers(True).set_marker_type("square")
    chart.add_vertical_line(math.pi)


def _demo_histogram(grid: SubplotGrid, row: int, col: int, rng: np.random.Generator) -> None:
    chart = grid.chart(row, col, "histogram")
    chart.set_title("Normal sample")
    chart.set_xlabel("value")
    chart.add_histogram("Normal", rng.normal(50.0, 10.0, 500))
    chart.add_vertical_line(50.0, "Mean")


def _demo_discrete(grid: SubplotGrid, row: int, col: int, rng: np.random.Generator) -> None:
    chart = grid.chart(row, col, "histogram")
    chart.set_title("Categories")
    chart.add_discrete_histogram([12, 30, 7, 18], ["alpha", "beta", "gamma", "delta"], ["blue", "red", "green", "orange"])
    chart.add_horizontal_line(15.0, "Target")


if __name__ == "__main__":
    raise SystemExit(main())
