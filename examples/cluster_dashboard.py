from __future__ import annotations

from pathlib import Path

import numpy as np

import chartgrid


def _blobs(rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    centers = np.asarray([[1.0, 1.0], [5.0, 2.0], [3.0, 6.0]], dtype=np.float64)
    xs, ys, labels = [], [], []
    for label, (cx, cy) in enumerate(centers):
        xs.append(rng.normal(cx, 0.6, 40))
        ys.append(rng.normal(cy, 0.6, 40))
        labels.append(np.full(40, label))
    noise = rng.uniform(-1.0, 8.0, (6, 2))
    xs.append(noise[:, 0])
    ys.append(noise[:, 1])
    labels.append(np.full(6, -1))
    return np.concatenate(xs), np.concatenate(ys), np.concatenate(labels)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(42)

    grid = chartgrid.subplots(2, 2, width=1600, title="Cluster dashboard")

    x, y, labels = _blobs(rng)
    scatter = grid.chart(0, 0, "scatter").set_labels("Clusters", "feature 1", "feature 2")
    scatter.add_clusters(x, y, labels, names={-1: "Noise", 0: "Small", 1: "Medium", 2: "Large"})

    trace = grid.chart(0, 1, "line").set_labels("Loss", "epoch", "loss")
    epochs = np.arange(30, dtype=np.float64)
    trace.add_line("train", epochs, np.exp(-epochs / 8.0) + rng.normal(0.0, 0.01, 30))
    trace.add_line("valid", epochs, np.exp(-epochs / 10.0) + 0.05, color="orange")
    trace.set_line_style("dashed").add_horizontal_line(0.1, "target")

    distance = np.hypot(x - x.mean(), y - y.mean())
    sizes = grid.chart(1, 0, "histogram").set_title("Distance to centre").set_xlabel("distance")
    sizes.add_histogram("distance", distance)
    sizes.add_vertical_line(float(np.median(distance)), "median")

    counts = np.bincount(labels[labels >= 0])
    members = grid.chart(1, 1, "histogram").set_labels("Members", "cluster", "points")
    members.add_discrete_histogram(counts, ["Small", "Medium", "Large"], ["teal", "purple", "brown"])

    png_path = out_dir / "cluster_dashboard.png"
    svg_path = out_dir / "cluster_dashboard.svg"
    grid.save_png(str(png_path))
    grid.save_svg(str(svg_path))
    print(f"wrote {png_path}")
    print(f"wrote {svg_path}")


if __name__ == "__main__":
    main()
