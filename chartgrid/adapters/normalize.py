from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from chartgrid.errors import ArityMismatchError, PlotDataError
from chartgrid.series import Point


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(x: Any, y: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Coerce parallel x/y inputs to float64 arrays plus a finiteness mask."""
    x_arr = coerce_1d_numeric(x, label="x")
    y_arr = coerce_1d_numeric(y, label="y")
    if x_arr.shape != y_arr.shape:
        raise ArityMismatchError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    return x_arr, y_arr, mask


def normalize_points(points: Any) -> list[Point]:
    if isinstance(points, np.ndarray):
        if points.size == 0:
            return []
        if points.ndim != 2 or points.shape[1] != 2:
            raise PlotDataError("point array must have shape (N, 2)")
        return [Point(float(px), float(py)) for px, py in points.tolist()]
    out: list[Point] = []
    for i, raw in enumerate(points):
        if isinstance(raw, Point):
            out.append(raw)
            continue
        try:
            px, py = raw
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"point {i} is not an (x, y) pair: {raw!r}") from exc
        out.append(Point(float(px), float(py)))
    return out


def xy_to_points(x: Any, y: Any) -> list[Point]:
    x_arr, y_arr, mask = normalize_xy(x, y)
    return [Point(float(px), float(py)) for px, py in zip(x_arr[mask].tolist(), y_arr[mask].tolist(), strict=True)]


def normalize_values(values: Any, *, label: str = "values") -> np.ndarray:
    arr = coerce_1d_numeric(values, label=label)
    return arr[np.isfinite(arr)]


def normalize_labels(labels: Any) -> list[int]:
    arr = coerce_1d_numeric(labels, label="labels")
    if not np.all(np.isfinite(arr)):
        raise PlotDataError("cluster labels must be finite integers")
    if np.any(arr != np.rint(arr)):
        raise PlotDataError("cluster labels must be integers")
    out = [int(v) for v in arr.tolist()]
    if any(v < -1 for v in out):
        raise PlotDataError("cluster labels must be >= -1")
    return out


def coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 0:
            return np.zeros(0, dtype=np.float64)
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
