from .normalize import coerce_1d_numeric, normalize_labels, normalize_points, normalize_values, normalize_xy, xy_to_points

__all__ = [
    "coerce_1d_numeric",
    "normalize_labels",
    "normalize_points",
    "normalize_values",
    "normalize_xy",
    "xy_to_points",
]
