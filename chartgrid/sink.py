from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image


LOGGER = logging.getLogger(__name__)


def write_png(surface: object, path: str | Path) -> bool:
    """Encode a raster surface to PNG. Returns False (and logs) on any failure."""
    to_rgba = getattr(surface, "to_rgba", None)
    if to_rgba is None:
        LOGGER.warning("cannot write PNG %s: %s has no raster buffer", path, type(surface).__name__)
        return False
    try:
        Image.fromarray(to_rgba()).save(Path(path), format="PNG")
    except (OSError, ValueError) as exc:
        LOGGER.warning("failed to write PNG %s: %s", path, exc)
        return False
    LOGGER.debug("wrote PNG %s", path)
    return True


def write_svg(surface: object, path: str | Path) -> bool:
    """Write an SVG surface's document. Returns False (and logs) on any failure."""
    to_svg = getattr(surface, "to_svg", None)
    if to_svg is None:
        LOGGER.warning("cannot write SVG %s: %s has no vector document", path, type(surface).__name__)
        return False
    try:
        Path(path).write_text(to_svg(), encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("failed to write SVG %s: %s", path, exc)
        return False
    LOGGER.debug("wrote SVG %s", path)
    return True
