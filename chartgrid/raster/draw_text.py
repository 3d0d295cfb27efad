from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from chartgrid.raster.canvas import blend_mask
from chartgrid.styles import RGBA


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 10.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "freesans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

FontT = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    bold: bool = False,
    rotate_deg: int = 0,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> None:
    """Draw ``text`` with the top-left of its (possibly rotated) box at (x, y)."""
    if not text:
        return
    font, synthetic_bold = _load_font(font_family=font_family, font_size_px=font_size_px, bold=bold)
    mask = _render_mask(text=text, font=font)
    if synthetic_bold:
        mask = _embolden(mask, 2)
    mask = _rotate_mask(mask, rotate_deg=rotate_deg)
    blend_mask(dst, x, y, mask, color)


def text_size(
    text: str,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    bold: bool = False,
    rotate_deg: int = 0,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> tuple[int, int]:
    font, synthetic_bold = _load_font(font_family=font_family, font_size_px=font_size_px, bold=bold)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left)) + (1 if synthetic_bold else 0)
    h = max(1, int(bottom - top))
    if _normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (h, w)
    return (w, h)


def _embolden(mask: np.ndarray, embolden_px: int) -> np.ndarray:
    if embolden_px <= 1:
        return mask
    out = np.zeros((mask.shape[0], mask.shape[1] + embolden_px - 1), dtype=np.uint8)
    for shift in range(embolden_px):
        np.maximum(out[:, shift : shift + mask.shape[1]], mask, out=out[:, shift : shift + mask.shape[1]])
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: FontT) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float, bold: bool = False) -> tuple[FontT, bool]:
    """Return the font and whether bold has to be faked by smearing the mask."""
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family, bold=bold)
    synthetic_bold = bold
    if font_path is not None and bold and "bold" in font_path.stem.lower():
        synthetic_bold = False
    if font_path is None:
        return ImageFont.load_default(size=size), synthetic_bold
    try:
        return ImageFont.truetype(str(font_path), size=size), synthetic_bold
    except OSError:
        return ImageFont.load_default(size=size), synthetic_bold


@lru_cache(maxsize=8)
def _font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    return tuple(sorted(candidates))


def _resolve_font_path(font_family: str, *, bold: bool = False) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS
    candidates = _font_candidates()

    for pattern in patterns:
        p = pattern.replace(" ", "")
        matches = [path for path in candidates if p in path.stem.lower().replace(" ", "").replace("-", "")]
        if not matches:
            continue
        if bold:
            for path in matches:
                stem = path.stem.lower()
                if stem.endswith("bold") or stem.endswith("-bold"):
                    return path
        for path in matches:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if stem == p:
                return path
        return matches[0]
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)
