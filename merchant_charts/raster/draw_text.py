from __future__ import annotations

from functools import lru_cache
import logging

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from merchant_charts.model import RGBA
from merchant_charts.raster.canvas import blend_coverage


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_SIZE_PX = 10.0
# Tried in order; Pillow looks each name up in the platform font directories.
FONT_CANDIDATES = (
    "Helvetica.ttc",
    "Arial.ttf",
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
)

FontLike = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Blend `text` with its top-left corner at (x, y)."""

    if not text:
        return
    coverage = _glyph_coverage(text, _chart_font(_pixel_size(font_size_px)))
    blend_coverage(dst, x, y, coverage, color)


def text_size(text: str, *, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> tuple[int, int]:
    font = _chart_font(_pixel_size(font_size_px))
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def _pixel_size(font_size_px: float) -> int:
    return max(1, int(round(font_size_px)))


@lru_cache(maxsize=256)
def _glyph_coverage(text: str, font: FontLike) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.float32) / 255.0


@lru_cache(maxsize=32)
def _chart_font(size: int) -> FontLike:
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    LOGGER.debug("no scalable sans font found; using Pillow's bundled font")
    return ImageFont.load_default(size=size)
