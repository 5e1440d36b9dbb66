from __future__ import annotations

import numpy as np

from merchant_charts.model import RGBA


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_coverage(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    """Source-over `color` into `dst`, weighted per pixel by `coverage` in [0, 1] placed at (x, y).

    The coverage block is clipped to the canvas; the touched pixels end up opaque.
    """

    h, w = coverage.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    alpha = coverage[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) * (color[3] / 255.0)
    touched = alpha > 0
    if not touched.any():
        return
    patch = dst[y0:y1, x0:x1]
    src = np.asarray(color[:3], dtype=np.float32)
    a = alpha[:, :, None]
    mixed = src * a + patch[:, :, :3].astype(np.float32) * (1.0 - a)
    patch[:, :, :3] = np.clip(mixed, 0, 255).astype(np.uint8)
    patch[touched, 3] = 255


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the inclusive pixel box spanned by the two corners."""

    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    blend_coverage(dst, left, top, np.ones((bottom - top + 1, right - left + 1), dtype=np.float32), color)


def fill_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    """Blend `color` into every pixel where the canvas-sized boolean mask is set."""

    if mask.shape != dst.shape[:2]:
        return
    blend_coverage(dst, 0, 0, mask.astype(np.float32), color)
