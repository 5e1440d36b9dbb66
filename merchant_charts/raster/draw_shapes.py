from __future__ import annotations

from typing import Sequence

import numpy as np

from merchant_charts.model import RGBA
from merchant_charts.raster.canvas import fill_mask, fill_rect


def polygon_mask(shape: tuple[int, int], points: Sequence[tuple[float, float]]) -> np.ndarray:
    """Even-odd coverage of a closed polygon, sampled at pixel centers."""

    height, width = shape
    mask = np.zeros((height, width), dtype=bool)
    if len(points) < 3:
        return mask
    pts = np.asarray(points, dtype=np.float64)
    xs = pts[:, 0]
    ys = pts[:, 1]
    xs_next = np.roll(xs, -1)
    ys_next = np.roll(ys, -1)
    top = max(0, int(np.floor(ys.min())))
    bottom = min(height - 1, int(np.ceil(ys.max())))
    centers = np.arange(width, dtype=np.float64) + 0.5
    for row in range(top, bottom + 1):
        cy = row + 0.5
        crosses = (ys <= cy) != (ys_next <= cy)
        if not crosses.any():
            continue
        x_hits = xs[crosses] + (cy - ys[crosses]) * (xs_next[crosses] - xs[crosses]) / (ys_next[crosses] - ys[crosses])
        x_hits.sort()
        for xa, xb in zip(x_hits[0::2], x_hits[1::2]):
            mask[row] |= (centers >= xa) & (centers < xb)
    return mask


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    fill_mask(dst, polygon_mask(dst.shape[:2], points), color)


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    if radius <= 0:
        return
    top = max(0, int(np.floor(cy - radius)))
    bottom = min(dst.shape[0] - 1, int(np.ceil(cy + radius)))
    for row in range(top, bottom + 1):
        dy = row + 0.5 - cy
        if abs(dy) > radius:
            continue
        half = float(np.sqrt(radius * radius - dy * dy))
        xa = int(np.ceil(cx - half - 0.5))
        xb = int(np.floor(cx + half - 0.5))
        if xb >= xa:
            fill_rect(dst, xa, row, xb, row, color)
