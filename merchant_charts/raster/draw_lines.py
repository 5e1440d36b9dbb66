from __future__ import annotations

from typing import Sequence

import numpy as np

from merchant_charts.model import RGBA
from merchant_charts.raster.canvas import fill_rect


DASH_ON_PX = 5
DASH_OFF_PX = 5


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[tuple[float, float]],
    color: RGBA,
    width: int = 1,
    *,
    dashed: bool = False,
) -> None:
    if len(points) < 2:
        return
    # The dash phase carries across vertices so the pattern does not restart at every bend.
    phase = 0
    for i in range(len(points) - 1):
        x0, y0 = points[i]
        x1, y1 = points[i + 1]
        phase = _draw_line_segment(
            dst,
            int(round(x0)),
            int(round(y0)),
            int(round(x1)),
            int(round(y1)),
            color=color,
            width=width,
            dashed=dashed,
            phase=phase,
        )


def _draw_line_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    width: int,
    dashed: bool,
    phase: int,
) -> int:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    period = DASH_ON_PX + DASH_OFF_PX

    while True:
        if not dashed or phase % period < DASH_ON_PX:
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        phase += 1
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return phase


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    fill_rect(dst, x - radius, y - radius, x + radius, y + radius, color)
