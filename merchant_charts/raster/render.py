from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from merchant_charts.model import RGBA, coerce_color
from merchant_charts.primitives import Circle, GridLine, Marker, Polygon, Polyline, Primitive, Rect, TextLabel, Wedge
from merchant_charts.raster.canvas import fill_rect, new_canvas
from merchant_charts.raster.draw_lines import draw_polyline
from merchant_charts.raster.draw_shapes import fill_circle, fill_polygon
from merchant_charts.raster.draw_text import draw_text, text_size

if TYPE_CHECKING:
    from merchant_charts.charts import ChartFrame


LOGGER = logging.getLogger(__name__)


def rasterize(frame: ChartFrame) -> np.ndarray:
    """Paint a frame's primitives in order onto an (H, W, 4) uint8 RGBA array."""

    canvas = new_canvas(frame.width, frame.height, coerce_color(frame.theme.background))
    for primitive in frame.primitives:
        draw_primitive(canvas, primitive)
    return canvas


def draw_primitive(canvas: np.ndarray, primitive: Primitive) -> None:
    if primitive.opacity <= 0:
        return
    if isinstance(primitive, GridLine):
        draw_polyline(
            canvas,
            ((primitive.x0, primitive.y0), (primitive.x1, primitive.y1)),
            _faded(primitive.color, primitive.opacity),
        )
    elif isinstance(primitive, Polyline):
        draw_polyline(
            canvas,
            primitive.points,
            _faded(primitive.color, primitive.opacity),
            width=primitive.width,
            dashed=primitive.dashed,
        )
    elif isinstance(primitive, Polygon):
        fill_polygon(canvas, primitive.points, _faded(primitive.fill, primitive.opacity))
    elif isinstance(primitive, Wedge):
        fill_polygon(canvas, primitive.outline(), _faded(primitive.fill, primitive.opacity))
    elif isinstance(primitive, Rect):
        if primitive.width <= 0 or primitive.height <= 0:
            return
        x0 = int(round(primitive.x))
        y0 = int(round(primitive.y))
        x1 = max(x0, int(round(primitive.x + primitive.width)) - 1)
        y1 = max(y0, int(round(primitive.y + primitive.height)) - 1)
        fill_rect(canvas, x0, y0, x1, y1, _faded(primitive.fill, primitive.opacity))
    elif isinstance(primitive, Marker):
        fill_circle(canvas, primitive.cx, primitive.cy, primitive.radius, _faded(primitive.color, primitive.opacity))
    elif isinstance(primitive, Circle):
        fill_circle(canvas, primitive.cx, primitive.cy, primitive.radius, _faded(primitive.fill, primitive.opacity))
    elif isinstance(primitive, TextLabel):
        _draw_label(canvas, primitive)
    else:
        LOGGER.warning("no raster handler for %s", type(primitive).__name__)


def _draw_label(canvas: np.ndarray, label: TextLabel) -> None:
    w, _ = text_size(label.text, font_size_px=label.font_size_px)
    if label.anchor == "middle":
        x = label.x - w / 2.0
    elif label.anchor == "end":
        x = label.x - w
    else:
        x = label.x
    draw_text(
        canvas,
        int(round(x)),
        int(round(label.y)),
        label.text,
        _faded(label.color, label.opacity),
        font_size_px=label.font_size_px,
    )


def _faded(color: RGBA, opacity: float) -> RGBA:
    return coerce_color(color, alpha=opacity)
